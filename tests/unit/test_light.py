import pytest

from lightsense.sensors import device as device_lifecycle
from lightsense.sensors.errors import BusError
from lightsense.sensors.light import decode_light_value, read_light_value
from lightsense.sensors.register_map import Register


def _device(make_transport, high, low, **kw):
    t = make_transport({Register.DATA_HIGH: high, Register.DATA_LOW: low}, **kw)
    return t, device_lifecycle.open(t)


def test_overflow_is_a_sentinel_not_a_number(make_transport):
    _, dev = _device(make_transport, 0xC5, 0x3A)
    r = read_light_value(dev)

    assert r.overflow
    assert r.value is None
    assert not r.ok
    assert (r.high_byte, r.low_byte) == (0xC5, 0x3A)


def test_valid_reading(make_transport):
    _, dev = _device(make_transport, 0x05, 0x3A)
    r = read_light_value(dev)

    assert not r.overflow
    assert r.value == 1338
    assert r.ts_utc is not None


@pytest.mark.parametrize("high", [0x40, 0x80, 0xC0])
def test_either_overflow_bit_flags_overflow(high):
    assert decode_light_value(high, 0x00).overflow


def test_full_scale_value():
    assert decode_light_value(0x3F, 0xFF).value == 16383
    assert decode_light_value(0x00, 0x00).value == 0


def test_low_byte_failure_skips_high_byte(make_transport):
    t, dev = _device(make_transport, 0x05, 0x3A, fail_on=[("read", Register.DATA_LOW)])

    with pytest.raises(BusError):
        read_light_value(dev)
    assert t.calls == [("read", Register.DATA_LOW)]


def test_high_byte_failure_propagates(make_transport):
    t, dev = _device(make_transport, 0x05, 0x3A, fail_on=[("read", Register.DATA_HIGH)])

    with pytest.raises(BusError):
        read_light_value(dev)
    assert t.calls == [("read", Register.DATA_LOW), ("read", Register.DATA_HIGH)]

    # lock released after the failure
    t.fail_on.clear()
    assert read_light_value(dev).value == 1338


def test_low_byte_is_read_first(make_transport):
    t, dev = _device(make_transport, 0x00, 0x01)
    read_light_value(dev)
    assert t.calls == [("read", Register.DATA_LOW), ("read", Register.DATA_HIGH)]
