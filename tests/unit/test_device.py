import threading

import pytest

from lightsense.sensors import configuration
from lightsense.sensors import device as device_lifecycle
from lightsense.sensors.device import exclusive_access, with_exclusive_access
from lightsense.sensors.errors import BusError, DeviceClosed
from lightsense.sensors.light import read_light_value
from lightsense.sensors.register_map import Register
from lightsense.sensors.registers import read_register, write_register


def test_open_and_close_do_no_bus_io(transport):
    dev = device_lifecycle.open(transport)
    device_lifecycle.close(dev)

    assert transport.calls == []
    assert dev.closed
    assert not transport.closed


def test_closed_device_refuses_access(device, transport):
    device_lifecycle.close(device)
    with pytest.raises(DeviceClosed):
        read_register(device, Register.STATUS)
    assert transport.calls == []


def test_lock_released_when_operation_raises(device):
    def boom(bus):
        raise BusError("timeout")

    with pytest.raises(BusError):
        with_exclusive_access(device, boom)

    assert with_exclusive_access(device, lambda bus: "ok") == "ok"


def test_register_accessor_range_check(device, transport):
    with pytest.raises(ValueError):
        write_register(device, Register.PERSIST_TIMER, 0x1FF)
    assert transport.calls == []

    write_register(device, Register.PERSIST_TIMER, 0x02)
    assert read_register(device, Register.PERSIST_TIMER) == 0x02


def test_instances_do_not_contend(make_transport):
    a = device_lifecycle.open(make_transport())
    b = device_lifecycle.open(make_transport())

    with exclusive_access(a):
        # would deadlock if the lock were shared
        assert read_register(b, Register.STATUS) == 0


def test_concurrent_light_reads_and_config_writes_never_interleave(make_transport):
    t = make_transport({Register.DATA_HIGH: 0x05, Register.DATA_LOW: 0x3A}, delay_s=0.001)
    dev = device_lifecycle.open(t)
    errors = []

    def reader():
        try:
            for _ in range(50):
                assert read_light_value(dev).value == 1338
        except Exception as e:  # surfaced in the main thread
            errors.append(e)

    def writer():
        try:
            for i in range(50):
                configuration.write_main_config(dev, 0x04 if i % 2 else 0x08)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert errors == []
    assert not t.overlap_detected

    # each low-byte read is immediately followed by its high-byte read
    for i, call in enumerate(t.calls):
        if call == ("read", Register.DATA_LOW):
            assert t.calls[i + 1] == ("read", Register.DATA_HIGH)
    assert len(t.writes) == 50
