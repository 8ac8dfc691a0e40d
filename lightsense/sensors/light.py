from __future__ import annotations

import logging
from dataclasses import replace

from ..core.timeutil import now_utc
from ..domain.models import LightReading
from .device import DeviceInstance, exclusive_access
from .register_map import DATA_HIGH_OVERFLOW_MASK, DATA_HIGH_VALUE_MASK, Register
from .registers import read_locked

logger = logging.getLogger(__name__)


def decode_light_value(high: int, low: int) -> LightReading:
    if high & DATA_HIGH_OVERFLOW_MASK:
        return LightReading(high_byte=high, low_byte=low, overflow=True)
    value = ((high & DATA_HIGH_VALUE_MASK) << 8) | low
    return LightReading(high_byte=high, low_byte=low, overflow=False, value=value)


def read_light_value(device: DeviceInstance) -> LightReading:
    # Both bytes are read in one critical section. The part has no latch, so an
    # internal conversion can still land between the two reads.
    with exclusive_access(device) as bus:
        low = read_locked(bus, Register.DATA_LOW)
        high = read_locked(bus, Register.DATA_HIGH)

    reading = decode_light_value(high, low)
    if reading.overflow:
        logger.info("ALS overflow: high=%#04x low=%#04x", high, low)
    return replace(reading, ts_utc=now_utc())
