from __future__ import annotations

import logging

from ..domain.interfaces import BusTransport
from .device import DeviceInstance, with_exclusive_access

logger = logging.getLogger(__name__)


def _check_byte(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Register value out of range: {value}")
    return value


def read_locked(bus: BusTransport, register: int) -> int:
    """Read one register on a bus already held under exclusive_access()."""
    value = bus.read_byte(register)
    logger.debug("read reg=%#04x -> %#04x", register, value)
    return value


def write_locked(bus: BusTransport, register: int, value: int) -> None:
    _check_byte(value)
    bus.write_byte(register, value)
    logger.debug("write reg=%#04x <- %#04x", register, value)


def read_register(device: DeviceInstance, register: int) -> int:
    return with_exclusive_access(device, lambda bus: read_locked(bus, register))


def write_register(device: DeviceInstance, register: int, value: int) -> None:
    """
    One guarded write. Transport failures raise BusError; a value outside
    0..255 raises ValueError before the bus is touched.
    """
    _check_byte(value)
    with_exclusive_access(device, lambda bus: write_locked(bus, register, value))
