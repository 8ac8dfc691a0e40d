from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock

from smbus2 import I2cFunc, SMBus

from ..sensors.errors import BusError

logger = logging.getLogger(__name__)

REQUIRED_FUNCS = I2cFunc.SMBUS_READ_BYTE_DATA | I2cFunc.SMBUS_WRITE_BYTE_DATA


@dataclass
class SMBusConfig:
    bus: int = 1                # /dev/i2c-1
    address: int = 0x40         # MAX44004 fixed slave address
    force: bool = False


class SMBusTransport:
    """
    Linux i2c-dev transport (smbus2).
    Responsible for: opening the adapter, capability check, single-byte register I/O.
    """

    def __init__(self, cfg: SMBusConfig):
        self.cfg = cfg
        self._bus: SMBus | None = None
        self._open_lock = Lock()

    def __repr__(self) -> str:
        return f"SMBusTransport(bus={self.cfg.bus}, address={self.cfg.address:#04x})"

    def connect(self) -> None:
        with self._open_lock:
            if self._bus is not None:
                return
            try:
                bus = SMBus(self.cfg.bus, force=self.cfg.force)
            except OSError as e:
                raise BusError(f"Unable to open /dev/i2c-{self.cfg.bus}: {e}") from e

            if (bus.funcs & REQUIRED_FUNCS) != REQUIRED_FUNCS:
                bus.close()
                raise BusError(
                    f"I2C adapter {self.cfg.bus} lacks SMBus byte-data support (funcs={int(bus.funcs):#x})"
                )
            self._bus = bus
        logger.info("I2C bus %d opened for device %#04x", self.cfg.bus, self.cfg.address)

    def close(self) -> None:
        with self._open_lock:
            try:
                if self._bus is not None:
                    self._bus.close()
            finally:
                self._bus = None

    def _ensure_connected(self) -> SMBus:
        if self._bus is None:
            self.connect()
        assert self._bus is not None
        return self._bus

    def read_byte(self, register: int) -> int:
        bus = self._ensure_connected()
        try:
            return bus.read_byte_data(self.cfg.address, register) & 0xFF
        except OSError as e:
            logger.warning("I2C read failed: addr=%#04x reg=%#04x: %s", self.cfg.address, register, e)
            raise BusError(f"read of register {register:#04x} failed: {e}", register=register) from e

    def write_byte(self, register: int, value: int) -> None:
        bus = self._ensure_connected()
        try:
            bus.write_byte_data(self.cfg.address, register, value & 0xFF)
        except OSError as e:
            logger.warning("I2C write failed: addr=%#04x reg=%#04x: %s", self.cfg.address, register, e)
            raise BusError(f"write of register {register:#04x} failed: {e}", register=register) from e
