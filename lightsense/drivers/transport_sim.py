from __future__ import annotations

import logging
from threading import Lock

from ..sensors.errors import BusError
from ..sensors.register_map import (
    DATA_HIGH_OVERFLOW_MASK,
    LIGHT_VALUE_MAX,
    STATUS_POWER_ON,
    Register,
)

logger = logging.getLogger(__name__)


class SimulatedTransport:
    """
    In-memory MAX44004 register file. Writes are echoed back on read, like the
    real part; the data registers are driven by set_light().
    """

    def __init__(self, light: int = 1200) -> None:
        self._lock = Lock()
        self._regs = {int(r): 0x00 for r in Register}
        self._regs[Register.STATUS] = STATUS_POWER_ON
        self._fail_registers: set[int] = set()
        self._closed = False
        self.set_light(light)

    def __repr__(self) -> str:
        return "SimulatedTransport()"

    def set_light(self, value: int) -> None:
        if not 0 <= value <= LIGHT_VALUE_MAX:
            raise ValueError(f"Light value out of range: {value}")
        with self._lock:
            self._regs[Register.DATA_HIGH] = (value >> 8) & 0x3F
            self._regs[Register.DATA_LOW] = value & 0xFF

    def set_overflow(self) -> None:
        with self._lock:
            self._regs[Register.DATA_HIGH] |= DATA_HIGH_OVERFLOW_MASK

    def poke(self, register: int, value: int) -> None:
        """Set a register directly, bypassing any validation."""
        register = int(register)
        with self._lock:
            if register not in self._regs:
                raise ValueError(f"No such register {register:#04x}")
            self._regs[register] = value & 0xFF

    def fail_on(self, *registers: int) -> None:
        with self._lock:
            self._fail_registers = {int(r) for r in registers}

    def status(self) -> dict:
        with self._lock:
            return {
                "closed": self._closed,
                "registers": {Register(r).name.lower(): v for r, v in self._regs.items()},
                "failing": sorted(self._fail_registers),
            }

    def _check(self, register: int) -> None:
        if self._closed:
            raise BusError("Simulated bus closed", register=register)
        if register in self._fail_registers:
            raise BusError(f"Simulated NACK on register {register:#04x}", register=register)
        if register not in self._regs:
            raise BusError(f"No such register {register:#04x}", register=register)

    def read_byte(self, register: int) -> int:
        with self._lock:
            self._check(register)
            return self._regs[register]

    def write_byte(self, register: int, value: int) -> None:
        with self._lock:
            self._check(register)
            self._regs[register] = value & 0xFF
        logger.debug("SIM write reg=%#04x value=%#04x", register, value)

    def close(self) -> None:
        with self._lock:
            self._closed = True
