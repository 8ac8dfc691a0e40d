"""Stub transports and device fixtures shared across the unit suites."""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable

import pytest

from lightsense.sensors import device as device_lifecycle
from lightsense.sensors.device import DeviceInstance
from lightsense.sensors.errors import BusError
from lightsense.sensors.register_map import Register


class RecordingTransport:
    """
    Echoing register file that records every bus call in order and flags any
    two calls that overlap in time.
    """

    def __init__(self, registers: dict[int, int] | None = None, delay_s: float = 0.0) -> None:
        self.regs: dict[int, int] = {int(r): 0 for r in Register}
        self.regs.update(registers or {})
        self.calls: list[tuple[str, int]] = []
        self.fail_on: set[tuple[str, int]] = set()
        self.delay_s = delay_s
        self.overlap_detected = False
        self.closed = False
        self._in_flight = 0
        self._guard = threading.Lock()

    @property
    def writes(self) -> list[tuple[str, int]]:
        return [c for c in self.calls if c[0] == "write"]

    def _enter(self, kind: str, register: int) -> None:
        with self._guard:
            self._in_flight += 1
            if self._in_flight > 1:
                self.overlap_detected = True
            self.calls.append((kind, int(register)))

    def _exit(self) -> None:
        with self._guard:
            self._in_flight -= 1

    def read_byte(self, register: int) -> int:
        self._enter("read", register)
        try:
            if self.delay_s:
                time.sleep(self.delay_s)
            if ("read", int(register)) in self.fail_on:
                raise BusError(f"NACK reading {register:#04x}", register=register)
            return self.regs[int(register)]
        finally:
            self._exit()

    def write_byte(self, register: int, value: int) -> None:
        self._enter("write", register)
        try:
            if self.delay_s:
                time.sleep(self.delay_s)
            if ("write", int(register)) in self.fail_on:
                raise BusError(f"NACK writing {register:#04x}", register=register)
            self.regs[int(register)] = value
        finally:
            self._exit()

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    def _make(registers: dict[int, int] | None = None, delay_s: float = 0.0,
              fail_on: Iterable[tuple[str, int]] = ()) -> RecordingTransport:
        t = RecordingTransport(registers, delay_s=delay_s)
        t.fail_on = {(kind, int(reg)) for kind, reg in fail_on}
        return t
    return _make


@pytest.fixture
def transport(make_transport) -> RecordingTransport:
    return make_transport()


@pytest.fixture
def device(transport) -> DeviceInstance:
    dev = device_lifecycle.open(transport)
    yield dev
    if not dev.closed:
        device_lifecycle.close(dev)
