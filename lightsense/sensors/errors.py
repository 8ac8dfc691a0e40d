from __future__ import annotations


class SensorError(Exception):
    """Base class for every failure surfaced by the light sensor core."""


class BusError(SensorError):
    """
    Transport-level failure (no ACK, bus busy, timeout).
    Never retried by the core; the originating exception is kept as __cause__.
    """

    def __init__(self, message: str, register: int | None = None):
        super().__init__(message)
        self.register = register


class RejectedWrite(SensorError):
    """A requested configuration byte was refused before reaching the bus."""

    def __init__(self, reason: str, register: int | None = None, value: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.register = register
        self.value = value


class UnknownVariant(SensorError):
    """A register field does not match any defined pattern (hardware/driver mismatch)."""

    def __init__(self, field: str, raw: int):
        super().__init__(f"Unknown {field} field value: {raw:#x}")
        self.field = field
        self.raw = raw


class DeviceClosed(SensorError):
    pass
