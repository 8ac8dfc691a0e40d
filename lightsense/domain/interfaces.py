from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class BusTransport(Protocol):
    """
    Byte-level register access to one device on the two-wire bus.
    Each call is a single atomic bus operation; failures raise BusError.
    """

    def read_byte(self, register: int) -> int:
        ...

    def write_byte(self, register: int, value: int) -> None:
        ...

    def close(self) -> None:
        ...
