from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Iterator, TypeVar

from ..domain.interfaces import BusTransport
from .errors import DeviceClosed

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(eq=False)
class DeviceInstance:
    """One physical MAX44004 on one bus address. Owned by whoever called open()."""

    bus: BusTransport
    name: str = "max44004"
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    @property
    def closed(self) -> bool:
        return self._closed


def open(bus: BusTransport, name: str = "max44004") -> DeviceInstance:
    """Bind a bus handle to a fresh device instance. No bus I/O."""
    device = DeviceInstance(bus=bus, name=name)
    logger.info("Opened %s on %r", name, bus)
    return device


def close(device: DeviceInstance) -> None:
    """
    Mark the instance unusable. Waits for an in-flight transaction to finish.
    The bus handle itself belongs to the caller and is left open.
    """
    with device._lock:
        device._closed = True
    logger.info("Closed %s", device.name)


@contextmanager
def exclusive_access(device: DeviceInstance) -> Iterator[BusTransport]:
    """Hold the device lock for the duration of the block and yield its bus."""
    with device._lock:
        if device._closed:
            raise DeviceClosed(f"{device.name} is closed")
        yield device.bus


def with_exclusive_access(device: DeviceInstance, operation: Callable[[BusTransport], T]) -> T:
    with exclusive_access(device) as bus:
        return operation(bus)
