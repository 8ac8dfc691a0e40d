from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..sensors.register_map import ConversionTime, Gain, SensorMode


@dataclass(frozen=True)
class StatusView:
    raw: int
    power_on: bool
    als_interrupt: bool


@dataclass(frozen=True)
class MainConfigView:
    raw: int
    mode: SensorMode
    trim: bool
    interrupt_enable: bool


@dataclass(frozen=True)
class ReceiverConfigView:
    raw: int
    conversion_time: ConversionTime
    gain: Gain


@dataclass(frozen=True)
class LightReading:
    """
    One ALS sample. Either ``value`` is in [0, 16383] and ``overflow`` is False,
    or ``overflow`` is True and ``value`` is None.
    """

    high_byte: int
    low_byte: int
    overflow: bool
    value: Optional[int] = None
    ts_utc: Optional[datetime] = None

    @property
    def ok(self) -> bool:
        return not self.overflow
