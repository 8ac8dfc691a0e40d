from __future__ import annotations

from enum import Enum, IntEnum
from typing import TypeVar

from .errors import UnknownVariant


class Register(IntEnum):
    STATUS = 0x00
    MAIN_CONFIG = 0x01
    RECEIVER_CONFIG = 0x02
    DATA_HIGH = 0x04
    DATA_LOW = 0x05
    UPPER_THRESHOLD_HIGH = 0x06
    UPPER_THRESHOLD_LOW = 0x07
    LOWER_THRESHOLD_HIGH = 0x08
    LOWER_THRESHOLD_LOW = 0x09
    PERSIST_TIMER = 0x0A
    GAIN_TRIM_HIGH = 0x0F
    GAIN_TRIM_LOW = 0x10


# Interrupt status (0x00)
STATUS_ALS_INTERRUPT = 0b0000_0001
STATUS_POWER_ON = 0b0000_0100

# Main config (0x01)
MAIN_INTERRUPT_ENABLE = 0b0000_0001
MAIN_MODE_MASK = 0b0000_1100
MAIN_MODE_SHIFT = 2
MAIN_TRIM = 0b0010_0000
MAIN_RESERVED_MASK = 0xFF & ~(MAIN_MODE_MASK | MAIN_TRIM | MAIN_INTERRUPT_ENABLE)  # bits 1, 4, 6, 7

# Receiver config (0x02)
RECEIVER_GAIN_MASK = 0b0000_0011
RECEIVER_GAIN_SHIFT = 0
RECEIVER_CONVERSION_TIME_MASK = 0b0000_1100
RECEIVER_CONVERSION_TIME_SHIFT = 2
RECEIVER_RESERVED_MASK = 0xFF & ~(RECEIVER_GAIN_MASK | RECEIVER_CONVERSION_TIME_MASK)  # bits 7:4

# Data high byte (0x04)
DATA_HIGH_OVERFLOW_MASK = 0b1100_0000
DATA_HIGH_VALUE_MASK = 0b0011_1111

LIGHT_VALUE_MAX = (DATA_HIGH_VALUE_MASK << 8) | 0xFF  # 16383


class SensorMode(Enum):
    OFF = 0b00
    GREEN_IR = 0b01
    GREEN = 0b10
    IR = 0b11

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    SensorMode.OFF: "SENSORS OFF",
    SensorMode.GREEN_IR: "SENSORS GREEN + IR",
    SensorMode.GREEN: "SENSOR GREEN ONLY",
    SensorMode.IR: "SENSOR IR ONLY",
}


class ConversionTime(Enum):
    # value, integration period (ms), resolution (bits)
    MS_100 = (0b00, 100.0, 14)
    MS_25 = (0b01, 25.0, 12)
    MS_6_25 = (0b10, 6.25, 10)
    MS_1_5625 = (0b11, 1.5625, 8)

    def __init__(self, field: int, period_ms: float, resolution_bits: int):
        self.field = field
        self.period_ms = period_ms
        self.resolution_bits = resolution_bits

    @property
    def label(self) -> str:
        return f"{self.period_ms:g}ms"


class Gain(Enum):
    X1 = (0b00, 1)
    X4 = (0b01, 4)
    X16 = (0b10, 16)
    X128 = (0b11, 128)

    def __init__(self, field: int, factor: int):
        self.field = field
        self.factor = factor

    @property
    def label(self) -> str:
        return f"{self.factor}x"


class PersistTimer(Enum):
    """Consecutive out-of-threshold samples before an ALS interrupt fires."""

    ONE = (0b00, 1)
    TWO = (0b01, 2)
    FOUR = (0b10, 4)
    SIXTEEN = (0b11, 16)

    def __init__(self, field: int, samples: int):
        self.field = field
        self.samples = samples


E = TypeVar("E", bound=Enum)


def address_for(name: str) -> int:
    """Look up a register address by name, e.g. ``"main_config"``."""
    try:
        return int(Register[name.upper()])
    except KeyError:
        raise KeyError(f"Unknown register: {name}") from None


def field_value(variant: Enum) -> int:
    """Raw (unshifted) field bits of a variant."""
    return variant.field if hasattr(variant, "field") else variant.value


def decode_field(kind: type[E], raw: int) -> E:
    """
    Map an already-shifted field value onto one of its named variants.
    Raises UnknownVariant when nothing matches; never falls back to a default.
    """
    for variant in kind:
        if field_value(variant) == raw:
            return variant
    raise UnknownVariant(kind.__name__, raw)


def extract(raw_byte: int, mask: int, shift: int) -> int:
    return (raw_byte & mask) >> shift
