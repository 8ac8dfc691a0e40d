"""
Main/receiver configuration registers and the interrupt status register.

Every call re-reads the device; nothing is cached here. Writes are validated
against the reserved-bit masks before the bus is touched, since a reserved bit
can leave the part in an undefined mode that only a power cycle clears.
"""
from __future__ import annotations

import logging

from ..domain.models import MainConfigView, ReceiverConfigView, StatusView
from .device import DeviceInstance
from .errors import RejectedWrite
from .register_map import (
    MAIN_INTERRUPT_ENABLE,
    MAIN_MODE_MASK,
    MAIN_MODE_SHIFT,
    MAIN_RESERVED_MASK,
    MAIN_TRIM,
    RECEIVER_CONVERSION_TIME_MASK,
    RECEIVER_CONVERSION_TIME_SHIFT,
    RECEIVER_GAIN_MASK,
    RECEIVER_GAIN_SHIFT,
    RECEIVER_RESERVED_MASK,
    STATUS_ALS_INTERRUPT,
    STATUS_POWER_ON,
    ConversionTime,
    Gain,
    Register,
    SensorMode,
    decode_field,
    extract,
    field_value,
)
from .registers import read_register, write_register

logger = logging.getLogger(__name__)

RESERVED_BITS_SET = "reserved bits set"


# --- Decoding ---

def decode_status(raw: int) -> StatusView:
    return StatusView(
        raw=raw,
        power_on=bool(raw & STATUS_POWER_ON),
        als_interrupt=bool(raw & STATUS_ALS_INTERRUPT),
    )


def decode_main_config(raw: int) -> MainConfigView:
    mode = decode_field(SensorMode, extract(raw, MAIN_MODE_MASK, MAIN_MODE_SHIFT))
    return MainConfigView(
        raw=raw,
        mode=mode,
        trim=bool(raw & MAIN_TRIM),
        interrupt_enable=bool(raw & MAIN_INTERRUPT_ENABLE),
    )


def decode_receiver_config(raw: int) -> ReceiverConfigView:
    return ReceiverConfigView(
        raw=raw,
        conversion_time=decode_field(
            ConversionTime,
            extract(raw, RECEIVER_CONVERSION_TIME_MASK, RECEIVER_CONVERSION_TIME_SHIFT),
        ),
        gain=decode_field(Gain, extract(raw, RECEIVER_GAIN_MASK, RECEIVER_GAIN_SHIFT)),
    )


# --- Encoding ---

def encode_main_config(
    mode: SensorMode,
    trim: bool = False,
    interrupt_enable: bool = False,
) -> int:
    raw = field_value(mode) << MAIN_MODE_SHIFT
    if trim:
        raw |= MAIN_TRIM
    if interrupt_enable:
        raw |= MAIN_INTERRUPT_ENABLE
    return raw


def encode_receiver_config(conversion_time: ConversionTime, gain: Gain) -> int:
    return (
        (field_value(conversion_time) << RECEIVER_CONVERSION_TIME_SHIFT)
        | (field_value(gain) << RECEIVER_GAIN_SHIFT)
    )


def _validate(register: Register, requested: int, reserved_mask: int) -> int:
    if not 0 <= requested <= 0xFF:
        raise RejectedWrite("value out of range", register=int(register), value=requested)
    if requested & reserved_mask:
        logger.warning(
            "Rejected write to %s: value=%#04x reserved=%#04x",
            register.name, requested, requested & reserved_mask,
        )
        raise RejectedWrite(RESERVED_BITS_SET, register=int(register), value=requested)
    return requested


# --- Device operations ---

def read_status(device: DeviceInstance) -> StatusView:
    return decode_status(read_register(device, Register.STATUS))


def read_main_config(device: DeviceInstance) -> MainConfigView:
    return decode_main_config(read_register(device, Register.MAIN_CONFIG))


def write_main_config(device: DeviceInstance, requested: int) -> None:
    value = _validate(Register.MAIN_CONFIG, requested, MAIN_RESERVED_MASK)
    write_register(device, Register.MAIN_CONFIG, value)
    logger.info("Main config set to %#04x", value)


def read_receiver_config(device: DeviceInstance) -> ReceiverConfigView:
    return decode_receiver_config(read_register(device, Register.RECEIVER_CONFIG))


def write_receiver_config(device: DeviceInstance, requested: int) -> None:
    value = _validate(Register.RECEIVER_CONFIG, requested, RECEIVER_RESERVED_MASK)
    write_register(device, Register.RECEIVER_CONFIG, value)
    logger.info("Receiver config set to %#04x", value)
