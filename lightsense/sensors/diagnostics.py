from __future__ import annotations

from ..domain.models import LightReading, MainConfigView, ReceiverConfigView, StatusView


def _on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"


def format_status(view: StatusView) -> str:
    return (
        f"Status register : {view.raw:#04x}\n"
        "Flags :\n"
        f"\tPWRON : {_on_off(view.power_on)}\n"
        f"\tALSINTS : {_on_off(view.als_interrupt)}\n"
    )


def format_main_config(view: MainConfigView) -> str:
    return (
        f"Main config register : {view.raw:#04x}\n"
        "Flags :\n"
        f"\tTRIM : {_on_off(view.trim)}\n"
        f"\tMODE : {view.mode.label}\n"
        f"\tALSINTE : {_on_off(view.interrupt_enable)}\n"
    )


def format_receiver_config(view: ReceiverConfigView) -> str:
    return (
        f"Receiver config register : {view.raw:#04x}\n"
        "Flags :\n"
        f"\tALSTIM : {view.conversion_time.label} ({view.conversion_time.resolution_bits} bits)\n"
        f"\tALSPGA : {view.gain.label}\n"
    )


def format_config(main: MainConfigView, receiver: ReceiverConfigView) -> str:
    return format_main_config(main) + format_receiver_config(receiver)


def format_light_reading(reading: LightReading) -> str:
    if reading.overflow:
        return "OVERFLOW\n"
    return f"{reading.value}\n"
