from lightsense.domain.models import LightReading
from lightsense.sensors import diagnostics
from lightsense.sensors.configuration import (
    decode_main_config,
    decode_receiver_config,
    decode_status,
)


def test_status_block():
    text = diagnostics.format_status(decode_status(0x04))
    assert text.splitlines() == [
        "Status register : 0x04",
        "Flags :",
        "\tPWRON : ON",
        "\tALSINTS : OFF",
    ]


def test_config_block():
    text = diagnostics.format_config(decode_main_config(0x29), decode_receiver_config(0x0B))
    lines = text.splitlines()

    assert lines[0] == "Main config register : 0x29"
    assert "\tTRIM : ON" in lines
    assert "\tMODE : SENSOR GREEN ONLY" in lines
    assert "\tALSINTE : ON" in lines
    assert "Receiver config register : 0x0b" in lines
    assert "\tALSTIM : 6.25ms (10 bits)" in lines
    assert "\tALSPGA : 128x" in lines


def test_light_reading_text():
    assert diagnostics.format_light_reading(LightReading(0x05, 0x3A, False, 1338)) == "1338\n"
    assert diagnostics.format_light_reading(LightReading(0xC5, 0x3A, True)) == "OVERFLOW\n"
