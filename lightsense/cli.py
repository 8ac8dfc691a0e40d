"""
Command-line access to a MAX44004 ambient light sensor.

Usage:
    lightsense status                       # interrupt status flags
    lightsense config                       # main + receiver config
    lightsense lux                          # one light reading
    lightsense watch --interval 1.0         # read until Ctrl-C
    lightsense set-main 0x24 --bus 1 --address 0x40
    lightsense set-receiver 0x00 --sim      # against the simulated register file
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from .core.config import settings
from .domain.interfaces import BusTransport
from .drivers.smbus_transport import SMBusConfig, SMBusTransport
from .drivers.transport_sim import SimulatedTransport
from .sensors import configuration, diagnostics
from .sensors import device as device_lifecycle
from .sensors.device import DeviceInstance
from .sensors.errors import SensorError
from .sensors.light import read_light_value

log = logging.getLogger("lightsense")


def _int(text: str) -> int:
    # accepts 0x.., 0b.. and decimal
    return int(text, 0)


def _show_status(device: DeviceInstance, args: argparse.Namespace) -> None:
    print(diagnostics.format_status(configuration.read_status(device)), end="")


def _show_config(device: DeviceInstance, args: argparse.Namespace) -> None:
    main = configuration.read_main_config(device)
    receiver = configuration.read_receiver_config(device)
    print(diagnostics.format_config(main, receiver), end="")


def _show_lux(device: DeviceInstance, args: argparse.Namespace) -> None:
    print(diagnostics.format_light_reading(read_light_value(device)), end="")


def _watch(device: DeviceInstance, args: argparse.Namespace) -> None:
    try:
        while True:
            r = read_light_value(device)
            if r.overflow:
                log.info("lux=OVERFLOW  raw=%#04x/%#04x", r.high_byte, r.low_byte)
            else:
                log.info("lux=%d", r.value)
            time.sleep(args.interval)
    except KeyboardInterrupt:
        log.info("Stopped")


def _set_main(device: DeviceInstance, args: argparse.Namespace) -> None:
    configuration.write_main_config(device, args.value)
    _show_config(device, args)


def _set_receiver(device: DeviceInstance, args: argparse.Namespace) -> None:
    configuration.write_receiver_config(device, args.value)
    _show_config(device, args)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="lightsense", description="MAX44004 ambient light sensor tool")

    p.add_argument("--bus", type=int, default=settings.i2c_bus, help="I2C bus number (default: %(default)s)")
    p.add_argument("--address", type=_int, default=settings.i2c_address, help="Device address (default: 0x40)")
    p.add_argument("--sim", action="store_true", help="Use the simulated register file")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Interrupt status register").set_defaults(func=_show_status)
    sub.add_parser("config", help="Main and receiver config registers").set_defaults(func=_show_config)
    sub.add_parser("lux", help="One light reading").set_defaults(func=_show_lux)

    w = sub.add_parser("watch", help="Read light values until interrupted")
    w.add_argument("--interval", type=float, default=1.0, help="Seconds between reads")
    w.set_defaults(func=_watch)

    m = sub.add_parser("set-main", help="Write the main config register")
    m.add_argument("value", type=_int)
    m.set_defaults(func=_set_main)

    r = sub.add_parser("set-receiver", help="Write the receiver config register")
    r.add_argument("value", type=_int)
    r.set_defaults(func=_set_receiver)

    return p


def main(argv: list[str] | None = None, transport: BusTransport | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-5s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if transport is None:
        if args.sim:
            transport = SimulatedTransport(light=settings.sim_light)
        else:
            transport = SMBusTransport(SMBusConfig(bus=args.bus, address=args.address))

    try:
        if isinstance(transport, SMBusTransport):
            transport.connect()
        device = device_lifecycle.open(transport)
        try:
            args.func(device, args)
        finally:
            device_lifecycle.close(device)
    except SensorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        transport.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
