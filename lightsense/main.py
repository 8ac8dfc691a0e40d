from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import settings
from .core.log import configure_logging

from .api.routes import router as api_router
import lightsense.api.routes as routes_module

from .domain.interfaces import BusTransport
from .drivers.smbus_transport import SMBusConfig, SMBusTransport
from .drivers.transport_sim import SimulatedTransport
from .sensors import device as device_lifecycle
from .sensors.device import DeviceInstance


logger = logging.getLogger(__name__)


# Built in lifespan, released at shutdown
transport: BusTransport | None = None
device: DeviceInstance | None = None
sim_transport: SimulatedTransport | None = None

def build_transport() -> BusTransport:
    global sim_transport

    if settings.transport_mode.lower() == "smbus":
        sim_transport = None
        return SMBusTransport(
            SMBusConfig(
                bus=settings.i2c_bus,
                address=settings.i2c_address,
                force=settings.i2c_force,
            )
        )

    # default to sim
    sim_transport = SimulatedTransport(light=settings.sim_light)
    return sim_transport


def get_device() -> DeviceInstance:
    if device is None:
        raise RuntimeError("Device not opened (application not started).")
    return device


def get_sim_transport() -> SimulatedTransport:
    if sim_transport is None:
        raise RuntimeError("Simulated transport not available (transport_mode is not 'sim').")
    return sim_transport


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Starting %s (transport=%s)", settings.app_name, settings.transport_mode)

    global transport, device
    transport = build_transport()

    # Capability check before the device is opened
    if isinstance(transport, SMBusTransport):
        transport.connect()
    device = device_lifecycle.open(transport)

    try:
        yield
    finally:
        device_lifecycle.close(device)
        transport.close()
        device = None
        transport = None
        logger.info("Shutdown complete")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.dependency_overrides[routes_module.get_device] = get_device
app.dependency_overrides[routes_module.get_sim_transport] = get_sim_transport

app.include_router(api_router, prefix="/api")
