from __future__ import annotations

import logging
from contextlib import contextmanager

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ..core.config import settings
from ..drivers.transport_sim import SimulatedTransport
from ..sensors import configuration, diagnostics
from ..sensors.device import DeviceInstance
from ..sensors.errors import BusError, DeviceClosed, RejectedWrite, UnknownVariant
from ..sensors.light import read_light_value
from .schemas import (
    LightReadingOut,
    RegisterWriteRequest,
    SimLightRequest,
    SimRegisterRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependency getters ---
# main.py replaces these via app.dependency_overrides.
def get_device() -> DeviceInstance:  # overridden in main
    raise RuntimeError("Device dependency not configured")

def get_sim_transport() -> SimulatedTransport:  # overridden in main
    raise RuntimeError("Simulated transport dependency not configured")


@contextmanager
def _sensor_errors():
    try:
        yield
    except RejectedWrite as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except UnknownVariant as e:
        logger.error("Decode failure: %s", e)
        raise HTTPException(status_code=502, detail=str(e))
    except (BusError, DeviceClosed) as e:
        logger.warning("Sensor unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/status", response_class=PlainTextResponse)
def get_status(device: DeviceInstance = Depends(get_device)):
    with _sensor_errors():
        view = configuration.read_status(device)
    return diagnostics.format_status(view)


@router.get("/config", response_class=PlainTextResponse)
def get_config(device: DeviceInstance = Depends(get_device)):
    with _sensor_errors():
        main = configuration.read_main_config(device)
        receiver = configuration.read_receiver_config(device)
    return diagnostics.format_config(main, receiver)


@router.put("/config/main")
def put_main_config(req: RegisterWriteRequest, device: DeviceInstance = Depends(get_device)):
    with _sensor_errors():
        configuration.write_main_config(device, req.value)
    return {"ok": True, "value": req.value}


@router.put("/config/receiver")
def put_receiver_config(req: RegisterWriteRequest, device: DeviceInstance = Depends(get_device)):
    with _sensor_errors():
        configuration.write_receiver_config(device, req.value)
    return {"ok": True, "value": req.value}


@router.get("/lux", response_class=PlainTextResponse)
def get_lux(device: DeviceInstance = Depends(get_device)):
    with _sensor_errors():
        reading = read_light_value(device)
    return diagnostics.format_light_reading(reading)


@router.get("/lux.json", response_model=LightReadingOut)
def get_lux_json(device: DeviceInstance = Depends(get_device)):
    with _sensor_errors():
        r = read_light_value(device)
    return LightReadingOut(
        ts_utc=r.ts_utc.isoformat() if r.ts_utc else None,
        value=r.value,
        overflow=r.overflow,
        high_byte=r.high_byte,
        low_byte=r.low_byte,
    )


# --- Simulation endpoints ---
@router.get("/sim/status")
def sim_status(sim: SimulatedTransport = Depends(get_sim_transport)):
    return {"app": settings.app_name, **sim.status()}


@router.post("/sim/light")
def sim_set_light(req: SimLightRequest, sim: SimulatedTransport = Depends(get_sim_transport)):
    sim.set_light(req.value)
    if req.overflow:
        sim.set_overflow()
    return {"ok": True, "value": req.value, "overflow": req.overflow}


@router.post("/sim/registers")
def sim_poke_register(req: SimRegisterRequest, sim: SimulatedTransport = Depends(get_sim_transport)):
    try:
        sim.poke(req.address, req.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "address": req.address, "value": req.value}
