from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional


class RegisterWriteRequest(BaseModel):
    value: int = Field(ge=0, le=0xFF)


class SimLightRequest(BaseModel):
    value: int = Field(ge=0, le=16383)
    overflow: bool = False


class SimRegisterRequest(BaseModel):
    address: int = Field(ge=0, le=0xFF)
    value: int = Field(ge=0, le=0xFF)


class LightReadingOut(BaseModel):
    ts_utc: Optional[str]
    value: Optional[int]
    overflow: bool
    high_byte: int
    low_byte: int
