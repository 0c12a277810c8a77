"""Pydantic response models for API."""

from pydantic import BaseModel


class DebugResponse(BaseModel):
    occurrence: list[float]
    amplitude: list[float]


class BpmResponse(BaseModel):
    bpm: float
    sample_rate: float
    duration: float
    debug: DebugResponse | None = None


class DynamicRangeResponse(BaseModel):
    rms: float
