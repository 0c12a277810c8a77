"""Raw PCM endpoints for tempo and level analysis.

Request bodies are little-endian float32 mono samples. Decoding audio
containers is left to the caller.
"""

import logging

import numpy as np
from fastapi import APIRouter, HTTPException, Query, Request

from wavebpm.analysis.detector import compute
from wavebpm.analysis.dynamics import dynamic_range
from wavebpm.api.schemas import BpmResponse, DebugResponse, DynamicRangeResponse
from wavebpm.config import settings
from wavebpm.errors import InvalidInputError, NoTempoFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

_PCM_DTYPE = np.dtype("<f4")


async def _read_samples(request: Request) -> np.ndarray:
    content = await request.body()
    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(400, f"Body too large (max {settings.max_upload_mb} MB)")
    if len(content) % _PCM_DTYPE.itemsize:
        raise HTTPException(400, "Body must be raw float32 PCM samples")
    return np.frombuffer(content, dtype=_PCM_DTYPE)


@router.post("/bpm", response_model=BpmResponse)
async def analyze_bpm(
    request: Request,
    sample_rate: float = Query(..., gt=0),
    debug: bool | None = Query(default=None),
):
    """Estimate the tempo of an uploaded mono buffer."""
    samples = await _read_samples(request)
    include_debug = settings.include_debug if debug is None else debug

    try:
        result = compute(samples, sample_rate, include_debug=include_debug)
    except InvalidInputError as e:
        raise HTTPException(400, str(e))
    except NoTempoFoundError as e:
        raise HTTPException(422, str(e))
    except Exception:
        logger.exception("Tempo analysis failed")
        raise HTTPException(500, "Analysis failed")

    return BpmResponse(
        bpm=result.bpm,
        sample_rate=sample_rate,
        duration=len(samples) / sample_rate,
        debug=DebugResponse(
            occurrence=result.debug.occurrence.tolist(),
            amplitude=result.debug.amplitude.tolist(),
        ) if result.debug else None,
    )


@router.post("/dynamic-range", response_model=DynamicRangeResponse)
async def analyze_dynamic_range(request: Request):
    """RMS level of an uploaded mono buffer."""
    samples = await _read_samples(request)
    try:
        rms = dynamic_range(samples)
    except InvalidInputError as e:
        raise HTTPException(400, str(e))
    return DynamicRangeResponse(rms=rms)
