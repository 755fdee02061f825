"""
api_server.py - FastAPI Backend for the Bedtime Estimator
==========================================================

RESTful API exposing the bedtime regression to a form frontend. The
frontend calls POST /api/bedtime again on every input change.

Endpoints:
- GET  /api/defaults - Default form values and input limits
- GET  /api/model    - Loaded coefficient table
- POST /api/bedtime  - Recommended bedtime for one set of inputs

Usage:
    uvicorn api.api_server:app --reload --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, Literal, Optional, Tuple
from datetime import datetime
import logging
import os

from core import (
    BedtimeEstimator,
    BedtimeEstimatorError,
    FALLBACK_MESSAGE,
    load_estimator,
    seconds_from_hhmm,
    format_time_of_day,
)
from models.data_models import BedtimeRequest

logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI APP INITIALIZATION
# ============================================================================

app = FastAPI(
    title="Bedtime Estimator API",
    description="Ideal bedtime from wake time, sleep goal and coffee intake",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
        "*"  # For development - restrict in production!
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Coefficients load once at startup. A broken table leaves the estimator
# unavailable; requests then get the fallback message.
estimator: BedtimeEstimator = load_estimator()


def get_estimator() -> BedtimeEstimator:
    return estimator


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class BedtimeRequestModel(BaseModel):
    wake_time: str = "07:00"           # HH:MM, 24-hour
    sleep_goal_hours: float = 8.0      # 4-12, form steps by 0.25
    coffee_cups: float = 0             # whole cups 0-20 (float so 2.5 reaches validation)
    clock: Literal["24h", "12h"] = "24h"


class BedtimeResponse(BaseModel):
    recommended_bedtime: str           # HH:MM, '11:05 PM', or the fallback text
    message: str                       # Ready-to-display sentence
    predicted_sleep_hours: Optional[float] = None
    wake_time: str
    error: Optional[str] = None        # 'InvalidInput' / 'ModelUnavailable'
    error_detail: Optional[str] = None


class DefaultsResponse(BaseModel):
    wake_time: str
    sleep_goal_hours: float
    coffee_cups: int
    sleep_range_hours: Tuple[float, float]
    sleep_step_hours: float
    coffee_range_cups: Tuple[int, int]


class ModelResponse(BaseModel):
    available: bool
    source: str
    coefficients: Optional[Dict[str, float]] = None


# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Health check"""
    return {
        "status": "ok",
        "service": "Bedtime Estimator API",
        "version": "1.0.0",
        "model": "Linear sleep regression",
        "model_available": get_estimator().is_available,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "model_available": get_estimator().is_available,
        "timestamp": datetime.now().isoformat()
    }


@app.get("/api/defaults", response_model=DefaultsResponse)
async def get_defaults():
    """Initial form state, matching what the app shows on first launch"""
    limits = get_estimator().limits
    return DefaultsResponse(
        wake_time=format_time_of_day(limits.default_wake_seconds),
        sleep_goal_hours=limits.default_sleep_hours,
        coffee_cups=limits.default_coffee_cups,
        sleep_range_hours=limits.sleep_range_hours,
        sleep_step_hours=limits.sleep_step_hours,
        coffee_range_cups=limits.coffee_range_cups,
    )


@app.get("/api/model", response_model=ModelResponse)
async def get_model():
    """Coefficient table currently in use"""
    current = get_estimator()
    coefficients = current.config.coefficients
    return ModelResponse(
        available=current.is_available,
        source=current.config.source,
        coefficients=coefficients.as_dict() if coefficients else None,
    )


@app.post("/api/bedtime", response_model=BedtimeResponse)
async def calculate_bedtime(request: BedtimeRequestModel):
    """
    Recommended bedtime for one set of form inputs

    Estimator errors are not HTTP errors: the response carries the
    fallback text so the frontend can display it unchanged.
    """
    current = get_estimator()
    try:
        wake_seconds = seconds_from_hhmm(request.wake_time)
        recommendation = current.recommend(BedtimeRequest(
            wake_time_seconds=wake_seconds,
            sleep_goal_hours=request.sleep_goal_hours,
            coffee_cups=request.coffee_cups,
        ))
    except BedtimeEstimatorError as e:
        logger.error(f"Bedtime request failed: {e.message}")
        return BedtimeResponse(
            recommended_bedtime=FALLBACK_MESSAGE,
            message=e.user_message,
            wake_time=request.wake_time,
            error=e.__class__.__name__,
            error_detail=e.message,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Bedtime calculation failed: {str(e)}")

    bedtime = recommendation.formatted(request.clock)
    return BedtimeResponse(
        recommended_bedtime=bedtime,
        message=f"Your ideal bedtime is {bedtime}",
        predicted_sleep_hours=round(recommendation.predicted_sleep_hours, 4),
        wake_time=request.wake_time,
    )


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    port = int(os.environ.get("PORT", 8000))

    print("=" * 70)
    print("BEDTIME ESTIMATOR API SERVER")
    print("=" * 70)
    print()
    print(f"API will be available at: http://localhost:{port}")
    print(f"API docs at: http://localhost:{port}/docs")
    print()
    print("Frontend can now connect to:")
    print(f"  GET  http://localhost:{port}/api/defaults")
    print(f"  POST http://localhost:{port}/api/bedtime")
    print()

    uvicorn.run(app, host="0.0.0.0", port=port)
