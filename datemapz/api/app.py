"""FastAPI surface for the DateMapz planner."""
from __future__ import annotations

import os
# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Any, Dict

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from datemapz.api.dependencies import get_planner_service, lifespan
from datemapz.api.schemas import ErrorResponse, GeneratePlanRequest
from datemapz.core.config import ApiSettings
from datemapz.core.errors import PlannerError
from datemapz.core.schemas import Itinerary

logger = logging.getLogger(__name__)

if os.getenv("SENTRY_DSN"):  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        enable_logs=True,
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="DateMapz API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ApiSettings.from_env().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "invalid value") if errors else "invalid value"
    logger.warning(f"Rejected request to {request.url.path}: {detail}")
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {detail}"})


@app.post(
    "/api/generate-plan",
    response_model=Itinerary,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_plan(payload: GeneratePlanRequest) -> Any:
    """Generate a multi-stop date plan.

    The body carries one of ``location`` (``{lat, lng}``), ``locationName`` or
    ``prompt`` plus optional ``dateVibe``, ``transportMode``, ``isAdult`` and
    ``planningMode``.

    Returns:
        ``{planTitle, stops}`` where each stop carries its number, name,
        description, address, coordinates, category, timing and an optional
        ``travelToNext`` leg.

    Errors are answered as ``{"error": message}``:
        - 400: missing or invalid fields
        - 404: the location name could not be geocoded
        - 422: too few candidate venues around the location
        - 500: model or upstream failures

    Example JSON payload:
        ```json
        {
            "location": {"lat": 19.2, "lng": 72.9},
            "dateVibe": "Foodie",
            "transportMode": "Walking",
            "isAdult": false
        }
        ```
    """

    logger.info("Plan request received")
    try:
        service = get_planner_service()
        itinerary = await service.generate_plan(payload)
    except PlannerError as exc:
        logger.warning(f"Plan request failed with {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
    except Exception as exc:
        logger.error(f"Unexpected error during plan generation: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or "An unexpected error occurred."},
        )

    return itinerary


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "datemapz-api"}


@app.get("/workflow/info")
async def get_workflow_info() -> Dict[str, Any]:
    """Get information about the planner configuration."""

    service = get_planner_service()
    return {"workflow_info": service.info()}
