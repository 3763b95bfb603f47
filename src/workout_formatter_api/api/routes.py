"""
API routes for workout formatting.

POST /api/format-workout takes {rawText, exerciseLibrary} and returns the
structured workout, or {"error": message} with an HTTP status.
"""

import logging
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from workout_formatter_api.ai import AIRequestContext, with_retries
from workout_formatter_api.config import settings
from workout_formatter_api.errors import (
    ConfigurationError,
    InputError,
    WorkoutFormatError,
)
from workout_formatter_api.services.completion_service import (
    CompletionClient,
    create_completion_client,
)
from workout_formatter_api.services.workout_formatter import format_workout

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class FormatWorkoutRequest(BaseModel):
    """Request model for POST /api/format-workout"""
    raw_text: Any = Field(default=None, alias="rawText", description="Workout notes to format")
    exercise_library: Any = Field(
        default=None,
        alias="exerciseLibrary",
        description="Reference exercises (list of objects) used for name matching",
    )


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def build_completion_client() -> CompletionClient:
    """Completion client for the configured provider, with caller-side retries if enabled."""
    client = create_completion_client(context=AIRequestContext(feature_name="format_workout"))
    return with_retries(client, max_attempts=settings.FORMAT_MAX_ATTEMPTS)


def get_completion_client_factory() -> Callable[[], CompletionClient]:
    """Dependency hook; the client is only built once the input has been checked."""
    return build_completion_client


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def _parse_request(body: Any) -> FormatWorkoutRequest:
    if not isinstance(body, dict):
        logger.error(f"Invalid request body: {type(body).__name__}")
        raise InputError("Invalid request body - expected a JSON object")
    return FormatWorkoutRequest.model_validate(body)


def _check_input(request: FormatWorkoutRequest) -> str:
    raw_text = request.raw_text
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise InputError("Missing rawText")

    if len(raw_text) > settings.FORMAT_MAX_RAW_TEXT_CHARS:
        raise InputError(
            f"rawText is too long ({len(raw_text)} characters, "
            f"max {settings.FORMAT_MAX_RAW_TEXT_CHARS})"
        )

    if not isinstance(request.exercise_library, list):
        logger.error(f"Invalid exerciseLibrary: {type(request.exercise_library).__name__}")
        raise InputError("Invalid exerciseLibrary - must be an array")

    return raw_text


def _status_for(error: WorkoutFormatError) -> int:
    if isinstance(error, InputError):
        return 400
    if isinstance(error, ConfigurationError):
        return 500
    # Provider, extraction and schema errors: the upstream model let us down
    return 502


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/health")
def health():
    """Liveness check."""
    return {"status": "ok"}


@router.post("/api/format-workout")
def format_workout_endpoint(
    body: Any = Body(default=None),
    client_factory: Callable[[], CompletionClient] = Depends(get_completion_client_factory),
):
    """Format raw workout text into a structured workout."""
    try:
        request = _parse_request(body)
        raw_text = _check_input(request)
        workout = format_workout(
            raw_text,
            request.exercise_library,
            client_factory(),
            grounding_limit=settings.FORMAT_GROUNDING_LIMIT,
            temperature=settings.FORMAT_TEMPERATURE,
        )
    except WorkoutFormatError as e:
        logger.error(f"Error formatting workout: {e}")
        return JSONResponse(status_code=_status_for(e), content={"error": str(e)})

    return JSONResponse(content=workout.to_payload())
