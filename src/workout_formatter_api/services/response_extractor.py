"""
Response extraction and validation.

Turns untrusted completion text into a WorkoutRecord or raises:

1. strip a markdown code fence (```json or bare ```) if present
2. parse JSON; no repair of malformed output
3. check top-level required fields
4. check each exercise has a name and a known type
5. sanitize harmless quirks and fill defaults
6. parse each exercise into the variant model named by its type
"""

import copy
import json
import logging
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from workout_formatter_api.errors import ExtractionError, SchemaValidationError
from workout_formatter_api.models import (
    EXERCISE_MODELS,
    EXERCISE_TYPES,
    ExerciseRecord,
    WorkoutRecord,
)
from workout_formatter_api.services.workout_sanitizer import sanitize_workout_data

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```[ \t]*[\w-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")

# A workout is at most ~5 levels deep (workout > exercises > exercise > segments > segment)
MAX_JSON_DEPTH = 20

_TYPE_LIST = ", ".join(f"'{t}'" for t in EXERCISE_TYPES[:-1]) + f", or '{EXERCISE_TYPES[-1]}'"


def _nesting_depth(value: Any) -> int:
    depth = 0
    stack = [(value, 1)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in children)
    return depth


def strip_code_fence(text: str) -> str:
    """Remove a wrapping code fence, tagged or not, and surrounding whitespace."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_completion_json(text: str) -> Dict[str, Any]:
    """Strip fences and parse the completion as a JSON object."""
    cleaned = strip_code_fence(text)
    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning(f"Completion is not valid JSON: {e}")
        raise ExtractionError(f"Could not parse workout JSON from completion: {e}") from e

    if not isinstance(parsed, dict):
        raise ExtractionError(
            f"Could not parse workout JSON from completion: expected an object, got {type(parsed).__name__}"
        )
    if _nesting_depth(parsed) > MAX_JSON_DEPTH:
        raise ExtractionError(
            f"Could not parse workout JSON from completion: nested deeper than {MAX_JSON_DEPTH} levels"
        )
    return parsed


def check_required_fields(data: Dict[str, Any]) -> None:
    """Validate top-level and per-exercise required fields and exercise types."""
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SchemaValidationError("Invalid workout: missing or invalid 'name'", field="name")

    exercises = data.get("exercises")
    if not isinstance(exercises, list):
        raise SchemaValidationError("Invalid workout: missing or invalid 'exercises' array", field="exercises")

    for index, exercise in enumerate(exercises):
        if not isinstance(exercise, dict):
            raise SchemaValidationError(
                f"Invalid exercise at index {index}: expected an object", index=index
            )

        missing = [key for key in ("name", "type") if not exercise.get(key)]
        if missing:
            raise SchemaValidationError(
                f"Invalid exercise at index {index}: missing {' and '.join(missing)}",
                index=index,
                field=missing[0],
            )

        exercise_type = exercise["type"]
        if exercise_type not in EXERCISE_TYPES:
            raise SchemaValidationError(
                f"Invalid exercise type at index {index}: {exercise_type!r} must be {_TYPE_LIST}",
                index=index,
                field="type",
            )


def normalize_workout_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill defaults on an already checked workout dict, returning a new dict.

    Ids are renumbered from "1" in session order and `completed` is always
    reset. Applying this twice gives the same result as applying it once.
    """
    exercises: List[Dict[str, Any]] = []
    for position, exercise in enumerate(data["exercises"], start=1):
        exercises.append({
            **exercise,
            "id": str(position),
            "completed": False,
            "equipment": exercise.get("equipment") or [],
            "muscleGroups": exercise.get("muscleGroups") or [],
            "videoId": exercise.get("videoId") or "",
        })

    return {
        **data,
        "goal": data.get("goal") or "",
        "coachNotes": data.get("coachNotes") or "",
        "estimatedTime": data.get("estimatedTime") or "Unknown",
        "exercises": exercises,
    }


def _describe_variant_error(index: int, exercise_type: str, error: ValidationError) -> SchemaValidationError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    if first["type"] == "extra_forbidden":
        message = f"Invalid exercise at index {index}: field '{field}' is not allowed for type '{exercise_type}'"
    elif first["type"] == "missing":
        message = f"Invalid exercise at index {index}: missing required field '{field}' for type '{exercise_type}'"
    else:
        message = f"Invalid exercise at index {index}: invalid '{field}': {first['msg']}"
    return SchemaValidationError(message, index=index, field=field)


def parse_exercise(index: int, exercise: Dict[str, Any]) -> ExerciseRecord:
    """Parse one normalized exercise dict into its variant model."""
    exercise_type = exercise["type"]
    try:
        return EXERCISE_MODELS[exercise_type].model_validate(exercise)
    except ValidationError as e:
        raise _describe_variant_error(index, exercise_type, e) from e


def validate_workout_data(data: Dict[str, Any]) -> WorkoutRecord:
    """Validate and normalize a parsed workout dict into a WorkoutRecord."""
    check_required_fields(data)

    workout = normalize_workout_data(sanitize_workout_data(copy.deepcopy(data)))
    exercises = [parse_exercise(i, ex) for i, ex in enumerate(workout["exercises"])]

    try:
        return WorkoutRecord(
            name=workout["name"],
            goal=workout["goal"],
            coach_notes=workout["coachNotes"],
            estimated_time=workout["estimatedTime"],
            exercises=exercises,
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise SchemaValidationError(f"Invalid workout: invalid '{field}': {first['msg']}", field=field) from e


def extract_workout(completion_text: str) -> WorkoutRecord:
    """Full extraction: fence stripping, JSON parsing, validation."""
    return validate_workout_data(parse_completion_json(completion_text))
