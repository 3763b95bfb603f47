"""Shared utilities for workout data sanitization.

Fixes common harmless LLM output quirks in place before schema validation:
null placeholders for absent optional fields and numeric reps.
"""

from typing import Any, Dict, List

# Lists of nested movement objects, keyed by the exercise field holding them
_NESTED_LISTS = ("segments", "emomIntervals", "amrapExercises")


def _drop_nulls(data: Dict[str, Any]) -> None:
    """Remove keys whose value is None (LLMs emit "weight": null for "no weight")."""
    for key in [k for k, v in data.items() if v is None]:
        del data[key]


def _coerce_reps(data: Dict[str, Any]) -> None:
    """Coerce numeric reps to their string form: 10 -> "10", 12.0 -> "12"."""
    reps = data.get("reps")
    if isinstance(reps, bool) or not isinstance(reps, (int, float)):
        return
    if isinstance(reps, float) and reps.is_integer():
        reps = int(reps)
    data["reps"] = str(reps)


def sanitize_exercise(exercise: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize one exercise dict and its nested movement lists."""
    _drop_nulls(exercise)
    if exercise.get("type") == "strength":
        _coerce_reps(exercise)
    elif exercise.get("weight") == "":
        # Empty placeholder copied from the strength schema
        del exercise["weight"]

    for key in _NESTED_LISTS:
        items = exercise.get(key)
        if not isinstance(items, list):
            continue
        for item in items:
            if isinstance(item, dict):
                _drop_nulls(item)
                _coerce_reps(item)
    return exercise


def sanitize_workout_data(workout_data: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize LLM output to fix common harmless mistakes.

    Fixes:
    1. null-valued keys at workout, exercise and nested movement level are
       removed so defaults apply
    2. numeric reps on strength exercises, EMOM intervals and AMRAP
       movements become strings
    3. an empty "weight" on non-strength exercises is removed

    Args:
        workout_data: Parsed workout dict from the completion

    Returns:
        The same dict, sanitized
    """
    _drop_nulls(workout_data)

    exercises: List[Any] = workout_data.get("exercises") or []
    for exercise in exercises:
        if isinstance(exercise, dict):
            sanitize_exercise(exercise)
    return workout_data
