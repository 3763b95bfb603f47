"""Tests for sanitize_workout_data().

Covers the harmless LLM output quirks that are fixed before validation.
"""

import copy

from workout_formatter_api.services.workout_sanitizer import (
    sanitize_exercise,
    sanitize_workout_data,
)


def _make_workout(exercises, **top_level):
    """Build a minimal workout dict wrapping the given exercises."""
    return {"name": "Test Workout", "exercises": exercises, **top_level}


class TestNullPlaceholders:
    """null means "not given" and must not block defaults."""

    def test_top_level_nulls_removed(self):
        result = sanitize_workout_data(_make_workout([], goal=None, coachNotes=None))
        assert "goal" not in result
        assert "coachNotes" not in result

    def test_exercise_nulls_removed(self):
        exercise = {"name": "Curl", "type": "strength", "sets": 3, "reps": "10", "weight": None, "videoId": None}
        result = sanitize_workout_data(_make_workout([exercise]))
        assert "weight" not in result["exercises"][0]
        assert "videoId" not in result["exercises"][0]

    def test_nested_nulls_removed(self):
        exercise = {
            "name": "EMOM",
            "type": "emom",
            "emomIntervals": [{"name": "Burpees", "reps": None, "weight": None}],
        }
        result = sanitize_exercise(exercise)
        assert result["emomIntervals"][0] == {"name": "Burpees"}


class TestRepsCoercion:

    def test_strength_int_reps(self):
        exercise = sanitize_exercise({"name": "Squat", "type": "strength", "reps": 5})
        assert exercise["reps"] == "5"

    def test_integral_float_reps(self):
        exercise = sanitize_exercise({"name": "Squat", "type": "strength", "reps": 8.0})
        assert exercise["reps"] == "8"

    def test_range_string_untouched(self):
        exercise = sanitize_exercise({"name": "Squat", "type": "strength", "reps": "6-8"})
        assert exercise["reps"] == "6-8"

    def test_amrap_movement_reps(self):
        exercise = sanitize_exercise({
            "name": "AMRAP",
            "type": "amrap",
            "amrapExercises": [{"name": "Pull-ups", "reps": 10}],
        })
        assert exercise["amrapExercises"][0]["reps"] == "10"

    def test_bool_reps_left_for_validation(self):
        exercise = sanitize_exercise({"name": "Squat", "type": "strength", "reps": True})
        assert exercise["reps"] is True


class TestEmptyWeight:

    def test_empty_weight_removed_from_continuous_work(self):
        exercise = sanitize_exercise({"name": "Row", "type": "for-time", "weight": ""})
        assert "weight" not in exercise

    def test_empty_weight_kept_on_strength(self):
        exercise = sanitize_exercise({"name": "Curl", "type": "strength", "weight": ""})
        assert exercise["weight"] == ""


class TestSafety:

    def test_non_dict_exercises_ignored(self):
        data = _make_workout(["Bench 3x5", None])
        original = copy.deepcopy(data)
        assert sanitize_workout_data(data) == original

    def test_clean_input_unchanged(self, strength_output):
        original = copy.deepcopy(strength_output)
        assert sanitize_workout_data(strength_output) == original
