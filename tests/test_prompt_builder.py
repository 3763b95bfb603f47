"""Tests for system/user prompt construction."""

import json
import re

import pytest

from workout_formatter_api.services.prompt_builder import (
    FEW_SHOT_EXAMPLES,
    PARSING_RULES,
    build_messages,
    build_system_prompt,
    build_user_prompt,
)
from workout_formatter_api.services.response_extractor import validate_workout_data


class TestBuildUserPrompt:

    def test_wraps_text_verbatim(self):
        raw = "Bench Press 4x6-8 @ 80kg, rest 3min\n```\n{not json}"
        assert build_user_prompt(raw) == f"Parse this workout into structured JSON format:\n\n{raw}"


class TestBuildSystemPrompt:

    def test_is_deterministic(self):
        lines = ["- Squat", "- Deadlift (aliases: DL)"]
        assert build_system_prompt(lines) == build_system_prompt(list(lines))

    def test_embeds_grounding_lines(self):
        prompt = build_system_prompt(["- Squat", "- Deadlift (aliases: DL)"])
        assert "- Squat\n- Deadlift (aliases: DL)" in prompt

    def test_mentions_every_exercise_type(self):
        prompt = build_system_prompt([])
        for exercise_type in ("strength", "for-time", "emom", "amrap"):
            assert f"'{exercise_type}'" in prompt

    def test_rules_are_numbered_in_order(self):
        prompt = build_system_prompt([])
        numbers = [int(n) for n in re.findall(r"^(\d+)\. \*\*", prompt, flags=re.MULTILINE)]
        assert numbers == list(range(1, len(PARSING_RULES) + 1))

    def test_contains_one_example_per_type(self):
        prompt = build_system_prompt([])
        assert prompt.count("### Example ") == 4
        example_types = [output["exercises"][0]["type"] for _, _, output in FEW_SHOT_EXAMPLES]
        assert example_types == ["strength", "for-time", "emom", "amrap"]

    def test_ends_with_json_only_instruction(self):
        prompt = build_system_prompt([])
        assert prompt.rstrip().endswith("No markdown, no code fences, no explanation.")
        assert "Return ONLY valid JSON" in prompt


class TestFewShotExamples:
    """The worked examples must themselves be valid workouts."""

    @pytest.mark.parametrize("title,raw_input,output", FEW_SHOT_EXAMPLES)
    def test_example_output_validates(self, title, raw_input, output):
        workout = validate_workout_data(output)
        assert workout.name == output["name"]
        assert len(workout.exercises) == len(output["exercises"])

    @pytest.mark.parametrize("title,raw_input,output", FEW_SHOT_EXAMPLES)
    def test_example_output_rendered_as_json(self, title, raw_input, output):
        prompt = build_system_prompt([])
        assert json.dumps(output, indent=2, ensure_ascii=False) in prompt


class TestBuildMessages:

    def test_returns_system_and_user(self, sample_library):
        system, user = build_messages("Row 5k", sample_library)

        assert "- Barbell Bench Press (aliases: Bench Press, Flat Bench)" in system
        assert user.endswith("Row 5k")

    def test_respects_grounding_limit(self, sample_library):
        system, _ = build_messages("Row 5k", sample_library, grounding_limit=1)

        assert "- Barbell Bench Press" in system
        assert "- Kettlebell Swing" not in system

    def test_malformed_library_still_builds(self):
        system, _ = build_messages("Row 5k", {"oops": True})
        assert "(no reference exercises available)" in system
