"""Workout formatting pipeline: raw notes -> WorkoutRecord.

prompt build -> one completion -> extraction/validation. Stateless; the
exercise library is only read, so concurrent imports can share it.
"""
import logging
from typing import Any

from workout_formatter_api.models import WorkoutRecord
from workout_formatter_api.services.completion_service import (
    DEFAULT_TEMPERATURE,
    CompletionClient,
    invoke_completion,
)
from workout_formatter_api.services.exercise_reference import DEFAULT_GROUNDING_LIMIT
from workout_formatter_api.services.prompt_builder import build_messages
from workout_formatter_api.services.response_extractor import extract_workout

logger = logging.getLogger(__name__)


def format_workout(
    raw_text: str,
    exercise_library: Any,
    completion_client: CompletionClient,
    *,
    grounding_limit: int = DEFAULT_GROUNDING_LIMIT,
    temperature: float = DEFAULT_TEMPERATURE,
) -> WorkoutRecord:
    """
    Format free-form workout text into a validated WorkoutRecord.

    Args:
        raw_text: Workout notes as typed or pasted by the coach
        exercise_library: Reference exercises used for grounding (non-lists are ignored)
        completion_client: Text completion capability
        grounding_limit: Maximum reference exercises included in the prompt
        temperature: Sampling temperature for the completion

    Returns:
        The normalized workout

    Raises:
        ProviderError: The completion call failed
        ExtractionError: The completion was not a JSON object
        SchemaValidationError: The JSON does not match the workout schema
    """
    system_prompt, user_prompt = build_messages(raw_text, exercise_library, grounding_limit)
    completion = invoke_completion(completion_client, system_prompt, user_prompt, temperature)
    workout = extract_workout(completion)

    logger.info(f"Formatted workout '{workout.name}' with {len(workout.exercises)} exercises")
    return workout
