"""Prompt construction for the workout formatter.

The system prompt carries the output schema, the grounding reference list,
the parsing rules and one worked example per exercise type. Prompt assembly
is pure string work: identical inputs give identical prompts.
"""
import json
import logging
from typing import Any, Dict, List, Sequence, Tuple

from workout_formatter_api.services.exercise_reference import (
    DEFAULT_GROUNDING_LIMIT,
    select_grounding_subset,
)

logger = logging.getLogger(__name__)

USER_PROMPT_PREFIX = "Parse this workout into structured JSON format:"

WORKOUT_SCHEMA = """interface Segment {
  name: string;
  durationMinutes: number;     // > 0
  zone?: string;               // intensity label, e.g. "Zone 2"
  videoId: string;
}

interface EmomInterval {
  name: string;
  reps?: string;
  weight?: string;
  notes?: string;
  videoId: string;
}

interface AmrapExercise {
  name: string;
  reps: string;
  weight?: string;
  notes?: string;
  videoId: string;
}

interface Exercise {
  id: string;
  name: string;
  type: 'strength' | 'for-time' | 'emom' | 'amrap';
  sets: number;                // 0 unless type is 'strength'
  reps: string;                // "" unless type is 'strength'; "8" or a range like "6-8"
  weight?: string;             // 'strength' only, with units, e.g. "80kg"
  notes?: string;
  restSeconds: number;
  equipment: string[];
  muscleGroups: string[];
  videoId: string;
  segments?: Segment[];                // 'for-time' only
  emomIntervalSeconds?: number;        // 'emom' only: 60 for EMOM, 120 for E2MOM
  emomTotalMinutes?: number;           // 'emom' only
  emomIntervals?: EmomInterval[];      // 'emom' only
  amrapDurationMinutes?: number;       // 'amrap' only
  amrapExercises?: AmrapExercise[];    // 'amrap' only
}

interface Workout {
  name: string;
  goal: string;
  coachNotes: string;
  estimatedTime: string;
  exercises: Exercise[];
}"""

PARSING_RULES: Tuple[str, ...] = (
    "**Exercise Name Matching**: Try to match exercise names from the input to the exercise library. "
    "If no exact match, use the closest common name.",
    "**Exercise Type**:\n"
    "   - Use 'strength' for weight training exercises (bench press, squats, curls, etc.)\n"
    "   - Use 'for-time' for continuous cardio work (running, rowing, biking)\n"
    "   - Use 'emom' for EMOM/interval-based work (Every Minute On the Minute, E2MOM, etc.)\n"
    "   - Use 'amrap' for AMRAP workouts (As Many Rounds As Possible in a set time)",
    '**videoId**: Leave as empty string "" - will be populated later',
    '**Generate unique IDs**: Use sequential numbers "1", "2", "3", etc.',
    "**Extract metadata**: Parse sets, reps, weight, rest times from the text",
    "**Infer equipment**: Based on exercise names, infer required equipment",
    "**Infer muscle groups**: Based on exercise names, infer targeted muscle groups",
    "**Default rest times**: Use 120-180s for compound lifts, 60-90s for isolation exercises, "
    "0s for cardio, EMOM and AMRAP work",
    "**Parse 'for-time' segments**: If an exercise is cardio/timed work, structure it with segments",
    "**Estimate time**: Calculate total workout time based on sets, rest and cardio duration",
    "**One field group per type**: Only include segments, emom* or amrap* fields on exercises "
    "of the matching type; never mix them",
)

# (title, raw input, expected output), one per exercise type
FEW_SHOT_EXAMPLES: Tuple[Tuple[str, str, Dict[str, Any]], ...] = (
    (
        "Strength Training",
        "Upper Body Day\n"
        "Bench Press 4x6-8 @ 80kg, rest 3min\n"
        "Incline DB Press 3x10 @ 30kg each, 2min rest\n"
        "Cable Flyes 3x12-15, stack 7",
        {
            "name": "Upper Body Day",
            "goal": "Upper body strength training",
            "coachNotes": "Focus on controlled movements and proper form",
            "estimatedTime": "45-55 minutes",
            "exercises": [
                {
                    "id": "1",
                    "name": "Barbell Bench Press",
                    "type": "strength",
                    "sets": 4,
                    "reps": "6-8",
                    "weight": "80kg",
                    "notes": "",
                    "restSeconds": 180,
                    "equipment": ["Barbell", "Bench", "Rack"],
                    "muscleGroups": ["Chest", "Triceps", "Shoulders"],
                    "videoId": "",
                },
                {
                    "id": "2",
                    "name": "Incline Dumbbell Press",
                    "type": "strength",
                    "sets": 3,
                    "reps": "10",
                    "weight": "30kg ea.",
                    "notes": "",
                    "restSeconds": 120,
                    "equipment": ["Dumbbells", "Adjustable Bench"],
                    "muscleGroups": ["Upper Chest", "Shoulders"],
                    "videoId": "",
                },
                {
                    "id": "3",
                    "name": "Cable Flyes",
                    "type": "strength",
                    "sets": 3,
                    "reps": "12-15",
                    "weight": "Stack 7",
                    "notes": "",
                    "restSeconds": 90,
                    "equipment": ["Cable Machine"],
                    "muscleGroups": ["Chest"],
                    "videoId": "",
                },
            ],
        },
    ),
    (
        "Cardio/For-Time",
        "Mixed Cardio 55min\n20min ski erg Z2\n10min bike Z2\n20min row Z2\n5min bike cooldown",
        {
            "name": "Mixed Cardio Session",
            "goal": "Cardiovascular endurance",
            "coachNotes": "Maintain steady Zone 2 pace throughout",
            "estimatedTime": "55 minutes",
            "exercises": [
                {
                    "id": "1",
                    "name": "Mixed Cardio Group",
                    "type": "for-time",
                    "sets": 0,
                    "reps": "",
                    "notes": "Maintain steady Zone 2 pace",
                    "restSeconds": 0,
                    "equipment": ["Ski Erg", "C2 Bike", "Rower"],
                    "muscleGroups": ["Full Body", "Cardio"],
                    "videoId": "",
                    "segments": [
                        {"name": "Ski Erg", "durationMinutes": 20, "zone": "Zone 2", "videoId": ""},
                        {"name": "C2 Bike", "durationMinutes": 10, "zone": "Zone 2", "videoId": ""},
                        {"name": "Row", "durationMinutes": 20, "zone": "Zone 2", "videoId": ""},
                        {"name": "C2 Bike", "durationMinutes": 5, "zone": "Cooldown", "videoId": ""},
                    ],
                },
            ],
        },
    ),
    (
        "EMOM (Every Minute On the Minute)",
        "E2MOM Sled Work - 10 minutes\nMinute 1: Sled Push 40m @ 90kg\nMinute 2: Sled Pull 40m @ 70kg",
        {
            "name": "E2MOM Sled Work",
            "goal": "Lower body power and conditioning",
            "coachNotes": "Push hard on the sled movements, maintain consistent intensity",
            "estimatedTime": "10 minutes",
            "exercises": [
                {
                    "id": "1",
                    "name": "E2MOM Sled Work",
                    "type": "emom",
                    "sets": 0,
                    "reps": "",
                    "notes": "Alternate between movements every 2 minutes",
                    "restSeconds": 0,
                    "equipment": ["Sled", "Weight Plates"],
                    "muscleGroups": ["Legs", "Full Body", "Cardio"],
                    "videoId": "",
                    "emomIntervalSeconds": 120,
                    "emomTotalMinutes": 10,
                    "emomIntervals": [
                        {
                            "name": "Sled Push",
                            "reps": "40m",
                            "weight": "90kg",
                            "notes": "Low position, drive through legs",
                            "videoId": "",
                        },
                        {
                            "name": "Sled Pull",
                            "reps": "40m",
                            "weight": "70kg",
                            "notes": "Lean back, use full body",
                            "videoId": "",
                        },
                    ],
                },
            ],
        },
    ),
    (
        "AMRAP (As Many Rounds As Possible)",
        '15 min AMRAP\n10 pull-ups\n15 KB swings @ 24kg\n20 box jumps 24"',
        {
            "name": "15 Minute AMRAP",
            "goal": "Full body conditioning and endurance",
            "coachNotes": "Move at a steady pace, don't burn out early",
            "estimatedTime": "15 minutes",
            "exercises": [
                {
                    "id": "1",
                    "name": "15 Minute AMRAP",
                    "type": "amrap",
                    "sets": 0,
                    "reps": "",
                    "notes": "Complete as many rounds as possible",
                    "restSeconds": 0,
                    "equipment": ["Pull-up Bar", "Kettlebell", "Box"],
                    "muscleGroups": ["Full Body", "Cardio"],
                    "videoId": "",
                    "amrapDurationMinutes": 15,
                    "amrapExercises": [
                        {"name": "Pull-ups", "reps": "10", "notes": "Scale to assisted if needed", "videoId": ""},
                        {
                            "name": "Kettlebell Swings",
                            "reps": "15",
                            "weight": "24kg",
                            "notes": "Hip hinge, explosive",
                            "videoId": "",
                        },
                        {
                            "name": "Box Jumps",
                            "reps": "20",
                            "weight": '24"',
                            "notes": "Step down, don't jump down",
                            "videoId": "",
                        },
                    ],
                },
            ],
        },
    ),
)


def _render_example(number: int, title: str, raw_input: str, output: Dict[str, Any]) -> str:
    return (
        f"### Example {number}: {title}\n"
        f"**Input:**\n```\n{raw_input}\n```\n\n"
        f"**Output:**\n```json\n{json.dumps(output, indent=2, ensure_ascii=False)}\n```"
    )


def build_system_prompt(grounding_subset: Sequence[str]) -> str:
    """Assemble the system prompt around the given reference lines."""
    reference = "\n".join(grounding_subset) if grounding_subset else "(no reference exercises available)"
    rules = "\n".join(f"{i}. {rule}" for i, rule in enumerate(PARSING_RULES, start=1))
    examples = "\n\n".join(
        _render_example(i, title, raw_input, output)
        for i, (title, raw_input, output) in enumerate(FEW_SHOT_EXAMPLES, start=1)
    )

    return f"""You are a fitness workout parser. Your job is to convert unstructured workout text (from Notes app, text messages, etc.) into structured JSON format.

## Output Schema

```
{WORKOUT_SCHEMA}
```

## Exercise Library Reference (partial list)
{reference}

## Instructions

{rules}

## Few-Shot Examples

{examples}

## Response Format
Return ONLY valid JSON matching the Workout interface. No markdown, no code fences, no explanation."""


def build_user_prompt(raw_text: str) -> str:
    """Wrap the raw workout text, passed through unmodified."""
    return f"{USER_PROMPT_PREFIX}\n\n{raw_text}"


def build_messages(
    raw_text: str,
    exercise_library: Any,
    grounding_limit: int = DEFAULT_GROUNDING_LIMIT,
) -> Tuple[str, str]:
    """Return the (system, user) prompt pair for one import."""
    grounding: List[str] = select_grounding_subset(exercise_library, grounding_limit)
    system_prompt = build_system_prompt(grounding)
    user_prompt = build_user_prompt(raw_text)
    logger.debug(
        f"Built prompt: {len(grounding)} reference exercises, "
        f"system={len(system_prompt)} chars, user={len(user_prompt)} chars"
    )
    return system_prompt, user_prompt
