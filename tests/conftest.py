"""
Test fixtures for workout-formatter-api.

Provides a fake completion client and canned model outputs so the whole
pipeline runs offline and deterministically.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = ROOT / "tests"

# Make src/ importable so tests can do `import workout_formatter_api...`
for p in {ROOT, SRC, TESTS}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from fakes import FakeCompletionClient
from workout_formatter_api.main import app
from workout_formatter_api.api.routes import get_completion_client_factory


@pytest.fixture
def fake_completion() -> FakeCompletionClient:
    return FakeCompletionClient()


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client(fake_completion) -> TestClient:
    """Per-test FastAPI TestClient wired to the fake completion client."""
    app.dependency_overrides[get_completion_client_factory] = lambda: (lambda: fake_completion)
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Sample Data Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_library() -> List[Dict[str, Any]]:
    """Small reference exercise library in the remote JSON shape."""
    return [
        {
            "name": "Barbell Bench Press",
            "category": "strength",
            "equipment": ["barbell", "bench"],
            "primary_muscles": ["chest"],
            "secondary_muscles": ["triceps", "shoulders"],
            "aliases": ["Bench Press", "Flat Bench"],
        },
        {
            "name": "Kettlebell Swing",
            "category": "conditioning",
            "equipment": ["kettlebell"],
            "primary_muscles": ["glutes", "hamstrings"],
            "aliases": ["KB Swing"],
        },
        {
            "name": "Pull-up",
            "category": "strength",
            "equipment": ["pull-up bar"],
            "primary_muscles": ["lats"],
            "secondary_muscles": ["biceps"],
        },
        {
            "name": "Box Jump",
            "category": "plyometrics",
            "equipment": ["box"],
            "primary_muscles": ["quadriceps"],
            "aliases": None,
        },
        {
            "name": "Plank",
            "category": "core",
            "equipment": ["none"],
            "primary_muscles": ["abdominals"],
        },
    ]


@pytest.fixture
def strength_output() -> Dict[str, Any]:
    """Model output for "Bench Press 4x6-8 @ 80kg, rest 3min"."""
    return {
        "name": "Bench Press Session",
        "goal": "Upper body strength",
        "coachNotes": "",
        "estimatedTime": "20 minutes",
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
                "equipment": ["Barbell", "Bench"],
                "muscleGroups": ["Chest", "Triceps"],
                "videoId": "",
            }
        ],
    }


@pytest.fixture
def for_time_output() -> Dict[str, Any]:
    """Model output for "20min ski erg Z2\\n10min bike Z2"."""
    return {
        "name": "Zone 2 Cardio",
        "goal": "Aerobic base",
        "coachNotes": "Keep it conversational",
        "estimatedTime": "30 minutes",
        "exercises": [
            {
                "id": "1",
                "name": "Cardio Block",
                "type": "for-time",
                "sets": 0,
                "reps": "",
                "notes": "",
                "restSeconds": 0,
                "equipment": ["Ski Erg", "C2 Bike"],
                "muscleGroups": ["Cardio"],
                "videoId": "",
                "segments": [
                    {"name": "Ski Erg", "durationMinutes": 20, "zone": "Zone 2", "videoId": ""},
                    {"name": "C2 Bike", "durationMinutes": 10, "zone": "Zone 2", "videoId": ""},
                ],
            }
        ],
    }


@pytest.fixture
def emom_output() -> Dict[str, Any]:
    """Model output for the E2MOM sled scenario."""
    return {
        "name": "E2MOM Sled Work",
        "goal": "Conditioning",
        "coachNotes": "",
        "estimatedTime": "10 minutes",
        "exercises": [
            {
                "id": "1",
                "name": "E2MOM Sled Work",
                "type": "emom",
                "sets": 0,
                "reps": "",
                "restSeconds": 0,
                "equipment": ["Sled"],
                "muscleGroups": ["Legs"],
                "videoId": "",
                "emomIntervalSeconds": 120,
                "emomTotalMinutes": 10,
                "emomIntervals": [
                    {"name": "Sled Push", "reps": "40m", "weight": "90kg", "videoId": ""},
                    {"name": "Sled Pull", "reps": "40m", "weight": "70kg", "videoId": ""},
                ],
            }
        ],
    }


@pytest.fixture
def amrap_output() -> Dict[str, Any]:
    """Model output for the 15 min AMRAP scenario."""
    return {
        "name": "15 Minute AMRAP",
        "goal": "Conditioning",
        "coachNotes": "",
        "estimatedTime": "15 minutes",
        "exercises": [
            {
                "id": "1",
                "name": "15 Minute AMRAP",
                "type": "amrap",
                "sets": 0,
                "reps": "",
                "restSeconds": 0,
                "equipment": ["Pull-up Bar", "Kettlebell", "Box"],
                "muscleGroups": ["Full Body"],
                "videoId": "",
                "amrapDurationMinutes": 15,
                "amrapExercises": [
                    {"name": "Pull-ups", "reps": "10", "videoId": ""},
                    {"name": "Kettlebell Swings", "reps": "15", "weight": "24kg", "videoId": ""},
                    {"name": "Box Jumps", "reps": "20", "weight": "24in", "videoId": ""},
                ],
            }
        ],
    }


@pytest.fixture
def strength_output_json(strength_output) -> str:
    return json.dumps(strength_output)
