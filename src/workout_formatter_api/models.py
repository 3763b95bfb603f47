"""Data models for formatted workouts and the reference exercise library."""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

ExerciseType = Literal["strength", "for-time", "emom", "amrap"]
EXERCISE_TYPES = ("strength", "for-time", "emom", "amrap")


class _WireModel(BaseModel):
    """Base for models exchanged with the UI (camelCase on the wire)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"
        frozen = True


class Segment(_WireModel):
    """One timed piece of a for-time block (e.g. 20 min ski erg in Zone 2)."""
    name: str = Field(..., min_length=1)
    duration_minutes: Union[int, float]
    zone: Optional[str] = None
    video_id: str = ""

    @field_validator("duration_minutes")
    @classmethod
    def _positive_duration(cls, value: Union[int, float]) -> Union[int, float]:
        if value <= 0:
            raise ValueError("durationMinutes must be greater than 0")
        return value


class EmomInterval(_WireModel):
    """Movement performed once per interval of an EMOM rotation."""
    name: str = Field(..., min_length=1)
    reps: Optional[str] = None
    weight: Optional[str] = None
    notes: Optional[str] = None
    video_id: str = ""


class AmrapMovement(_WireModel):
    """Movement in one AMRAP round."""
    name: str = Field(..., min_length=1)
    reps: str
    weight: Optional[str] = None
    notes: Optional[str] = None
    video_id: str = ""


class _ExerciseBase(_WireModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: ExerciseType
    notes: str = ""
    rest_seconds: int = Field(default=0, ge=0)  # between sets for strength, 0 for continuous work
    equipment: List[str] = Field(default_factory=list)
    muscle_groups: List[str] = Field(default_factory=list)
    video_id: str = ""  # filled in downstream, never by the formatter
    completed: bool = False


class StrengthExercise(_ExerciseBase):
    """Resistance exercise performed as sets x reps."""
    type: Literal["strength"]
    sets: int = Field(..., ge=0)
    reps: str  # "8" or a range like "6-8"
    weight: Optional[str] = None


class _ContinuousExercise(_ExerciseBase):
    """Exercise without sets/reps; both are pinned to their empty values."""
    sets: int = 0
    reps: str = ""

    @field_validator("sets", mode="before")
    @classmethod
    def _no_sets(cls, value: Any) -> int:
        return 0

    @field_validator("reps", mode="before")
    @classmethod
    def _no_reps(cls, value: Any) -> str:
        return ""


class ForTimeExercise(_ContinuousExercise):
    """Continuous cardio work made of timed segments."""
    type: Literal["for-time"]
    segments: List[Segment] = Field(..., min_length=1)


class EmomExercise(_ContinuousExercise):
    """Every-N-minutes-on-the-minute rotation."""
    type: Literal["emom"]
    emom_interval_seconds: int = Field(default=60, gt=0)  # 60 for EMOM, 120 for E2MOM
    emom_total_minutes: int = Field(..., gt=0)
    emom_intervals: List[EmomInterval] = Field(..., min_length=1)


class AmrapExercise(_ContinuousExercise):
    """As-many-rounds-as-possible block with a time cap."""
    type: Literal["amrap"]
    amrap_duration_minutes: int = Field(..., gt=0)
    amrap_exercises: List[AmrapMovement] = Field(..., min_length=1)


ExerciseRecord = Annotated[
    Union[StrengthExercise, ForTimeExercise, EmomExercise, AmrapExercise],
    Field(discriminator="type"),
]

# Variant model per exercise type
EXERCISE_MODELS: Dict[str, type] = {
    "strength": StrengthExercise,
    "for-time": ForTimeExercise,
    "emom": EmomExercise,
    "amrap": AmrapExercise,
}


class WorkoutRecord(_WireModel):
    """A fully structured training session produced by one import."""
    name: str = Field(..., min_length=1)
    goal: str = ""
    coach_notes: str = ""
    estimated_time: str = "Unknown"
    exercises: List[ExerciseRecord]

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with wire names, leaving out absent optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ReferenceExercise(BaseModel):
    """Entry of the reference exercise library (read-only grounding input)."""
    name: str = Field(..., min_length=1)
    category: str = ""
    equipment: List[str] = Field(default_factory=list)
    primary_muscles: List[str] = Field(default_factory=list)
    secondary_muscles: List[str] = Field(default_factory=list)
    aliases: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    video: Optional[str] = None
    tempo: Optional[str] = None

    class Config:
        extra = "ignore"
        frozen = True
