"""Error taxonomy for workout formatting.

Every error aborts the whole import. Messages are human readable and meant to
be shown to the user as-is.
"""


class WorkoutFormatError(Exception):
    """Base class for all workout formatting failures."""


class InputError(WorkoutFormatError):
    """Raw text or exercise library rejected before the pipeline runs."""


class ConfigurationError(WorkoutFormatError):
    """The completion provider is not configured (e.g. missing API key)."""


class ProviderError(WorkoutFormatError):
    """The completion provider call failed."""


class ExtractionError(WorkoutFormatError):
    """The completion text could not be parsed as JSON."""


class SchemaValidationError(WorkoutFormatError):
    """Parsed output does not match the workout schema."""

    def __init__(self, message: str, index: int | None = None, field: str | None = None):
        super().__init__(message)
        self.index = index
        self.field = field
