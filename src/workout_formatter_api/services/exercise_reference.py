"""
Exercise reference index.

The reference library is fetched by the UI and posted along with the raw
workout text. It is only used to ground the prompt (known names and aliases)
and for name lookups, so anything malformed degrades to "no grounding" rather
than failing the import.
"""

import logging
from itertools import islice
from typing import Any, Iterable, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from workout_formatter_api.models import ReferenceExercise

logger = logging.getLogger(__name__)

# Limit to keep the prompt within a sane token budget
DEFAULT_GROUNDING_LIMIT = 200


def iter_library(raw: Any) -> Iterator[ReferenceExercise]:
    """
    Lazily turn whatever the client sent into reference exercises.

    A non-list value yields nothing. Entries that are not objects or lack a
    usable name are skipped; null-valued keys are treated as absent.
    """
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning(f"Exercise library is {type(raw).__name__}, not a list; ignoring it")
        return

    for index, entry in enumerate(raw):
        if isinstance(entry, ReferenceExercise):
            yield entry
            continue
        if not isinstance(entry, dict):
            logger.debug(f"Skipping exercise library entry {index}: not an object")
            continue
        try:
            yield ReferenceExercise.model_validate({k: v for k, v in entry.items() if v is not None})
        except ValidationError:
            logger.debug(f"Skipping malformed exercise library entry {index}")


def coerce_library(raw: Any) -> List[ReferenceExercise]:
    """Materialize `iter_library` into a list."""
    return list(iter_library(raw))


def format_reference_line(exercise: ReferenceExercise) -> str:
    """Format one entry as "- Name (aliases: a, b)"."""
    aliases = f" (aliases: {', '.join(exercise.aliases)})" if exercise.aliases else ""
    return f"- {exercise.name}{aliases}"


def select_grounding_subset(
    library: Any,
    limit: int = DEFAULT_GROUNDING_LIMIT,
) -> List[str]:
    """
    Return the first `limit` library entries as prompt reference lines.

    Truncation is positional; there is no relevance ranking.
    """
    if limit <= 0:
        return []
    return [format_reference_line(ex) for ex in islice(iter_library(library), limit)]


def _matches_any(wanted: Iterable[str], values: Iterable[str]) -> bool:
    lowered = {v.lower() for v in values}
    return any(w.lower() in lowered for w in wanted)


def search_exercises(
    library: Sequence[ReferenceExercise],
    query: str = "",
    equipment: Optional[List[str]] = None,
    muscle_groups: Optional[List[str]] = None,
    category: Optional[str] = None,
) -> List[ReferenceExercise]:
    """
    Search the library by name or alias with optional filters.

    - query: case-insensitive substring of the name or any alias
    - equipment: entry uses at least one of these (exact, case-insensitive)
    - muscle_groups: entry trains at least one of these, primary or secondary
    - category: exact category, case-insensitive
    """
    results = list(library)

    needle = query.strip().lower()
    if needle:
        results = [
            ex for ex in results
            if needle in ex.name.lower() or any(needle in alias.lower() for alias in ex.aliases)
        ]

    if equipment:
        results = [ex for ex in results if _matches_any(equipment, ex.equipment)]

    if muscle_groups:
        results = [
            ex for ex in results
            if _matches_any(muscle_groups, ex.primary_muscles + ex.secondary_muscles)
        ]

    if category:
        results = [ex for ex in results if ex.category.lower() == category.lower()]

    return results


def equipment_options(library: Sequence[ReferenceExercise]) -> List[str]:
    """Distinct equipment names, sorted, excluding empty values and "none"."""
    return sorted({
        eq for ex in library for eq in ex.equipment
        if eq and eq.lower() != "none"
    })


def muscle_group_options(library: Sequence[ReferenceExercise]) -> List[str]:
    """Distinct primary and secondary muscles, sorted."""
    return sorted({m for ex in library for m in ex.primary_muscles + ex.secondary_muscles})
