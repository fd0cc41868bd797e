"""Domain-level request contracts shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .models import Exercise, User


@dataclass(slots=True)
class NewExercise:
    """Normalised inputs required to persist an exercise entry."""

    user_id: str
    description: str
    duration: int | float
    date: date


@dataclass(slots=True)
class ExerciseFilter:
    """Criteria for selecting a user's exercises from the record store.

    ``date_from`` and ``date_to`` are inclusive bounds; ``None`` means the
    bound is not applied. ``limit`` caps the result size when set.
    """

    user_id: str
    date_from: date | None = None
    date_to: date | None = None
    limit: int | None = None


@dataclass(slots=True)
class LoggedExercise:
    """Result of logging an exercise: the owning user and the stored entry."""

    user: User
    exercise: Exercise


@dataclass(slots=True)
class ExerciseLog:
    """A user's exercises after date filtering and capping."""

    user: User
    entries: list[Exercise]
