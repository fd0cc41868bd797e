"""Response models fixing the externally visible JSON field sets."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..domain.contracts import ExerciseLog, LoggedExercise
from ..domain.dates import format_date
from ..domain.models import Exercise, User


class UserResponse(BaseModel):
    """Serialised representation of a `User`."""

    id: str = Field(..., serialization_alias="_id")
    username: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username)


class ExerciseResponse(BaseModel):
    """The owning user merged with the exercise that was just logged."""

    id: str = Field(..., serialization_alias="_id")
    username: str
    description: str
    duration: int | float
    date: str

    @classmethod
    def from_domain(cls, logged: LoggedExercise) -> "ExerciseResponse":
        return cls(
            id=logged.user.id,
            username=logged.user.username,
            description=logged.exercise.description,
            duration=logged.exercise.duration,
            date=format_date(logged.exercise.date),
        )


class LogEntry(BaseModel):
    description: str
    duration: int | float
    date: str

    @classmethod
    def from_domain(cls, exercise: Exercise) -> "LogEntry":
        return cls(
            description=exercise.description,
            duration=exercise.duration,
            date=format_date(exercise.date),
        )


class LogResponse(BaseModel):
    """A user's exercise log; ``count`` is the number of entries returned."""

    username: str
    count: int
    id: str = Field(..., serialization_alias="_id")
    log: list[LogEntry]

    @classmethod
    def from_domain(cls, log: ExerciseLog) -> "LogResponse":
        entries = [LogEntry.from_domain(exercise) for exercise in log.entries]
        return cls(
            username=log.user.username,
            count=len(entries),
            id=log.user.id,
            log=entries,
        )


class ErrorResponse(BaseModel):
    error: str
