"""User, exercise and log workflows backed by the record store."""

from __future__ import annotations

import logging
import math
import re
from datetime import date
from typing import Callable

from .contracts import ExerciseFilter, ExerciseLog, LoggedExercise, NewExercise
from .dates import parse_date
from .errors import ConflictError, ValidationError
from .models import User
from ..metrics import EXERCISES_LOGGED, USERS_CREATED
from ..repository import TrackerRepository

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Largest value Postgres accepts for LIMIT (bigint).
MAX_LIMIT = 2**63 - 1


def parse_limit(raw: str | int | None) -> int | None:
    """Return a positive cap parsed from ``raw``, or ``None`` when no cap applies.

    Leading digits are honoured the lenient way (``"5abc"`` caps at 5); empty,
    non-numeric, zero and negative values mean "no cap".
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(raw)
        if not match:
            return None
        value = int(match.group(1))
    if value <= 0:
        return None
    return min(value, MAX_LIMIT)


def parse_duration(raw: str | int | float | None) -> int | float:
    """Coerce a duration supplied as a number or numeric text into a number."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    else:
        try:
            value = float(str(raw).strip())
        except ValueError as exc:
            raise ValidationError("Duration must be a number.") from exc
    if not math.isfinite(value):
        raise ValidationError("Duration must be a number.")
    return int(value) if value.is_integer() else value


def _missing(value: object) -> bool:
    return value is None or value == ""


def _blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class IdentityService:
    """Registers users and resolves user identifiers."""

    def __init__(self, repository: TrackerRepository) -> None:
        self._repository = repository

    def create_user(self, username: str | None) -> User:
        """Register ``username``; it must be non-empty and not already taken."""
        if _missing(username):
            raise ValidationError("Username is required")
        try:
            user = self._repository.insert_user(username)
        except ConflictError:
            logger.warning("username %r already registered", username)
            raise
        USERS_CREATED.inc()
        logger.info("registered user %s (%s)", user.id, user.username)
        return user

    def list_users(self) -> list[User]:
        return self._repository.find_users()

    def resolve_user(self, user_id: str) -> User | None:
        """Return the user for ``user_id`` or ``None`` when it is unknown."""
        return self._repository.find_user_by_id(user_id)


class ActivityLogger:
    """Records exercise entries against existing users."""

    def __init__(
        self,
        repository: TrackerRepository,
        identity: IdentityService,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repository = repository
        self._identity = identity
        self._today = today

    def add_exercise(
        self,
        user_id: str,
        description: str | None,
        duration: str | int | float | None,
        date_text: str | None = None,
    ) -> LoggedExercise | None:
        """Validate and persist an exercise; ``None`` means the user was not found.

        Parameters
        ----------
        user_id:
            Identifier of the owning user.
        description:
            Free-text description; required.
        duration:
            Number or numeric text; required.
        date_text:
            Optional ``YYYY-MM-DD`` (or ISO date-time). Defaults to today.
        """
        if _missing(description) or _blank(duration):
            raise ValidationError("Description and duration are required.")
        amount = parse_duration(duration)

        user = self._identity.resolve_user(user_id)
        if user is None:
            return None

        if _blank(date_text):
            performed_on = self._today()
        else:
            try:
                performed_on = parse_date(date_text)
            except ValueError as exc:
                raise ValidationError("Invalid date.") from exc

        exercise = self._repository.insert_exercise(
            NewExercise(
                user_id=user.id,
                description=description,
                duration=amount,
                date=performed_on,
            )
        )
        EXERCISES_LOGGED.inc()
        logger.info("logged exercise %s for user %s", exercise.id, user.id)
        return LoggedExercise(user=user, exercise=exercise)


class LogQueryEngine:
    """Builds filtered, optionally capped views of a user's exercises."""

    def __init__(self, repository: TrackerRepository, identity: IdentityService) -> None:
        self._repository = repository
        self._identity = identity

    def get_logs(
        self,
        user_id: str,
        date_from: str | None = None,
        date_to: str | None = None,
        limit: str | int | None = None,
    ) -> ExerciseLog | None:
        """Return the user's exercises within the inclusive date bounds.

        Absent bounds are not applied. ``limit`` is interpreted by
        :func:`parse_limit`. ``None`` means the user was not found.
        """
        user = self._identity.resolve_user(user_id)
        if user is None:
            return None

        criteria = ExerciseFilter(
            user_id=user.id,
            date_from=self._bound(date_from),
            date_to=self._bound(date_to),
            limit=parse_limit(limit),
        )
        entries = self._repository.find_exercises(criteria)
        return ExerciseLog(user=user, entries=entries)

    def _bound(self, raw: str | None) -> date | None:
        if _blank(raw):
            return None
        try:
            return parse_date(raw)
        except ValueError as exc:
            raise ValidationError("Invalid date filter.") from exc
