from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(slots=True)
class User:
    """A registered user; immutable once created."""

    id: str
    username: str


@dataclass(slots=True)
class Exercise:
    """A single logged exercise entry bound to a user id."""

    id: str
    user_id: str
    description: str
    duration: int | float
    date: date
