"""Prometheus collectors shared by the tracker services."""

from __future__ import annotations

from prometheus_client import Counter

USERS_CREATED = Counter(
    "exercise_tracker_users_created_total",
    "Users registered through the API.",
)
EXERCISES_LOGGED = Counter(
    "exercise_tracker_exercises_logged_total",
    "Exercise entries persisted through the API.",
)
