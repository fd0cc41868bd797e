from __future__ import annotations

import uuid

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from exercise_tracker.api import routes
from exercise_tracker.domain.contracts import ExerciseFilter, NewExercise
from exercise_tracker.domain.errors import ConflictError, StoreError
from exercise_tracker.domain.models import Exercise, User
from exercise_tracker.main import install_services


class FakeRepository:
    """In-memory repository mimicking Postgres-backed behaviors."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self.exercises: list[Exercise] = []

    def insert_user(self, username: str) -> User:
        if any(user.username == username for user in self._users.values()):
            raise ConflictError("Username already exists")
        user = User(id=uuid.uuid4().hex, username=username)
        self._users[user.id] = user
        return user

    def find_users(self) -> list[User]:
        return list(self._users.values())

    def find_user_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def insert_exercise(self, payload: NewExercise) -> Exercise:
        exercise = Exercise(
            id=uuid.uuid4().hex,
            user_id=payload.user_id,
            description=payload.description,
            duration=payload.duration,
            date=payload.date,
        )
        self.exercises.append(exercise)
        return exercise

    def find_exercises(self, criteria: ExerciseFilter) -> list[Exercise]:
        results = [e for e in self.exercises if e.user_id == criteria.user_id]
        if criteria.date_from is not None:
            results = [e for e in results if e.date >= criteria.date_from]
        if criteria.date_to is not None:
            results = [e for e in results if e.date <= criteria.date_to]
        if criteria.limit is not None:
            results = results[: criteria.limit]
        return results


class BrokenRepository(FakeRepository):
    """Repository whose every call fails like a lost database connection."""

    def _fail(self, *args, **kwargs):
        raise StoreError("connection refused by db.internal:5432")

    insert_user = _fail
    find_users = _fail
    find_user_by_id = _fail
    insert_exercise = _fail
    find_exercises = _fail


def _client_for(repository: FakeRepository) -> TestClient:
    app = FastAPI()
    app.include_router(routes.router)
    install_services(app, repository)
    return TestClient(app)


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def api_client(repository):
    """Provide a FastAPI test client with isolated state."""
    with _client_for(repository) as client:
        yield client


@pytest.fixture
def broken_client():
    """Provide a client whose record store fails on every call."""
    with _client_for(BrokenRepository()) as client:
        yield client
