"""Database repository for users and their exercise entries."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

import psycopg
from psycopg import errors
from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from .domain.contracts import ExerciseFilter, NewExercise
from .domain.errors import ConflictError, StoreError
from .domain.models import Exercise, User

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS tracker_users (
        user_id TEXT PRIMARY KEY,
        username TEXT NOT NULL UNIQUE,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tracker_exercises (
        exercise_id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        description TEXT NOT NULL,
        duration DOUBLE PRECISION NOT NULL,
        date DATE NOT NULL,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS tracker_exercises_user_date_idx
    ON tracker_exercises (user_id, date)
    """,
)


def build_exercise_query(criteria: ExerciseFilter) -> tuple[str, list[Any]]:
    """Return the SQL text and parameters selecting exercises for ``criteria``."""
    clauses = ["user_id = %s"]
    params: list[Any] = [criteria.user_id]

    if criteria.date_from is not None:
        clauses.append("date >= %s")
        params.append(criteria.date_from)
    if criteria.date_to is not None:
        clauses.append("date <= %s")
        params.append(criteria.date_to)

    where_sql = " AND ".join(clauses)
    query = f"""
        SELECT exercise_id, user_id, description, duration, date
        FROM tracker_exercises
        WHERE {where_sql}
        ORDER BY created_at, exercise_id
    """
    if criteria.limit is not None:
        query += "    LIMIT %s\n"
        params.append(criteria.limit)
    return query, params


def _number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


class TrackerRepository:
    """Postgres-backed storage for users and exercises."""

    def __init__(self, pool: ConnectionPool) -> None:
        """Store the connection pool used for all database interactions."""
        self._pool = pool

    def ensure_schema(self) -> None:
        """Create the tracker tables when they do not exist yet."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    for statement in SCHEMA_STATEMENTS:
                        cur.execute(statement)
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError("schema setup failed") from exc

    def insert_user(self, username: str) -> User:
        """Persist a new user; raise ``ConflictError`` when the username is taken."""
        user_id = uuid.uuid4().hex
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO tracker_users (user_id, username, created_at)
                        VALUES (%s, %s, %s)
                        RETURNING user_id, username
                        """,
                        (user_id, username, datetime.now(timezone.utc)),
                    )
                    row = cur.fetchone()
                conn.commit()
        except errors.UniqueViolation as exc:
            raise ConflictError("Username already exists") from exc
        except psycopg.Error as exc:
            raise StoreError("insert user failed") from exc
        return User(id=row[0], username=row[1])

    def find_users(self) -> list[User]:
        """Return every user in creation order."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        """
                        SELECT user_id, username
                        FROM tracker_users
                        ORDER BY created_at, user_id
                        """
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError("list users failed") from exc
        return [User(id=row[0], username=row[1]) for row in rows]

    def find_user_by_id(self, user_id: str) -> User | None:
        """Fetch a user by identifier or return ``None``."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        """
                        SELECT user_id, username
                        FROM tracker_users
                        WHERE user_id = %s
                        """,
                        (user_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StoreError("find user failed") from exc
        if not row:
            return None
        return User(id=row[0], username=row[1])

    def insert_exercise(self, payload: NewExercise) -> Exercise:
        """Persist an exercise entry and return the stored record."""
        exercise_id = uuid.uuid4().hex
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO tracker_exercises
                            (exercise_id, user_id, description, duration, date, created_at)
                        VALUES (%s, %s, %s, %s, %s, %s)
                        RETURNING exercise_id, user_id, description, duration, date
                        """,
                        (
                            exercise_id,
                            payload.user_id,
                            payload.description,
                            payload.duration,
                            payload.date,
                            datetime.now(timezone.utc),
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError("insert exercise failed") from exc
        return self._map_exercise(row)

    def find_exercises(self, criteria: ExerciseFilter) -> list[Exercise]:
        """Return exercises matching ``criteria`` in insertion order."""
        query, params = build_exercise_query(criteria)
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(query, params)
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError("find exercises failed") from exc
        logger.debug("found %d exercises for user %s", len(rows), criteria.user_id)
        return [self._map_exercise(row) for row in rows]

    def _map_exercise(self, row: tuple) -> Exercise:
        """Convert a raw database tuple into the domain ``Exercise`` dataclass."""
        return Exercise(
            id=row[0],
            user_id=row[1],
            description=row[2],
            duration=_number(row[3]),
            date=row[4],
        )
