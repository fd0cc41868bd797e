from __future__ import annotations

from datetime import date

from exercise_tracker.domain.contracts import ExerciseFilter
from exercise_tracker.repository import build_exercise_query


def test_query_without_bounds_filters_on_user_only():
    query, params = build_exercise_query(ExerciseFilter(user_id="u1"))

    assert "WHERE user_id = %s\n" in query
    assert "date >=" not in query
    assert "date <=" not in query
    assert "LIMIT" not in query
    assert params == ["u1"]


def test_query_applies_each_bound_independently():
    query, params = build_exercise_query(
        ExerciseFilter(user_id="u1", date_from=date(2024, 1, 1))
    )
    assert "date >= %s" in query
    assert "date <= %s" not in query
    assert params == ["u1", date(2024, 1, 1)]

    query, params = build_exercise_query(
        ExerciseFilter(user_id="u1", date_to=date(2024, 2, 1))
    )
    assert "date <= %s" in query
    assert "date >= %s" not in query
    assert params == ["u1", date(2024, 2, 1)]


def test_query_orders_by_insertion_and_limits_last():
    query, params = build_exercise_query(
        ExerciseFilter(
            user_id="u1",
            date_from=date(2024, 1, 1),
            date_to=date(2024, 1, 31),
            limit=5,
        )
    )

    assert query.index("ORDER BY created_at, exercise_id") < query.index("LIMIT %s")
    assert params == ["u1", date(2024, 1, 1), date(2024, 1, 31), 5]
