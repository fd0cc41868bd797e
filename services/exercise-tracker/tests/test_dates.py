from __future__ import annotations

import locale
from datetime import date, datetime

import pytest

from exercise_tracker.domain.dates import format_date, parse_date


@pytest.mark.parametrize(
    "value, expected",
    [
        (date(2024, 1, 1), "Mon Jan 01 2024"),
        (date(2023, 5, 15), "Mon May 15 2023"),
        (date(2024, 2, 29), "Thu Feb 29 2024"),
        (date(1999, 12, 31), "Fri Dec 31 1999"),
        (datetime(2024, 7, 4, 23, 59), "Thu Jul 04 2024"),
    ],
)
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_format_date_ignores_locale():
    previous = locale.setlocale(locale.LC_TIME)
    try:
        try:
            locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
        except locale.Error:
            pytest.skip("de_DE locale not installed")
        assert format_date(date(2024, 3, 5)) == "Tue Mar 05 2024"
    finally:
        locale.setlocale(locale.LC_TIME, previous)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2023-05-15", date(2023, 5, 15)),
        (" 2023-05-15 ", date(2023, 5, 15)),
        ("2023-05-15T10:00:00", date(2023, 5, 15)),
        ("2023-05-15 23:59:59+02:00", date(2023, 5, 15)),
        ("2023/05/15", date(2023, 5, 15)),
        ("May 15 2023", date(2023, 5, 15)),
        ("Mon May 15 2023", date(2023, 5, 15)),
        ("15 May 2023", date(2023, 5, 15)),
    ],
)
def test_parse_date(text, expected):
    assert parse_date(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "tomorrow", "not-a-date"])
def test_parse_date_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_date(text)


def test_parse_date_fills_missing_parts_from_current_year():
    assert parse_date("March 3") == date(date.today().year, 3, 3)
