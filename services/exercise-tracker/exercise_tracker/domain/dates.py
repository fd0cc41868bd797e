"""Calendar-date parsing and the fixed textual date format used in responses."""

from __future__ import annotations

from datetime import date, datetime

from dateutil import parser

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def parse_date(value: str) -> date:
    """Parse free-form date text (``2023-05-15``, ``2023/05/15``, ``May 15 2023``, ISO date-times).

    Parts missing from the text default to January 1st of the current year.
    Raises ``ValueError`` when the text is not a recognisable date.
    """
    default = datetime(date.today().year, 1, 1)
    try:
        return parser.parse(value, default=default).date()
    except OverflowError as exc:
        raise ValueError(f"date out of range: {value!r}") from exc


def format_date(value: date) -> str:
    """Render ``value`` as e.g. ``Mon Jan 01 2024`` regardless of the process locale."""
    if isinstance(value, datetime):
        value = value.date()
    return (
        f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} "
        f"{value.day:02d} {value.year:04d}"
    )
