"""Error kinds raised by the tracker services and the record store."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for failures surfaced to HTTP callers."""


class ValidationError(TrackerError):
    """Required input is missing or malformed."""


class ConflictError(TrackerError):
    """A uniqueness constraint rejected the write."""


class StoreError(TrackerError):
    """The underlying persistence layer failed."""
