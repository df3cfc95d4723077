"""Custom exception hierarchy for scoutstream."""

from __future__ import annotations


class ScoutError(Exception):
    """Base exception for all scoutstream errors."""


class ScoutConfigError(ScoutError):
    """Invalid or missing configuration."""


class ScoutPayloadError(ScoutError, ValueError):
    """A payload buffer was required but the caller passed ``None``.

    This is a programming error on the caller side.  Malformed payload
    *contents* never raise; they decode to an empty reading instead.
    """

    def __init__(self, message: str, *, identifier: object = None) -> None:
        self.identifier = identifier
        super().__init__(message)
