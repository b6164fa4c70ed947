"""
Error taxonomy for the roster pager.

Source adapters raise `SourceError`; the page controller wraps failures into
`FetchError` or `DeleteError` before surfacing them on the view.
"""

from __future__ import annotations

from typing import Optional


class RosterError(Exception):
    """Base class for all roster errors."""


class SourceError(RosterError):
    """A record source could not complete a request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidRecordError(SourceError):
    """A raw entry from the source does not describe a valid record."""


class FetchError(RosterError):
    """Loading a page failed."""

    def __init__(self, page: int, cause: BaseException) -> None:
        super().__init__(f"Error loading children for page {page}: {cause}")
        self.page = page
        self.cause = cause


class DeleteError(RosterError):
    """Cancelling a registration failed."""

    def __init__(self, record_id: str, cause: BaseException) -> None:
        super().__init__(f"Error canceling registration {record_id}: {cause}")
        self.record_id = record_id
        self.cause = cause


class InvalidBirthDateError(RosterError, ValueError):
    """A birth date could not be parsed as a calendar date."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid birth date: {value!r}")
        self.value = value


__all__ = [
    "RosterError",
    "SourceError",
    "InvalidRecordError",
    "FetchError",
    "DeleteError",
    "InvalidBirthDateError",
]
