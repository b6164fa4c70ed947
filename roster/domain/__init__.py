"""
Domain package for the roster pager.

Exports the record schema and the pure helpers (age, sort, filter) that read
it. Keep this package free of I/O.
"""

from roster.domain.age import age, parse_date
from roster.domain.errors import (
    DeleteError,
    FetchError,
    InvalidBirthDateError,
    InvalidRecordError,
    RosterError,
    SourceError,
)
from roster.domain.filtering import filter_records, normalize_needle
from roster.domain.models import PageResult, Record
from roster.domain.sorting import SortKey, SortToggle, sort_records

__all__ = [
    "Record",
    "PageResult",
    "age",
    "parse_date",
    "SortKey",
    "SortToggle",
    "sort_records",
    "filter_records",
    "normalize_needle",
    "RosterError",
    "SourceError",
    "InvalidRecordError",
    "FetchError",
    "DeleteError",
    "InvalidBirthDateError",
]
