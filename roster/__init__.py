"""
Roster pager - paginated, sortable, filterable view of registered children.

The package manages one page of children fetched from a remote source:

- Page selection with fetch-on-change and request fencing
- Loading and error bookkeeping across overlapping async operations
- Toggled client-side sorting by name or birth date
- Case-insensitive client-side filtering
- Age derived from the birth date at render time
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from roster.config import Settings, get_settings
from roster.controller import PageChangedChannel, PageController
from roster.domain import (
    DeleteError,
    FetchError,
    InvalidBirthDateError,
    PageResult,
    Record,
    SortKey,
    SourceError,
    age,
    filter_records,
    sort_records,
)
from roster.sources import AbstractRecordSource, RecordSource, available_sources, build_source
from roster.store import RecordStore
from roster.utils.logging import configure_logging, get_logger
from roster.view_state import PageState, ViewSnapshot, ViewState

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Controller and view
    "PageController",
    "PageChangedChannel",
    "PageState",
    "ViewState",
    "ViewSnapshot",
    "RecordStore",
    # Domain
    "Record",
    "PageResult",
    "SortKey",
    "age",
    "sort_records",
    "filter_records",
    # Errors
    "SourceError",
    "FetchError",
    "DeleteError",
    "InvalidBirthDateError",
    # Sources
    "RecordSource",
    "AbstractRecordSource",
    "available_sources",
    "build_source",
    # Logging
    "configure_logging",
    "get_logger",
]
