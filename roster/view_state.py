"""
View state exposed to the rendering layer.

`ViewState` keeps an ordered view over the store's records (the same `Record`
objects, never copies), the remembered sort directions, the filter text, and
the loading/error bookkeeping. The filtered projection is computed lazily each
time it is read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from roster.domain.errors import RosterError
from roster.domain.filtering import filter_records, normalize_needle
from roster.domain.models import Record
from roster.domain.sorting import SortKey, SortToggle, sort_records
from roster.store import RecordStore


class PageState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED_OK = "loaded_ok"
    LOADED_ERROR = "loaded_error"


@dataclass(frozen=True)
class ViewSnapshot:
    """Read-only picture of the view handed to renderers."""

    records: Tuple[Record, ...]
    total_count: int
    current_page: Optional[int]
    pages: Tuple[int, ...]
    loading: bool
    state: PageState
    filter_text: str
    name_ascending: bool
    birth_date_ascending: bool
    sort_key: Optional[SortKey]
    error: Optional[str] = None


@dataclass
class ViewState:
    store: RecordStore
    toggle: SortToggle = field(default_factory=SortToggle)
    filter_text: str = ""
    current_page: Optional[int] = None
    state: PageState = PageState.IDLE
    error: Optional[RosterError] = None
    sort_key: Optional[SortKey] = None
    _ordered: List[Record] = field(default_factory=list, init=False, repr=False)
    _in_flight: int = field(default=0, init=False, repr=False)

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def total_count(self) -> int:
        return self.store.total_count

    @property
    def name_ascending(self) -> bool:
        return self.toggle.name_ascending

    @property
    def birth_date_ascending(self) -> bool:
        return self.toggle.birth_date_ascending

    def begin_operation(self) -> None:
        self._in_flight += 1

    def end_operation(self) -> None:
        self._in_flight = max(0, self._in_flight - 1)

    def rebuild(self) -> None:
        """Re-read the store after a load; any previous ordering is dropped."""
        self._ordered = list(self.store.records)
        self.sort_key = None

    def apply_default_sort(self) -> None:
        """Order freshly loaded records by name, ascending."""
        self.toggle.set(SortKey.NAME, True)
        self._ordered = sort_records(self._ordered, SortKey.NAME, ascending=True)
        self.sort_key = SortKey.NAME

    def sort_by(self, key: SortKey) -> bool:
        """Flip the direction for `key`, reorder, and return the new direction."""
        key = SortKey(key)
        ascending = self.toggle.toggle(key)
        self._ordered = sort_records(self._ordered, key, ascending=ascending)
        self.sort_key = key
        return ascending

    def set_filter(self, text: Optional[str]) -> str:
        self.filter_text = normalize_needle(text)
        return self.filter_text

    def ordered(self) -> List[Record]:
        return list(self._ordered)

    def projection(self) -> List[Record]:
        return filter_records(self._ordered, self.filter_text)

    def snapshot(self, pages: Tuple[int, ...] = ()) -> ViewSnapshot:
        return ViewSnapshot(
            records=tuple(self.projection()),
            total_count=self.total_count,
            current_page=self.current_page,
            pages=tuple(pages),
            loading=self.loading,
            state=self.state,
            filter_text=self.filter_text,
            name_ascending=self.name_ascending,
            birth_date_ascending=self.birth_date_ascending,
            sort_key=self.sort_key,
            error=str(self.error) if self.error is not None else None,
        )


__all__ = ["PageState", "ViewSnapshot", "ViewState"]
