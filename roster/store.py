"""
Single owner of the loaded page's records.

Only the page controller writes here; every other consumer reads immutable
snapshots, so no component can reorder or mutate the list behind another's back.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from roster.domain.models import Record


class RecordStore:
    """Holds the current page of records and the source's total count."""

    def __init__(self) -> None:
        self._records: Tuple[Record, ...] = ()
        self._total_count: int = 0

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def total_count(self) -> int:
        return self._total_count

    def replace(self, records: Iterable[Record], total_count: int) -> None:
        """Swap in a freshly loaded page wholesale."""
        if total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {total_count}")
        self._records = tuple(records)
        self._total_count = total_count

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["RecordStore"]
