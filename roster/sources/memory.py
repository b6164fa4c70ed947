"""
In-process record source.

Serves pages out of a plain list with the same slicing rules as the HTTP API.
Used by the CLI demo and by tests that need a well-behaved backend.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from roster.config import get_settings
from roster.domain.errors import SourceError
from roster.domain.models import PageResult, Record
from roster.sources.abstract import AbstractRecordSource


class MemoryRecordSource(AbstractRecordSource):
    name: str = "memory"
    description: str = "In-memory list sliced into pages."

    def __init__(
        self,
        entries: Iterable[Mapping[str, Any] | Record] = (),
        page_size: Optional[int] = None,
    ) -> None:
        self.page_size = page_size or get_settings().children_per_page
        self._records: List[Record] = [
            entry if isinstance(entry, Record) else Record.from_raw(entry) for entry in entries
        ]

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    async def fetch_page(self, page: int) -> PageResult:
        start = (page - 1) * self.page_size
        window = self._records[start : start + self.page_size]
        return PageResult(records=tuple(window), total_count=len(self._records))

    async def delete_record(self, record_id: str, page: int) -> None:
        del page
        for index, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[index]
                return
        raise SourceError(f"Child {record_id!r} not found", status_code=404)


def demo_entries() -> List[dict]:
    """A small fixed roster for offline browsing."""
    return [
        {"id": "1", "name": "Mila Berger", "birthDate": "2019-03-02"},
        {"id": "2", "name": "noah Fischer", "birthDate": "2018-11-23"},
        {"id": "3", "name": "Emma Wagner", "birthDate": "2020-06-15"},
        {"id": "4", "name": "Ben Schulz", "birthDate": "2017-01-30"},
        {"id": "5", "name": "lena Hoffmann", "birthDate": "2019-09-09"},
        {"id": "6", "name": "Paul Becker", "birthDate": "2021-02-14"},
        {"id": "7", "name": "Clara Koch", "birthDate": "2018-05-05"},
        {"id": "8", "name": "Felix Richter", "birthDate": "2020-12-01"},
        {"id": "9", "name": "Sophie Klein", "birthDate": "2016-07-21"},
        {"id": "10", "name": "Jonas Wolf", "birthDate": "2019-04-18"},
        {"id": "11", "name": "Hanna Neumann", "birthDate": "2017-10-10"},
        {"id": "12", "name": "Elias Schwarz", "birthDate": "2020-08-27"},
    ]


__all__ = ["MemoryRecordSource", "demo_entries"]
