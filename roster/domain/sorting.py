"""
Client-side ordering of the loaded page.

Two sort keys are supported, each with its own remembered direction. Asking to
sort by a key flips that key's direction first and then orders the records;
the other key's direction is left alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List

from roster.domain.models import Record


class SortKey(str, Enum):
    NAME = "name"
    BIRTH_DATE = "birthdate"


_KEY_FUNCS: Dict[SortKey, Callable[[Record], object]] = {
    SortKey.NAME: lambda record: record.name.lower(),
    SortKey.BIRTH_DATE: lambda record: record.birth_date,
}


def sort_records(records: Iterable[Record], key: SortKey, ascending: bool = True) -> List[Record]:
    """
    Return a new list ordered by `key`.

    Names compare case-insensitively by code point, birth dates chronologically.
    The relative order of equal keys is not part of the contract.
    """
    return sorted(records, key=_KEY_FUNCS[SortKey(key)], reverse=not ascending)


@dataclass
class SortToggle:
    """Independent ascending flags for the two sort keys."""

    name_ascending: bool = True
    birth_date_ascending: bool = True

    def is_ascending(self, key: SortKey) -> bool:
        if SortKey(key) is SortKey.NAME:
            return self.name_ascending
        return self.birth_date_ascending

    def set(self, key: SortKey, ascending: bool) -> None:
        if SortKey(key) is SortKey.NAME:
            self.name_ascending = ascending
        else:
            self.birth_date_ascending = ascending

    def toggle(self, key: SortKey) -> bool:
        """Flip the flag for `key` and return the new direction."""
        flipped = not self.is_ascending(key)
        self.set(key, flipped)
        return flipped


__all__ = ["SortKey", "SortToggle", "sort_records"]
