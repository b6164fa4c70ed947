"""Case-insensitive substring filter over the loaded page."""

from __future__ import annotations

from typing import Iterable, List, Optional

from roster.domain.models import Record


def normalize_needle(text: Optional[str]) -> str:
    """Trim and lower-case user input; None becomes the empty needle."""
    return (text or "").strip().lower()


def filter_records(records: Iterable[Record], needle: Optional[str]) -> List[Record]:
    """
    Keep records whose textual projection contains `needle`.

    An empty (or whitespace-only) needle passes every record through.
    """
    wanted = normalize_needle(needle)
    if not wanted:
        return list(records)
    return [record for record in records if wanted in record.search_text()]


__all__ = ["filter_records", "normalize_needle"]
