"""
Record sources for the roster pager.

Re-exports the source contract and the concrete backends, plus a small
registry so the CLI can resolve a source by name.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from roster.sources.abstract import AbstractRecordSource, RecordSource
from roster.sources.http_source import HttpRecordSource
from roster.sources.memory import MemoryRecordSource, demo_entries
from roster.sources.postgres_source import PostgresRecordSource


def _source_factories() -> Dict[str, Callable[[], AbstractRecordSource]]:
    """Registry of available sources."""
    return {
        "http": lambda: HttpRecordSource(),
        "postgres": lambda: PostgresRecordSource(),
        "memory": lambda: MemoryRecordSource(demo_entries()),
    }


def available_sources() -> List[str]:
    """List available source names."""
    return sorted(_source_factories().keys())


def build_source(name: str) -> AbstractRecordSource:
    factories = _source_factories()
    if name not in factories:
        raise ValueError(f"Unknown source '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


__all__ = [
    # Abstracts
    "AbstractRecordSource",
    "RecordSource",
    # Concrete sources
    "HttpRecordSource",
    "MemoryRecordSource",
    "PostgresRecordSource",
    # Registry
    "available_sources",
    "build_source",
    "demo_entries",
]
