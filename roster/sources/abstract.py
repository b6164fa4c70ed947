"""
Record source interfaces for the roster pager.

Concrete sources (HTTP API, Postgres, in-memory) implement the RecordSource
protocol. The page controller only ever talks to this contract.
"""

from __future__ import annotations

import abc
from typing import Protocol, runtime_checkable

from roster.domain.models import PageResult


@runtime_checkable
class RecordSource(Protocol):
    """
    Remote collaborator that serves one page of records at a time.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the backend.
    """

    name: str
    description: str

    async def fetch_page(self, page: int) -> PageResult:
        """
        Load the records of a 1-based page together with the overall total count.

        Raises
        ------
        SourceError
            On transport failures or malformed payloads.
        """
        ...

    async def delete_record(self, record_id: str, page: int) -> None:
        """
        Remove one record. `page` is forwarded for backends that key deletes by page.

        Raises
        ------
        SourceError
            If the backend refused or failed the deletion.
        """
        ...


class AbstractRecordSource(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `name` and `description` and implement both coroutines.
    `aclose` is a no-op unless the source holds a connection or client.
    """

    name: str
    description: str

    @abc.abstractmethod
    async def fetch_page(self, page: int) -> PageResult:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    async def delete_record(self, record_id: str, page: int) -> None:  # pragma: no cover
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


__all__ = ["RecordSource", "AbstractRecordSource"]
