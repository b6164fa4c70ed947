"""
HTTP record source backed by a json-server style REST API.

Pages are requested with `_page`/`_limit` query parameters; the response body
is a JSON array of children and the overall count travels in the
`X-Total-Count` header.
"""

from __future__ import annotations

from typing import Optional

import httpx

from roster.config import get_settings
from roster.domain.errors import SourceError
from roster.domain.models import PageResult
from roster.sources.abstract import AbstractRecordSource
from roster.utils.logging import get_logger

log = get_logger(__name__)

TOTAL_COUNT_HEADER = "X-Total-Count"


class HttpRecordSource(AbstractRecordSource):
    """
    Fetch and delete children over HTTP with a shared `httpx.AsyncClient`.

    The client is created lazily and owned by the source unless one is passed in.
    """

    name: str = "http"
    description: str = "REST API with X-Total-Count paging header."

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        page_size: Optional[int] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.path = (path or settings.api_children_path).strip("/")
        self.page_size = page_size or settings.children_per_page
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def fetch_page(self, page: int) -> PageResult:
        client = self._get_client()
        try:
            response = await client.get(
                f"/{self.path}", params={"_page": page, "_limit": self.page_size}
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise SourceError(
                f"GET /{self.path} page={page} returned {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceError(f"GET /{self.path} page={page} failed: {exc}") from exc
        except ValueError as exc:
            raise SourceError(f"GET /{self.path} page={page} returned invalid JSON") from exc

        if body is None:
            body = []
        if not isinstance(body, list):
            raise SourceError(f"Expected a JSON array, got {type(body).__name__}")

        total_count = response.headers.get(TOTAL_COUNT_HEADER) or "0"
        log.debug(
            "Fetched page",
            extra={"page": page, "records": len(body), "total_count": total_count},
        )
        return PageResult.from_raw(body, total_count)

    async def delete_record(self, record_id: str, page: int) -> None:
        client = self._get_client()
        try:
            response = await client.delete(
                f"/{self.path}/{record_id}", params={"_page": page}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SourceError(
                f"DELETE /{self.path}/{record_id} returned {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceError(f"DELETE /{self.path}/{record_id} failed: {exc}") from exc
        log.debug("Deleted child", extra={"record_id": record_id, "page": page})

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


__all__ = ["HttpRecordSource", "TOTAL_COUNT_HEADER"]
