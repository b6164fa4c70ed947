"""
Page controller: fetch-on-page-change, loading bookkeeping, and error capture.

Usage:
    from roster.controller import PageController
    from roster.sources import HttpRecordSource

    controller = PageController(HttpRecordSource())
    controller.page_changed.subscribe(lambda page: print("page", page))
    await controller.select_page(1)
    controller.on_sort_by_birthdate()
    print(controller.view_state().records)

Overlapping loads are fenced with a monotonically increasing request token:
only the response belonging to the most recent load is applied, whatever
order the responses arrive in. `loading` stays true while any fetch or delete
is outstanding.
"""

from __future__ import annotations

import math
from typing import Callable, List, Optional

from roster.config import get_settings
from roster.domain.errors import DeleteError, FetchError, RosterError
from roster.domain.sorting import SortKey
from roster.sources.abstract import RecordSource
from roster.store import RecordStore
from roster.utils.logging import get_logger
from roster.view_state import PageState, ViewSnapshot, ViewState

log = get_logger(__name__)

PageListener = Callable[[int], None]


class PageChangedChannel:
    """Notifies subscribers (URL sync, page index widgets) of the selected page."""

    def __init__(self) -> None:
        self._listeners: List[PageListener] = []

    def subscribe(self, listener: PageListener) -> Callable[[], None]:
        """Register `listener`; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, page: int) -> None:
        for listener in list(self._listeners):
            try:
                listener(page)
            except Exception:  # noqa: BLE001 - a broken listener must not abort the load
                log.exception("Page listener failed", extra={"page": page})


class PageController:
    """
    Drives one roster view: selects pages, cancels registrations, and exposes
    sort/filter entry points to the renderer.

    Parameters
    ----------
    source : RecordSource
        Backend serving pages and deletions.
    page_size : int, optional
        Records per page; defaults to `CHILDREN_PER_PAGE` from settings.
    store : RecordStore, optional
        Owner of the loaded records; a fresh one is created when omitted.
    """

    def __init__(
        self,
        source: RecordSource,
        page_size: Optional[int] = None,
        store: Optional[RecordStore] = None,
        page_changed: Optional[PageChangedChannel] = None,
    ) -> None:
        self.source = source
        self.page_size = page_size or get_settings().children_per_page
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        self.store = store if store is not None else RecordStore()
        self.view = ViewState(self.store)
        self.page_changed = page_changed or PageChangedChannel()
        self._latest_token = 0
        self._cancels_in_flight = 0

    @property
    def state(self) -> PageState:
        return self.view.state

    @property
    def current_page(self) -> Optional[int]:
        return self.view.current_page

    @property
    def loading(self) -> bool:
        return self.view.loading

    def all_pages(self) -> List[int]:
        """Page numbers 1..ceil(total_count / page_size); empty when nothing is loaded."""
        page_count = math.ceil(self.store.total_count / self.page_size)
        return list(range(1, page_count + 1))

    def view_state(self) -> ViewSnapshot:
        return self.view.snapshot(pages=tuple(self.all_pages()))

    async def select_page(self, page: int) -> bool:
        """
        Switch to `page` and load it.

        Returns True when the fetched page was applied. Returns False when the
        load failed, was superseded by a newer one, or was refused because a
        registration is being cancelled.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if self._cancels_in_flight:
            log.warning(
                "Page navigation blocked while a cancellation is in flight",
                extra={"page": page, "current_page": self.view.current_page},
            )
            return False

        self.view.begin_operation()
        try:
            return await self._enter_page(page)
        finally:
            self.view.end_operation()

    async def cancel_registration(self, record_id: str) -> bool:
        """
        Delete one record, then reload the current page in place.

        Returns True when the deletion succeeded. A failed deletion is surfaced
        on the view and leaves the loaded records untouched.
        """
        page = self.view.current_page or 1
        self._cancels_in_flight += 1
        self.view.begin_operation()
        try:
            try:
                await self.source.delete_record(record_id, page)
            except Exception as exc:  # noqa: BLE001 - surfaced on the view, never fatal
                self._surface(DeleteError(record_id, exc))
                return False

            log.info("Registration cancelled", extra={"record_id": record_id, "page": page})
            await self._enter_page(page)
            return True
        finally:
            self.view.end_operation()
            self._cancels_in_flight -= 1

    async def _enter_page(self, page: int) -> bool:
        self.view.current_page = page
        self.view.state = PageState.LOADING
        self.page_changed.emit(page)
        return await self._load(page)

    async def _load(self, page: int) -> bool:
        self._latest_token += 1
        token = self._latest_token
        log.debug("Loading page", extra={"page": page, "token": token})

        try:
            result = await self.source.fetch_page(page)
        except Exception as exc:  # noqa: BLE001 - surfaced on the view, never fatal
            if token != self._latest_token:
                log.info("Ignoring failure of superseded load", extra={"page": page, "token": token})
                return False
            self._surface(FetchError(page, exc))
            self.view.state = PageState.LOADED_ERROR
            return False

        if token != self._latest_token:
            log.info("Discarding superseded page", extra={"page": page, "token": token})
            return False

        self.store.replace(result.records, result.total_count)
        self.view.rebuild()
        self.view.apply_default_sort()
        self.view.error = None
        self.view.state = PageState.LOADED_OK
        log.info(
            "Page loaded",
            extra={"page": page, "records": len(result.records), "total_count": result.total_count},
        )
        return True

    def _surface(self, error: RosterError) -> None:
        self.view.error = error
        cause = getattr(error, "cause", None)
        log.error(
            str(error),
            exc_info=cause,
            extra={"error_type": type(error).__name__, "page": self.view.current_page},
        )

    # Renderer entry points

    async def on_select_page(self, page: int) -> bool:
        return await self.select_page(page)

    async def on_cancel_registration(self, record_id: str) -> bool:
        return await self.cancel_registration(record_id)

    def on_filter_input(self, text: Optional[str]) -> str:
        return self.view.set_filter(text)

    def on_sort_by_name(self) -> bool:
        return self.view.sort_by(SortKey.NAME)

    def on_sort_by_birthdate(self) -> bool:
        return self.view.sort_by(SortKey.BIRTH_DATE)

    async def aclose(self) -> None:
        close = getattr(self.source, "aclose", None)
        if close is not None:
            await close()


__all__ = ["PageChangedChannel", "PageController"]
