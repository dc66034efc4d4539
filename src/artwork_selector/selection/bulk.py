"""Cross-page bulk selection.

Selects the first N records of the collection starting at a given page,
walking forward one page at a time. Fetches are strictly sequential so at
most one page is in flight and the selected ids follow server order.

A run threads an explicit accumulator of ids through the loop and commits
it to the SelectionStore once, at the end:

- a completed run commits everything it accumulated, including the pages
  fetched before a failed fetch (partial=True)
- a cancelled run commits nothing
"""

import logging
import math
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from artwork_selector.clients.exceptions import FetchError
from artwork_selector.selection.store import SelectionStore
from schemas.record_page import RecordPage

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    """Anything that can fetch one page of records."""

    def fetch_page(self, page: int, rows: int) -> RecordPage: ...


class CancellationToken:
    """Cooperative cancellation flag checked between fetches."""

    def __init__(self):
        self._event = threading.Event()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class BulkOutcome(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class BulkResult:
    """Outcome of one bulk selection run.

    Attributes:
        outcome: Whether the run finished or was cancelled
        requested: Number of records asked for
        selected_ids: Ids taken, in server order (empty when cancelled)
        pages_fetched: Number of pages fetched successfully
        partial: True if a fetch failed and the run stopped early
        exhausted: True if the collection ran out before `requested` ids
        error: Message of the fetch failure, if any
    """

    outcome: BulkOutcome
    requested: int
    selected_ids: tuple[int, ...] = ()
    pages_fetched: int = 0
    partial: bool = False
    exhausted: bool = False
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is BulkOutcome.COMPLETED and not self.partial


def accumulate(
    accumulated: tuple[int, ...], page: RecordPage, target: int
) -> tuple[int, ...]:
    """Extend the accumulator with ids from a page, up to `target` in total.

    Ids are taken from the front of the page in server order.
    """
    remaining = target - len(accumulated)
    if remaining <= 0:
        return accumulated
    return accumulated + tuple(page.ids[:remaining])


class BulkSelector:
    """Selects the first N records starting from a page.

    Example:
        with ArtworksClient(config) as client:
            selector = BulkSelector(client, store)
            result = selector.select_count(15, start_page=1, rows=12)
    """

    def __init__(self, fetcher: PageFetcher, store: SelectionStore):
        self.fetcher = fetcher
        self.store = store
        self._running = 0

    @property
    def loading(self) -> bool:
        return self._running > 0

    def select_count(
        self,
        count: int | None,
        start_page: int,
        rows: int,
        token: CancellationToken | None = None,
    ) -> BulkResult:
        """Select `count` records starting at `start_page`.

        `rows` is fixed for the duration of the run. A missing or
        non-positive count is a no-op that performs no fetch.

        Args:
            count: Number of records to select
            start_page: 1-based page to start from
            rows: Page size used for every fetch
            token: Optional token; cancelling it stops the run before the next fetch

        Returns:
            BulkResult describing what was selected
        """
        if not count or count <= 0:
            return BulkResult(outcome=BulkOutcome.COMPLETED, requested=max(count or 0, 0))
        if start_page < 1:
            raise ValueError(f"start_page must be >= 1, got {start_page}")
        if rows < 1:
            raise ValueError(f"rows must be >= 1, got {rows}")

        token = token or CancellationToken()
        pages_needed = math.ceil(count / rows)
        accumulated: tuple[int, ...] = ()
        pages_fetched = 0
        error: str | None = None

        self._running += 1
        try:
            for i in range(pages_needed):
                if token.cancelled:
                    return self._cancelled(count, pages_fetched)

                page_number = start_page + i
                try:
                    page = self.fetcher.fetch_page(page_number, rows)
                except FetchError as e:
                    logger.error(
                        f"Bulk selection stopped at page {page_number}: {e.message}"
                    )
                    error = e.message
                    break

                pages_fetched += 1
                accumulated = accumulate(accumulated, page, count)
                logger.debug(
                    f"Bulk selection page {page_number}: "
                    f"{len(accumulated)}/{count} ids accumulated"
                )

                if len(accumulated) >= count:
                    break
                if page.is_last:
                    break

            if token.cancelled:
                return self._cancelled(count, pages_fetched)

            added = self.store.add_many(accumulated)
        finally:
            self._running -= 1

        exhausted = error is None and len(accumulated) < count
        logger.info(
            f"Bulk selection of {count} finished: {len(accumulated)} ids from "
            f"{pages_fetched} pages ({added} newly selected)"
        )

        return BulkResult(
            outcome=BulkOutcome.COMPLETED,
            requested=count,
            selected_ids=accumulated,
            pages_fetched=pages_fetched,
            partial=error is not None,
            exhausted=exhausted,
            error=error,
        )

    def _cancelled(self, count: int, pages_fetched: int) -> BulkResult:
        logger.warning(
            f"Bulk selection of {count} cancelled after {pages_fetched} pages; "
            "discarding accumulated ids"
        )
        return BulkResult(
            outcome=BulkOutcome.CANCELLED,
            requested=count,
            pages_fetched=pages_fetched,
        )
