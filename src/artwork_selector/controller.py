"""Table controller wiring pagination, fetching and selection together."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from artwork_selector.clients.exceptions import FetchError
from artwork_selector.pagination import DEFAULT_ROWS, PaginationState
from artwork_selector.selection import (
    BulkOutcome,
    BulkResult,
    BulkSelector,
    CancellationToken,
    PageFetcher,
    SelectionStore,
    reconcile_page_selection,
)
from schemas.artwork import Artwork
from schemas.record_page import RecordPage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableView:
    """Everything the display component needs for one render.

    Attributes:
        records: Artworks on the loaded page, in server order
        loading: True while a reload or bulk selection is running
        total_records: Total record count reported by the server
        first: Zero-based index of the first row on the page
        rows: Page size
        page: 1-based page number
        visible_selection: Records on the page whose id is selected
        selected_count: Size of the whole selection, across pages
        last_error: Message of the most recent failed fetch, if any
    """

    records: list[Artwork] = field(default_factory=list)
    loading: bool = False
    total_records: int = 0
    first: int = 0
    rows: int = DEFAULT_ROWS
    page: int = 1
    visible_selection: list[Artwork] = field(default_factory=list)
    selected_count: int = 0
    last_error: str | None = None


class TableController:
    """Orchestrates page loads, selection changes and bulk selection.

    Only one page of records is held at a time. Selections live in a
    SelectionStore keyed by record id and survive pagination.

    Overlapping operations follow cancel-and-restart: a new bulk selection,
    a page change or close() cancels any bulk selection still in flight,
    and the cancelled run discards what it had accumulated.

    Example:
        with ArtworksClient(config) as client:
            controller = TableController(client)
            controller.reload()
            controller.on_bulk_select_request(15)
            view = controller.view()
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        store: SelectionStore | None = None,
        pagination: PaginationState | None = None,
    ):
        self.fetcher = fetcher
        self.store = store if store is not None else SelectionStore()
        self.pagination = pagination if pagination is not None else PaginationState()
        self.bulk_selector = BulkSelector(fetcher, self.store)
        self.current_page: RecordPage | None = None
        self.last_error: str | None = None
        self._pending = 0
        self._bulk_token: CancellationToken | None = None

    @property
    def loading(self) -> bool:
        return self._pending > 0

    @property
    def records(self) -> list[Artwork]:
        if self.current_page is None:
            return []
        return list(self.current_page.records)

    def reload(self) -> bool:
        """Fetch the current page and replace the loaded records.

        On failure the previously loaded page stays in place.

        Returns:
            True if the page was fetched successfully
        """
        self._pending += 1
        try:
            page = self.fetcher.fetch_page(self.pagination.page, self.pagination.rows)
        except FetchError as e:
            logger.error(f"Error fetching page {self.pagination.page}: {e.message}")
            self.last_error = e.message
            return False
        finally:
            self._pending -= 1

        self.current_page = page
        self.pagination.total_records = page.total_records
        self.last_error = None
        return True

    def on_page_change(self, first_index: int, rows: int) -> bool:
        """Handle a page-change event from the display component.

        Returns:
            True if the position changed and the page was reloaded successfully
        """
        if not self.pagination.move_to(first_index, rows):
            return False

        self.cancel_bulk_selection()
        logger.debug(
            f"Moving to page {self.pagination.page} ({self.pagination.rows} rows)"
        )
        return self.reload()

    def on_selection_change(self, selected: Iterable[Artwork]) -> None:
        """Handle the display's report of which visible rows are selected."""
        reported_ids = [record.id for record in selected]
        page_ids = self.current_page.ids if self.current_page else []
        reconcile_page_selection(self.store, page_ids, reported_ids)

    def on_bulk_select_request(self, count: int | None) -> BulkResult:
        """Select the first `count` records starting at the current page.

        Any bulk selection already running is cancelled first, unless the
        request is a no-op. The page size in effect now is used for the
        whole run.
        """
        if not count or count <= 0:
            return self.bulk_selector.select_count(
                count, self.pagination.page, self.pagination.rows
            )

        self.cancel_bulk_selection()

        token = CancellationToken()
        self._bulk_token = token
        self._pending += 1
        try:
            result = self.bulk_selector.select_count(
                count,
                start_page=self.pagination.page,
                rows=self.pagination.rows,
                token=token,
            )
        finally:
            self._pending -= 1
            if self._bulk_token is token:
                self._bulk_token = None

        if result.error is not None:
            self.last_error = result.error
        elif result.outcome is BulkOutcome.COMPLETED and result.pages_fetched > 0:
            self.last_error = None
        return result

    def cancel_bulk_selection(self) -> bool:
        """Cancel the bulk selection in flight, if any.

        Returns:
            True if a running bulk selection was cancelled
        """
        if self._bulk_token is None:
            return False
        self._bulk_token.cancel()
        self._bulk_token = None
        return True

    def clear_selection(self) -> None:
        self.store.clear()

    def visible_selection(self) -> list[Artwork]:
        """Records on the loaded page whose id is in the selection store."""
        return [record for record in self.records if self.store.has(record.id)]

    def view(self) -> TableView:
        """Snapshot of the state to render."""
        return TableView(
            records=self.records,
            loading=self.loading,
            total_records=self.pagination.total_records,
            first=self.pagination.first_index,
            rows=self.pagination.rows,
            page=self.pagination.page,
            visible_selection=self.visible_selection(),
            selected_count=len(self.store),
            last_error=self.last_error,
        )

    def close(self) -> None:
        """Tear down the controller, cancelling any bulk selection in flight."""
        self.cancel_bulk_selection()
