"""Tests for BulkSelector and the accumulation step."""

import math

import pytest

from artwork_selector.clients import APIError
from artwork_selector.selection import (
    BulkOutcome,
    BulkSelector,
    CancellationToken,
    SelectionStore,
    accumulate,
)
from schemas.record_page import RecordPage


class TestAccumulate:
    """Tests for the pure accumulate() step."""

    def test_takes_front_of_page(self, collection):
        """Ids are taken from the front of the page in server order."""
        page = collection.fetch_page(1, 12)

        assert accumulate((), page, 5) == (1, 2, 3, 4, 5)

    def test_extends_existing_accumulator(self, collection):
        """accumulate() appends to what was already gathered."""
        page = collection.fetch_page(2, 12)

        result = accumulate(tuple(range(1, 13)), page, 15)

        assert result == tuple(range(1, 16))

    def test_target_already_reached(self, collection):
        """A full accumulator is returned unchanged."""
        page = collection.fetch_page(2, 12)
        accumulated = (1, 2, 3)

        assert accumulate(accumulated, page, 3) is accumulated

    def test_short_page(self):
        """A page with fewer ids than needed yields all of them."""
        page = RecordPage(page_number=1, rows=12, total_records=0)

        assert accumulate((1,), page, 10) == (1,)


class TestBulkSelectorScenarios:
    """Concrete bulk selection scenarios with a page size of 12."""

    def test_select_within_first_page(self, collection):
        """Selecting 5 on page 1 fetches one page and takes its first 5 ids."""
        store = SelectionStore()
        selector = BulkSelector(collection, store)

        result = selector.select_count(5, start_page=1, rows=12)

        assert collection.calls == [(1, 12)]
        assert store.all() == frozenset({1, 2, 3, 4, 5})
        assert result.selected_ids == (1, 2, 3, 4, 5)
        assert result.outcome is BulkOutcome.COMPLETED
        assert result.succeeded

    def test_select_across_two_pages(self, collection):
        """Selecting 15 on page 1 takes all of page 1 and 3 ids of page 2."""
        store = SelectionStore()
        selector = BulkSelector(collection, store)

        result = selector.select_count(15, start_page=1, rows=12)

        assert collection.pages_fetched == [1, 2]
        assert len(store) == 15
        assert store.all() == frozenset(range(1, 16))
        assert result.pages_fetched == 2

    def test_failure_keeps_earlier_pages(self, make_collection):
        """A failed fetch of page 2 keeps the 12 ids from page 1."""
        collection = make_collection(total=100, fail_pages={2})
        store = SelectionStore()
        selector = BulkSelector(collection, store)

        result = selector.select_count(15, start_page=1, rows=12)

        assert store.all() == frozenset(range(1, 13))
        assert selector.loading is False
        assert result.outcome is BulkOutcome.COMPLETED
        assert result.partial is True
        assert result.succeeded is False
        assert "page 2" in result.error

    def test_request_more_than_available(self, make_collection):
        """Asking for 100 of 20 records selects all 20 in two fetches."""
        collection = make_collection(total=20)
        store = SelectionStore()
        selector = BulkSelector(collection, store)

        result = selector.select_count(100, start_page=1, rows=12)

        assert collection.pages_fetched == [1, 2]
        assert len(store) == 20
        assert result.exhausted is True
        assert result.partial is False
        assert result.error is None

    def test_collection_ending_on_page_boundary(self, make_collection):
        """No extra fetch is made when the last page is exactly full."""
        collection = make_collection(total=24)
        selector = BulkSelector(collection, SelectionStore())

        result = selector.select_count(100, start_page=1, rows=12)

        assert collection.pages_fetched == [1, 2]
        assert len(result.selected_ids) == 24


class TestBulkSelectorProperties:
    """Page and id counts across positions and page sizes."""

    @pytest.mark.parametrize(
        "total,rows,start_page,count",
        [
            (100, 12, 1, 5),
            (100, 12, 1, 15),
            (100, 10, 2, 10),
            (100, 7, 3, 30),
            (100, 1, 1, 4),
            (50, 10, 5, 3),
            (25, 10, 2, 100),
            (20, 12, 1, 100),
        ],
    )
    def test_selects_first_available_ids_from_start_page(
        self, make_collection, total, rows, start_page, count
    ):
        """min(count, available) ids are selected from ceil(that / rows) pages."""
        collection = make_collection(total=total)
        store = SelectionStore()
        selector = BulkSelector(collection, store)

        result = selector.select_count(count, start_page=start_page, rows=rows)

        first = (start_page - 1) * rows
        expected = min(count, total - first)
        assert result.selected_ids == tuple(range(first + 1, first + expected + 1))
        assert store.all() == frozenset(result.selected_ids)
        assert collection.pages_fetched == list(
            range(start_page, start_page + math.ceil(expected / rows))
        )

    @pytest.mark.parametrize("count", [0, None, -3])
    def test_no_op_counts(self, collection, count):
        """A zero, missing or negative count performs no fetch."""
        store = SelectionStore([42])
        selector = BulkSelector(collection, store)

        result = selector.select_count(count, start_page=1, rows=12)

        assert collection.calls == []
        assert store.all() == frozenset({42})
        assert result.outcome is BulkOutcome.COMPLETED
        assert result.selected_ids == ()
        assert result.requested == 0

    def test_existing_selection_is_kept(self, collection):
        """Bulk selection adds to, and never replaces, earlier selections."""
        store = SelectionStore([99, 3])
        selector = BulkSelector(collection, store)

        selector.select_count(5, start_page=1, rows=12)

        assert store.all() == frozenset({1, 2, 3, 4, 5, 99})

    def test_fetches_are_sequential(self, make_collection):
        """Only one fetch is outstanding at a time."""
        in_flight = []

        class TrackingCollection(make_collection):
            def fetch_page(self, page, rows):
                in_flight.append(page)
                assert len(in_flight) == 1
                try:
                    return super().fetch_page(page, rows)
                finally:
                    in_flight.remove(page)

        selector = BulkSelector(TrackingCollection(total=100), SelectionStore())

        result = selector.select_count(40, start_page=1, rows=12)

        assert result.pages_fetched == 4

    @pytest.mark.parametrize("start_page,rows", [(0, 12), (1, 0)])
    def test_rejects_invalid_position(self, collection, start_page, rows):
        """start_page and rows must be at least 1."""
        selector = BulkSelector(collection, SelectionStore())

        with pytest.raises(ValueError):
            selector.select_count(5, start_page=start_page, rows=rows)


class TestBulkSelectorFailures:
    """Tests for fetch failures during bulk selection."""

    def test_failure_on_first_page(self, make_collection):
        """A failure before any page arrives selects nothing."""
        collection = make_collection(total=100, fail_pages={1})
        store = SelectionStore([7])
        selector = BulkSelector(collection, store)

        result = selector.select_count(30, start_page=1, rows=12)

        assert store.all() == frozenset({7})
        assert result.pages_fetched == 0
        assert result.partial is True
        assert result.exhausted is False

    def test_failure_stops_the_loop(self, make_collection):
        """No page after the failed one is fetched."""
        collection = make_collection(total=100, fail_pages={2})
        selector = BulkSelector(collection, SelectionStore())

        selector.select_count(50, start_page=1, rows=12)

        assert collection.pages_fetched == [1, 2]

    def test_api_error_is_handled(self):
        """Any FetchError subclass ends the run without propagating."""

        class FailingCollection:
            def fetch_page(self, page, rows):
                raise APIError("API error 503", status_code=503)

        selector = BulkSelector(FailingCollection(), SelectionStore())

        result = selector.select_count(5, start_page=1, rows=12)

        assert result.error == "API error 503"

    def test_unexpected_errors_propagate(self, make_collection):
        """Errors that are not fetch failures propagate and clear loading."""

        def explode(page):
            raise RuntimeError("boom")

        selector = BulkSelector(make_collection(total=100, on_fetch=explode), SelectionStore())

        with pytest.raises(RuntimeError):
            selector.select_count(5, start_page=1, rows=12)

        assert selector.loading is False

    def test_failure_is_logged(self, make_collection, caplog):
        """A failed fetch leaves a logged diagnostic."""
        collection = make_collection(total=100, fail_pages={2})
        selector = BulkSelector(collection, SelectionStore())

        selector.select_count(15, start_page=1, rows=12)

        assert "Bulk selection stopped at page 2" in caplog.text


class TestBulkSelectorLoading:
    """Tests for the loading flag."""

    def test_loading_during_run(self, make_collection):
        """loading is true while pages are being fetched."""
        observed = []
        collection = make_collection(total=100)
        selector = BulkSelector(collection, SelectionStore())
        collection.on_fetch = lambda page: observed.append(selector.loading)

        selector.select_count(15, start_page=1, rows=12)

        assert observed == [True, True]
        assert selector.loading is False


class TestBulkSelectorCancellation:
    """Tests for cancelling a bulk selection."""

    def test_cancelled_before_start(self, collection):
        """A token cancelled up front prevents every fetch."""
        token = CancellationToken()
        token.cancel()
        store = SelectionStore()
        selector = BulkSelector(collection, store)

        result = selector.select_count(15, start_page=1, rows=12, token=token)

        assert result.outcome is BulkOutcome.CANCELLED
        assert collection.calls == []
        assert len(store) == 0

    def test_cancel_mid_run_discards_accumulated_ids(self, make_collection):
        """Cancelling while a page is in flight stops before the next fetch."""
        token = CancellationToken()
        collection = make_collection(
            total=100, on_fetch=lambda page: token.cancel() if page == 2 else None
        )
        store = SelectionStore([500])
        selector = BulkSelector(collection, store)

        result = selector.select_count(40, start_page=1, rows=12, token=token)

        assert collection.pages_fetched == [1, 2]
        assert result.outcome is BulkOutcome.CANCELLED
        assert result.selected_ids == ()
        assert result.pages_fetched == 2
        assert store.all() == frozenset({500})
        assert selector.loading is False

    def test_cancel_during_last_fetch_commits_nothing(self, make_collection):
        """A cancel arriving during the final fetch still discards the run."""
        token = CancellationToken()
        collection = make_collection(
            total=100, on_fetch=lambda page: token.cancel() if page == 2 else None
        )
        store = SelectionStore()
        selector = BulkSelector(collection, store)

        result = selector.select_count(24, start_page=1, rows=12, token=token)

        assert result.outcome is BulkOutcome.CANCELLED
        assert len(store) == 0

    def test_token_repr(self):
        """CancellationToken reports its state."""
        token = CancellationToken()

        assert repr(token) == "CancellationToken(cancelled=False)"
        token.cancel()
        assert token.cancelled is True
