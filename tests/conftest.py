"""Pytest fixtures for Artwork Selector tests."""

import pytest

from artwork_selector.clients import ConnectionError
from schemas.artwork import Artwork
from schemas.record_page import RecordPage


def make_artwork_record(record_id: int, **overrides) -> dict:
    """Build a raw artwork record as returned by the artworks endpoint."""
    record = {
        "id": record_id,
        "title": f"Artwork {record_id}",
        "place_of_origin": "France",
        "artist_display": "Claude Monet\nFrench, 1840-1926",
        "inscriptions": None,
        "date_start": 1890,
        "date_end": 1891,
    }
    record.update(overrides)
    return record


class FakeCollection:
    """In-memory stand-in for the artworks endpoint.

    Records have ids 1..total in server order. Pages listed in
    `fail_pages` raise ConnectionError. `on_fetch` is called with the page
    number before each fetch, to simulate events arriving mid-request.
    """

    def __init__(self, total: int, fail_pages=(), on_fetch=None):
        self.total = total
        self.fail_pages = set(fail_pages)
        self.on_fetch = on_fetch
        self.calls: list[tuple[int, int]] = []

    def fetch_page(self, page: int, rows: int) -> RecordPage:
        self.calls.append((page, rows))
        if self.on_fetch is not None:
            self.on_fetch(page)
        if page in self.fail_pages:
            raise ConnectionError(f"Connection failed: page {page}")

        start = (page - 1) * rows
        ids = range(start + 1, min(start + rows, self.total) + 1)
        return RecordPage(
            page_number=page,
            rows=rows,
            total_records=self.total,
            records=[Artwork.model_validate(make_artwork_record(i)) for i in ids],
        )

    @property
    def pages_fetched(self) -> list[int]:
        return [page for page, _ in self.calls]


@pytest.fixture
def sample_artwork_record():
    """Sample artwork record matching the artworks list endpoint."""
    return {
        "id": 27992,
        "title": "A Sunday on La Grande Jatte — 1884",
        "place_of_origin": "France",
        "artist_display": "Georges Seurat\nFrench, 1859-1891",
        "inscriptions": "Signed lower right: Seurat",
        "date_start": 1884,
        "date_end": 1886,
    }


@pytest.fixture
def sample_artworks_payload(sample_artwork_record):
    """Sample response body of GET /api/v1/artworks."""
    return {
        "pagination": {
            "total": 129884,
            "limit": 12,
            "offset": 0,
            "total_pages": 10824,
            "current_page": 1,
        },
        "data": [sample_artwork_record],
    }


@pytest.fixture
def collection():
    """A 100-record collection that never fails."""
    return FakeCollection(total=100)


@pytest.fixture
def make_collection():
    """Factory for FakeCollection instances."""
    return FakeCollection
