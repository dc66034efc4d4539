"""Selection state: store, page reconciler and cross-page bulk selector."""

from .bulk import (
    BulkOutcome,
    BulkResult,
    BulkSelector,
    CancellationToken,
    PageFetcher,
    accumulate,
)
from .reconciler import reconcile_page_selection
from .store import SelectionStore

__all__ = [
    "BulkOutcome",
    "BulkResult",
    "BulkSelector",
    "CancellationToken",
    "PageFetcher",
    "SelectionStore",
    "accumulate",
    "reconcile_page_selection",
]
