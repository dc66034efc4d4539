"""Map a page-local selection report onto the global selection store."""

import logging
from collections.abc import Iterable

from artwork_selector.selection.store import SelectionStore

logger = logging.getLogger(__name__)


def reconcile_page_selection(
    store: SelectionStore,
    page_ids: Iterable[int],
    reported_ids: Iterable[int],
) -> tuple[set[int], set[int]]:
    """Bring the store in line with what the display reports for one page.

    Every id of the loaded page that appears in the report is added and
    every id of the loaded page missing from it is removed. Ids that do not
    belong to ``page_ids`` are never touched, including ids in the report
    that are not on the page.

    Args:
        store: Global selection store to update
        page_ids: Ids of the records on the currently loaded page
        reported_ids: Ids the display component now reports as selected

    Returns:
        Tuple of (ids newly added, ids removed)
    """
    reported = set(reported_ids)
    added: set[int] = set()
    removed: set[int] = set()

    for record_id in page_ids:
        if record_id in reported:
            if not store.has(record_id):
                added.add(record_id)
            store.add(record_id)
        else:
            if store.has(record_id):
                removed.add(record_id)
            store.remove(record_id)

    if added or removed:
        logger.debug(
            f"Reconciled page selection: +{len(added)} -{len(removed)} "
            f"({len(store)} selected)"
        )

    return added, removed
