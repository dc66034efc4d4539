"""Selection store holding selected record identifiers."""

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class SelectionStore:
    """Set of selected record ids, independent of the loaded page.

    Only identifiers are kept, never records, so memory grows with the
    number of ids ever selected rather than with the collection size.
    Pagination and fetches never clear the store.
    """

    def __init__(self, ids: Iterable[int] = ()):
        self._ids: set[int] = set(ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._ids

    def __repr__(self) -> str:
        return f"SelectionStore({len(self._ids)} selected)"

    def has(self, record_id: int) -> bool:
        return record_id in self._ids

    def add(self, record_id: int) -> None:
        self._ids.add(record_id)

    def add_many(self, record_ids: Iterable[int]) -> int:
        """Add several ids at once.

        Returns:
            Number of ids that were not already selected
        """
        before = len(self._ids)
        self._ids.update(record_ids)
        added = len(self._ids) - before
        logger.debug(f"Added {added} ids to selection ({len(self._ids)} total)")
        return added

    def remove(self, record_id: int) -> None:
        self._ids.discard(record_id)

    def clear(self) -> None:
        self._ids.clear()

    def all(self) -> frozenset[int]:
        """Read-only snapshot of every selected id."""
        return frozenset(self._ids)
