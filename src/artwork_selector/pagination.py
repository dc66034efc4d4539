"""Pagination state for a server-paginated table."""

from dataclasses import dataclass

DEFAULT_ROWS = 12


@dataclass
class PaginationState:
    """Current position within the remote collection.

    Attributes:
        page: 1-based page number
        rows: Page size
        total_records: Total record count from the most recent fetch
    """

    page: int = 1
    rows: int = DEFAULT_ROWS
    total_records: int = 0

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.rows < 1:
            raise ValueError(f"rows must be >= 1, got {self.rows}")

    @property
    def first_index(self) -> int:
        """Zero-based index of the first row shown on the current page."""
        return self.rows * (self.page - 1)

    @property
    def total_pages(self) -> int:
        return -(-self.total_records // self.rows)

    def move_to(self, first_index: int, rows: int) -> bool:
        """Apply a page-change event from the display component.

        Args:
            first_index: Zero-based index of the first row to display
            rows: Rows per page requested by the display component

        Returns:
            True if page or rows changed and a reload is needed
        """
        if rows < 1:
            raise ValueError(f"rows must be >= 1, got {rows}")
        if first_index < 0:
            raise ValueError(f"first_index must be >= 0, got {first_index}")

        page = first_index // rows + 1
        if page == self.page and rows == self.rows:
            return False

        self.page = page
        self.rows = rows
        return True
