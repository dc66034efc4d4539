"""Record page domain object."""

from dataclasses import dataclass, field

from schemas.artwork import Artwork


@dataclass(frozen=True)
class RecordPage:
    """One server-paginated batch of artworks.

    Attributes:
        page_number: 1-based page number the batch was fetched for
        rows: Page size the batch was requested with
        total_records: Total record count reported by the server at fetch time
        records: Artworks in server order
    """

    page_number: int
    rows: int
    total_records: int
    records: list[Artwork] = field(default_factory=list)

    @property
    def ids(self) -> list[int]:
        return [record.id for record in self.records]

    @property
    def first_index(self) -> int:
        """Zero-based index of the first record of this page in the collection."""
        return (self.page_number - 1) * self.rows

    @property
    def is_last(self) -> bool:
        """True when no records exist beyond this page."""
        if len(self.records) < self.rows:
            return True
        return self.first_index + len(self.records) >= self.total_records
