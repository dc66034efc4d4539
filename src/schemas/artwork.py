"""Art Institute of Chicago artwork list schemas."""

from pydantic import BaseModel


class Artwork(BaseModel):
    """A single artwork record as returned by the artworks list endpoint."""

    id: int
    title: str
    place_of_origin: str | None
    artist_display: str
    inscriptions: str | None = None
    date_start: int | None
    date_end: int | None

    model_config = {"extra": "allow", "frozen": True}


class ApiPagination(BaseModel):
    """Pagination block of a list response."""

    total: int
    limit: int
    offset: int
    total_pages: int
    current_page: int

    model_config = {"extra": "allow"}


class ArtworksResponse(BaseModel):
    """Envelope of a GET /api/v1/artworks response."""

    pagination: ApiPagination
    data: list[Artwork] = []

    model_config = {"extra": "allow"}
