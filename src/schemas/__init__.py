"""Schema definitions for Artwork Selector."""

from .artwork import ApiPagination, Artwork, ArtworksResponse
from .record_page import RecordPage

__all__ = [
    "ApiPagination",
    "Artwork",
    "ArtworksResponse",
    "RecordPage",
]
