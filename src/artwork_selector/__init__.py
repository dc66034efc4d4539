"""Artwork Selector - cross-page selection over a server-paginated collection."""

__version__ = "0.1.0"
