"""Network clients for the remote artwork collection."""

from .artworks_client import ArtworksClient
from .client import Client
from .exceptions import (
    APIError,
    ConnectionError,
    FetchError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ValidationError,
)

__all__ = [
    "Client",
    "ArtworksClient",
    "FetchError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "RequestTimeoutError",
    "NotFoundError",
    "ValidationError",
]
