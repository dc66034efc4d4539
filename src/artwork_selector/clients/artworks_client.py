"""Artworks API client for the Art Institute of Chicago collection."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from schemas.artwork import ArtworksResponse
from schemas.record_page import RecordPage

from .client import Client
from .exceptions import FetchError, ValidationError

logger = logging.getLogger(__name__)


class ArtworksClient(Client):
    """Record page fetcher for the public artworks list endpoint.

    Each call to fetch_page() performs exactly one GET request with
    ``page`` and ``limit`` query parameters and validates the payload
    against the ArtworksResponse schema.

    Example:
        config = {"base_url": "https://api.artic.edu"}
        with ArtworksClient(config) as client:
            page = client.fetch_page(1, 12)
    """

    API_PATH = "/api/v1/artworks"

    @property
    def fields(self) -> list[str]:
        return list(self._config.get("fields", []))

    def fetch_page(self, page: int, rows: int) -> RecordPage:
        """Fetch a single page of artworks.

        Args:
            page: 1-based page number
            rows: Page size

        Returns:
            The fetched RecordPage

        Raises:
            ValueError: If page or rows is not a positive integer
            ValidationError: If the response fails schema validation
            APIError: If the API returns a non-2xx response
            ConnectionError: If the network connection fails or times out
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if rows < 1:
            raise ValueError(f"rows must be >= 1, got {rows}")

        try:
            response = self.get(self.API_PATH, params=self._build_params(page, rows))
        except FetchError as e:
            e.page = page
            raise

        try:
            data = response.json()
        except ValueError as e:
            raise ValidationError(f"Page {page} returned invalid JSON", page=page) from e
        payload = self._validate_payload(data, page)

        logger.debug(
            f"Fetched page {page} ({len(payload.data)} records, "
            f"{payload.pagination.total} total)"
        )

        return RecordPage(
            page_number=page,
            rows=rows,
            total_records=payload.pagination.total,
            records=list(payload.data),
        )

    def _build_params(self, page: int, rows: int) -> dict[str, Any]:
        """Build query parameters for the artworks list request.

        The list endpoint uses:
        - page: Page number (1-indexed)
        - limit: Items per page
        - fields: Optional comma-separated list of fields to return
        """
        params: dict[str, Any] = {
            "page": page,
            "limit": rows,
        }
        if self.fields:
            params["fields"] = ",".join(self.fields)
        return params

    def _validate_payload(self, data: Any, page: int) -> ArtworksResponse:
        """Validate a raw response body against the ArtworksResponse schema.

        Raises:
            ValidationError: If the body does not match the schema
        """
        try:
            return ArtworksResponse.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Page {page} failed validation",
                page=page,
                errors=[str(err) for err in e.errors()],
            ) from e
