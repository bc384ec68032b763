"""Semantic search client.

Pass-through to the AI search service: ``POST /search {query[, folder_id]}``.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from .errors import SearchUnavailableError


class SearchResponse(BaseModel):
    """Body of a ``/search`` response. Extra keys are ignored."""

    results: list[dict[str, Any]] | None = None


class SearchClient:
    """Async client for the semantic search service.

    Example:
        async with SearchClient("http://localhost:5000") as search:
            results = await search.search("tax receipts from 2023")
    """

    def __init__(self, base_url: str, *, timeout: float = 30.0):
        """Create a search client.

        Args:
            base_url: Base URL of the search service
            timeout: Request timeout in seconds (default: 30.0)
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def search(self, query: str, folder_id: str | None = None) -> list[dict[str, Any]]:
        """Run a semantic search.

        Args:
            query: Natural language query
            folder_id: Restrict results to one folder (optional)

        Returns:
            Result objects as returned by the service

        Raises:
            SearchUnavailableError: Service unreachable or returned an error
        """
        try:
            body: dict[str, Any] = {"query": query}
            if folder_id is not None:
                body["folder_id"] = folder_id
            response = await self._client.post("/search", json=body)
            response.raise_for_status()
            return SearchResponse.model_validate(response.json()).results or []
        except httpx.HTTPStatusError as e:
            raise SearchUnavailableError(
                f"Search failed: {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise SearchUnavailableError(f"Request failed: {e}") from e
        except (ValidationError, ValueError) as e:
            raise SearchUnavailableError(f"Invalid search response: {e}") from e

    async def close(self) -> None:
        """Close the client connection."""
        await self._client.aclose()

    async def __aenter__(self) -> "SearchClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
