"""
Federation Contracts - Boundary to the search service.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SearchClient(Protocol):
    """Contract for fetching index settings and running queries."""

    async def get_settings(self, index: str) -> dict[str, Any]:
        """Fetch the settings of an index."""
        ...

    async def search(
        self,
        index: str,
        query: str,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run one query against one index and return the raw response."""
        ...
