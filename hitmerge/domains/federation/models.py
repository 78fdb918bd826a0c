"""
Federation Models - Results of a query run across several indices.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hitmerge.domains.results import SearchResults


class FederatedResults(BaseModel):
    """Merged hits plus the per-index responses they came from."""

    query: str
    hits: list[dict[str, Any]]
    nb_hits: int = 0
    processing_time_ms: int = 0
    results: dict[str, SearchResults] = Field(default_factory=dict)

    @property
    def object_ids(self) -> list[str | None]:
        return [hit.get("objectID") for hit in self.hits]
