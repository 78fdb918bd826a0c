"""
Federated Search - One query across several indices, merged by ranking.

Features:
- Ranking formula loaded once from the primary index settings
- Concurrent queries (asyncio.gather), ranking info always requested
- Ranking-aware merge of the per-index hit lists
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from hitmerge.domains.ranking import ResultMerger
from hitmerge.domains.results import SearchResults

from .contracts import SearchClient
from .models import FederatedResults

logger = logging.getLogger(__name__)

__all__ = ["FederatedSearch"]


class FederatedSearch:
    """
    Search several indices sharing one ranking formula and merge the hits.

    Example:
        >>> federated = FederatedSearch(client, ["products", "products_archive"])
        >>> results = await federated.search("drill", hitsPerPage=20)
        >>> results.object_ids
    """

    def __init__(
        self,
        client: SearchClient,
        indices: Sequence[str],
        merger: ResultMerger | None = None,
    ) -> None:
        """
        Initialize federated search.

        Args:
            client: Search service client
            indices: Index names; the first one's settings give the formula,
                and earlier indices win ties
            merger: Pre-built merger, skips fetching settings
        """
        if not indices:
            raise ValueError("At least one index is required")
        self._client = client
        self._indices = list(indices)
        self._merger = merger
        self._lock = asyncio.Lock()

    @property
    def indices(self) -> list[str]:
        return list(self._indices)

    async def load_merger(self) -> ResultMerger:
        """Get the merger, fetching the primary index settings on first use."""
        async with self._lock:
            if self._merger is None:
                primary = self._indices[0]
                settings = await self._client.get_settings(primary)
                self._merger = ResultMerger.from_settings(settings)
                logger.info(
                    "Loaded ranking formula from %s: %s", primary, self._merger.formula
                )
        return self._merger

    async def search(self, query: str, **params: Any) -> FederatedResults:
        """
        Run the query on every index and merge the hits.

        Args:
            query: Query text
            **params: Extra search parameters sent to every index

        Returns:
            Merged results

        Raises:
            HitMergeError: settings, transport, decoding or merge failure;
                no partial results are returned
        """
        merger = await self.load_merger()
        request_params = {**params, "getRankingInfo": 1}

        logger.info(
            "Federated search: query='%s' over %d indices",
            query[:50],
            len(self._indices),
        )
        raw_responses = await self._query_all(query, request_params)
        responses = [SearchResults.decode(raw) for raw in raw_responses]

        hits = merger.merge_all([response.hits for response in responses])

        return FederatedResults(
            query=query,
            hits=hits,
            nb_hits=sum(response.total_hits_count for response in responses),
            processing_time_ms=max(response.processing_time_ms for response in responses),
            results=dict(zip(self._indices, responses)),
        )

    async def _query_all(self, query: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Query every index concurrently; the first failure cancels the rest."""
        tasks = [
            asyncio.ensure_future(self._client.search(index, query, params))
            for index in self._indices
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
