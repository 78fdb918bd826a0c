"""
Tests for federated search across several indices.
"""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from hitmerge.config.errors import (
    InvalidResultsError,
    MissingRankingSettingError,
    SearchServiceError,
)
from hitmerge.domains.ranking import ResultMerger

from .federated_search import FederatedSearch
from .models import FederatedResults


def make_hit(object_id: str, words: int, popularity: int) -> dict[str, Any]:
    return {
        "objectID": object_id,
        "popularity": popularity,
        "_rankingInfo": {
            "nbTypos": 0,
            "geoDistance": 0,
            "words": words,
            "filters": 0,
            "nbExactWords": 0,
            "proximityDistance": 0,
            "firstMatchedWord": 0,
        },
    }


def make_response(index: str, hits: list[dict[str, Any]], time_ms: int = 1) -> dict[str, Any]:
    return {
        "hits": hits,
        "nbHits": len(hits),
        "page": 0,
        "nbPages": 1,
        "hitsPerPage": 20,
        "processingTimeMS": time_ms,
        "index": index,
    }


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create a mock search client over two indices."""
    mock = AsyncMock()
    mock.get_settings.return_value = {
        "ranking": ["words", "custom"],
        "customRanking": ["desc(popularity)"],
    }
    responses = {
        "products": make_response(
            "products",
            [make_hit("A", 2, 10), make_hit("C", 1, 50)],
            time_ms=4,
        ),
        "archive": make_response(
            "archive",
            [make_hit("B", 2, 3), make_hit("C", 1, 50)],
            time_ms=9,
        ),
    }

    async def search(index: str, query: str, params: dict[str, Any] | None = None) -> dict:
        return responses[index]

    mock.search.side_effect = search
    return mock


async def test_federated_search_merges(mock_client: AsyncMock) -> None:
    """Test hits from both indices are merged by ranking."""
    federated = FederatedSearch(mock_client, ["products", "archive"])
    results = await federated.search("drill")

    assert isinstance(results, FederatedResults)
    assert results.object_ids == ["A", "B", "C"]
    assert results.nb_hits == 4
    assert results.processing_time_ms == 9
    assert set(results.results) == {"products", "archive"}


async def test_federated_search_requests_ranking_info(mock_client: AsyncMock) -> None:
    federated = FederatedSearch(mock_client, ["products", "archive"])
    await federated.search("drill", hitsPerPage=5)

    assert mock_client.search.await_count == 2
    for call in mock_client.search.await_args_list:
        index, query, params = call.args
        assert query == "drill"
        assert params == {"hitsPerPage": 5, "getRankingInfo": 1}


async def test_formula_loaded_once_from_primary(mock_client: AsyncMock) -> None:
    federated = FederatedSearch(mock_client, ["products", "archive"])
    await federated.search("drill")
    await federated.search("saw")

    mock_client.get_settings.assert_awaited_once_with("products")


async def test_prebuilt_merger_skips_settings(mock_client: AsyncMock) -> None:
    merger = ResultMerger.from_settings({"ranking": ["words"], "customRanking": []})
    federated = FederatedSearch(mock_client, ["products", "archive"], merger=merger)

    assert await federated.load_merger() is merger
    mock_client.get_settings.assert_not_called()


async def test_invalid_settings_abort(mock_client: AsyncMock) -> None:
    mock_client.get_settings.return_value = {"ranking": ["words"]}
    federated = FederatedSearch(mock_client, ["products"])

    with pytest.raises(MissingRankingSettingError):
        await federated.search("drill")
    mock_client.search.assert_not_called()


async def test_service_failure_aborts(mock_client: AsyncMock) -> None:
    """Test one failing index fails the whole search."""
    mock_client.search.side_effect = SearchServiceError("boom")
    federated = FederatedSearch(mock_client, ["products", "archive"])

    with pytest.raises(SearchServiceError):
        await federated.search("drill")


async def test_invalid_response_aborts(mock_client: AsyncMock) -> None:
    mock_client.search.side_effect = None
    mock_client.search.return_value = {"hits": []}
    federated = FederatedSearch(mock_client, ["products"])

    with pytest.raises(InvalidResultsError):
        await federated.search("drill")


def test_requires_an_index(mock_client: AsyncMock) -> None:
    with pytest.raises(ValueError):
        FederatedSearch(mock_client, [])


async def test_service_failure_cancels_other_queries(mock_client: AsyncMock) -> None:
    """Test a failing index cancels the queries still in flight."""
    cancelled = asyncio.Event()

    async def search(index: str, query: str, params: dict[str, Any] | None = None) -> dict:
        if index == "products":
            raise SearchServiceError("boom")
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return make_response(index, [])

    mock_client.search.side_effect = search
    federated = FederatedSearch(mock_client, ["archive", "products"])

    with pytest.raises(SearchServiceError):
        await asyncio.wait_for(federated.search("drill"), timeout=5)
    assert cancelled.is_set()
