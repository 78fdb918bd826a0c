"""
Results Models - Decoded search responses.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from hitmerge.config.errors import InvalidResultsError
from hitmerge.domains.ranking.models import RankingInfo

__all__ = ["FacetStats", "ResponseRankingInfo", "SearchResults"]

_RESPONSE_RANKING_KEYS = (
    "serverUsed",
    "indexUsed",
    "parsedQuery",
    "timeoutCounts",
    "timeoutHits",
)


class FacetStats(BaseModel):
    """Statistics for a numerical facet."""

    min: float
    max: float
    avg: float
    sum: float

    model_config = ConfigDict(frozen=True)


class ResponseRankingInfo(BaseModel):
    """Request-level diagnostics sent when ranking info is requested."""

    server_used: str = Field(..., alias="serverUsed")
    index_used: str = Field(..., alias="indexUsed")
    parsed_query: str = Field(..., alias="parsedQuery")
    timeout_counts: bool = Field(..., alias="timeoutCounts")
    timeout_hits: bool = Field(..., alias="timeoutHits")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SearchResults(BaseModel):
    """One search response from a single index."""

    hits: list[dict[str, Any]]
    total_hits_count: int = Field(..., alias="nbHits")
    page: int
    pages_count: int = Field(..., alias="nbPages")
    hits_per_page: int = Field(..., alias="hitsPerPage")
    processing_time_ms: int = Field(..., alias="processingTimeMS")
    query: str | None = None
    query_id: str | None = Field(default=None, alias="queryID")
    index: str | None = None
    are_facets_count_exhaustive: bool = Field(default=True, alias="exhaustiveFacetsCount")
    message: str | None = None
    query_after_removal: str | None = Field(default=None, alias="queryAfterRemoval")
    around_lat_lng: str | None = Field(default=None, alias="aroundLatLng")
    automatic_radius: int | None = Field(default=None, alias="automaticRadius")
    facets: dict[str, dict[str, int]] = Field(default_factory=dict)
    facet_stats: dict[str, FacetStats] = Field(default_factory=dict, alias="facets_stats")

    # Flat in the response; grouped here when the server sent it
    ranking_info: ResponseRankingInfo | None = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _group_ranking_info(cls, data: Any) -> Any:
        if isinstance(data, dict) and "serverUsed" in data and "ranking_info" not in data:
            info = {key: data[key] for key in _RESPONSE_RANKING_KEYS if key in data}
            data = {**data, "ranking_info": info}
        return data

    @classmethod
    def decode(cls, payload: Any) -> SearchResults:
        """
        Decode a raw search response.

        Raises:
            InvalidResultsError: payload is not a valid search response
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise InvalidResultsError(
                "Invalid search response",
                {"errors": exc.errors(include_url=False, include_input=False)},
            ) from exc

    def raw_hits(self) -> list[dict[str, Any]]:
        return list(self.hits)

    def facet_options(self, facet_name: str) -> dict[str, int] | None:
        """Value counts of a facet, if it was requested."""
        return self.facets.get(facet_name)

    def facet_stats_for(self, facet_name: str) -> FacetStats | None:
        return self.facet_stats.get(facet_name)

    def ranking_infos(self) -> list[RankingInfo | None]:
        """Ranking information of every hit, None where absent."""
        return [RankingInfo.of(hit) for hit in self.hits]
