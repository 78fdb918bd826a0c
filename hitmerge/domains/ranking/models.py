"""
Ranking Models - Data types for the ranking domain.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hitmerge.config.errors import (
    ErrorCode,
    InvalidConfigurationError,
    MissingRankingInfoError,
)

__all__ = [
    "Ordering",
    "SortDirection",
    "RankingCriterion",
    "CustomSortCriterion",
    "RankingInfo",
    "Hit",
    "RANKING_INFO_KEY",
]

# A hit is a decoded JSON object.
Hit = Mapping[str, Any]

RANKING_INFO_KEY = "_rankingInfo"

_SORT_CRITERION_PATTERN = re.compile(r"(asc|desc)\(([^)]+)\)")


class Ordering(IntEnum):
    """Result of comparing two hits. LESS sorts first."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class SortDirection(str, Enum):
    """Sort direction of a criterion."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    def compare(self, lhs: int, rhs: int) -> Ordering:
        """Compare two values, best first according to this direction."""
        if lhs == rhs:
            return Ordering.EQUAL
        if lhs < rhs:
            return Ordering.LESS if self is SortDirection.ASCENDING else Ordering.GREATER
        return Ordering.GREATER if self is SortDirection.ASCENDING else Ordering.LESS


class RankingCriterion(str, Enum):
    """
    Ranking criterion in a ranking formula.

    Built-in criteria compare one ranking signal in a fixed direction.
    ``custom`` has no direction of its own: it defers to the custom ranking.
    """

    TYPO = "typo"
    GEO = "geo"
    WORDS = "words"
    FILTERS = "filters"
    EXACT = "exact"
    PROXIMITY = "proximity"
    ATTRIBUTE = "attribute"
    CUSTOM = "custom"

    @property
    def direction(self) -> SortDirection | None:
        """Fixed direction of a built-in criterion, None for ``custom``."""
        return _FIXED_DIRECTIONS.get(self)

    @property
    def signal(self) -> str | None:
        """Name of the RankingInfo field this criterion compares."""
        return _SIGNALS.get(self)


_FIXED_DIRECTIONS: dict[RankingCriterion, SortDirection] = {
    RankingCriterion.TYPO: SortDirection.ASCENDING,
    RankingCriterion.GEO: SortDirection.ASCENDING,
    RankingCriterion.WORDS: SortDirection.DESCENDING,
    RankingCriterion.FILTERS: SortDirection.DESCENDING,
    RankingCriterion.EXACT: SortDirection.DESCENDING,
    RankingCriterion.PROXIMITY: SortDirection.ASCENDING,
    RankingCriterion.ATTRIBUTE: SortDirection.ASCENDING,
}

_SIGNALS: dict[RankingCriterion, str] = {
    RankingCriterion.TYPO: "number_of_typos",
    RankingCriterion.GEO: "geo_distance",
    RankingCriterion.WORDS: "matched_words",
    RankingCriterion.FILTERS: "filters_score",
    RankingCriterion.EXACT: "exact_words",
    RankingCriterion.PROXIMITY: "proximity_distance",
    RankingCriterion.ATTRIBUTE: "first_matched_word_position",
}


class CustomSortCriterion(BaseModel):
    """Sort criterion of the custom ranking, e.g. ``desc(popularity)``."""

    attribute: str = Field(..., min_length=1)
    direction: SortDirection

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, text: str) -> CustomSortCriterion:
        """
        Parse a sort criterion from its string representation.

        Args:
            text: ``asc(<attribute>)`` or ``desc(<attribute>)``, nothing around it

        Returns:
            The corresponding sort criterion

        Raises:
            InvalidConfigurationError: text is not one of the two forms
        """
        match = _SORT_CRITERION_PATTERN.fullmatch(text)
        if match is None:
            raise InvalidConfigurationError(
                f'Invalid sort criterion "{text}"',
                {"value": text},
                code=ErrorCode.RANKING_INVALID_SORT_CRITERION,
            )
        order, attribute = match.groups()
        direction = SortDirection.ASCENDING if order == "asc" else SortDirection.DESCENDING
        return cls(attribute=attribute, direction=direction)

    def __str__(self) -> str:
        prefix = "asc" if self.direction is SortDirection.ASCENDING else "desc"
        return f"{prefix}({self.attribute})"


class RankingInfo(BaseModel):
    """Ranking signals the service attaches to a hit under ``_rankingInfo``."""

    number_of_typos: int = Field(..., alias="nbTypos")
    geo_distance: int = Field(..., alias="geoDistance")
    matched_words: int = Field(..., alias="words")
    filters_score: int = Field(..., alias="filters")
    exact_words: int = Field(..., alias="nbExactWords")
    proximity_distance: int = Field(..., alias="proximityDistance")
    first_matched_word_position: int = Field(..., alias="firstMatchedWord")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def of(cls, hit: Hit) -> RankingInfo | None:
        """
        Decode the ranking information attached to a hit.

        Returns None when the hit carries none.

        Raises:
            MissingRankingInfoError: the hit is not an object, or its
                information is present but malformed
        """
        if not isinstance(hit, Mapping):
            raise MissingRankingInfoError(
                "Hit is not an object",
                {"type": type(hit).__name__},
            )
        raw = hit.get(RANKING_INFO_KEY)
        if raw is None:
            return None
        if isinstance(raw, RankingInfo):
            return raw
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise MissingRankingInfoError(
                "Malformed ranking information in hit",
                {
                    "objectID": hit.get("objectID"),
                    "errors": exc.errors(include_url=False, include_input=False),
                },
            ) from exc

    def signal(self, criterion: RankingCriterion) -> int:
        """Value of the signal compared by a built-in criterion."""
        name = criterion.signal
        if name is None:
            raise ValueError(f"{criterion.value!r} has no ranking signal")
        return getattr(self, name)
