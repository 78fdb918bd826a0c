"""
Ranking Formula - Ranking criteria and custom ranking parsed from index settings.

Example:
    >>> formula = RankingFormula.parse({
    ...     "ranking": ["typo", "words", "custom"],
    ...     "customRanking": ["desc(popularity)"],
    ... })
    >>> formula.uses_custom_ranking
    True
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from hitmerge.config.errors import InvalidConfigurationError, MissingRankingSettingError

from .models import CustomSortCriterion, RankingCriterion

logger = logging.getLogger(__name__)

__all__ = ["RankingFormula", "RANKING_KEY", "CUSTOM_RANKING_KEY"]

RANKING_KEY = "ranking"
CUSTOM_RANKING_KEY = "customRanking"


class RankingFormula(BaseModel):
    """
    Ordered ranking criteria plus the ordered custom ranking.

    Order encodes priority in both sequences. The custom ranking is only
    consulted where ``custom`` appears in the criteria.
    """

    criteria: tuple[RankingCriterion, ...] = ()
    custom_ranking: tuple[CustomSortCriterion, ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, settings: Mapping[str, Any]) -> RankingFormula:
        """
        Parse the ranking formula from index settings.

        Args:
            settings: Index settings holding ``ranking`` and ``customRanking``
                lists of strings

        Returns:
            The parsed formula

        Raises:
            MissingRankingSettingError: a list is absent or not a list of strings
            InvalidConfigurationError: a list entry is not recognized
        """
        if not isinstance(settings, Mapping):
            raise MissingRankingSettingError(RANKING_KEY)

        raw_ranking = _string_list(settings, RANKING_KEY)
        criteria = []
        for raw in raw_ranking:
            try:
                criteria.append(RankingCriterion(raw))
            except ValueError as exc:
                raise InvalidConfigurationError(
                    f'Unknown ranking criterion "{raw}"',
                    {"value": raw},
                ) from exc

        raw_custom = _string_list(settings, CUSTOM_RANKING_KEY)
        custom_ranking = [CustomSortCriterion.parse(raw) for raw in raw_custom]

        formula = cls(criteria=tuple(criteria), custom_ranking=tuple(custom_ranking))
        logger.debug("Parsed ranking formula: %s", formula)
        return formula

    @property
    def uses_custom_ranking(self) -> bool:
        """Whether the custom ranking takes part in comparisons."""
        return RankingCriterion.CUSTOM in self.criteria

    def to_settings(self) -> dict[str, list[str]]:
        """Render the formula back into index settings lists."""
        return {
            RANKING_KEY: [criterion.value for criterion in self.criteria],
            CUSTOM_RANKING_KEY: [str(sort) for sort in self.custom_ranking],
        }

    def __str__(self) -> str:
        parts = []
        for criterion in self.criteria:
            if criterion is RankingCriterion.CUSTOM:
                custom = ", ".join(str(sort) for sort in self.custom_ranking)
                parts.append(f"custom[{custom}]")
            else:
                parts.append(criterion.value)
        return " > ".join(parts)


def _string_list(settings: Mapping[str, Any], key: str) -> list[str]:
    """Fetch a required list of strings from settings."""
    value = settings.get(key)
    if not isinstance(value, (list, tuple)):
        raise MissingRankingSettingError(key)
    if not all(isinstance(item, str) for item in value):
        raise MissingRankingSettingError(key)
    return list(value)
