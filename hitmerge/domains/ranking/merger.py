"""
Result Merger - Ranking-aware merge of already ranked hit lists.

Compares hits with a RankingFormula (strict lexicographic order over the
ranking criteria, never a weighted sum) and merges lists that are each
already sorted by that formula into one globally ordered list.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from hitmerge.config.errors import MissingIdentifierError, MissingRankingInfoError

from .formula import RankingFormula
from .keypath import numeric_value
from .models import Hit, Ordering, RankingCriterion, RankingInfo

logger = logging.getLogger(__name__)

__all__ = ["ResultMerger"]


class ResultMerger:
    """
    Merges lists of hits according to a ranking formula.

    The merger holds no mutable state: it only reads the formula and the
    hits, so one instance can be shared across threads.

    Example:
        >>> merger = ResultMerger.from_settings(index_settings)
        >>> hits = merger.merge_all([hits_from_index_a, hits_from_index_b])
    """

    def __init__(self, formula: RankingFormula) -> None:
        """
        Initialize merger.

        Args:
            formula: Ranking formula used for every comparison
        """
        self._formula = formula

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ResultMerger:
        """Create a merger from index settings."""
        return cls(RankingFormula.parse(settings))

    @property
    def formula(self) -> RankingFormula:
        return self._formula

    def compare_hits(self, lhs: Hit, rhs: Hit) -> Ordering:
        """
        Compare two hits.

        Args:
            lhs: Left-hand hit
            rhs: Right-hand hit

        Returns:
            LESS if ``lhs`` ranks first, GREATER if ``rhs`` does, EQUAL on a tie

        Raises:
            MissingRankingInfoError: either hit has no ranking information
        """
        lhs_info = RankingInfo.of(lhs)
        rhs_info = RankingInfo.of(rhs)
        if lhs_info is None or rhs_info is None:
            missing = lhs if lhs_info is None else rhs
            raise MissingRankingInfoError(
                "No ranking information in hit",
                {"objectID": missing.get("objectID")},
            )

        for criterion in self._formula.criteria:
            if criterion is RankingCriterion.CUSTOM:
                result = self._compare_custom(lhs, rhs)
            else:
                result = criterion.direction.compare(
                    lhs_info.signal(criterion),
                    rhs_info.signal(criterion),
                )
            if result is not Ordering.EQUAL:
                return result
        return Ordering.EQUAL

    def _compare_custom(self, lhs: Hit, rhs: Hit) -> Ordering:
        """Walk the custom ranking; missing or non-numeric attributes count as 0."""
        for sort in self._formula.custom_ranking:
            result = sort.direction.compare(
                numeric_value(lhs, sort.attribute),
                numeric_value(rhs, sort.attribute),
            )
            if result is not Ordering.EQUAL:
                return result
        return Ordering.EQUAL

    def merge_hits(self, lhs: Sequence[Hit], rhs: Sequence[Hit]) -> list[Hit]:
        """
        Merge two lists of hits.

        Each list must already be sorted by this merger's formula; otherwise
        the resulting order is unspecified. On a tie the left hit comes
        first, and the right hit is dropped when both share an objectID.

        Args:
            lhs: First sorted list
            rhs: Second sorted list

        Returns:
            The merged list

        Raises:
            MissingRankingInfoError: a compared hit has no ranking information
            MissingIdentifierError: tied hits lack a string objectID
        """
        merged: list[Hit] = []
        p = q = 0
        duplicates = 0

        while p < len(lhs) and q < len(rhs):
            left, right = lhs[p], rhs[q]
            result = self.compare_hits(left, right)
            if result is Ordering.LESS:
                merged.append(left)
                p += 1
            elif result is Ordering.GREATER:
                merged.append(right)
                q += 1
            else:
                # Same rank: either the same object seen twice or two distinct
                # objects that rank exactly alike.
                left_id, right_id = _object_id(left), _object_id(right)
                merged.append(left)
                if left_id != right_id:
                    merged.append(right)
                else:
                    duplicates += 1
                p += 1
                q += 1

        merged.extend(lhs[p:])
        merged.extend(rhs[q:])

        logger.debug(
            "Merged %d + %d hits -> %d (%d duplicates dropped)",
            len(lhs),
            len(rhs),
            len(merged),
            duplicates,
        )
        return merged

    def merge_all(self, results: Iterable[Sequence[Hit]]) -> list[Hit]:
        """
        Merge an arbitrary number of sorted hit lists.

        A left fold of merge_hits starting from an empty list. Duplicates are
        only detected between the accumulated list and the list being folded
        in, at tied positions: an object present in the first and third lists
        but not in the second can survive twice once the second list shifts
        the alignment.

        Args:
            results: Sorted hit lists, in priority order for ties

        Returns:
            The merged list
        """
        return functools.reduce(self.merge_hits, results, [])

    def sort_key(self) -> Callable[[Hit], Any]:
        """Key function ordering hits by this merger's formula."""
        return functools.cmp_to_key(self.compare_hits)

    def sort_hits(self, hits: Iterable[Hit]) -> list[Hit]:
        """Sort a single list of hits (stable) by this merger's formula."""
        return sorted(hits, key=self.sort_key())


def _object_id(hit: Hit) -> str:
    object_id = hit.get("objectID")
    if not isinstance(object_id, str):
        raise MissingIdentifierError(
            "Object missing required `objectID` attribute",
            {"objectID": object_id},
        )
    return object_id
