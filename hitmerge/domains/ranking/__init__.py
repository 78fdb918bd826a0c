"""
Ranking Domain - Ranking formulas and ranking-aware merging of hit lists.

This domain handles:
- Parsing the ranking formula and custom ranking from index settings
- Comparing hits criterion by criterion
- Merging sorted hit lists from several sources into one
"""

from .contracts import HitComparator, HitMerger
from .formula import RankingFormula
from .keypath import MISSING, numeric_value, resolve_keypath
from .merger import ResultMerger
from .models import (
    CustomSortCriterion,
    Hit,
    Ordering,
    RankingCriterion,
    RankingInfo,
    SortDirection,
)

__all__ = [
    "HitComparator",
    "HitMerger",
    "RankingFormula",
    "ResultMerger",
    "RankingCriterion",
    "SortDirection",
    "CustomSortCriterion",
    "RankingInfo",
    "Ordering",
    "Hit",
    "MISSING",
    "resolve_keypath",
    "numeric_value",
]
