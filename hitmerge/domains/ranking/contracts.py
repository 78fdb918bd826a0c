"""
Ranking Contracts - Interfaces for the ranking domain.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from .models import Hit, Ordering


@runtime_checkable
class HitComparator(Protocol):
    """Contract for ordering two hits."""

    def compare_hits(self, lhs: Hit, rhs: Hit) -> Ordering:
        """Compare two hits, LESS meaning ``lhs`` ranks first."""
        ...


@runtime_checkable
class HitMerger(HitComparator, Protocol):
    """Contract for merging already ranked hit lists."""

    def merge_hits(self, lhs: Sequence[Hit], rhs: Sequence[Hit]) -> list[Hit]:
        """Merge two sorted lists."""
        ...

    def merge_all(self, results: Iterable[Sequence[Hit]]) -> list[Hit]:
        """Merge any number of sorted lists."""
        ...
