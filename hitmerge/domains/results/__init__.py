"""
Results Domain - Decoding of search responses.
"""

from .models import FacetStats, ResponseRankingInfo, SearchResults

__all__ = ["SearchResults", "FacetStats", "ResponseRankingInfo"]
