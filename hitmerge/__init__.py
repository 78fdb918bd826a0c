"""
hitmerge - Ranking-aware merging of search results from a hosted search service.

Example:
    >>> from hitmerge.domains.ranking import ResultMerger
    >>> merger = ResultMerger.from_settings(index_settings)
    >>> hits = merger.merge_all([products_hits, archive_hits])
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
