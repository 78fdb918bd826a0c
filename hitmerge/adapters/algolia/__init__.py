"""
Algolia Adapter - Hosted search service REST client.

This is the ONLY place that talks to the search service over HTTP.
"""

from .client import AlgoliaClient

__all__ = ["AlgoliaClient"]
