"""
Adapters - External service integrations.

All external API calls are wrapped here to isolate domains from third-party changes.
"""

from .algolia import AlgoliaClient

__all__ = ["AlgoliaClient"]
