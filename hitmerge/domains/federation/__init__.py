"""
Federation Domain - Querying several indices and merging their hits.
"""

from .contracts import SearchClient
from .federated_search import FederatedSearch
from .models import FederatedResults

__all__ = ["SearchClient", "FederatedSearch", "FederatedResults"]
