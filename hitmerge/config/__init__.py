"""
Configuration - Library settings and error taxonomy.
"""

from .errors import (
    AuthenticationError,
    ErrorCode,
    HitMergeError,
    InvalidConfigurationError,
    InvalidResultsError,
    MissingIdentifierError,
    MissingRankingInfoError,
    MissingRankingSettingError,
    SearchServiceError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "HitMergeError",
    "InvalidConfigurationError",
    "MissingRankingSettingError",
    "MissingRankingInfoError",
    "MissingIdentifierError",
    "InvalidResultsError",
    "SearchServiceError",
    "AuthenticationError",
]
