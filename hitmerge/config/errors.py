"""
Error Taxonomy - Consistent error codes across the library.

Usage:
    from hitmerge.config.errors import ErrorCode, HitMergeError

    raise HitMergeError(ErrorCode.RANKING_INFO_MISSING, "No ranking information in hit")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error reporting."""

    # Ranking formula errors
    RANKING_SETTINGS_MISSING = "RANKING_SETTINGS_MISSING"
    RANKING_INVALID_CRITERION = "RANKING_INVALID_CRITERION"
    RANKING_INVALID_SORT_CRITERION = "RANKING_INVALID_SORT_CRITERION"

    # Hit errors
    RANKING_INFO_MISSING = "RANKING_INFO_MISSING"
    HIT_OBJECT_ID_MISSING = "HIT_OBJECT_ID_MISSING"
    RESULTS_INVALID = "RESULTS_INVALID"

    # Search service errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    SERVICE_REQUEST_FAILED = "SERVICE_REQUEST_FAILED"
    SERVICE_AUTH_FAILED = "SERVICE_AUTH_FAILED"


class HitMergeError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a serializable dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidConfigurationError(HitMergeError):
    """Index settings do not describe a valid ranking formula."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.RANKING_INVALID_CRITERION,
    ) -> None:
        super().__init__(code, message, details)


class MissingRankingSettingError(InvalidConfigurationError):
    """A required ranking list is absent from the settings or has the wrong type."""

    def __init__(self, attribute: str) -> None:
        super().__init__(
            f"Settings missing a valid `{attribute}` attribute",
            {"attribute": attribute},
            code=ErrorCode.RANKING_SETTINGS_MISSING,
        )
        self.attribute = attribute


class MissingRankingInfoError(HitMergeError):
    """A hit carries no usable ranking information."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.RANKING_INFO_MISSING, message, details)


class MissingIdentifierError(HitMergeError):
    """A hit has no string `objectID`."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.HIT_OBJECT_ID_MISSING, message, details)


class InvalidResultsError(HitMergeError):
    """A search response could not be decoded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.RESULTS_INVALID, message, details)


class SearchServiceError(HitMergeError):
    """Search service transport or HTTP errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.SERVICE_REQUEST_FAILED,
    ) -> None:
        super().__init__(code, message, details)

    @property
    def retryable(self) -> bool:
        """Whether the failure is worth retrying (network or 5xx)."""
        return self.code == ErrorCode.SERVICE_UNAVAILABLE


class AuthenticationError(SearchServiceError):
    """Credentials were rejected by the search service."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details, code=ErrorCode.SERVICE_AUTH_FAILED)
