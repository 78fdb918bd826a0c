"""
Tests for the error taxonomy and settings.
"""

from __future__ import annotations

import pytest

from .errors import (
    AuthenticationError,
    ErrorCode,
    HitMergeError,
    InvalidConfigurationError,
    MissingRankingSettingError,
    SearchServiceError,
)
from .settings import Settings


def test_error_str_and_dict() -> None:
    error = HitMergeError(ErrorCode.RESULTS_INVALID, "Something broke", {"step": 2})
    assert str(error) == "[RESULTS_INVALID] Something broke"
    assert error.to_dict() == {
        "code": "RESULTS_INVALID",
        "message": "Something broke",
        "details": {"step": 2},
    }


def test_missing_setting_is_invalid_configuration() -> None:
    error = MissingRankingSettingError("customRanking")
    assert isinstance(error, InvalidConfigurationError)
    assert error.code == ErrorCode.RANKING_SETTINGS_MISSING
    assert error.details == {"attribute": "customRanking"}


def test_service_error_retryable() -> None:
    assert SearchServiceError("down", code=ErrorCode.SERVICE_UNAVAILABLE).retryable
    assert not SearchServiceError("bad request").retryable
    assert not AuthenticationError("denied").retryable


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HITMERGE_APP_ID", "APPID")
    monkeypatch.setenv("HITMERGE_MAX_ATTEMPTS", "5")
    settings = Settings()
    assert settings.app_id == "APPID"
    assert settings.max_attempts == 5
    assert settings.base_url == "https://APPID-dsn.algolia.net"


def test_settings_host_override() -> None:
    settings = Settings(host="http://localhost:8080/")
    assert settings.base_url == "http://localhost:8080"
