"""
Tests for engine settings.
"""

import logging

import pytest

from marketplace.config.settings import (
    FilterEngineSettings,
    configure_logging,
    get_settings,
    reset_settings,
)
from marketplace.errors import ConfigurationError


def test_defaults(settings):
    settings.validate_consistency()

    assert settings.budget_range_count == 5
    assert settings.rating_thresholds == [4.5, 4.0, 3.5, 3.0]
    assert settings.max_area_options == 20
    assert settings.default_sort_key == "relevance"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MARKETPLACE_FILTERS_BUDGET_RANGE_COUNT", "3")
    monkeypatch.setenv("MARKETPLACE_FILTERS_RATING_THRESHOLDS", "[4.0, 3.0]")

    settings = FilterEngineSettings(_env_file=None)

    assert settings.budget_range_count == 3
    assert settings.rating_thresholds == [4.0, 3.0]


@pytest.mark.parametrize(
    "overrides",
    [
        {"budget_range_count": 0},
        {"max_area_options": -1},
        {"rating_thresholds": [3.0, 4.0]},
        {"default_sort_key": "popularity"},
        {"log_level": "CHATTY"},
    ],
)
def test_invalid_settings_rejected(overrides):
    settings = FilterEngineSettings(_env_file=None, **overrides)

    with pytest.raises(ConfigurationError):
        settings.validate_consistency()


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("MARKETPLACE_FILTERS_MAX_AREA_OPTIONS", "7")
    reset_settings()

    first = get_settings()
    assert first.max_area_options == 7
    assert get_settings() is first


def test_get_settings_validates(monkeypatch):
    monkeypatch.setenv("MARKETPLACE_FILTERS_BUDGET_RANGE_COUNT", "0")

    with pytest.raises(ConfigurationError):
        get_settings()


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging("debug")

    assert calls["level"] == logging.DEBUG
    assert "%(name)s" in calls["format"]


def test_configure_logging_defaults_to_settings_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    monkeypatch.setenv("MARKETPLACE_FILTERS_LOG_LEVEL", "warning")

    configure_logging()

    assert calls["level"] == logging.WARNING
