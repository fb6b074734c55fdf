# tests/test_configuration.py
"""
Tests for the configuration package.

These tests verify:
1. The validation helper reports no errors on a default configuration.
2. Cross-field checks flag unsafe or unusable values.
3. The reload mechanism updates settings when environment variables change.
"""

from __future__ import annotations

import pytest

from neo4j_helper import config
from neo4j_helper.config.settings import HelperSettings
from neo4j_helper.config.validator import validate_all


def _settings(**overrides) -> HelperSettings:
    return HelperSettings(_env_file=None, **overrides)


def test_validation_report_is_healthy():
    """The default configuration should be reported as healthy."""
    report = validate_all(_settings())

    assert report["overall_health"] == "healthy"
    assert not report["issues"]["errors"]
    assert not report["issues"]["warnings"]


def test_default_password_is_only_informational_outside_production():
    report = validate_all(_settings(APP_ENV="development"))

    fields = [issue["field"] for issue in report["issues"]["info"]]
    assert "NEO4J_PASSWORD" in fields


def test_default_password_is_an_error_in_production():
    report = validate_all(_settings(APP_ENV="production"))

    assert report["overall_health"] == "error"
    assert report["issues"]["errors"][0]["field"] == "NEO4J_PASSWORD"


def test_unsupported_uri_scheme_is_an_error():
    report = validate_all(_settings(NEO4J_URI="http://localhost:7474"))

    assert report["overall_health"] == "error"
    assert any(issue["field"] == "NEO4J_URI" for issue in report["issues"]["errors"])


def test_unknown_log_level_is_a_warning():
    report = validate_all(_settings(LOG_LEVEL_STR="LOUD"))

    assert report["overall_health"] == "warning"
    assert report["issues"]["warnings"] == [
        {"field": "LOG_LEVEL", "message": "Unknown log level 'LOUD'; INFO will be used."}
    ]


@pytest.mark.parametrize(
    "app_env,expected",
    [
        ("production", True),
        ("prod", True),
        (" Production ", True),
        ("development", False),
        ("test", False),
        ("", False),
    ],
)
def test_is_production(app_env, expected):
    assert _settings(APP_ENV=app_env).is_production is expected


def test_connection_string_alias_is_accepted(monkeypatch):
    monkeypatch.setenv("NEO4J_CONNECTION_STRING", "neo4j://graph.example:7687")

    assert HelperSettings(_env_file=None).NEO4J_URI == "neo4j://graph.example:7687"


def test_get_and_set_roundtrip(monkeypatch):
    monkeypatch.setattr(config.settings, "APP_ENV", config.settings.APP_ENV)

    config.set("APP_ENV", "staging")

    assert config.get("APP_ENV") == "staging"


def test_reload_applies_environment_changes(monkeypatch):
    """Changing an env var followed by ``config.reload()`` updates the settings."""
    monkeypatch.setenv("APP_ENV", "staging-reload")

    try:
        assert config.reload() is True
        assert config.settings.APP_ENV == "staging-reload"
        assert config.APP_ENV == "staging-reload"
    finally:
        monkeypatch.delenv("APP_ENV", raising=False)
        config.reload()

    assert config.settings.APP_ENV != "staging-reload"


def test_validate_all_defaults_to_loaded_settings(monkeypatch):
    monkeypatch.setattr(config.settings, "LOG_LEVEL_STR", "LOUD")

    report = validate_all()

    assert any(issue["field"] == "LOG_LEVEL" for issue in report["issues"]["warnings"])
