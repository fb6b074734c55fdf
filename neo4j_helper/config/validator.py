# neo4j_helper/config/validator.py
"""
Configuration validation utilities.

``validate_all()`` runs cross-field sanity checks over the current settings
and returns a structured health report:

{
    "overall_health": "healthy" | "warning" | "error",
    "issues": {
        "errors":   [{ "field": "<field>", "message": "<msg>" }, ...],
        "warnings": [{ "field": "<field>", "message": "<msg>" }, ...],
        "info":     [{ "field": "<field>", "message": "<msg>" }, ...],
    }
}
"""

from __future__ import annotations

import logging as stdlib_logging
from urllib.parse import urlparse

from .settings import HelperSettings

SUPPORTED_URI_SCHEMES = {
    "bolt",
    "bolt+s",
    "bolt+ssc",
    "neo4j",
    "neo4j+s",
    "neo4j+ssc",
}

DEFAULT_PASSWORD = "neo4j_password"


def _add_issue(
    issues: dict[str, list[dict[str, str]]],
    severity: str,
    field: str,
    message: str,
) -> None:
    issues.setdefault(severity, []).append({"field": field, "message": message})


def validate_all(current_settings: HelperSettings | None = None) -> dict:
    """
    Validate the configuration state.

    Args:
        current_settings: Settings to check; defaults to the loaded singleton.

    Returns a health-report dict with overall status and detailed issue lists.
    """
    if current_settings is None:
        import neo4j_helper.config as config_pkg

        current_settings = config_pkg.settings

    issues: dict[str, list[dict[str, str]]] = {"errors": [], "warnings": [], "info": []}

    scheme = urlparse(current_settings.NEO4J_URI).scheme
    if scheme not in SUPPORTED_URI_SCHEMES:
        _add_issue(
            issues,
            "errors",
            "NEO4J_URI",
            f"Unsupported Neo4j URI scheme '{scheme}' in {current_settings.NEO4J_URI}.",
        )

    if not current_settings.NEO4J_USER:
        _add_issue(issues, "errors", "NEO4J_USER", "NEO4J_USER must not be empty.")

    if current_settings.NEO4J_PASSWORD == DEFAULT_PASSWORD:
        severity = "errors" if current_settings.is_production else "info"
        _add_issue(
            issues,
            severity,
            "NEO4J_PASSWORD",
            "NEO4J_PASSWORD is still the built-in default.",
        )

    if not isinstance(stdlib_logging.getLevelName(current_settings.LOG_LEVEL_STR.upper()), int):
        _add_issue(
            issues,
            "warnings",
            "LOG_LEVEL",
            f"Unknown log level '{current_settings.LOG_LEVEL_STR}'; INFO will be used.",
        )

    if not current_settings.TIMESTAMP_FIELDS:
        _add_issue(
            issues,
            "info",
            "TIMESTAMP_FIELDS",
            "No timestamp fields configured; temporal values are returned as driver objects.",
        )

    if issues["errors"]:
        overall = "error"
    elif issues["warnings"]:
        overall = "warning"
    else:
        overall = "healthy"

    return {"overall_health": overall, "issues": issues}
