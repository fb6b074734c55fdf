# neo4j_helper/config/loader.py
"""
Configuration reload utilities.

``reload_settings()``:
1. Reloads environment variables from ``.env`` (via ``dotenv.load_dotenv``).
2. Re-creates the ``HelperSettings`` instance so that changed values apply.
3. Updates the constants exported by ``neo4j_helper.config`` to match.
"""

from __future__ import annotations

import importlib

import structlog
from dotenv import load_dotenv

logger = structlog.get_logger(__name__)


def _import_settings_module():
    # The package attribute ``settings`` is the instance, not this module
    return importlib.import_module("neo4j_helper.config.settings")


def reload_settings() -> bool:
    """
    Reload configuration from the environment and refresh the ``config`` package.

    Returns ``True`` on success, ``False`` on failure.
    """
    try:
        load_dotenv(override=True)

        settings_mod = _import_settings_module()
        importlib.reload(settings_mod)

        import neo4j_helper.config as config_pkg

        config_pkg.HelperSettings = settings_mod.HelperSettings
        config_pkg.settings = settings_mod.settings
        for field_name in type(settings_mod.settings).model_fields:
            setattr(config_pkg, field_name, getattr(settings_mod.settings, field_name))

        logger.info("Configuration reloaded", app_env=settings_mod.settings.APP_ENV)
        return True
    except Exception as e:
        logger.error("Configuration reload failed", error=str(e), exc_info=True)
        return False
