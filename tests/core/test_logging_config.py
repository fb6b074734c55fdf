# tests/core/test_logging_config.py
"""Tests for core/logging_config.py"""

import logging
import logging.handlers

import pytest

from neo4j_helper import config
from neo4j_helper.core.logging_config import (
    filter_internal_keys,
    setup_logging,
    simple_log_format_plain,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level

    yield root

    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_filter_internal_keys():
    event = {"event": "hello", "_record": object(), "_from_structlog": True, "query": "RETURN 1"}

    assert filter_internal_keys(None, "info", event) == {"event": "hello", "query": "RETURN 1"}


def test_simple_log_format_plain():
    line = simple_log_format_plain(
        None,
        "info",
        {
            "level": "info",
            "timestamp": "2024-01-01 00:00:00",
            "logger": "neo4j_helper.core.db_manager",
            "event": "Connected to Neo4j",
            "uri": "bolt://localhost:7687",
        },
    )

    assert line == "2024-01-01 00:00:00 [db_manager] INFO Connected to Neo4j (uri=bolt://localhost:7687)"


def test_simple_log_format_truncates_long_values():
    line = simple_log_format_plain(None, "debug", {"level": "debug", "event": "Query", "query": "x" * 200})

    assert line == f"DEBUG Query (query={'x' * 117}...)"


def test_setup_logging_console_only(restore_root_logger, monkeypatch):
    monkeypatch.setattr(config.settings, "LOG_LEVEL_STR", "debug")
    monkeypatch.setattr(config.settings, "LOG_FILE", None)

    setup_logging()

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert logging.getLogger("neo4j").level == logging.WARNING


def test_setup_logging_unknown_level_falls_back_to_info(restore_root_logger, monkeypatch):
    monkeypatch.setattr(config.settings, "LOG_LEVEL_STR", "LOUD")
    monkeypatch.setattr(config.settings, "LOG_FILE", None)

    setup_logging()

    assert restore_root_logger.level == logging.INFO


def test_setup_logging_with_file(restore_root_logger, monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "helper.log"
    monkeypatch.setattr(config.settings, "LOG_LEVEL_STR", "INFO")
    monkeypatch.setattr(config.settings, "LOG_FILE", str(log_file))

    setup_logging()

    file_handlers = [
        handler
        for handler in restore_root_logger.handlers
        if isinstance(handler, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert log_file.parent.is_dir()
