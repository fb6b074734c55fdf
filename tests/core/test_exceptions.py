# tests/core/test_exceptions.py
"""Tests for core/exceptions.py"""

import pytest
from neo4j.exceptions import ServiceUnavailable, SessionExpired, TransientError

from neo4j_helper.core.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseTransactionError,
    Neo4jHelperError,
    create_error_context,
    handle_database_error,
)


class TestExceptionHierarchy:
    def test_database_errors_share_a_base(self):
        assert issubclass(DatabaseError, Neo4jHelperError)
        assert issubclass(DatabaseConnectionError, DatabaseError)
        assert issubclass(DatabaseTransactionError, DatabaseError)

    def test_str_includes_details(self):
        error = DatabaseError("Query failed", details={"query": "RETURN 1"})

        assert str(error) == "Query failed (Details: {'query': 'RETURN 1'})"
        assert error.message == "Query failed"

    def test_str_without_details(self):
        error = DatabaseError("Query failed")

        assert str(error) == "Query failed"
        assert error.details == {}


def test_create_error_context_drops_none_values():
    assert create_error_context(a=1, b=None, c="x") == {"a": 1, "c": "x"}


class TestHandleDatabaseError:
    @pytest.mark.parametrize(
        "message,expected_type",
        [
            ("Connection refused", DatabaseConnectionError),
            ("transaction terminated", DatabaseTransactionError),
            ("Invalid input 'X'", DatabaseError),
        ],
    )
    def test_classification(self, message, expected_type):
        error = handle_database_error("execute", RuntimeError(message))

        assert type(error) is expected_type

    def test_details_carry_context(self):
        error = handle_database_error("execute", ValueError("bad"), query="RETURN 1", label=None)

        assert error.details == {
            "operation": "execute",
            "original_error": "bad",
            "error_type": "ValueError",
            "query": "RETURN 1",
        }
        assert str(error).startswith("Database error during execute")

    @pytest.mark.parametrize(
        "driver_error,expected_type",
        [
            (ServiceUnavailable("Unable to retrieve routing information"), DatabaseConnectionError),
            (SessionExpired("Session no longer valid"), DatabaseConnectionError),
            (TransientError("Deadlock detected"), DatabaseTransactionError),
        ],
    )
    def test_driver_errors_are_classified_by_type(self, driver_error, expected_type):
        error = handle_database_error("execute", driver_error)

        assert type(error) is expected_type
        assert error.details["error_type"] == type(driver_error).__name__
