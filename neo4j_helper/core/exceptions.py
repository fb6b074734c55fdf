# neo4j_helper/core/exceptions.py
"""Define the exception types raised by the Neo4j execution layer.

The query builder never raises; every failure surfaces when a statement is
executed. These types let callers tell connection problems apart from
transaction problems without losing the driver's original error.
"""

from typing import Any

from neo4j.exceptions import (  # type: ignore
    AuthError,
    Neo4jError,
    ServiceUnavailable,
    SessionExpired,
    TransactionError,
    TransientError,
)

_CONNECTION_ERRORS = (ServiceUnavailable, SessionExpired, AuthError)
_TRANSACTION_ERRORS = (TransientError, TransactionError)


class Neo4jHelperError(Exception):
    """Base exception for all neo4j_helper errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class DatabaseError(Neo4jHelperError):
    """Errors related to database operations."""


class DatabaseConnectionError(DatabaseError):
    """Errors related to database connection issues."""


class DatabaseTransactionError(DatabaseError):
    """Errors related to database transaction handling."""


def create_error_context(**kwargs: Any) -> dict[str, Any]:
    """Build a context dictionary for structured errors.

    Args:
        **kwargs: Key-value pairs to include.

    Returns:
        A dictionary containing only keys whose values are not `None`.
    """
    return {k: v for k, v in kwargs.items() if v is not None}


def handle_database_error(operation: str, original_error: Exception, **context: Any) -> DatabaseError:
    """Convert an exception into a standardized database error.

    Args:
        operation: Name of the database operation that failed.
        original_error: The caught exception.
        **context: Additional structured context to attach.

    Returns:
        A `DatabaseError` subclass. Driver exceptions are classified by type
        (unreachable server, expired session or rejected credentials are
        connection errors; transient server errors and misused transactions are
        transaction errors), anything else by its message text.
    """
    error_details = create_error_context(
        operation=operation,
        original_error=str(original_error),
        error_type=type(original_error).__name__,
        neo4j_code=getattr(original_error, "code", None) if isinstance(original_error, Neo4jError) else None,
        **context,
    )

    if isinstance(original_error, _CONNECTION_ERRORS):
        return DatabaseConnectionError(f"Database connection failed during {operation}", details=error_details)
    elif isinstance(original_error, _TRANSACTION_ERRORS):
        return DatabaseTransactionError(f"Database transaction failed during {operation}", details=error_details)
    elif "connection" in str(original_error).lower():
        return DatabaseConnectionError(f"Database connection failed during {operation}", details=error_details)
    elif "transaction" in str(original_error).lower():
        return DatabaseTransactionError(f"Database transaction failed during {operation}", details=error_details)
    else:
        return DatabaseError(f"Database error during {operation}", details=error_details)
