# neo4j_helper/core/database_interface.py
"""Backend-agnostic CRUD contract.

Implementations handle their own connection and query logic while callers
program against this interface. Every operation accepts optional
[`QueryOptions`](../models/query_models.py) so it can run on a caller-owned
session or transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from neo4j_helper.models.query_models import (
    NodeRecord,
    QueryInterface,
    QueryOptions,
    RelationshipDirection,
)

T = TypeVar("T")


class Database(ABC):
    """Standard interface for graph database operations."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection to the database."""

    @abstractmethod
    async def delete(self, label: str, id: Any, options: QueryOptions | None = None) -> bool:
        """Delete the record with the given id.

        Returns:
            True if a record was deleted, False otherwise.
        """

    @abstractmethod
    async def insert(
        self, label: str, data: dict[str, Any], options: QueryOptions | None = None
    ) -> NodeRecord:
        """Insert a new record and return it as stored."""

    @abstractmethod
    async def join(
        self,
        relationship_label: str,
        source: Any,
        target: Any,
        direction: RelationshipDirection = "none",
        options: QueryOptions | None = None,
    ) -> bool:
        """Create a relationship between the records with the given ids.

        Returns:
            True if the relationship exists after the call, False otherwise.
        """

    @abstractmethod
    async def select(
        self,
        label: str,
        query: QueryInterface | None = None,
        options: QueryOptions | None = None,
    ) -> list[NodeRecord]:
        """Return every record with the label that matches ``query.where``."""

    @abstractmethod
    async def update(
        self, label: str, id: Any, data: dict[str, Any], options: QueryOptions | None = None
    ) -> NodeRecord | None:
        """Merge ``data`` into an existing record and return it."""

    @abstractmethod
    async def upsert(
        self, label: str, id: Any, data: dict[str, Any], options: QueryOptions | None = None
    ) -> NodeRecord | None:
        """Insert the record if it does not exist, otherwise update it."""

    @abstractmethod
    async def transaction(self, callback: Callable[[Any], T]) -> T:
        """Run ``callback`` inside one transaction.

        The transaction commits when the callback returns and rolls back when
        it raises.
        """

    @abstractmethod
    async def execute(
        self,
        query: str,
        params: dict[str, Any] | None = None,
        options: QueryOptions | None = None,
    ) -> Any:
        """Execute a raw query against the database."""
