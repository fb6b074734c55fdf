# neo4j_helper/data_access/neo4j_database.py
"""CRUD façade over the Neo4j execution layer.

Each operation turns its arguments into one Cypher statement, runs it through
the injected manager (the shared ``neo4j_manager`` by default) and maps the
returned rows into plain records via [`parse_response()`](neo4j_database.py).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import structlog

from neo4j_helper import config
from neo4j_helper.core.database_interface import Database
from neo4j_helper.core.exceptions import DatabaseError, handle_database_error
from neo4j_helper.data_access.cypher_builders.query_builder import (
    Neo4jQueryBuilder,
    relationship_arrow,
)
from neo4j_helper.models.query_models import (
    NodeRecord,
    QueryInterface,
    QueryOptions,
    RelationshipDirection,
)
from neo4j_helper.utils.neo4j_types import entity_to_record, is_graph_entity

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Neo4jDatabase(Database):
    """Neo4j implementation of the [`Database`](../core/database_interface.py) contract."""

    def __init__(self, manager: Any | None = None) -> None:
        # Imported lazily so the driver singleton is only created when needed
        if manager is None:
            from neo4j_helper.core.db_manager import neo4j_manager

            manager = neo4j_manager

        self._manager = manager
        logger.debug("Neo4jDatabase initialised", manager=type(self._manager).__name__)

    def query_builder(self) -> Neo4jQueryBuilder:
        """Return an empty builder whose ``peek()`` honours the runtime environment."""
        return Neo4jQueryBuilder(is_production=config.settings.is_production)

    async def connect(self) -> None:
        await self._manager.connect()

    async def disconnect(self) -> None:
        await self._manager.close()

    async def delete(self, label: str, id: Any, options: QueryOptions | None = None) -> bool:
        query = (
            f"MATCH (n:{label}) WHERE n.id = $id "
            "WITH n, n.id AS deleted_id DETACH DELETE n RETURN deleted_id"
        )
        try:
            records = await self.execute(query, {"id": id}, options)
            return len(records) > 0
        except Exception as e:
            logger.error("Unable to delete node with id", label=label, id=id, error=str(e), exc_info=True)
            return False

    async def insert(
        self, label: str, data: dict[str, Any], options: QueryOptions | None = None
    ) -> NodeRecord:
        query = (
            f"CREATE (n:{label} $data) "
            "SET n.createdAt = datetime(), n.updatedAt = datetime() RETURN n"
        )
        records = await self.execute(query, {"data": data}, options)
        parsed = self.parse_response(records)
        if not parsed:
            raise DatabaseError(
                "Insert returned no node",
                details={"operation": "insert", "label": label},
            )
        return parsed[0]

    async def join(
        self,
        relationship_label: str,
        source: Any,
        target: Any,
        direction: RelationshipDirection = "none",
        options: QueryOptions | None = None,
    ) -> bool:
        arrow = relationship_arrow(direction, f"[r:{relationship_label}]")
        query = " ".join(
            [
                "MATCH (n) WHERE n.id = $source",
                "WITH n AS source",
                "MATCH (m) WHERE m.id = $target",
                "WITH m AS target, source",
                f"MERGE (source){arrow}(target)",
                "RETURN r",
            ]
        )
        try:
            records = await self.execute(query, {"source": source, "target": target}, options)
            return len(records) > 0
        except Exception as e:
            logger.error(
                "Unable to join nodes",
                relationship=relationship_label,
                source=source,
                target=target,
                error=str(e),
                exc_info=True,
            )
            return False

    async def select(
        self,
        label: str,
        query: QueryInterface | None = None,
        options: QueryOptions | None = None,
    ) -> list[NodeRecord]:
        query = query or QueryInterface()
        built = self.query_builder().select(label, "n", query.where).build()

        records = await self.execute(built["query"], built["params"], options)
        return self.parse_response(records)

    async def update(
        self, label: str, id: Any, data: dict[str, Any], options: QueryOptions | None = None
    ) -> NodeRecord | None:
        query = (
            f"MATCH (n:{label}) WHERE n.id = $id "
            "SET n += $data, n.updatedAt = datetime() RETURN n"
        )
        records = await self.execute(query, {"id": id, "data": data}, options)
        parsed = self.parse_response(records)
        return parsed[0] if parsed else None

    async def upsert(
        self, label: str, id: Any, data: dict[str, Any], options: QueryOptions | None = None
    ) -> NodeRecord | None:
        query = " ".join(
            [
                f"MERGE (n:{label} {{id: $id}})",
                "ON CREATE SET n += $data, n.createdAt = datetime(), n.updatedAt = datetime()",
                "ON MATCH SET n += $data, n.updatedAt = datetime()",
                "RETURN n",
            ]
        )
        records = await self.execute(query, {"id": id, "data": data}, options)
        parsed = self.parse_response(records)
        return parsed[0] if parsed else None

    async def transaction(self, callback: Callable[[Any], T]) -> T:
        return await self._manager.execute_in_transaction(callback)

    async def execute(
        self,
        query: str,
        params: dict[str, Any] | None = None,
        options: QueryOptions | None = None,
    ) -> list[Any]:
        """Run a statement and return the raw driver records.

        Raises:
            DatabaseError: For any failure; driver errors are wrapped.
        """
        try:
            return await self._manager.execute(query, params or {}, options)
        except DatabaseError:
            raise
        except Exception as e:
            raise handle_database_error("execute", e, query=query) from e

    def parse_response(self, records: Iterable[Any]) -> list[NodeRecord]:
        """Flatten every node or relationship in every row into a plain record.

        Values that are not graph entities are skipped.
        """
        timestamp_fields = config.settings.TIMESTAMP_FIELDS
        data: list[NodeRecord] = []
        for record in records:
            for value in record.values():
                if is_graph_entity(value):
                    data.append(entity_to_record(value, timestamp_fields))
                else:
                    logger.debug("Skipping non-entity value in result row", value_type=type(value).__name__)
        return data
