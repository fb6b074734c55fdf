# neo4j_helper/core/db_manager.py
import asyncio
import functools
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from neo4j import (  # type: ignore
    Driver,
    GraphDatabase,
    ManagedTransaction,
    Record,
)
from neo4j.exceptions import ServiceUnavailable  # type: ignore

from neo4j_helper import config
from neo4j_helper.core.exceptions import (
    DatabaseConnectionError,
    DatabaseTransactionError,
    handle_database_error,
)
from neo4j_helper.models.query_models import QueryOptions

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Neo4jManagerSingleton:
    """Owns the process-wide Neo4j driver.

    The driver is synchronous; the public API is async and runs every driver
    call in a worker thread.
    """

    _instance = None

    def __new__(cls, *args, **kwargs):
        if not cls._instance:
            cls._instance = super(Neo4jManagerSingleton, cls).__new__(cls)
            cls._instance._initialized_flag = False
        return cls._instance

    def __init__(self):
        if self._initialized_flag:
            return

        self.logger = structlog.get_logger(__name__)
        self.driver: Driver | None = None
        self._initialized_flag = True
        self.logger.info(
            "Neo4jManagerSingleton initialized. Call connect() to establish connection."
        )

    async def connect(self):
        """Create the driver and verify connectivity."""
        if self.driver:
            await self.close()

        uri = config.settings.NEO4J_URI
        try:
            sync_driver = GraphDatabase.driver(
                uri, auth=(config.settings.NEO4J_USER, config.settings.NEO4J_PASSWORD)
            )
            await asyncio.to_thread(sync_driver.verify_connectivity)
            self.driver = sync_driver
            self.logger.info("Connected to Neo4j", uri=uri)
        except ServiceUnavailable as e:
            self.logger.critical("Neo4j service unavailable", uri=uri, error=str(e))
            self.driver = None
            raise DatabaseConnectionError(
                "Neo4j database is not available",
                details={
                    "uri": uri,
                    "original_error": str(e),
                    "suggestion": "Ensure the Neo4j database is running and accessible",
                },
            )
        except Exception as e:
            self.logger.critical(
                "Unexpected error during Neo4j connection",
                uri=uri,
                error=str(e),
                exc_info=True,
            )
            self.driver = None
            raise handle_database_error("connection", e, uri=uri)

    async def close(self):
        """Close the driver."""
        if self.driver:
            try:
                await asyncio.to_thread(self.driver.close)
                self.logger.info("Disconnected from Neo4j")
            except Exception as e:
                self.logger.error(f"Error while closing Neo4j driver: {e}", exc_info=True)
            finally:
                self.driver = None
        else:
            self.logger.info("No active Neo4j driver to close (driver was None).")

    async def _ensure_connected(self):
        if self.driver is None:
            self.logger.info("Driver is None, attempting to connect.")
            await self.connect()

        if self.driver is None:
            raise DatabaseConnectionError(
                "Neo4j driver not initialized",
                details={
                    "suggestion": "Call connect() method first to establish database connection"
                },
            )

    def _ensure_connected_sync(self):
        """Synchronous counterpart of _ensure_connected for thread helpers."""
        if self.driver is None:
            raise DatabaseConnectionError(
                "Neo4j driver not initialized (synchronous helper called without connection)",
                details={},
            )

    # -------------------------------------------------------------------------
    # Synchronous helper implementations (run in thread)
    # -------------------------------------------------------------------------

    def _sync_execute_query_tx(
        self,
        tx: ManagedTransaction,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[Record]:
        self.logger.debug("Executing Cypher query", query=query, params=parameters)
        result_cursor = tx.run(query, parameters)
        return list(result_cursor)

    def _sync_execute(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
        options: QueryOptions | None = None,
    ) -> list[Record]:
        options = options or QueryOptions()
        self.logger.debug("Executing Cypher query", query=query, params=parameters)

        # A caller-owned transaction or session is used as-is and left open
        if options.transaction is not None:
            return list(options.transaction.run(query, parameters))
        if options.session is not None:
            return list(options.session.run(query, parameters))

        self._ensure_connected_sync()
        with self.driver.session(database=config.settings.NEO4J_DATABASE) as session:  # type: ignore
            return list(session.run(query, parameters))

    def _sync_execute_read_query(
        self, query: str, parameters: dict[str, Any] | None = None
    ) -> list[Record]:
        self._ensure_connected_sync()
        with self.driver.session(database=config.settings.NEO4J_DATABASE) as session:  # type: ignore
            return session.execute_read(self._sync_execute_query_tx, query, parameters)

    def _sync_execute_write_query(
        self, query: str, parameters: dict[str, Any] | None = None
    ) -> list[Record]:
        self._ensure_connected_sync()
        with self.driver.session(database=config.settings.NEO4J_DATABASE) as session:  # type: ignore
            return session.execute_write(self._sync_execute_query_tx, query, parameters)

    def _sync_execute_cypher_batch(
        self, cypher_statements_with_params: list[tuple[str, dict[str, Any]]]
    ):
        if not cypher_statements_with_params:
            self.logger.info("execute_cypher_batch: No statements to execute.")
            return

        self._ensure_connected_sync()
        with self.driver.session(database=config.settings.NEO4J_DATABASE) as session:  # type: ignore
            tx = session.begin_transaction()
            try:
                for query, params in cypher_statements_with_params:
                    self.logger.debug("Batch Cypher", query=query, params=params)
                    tx.run(query, params)
                tx.commit()
                self.logger.info(
                    "Executed Cypher batch",
                    batch_size=len(cypher_statements_with_params),
                )
            except Exception as e:
                self.logger.error(
                    "Error in Cypher batch execution",
                    batch_size=len(cypher_statements_with_params),
                    error=str(e),
                    exc_info=True,
                )
                if not tx.closed():
                    tx.rollback()
                raise DatabaseTransactionError(
                    "Batch Cypher execution failed",
                    details={
                        "batch_size": len(cypher_statements_with_params),
                        "original_error": str(e),
                        "operation": "batch_execution",
                    },
                )

    def _sync_execute_in_transaction(
        self, transaction_func: Callable[..., T], *args: Any, **kwargs: Any
    ) -> T:
        self._ensure_connected_sync()
        with self.driver.session(database=config.settings.NEO4J_DATABASE) as session:  # type: ignore
            tx = session.begin_transaction()
            try:
                result = transaction_func(tx, *args, **kwargs)
                tx.commit()
                return result
            except Exception as e:
                self.logger.error(
                    "Transaction failed, rolling back",
                    error=str(e),
                    exc_info=True,
                )
                if not tx.closed():
                    tx.rollback()
                raise DatabaseTransactionError(
                    "Transaction failed and was rolled back",
                    details={
                        "original_error": str(e),
                        "error_type": type(e).__name__,
                        "operation": "execute_in_transaction",
                    },
                ) from e

    # -------------------------------------------------------------------------
    # Public async API: thin wrappers around the sync helpers
    # -------------------------------------------------------------------------

    async def execute(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
        options: QueryOptions | None = None,
    ) -> list[Record]:
        """Run a statement on the given transaction or session, or on a fresh session."""
        options = options or QueryOptions()
        if options.transaction is None and options.session is None:
            await self._ensure_connected()
        return await asyncio.to_thread(self._sync_execute, query, parameters or {}, options)

    async def execute_read_query(
        self, query: str, parameters: dict[str, Any] | None = None
    ) -> list[Record]:
        await self._ensure_connected()
        return await asyncio.to_thread(self._sync_execute_read_query, query, parameters)

    async def execute_write_query(
        self, query: str, parameters: dict[str, Any] | None = None
    ) -> list[Record]:
        await self._ensure_connected()
        return await asyncio.to_thread(self._sync_execute_write_query, query, parameters)

    async def execute_cypher_batch(
        self, cypher_statements_with_params: list[tuple[str, dict[str, Any]]]
    ):
        await self._ensure_connected()
        return await asyncio.to_thread(
            self._sync_execute_cypher_batch, cypher_statements_with_params
        )

    async def execute_in_transaction(
        self, transaction_func: Callable[..., T], *args: Any, **kwargs: Any
    ) -> T:
        """Run ``transaction_func(tx, *args, **kwargs)`` inside one explicit transaction.

        The transaction commits when the function returns and rolls back when it
        raises.

        Raises:
            DatabaseTransactionError: If the function or the commit fails.
        """
        await self._ensure_connected()
        return await asyncio.to_thread(
            functools.partial(self._sync_execute_in_transaction, transaction_func, *args, **kwargs)
        )


neo4j_manager = Neo4jManagerSingleton()
