"""Expose the neo4j_helper public API via lazy exports.

Notes:
    Import-time behavior:
        Names are resolved on first access via [`__getattr__()`](__init__.py), so
        `from neo4j_helper import Neo4jQueryBuilder` does not create the driver
        singleton or read the Neo4j settings.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "1.0.3"

# Public exports (attribute name -> (module, attribute))
_EXPORTS: dict[str, tuple[str, str]] = {
    # Query builder
    "Neo4jQueryBuilder": (
        "neo4j_helper.data_access.cypher_builders.query_builder",
        "Neo4jQueryBuilder",
    ),
    "relationship_arrow": (
        "neo4j_helper.data_access.cypher_builders.query_builder",
        "relationship_arrow",
    ),
    # CRUD façade
    "Database": ("neo4j_helper.core.database_interface", "Database"),
    "Neo4jDatabase": ("neo4j_helper.data_access.neo4j_database", "Neo4jDatabase"),
    # Execution layer
    "neo4j_manager": ("neo4j_helper.core.db_manager", "neo4j_manager"),
    "setup_logging": ("neo4j_helper.core.logging_config", "setup_logging"),
    # Models
    "BuiltQuery": ("neo4j_helper.models.query_models", "BuiltQuery"),
    "NodeSelector": ("neo4j_helper.models.query_models", "NodeSelector"),
    "QueryInterface": ("neo4j_helper.models.query_models", "QueryInterface"),
    "QueryOptions": ("neo4j_helper.models.query_models", "QueryOptions"),
    "RelationshipAttributes": ("neo4j_helper.models.query_models", "RelationshipAttributes"),
    "RelationshipDirection": ("neo4j_helper.models.query_models", "RelationshipDirection"),
    # Utils
    "parse_date_properties": ("neo4j_helper.utils.neo4j_types", "parse_date_properties"),
}


def __getattr__(name: str) -> Any:
    """Resolve public exports lazily on first attribute access.

    Raises:
        AttributeError: If `name` is not a declared export.
    """
    if name in _EXPORTS:
        module_path, attr_name = _EXPORTS[name]
        module = import_module(module_path)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(_EXPORTS.keys())))


__all__ = sorted(_EXPORTS)
