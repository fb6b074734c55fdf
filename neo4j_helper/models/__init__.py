from .query_models import (
    BuiltQuery,
    NodeRecord,
    NodeSelector,
    QueryInterface,
    QueryOptions,
    RelationshipAttributes,
    RelationshipDirection,
)

__all__ = [
    "BuiltQuery",
    "NodeRecord",
    "NodeSelector",
    "QueryInterface",
    "QueryOptions",
    "RelationshipAttributes",
    "RelationshipDirection",
]
