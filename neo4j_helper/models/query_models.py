# neo4j_helper/models/query_models.py
"""Models shared by the query builder, the CRUD façade and the execution layer."""

from __future__ import annotations

from typing import Any, Literal, TypedDict

from pydantic import BaseModel, ConfigDict, Field

# Caller-facing traversal orientation of a relationship:
# - "from": source -> target
# - "to":   source <- target
# - "both": bidirectional, emitted as an undirected pattern
# - "none": undirected
RelationshipDirection = Literal["from", "to", "both", "none"]

# Flattened graph entity as returned by the CRUD façade: the entity's
# properties plus "labels" and "_id".
NodeRecord = dict[str, Any]


class BuiltQuery(TypedDict):
    """A serialized statement and the parameter bag it references."""

    query: str
    params: dict[str, Any]


class NodeSelector(BaseModel):
    """Selects a node inside a relationship pattern.

    Every field is optional; a missing variable is auto-generated by the builder.
    """

    label: str | None = None
    variable: str | None = None
    properties: dict[Any, Any] | None = None


class RelationshipAttributes(BaseModel):
    """Variable, type and properties of the relationship segment of a pattern."""

    label: str | None = None
    variable: str | None = None
    properties: dict[Any, Any] | None = None


class QueryOptions(BaseModel):
    """Where a statement runs: an open transaction, a caller-owned session, or neither."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    session: Any | None = None
    transaction: Any | None = None


class QueryInterface(BaseModel):
    """Filter description used when selecting nodes.

    ``join`` (alias -> direction) is reserved: `Neo4jDatabase.select` reads only
    ``where``.
    """

    where: dict[Any, Any] | None = None
    join: dict[str, RelationshipDirection] = Field(default_factory=dict)
