# neo4j_helper/utils/neo4j_types.py
"""Convert Neo4j driver values into plain Python records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from neo4j.graph import Node, Relationship
from neo4j.time import Date, DateTime, Time

_TEMPORAL_TYPES = (DateTime, Date, Time)


def parse_date_properties(data: dict[str, Any], date_keys: Iterable[str]) -> dict[str, Any]:
    """Render driver temporal values under ``date_keys`` as ISO-8601 strings.

    The dict is updated in place and returned.
    """
    for key in date_keys:
        value = data.get(key)
        if isinstance(value, _TEMPORAL_TYPES):
            data[key] = value.iso_format()
    return data


def is_graph_entity(value: Any) -> bool:
    return isinstance(value, (Node, Relationship))


def entity_to_record(entity: Node | Relationship, date_keys: Iterable[str] = ()) -> dict[str, Any]:
    """Flatten a node or relationship into its properties plus ``labels`` and ``_id``.

    A relationship reports its type as its only label.
    """
    if isinstance(entity, Relationship):
        labels = [entity.type]
    else:
        labels = sorted(entity.labels)

    data = {
        **dict(entity.items()),
        "labels": labels,
        "_id": entity.element_id,
    }
    return parse_date_properties(data, date_keys)
