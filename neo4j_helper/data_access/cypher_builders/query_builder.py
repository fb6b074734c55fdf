# neo4j_helper/data_access/cypher_builders/query_builder.py
"""
Fluent builder for parameterized Cypher statements.

The builder only assembles text. It never parses or validates what it emits:
labels, aliases and property names are trusted, and an alias that was never
declared is written out as a bare variable reference. Every property value is
passed as a parameter, never inlined.

Example:
    >>> built = (
    ...     Neo4jQueryBuilder()
    ...     .select("Car", "car", {"id": 1})
    ...     .custom_return("car")
    ...     .build()
    ... )
    >>> built["query"]
    'MATCH (car:Car {id: $car_id}) RETURN car'
"""

from __future__ import annotations

import re
import string
from collections.abc import Callable, Mapping
from typing import Any

import structlog

from neo4j_helper.models.query_models import (
    BuiltQuery,
    NodeSelector,
    RelationshipAttributes,
    RelationshipDirection,
)

logger = structlog.get_logger(__name__)

NODE_VAR_ALPHABET = string.ascii_lowercase

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def sanitize_parameter_name(name: Any) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``_``."""
    return _NON_ALPHANUMERIC.sub("_", str(name))


def relationship_arrow(direction: RelationshipDirection | str | None, pattern: str = "") -> str:
    """Wrap a relationship segment in the arrow for ``direction``.

    ``both`` and ``none`` are textually identical; ``None`` and unknown values
    are treated as ``none``.

    Args:
        direction: "from", "to", "both", "none" or None.
        pattern: Bracketed relationship segment, e.g. ``[r:KNOWS]``; may be empty.

    Returns:
        The arrow text, e.g. ``-[r:KNOWS]->`` or ``--``.
    """
    if direction == "from":
        return f"-{pattern}->"
    if direction == "to":
        return f"<-{pattern}-"
    return f"-{pattern}-"


def _log_built_query(built: BuiltQuery) -> None:
    logger.debug("Query builder peek", query=built["query"], params=built["params"])


class Neo4jQueryBuilder:
    """Accumulate MATCH/MERGE clauses and their parameters into one statement.

    Every mutating method returns the builder so calls can be chained. The
    builder may be built, mutated further and built again.

    Args:
        sink: Receives the ``build()`` output when ``peek()`` is called.
            Defaults to a structlog debug event.
        is_production: When true, ``peek()`` only logs a warning.
    """

    def __init__(
        self,
        sink: Callable[[BuiltQuery], None] | None = None,
        is_production: bool = False,
    ) -> None:
        self._sink = sink or _log_built_query
        self._is_production = is_production

        self._last_node_var = ""
        self._last_node_var_index = 0

        # alias -> {"node_var", "label"}; insertion order is declaration order
        self._nodes: dict[str, dict[str, str]] = {}
        self._params: dict[str, Any] = {}

        self._query: list[str] = []
        self._return = ""

    @property
    def aliases(self) -> list[str]:
        """Registered aliases in registration order."""
        return list(self._nodes)

    def build(self) -> BuiltQuery:
        """Serialize the committed clauses and the return clause.

        Returns:
            A dict with the query string and a copy of the parameter map.
        """
        return_clause = self._return or f"RETURN {','.join(self._nodes)}"
        return {
            "query": " ".join([*self._query, return_clause]),
            "params": dict(self._params),
        }

    def build_node_reference(
        self,
        node_var: str,
        label: str | None = "",
        properties: Mapping[Any, Any] | None = None,
    ) -> str:
        """Build a node reference without the enclosing parentheses.

        Generated parameters are merged into the builder's parameter map.

        Args:
            node_var: Variable name of the node.
            label: Optional label.
            properties: Optional properties to match on.

        Returns:
            ``node_var[:Label][ {key: $param, ...}]``
        """
        parameterized_string, parameters = self._generate_property_selectors(node_var, properties or {})
        self._params.update(parameters)

        return "".join([node_var, f":{label}" if label else "", parameterized_string])

    def build_relationship_reference(
        self,
        source: NodeSelector | Mapping[str, Any],
        target: NodeSelector | Mapping[str, Any],
        direction: RelationshipDirection | None = None,
        attributes: RelationshipAttributes | Mapping[str, Any] | None = None,
    ) -> str:
        """Build ``(source)<arrow>(target)``.

        Source and target variables are generated when missing. The bracketed
        relationship segment is emitted, and its variable registered, only when
        the attributes carry a variable or a label.

        Args:
            source: Selector for the source node.
            target: Selector for the target node.
            direction: "from", "to", "both" or "none" (default).
            attributes: Variable, label and properties of the relationship.

        Returns:
            The full pattern, e.g. ``(car)-[r:RACES_AT]->(prop)``.
        """
        source = NodeSelector.model_validate(source)
        target = NodeSelector.model_validate(target)
        attributes = RelationshipAttributes.model_validate(attributes or {})

        source_ref = "({})".format(
            self.build_node_reference(
                self._get_node_var_or_generate(source.variable), source.label, source.properties
            )
        )
        target_ref = "({})".format(
            self.build_node_reference(
                self._get_node_var_or_generate(target.variable), target.label, target.properties
            )
        )

        relationship_var = self._generate_node_var(attributes.variable)

        relationship_pattern = ""
        if attributes.label or attributes.variable:
            relationship_ref = self.build_node_reference(
                relationship_var, attributes.label, attributes.properties
            )
            relationship_pattern = f"[{relationship_ref}]"

            self._nodes[relationship_var] = {
                "node_var": relationship_var,
                "label": attributes.label or "",
            }

        return f"{source_ref}{relationship_arrow(direction, relationship_pattern)}{target_ref}"

    def create_node(
        self,
        label: str,
        properties: Mapping[Any, Any] | None = None,
        variable: str | None = None,
    ) -> Neo4jQueryBuilder:
        """Add a MERGE clause for a node, reusing a matching node if one exists."""
        node_var = self._generate_node_var(variable)
        self._nodes[node_var] = {"node_var": node_var, "label": label}

        self._query.append(f"MERGE ({self.build_node_reference(node_var, label, properties)})")
        return self

    def custom_return(self, *nodes: str) -> Neo4jQueryBuilder:
        """Replace the default RETURN clause. The last call wins."""
        self._return = f"RETURN {','.join(nodes)}"
        return self

    def join(
        self,
        source_node: str,
        target_node: str,
        direction: RelationshipDirection | None = None,
        attributes: RelationshipAttributes | Mapping[str, Any] | None = None,
    ) -> Neo4jQueryBuilder:
        """Add a MATCH clause for a relationship between two declared aliases.

        The aliases are not checked against the declared ones.

        Args:
            source_node: Variable of the source node.
            target_node: Variable of the target node.
            direction: "from", "to", "both" or "none" (default).
            attributes: Variable, label and properties of the relationship.
        """
        pattern = self.build_relationship_reference(
            {"variable": source_node},
            {"variable": target_node},
            direction,
            attributes,
        )
        self._query.append(f"MATCH {pattern}")
        return self

    def peek(self) -> Neo4jQueryBuilder:
        """Send the current ``build()`` output to the diagnostic sink.

        Disabled in production, where it only logs a warning.
        """
        if self._is_production:
            logger.warning("peek() called in production environment")
        else:
            self._sink(self.build())
        return self

    def select(
        self,
        label: str,
        node_var: str | None = None,
        filter: Mapping[Any, Any] | None = None,
    ) -> Neo4jQueryBuilder:
        """Add a MATCH clause for a node with the given label.

        Args:
            label: Node label.
            node_var: Variable for the node; generated when omitted.
            filter: Properties the node must have.
        """
        node = self._generate_node_var(node_var)
        self._nodes[node] = {"node_var": node, "label": label}

        self._query.append(f"MATCH ({self.build_node_reference(node, label, filter)})")
        return self

    def _generate_node_var(self, variable: str | None = None) -> str:
        """Return an unused variable name, generating one when none is given."""
        node_var = variable

        if not node_var:
            # a, b, ..., z, aa, ab, ..., az, aaa, ...
            node_var = self._last_node_var + NODE_VAR_ALPHABET[self._last_node_var_index]
            self._last_node_var_index += 1

            if self._last_node_var_index > len(NODE_VAR_ALPHABET) - 1:
                self._last_node_var_index = 0
                self._last_node_var += NODE_VAR_ALPHABET[self._last_node_var_index]

        if node_var in self._nodes:
            node_index = len(self._similar_nodes(node_var))
            candidate = f"{node_var}_{node_index}"
            while candidate in self._nodes:
                node_index += 1
                candidate = f"{node_var}_{node_index}"
            node_var = candidate

        return node_var

    def _get_node_var_or_generate(self, node_var: str | None = None) -> str:
        return node_var if node_var is not None else self._generate_node_var()

    def _generate_property_selectors(
        self, node_var: str, record: Mapping[Any, Any]
    ) -> tuple[str, dict[str, Any]]:
        """Turn properties into an inline selector and its parameters.

        A key already bound by an earlier reference (``n`` + ``a_b`` and
        ``n_a`` + ``b`` both give ``n_a_b``) gets a ``_<n>`` suffix so the
        earlier value is kept.

        Returns:
            ``(" {key: $node_var_key, ...}", {"node_var_key": value, ...})``, or
            ``("", {})`` when there are no properties.
        """
        if not record:
            return "", {}

        parameterized: list[str] = []
        params: dict[str, Any] = {}

        for key, value in record.items():
            param_key = f"{node_var}_{sanitize_parameter_name(key)}"
            if param_key in params:
                logger.warning(
                    "Property names collide after sanitization; keeping the last value",
                    node_var=node_var,
                    property=str(key),
                    param_key=param_key,
                )
            elif param_key in self._params:
                base_key = param_key
                index = 1
                while param_key in self._params or param_key in params:
                    param_key = f"{base_key}_{index}"
                    index += 1
                logger.warning(
                    "Parameter key already bound by another reference; renaming",
                    node_var=node_var,
                    property=str(key),
                    param_key=base_key,
                    renamed_to=param_key,
                )

            params[param_key] = value
            parameterized.append(f"{key}: ${param_key}")

        return f" {{{', '.join(parameterized)}}}", params

    def _similar_nodes(self, node_var: str) -> list[str]:
        """Registered variables starting with ``node_var``."""
        return [node for node in self._nodes if node.startswith(node_var)]
