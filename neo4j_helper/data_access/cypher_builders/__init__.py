"""Build parameterized Cypher statements for `data_access`.

Notes:
    Security:
        Cypher identifiers (labels, relationship types, variables) are not
        parameterizable. The builder writes them into the statement text as
        given, so they must come from application-controlled values. Property
        values are always passed as parameters.
"""

from .query_builder import Neo4jQueryBuilder, relationship_arrow, sanitize_parameter_name

__all__ = ["Neo4jQueryBuilder", "relationship_arrow", "sanitize_parameter_name"]
