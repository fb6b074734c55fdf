from .neo4j_types import entity_to_record, is_graph_entity, parse_date_properties

__all__ = ["entity_to_record", "is_graph_entity", "parse_date_properties"]
