"""Graph projection and rendering."""

from .emitter import DEFAULT_GRAPH_NAME, DotEmitter, dot_id
from .projection import (
    ALL_RELATIONS,
    Edge,
    Graph,
    Node,
    Relation,
    format_relations,
    parse_relations,
    project,
)

__all__ = [
    "ALL_RELATIONS",
    "DEFAULT_GRAPH_NAME",
    "DotEmitter",
    "Edge",
    "Graph",
    "Node",
    "Relation",
    "dot_id",
    "format_relations",
    "parse_relations",
    "project",
]
