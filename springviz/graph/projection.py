"""Project extracted class records onto graph nodes and edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from ..models import ClassRecord, ComponentKind

BEAN_COLOR = "#6b1d1d"


class Relation(Enum):
    """Edge kinds that can be toggled on the command line."""

    IMPORT = "import"
    COMPONENT_SCAN = "componentscan"
    FIELD_INJECTION = "autowired"
    BEAN = "bean"
    CONSTRUCTOR_INJECTION = "constructorinjection"


ALL_RELATIONS: FrozenSet[Relation] = frozenset(Relation)

EDGE_LABELS: Dict[str, str] = {
    "import": "@Import",
    "componentscan": "@ComponentScan",
    "contains": "contains",
    "autowired": "@Autowired",
    "bean": "@Bean",
    "bean_parameter": "@Bean parameter",
    "constructorinjection": "constructor",
}


def parse_relations(text: str | Sequence[str] | None) -> FrozenSet[Relation]:
    """Parse a comma-separated selector such as ``import,bean``.

    ``None`` or an empty selector enables every relation. Tokens are
    case-insensitive; an unknown token raises ``ValueError``.
    """
    if text is None:
        return ALL_RELATIONS
    tokens = text.split(",") if isinstance(text, str) else list(text)
    selected: Set[Relation] = set()
    for raw in tokens:
        token = raw.strip().lower()
        if not token:
            continue
        try:
            selected.add(Relation(token))
        except ValueError:
            known = ", ".join(relation.value for relation in Relation)
            raise ValueError(f"Unknown relation '{raw.strip()}' (expected one of: {known})") from None
    return frozenset(selected) if selected else ALL_RELATIONS


def format_relations(relations: Iterable[Relation]) -> str:
    """Inverse of :func:`parse_relations`, in declaration order."""
    chosen = set(relations)
    return ",".join(relation.value for relation in Relation if relation in chosen)


@dataclass(frozen=True)
class Node:
    """A filled graph node; ``color`` is ``None`` for uncoloured nodes."""

    id: str
    color: Optional[str] = None


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    label: str


@dataclass
class Graph:
    """Ordered, de-duplicated nodes and edges ready for an emitter."""

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    _node_ids: Set[str] = field(default_factory=set, repr=False, compare=False)
    _edge_keys: Set[Tuple[str, str, str]] = field(default_factory=set, repr=False, compare=False)

    def add_node(self, node: Node) -> None:
        if node.id in self._node_ids:
            return
        self._node_ids.add(node.id)
        self.nodes.append(node)

    def add_edge(self, edge: Edge) -> None:
        key = (edge.source, edge.target, edge.label)
        if key in self._edge_keys:
            return
        self._edge_keys.add(key)
        self.edges.append(edge)


def project(
    records: Sequence[ClassRecord],
    relations: AbstractSet[Relation] = ALL_RELATIONS,
) -> Graph:
    """Derive the nodes and edges to draw for ``records``.

    Records without a stereotype are neither drawn nor the target of
    ``contains`` edges. Component nodes are added first so their stereotype
    color wins over bean and scan-path nodes with the same id.
    """
    graph = Graph()
    components = [record for record in records if record.kind is not None]
    for record in components:
        graph.add_node(Node(record.name, record.kind.color))

    for record in components:
        if Relation.IMPORT in relations:
            for imported in record.imports:
                graph.add_edge(Edge(record.name, imported, EDGE_LABELS["import"]))

        if Relation.COMPONENT_SCAN in relations:
            for path in record.scan_paths:
                graph.add_node(Node(path))
                graph.add_edge(Edge(record.name, path, EDGE_LABELS["componentscan"]))
                for scanned in _scanned_by(path, record, components):
                    graph.add_edge(Edge(path, scanned.name, EDGE_LABELS["contains"]))

        if Relation.FIELD_INJECTION in relations:
            for injection in record.field_injections:
                graph.add_edge(Edge(record.name, injection.type, EDGE_LABELS["autowired"]))

        if Relation.CONSTRUCTOR_INJECTION in relations:
            for parameter in record.constructor_parameters:
                graph.add_edge(
                    Edge(record.name, parameter.type, EDGE_LABELS["constructorinjection"])
                )

        if Relation.BEAN in relations:
            for bean in record.beans:
                graph.add_node(Node(bean.produced_type, BEAN_COLOR))
                graph.add_edge(Edge(record.name, bean.produced_type, EDGE_LABELS["bean"]))
                for parameter in bean.parameters:
                    graph.add_edge(
                        Edge(bean.produced_type, parameter.type, EDGE_LABELS["bean_parameter"])
                    )

    return graph


def _scanned_by(
    path: str, owner: ClassRecord, components: Sequence[ClassRecord]
) -> List[ClassRecord]:
    return [record for record in components if record is not owner and path in record.package]


def legend() -> List[ComponentKind]:
    """Stereotypes in legend order."""
    return list(ComponentKind)


__all__ = [
    "ALL_RELATIONS",
    "BEAN_COLOR",
    "EDGE_LABELS",
    "Edge",
    "Graph",
    "Node",
    "Relation",
    "format_relations",
    "legend",
    "parse_relations",
    "project",
]
