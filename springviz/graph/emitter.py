"""Render a projected graph as a Graphviz ``digraph`` document."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from .projection import Graph, legend

DEFAULT_GRAPH_NAME = "Components"
TEMPLATE_NAME = "digraph.dot.j2"

_BARE_ID = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_DOT_KEYWORDS = {"node", "edge", "graph", "digraph", "subgraph", "strict"}


def dot_id(value: object) -> str:
    """Return ``value`` as a DOT identifier, quoting when required."""
    text = str(value)
    if _BARE_ID.match(text) and text.lower() not in _DOT_KEYWORDS:
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class DotEmitter:
    """Renders graphs through the ``digraph.dot.j2`` template."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._env = self._create_env(templates_dir)

    def render(self, graph: Graph, *, name: str = DEFAULT_GRAPH_NAME) -> str:
        kinds = legend()
        template = self._env.get_template(TEMPLATE_NAME)
        return template.render(
            name=name,
            legend=kinds,
            legend_pairs=list(zip(kinds, kinds[1:])),
            nodes=graph.nodes,
            edges=graph.edges,
        )

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters["dot_id"] = dot_id
        return env


__all__ = ["DEFAULT_GRAPH_NAME", "DotEmitter", "dot_id"]
