"""Two-phase pipeline: extract every file, then project and render the graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, List, Optional

from .config import SpringVizConfig, load_config
from .extractors import ExtractionError, extract_class
from .graph import DEFAULT_GRAPH_NAME, DotEmitter, Relation, parse_relations, project
from .logging import get_logger, report_failures
from .models import ClassRecord, SourceTree
from .repo_scanner import RepoScanner, read_source


@dataclass
class ExtractionFailure:
    """A file skipped in lenient mode."""

    path: str
    error: ExtractionError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class ExtractionRun:
    """Records gathered in the first phase of a run."""

    tree: SourceTree
    records: List[ClassRecord] = field(default_factory=list)
    failures: List[ExtractionFailure] = field(default_factory=list)


@dataclass
class RenderOutcome:
    """Rendered graph plus the extraction run it came from."""

    document: str
    run: ExtractionRun
    relations: AbstractSet[Relation]


class Orchestrator:
    """Coordinates scanning, extraction, projection and emission."""

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        emitter: DotEmitter | None = None,
    ) -> None:
        self._scanner_override = scanner
        self._emitter_override = emitter
        self.logger = get_logger("orchestrator")

    def extract(
        self,
        root: str,
        package_filter: str = "",
        *,
        strict: Optional[bool] = None,
        config: SpringVizConfig | None = None,
    ) -> ExtractionRun:
        """Extract a record from every matching file under ``root``.

        Strict mode re-raises the first extraction error; otherwise the file
        is logged and skipped.
        """
        root_path = Path(root).expanduser().resolve()
        config = config or self._load_config(root_path)
        strict = config.strict if strict is None else strict

        scanner = self._scanner_override or RepoScanner(
            extensions=config.extensions,
            exclude_paths=config.exclude_paths,
        )
        tree = scanner.scan(str(root_path), package_filter)
        self.logger.info("Extracting %d files under %s", len(tree.files), tree.root)

        run = ExtractionRun(tree=tree)
        for source in tree.files:
            try:
                text = read_source(tree, source)
                record = extract_class(text)
            except ExtractionError as exc:
                if strict:
                    raise
                run.failures.append(ExtractionFailure(path=source.path, error=exc))
                continue
            self.logger.debug("%s -> %s", source.path, record.name)
            run.records.append(record)

        report_failures(run.failures, extracted=len(run.records), logger=self.logger)
        return run

    def render(
        self,
        root: str,
        package_filter: str = "",
        *,
        relations: str | None = None,
        strict: Optional[bool] = None,
        graph_name: str | None = None,
    ) -> RenderOutcome:
        """Extract everything under ``root`` and render the selected relations."""
        root_path = Path(root).expanduser().resolve()
        config = self._load_config(root_path)
        selected = parse_relations(relations if relations is not None else config.relations)

        run = self.extract(str(root_path), package_filter, strict=strict, config=config)
        graph = project(run.records, selected)
        self.logger.debug("Projected %d nodes and %d edges", len(graph.nodes), len(graph.edges))

        emitter = self._emitter_override or DotEmitter(config.templates_dir)
        document = emitter.render(graph, name=graph_name or config.graph_name or DEFAULT_GRAPH_NAME)
        return RenderOutcome(document=document, run=run, relations=selected)

    def _load_config(self, root: Path) -> SpringVizConfig:
        if not root.is_dir():
            # The scanner reports the bad root.
            return SpringVizConfig(root=root)
        config = load_config(root)
        self.logger.debug("Loaded configuration from %s", config.root)
        return config


__all__ = ["ExtractionFailure", "ExtractionRun", "Orchestrator", "RenderOutcome"]
