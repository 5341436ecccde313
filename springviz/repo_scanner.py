"""Source tree scanning: traversal, ignore rules and package filtering."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .extractors.errors import FileUnreadableError
from .logging import get_logger
from .models import SourceFile, SourceTree

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".gradle",
    ".mvn",
    ".venv",
    "__pycache__",
    "node_modules",
    "target",
    "build",
    "out",
}

logger = get_logger("repo_scanner")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .springviz.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


def matches_package_filter(rel_path: str, package_filter: str) -> bool:
    """True when ``rel_path`` contains the filter, dotted or slashed."""
    if not package_filter:
        return True
    if package_filter in rel_path:
        return True
    return package_filter.replace(".", "/") in rel_path


class RepoScanner:
    """Walks a source tree and keeps the files worth extracting."""

    def __init__(
        self,
        extensions: Sequence[str] = (".java",),
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.exclude_paths = list(exclude_paths)

    def scan(self, root: str, package_filter: str = "") -> SourceTree:
        """Return the filtered source files under ``root`` in sorted order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Source path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root}")

        rules = _parse_gitignore(root_path / ".gitignore")
        for pattern in self.exclude_paths:
            rule = build_ignore_rule(pattern)
            if rule is not None:
                rules.append(rule)

        files: List[SourceFile] = []
        for path in _iter_files(root_path, rules):
            if path.suffix.lower() not in self.extensions:
                continue
            rel_path = path.relative_to(root_path).as_posix()
            if not matches_package_filter(rel_path, package_filter):
                continue
            files.append(SourceFile(path=rel_path, size=path.stat().st_size))

        logger.debug("Found %d source files under %s", len(files), root_path)
        return SourceTree(root=str(root_path), files=files)


def read_source(tree: SourceTree, source: SourceFile) -> str:
    """Read one source file, wrapping I/O and decoding failures."""
    path = Path(tree.root) / source.path
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileUnreadableError(source.path, str(exc)) from exc


__all__ = ["IgnoreRule", "RepoScanner", "build_ignore_rule", "matches_package_filter", "read_source"]
