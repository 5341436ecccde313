"""Errors raised while extracting class metadata from source text."""

from __future__ import annotations


class ExtractionError(RuntimeError):
    """Base class for failures that stop extraction of one file."""

    def __init__(self, message: str, *, snippet: str | None = None) -> None:
        self.snippet = snippet
        if snippet is not None:
            message = f"{message} near {_preview(snippet)!r}"
        super().__init__(message)


class MalformedValueError(ExtractionError):
    """No annotation value form matched at the current position."""


class MalformedAnnotationError(ExtractionError):
    """A marker occurrence could not be decoded."""


class MissingPackageDeclarationError(ExtractionError):
    """The file has no ``package ...;`` declaration."""


class MissingClassDeclarationError(ExtractionError):
    """The file has no recognizable type declaration."""


class MalformedParameterEntryError(ExtractionError):
    """One formal parameter could not be decoded; the entry is dropped."""


class FileUnreadableError(ExtractionError):
    """A source file could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}")


def _preview(text: str, limit: int = 40) -> str:
    flattened = " ".join(text.split())
    if len(flattened) > limit:
        return flattened[:limit] + "..."
    return flattened


__all__ = [
    "ExtractionError",
    "FileUnreadableError",
    "MalformedAnnotationError",
    "MalformedParameterEntryError",
    "MalformedValueError",
    "MissingClassDeclarationError",
    "MissingPackageDeclarationError",
]
