"""Annotation scanner built on the value grammar."""

from __future__ import annotations

from typing import List, Tuple

from ..models import Annotation, Keyed
from .errors import MalformedAnnotationError
from .text import find_closing, take_identifier
from .values import parse_argument_payload


def parse_annotation(text: str) -> Tuple[Annotation, str]:
    """Decode the ``@Name`` or ``@Name(...)`` marker at the start of ``text``.

    Whitespace after the marker is consumed so that consecutive markers can
    be read back to back. A bare ``@`` (as in prose) yields an empty name.
    """
    if not text.startswith("@"):
        raise MalformedAnnotationError("Expected '@'", snippet=text)
    name, rest = take_identifier(text[1:])
    rest = rest.lstrip()

    if not rest.startswith("("):
        return Annotation(name=name, args=Keyed()), rest

    closing = find_closing(rest, 0)
    if closing is None:
        raise MalformedAnnotationError(f"Unclosed arguments for @{name}", snippet=rest)
    between = rest[1:closing]
    rest = rest[closing + 1 :].lstrip()
    if not between.strip():
        return Annotation(name=name, args=Keyed()), rest
    return Annotation(name=name, args=parse_argument_payload(between)), rest


def parse_annotation_run(text: str) -> Tuple[List[Annotation], str]:
    """Read markers for as long as the remainder starts with ``@``."""
    annotations: List[Annotation] = []
    rest = text.lstrip()
    while rest.startswith("@"):
        annotation, rest = parse_annotation(rest)
        annotations.append(annotation)
    return annotations, rest


def parse_all_annotations(text: str) -> Tuple[List[Annotation], str]:
    """Collect every marker from the cursor onward, in source order."""
    annotations: List[Annotation] = []
    rest = text
    while True:
        position = rest.find("@")
        if position == -1:
            return annotations, rest
        annotation, rest = parse_annotation(rest[position:])
        annotations.append(annotation)


__all__ = ["parse_all_annotations", "parse_annotation", "parse_annotation_run"]
