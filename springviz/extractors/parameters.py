"""Formal parameter lists for constructors and factory methods."""

from __future__ import annotations

from typing import List

from ..logging import get_logger
from ..models import Parameter
from .errors import MalformedParameterEntryError
from .text import split_top_level

logger = get_logger("extractors.parameters")


def parse_parameter(entry: str) -> Parameter:
    """Decode ``[@Marker ...] Type name``."""
    tokens = entry.split()
    index = 0
    while index < len(tokens) and tokens[index].startswith("@"):
        index += 1
    annotation_names = tuple(tokens[:index])
    trailing = tokens[index:]
    if len(trailing) != 2:
        raise MalformedParameterEntryError(
            "Expected markers followed by a type and a name", snippet=entry
        )
    type_name, name = trailing
    return Parameter(type=type_name, name=name, annotation_names=annotation_names)


def parse_parameter_list(text: str) -> List[Parameter]:
    """Decode the text between a signature's parentheses.

    Entries that do not decode are dropped; their siblings are kept.
    """
    if not text.strip():
        return []
    parameters: List[Parameter] = []
    for raw in split_top_level(text):
        entry = raw.strip()
        try:
            parameters.append(parse_parameter(entry))
        except MalformedParameterEntryError as exc:
            logger.debug("Dropping parameter entry: %s", exc)
    return parameters


__all__ = ["parse_parameter", "parse_parameter_list"]
