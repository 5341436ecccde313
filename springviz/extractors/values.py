"""Annotation value grammar.

A value is one of three forms::

    "text"              -> StringLiteral
    Name.class          -> TypeReference
    {value, value, ...} -> Array (recursive, possibly empty)

Each production takes the remaining text and returns the decoded value with
the new remainder.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..logging import get_logger
from ..models import Array, ArgumentPayload, Keyed, Single, StringLiteral, TypeReference, Value
from .errors import MalformedValueError
from .text import take_identifier

_CLASS_SUFFIX = ".class"

logger = get_logger("extractors.values")


def parse_value(text: str) -> Tuple[Value, str]:
    """Decode the value at the start of ``text``."""
    if text.startswith('"'):
        return _parse_string(text)
    if text.startswith("{"):
        return _parse_array(text)
    return _parse_type_reference(text)


def _parse_string(text: str) -> Tuple[StringLiteral, str]:
    end = text.find('"', 1)
    if end == -1:
        raise MalformedValueError("Unterminated string literal", snippet=text)
    return StringLiteral(text[1:end]), text[end + 1 :]


def _parse_type_reference(text: str) -> Tuple[TypeReference, str]:
    position = text.find(_CLASS_SUFFIX)
    if position == -1:
        raise MalformedValueError("Expected a string, array or Name.class value", snippet=text)
    identifier = text[:position].strip()
    if not identifier:
        raise MalformedValueError("Missing type name before .class", snippet=text)
    return TypeReference(identifier), text[position + len(_CLASS_SUFFIX) :]


def _parse_array(text: str) -> Tuple[Array, str]:
    rest = text[1:].lstrip()
    values: List[Value] = []
    if rest.startswith("}"):
        return Array(()), rest[1:]
    while True:
        value, rest = parse_value(rest)
        values.append(value)
        rest = rest.lstrip()
        if rest.startswith(","):
            rest = rest[1:].lstrip()
            # Trailing comma before the closing brace.
            if rest.startswith("}"):
                return Array(tuple(values)), rest[1:]
            continue
        if rest.startswith("}"):
            return Array(tuple(values)), rest[1:]
        raise MalformedValueError("Expected ',' or '}' inside array", snippet=rest)


def parse_keyed_entries(text: str) -> Tuple[Dict[str, Value], str]:
    """Consume ``key = value`` pairs until one no longer matches.

    Later duplicates overwrite earlier keys. The unconsumed remainder is
    returned so callers can report it.
    """
    entries: Dict[str, Value] = {}
    rest = text.lstrip()
    while rest:
        key, after = take_identifier(rest)
        after = after.lstrip()
        if not key or not after.startswith("="):
            break
        try:
            value, after = parse_value(after[1:].lstrip())
        except MalformedValueError as exc:
            logger.debug("Stopped reading keyed payload at %r: %s", key, exc)
            break
        entries[key] = value
        after = after.lstrip()
        if after.startswith(","):
            after = after[1:]
        rest = after.lstrip()
    return entries, rest


def parse_argument_payload(text: str) -> ArgumentPayload:
    """Decode the raw text found between an annotation's parentheses.

    Any ``=`` anywhere selects the keyed form, even one inside a string
    literal: ``@Value("a=b")`` is read as an (empty) keyed payload.
    """
    if "=" in text:
        entries, rest = parse_keyed_entries(text)
        if rest:
            logger.debug("Ignoring unparsed keyed payload text %r", rest)
        return Keyed(entries)
    value, rest = parse_value(text.strip())
    if rest.strip():
        logger.debug("Ignoring trailing payload text %r", rest)
    return Single(value)


__all__ = ["parse_argument_payload", "parse_keyed_entries", "parse_value"]
