"""Cursor helpers shared by the extraction grammars.

Every helper takes the remaining text and returns what it consumed plus the
new remainder; nothing keeps parser state between calls.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

JAVA_MODIFIERS = frozenset(
    {
        "public",
        "protected",
        "private",
        "static",
        "final",
        "transient",
        "volatile",
        "synchronized",
        "abstract",
        "default",
    }
)


def is_identifier_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


def take_identifier(text: str) -> Tuple[str, str]:
    """Split ``text`` into its leading identifier run and the rest."""
    index = 0
    while index < len(text) and is_identifier_char(text[index]):
        index += 1
    return text[:index], text[index:]


def take_type(text: str) -> Tuple[str, str]:
    """Read a (possibly qualified, generic or array) type name.

    ``java.util.List<Foo>[]`` is returned whole; an empty string means no type
    starts at the cursor.
    """
    name, rest = take_identifier(text)
    if not name:
        return "", text
    while rest.startswith(".") and not rest.startswith("..."):
        segment, after = take_identifier(rest[1:])
        if not segment:
            break
        name = f"{name}.{segment}"
        rest = after
    if rest.startswith("<"):
        closing = find_closing(rest, 0, "<", ">")
        if closing is None:
            return "", text
        name += rest[: closing + 1]
        rest = rest[closing + 1 :]
    while True:
        stripped = rest.lstrip()
        if stripped.startswith("[]"):
            name += "[]"
            rest = stripped[2:]
        elif stripped.startswith("..."):
            name += "..."
            rest = stripped[3:]
        else:
            break
    return name, rest


def skip_modifiers(text: str) -> str:
    """Drop leading Java modifier keywords and surrounding whitespace."""
    rest = text.lstrip()
    while True:
        word, after = take_identifier(rest)
        if word not in JAVA_MODIFIERS:
            return rest
        rest = after.lstrip()


def find_closing(text: str, open_index: int, open_char: str = "(", close_char: str = ")") -> Optional[int]:
    """Return the index of the delimiter matching ``text[open_index]``.

    Double-quoted runs are skipped; there is no escape handling.
    """
    depth = 0
    in_string = False
    for index in range(open_index, len(text)):
        char = text[index]
        if char == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
    return None


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on ``separator`` outside quotes and parentheses."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    in_string = False
    for char in text:
        if char == '"':
            in_string = not in_string
        elif not in_string:
            if char == "(":
                depth += 1
            elif char == ")":
                depth = max(depth - 1, 0)
            elif char == separator and depth == 0:
                parts.append("".join(current))
                current = []
                continue
        current.append(char)
    parts.append("".join(current))
    return parts


__all__ = [
    "JAVA_MODIFIERS",
    "find_closing",
    "is_identifier_char",
    "skip_modifiers",
    "split_top_level",
    "take_identifier",
    "take_type",
]
