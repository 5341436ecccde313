"""Class metadata extractor.

The extractor never tokenizes the whole file. It runs a fixed sequence of
independent scan-and-slice stages over the raw text:

1. ``package`` declaration (required)
2. class-level annotations (imports, component scans, stereotype)
3. type declaration and its name (required)
4. ``implements`` list in the declaration header
5. constructor signature
6. ``@Autowired`` fields
7. ``@Bean`` factory methods

Stages 4-7 all read the text that follows the type name and default to empty
when nothing is found.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import (
    Annotation,
    Array,
    BeanDefinition,
    ClassRecord,
    ComponentKind,
    FieldInjection,
    Keyed,
    Parameter,
    StringLiteral,
    TypeReference,
    Value,
)
from .annotations import parse_annotation, parse_annotation_run
from .errors import (
    MalformedAnnotationError,
    MissingClassDeclarationError,
    MissingPackageDeclarationError,
)
from .parameters import parse_parameter_list
from .text import find_closing, skip_modifiers, take_identifier, take_type

IMPORT_ANNOTATION = "Import"
COMPONENT_SCAN_ANNOTATION = "ComponentScan"
APPLICATION_ANNOTATION = ComponentKind.APPLICATION.annotation
FIELD_INJECTION_MARKER = "@Autowired"
BEAN_MARKER = "@Bean"

_PACKAGE_DECLARATION = re.compile(r"^\s*package\s+([^;]*);", re.MULTILINE)
_TYPE_DECLARATION = re.compile(r"(?<![\w$.@])(?:class|interface|enum|record)\s+(?=[A-Za-z_$])")
_IMPLEMENTS = re.compile(r"\bimplements\b")

logger = get_logger("extractors.classes")


def extract_class(text: str) -> ClassRecord:
    """Build the metadata record for one source file's text."""
    package, rest = _extract_package(text)
    annotations, rest = _extract_class_annotations(rest)

    imports: List[str] = []
    scan_paths: List[str] = []
    kind: Optional[ComponentKind] = None
    scan_declared = False
    application_root = False
    for annotation in annotations:
        if annotation.name == IMPORT_ANNOTATION:
            imports.extend(_type_references(annotation.value()))
        elif annotation.name == COMPONENT_SCAN_ANNOTATION:
            scan_declared = True
            scan_paths.extend(_scan_paths(annotation, package))
        if annotation.name == APPLICATION_ANNOTATION:
            application_root = True
        marked = ComponentKind.from_annotation(annotation.name)
        if marked is not None:
            if kind is not None and kind is not marked:
                logger.debug("Stereotype @%s replaces %s", annotation.name, kind.annotation)
            kind = marked
    if application_root and not scan_declared:
        scan_paths = [package]

    name, body = _extract_name(rest)
    record = ClassRecord(
        package=package,
        name=name,
        kind=kind,
        imports=tuple(imports),
        scan_paths=tuple(scan_paths),
        constructor_parameters=tuple(_extract_constructor(name, body)),
        field_injections=tuple(_extract_field_injections(body)),
        beans=tuple(_extract_beans(body)),
        implemented_interfaces=tuple(_extract_interfaces(body)),
    )
    logger.debug("Extracted %s.%s", package, name)
    return record


# ---------------------------------------------------------------------------
# Package and class-level annotations
# ---------------------------------------------------------------------------


def _extract_package(text: str) -> Tuple[str, str]:
    match = _PACKAGE_DECLARATION.search(text)
    if match is None or not match.group(1).strip():
        raise MissingPackageDeclarationError("No package declaration found")
    return match.group(1).strip(), text[match.end() :]


def _extract_class_annotations(text: str) -> Tuple[List[Annotation], str]:
    """Collect markers that appear before the type declaration.

    Text between runs of markers (comments, imports) is skipped.
    """
    annotations: List[Annotation] = []
    rest = text
    while True:
        position = rest.find("@")
        if position == -1:
            return annotations, rest
        declaration = _TYPE_DECLARATION.search(rest)
        if declaration is not None and declaration.start() < position:
            return annotations, rest
        found, rest = parse_annotation_run(rest[position:])
        annotations.extend(found)


def _type_references(value: Optional[Value]) -> List[str]:
    if isinstance(value, TypeReference):
        return [value.identifier]
    if isinstance(value, Array):
        return [item.identifier for item in value.values if isinstance(item, TypeReference)]
    return []


def _scan_paths(annotation: Annotation, package: str) -> List[str]:
    value = annotation.value()
    if value is None:
        value = annotation.get("basePackages")
    if value is None:
        # A bare @ComponentScan scans the declaring package.
        if isinstance(annotation.args, Keyed) and not annotation.args.entries:
            return [package]
        return []
    if isinstance(value, StringLiteral):
        return [value.text]
    if isinstance(value, Array):
        if not value.values:
            return [package]
        return [item.text for item in value.values if isinstance(item, StringLiteral)]
    return []


# ---------------------------------------------------------------------------
# Type declaration
# ---------------------------------------------------------------------------


def _extract_name(text: str) -> Tuple[str, str]:
    match = _TYPE_DECLARATION.search(text)
    if match is None:
        raise MissingClassDeclarationError("No class declaration found")
    name, rest = take_identifier(text[match.end() :])
    if not name:
        raise MissingClassDeclarationError("Class declaration has no name", snippet=text[match.start() :])
    return name, rest


def _extract_interfaces(body: str) -> List[str]:
    brace = body.find("{")
    header = body if brace == -1 else body[:brace]
    match = _IMPLEMENTS.search(header)
    if match is None:
        return []
    return [item.strip() for item in header[match.end() :].split(",") if item.strip()]


def _extract_constructor(name: str, body: str) -> List[Parameter]:
    pattern = re.compile(rf"(?<![\w$.])(?<!new\s){re.escape(name)}\s*\(")
    match = pattern.search(body)
    if match is None:
        return []
    opening = match.end() - 1
    closing = find_closing(body, opening)
    if closing is None:
        logger.debug("Constructor of %s has no closing parenthesis", name)
        return []
    return parse_parameter_list(body[opening + 1 : closing])


# ---------------------------------------------------------------------------
# Member markers
# ---------------------------------------------------------------------------


def _find_marker(text: str, marker: str) -> int:
    """Index of ``marker`` followed by whitespace, ``(`` or the end, or -1."""
    start = 0
    while True:
        position = text.find(marker, start)
        if position == -1:
            return -1
        end = position + len(marker)
        if end >= len(text) or text[end].isspace() or text[end] == "(":
            return position
        start = end


def _skip_member_preamble(text: str) -> str:
    """Skip annotations, modifiers and generic type parameters."""
    rest = text
    while True:
        _, after = parse_annotation_run(rest)
        after = skip_modifiers(after)
        if after.startswith("<"):
            closing = find_closing(after, 0, "<", ">")
            if closing is not None:
                after = after[closing + 1 :]
        if after == rest:
            return rest
        rest = after


def _extract_field_injections(body: str) -> List[FieldInjection]:
    injections: List[FieldInjection] = []
    rest = body
    while True:
        position = _find_marker(rest, FIELD_INJECTION_MARKER)
        if position == -1:
            return injections
        injection, rest = _read_field_injection(rest[position:])
        if injection is not None:
            injections.append(injection)


def _read_field_injection(text: str) -> Tuple[Optional[FieldInjection], str]:
    _, rest = parse_annotation(text)
    rest = _skip_member_preamble(rest)
    type_name, rest = take_type(rest)
    if not type_name:
        raise MalformedAnnotationError(f"Expected a field type after {FIELD_INJECTION_MARKER}", snippet=text)
    if rest.lstrip().startswith("("):
        # Marked constructor.
        return None, rest
    field_name, rest = take_identifier(rest.lstrip())
    if not field_name:
        raise MalformedAnnotationError(f"Expected a field name after {FIELD_INJECTION_MARKER}", snippet=text)
    follow = rest.lstrip()
    if follow.startswith("("):
        # Marked setter or other method.
        return None, rest
    if follow.startswith(";"):
        rest = follow[1:]
    return FieldInjection(type=type_name, field_name=field_name), rest


def _extract_beans(body: str) -> List[BeanDefinition]:
    beans: List[BeanDefinition] = []
    rest = body
    while True:
        position = _find_marker(rest, BEAN_MARKER)
        if position == -1:
            return beans
        bean, rest = _read_bean(rest[position:])
        beans.append(bean)


def _read_bean(text: str) -> Tuple[BeanDefinition, str]:
    marker, rest = parse_annotation(text)
    rest = _skip_member_preamble(rest)
    produced_type, rest = take_type(rest)
    if not produced_type:
        raise MalformedAnnotationError(f"Expected a return type after {BEAN_MARKER}", snippet=text)
    method_name, rest = take_identifier(rest.lstrip())
    if not method_name:
        raise MalformedAnnotationError(f"Expected a method name after {BEAN_MARKER}", snippet=text)
    rest = rest.lstrip()
    closing = find_closing(rest, 0) if rest.startswith("(") else None
    if closing is None:
        raise MalformedAnnotationError(f"Expected a parameter list for {method_name}", snippet=rest)
    parameters = parse_parameter_list(rest[1:closing])
    return (
        BeanDefinition(
            exposed_name=_exposed_name(marker, ("value", "name")) or method_name,
            produced_type=produced_type,
            parameters=tuple(parameters),
        ),
        rest[closing + 1 :],
    )


def _exposed_name(marker: Annotation, keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = marker.get(key)
        if isinstance(value, StringLiteral):
            return value.text
    return None


__all__ = ["extract_class"]
