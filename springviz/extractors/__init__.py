"""Tolerant, text-level extraction of annotated class metadata."""

from .annotations import parse_all_annotations, parse_annotation
from .classes import extract_class
from .errors import (
    ExtractionError,
    FileUnreadableError,
    MalformedAnnotationError,
    MalformedParameterEntryError,
    MalformedValueError,
    MissingClassDeclarationError,
    MissingPackageDeclarationError,
)
from .parameters import parse_parameter_list
from .values import parse_argument_payload, parse_value

__all__ = [
    "ExtractionError",
    "FileUnreadableError",
    "MalformedAnnotationError",
    "MalformedParameterEntryError",
    "MalformedValueError",
    "MissingClassDeclarationError",
    "MissingPackageDeclarationError",
    "extract_class",
    "parse_all_annotations",
    "parse_annotation",
    "parse_argument_payload",
    "parse_parameter_list",
    "parse_value",
]
