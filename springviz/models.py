"""Core data models shared across springviz components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Annotation values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StringLiteral:
    """A double-quoted annotation argument such as ``"com.example"``."""

    text: str


@dataclass(frozen=True)
class TypeReference:
    """A class-object argument such as ``Foo.class``."""

    identifier: str


@dataclass(frozen=True)
class Array:
    """A brace-delimited list of annotation arguments; tags may be mixed."""

    values: Tuple["Value", ...] = ()


Value = Union[StringLiteral, TypeReference, Array]


@dataclass(frozen=True)
class Single:
    """Payload made of one positional value: ``@Name(value)``."""

    value: Value


@dataclass(frozen=True)
class Keyed:
    """Payload made of ``key = value`` pairs; also used when no payload exists."""

    entries: Dict[str, Value] = field(default_factory=dict)


ArgumentPayload = Union[Single, Keyed]


@dataclass(frozen=True)
class Annotation:
    """A decoded ``@Name(...)`` marker."""

    name: str
    args: ArgumentPayload = field(default_factory=Keyed)

    def value(self) -> Optional[Value]:
        """Return the positional value, or the one bound to ``value``."""
        if isinstance(self.args, Single):
            return self.args.value
        return self.args.entries.get("value")

    def get(self, key: str) -> Optional[Value]:
        """Return the value bound to ``key``; ``value`` also resolves positionals."""
        if key == "value":
            return self.value()
        if isinstance(self.args, Keyed):
            return self.args.entries.get(key)
        return None


# ---------------------------------------------------------------------------
# Extracted declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parameter:
    """One formal parameter of a constructor or factory method."""

    type: str
    name: str
    annotation_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BeanDefinition:
    """A ``@Bean`` factory method."""

    exposed_name: str
    produced_type: str
    parameters: Tuple[Parameter, ...] = ()


@dataclass(frozen=True)
class FieldInjection:
    """An ``@Autowired`` field."""

    type: str
    field_name: str


class ComponentKind(Enum):
    """Stereotype roles a class can be marked with."""

    APPLICATION = "SpringBootApplication"
    CONFIGURATION = "Configuration"
    CONTROLLER = "Controller"
    SERVICE = "Service"
    REPOSITORY = "Repository"
    COMPONENT = "Component"

    @property
    def annotation(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        return _KIND_COLORS[self]

    @classmethod
    def from_annotation(cls, name: str) -> Optional["ComponentKind"]:
        """Map a marker name (including aliases) to its kind."""
        return _KIND_BY_ANNOTATION.get(name)


_KIND_COLORS: Dict[ComponentKind, str] = {
    ComponentKind.APPLICATION: "#2c9162",
    ComponentKind.CONFIGURATION: "#28a9e0",
    ComponentKind.CONTROLLER: "#7050bf",
    ComponentKind.SERVICE: "#a81347",
    ComponentKind.REPOSITORY: "#e06907",
    ComponentKind.COMPONENT: "#ffc400",
}

_KIND_BY_ANNOTATION: Dict[str, ComponentKind] = {kind.value: kind for kind in ComponentKind}
_KIND_BY_ANNOTATION["RestController"] = ComponentKind.CONTROLLER


@dataclass(frozen=True)
class ClassRecord:
    """Everything recovered from one source file."""

    package: str
    name: str
    kind: Optional[ComponentKind] = None
    imports: Tuple[str, ...] = ()
    scan_paths: Tuple[str, ...] = ()
    constructor_parameters: Tuple[Parameter, ...] = ()
    field_injections: Tuple[FieldInjection, ...] = ()
    beans: Tuple[BeanDefinition, ...] = ()
    implemented_interfaces: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable representation."""
        return {
            "package": self.package,
            "name": self.name,
            "kind": self.kind.annotation if self.kind else None,
            "imports": list(self.imports),
            "scan_paths": list(self.scan_paths),
            "constructor_parameters": [_parameter_to_dict(p) for p in self.constructor_parameters],
            "field_injections": [
                {"type": f.type, "field_name": f.field_name} for f in self.field_injections
            ],
            "beans": [
                {
                    "exposed_name": bean.exposed_name,
                    "produced_type": bean.produced_type,
                    "parameters": [_parameter_to_dict(p) for p in bean.parameters],
                }
                for bean in self.beans
            ],
            "implemented_interfaces": list(self.implemented_interfaces),
        }


def _parameter_to_dict(parameter: Parameter) -> Dict[str, Any]:
    return {
        "annotation_names": list(parameter.annotation_names),
        "type": parameter.type,
        "name": parameter.name,
    }


# ---------------------------------------------------------------------------
# Source tree
# ---------------------------------------------------------------------------


@dataclass
class SourceFile:
    """A candidate source file, relative to the scanned root."""

    path: str
    size: int


@dataclass
class SourceTree:
    """Filtered view of the source files under a root directory."""

    root: str
    files: List[SourceFile]
