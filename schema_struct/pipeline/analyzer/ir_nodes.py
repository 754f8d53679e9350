"""
IR (Intermediate Representation) node definitions.

These nodes form the type model: a de-referenced graph that drives code
generation. The graph may be cyclic through struct fields, so nodes
compare by identity. Only the type resolver creates or restructures
nodes; naming and default resolution fill in attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum as PyEnum
from typing import Any


class PrimitiveKind(PyEnum):
    """Primitive JSON types and the Python types they map to."""

    NULL = "null"  # None
    BOOLEAN = "boolean"  # bool
    INTEGER = "integer"  # int
    NUMBER = "number"  # float
    STRING = "string"  # str


@dataclass(eq=False)
class TypeNode:
    """Base class for all type model nodes."""

    source_path: str = ""

    # The schema's own "default" for this slot, before type checking
    default: Any = None
    has_default: bool = False


@dataclass(eq=False)
class PathSegment:
    """One step from a named type's parent to the type itself.

    ``keyword`` is the schema keyword crossed ("properties", "items",
    "prefixItems" or "$defs"), ``key`` the property name, tuple index or
    subschema name (None for "items").
    """

    keyword: str
    key: str | None = None


@dataclass(eq=False)
class NamedType(TypeNode):
    """A type that gets its own declaration: Struct, Enum or Alias."""

    name: str | None = None
    title: str | None = None
    description: str | None = None

    # Naming context: nearest named ancestor and the path from it
    parent: NamedType | None = field(default=None, repr=False)
    segments: list[PathSegment] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class Primitive(TypeNode):
    kind: PrimitiveKind = PrimitiveKind.STRING
    minimum: float | None = None
    exclusive_minimum: float | None = None

    @property
    def has_bounds(self) -> bool:
        return self.minimum is not None or self.exclusive_minimum is not None


@dataclass(eq=False)
class List(TypeNode):
    element: TypeNode | None = None


@dataclass(eq=False)
class Tuple(TypeNode):
    elements: list[TypeNode] = field(default_factory=list)


@dataclass(eq=False)
class Optional(TypeNode):
    """A slot that may be absent; serialized as null."""

    inner: TypeNode | None = None


@dataclass(eq=False)
class Boxed(TypeNode):
    """Wraps a cycle-closing reference to a named type.

    Boxed references never constrain declaration order.
    """

    inner: NamedType | None = None


@dataclass(eq=False)
class FieldModel:
    """A field of a generated struct."""

    key: str  # Original JSON property name, used on the wire
    type: TypeNode
    required: bool = False
    source_path: str = ""
    description: str | None = None

    # Default literal written on the property (or beside its $ref)
    default: Any = None
    has_default: bool = False

    # Filled by the naming engine
    name: str | None = None

    # Filled by the default resolver
    default_value: DefaultValue | None = None


@dataclass(eq=False)
class Struct(NamedType):
    fields: list[FieldModel] = field(default_factory=list)

    # Filled by the default resolver: every field can be defaulted
    has_default_instance: bool = False


@dataclass(eq=False)
class VariantModel:
    """An enum variant: the wire string and its identifier."""

    value: str
    name: str | None = None


@dataclass(eq=False)
class Enum(NamedType):
    variants: list[VariantModel] = field(default_factory=list)


@dataclass(eq=False)
class Alias(NamedType):
    target: TypeNode | None = None


@dataclass(eq=False)
class DefaultValue:
    """Base class for resolved, type-checked default values."""


@dataclass(eq=False)
class NoneDefault(DefaultValue):
    """The slot is explicitly empty (``None``)."""


@dataclass(eq=False)
class LiteralDefault(DefaultValue):
    """A primitive literal (bool, int, float or str)."""

    value: Any = None


@dataclass(eq=False)
class EnumDefault(DefaultValue):
    enum: Enum | None = None
    variant: VariantModel | None = None


@dataclass(eq=False)
class ListDefault(DefaultValue):
    items: list[DefaultValue] = field(default_factory=list)


@dataclass(eq=False)
class TupleDefault(DefaultValue):
    items: list[DefaultValue] = field(default_factory=list)


@dataclass(eq=False)
class StructDefault(DefaultValue):
    """A struct instance: one value per field, in field order."""

    struct: Struct | None = None
    values: list[tuple[FieldModel, DefaultValue]] = field(default_factory=list)


@dataclass(eq=False)
class TypeModel:
    """The complete resolved type model of one schema document."""

    root: NamedType
    # Every named type in declaration order (root first)
    named: list[NamedType] = field(default_factory=list)
    # Named types in declaration-before-use order, filled by the type resolver
    emission_order: list[NamedType] = field(default_factory=list)


def named_references(node: TypeNode) -> list[tuple[NamedType, bool]]:
    """List the named types a type expression refers to, with whether each edge is boxed.

    Descends through anonymous containers (List, Tuple, Optional) and stops at named types.
    """
    if isinstance(node, NamedType):
        return [(node, False)]
    if isinstance(node, Boxed):
        return [(node.inner, True)]
    if isinstance(node, Optional):
        return named_references(node.inner)
    if isinstance(node, List):
        return named_references(node.element)
    if isinstance(node, Tuple):
        return [ref for element in node.elements for ref in named_references(element)]
    return []


def children(named: NamedType) -> list[TypeNode]:
    """Type expressions directly owned by a named type."""
    if isinstance(named, Struct):
        return [f.type for f in named.fields]
    if isinstance(named, Alias):
        return [named.target]
    return []
