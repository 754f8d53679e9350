"""
AST (Abstract Syntax Tree) node definitions for JSON Schema.

These nodes represent the parsed structure of a JSON Schema before
any reference resolution or naming. The tree is discarded once the
type model has been resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Original source location in schema (JSON pointer, for error messages)
    source_path: str = ""

    title: str | None = None
    description: str | None = None

    # "default" may legitimately be null, so presence is tracked separately
    default: Any = None
    has_default: bool = False


@dataclass
class PrimitiveNode(SchemaNode):
    """Represents a primitive type (string, integer, number, boolean, null)."""

    type_name: str = ""

    # Validation constraints (integer and number only)
    minimum: float | None = None
    exclusive_minimum: float | None = None


@dataclass
class EnumNode(SchemaNode):
    """Represents an enumeration of strings."""

    values: list[str] = field(default_factory=list)


@dataclass
class RefNode(SchemaNode):
    """Represents a $ref (unresolved reference)."""

    ref_path: str = ""  # e.g. "#", "#/$defs/address"


@dataclass
class ArrayNode(SchemaNode):
    """Represents a homogeneous array (``items``)."""

    items: SchemaNode | None = None


@dataclass
class TupleNode(SchemaNode):
    """Represents a fixed-length array (``prefixItems``)."""

    elements: list[SchemaNode] = field(default_factory=list)


@dataclass
class PropertyDef(SchemaNode):
    """Represents a property in an object."""

    name: str = ""
    type_node: SchemaNode | None = None
    is_required: bool = False


@dataclass
class ObjectNode(SchemaNode):
    """Represents an object type with properties."""

    properties: list[PropertyDef] = field(default_factory=list)
    required: list[str] = field(default_factory=list)


@dataclass
class DefinitionNode(SchemaNode):
    """Represents a named subschema ($defs or definitions entry)."""

    name: str = ""
    body: SchemaNode | None = None


@dataclass
class SchemaAST:
    """Root of the parsed schema AST."""

    root_node: SchemaNode | None = None
    definitions: list[DefinitionNode] = field(default_factory=list)

    # Raw schema for reference
    raw_schema: dict[str, Any] = field(default_factory=dict)
