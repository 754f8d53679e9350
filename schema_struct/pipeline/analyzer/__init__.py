"""
Analyzer module.

Contains reference resolution, type resolution, naming and default resolution.
"""

from __future__ import annotations

from .analyzer import TypeResolver
from .default_resolver import DefaultResolver
from .ir_nodes import (
    Alias,
    Boxed,
    Enum,
    FieldModel,
    List,
    NamedType,
    Optional,
    Primitive,
    PrimitiveKind,
    Struct,
    Tuple,
    TypeModel,
    TypeNode,
    VariantModel,
)
from .name_resolver import NameResolver
from .reference_resolver import ReferenceResolver, ResolvedRef

__all__ = [
    "Alias",
    "Boxed",
    "DefaultResolver",
    "Enum",
    "FieldModel",
    "List",
    "NameResolver",
    "NamedType",
    "Optional",
    "Primitive",
    "PrimitiveKind",
    "ReferenceResolver",
    "ResolvedRef",
    "Struct",
    "Tuple",
    "TypeModel",
    "TypeNode",
    "TypeResolver",
    "VariantModel",
]
