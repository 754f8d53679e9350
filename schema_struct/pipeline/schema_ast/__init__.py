"""
Schema AST - Phase 1 of the pipeline.
"""

from __future__ import annotations

from .nodes import (
    ArrayNode,
    DefinitionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaAST,
    SchemaNode,
    TupleNode,
)
from .parser import SchemaParser

__all__ = [
    "ArrayNode",
    "DefinitionNode",
    "EnumNode",
    "ObjectNode",
    "PrimitiveNode",
    "PropertyDef",
    "RefNode",
    "SchemaAST",
    "SchemaNode",
    "SchemaParser",
    "TupleNode",
]
