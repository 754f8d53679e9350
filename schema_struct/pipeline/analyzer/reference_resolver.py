"""
Reference resolver for $ref resolution.

Only document-local references are supported: ``#`` (the root schema)
and ``#/$defs/<name>`` or ``#/definitions/<name>`` (named subschemas).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import UnresolvedReference
from ..schema_ast.nodes import DefinitionNode, RefNode, SchemaAST
from ..schema_ast.parser import DEFINITION_KEYWORDS, escape_pointer_segment, unescape_pointer_segment


@dataclass
class ResolvedRef:
    """A resolved $ref."""

    pointer: str = ""  # Canonical JSON pointer of the target, e.g. "#/$defs/address"
    target_node: DefinitionNode | None = None  # None when the target is the root

    @property
    def is_root(self) -> bool:
        return self.target_node is None


class ReferenceResolver:
    """Resolves $ref to the root or a named subschema."""

    def __init__(self, ast: SchemaAST):
        """
        Initialize the resolver.

        Args:
            ast: The parsed schema AST
        """
        self.ast = ast
        self._definition_cache: dict[str, DefinitionNode] = {}
        self._build_cache()

    def _build_cache(self) -> None:
        """Build a cache of definitions by JSON pointer."""
        for def_node in self.ast.definitions:
            self._definition_cache[def_node.source_path] = def_node

    def resolve(self, ref_node: RefNode) -> ResolvedRef:
        """
        Resolve a $ref node to its target.

        Args:
            ref_node: The RefNode to resolve

        Returns:
            ResolvedRef with target information

        Raises:
            UnresolvedReference: If the reference is external, malformed or dangling
        """
        ref_path = ref_node.ref_path

        if ref_path == "#":
            return ResolvedRef(pointer="#")

        if not ref_path.startswith("#/"):
            raise UnresolvedReference(f"unsupported reference {ref_path!r} (only '#' and '#/$defs/<name>' are supported)", ref_node.source_path)

        # e.g. "#/$defs/MyClass" -> ["$defs", "MyClass"]
        parts = ref_path[2:].split("/")
        if len(parts) != 2 or parts[0] not in DEFINITION_KEYWORDS:
            raise UnresolvedReference(f"unsupported reference {ref_path!r} (only '#' and '#/$defs/<name>' are supported)", ref_node.source_path)

        keyword, name = parts[0], unescape_pointer_segment(parts[1])
        pointer = f"#/{keyword}/{escape_pointer_segment(name)}"
        def_node = self._definition_cache.get(pointer)
        if def_node is None:
            raise UnresolvedReference(f"reference {ref_path!r} does not match any subschema", ref_node.source_path)

        return ResolvedRef(pointer=pointer, target_node=def_node)

    def get_definition(self, pointer: str) -> DefinitionNode | None:
        """Get a definition by JSON pointer."""
        return self._definition_cache.get(pointer)
