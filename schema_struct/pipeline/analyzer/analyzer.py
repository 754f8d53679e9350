"""
Type resolver: converts the Schema AST into the type model.

Phase 2 of the pipeline. Resolves every $ref, builds the (possibly cyclic)
graph of named types, boxes the references that close a cycle and computes
the order in which types must be declared.
"""

from __future__ import annotations

import logging

from ..errors import SchemaError
from ..schema_ast.nodes import (
    ArrayNode,
    DefinitionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaAST,
    SchemaNode,
    TupleNode,
)
from .ir_nodes import (
    Alias,
    Boxed,
    Enum,
    FieldModel,
    List,
    NamedType,
    Optional,
    PathSegment,
    Primitive,
    PrimitiveKind,
    Struct,
    Tuple,
    TypeModel,
    TypeNode,
    VariantModel,
    children,
    named_references,
)
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

_ACTIVE = "active"
_DONE = "done"


class TypeResolver:
    """Resolves a Schema AST into a TypeModel."""

    def resolve(self, ast: SchemaAST) -> TypeModel:
        """
        Resolve the whole schema document.

        Args:
            ast: The parsed schema AST

        Returns:
            TypeModel whose named types are in declaration order, with cycles
            boxed and the emission order computed
        """
        self._refs = ReferenceResolver(ast)
        self._named: list[NamedType] = []
        self._by_pointer: dict[str, NamedType] = {}

        root = self._resolve_named(ast.root_node, "#", parent=None, segments=[])
        # Every subschema is emitted, referenced or not
        for def_node in ast.definitions:
            self._resolve_definition(def_node)

        model = TypeModel(root=root, named=self._named)
        self._check_alias_loops(model)
        self._break_cycles(model)
        model.emission_order = self._emission_order(model)

        logger.debug(
            "Resolved %d named types (%d structs, %d enums, %d aliases)",
            len(model.named),
            sum(isinstance(n, Struct) for n in model.named),
            sum(isinstance(n, Enum) for n in model.named),
            sum(isinstance(n, Alias) for n in model.named),
        )
        return model

    # Named types

    def _resolve_definition(self, def_node: DefinitionNode) -> NamedType:
        return self._resolve_named(
            def_node.body,
            def_node.source_path,
            parent=self._by_pointer["#"],
            segments=[PathSegment("$defs", def_node.name)],
        )

    def _resolve_named(
        self,
        node: SchemaNode,
        pointer: str,
        parent: NamedType | None,
        segments: list[PathSegment],
    ) -> NamedType:
        """Resolve the root or a subschema; anything that is not a struct or enum becomes an alias."""
        if pointer in self._by_pointer:
            return self._by_pointer[pointer]

        if isinstance(node, ObjectNode):
            return self._resolve_struct(node, parent, segments, pointer=pointer)
        if isinstance(node, EnumNode):
            return self._resolve_enum(node, parent, segments, pointer=pointer)

        alias = Alias(**self._named_attrs(node, parent, segments))
        self._register(alias, pointer)
        alias.target = self._resolve_type(node, alias, [])
        return alias

    def _named_attrs(self, node: SchemaNode, parent: NamedType | None, segments: list[PathSegment]) -> dict:
        return {
            "source_path": node.source_path,
            "title": node.title,
            "description": node.description,
            "default": node.default,
            "has_default": node.has_default,
            "parent": parent,
            "segments": segments,
        }

    def _register(self, named: NamedType, pointer: str | None) -> None:
        # Registered before its children are resolved so self-references find it
        self._named.append(named)
        if pointer is not None:
            self._by_pointer[pointer] = named

    def _resolve_struct(
        self,
        node: ObjectNode,
        parent: NamedType | None,
        segments: list[PathSegment],
        pointer: str | None = None,
    ) -> Struct:
        struct = Struct(**self._named_attrs(node, parent, segments))
        self._register(struct, pointer)

        for prop in node.properties:
            field_type = self._resolve_type(prop.type_node, struct, [PathSegment("properties", prop.name)])
            if not prop.is_required:
                field_type = Optional(inner=field_type, source_path=prop.source_path)

            struct.fields.append(
                FieldModel(
                    key=prop.name,
                    type=field_type,
                    required=prop.is_required,
                    source_path=prop.source_path,
                    description=prop.description,
                    default=prop.default,
                    has_default=prop.has_default,
                )
            )
        return struct

    def _resolve_enum(
        self,
        node: EnumNode,
        parent: NamedType | None,
        segments: list[PathSegment],
        pointer: str | None = None,
    ) -> Enum:
        enum = Enum(**self._named_attrs(node, parent, segments))
        enum.variants = [VariantModel(value=value) for value in node.values]
        self._register(enum, pointer)
        return enum

    # Anonymous positions

    def _resolve_type(self, node: SchemaNode, parent: NamedType, segments: list[PathSegment]) -> TypeNode:
        """
        Resolve a schema node in a field, item or tuple element position.

        Args:
            node: Schema node to resolve
            parent: Nearest enclosing named type (naming context for inline types)
            segments: Path from the parent to this node

        Returns:
            The type model node for that position
        """
        if isinstance(node, RefNode):
            resolved = self._refs.resolve(node)
            if resolved.pointer in self._by_pointer:
                return self._by_pointer[resolved.pointer]
            return self._resolve_definition(resolved.target_node)

        if isinstance(node, ObjectNode):
            return self._resolve_struct(node, parent, segments)

        if isinstance(node, EnumNode):
            return self._resolve_enum(node, parent, segments)

        if isinstance(node, ArrayNode):
            element = self._resolve_type(node.items, parent, segments + [PathSegment("items")])
            return List(element=element, source_path=node.source_path, default=node.default, has_default=node.has_default)

        if isinstance(node, TupleNode):
            elements = [
                self._resolve_type(element, parent, segments + [PathSegment("prefixItems", str(i))])
                for i, element in enumerate(node.elements)
            ]
            return Tuple(elements=elements, source_path=node.source_path, default=node.default, has_default=node.has_default)

        if isinstance(node, PrimitiveNode):
            return Primitive(
                kind=PrimitiveKind(node.type_name),
                minimum=node.minimum,
                exclusive_minimum=node.exclusive_minimum,
                source_path=node.source_path,
                default=node.default,
                has_default=node.has_default,
            )

        raise SchemaError(f"cannot resolve schema node {type(node).__name__}", node.source_path)

    # Graph passes

    def _check_alias_loops(self, model: TypeModel) -> None:
        """Reject aliases that only refer to each other (e.g. a root that is just ``$ref: "#"``)."""
        for named in model.named:
            if not isinstance(named, Alias):
                continue
            seen = {id(named)}
            target = named.target
            while isinstance(target, Alias):
                if id(target) in seen:
                    raise SchemaError("reference cycle does not go through any object", named.source_path)
                seen.add(id(target))
                target = target.target

    def _break_cycles(self, model: TypeModel) -> None:
        """Box every edge that closes a cycle, visiting types in declaration order."""
        state: dict[int, str] = {}
        for named in model.named:
            if id(named) not in state:
                self._visit(named, state)

    def _visit(self, named: NamedType, state: dict[int, str]) -> None:
        state[id(named)] = _ACTIVE
        if isinstance(named, Struct):
            for f in named.fields:
                f.type = self._link(f.type, state, absent_capable=False)
        elif isinstance(named, Alias):
            named.target = self._link(named.target, state, absent_capable=False)
        state[id(named)] = _DONE

    def _link(self, node: TypeNode, state: dict[int, str], absent_capable: bool) -> TypeNode:
        """Return the node to store in a slot, boxing it if it closes a cycle.

        A boxed slot must be able to hold "nothing" so that values stay finite:
        slots under an Optional or a List already can, others get wrapped Optional.
        """
        if isinstance(node, NamedType):
            if state.get(id(node)) == _ACTIVE:
                logger.debug("Boxing cycle-closing reference to %s", node.source_path)
                boxed = Boxed(inner=node, source_path=node.source_path)
                return boxed if absent_capable else Optional(inner=boxed, source_path=node.source_path)
            if id(node) not in state:
                self._visit(node, state)
            return node

        if isinstance(node, Optional):
            node.inner = self._link(node.inner, state, absent_capable=True)
        elif isinstance(node, List):
            node.element = self._link(node.element, state, absent_capable=True)
        elif isinstance(node, Tuple):
            node.elements = [self._link(element, state, absent_capable) for element in node.elements]
        return node

    def _emission_order(self, model: TypeModel) -> list[NamedType]:
        """Order named types so each is declared after the types it uses (boxed edges excepted)."""
        order: list[NamedType] = []
        seen: set[int] = set()

        def visit(named: NamedType) -> None:
            if id(named) in seen:
                return
            seen.add(id(named))
            for child in children(named):
                for target, boxed in named_references(child):
                    if not boxed:
                        visit(target)
            order.append(named)

        for named in model.named:
            visit(named)
        return order
