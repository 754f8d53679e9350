"""
Default resolver: type-checks default literals and fills in partial ones.

A composite default may leave out keys (objects) or trailing elements
(tuples). Each missing slot falls back to the nested schema's own
default, then to ``None`` if the slot is optional. A mandatory slot with
no default of its own is an error: the generator never invents values.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import MissingDefault, SchemaError
from .ir_nodes import (
    Alias,
    Boxed,
    DefaultValue,
    Enum,
    EnumDefault,
    FieldModel,
    List,
    ListDefault,
    LiteralDefault,
    NoneDefault,
    Optional,
    Primitive,
    PrimitiveKind,
    Struct,
    StructDefault,
    Tuple,
    TupleDefault,
    TypeModel,
    TypeNode,
)

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class DefaultResolver:
    """Attaches a resolved DefaultValue to every struct field of a TypeModel."""

    def __init__(self):
        # (struct, property) slots currently being filled from their own default
        self._expanding: set[tuple[int, str]] = set()

    def resolve(self, model: TypeModel) -> None:
        """
        Resolve field defaults in place, innermost types first.

        Fields that have no default and are optional get ``NoneDefault``;
        mandatory fields without one keep ``default_value = None``.

        Raises:
            SchemaError: If a default literal does not match its schema
            MissingDefault: If a partial default omits a mandatory slot with no default
        """
        for named in model.emission_order:
            if not isinstance(named, Struct):
                continue

            explicit = False
            for f in named.fields:
                present, literal = self._field_literal(f)
                if present:
                    f.default_value = self._check(f.type, literal, f.source_path)
                    explicit = True
                elif isinstance(f.type, Optional):
                    f.default_value = NoneDefault()

            named.has_default_instance = explicit and all(f.default_value is not None for f in named.fields)
            logger.debug("Resolved defaults for %s (default instance: %s)", named.name, named.has_default_instance)

    def _field_literal(self, f: FieldModel) -> tuple[bool, Any]:
        """The literal a field defaults to: its own, else the one of the schema it refers to."""
        if f.has_default:
            return True, f.default
        return self._own_default(f.type)

    def _own_default(self, node: TypeNode) -> tuple[bool, Any]:
        if isinstance(node, Optional):
            return self._own_default(node.inner)
        if isinstance(node, Boxed):
            # Cycle-closing slots stay empty rather than unrolling the target's default
            return False, None
        return node.has_default, node.default

    def _fallback(self, node: TypeNode, literal: tuple[bool, Any], path: str) -> DefaultValue:
        """Default for a slot a composite default left out."""
        present, value = literal
        if present:
            return self._check(node, value, path)
        if isinstance(node, Optional) or (isinstance(node, Primitive) and node.kind is PrimitiveKind.NULL):
            return NoneDefault()
        raise MissingDefault("partial default omits this value and its schema has no default", path)

    def _check(self, node: TypeNode, value: Any, path: str) -> DefaultValue:
        """
        Check a literal against a type and convert it to a DefaultValue.

        Args:
            node: Expected type
            value: JSON literal
            path: Schema location used in error messages
        """
        if isinstance(node, Optional):
            if value is None:
                return NoneDefault()
            return self._check(node.inner, value, path)

        if isinstance(node, Boxed):
            return self._check(node.inner, value, path)

        if isinstance(node, Alias):
            return self._check(node.target, value, path)

        if isinstance(node, Primitive):
            return self._check_primitive(node, value, path)

        if isinstance(node, Enum):
            for variant in node.variants:
                if variant.value == value:
                    return EnumDefault(enum=node, variant=variant)
            raise SchemaError(f"default {value!r} is not one of {[v.value for v in node.variants]}", path)

        if isinstance(node, List):
            if not isinstance(value, list):
                raise SchemaError(f"default for an array must be a JSON array, got {value!r}", path)
            return ListDefault(items=[self._check(node.element, item, f"{path}/{i}") for i, item in enumerate(value)])

        if isinstance(node, Tuple):
            return self._check_tuple(node, value, path)

        if isinstance(node, Struct):
            return self._check_struct(node, value, path)

        raise SchemaError(f"cannot check default against {type(node).__name__}", path)

    def _check_primitive(self, node: Primitive, value: Any, path: str) -> DefaultValue:
        kind = node.kind
        if kind is PrimitiveKind.NULL:
            if value is not None:
                raise SchemaError(f"default for null must be null, got {value!r}", path)
            return NoneDefault()

        if kind is PrimitiveKind.BOOLEAN:
            ok = isinstance(value, bool)
        elif kind is PrimitiveKind.INTEGER:
            ok = isinstance(value, int) and not isinstance(value, bool)
        elif kind is PrimitiveKind.NUMBER:
            ok = _is_number(value)
        else:
            ok = isinstance(value, str)
        if not ok:
            raise SchemaError(f"default {value!r} is not a valid {kind.value}", path)

        if node.minimum is not None and value < node.minimum:
            raise SchemaError(f"default {value!r} is below minimum {node.minimum}", path)
        if node.exclusive_minimum is not None and value <= node.exclusive_minimum:
            raise SchemaError(f"default {value!r} is not above exclusive minimum {node.exclusive_minimum}", path)

        if kind is PrimitiveKind.NUMBER:
            value = float(value)
        return LiteralDefault(value=value)

    def _check_tuple(self, node: Tuple, value: Any, path: str) -> TupleDefault:
        if not isinstance(value, list):
            raise SchemaError(f"default for a tuple must be a JSON array, got {value!r}", path)
        if len(value) > len(node.elements):
            raise SchemaError(f"default has {len(value)} elements, tuple has {len(node.elements)}", path)

        items = []
        for i, element in enumerate(node.elements):
            item_path = f"{path}/{i}"
            if i < len(value):
                items.append(self._check(element, value[i], item_path))
            else:
                items.append(self._fallback(element, self._own_default(element), item_path))
        return TupleDefault(items=items)

    def _check_struct(self, node: Struct, value: Any, path: str) -> StructDefault:
        if not isinstance(value, dict):
            raise SchemaError(f"default for an object must be a JSON object, got {value!r}", path)

        known = {f.key for f in node.fields}
        unknown = [key for key in value if key not in known]
        if unknown:
            raise SchemaError(f"default has unknown properties {unknown}", path)

        values = []
        for f in node.fields:
            field_path = f"{path}/{f.key}"
            if f.key in value:
                values.append((f, self._check(f.type, value[f.key], field_path)))
            else:
                values.append((f, self._fill_omitted(node, f, field_path)))
        return StructDefault(struct=node, values=values)

    def _fill_omitted(self, node: Struct, f: FieldModel, path: str) -> DefaultValue:
        """Fallback for a key an object default left out, refusing defaults that contain themselves."""
        slot = (id(node), f.key)
        if slot in self._expanding:
            raise SchemaError("default expands itself recursively", path)
        self._expanding.add(slot)
        try:
            return self._fallback(f.type, self._field_literal(f), path)
        finally:
            self._expanding.discard(slot)
