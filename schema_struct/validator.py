"""
Validation code generator for type model constraints.

Checks run on the raw JSON payload, before dataclasses_json decodes it.
A struct checks that the payload is an object and that required keys are
present, then checks the bounds of every primitive reachable from its
fields. Nested structs and aliases are checked through their own
generated validators; enum values are checked inline.
"""

from __future__ import annotations

from .pipeline.analyzer.ir_nodes import (
    Alias,
    Boxed,
    Enum,
    List,
    Optional,
    Primitive,
    PrimitiveKind,
    Struct,
    Tuple,
    TypeNode,
)
from .utils import string_literal, to_snake_case
from .validation_rules import (
    ArrayTypeRule,
    EnumRule,
    ExclusiveMinimumRule,
    MinimumRule,
    NotNullRule,
    NumberTypeRule,
    ObjectTypeRule,
    RequiredRule,
    ValidationRule,
)


def _indent(lines: list[str]) -> list[str]:
    return [f"    {line}" for line in lines]


def _nullable(node: TypeNode) -> bool | None:
    """Whether null is a valid value for the type, or None when an alias decides."""
    if isinstance(node, Alias):
        return None
    if isinstance(node, Boxed):
        return _nullable(node.inner)
    return isinstance(node, Optional) or (isinstance(node, Primitive) and node.kind is PrimitiveKind.NULL)


class ValidationGenerator:
    """Generate validation code from the type model using rule objects"""

    def generate_struct_validation(self, struct: Struct, data_expr: str = "data") -> list[str]:
        """
        Generate the body of a struct's ``validate_dict``.

        Args:
            struct: The struct being deserialized
            data_expr: Expression holding the raw JSON object

        Returns:
            List of validation code lines
        """
        lines = ObjectTypeRule(data_expr, struct.name).generate_code()

        for f in struct.fields:
            if f.required:
                lines.extend(RequiredRule(data_expr, struct.name, f.key).generate_code())

        for f in struct.fields:
            key = string_literal(f.key)
            value_expr = f"{data_expr}[{key}]"
            path = f"{struct.name}.{f.key}"
            checks = self.generate_value_validation(f.type, value_expr, path)
            if not checks and _nullable(f.type) is False:
                # Every non-empty check already rejects null
                checks = NotNullRule(value_expr, path).generate_code()
            if not checks:
                continue
            if f.required:
                lines.extend(checks)
            else:
                lines.append(f"if {key} in {data_expr}:")
                lines.extend(_indent(checks))
        return lines

    def generate_alias_validation(self, alias: Alias, data_expr: str = "data") -> list[str]:
        """Generate the body of an alias's ``validate_<name>`` function."""
        return self.generate_value_validation(alias.target, data_expr, alias.name)

    def generate_enum_validation(self, enum: Enum, value_expr: str = "value") -> list[str]:
        """Generate the membership check run in an enum's ``from_value``."""
        return EnumRule(value_expr, enum.name, [v.value for v in enum.variants]).generate_code()

    def generate_value_validation(self, node: TypeNode, value_expr: str, path: str, depth: int = 0) -> list[str]:
        """
        Generate checks for a raw value of the given type.

        Args:
            node: Type of the value
            value_expr: Expression holding the raw value
            path: Location reported in errors
            depth: Nesting depth, used to name loop variables

        Returns:
            List of validation code lines (empty when nothing needs checking)
        """
        if isinstance(node, Optional):
            inner = self.generate_value_validation(node.inner, value_expr, path, depth)
            return [f"if {value_expr} is not None:", *_indent(inner)] if inner else []

        if isinstance(node, Boxed):
            return self.generate_value_validation(node.inner, value_expr, path, depth)

        if isinstance(node, List):
            item = f"item{depth}"
            inner = self.generate_value_validation(node.element, item, f"{path}[]", depth + 1)
            if not inner:
                return []
            return [
                *ArrayTypeRule(value_expr, path).generate_code(),
                f"for {item} in {value_expr}:",
                *_indent(inner),
            ]

        if isinstance(node, Tuple):
            lines = []
            for i, element in enumerate(node.elements):
                lines.extend(self.generate_value_validation(element, f"{value_expr}[{i}]", f"{path}[{i}]", depth))
            if not lines:
                return []
            return [*ArrayTypeRule(value_expr, path, len(node.elements)).generate_code(), *lines]

        if isinstance(node, Primitive):
            lines = []
            for rule in self._create_numeric_rules(node, value_expr, path):
                lines.extend(rule.generate_code())
            return lines

        if isinstance(node, Struct):
            return [f"{node.name}.validate_dict({value_expr})"]

        if isinstance(node, Alias):
            return [f"validate_{to_snake_case(node.name)}({value_expr})"]

        if isinstance(node, Enum):
            return self.generate_enum_validation(node, value_expr)

        raise TypeError(f"Unknown type node {type(node).__name__}")

    def _create_numeric_rules(self, node: Primitive, value_expr: str, path: str) -> list[ValidationRule]:
        """Create numeric validation rules"""
        rules: list[ValidationRule] = []
        if node.minimum is not None:
            rules.append(MinimumRule(value_expr, path, node.minimum))
        if node.exclusive_minimum is not None:
            rules.append(ExclusiveMinimumRule(value_expr, path, node.exclusive_minimum))
        if rules:
            # Bounds are only comparable once the value is known to be a number
            rules.insert(0, NumberTypeRule(value_expr, path))
        return rules
