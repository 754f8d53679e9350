"""
Validation rule objects that generate validation code.

Each rule represents a specific constraint from the JSON schema and
knows how to render itself as an ``if``/``raise`` pair for a generated
deserializer. Rules check raw JSON values, before they are decoded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .utils import string_literal


class ValidationRule(ABC):
    """Base class for all validation rules"""

    def __init__(self, value_expr: str, path: str):
        """
        Initialize a validation rule.

        Args:
            value_expr: Python expression evaluating to the value being checked
            path: Human readable location reported in the error (e.g. "Product.price")
        """
        self.value_expr = value_expr
        self.path = path

    @abstractmethod
    def condition(self) -> str:
        """Python expression that is true when the value is invalid."""

    @abstractmethod
    def error_message(self) -> str:
        """Python expression evaluating to the error message."""

    def generate_code(self) -> list[str]:
        """Generate validation code lines for this rule."""
        return [
            f"if {self.condition()}:",
            f"    raise runtime.ValidationError({self.error_message()}, {string_literal(self.path)})",
        ]


class ObjectTypeRule(ValidationRule):
    """Validates that a struct payload is a JSON object"""

    def condition(self) -> str:
        return f"not isinstance({self.value_expr}, dict)"

    def error_message(self) -> str:
        return f'"expected a JSON object, got " + type({self.value_expr}).__name__'


class RequiredRule(ValidationRule):
    """Validates that a required property is present"""

    def __init__(self, value_expr: str, path: str, key: str):
        super().__init__(value_expr, path)
        self.key = key

    def condition(self) -> str:
        return f"{string_literal(self.key)} not in {self.value_expr}"

    def error_message(self) -> str:
        return string_literal(f"missing required field {self.key!r}")


class NotNullRule(ValidationRule):
    """Validates that a non-optional value is not null"""

    def condition(self) -> str:
        return f"{self.value_expr} is None"

    def error_message(self) -> str:
        return string_literal("must not be null")


class NumberTypeRule(ValidationRule):
    """Validates that a value is a JSON number before its bounds are compared"""

    def condition(self) -> str:
        return f"not isinstance({self.value_expr}, (int, float)) or isinstance({self.value_expr}, bool)"

    def error_message(self) -> str:
        return f'"expected a number, got " + type({self.value_expr}).__name__'


class ArrayTypeRule(ValidationRule):
    """Validates that a value is a JSON array, optionally of a fixed length"""

    def __init__(self, value_expr: str, path: str, length: int | None = None):
        super().__init__(value_expr, path)
        self.length = length

    def condition(self) -> str:
        condition = f"not isinstance({self.value_expr}, list)"
        if self.length is not None:
            condition += f" or len({self.value_expr}) != {self.length}"
        return condition

    def error_message(self) -> str:
        if self.length is None:
            return f'"expected a JSON array, got " + type({self.value_expr}).__name__'
        return string_literal(f"expected a JSON array of {self.length} elements")


class MinimumRule(ValidationRule):
    """Validates that a number is >= minimum"""

    def __init__(self, value_expr: str, path: str, minimum: float):
        super().__init__(value_expr, path)
        self.minimum = minimum

    def condition(self) -> str:
        return f"{self.value_expr} < {self.minimum!r}"

    def error_message(self) -> str:
        return f"{string_literal(f'must be >= {self.minimum}, got ')} + repr({self.value_expr})"


class ExclusiveMinimumRule(ValidationRule):
    """Validates that a number is > minimum"""

    def __init__(self, value_expr: str, path: str, minimum: float):
        super().__init__(value_expr, path)
        self.minimum = minimum

    def condition(self) -> str:
        return f"{self.value_expr} <= {self.minimum!r}"

    def error_message(self) -> str:
        return f"{string_literal(f'must be > {self.minimum}, got ')} + repr({self.value_expr})"


class EnumRule(ValidationRule):
    """Validates that a value is one of the enum strings"""

    def __init__(self, value_expr: str, path: str, values: list[Any]):
        super().__init__(value_expr, path)
        self.values = values

    def condition(self) -> str:
        allowed = ", ".join(string_literal(v) for v in self.values)
        return f"{self.value_expr} not in ({allowed},)"

    def error_message(self) -> str:
        choices = ", ".join(repr(v) for v in self.values)
        return f"{string_literal(f'must be one of {choices}, got ')} + repr({self.value_expr})"
