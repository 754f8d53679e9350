"""
Runtime support imported by generated modules.

Generated code never looks at the schema again. Structs are mapped by
dataclasses_json; enum and alias helpers use the JSON primitives here,
and validation raises the error type defined here.
"""

from __future__ import annotations

import json
from typing import Any


class ValidationError(ValueError):
    """Raised by generated deserializers when input breaks the schema contract.

    Attributes:
        path: Location of the offending value, e.g. ``Product.price`` or ``Order.items[]``
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def serialize(value: Any) -> str:
    """Encode a JSON-compatible value as compact JSON text."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def deserialize(text: str | bytes) -> Any:
    """Decode JSON text (str or UTF-8 bytes) into plain Python values."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"invalid JSON: {e}") from e
