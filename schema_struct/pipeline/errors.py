"""
Error taxonomy for schema_struct.

Every generation error aborts the pipeline: no partial artifact is ever
produced. Errors carry the JSON pointer of the offending schema fragment
so messages point at the exact location in the document.

``ValidationError`` is the only error raised by generated code at run time;
it lives in :mod:`schema_struct.runtime` so generated modules only import
that module, and is re-exported here for convenience.
"""

from __future__ import annotations

from ..runtime import ValidationError


class SchemaStructError(Exception):
    """Base class for every error raised while generating code."""

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class SchemaError(SchemaStructError):
    """Raised when a schema fragment is malformed or cannot be modeled.

    Covers:
    - Wrong JSON types for schema keywords
    - Unsupported or missing ``type`` values
    - Identifier collisions that widening cannot resolve
    - Default literals that do not match their schema
    """


class UnresolvedReference(SchemaStructError):
    """Raised when a ``$ref`` does not point at the root or a named subschema."""


class ConflictingArrayShape(SchemaStructError):
    """Raised when an array schema declares both ``items`` and ``prefixItems``."""


class MissingIdentifier(SchemaStructError):
    """Raised when the top-level schema has neither an identifier override nor a title."""


class MissingDefault(SchemaStructError):
    """Raised when a partial default omits a mandatory slot that has no default of its own."""


class FetchError(SchemaStructError):
    """Raised when the schema source cannot be read, downloaded or parsed."""


class WriteError(SchemaStructError):
    """Raised when generated code fails validation before being written."""


__all__ = [
    "SchemaStructError",
    "SchemaError",
    "UnresolvedReference",
    "ConflictingArrayShape",
    "MissingIdentifier",
    "MissingDefault",
    "FetchError",
    "WriteError",
    "ValidationError",
]
