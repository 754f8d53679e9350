"""
Identifier casing helpers for the schema_struct generator.
"""

import json
import keyword
import re

# Regex pattern to split text into words, handling camelCase and acronym boundaries
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Replace every non-alphanumeric character with a space."""
    return re.sub(r"[^A-Za-z0-9]+", " ", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(_normalize_separators(text))


def to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "Schema with bad title" -> "SchemaWithBadTitle"
        "tuple_field 2" -> "TupleField2"
    """
    if not text:
        return ""
    return "".join(word.capitalize() for word in _split_into_words(text))


def to_snake_case(text: str) -> str:
    """Convert arbitrary text to snake_case, dropping anything non-alphanumeric.

    Leading digits are stripped so the result can start an identifier.

    Examples:
        "$schema" -> "schema"
        "fooBar" -> "foo_bar"
        "123strip_starting_number456" -> "strip_starting_number_456"
    """
    words = _split_into_words(text)
    while words and words[0].isdigit():
        words.pop(0)
    return "_".join(word.lower() for word in words)


def to_upper_snake_case(text: str) -> str:
    """Convert arbitrary text to UPPER_SNAKE_CASE ("first_variant" -> "FIRST_VARIANT")."""
    return "_".join(word.upper() for word in _split_into_words(text))


def is_valid_identifier(name: str) -> bool:
    """Check that name can be used as a Python identifier."""
    return name.isidentifier() and not keyword.iskeyword(name)


def string_literal(text: str) -> str:
    """Render text as a double-quoted, ASCII-only Python string literal."""
    return json.dumps(text, ensure_ascii=True)
