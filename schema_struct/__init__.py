"""schema_struct

Generate typed Python dataclasses and JSON (de)serialization code
from JSON Schema documents, ahead of time.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    ConflictingArrayShape,
    FetchError,
    FormatterConfig,
    MissingDefault,
    MissingIdentifier,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    SchemaError,
    SchemaStructError,
    UnresolvedReference,
    ValidationError,
    Visibility,
    WriteError,
    generate_code,
)
from .sources import load_schema

__all__ = [
    "PipelineGenerator",
    "generate_code",
    "load_schema",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "Visibility",
    "AtomicWriter",
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
