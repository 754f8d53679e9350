"""
Pipeline - JSON Schema to typed Python data model generator.

Each phase consumes the complete output of the previous one:

1. Phase 1 (Parser): Parse JSON Schema into Schema AST
2. Phase 2 (Type Resolver): Resolve references, build the type model, box cycles
3. Phase 3 (Naming): Assign unique identifiers to types, fields and variants
4. Phase 4 (Defaults): Type-check and propagate default values
5. Phase 5 (Backend): Render declarations and (de)serialization routines
6. Phase 6 (Formatter): Optional post-processing with ruff
7. Phase 7 (Writer): Validate and write the module atomically
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode, Visibility
from .errors import (
    ConflictingArrayShape,
    FetchError,
    MissingDefault,
    MissingIdentifier,
    SchemaError,
    SchemaStructError,
    UnresolvedReference,
    ValidationError,
    WriteError,
)
from .generator import PipelineGenerator, generate_code
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "generate_code",
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
