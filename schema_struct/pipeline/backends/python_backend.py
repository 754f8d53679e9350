"""
Python code generation backend.

Renders the type model as dataclasses, string enums and type aliases.
Structs get their JSON mapping from dataclasses_json; enums and aliases
get small helpers built on :mod:`schema_struct.runtime`.
"""

from __future__ import annotations

import collections
import logging
from typing import Any

from ...utils import string_literal, to_snake_case
from ...validator import ValidationGenerator
from ..analyzer.ir_nodes import (
    Alias,
    Boxed,
    DefaultValue,
    Enum,
    EnumDefault,
    FieldModel,
    List,
    ListDefault,
    LiteralDefault,
    NamedType,
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
from ..config import CodeGeneratorConfig, Visibility
from .base import CodeBackend

logger = logging.getLogger(__name__)

# Standard library modules generated code may import from
STDLIB_MODULES = {"dataclasses", "enum", "typing"}

RUNTIME_IMPORT = ("schema_struct", "runtime")


def _docstring(lines: list[str]) -> str:
    """Render lines as a docstring literal (unindented)."""
    escaped = [line.replace("\\", "\\\\").replace('"', '\\"') for line in lines]
    if len(escaped) == 1:
        return f'"""{escaped[0]}"""'
    return '"""' + "\n".join(escaped) + '\n"""'


def _comment_lines(lines: list[str]) -> list[str]:
    return [f"# {line}".rstrip() for line in lines]


class PythonBackend(CodeBackend):
    """Generates a Python module from a TypeModel."""

    TYPE_MAP = {
        PrimitiveKind.NULL: "None",
        PrimitiveKind.BOOLEAN: "bool",
        PrimitiveKind.INTEGER: "int",
        PrimitiveKind.NUMBER: "float",
        PrimitiveKind.STRING: "str",
    }

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"
    TEMPLATE_KINDS = ("prefix", "struct", "enum", "alias")

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.validation_generator = ValidationGenerator()
        self.python_imports: set[tuple[str, str]] = set()

    def generate(self, model: TypeModel, generation_comment: str = "") -> str:
        """Generate the Python module for a named, defaulted type model."""
        self.python_imports = set()
        summary = self._definition_summary(model) if self.config.include_definition else []

        sections = []
        for named in model.emission_order:
            extra_doc = summary if named is model.root else []
            if isinstance(named, Struct):
                context = self._prepare_struct_context(named, extra_doc)
                sections.append(self.templates["struct"].render(**context))
            elif isinstance(named, Enum):
                context = self._prepare_enum_context(named, extra_doc)
                sections.append(self.templates["enum"].render(**context))
            else:
                context = self._prepare_alias_context(named, extra_doc)
                sections.append(self.templates["alias"].render(**context))

        # Rendered last: imports are collected while rendering the sections
        prefix = self.templates["prefix"].render(
            generation_comment=generation_comment,
            imports=self._assemble_imports(),
            exports=self._exports(model),
        )
        logger.debug("Emitted %d types: %s", len(sections), ", ".join(n.name for n in model.emission_order))
        return "\n\n\n".join(section.strip("\n") for section in [prefix, *sections]) + "\n"

    # Types

    def translate_type(self, node: TypeNode) -> str:
        """Translate a type model node to a Python annotation."""
        if isinstance(node, Primitive):
            return self.TYPE_MAP[node.kind]
        if isinstance(node, NamedType):
            return node.name
        if isinstance(node, Boxed):
            return node.inner.name
        if isinstance(node, Optional):
            inner = self.translate_type(node.inner)
            return inner if inner == "None" else f"{inner} | None"
        if isinstance(node, List):
            return f"list[{self.translate_type(node.element)}]"
        if isinstance(node, Tuple):
            return f"tuple[{', '.join(self.translate_type(e) for e in node.elements)}]"
        raise TypeError(f"Unknown type node {type(node).__name__}")

    def _contains_boxed(self, node: TypeNode) -> bool:
        if isinstance(node, Boxed):
            return True
        if isinstance(node, Optional):
            return self._contains_boxed(node.inner)
        if isinstance(node, List):
            return self._contains_boxed(node.element)
        if isinstance(node, Tuple):
            return any(self._contains_boxed(e) for e in node.elements)
        return False

    # Alias helper expressions. Struct fields are mapped by dataclasses_json.

    def encode_expr(self, node: TypeNode, expr: str, depth: int = 0) -> str:
        """Expression converting the Python value ``expr`` to plain JSON data."""
        if isinstance(node, Boxed):
            return self.encode_expr(node.inner, expr, depth)
        if isinstance(node, Primitive):
            return expr
        if isinstance(node, Enum):
            return f"{expr}.value"
        if isinstance(node, Struct):
            return f"{expr}.to_dict()"
        if isinstance(node, Alias):
            return f"encode_{to_snake_case(node.name)}({expr})"
        if isinstance(node, Optional):
            inner = self.encode_expr(node.inner, expr, depth)
            return expr if inner == expr else f"None if {expr} is None else {inner}"
        if isinstance(node, List):
            item = f"item{depth}"
            inner = self.encode_expr(node.element, item, depth + 1)
            return f"list({expr})" if inner == item else f"[{inner} for {item} in {expr}]"
        if isinstance(node, Tuple):
            items = [self.encode_expr(e, f"{expr}[{i}]", depth) for i, e in enumerate(node.elements)]
            return f"[{', '.join(items)}]"
        raise TypeError(f"Unknown type node {type(node).__name__}")

    def decode_expr(self, node: TypeNode, expr: str, depth: int = 0) -> str:
        """Expression converting the JSON data ``expr`` to the Python value."""
        if isinstance(node, Boxed):
            return self.decode_expr(node.inner, expr, depth)
        if isinstance(node, Primitive):
            if node.kind is PrimitiveKind.NUMBER:
                return f"float({expr})"
            if node.kind is PrimitiveKind.NULL:
                return "None"
            return expr
        if isinstance(node, Enum):
            return f"{node.name}.from_value({expr})"
        if isinstance(node, Struct):
            return f"{node.name}.from_dict({expr})"
        if isinstance(node, Alias):
            return f"decode_{to_snake_case(node.name)}({expr})"
        if isinstance(node, Optional):
            inner = self.decode_expr(node.inner, expr, depth)
            return expr if inner == expr else f"None if {expr} is None else {inner}"
        if isinstance(node, List):
            item = f"item{depth}"
            inner = self.decode_expr(node.element, item, depth + 1)
            return f"list({expr})" if inner == item else f"[{inner} for {item} in {expr}]"
        if isinstance(node, Tuple):
            items = [self.decode_expr(e, f"{expr}[{i}]", depth) for i, e in enumerate(node.elements)]
            return f"({items[0]},)" if len(items) == 1 else f"({', '.join(items)})"
        raise TypeError(f"Unknown type node {type(node).__name__}")

    # Defaults

    def format_default_value(self, value: DefaultValue) -> str:
        """Format a resolved default as a Python expression."""
        if isinstance(value, NoneDefault):
            return "None"
        if isinstance(value, LiteralDefault):
            return self._format_literal_value(value.value)
        if isinstance(value, EnumDefault):
            return f"{value.enum.name}.{value.variant.name}"
        if isinstance(value, ListDefault):
            return f"[{', '.join(self.format_default_value(item) for item in value.items)}]"
        if isinstance(value, TupleDefault):
            items = [self.format_default_value(item) for item in value.items]
            return f"({items[0]},)" if len(items) == 1 else f"({', '.join(items)})"
        if isinstance(value, StructDefault):
            args = ", ".join(f"{f.name}={self.format_default_value(v)}" for f, v in value.values)
            return f"{value.struct.name}({args})"
        raise TypeError(f"Unknown default value {type(value).__name__}")

    def _format_literal_value(self, value: Any) -> str:
        if isinstance(value, str):
            return string_literal(value)
        return repr(value)

    def _needs_factory(self, value: DefaultValue) -> bool:
        """Mutable defaults must be built per instance."""
        if isinstance(value, (ListDefault, StructDefault)):
            return True
        if isinstance(value, TupleDefault):
            return any(self._needs_factory(item) for item in value.items)
        return False

    # Template contexts

    def _field_declaration(self, f: FieldModel) -> str:
        annotation = self.translate_type(f.type)
        field_args = []
        if f.default_value is not None:
            expr = self.format_default_value(f.default_value)
            if self._needs_factory(f.default_value):
                field_args.append(f"default_factory=lambda: {expr}")
            elif f.key == f.name:
                return f"{f.name}: {annotation} = {expr}"
            else:
                field_args.append(f"default={expr}")

        # Renamed fields keep their wire key through dataclasses_json
        if f.key != f.name:
            self.python_imports.add(("dataclasses_json", "config"))
            field_args.append(f"metadata=config(field_name={string_literal(f.key)})")

        if not field_args:
            return f"{f.name}: {annotation}"
        self.python_imports.add(("dataclasses", "field"))
        return f"{f.name}: {annotation} = field({', '.join(field_args)})"

    def _doc_lines(self, named: NamedType, extra_doc: list[str]) -> list[str]:
        lines = named.description.splitlines() if named.description else []
        if extra_doc:
            if lines:
                lines.append("")
            lines.extend(extra_doc)
        return lines

    def _prepare_struct_context(self, struct: Struct, extra_doc: list[str]) -> dict[str, Any]:
        self.python_imports.update({("dataclasses", "dataclass"), ("dataclasses_json", "DataClassJsonMixin")})

        fields = []
        for f in struct.fields:
            fields.append(
                {
                    "name": f.name,
                    "comment_lines": _comment_lines(f.description.splitlines()) if f.description else [],
                    "declaration": self._field_declaration(f),
                }
            )

        default_values = None
        if struct.has_default_instance:
            default_values = [{"name": f.name, "value": self.format_default_value(f.default_value)} for f in struct.fields]

        validation = []
        if self.config.validate:
            self.python_imports.update({("typing", "Any"), RUNTIME_IMPORT})
            validation = self.validation_generator.generate_struct_validation(struct)

        doc_lines = self._doc_lines(struct, extra_doc)
        return {
            "name": struct.name,
            "docstring": _docstring(doc_lines) if doc_lines else "",
            "fields": fields,
            "validation": validation,
            "default_values": default_values,
        }

    def _prepare_enum_context(self, enum: Enum, extra_doc: list[str]) -> dict[str, Any]:
        self.python_imports.update({("enum", "Enum"), RUNTIME_IMPORT})

        doc_lines = self._doc_lines(enum, extra_doc)
        return {
            "name": enum.name,
            "docstring": _docstring(doc_lines) if doc_lines else "",
            "variants": [{"name": v.name, "literal": string_literal(v.value)} for v in enum.variants],
            "validation": self.validation_generator.generate_enum_validation(enum) if self.config.validate else [],
        }

    def _prepare_alias_context(self, alias: Alias, extra_doc: list[str]) -> dict[str, Any]:
        self.python_imports.update({("typing", "Any"), ("typing", "TypeAlias"), RUNTIME_IMPORT})

        target = self.translate_type(alias.target)
        # Alias values are evaluated at import time: forward references must be strings
        if self._contains_boxed(alias.target) or "|" in target:
            target = string_literal(target)

        return {
            "name": alias.name,
            "stem": to_snake_case(alias.name),
            "target": target,
            "comment_lines": _comment_lines(self._doc_lines(alias, extra_doc)),
            "encode": self.encode_expr(alias.target, "value"),
            "decode": self.decode_expr(alias.target, "data"),
            "validate": self.config.validate,
            "validation": self.validation_generator.generate_alias_validation(alias) if self.config.validate else [],
        }

    def _definition_summary(self, model: TypeModel) -> list[str]:
        """Outline of every generated type, appended to the root documentation."""
        lines = ["Full definition::", ""]
        for named in model.emission_order:
            if isinstance(named, Struct):
                lines.append(f"    class {named.name}:")
                for f in named.fields:
                    lines.append(f"        {f.name}: {self.translate_type(f.type)}")
                if not named.fields:
                    lines.append("        pass")
            elif isinstance(named, Enum):
                lines.append(f"    class {named.name}(str, Enum):")
                for v in named.variants:
                    lines.append(f"        {v.name} = {string_literal(v.value)}")
            else:
                lines.append(f"    {named.name}: TypeAlias = {self.translate_type(named.target)}")
        return lines

    def _exports(self, model: TypeModel) -> list[str]:
        """Names listed in ``__all__`` for the configured visibility."""
        if self.config.vis is Visibility.PRIVATE:
            return []

        exported = model.emission_order if self.config.vis is Visibility.PUBLIC else [model.root]
        names = []
        for named in exported:
            names.append(named.name)
            if isinstance(named, Alias):
                stem = to_snake_case(named.name)
                names.extend([f"encode_{stem}", f"decode_{stem}", f"{stem}_to_json", f"{stem}_from_json"])
                if self.config.validate:
                    names.append(f"validate_{stem}")
        return names

    def _assemble_imports(self) -> list[str]:
        """Assemble Python import statements."""
        # Group imports by module
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        # Separate stdlib and third-party
        stdlib_groups = {m: import_groups[m] for m in import_groups if m in STDLIB_MODULES}
        third_party_groups = {m: import_groups[m] for m in import_groups if m not in STDLIB_MODULES}

        assembled = []
        for module in sorted(stdlib_groups):
            assembled.append(f"from {module} import {', '.join(sorted(stdlib_groups[module]))}")

        if stdlib_groups and third_party_groups:
            assembled.append("")

        for module in sorted(third_party_groups):
            assembled.append(f"from {module} import {', '.join(sorted(third_party_groups[module]))}")
        return assembled
