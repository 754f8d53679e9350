"""
Name resolver: assigns identifiers to every type, field and enum variant.

Type names come from an explicit override (root only), the schema title,
or the path from the nearest named ancestor. Collisions are settled by
trying progressively wider path-based names in declaration order, so the
same schema always produces the same names.
"""

from __future__ import annotations

import keyword
import logging
import re

from ...utils import is_valid_identifier, to_pascal_case, to_snake_case, to_upper_snake_case
from ..errors import MissingIdentifier, SchemaError
from .ir_nodes import Alias, Enum, NamedType, PathSegment, Struct, TypeModel

logger = logging.getLogger(__name__)

# Names the generated module imports or that Python reserves
RESERVED_TYPE_NAMES = {
    "Any",
    "DataClassJsonMixin",
    "Enum",
    "TypeAlias",
    "config",
    "dataclass",
    "field",
    "runtime",
    "None",
    "True",
    "False",
}

# Struct methods and attributes, plus the helpers called in a struct class body
RESERVED_MEMBER_NAMES = {
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "validate_dict",
    "default",
    "dataclass_json_config",
    "field",
    "config",
}

_SHORT_PREFIX = {"properties": "", "items": "", "prefixItems": "", "$defs": "Def"}
_WIDE_PREFIX = {"properties": "Properties", "items": "Items", "prefixItems": "PrefixItems", "$defs": "Defs"}


class NameResolver:
    """Assigns unique identifiers across a TypeModel."""

    def __init__(self, ident: str | None = None):
        """
        Initialize the resolver.

        Args:
            ident: Identifier override for the root type
        """
        self.ident = ident

    def resolve(self, model: TypeModel) -> None:
        """
        Name every named type, struct field and enum variant in place.

        Raises:
            MissingIdentifier: If the root has neither override nor title
            SchemaError: If a collision cannot be resolved
        """
        taken: set[str] = set()

        model.root.name = self._root_name(model.root)
        taken.add(model.root.name)

        for named in model.named:
            if named is model.root:
                continue
            named.name = self._pick_name(named, taken)
            taken.add(named.name)
            logger.debug("Named %s -> %s", named.source_path, named.name)

        self._check_alias_helpers(model)

        for named in model.named:
            if isinstance(named, Struct):
                self._name_fields(named)
            elif isinstance(named, Enum):
                self._name_variants(named)

    def _check_alias_helpers(self, model: TypeModel) -> None:
        """Aliases get snake_case helper functions, which must not collide either."""
        stems: dict[str, str] = {}
        for named in model.named:
            if not isinstance(named, Alias):
                continue
            stem = to_snake_case(named.name)
            if stem in stems:
                raise SchemaError(f"types {stems[stem]!r} and {named.name!r} both map to helper prefix {stem!r}", named.source_path)
            stems[stem] = named.name

    def _root_name(self, root: NamedType) -> str:
        if self.ident is not None:
            if not is_valid_identifier(self.ident):
                raise SchemaError(f"identifier override {self.ident!r} is not a valid Python identifier", "#")
            return self._escape_type_name(self.ident)

        if root.title is None:
            raise MissingIdentifier("no type identifier: give the schema a 'title' or pass an identifier override", "#")

        name = self._clean_type_name(to_pascal_case(root.title))
        if not name:
            raise MissingIdentifier(f"title {root.title!r} does not contain any usable identifier characters", "#")
        return name

    def _pick_name(self, named: NamedType, taken: set[str]) -> str:
        candidates = self._candidates(named)
        for candidate in candidates:
            if candidate not in taken:
                return candidate
        raise SchemaError(f"cannot find a unique type name (tried {', '.join(candidates)})", named.source_path)

    def _candidates(self, named: NamedType) -> list[str]:
        """Candidate names from most to least preferred: title, short path, widened path."""
        candidates = []
        if named.title:
            title_name = self._clean_type_name(to_pascal_case(named.title))
            if title_name:
                candidates.append(title_name)

        parent_name = named.parent.name
        candidates.append(parent_name + "".join(self._short_segment(s) for s in named.segments))
        candidates.append(parent_name + "".join(self._wide_segment(s) for s in named.segments))

        unique = []
        for candidate in candidates:
            candidate = self._escape_type_name(candidate)
            if candidate not in unique:
                unique.append(candidate)
        return unique

    def _short_segment(self, segment: PathSegment) -> str:
        return _SHORT_PREFIX[segment.keyword] + to_pascal_case(segment.key or "")

    def _wide_segment(self, segment: PathSegment) -> str:
        return _WIDE_PREFIX[segment.keyword] + to_pascal_case(segment.key or "")

    def _clean_type_name(self, name: str) -> str:
        return self._escape_type_name(name.lstrip("0123456789")) if name else name

    def _escape_type_name(self, name: str) -> str:
        if name in RESERVED_TYPE_NAMES or keyword.iskeyword(name):
            return f"{name}Type"
        return name

    def _name_fields(self, struct: Struct) -> None:
        used: dict[str, str] = {}
        for f in struct.fields:
            name = self.field_name(f.key)
            if not name:
                raise SchemaError(f"property name {f.key!r} does not contain any usable identifier characters", f.source_path)
            if name in used:
                raise SchemaError(f"properties {used[name]!r} and {f.key!r} both map to field name {name!r}", struct.source_path)
            used[name] = f.key
            f.name = name

    @staticmethod
    def field_name(key: str) -> str:
        """Derive a snake_case field identifier from a property name."""
        name = to_snake_case(key)
        if not name:
            digits = re.findall(r"[0-9]+", key)
            name = "field_" + "_".join(digits) if digits else ""
        if keyword.iskeyword(name) or name in RESERVED_MEMBER_NAMES:
            name += "_"
        return name

    def _name_variants(self, enum: Enum) -> None:
        used: dict[str, str] = {}
        for variant in enum.variants:
            name = to_upper_snake_case(variant.value)
            if not name:
                raise SchemaError(f"enum value {variant.value!r} does not contain any usable identifier characters", enum.source_path)
            if name[0].isdigit():
                name = f"VALUE_{name}"
            if name in used:
                raise SchemaError(f"enum values {used[name]!r} and {variant.value!r} both map to member {name!r}", enum.source_path)
            used[name] = variant.value
            variant.name = name
