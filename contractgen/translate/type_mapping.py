"""Type mapping tables — canonical types to target-language types.

A table resolves a canonical type reference to the name a target file should
use, plus the qualified name it has to import. Types that live in the
canonical contracts namespace are generated alongside each other, so they map
to their own name and need no import.
"""

from __future__ import annotations

from dataclasses import dataclass

from contractgen.errors import UnsupportedTypeError
from contractgen.ir.models import TypeRef


@dataclass(frozen=True)
class MappedType:
    """Result of a mapping lookup."""

    name: str  # Name as emitted in source, e.g. "Map<String, String>[]"
    required_import: str | None = None  # e.g. "java.util.Map"


class TypeMappingTable:
    """Base class for per-language mapping tables."""

    # Canonical type name -> target type name (qualified where an import is needed)
    TYPE_MAP: dict[str, str] = {}
    ARRAY_SUFFIX = "[]"

    def __init__(self, namespace: str):
        self.namespace = namespace

    def map(self, canonical_type: str, is_array: bool = False, is_nullable: bool = False,
            member_name: str = "") -> MappedType:
        """Resolve a canonical type to its target name and required import.

        Nullability never changes the target name: reference types are
        nullable anyway and value types stay primitive.

        Raises:
            UnsupportedTypeError: if the type is outside the namespace and not
                in the table.
        """
        base = canonical_type.removesuffix("?")
        if base.endswith("[]"):
            is_array = True
            base = base[:-2].removesuffix("?")

        prefix = self.namespace + "."
        required_import = None
        if base.startswith(prefix):
            target = base[len(prefix):]
        else:
            target = self.TYPE_MAP.get(base)
            if target is None:
                raise UnsupportedTypeError(canonical_type, member_name)
            required_import, target = self._split_qualified(target)

        if is_array:
            target += self.ARRAY_SUFFIX
        return MappedType(name=target, required_import=required_import)

    def map_ref(self, type_ref: TypeRef, imports: set[str], member_name: str = "") -> str:
        """Map a type reference, recording any required import into ``imports``."""
        mapped = self.map(
            type_ref.base_name,
            is_array=type_ref.is_array,
            is_nullable=type_ref.is_nullable,
            member_name=member_name,
        )
        if mapped.required_import:
            imports.add(mapped.required_import)
        return mapped.name

    @staticmethod
    def _split_qualified(target: str) -> tuple[str | None, str]:
        """Split ``java.util.Map<String, String>`` into its import and short name."""
        raw = target.split("<", 1)[0]
        if "." not in raw:
            return None, target
        generic = target[len(raw):]
        return raw, raw.rsplit(".", 1)[1] + generic


class JavaTypeMapping(TypeMappingTable):
    """Canonical (C#-flavored) types to Java types."""

    DATE_TIME_TYPE = "java.util.Date"
    REGEX_PATTERN_TYPE = "java.util.regex.Pattern"

    TYPE_MAP = {
        "void": "void",
        "bool": "boolean",
        "byte": "byte",
        "short": "short",
        "ushort": "int",
        "int": "int",
        "uint": "int",
        "long": "long",
        "ulong": "long",
        "float": "float",
        "double": "double",
        "string": "String",
        "System.DateTime": DATE_TIME_TYPE,
        "System.Text.RegularExpressions.Regex": REGEX_PATTERN_TYPE,
        "System.Collections.Generic.IDictionary<string, string>": "java.util.Map<String, String>",
        "System.Collections.Generic.IDictionary<string, string[]>": "java.util.Map<String, String[]>",
        "System.Uri": "java.net.URI",
        "System.Collections.Generic.IEnumerable<string>": "java.util.Collection<String>",
    }
