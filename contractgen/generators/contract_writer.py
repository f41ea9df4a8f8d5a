"""Contract writer — the language-independent half of contract generation.

A writer renders one top-level canonical type (and everything nested in it)
into the text of one target source file. This module owns the parts every
target language shares:

- the per-file render context (output buffer + import set)
- the import block spliced in after the header once the body is known
- enum/class dispatch and recursion into nested types
- static member forwarding to the hand-written statics companion
- initializer recovery and parameter mapping

Subclasses supply the syntax: header, import lines, class and enum bodies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from contractgen.config import GeneratorConfig
from contractgen.errors import AmbiguousInitializerError
from contractgen.ir.models import CanonicalType, Parameter, Property, TypeKind
from contractgen.translate.docs import DocCommentTranslator
from contractgen.translate.expressions import (
    NULL_INITIALIZERS,
    ExpressionTranslator,
    extract_initializer,
)
from contractgen.translate.naming import to_camel_case
from contractgen.translate.type_mapping import TypeMappingTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedFile:
    """Text of one generated source file and where it belongs."""

    relative_path: str
    text: str
    type_name: str = ""


@dataclass
class RenderContext:
    """Output buffer and imports for a single generated file.

    One context is created per ``emit`` call and shared by the whole nested
    type tree of that file; it is never reused across files.
    """

    parts: list[str] = field(default_factory=list)
    imports: set[str] = field(default_factory=set)

    def write(self, text: str) -> None:
        self.parts.append(text)

    def write_line(self, text: str = "") -> None:
        self.parts.append(text + "\n")

    def mark(self) -> int:
        """Return a splice point for content that is only known later."""
        return len(self.parts)

    def insert(self, mark: int, text: str) -> None:
        self.parts.insert(mark, text)

    def text(self) -> str:
        return "".join(self.parts)


@dataclass(frozen=True)
class StaticsCompanion:
    """The hand-maintained class that implements a contract's static members.

    Generated contracts never compute static values themselves; they refer to
    ``<TypeName>Statics``, which lives next to the generated file and is
    edited by hand.
    """

    suffix: str = "Statics"

    def class_name(self, type_name: str) -> str:
        return type_name + self.suffix

    def reference(self, type_name: str, member: str) -> str:
        return f"{self.class_name(type_name)}.{member}"

    def call(self, type_name: str, method: str, arguments: list[str]) -> str:
        return f"{self.reference(type_name, method)}({', '.join(arguments)})"


class ContractWriter:
    """Base class for per-language contract writers."""

    file_extension: str = ""
    indent_unit: str = "    "

    ENUM_BASE_TYPES = frozenset({"Enum", "System.Enum"})
    ROOT_OBJECT_TYPES = frozenset({"Object", "object", "System.Object"})

    def __init__(
        self,
        namespace: str,
        config: GeneratorConfig,
        type_mapping: TypeMappingTable,
        docs: DocCommentTranslator,
        expressions: ExpressionTranslator,
        companion: StaticsCompanion | None = None,
    ):
        self.namespace = namespace
        self.config = config
        self.type_mapping = type_mapping
        self.docs = docs
        self.expressions = expressions
        self.companion = companion or StaticsCompanion()

    # --- Entry point ---

    def emit(self, contract: CanonicalType, excluded: set[str] | None = None) -> GeneratedFile:
        """Render ``contract`` and its nested types into one file.

        Args:
            contract: A top-level canonical type.
            excluded: Type names that must not be rendered as nested types.
                Defaults to the configured ``excluded_types``.

        Raises:
            UnsupportedTypeError: if any member uses an unmapped type.
        """
        if excluded is None:
            excluded = self.config.excluded_types

        ctx = RenderContext()
        relative_path = self.output_path(contract)
        self.write_header(ctx, contract, relative_path)
        imports_mark = ctx.mark()

        self.write_type(ctx, "", contract, excluded, nested=False)

        ctx.imports.discard(contract.name)
        ctx.imports.discard(self.qualified_name(contract.name))
        if ctx.imports:
            ctx.insert(imports_mark, self.format_imports(sorted(ctx.imports)))

        logger.debug("Rendered %s with %d import(s)", relative_path, len(ctx.imports))
        return GeneratedFile(relative_path=relative_path, text=ctx.text(), type_name=contract.name)

    def write_type(
        self,
        ctx: RenderContext,
        indent: str,
        contract: CanonicalType,
        excluded: set[str],
        nested: bool,
    ) -> None:
        if self.is_enum(contract):
            self.write_enum(ctx, indent, contract)
        else:
            self.write_class(ctx, indent, contract, excluded, nested)

    def write_nested_types(
        self, ctx: RenderContext, indent: str, contract: CanonicalType, excluded: set[str]
    ) -> bool:
        """Render non-excluded nested types one level deeper. Returns True if any."""
        wrote = False
        for nested in contract.nested_types:
            if nested.name in excluded:
                continue
            ctx.write_line()
            self.write_type(ctx, indent + self.indent_unit, nested, excluded, nested=True)
            wrote = True
        return wrote

    # --- Language hooks ---

    def output_path(self, contract: CanonicalType) -> str:
        raise NotImplementedError

    def qualified_name(self, type_name: str) -> str:
        return type_name

    def write_header(self, ctx: RenderContext, contract: CanonicalType, relative_path: str) -> None:
        raise NotImplementedError

    def format_imports(self, imports: list[str]) -> str:
        raise NotImplementedError

    def write_enum(self, ctx: RenderContext, indent: str, contract: CanonicalType) -> None:
        raise NotImplementedError

    def write_class(
        self,
        ctx: RenderContext,
        indent: str,
        contract: CanonicalType,
        excluded: set[str],
        nested: bool,
    ) -> None:
        raise NotImplementedError

    # --- Shared rules ---

    def identifier(self, name: str) -> str:
        return to_camel_case(name)

    def is_enum(self, contract: CanonicalType) -> bool:
        return contract.kind == TypeKind.ENUM or contract.base_type_name in self.ENUM_BASE_TYPES

    def base_type(self, contract: CanonicalType) -> str | None:
        """Name of the base type, or None when it is the platform root object."""
        if not contract.base_type_name or contract.base_type_name in self.ROOT_OBJECT_TYPES:
            return None
        return contract.base_type_name

    def is_static_class(self, contract: CanonicalType) -> bool:
        declared_static = contract.is_static or contract.kind == TypeKind.STATIC_CLASS
        return declared_static and all(m.is_static for m in contract.members)

    def property_value(
        self, contract: CanonicalType, prop: Property, identifier: str, static_class: bool
    ) -> str | None:
        """Initializer to emit for ``prop``, or None for an uninitialized field."""
        if prop.is_static and not static_class:
            return self.companion.reference(contract.name, identifier)

        try:
            expression = extract_initializer(prop.initializer_source_text)
        except AmbiguousInitializerError as e:
            logger.warning("%s.%s: %s; emitting without initializer", contract.name, prop.name, e)
            return None

        value = self.expressions.translate(expression)
        if value is None or value in NULL_INITIALIZERS:
            return None
        return value

    def map_parameters(
        self, ctx: RenderContext, owner: str, parameters: tuple[Parameter, ...]
    ) -> dict[str, str]:
        """Map parameters to target identifier -> target type.

        Two parameters whose names convert to the same identifier collapse
        into one entry carrying the later parameter's type.
        """
        mapped: dict[str, str] = {}
        for parameter in parameters:
            name = self.identifier(parameter.name)
            mapped[name] = self.type_mapping.map_ref(
                parameter.type, ctx.imports, f"{owner}({parameter.name})"
            )
        return mapped
