"""Java contract writer.

Generates Java contract classes for Gson:
- ``@Expose`` on every instance field
- ``@SerializedName`` on enum constants, carrying the canonical name
- static members forwarded to the hand-written ``<Type>Statics`` class
- Javadoc translated from the canonical XML doc comments
"""

from __future__ import annotations

import logging
import posixpath

from contractgen.config import GeneratorConfig
from contractgen.errors import ContractGenError
from contractgen.generators.contract_writer import (
    ContractWriter,
    RenderContext,
    StaticsCompanion,
)
from contractgen.ir.models import Accessibility, CanonicalType, Member, MethodKind, is_rooted_path
from contractgen.translate.docs import DocCommentTranslator
from contractgen.translate.expressions import JavaExpressionTranslator
from contractgen.translate.type_mapping import JavaTypeMapping

logger = logging.getLogger(__name__)

GSON_EXPOSE_TYPE = "com.google.gson.annotations.Expose"
GSON_EXPOSE_TAG = "@Expose"
SERIALIZED_NAME_TYPE = "com.google.gson.annotations.SerializedName"
SERIALIZED_NAME_TAG = "@SerializedName"

CLASS_DECLARATION_HEADER = "public class"
STATIC_CLASS_DECLARATION_HEADER = "public static class"
ENUM_DECLARATION_HEADER = "public enum"


class JavaContractWriter(ContractWriter):
    """Writes one ``.java`` file per top-level contract type."""

    file_extension = ".java"

    def __init__(
        self,
        namespace: str,
        config: GeneratorConfig | None = None,
        companion: StaticsCompanion | None = None,
    ):
        config = config or GeneratorConfig()
        super().__init__(
            namespace,
            config,
            type_mapping=JavaTypeMapping(namespace),
            docs=DocCommentTranslator(namespace),
            expressions=JavaExpressionTranslator(),
            companion=companion,
        )
        self.package = config.java.package

    # --- File layout ---

    def output_path(self, contract: CanonicalType) -> str:
        return f"{self.config.java.package_dir}/{contract.name}{self.file_extension}"

    def qualified_name(self, type_name: str) -> str:
        return f"{self.package}.{type_name}"

    def write_header(self, ctx: RenderContext, contract: CanonicalType, relative_path: str) -> None:
        for line in self.config.license_header:
            ctx.write_line(f"// {line}" if line else "//")
        source = contract.source_file or f"{contract.name}.cs"
        if is_rooted_path(source):
            raise ContractGenError(
                f"{contract.name}: source file '{source}' must be relative to the repository root"
            )
        ctx.write_line(f"// Generated from {posixpath.relpath(source, posixpath.dirname(relative_path))}")
        ctx.write_line()
        ctx.write_line(f"package {self.package};")
        ctx.write_line()

    def format_imports(self, imports: list[str]) -> str:
        return "".join(f"import {name};\n" for name in imports) + "\n"

    # --- Enums ---

    def write_enum(self, ctx: RenderContext, indent: str, contract: CanonicalType) -> None:
        # Every enum shares a runtime base decorated with these annotations
        ctx.imports.add(SERIALIZED_NAME_TYPE)
        ctx.imports.add(GSON_EXPOSE_TYPE)

        member_indent = indent + self.indent_unit
        ctx.write(self.docs.translate(contract.documentation, indent))
        ctx.write(f"{indent}{ENUM_DECLARATION_HEADER} {contract.name} {{")

        values = contract.enum_values
        for value in values:
            ctx.write_line()
            ctx.write(self.docs.translate(value.documentation, member_indent))
            ctx.write_line(f'{member_indent}{SERIALIZED_NAME_TAG}("{value.name}")')
            ctx.write_line(f"{member_indent}{self.identifier(value.name)},")

        ctx.write_line(f"{indent}}}" if values else "}")

    # --- Classes ---

    def write_class(
        self,
        ctx: RenderContext,
        indent: str,
        contract: CanonicalType,
        excluded: set[str],
        nested: bool,
    ) -> None:
        static_class = self.is_static_class(contract)
        if not static_class:
            ctx.imports.add(GSON_EXPOSE_TYPE)

        base = self.base_type(contract)
        extends = f" extends {base}" if base else ""

        # Only nested classes can be declared static in Java
        header = STATIC_CLASS_DECLARATION_HEADER if static_class and nested else CLASS_DECLARATION_HEADER

        ctx.write(self.docs.translate(contract.documentation, indent))
        ctx.write(f"{indent}{header} {contract.name}{extends} {{")

        member_indent = indent + self.indent_unit
        wrote = self.write_constructors(ctx, member_indent, contract)
        wrote |= self.write_properties(ctx, member_indent, contract, static_class)
        wrote |= self.write_const_fields(ctx, member_indent, contract)
        wrote |= self.write_static_methods(ctx, member_indent, contract)
        wrote |= self.write_nested_types(ctx, indent, contract, excluded)

        ctx.write_line(f"{indent}}}" if wrote else "}")

    def write_constructors(self, ctx: RenderContext, indent: str, contract: CanonicalType) -> bool:
        """Write field-assigning constructors.

        Constructors are assumed to do nothing but assign each parameter to
        the property of the same name; the body is not available to check.
        """
        wrote = False
        property_names = {self.identifier(p.name) for p in contract.properties if not p.is_static}
        for constructor in contract.constructors:
            parameters = self.map_parameters(ctx, contract.name, constructor.parameters)
            if not parameters:
                continue

            unmatched = [name for name in parameters if name not in property_names]
            if unmatched:
                logger.warning(
                    "%s constructor parameter(s) %s have no matching property",
                    contract.name,
                    ", ".join(unmatched),
                )

            ctx.write_line()
            ctx.write(self.docs.translate(constructor.documentation, indent))
            signature = ", ".join(f"{java_type} {name}" for name, java_type in parameters.items())
            ctx.write_line(f"{indent}{contract.name}({signature}) {{")
            for name in parameters:
                ctx.write_line(f"{indent}{self.indent_unit}this.{name} = {name};")
            ctx.write_line(f"{indent}}}")
            wrote = True
        return wrote

    def write_properties(
        self, ctx: RenderContext, indent: str, contract: CanonicalType, static_class: bool
    ) -> bool:
        properties = contract.properties
        for prop in properties:
            ctx.write_line()
            ctx.write(self.docs.translate(prop.documentation, indent))

            java_name = self.identifier(prop.name)
            java_type = self.type_mapping.map_ref(prop.type, ctx.imports, f"{contract.name}.{prop.name}")
            value = self.property_value(contract, prop, java_name, static_class)

            if not prop.is_static:
                ctx.write_line(f"{indent}{GSON_EXPOSE_TAG}")

            declaration = f"{indent}{_access(prop)}{'static ' if prop.is_static else ''}{java_type} {java_name}"
            if value is not None:
                ctx.write_line(f"{declaration} = {value};")
            else:
                # Uninitialized Java fields default to null
                ctx.write_line(f"{declaration};")
        return bool(properties)

    def write_const_fields(self, ctx: RenderContext, indent: str, contract: CanonicalType) -> bool:
        fields = contract.const_fields
        for const in fields:
            ctx.write_line()
            ctx.write(self.docs.translate(const.documentation, indent))
            java_name = self.identifier(const.name)
            java_type = self.type_mapping.map_ref(const.type, ctx.imports, f"{contract.name}.{const.name}")
            literal = _quote(const.literal_value)
            ctx.write_line(f"{indent}{_access(const)}static final {java_type} {java_name} = {literal};")
        return bool(fields)

    def write_static_methods(self, ctx: RenderContext, indent: str, contract: CanonicalType) -> bool:
        """Write forwarding methods for public static ordinary methods."""
        wrote = False
        for method in contract.methods:
            if not (
                method.is_static
                and method.method_kind == MethodKind.ORDINARY
                and method.accessibility == Accessibility.PUBLIC
            ):
                continue

            ctx.write_line()
            ctx.write(self.docs.translate(method.documentation, indent))
            java_name = self.identifier(method.name)
            owner = f"{contract.name}.{method.name}"
            return_type = self.type_mapping.map_ref(method.return_type, ctx.imports, owner)
            parameters = self.map_parameters(ctx, owner, method.parameters)

            signature = ", ".join(f"{java_type} {name}" for name, java_type in parameters.items())
            call = self.companion.call(contract.name, java_name, list(parameters))
            return_keyword = "return " if return_type != "void" else ""

            ctx.write_line(f"{indent}public static {return_type} {java_name}({signature}) {{")
            ctx.write_line(f"{indent}{self.indent_unit}{return_keyword}{call};")
            ctx.write_line(f"{indent}}}")
            wrote = True
        return wrote


def _access(member: Member) -> str:
    return "public " if member.accessibility == Accessibility.PUBLIC else ""


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
