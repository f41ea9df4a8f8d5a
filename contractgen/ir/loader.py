"""IR loader — builds a CanonicalModel from a YAML or JSON document."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from contractgen.errors import ModelLoadError
from contractgen.ir import IR_VERSION
from contractgen.ir.models import (
    Accessibility,
    CanonicalModel,
    CanonicalType,
    ConstField,
    Constructor,
    EnumValue,
    Member,
    MemberKind,
    Method,
    MethodKind,
    Parameter,
    Property,
    TypeKind,
    TypeRef,
    is_rooted_path,
)
from contractgen.ir.schema_validator import validate_schema

logger = logging.getLogger(__name__)


def read_document(path: str | Path) -> dict:
    """Read an IR document from disk without validating it."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ModelLoadError(f"Cannot read model file {path}: {e}") from e

    try:
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ModelLoadError(f"Invalid model file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ModelLoadError(f"Model file {path} must contain a mapping at the top level")

    # Unquoted "1.0" comes back from YAML as a float
    if isinstance(data.get("ir_version"), (int, float)) and not isinstance(data["ir_version"], bool):
        data["ir_version"] = str(data["ir_version"])
    return data


def load_model(path: str | Path) -> CanonicalModel:
    """Read, validate and build the canonical model stored at ``path``.

    Raises:
        ModelLoadError: if the file is unreadable or fails schema validation.
    """
    data = read_document(path)
    model = build_model(data)
    logger.debug("Loaded %d type(s) from %s", model.type_count, path)
    return model


def build_model(data: dict) -> CanonicalModel:
    """Build a CanonicalModel from an already parsed IR document."""
    issues = validate_schema(data)
    if not issues:
        issues = _check_structure(data)
    if issues:
        raise ModelLoadError("Model does not match the IR schema", issues)

    version = data["ir_version"]
    if version.split(".")[0] != IR_VERSION.split(".")[0]:
        raise ModelLoadError(f"Unsupported IR version {version} (expected {IR_VERSION})")

    return CanonicalModel(
        namespace=data["namespace"],
        types=tuple(_build_type(t, t.get("source_file", "")) for t in data["types"]),
        ir_version=version,
    )


def _check_structure(data: dict) -> list[str]:
    """Rules the schema cannot express: source files and unique type names."""
    issues: list[str] = []
    seen: set[str] = set()
    for i, t in enumerate(data["types"]):
        if not t.get("source_file"):
            issues.append(f".types[{i}]: top-level type '{t['name']}' has no source_file")
        if t["name"] in seen:
            issues.append(f".types[{i}]: duplicate top-level type '{t['name']}'")
        seen.add(t["name"])
        issues.extend(_check_source_files(t, f".types[{i}]"))
    return issues


def _check_source_files(data: dict, path: str) -> list[str]:
    issues: list[str] = []
    source = data.get("source_file")
    if source and is_rooted_path(source):
        issues.append(f"{path}.source_file: '{source}' must be relative to the repository root")
    for j, nested in enumerate(data.get("nested_types", [])):
        issues.extend(_check_source_files(nested, f"{path}.nested_types[{j}]"))
    return issues


def _build_type(data: dict, source_file: str) -> CanonicalType:
    """Build a type; nested types inherit the source file of their container."""
    return CanonicalType(
        name=data["name"],
        kind=TypeKind(data.get("kind", "class")),
        base_type_name=data.get("base_type"),
        is_static=data.get("is_static", False),
        members=tuple(_build_member(m) for m in data.get("members", [])),
        nested_types=tuple(
            _build_type(n, n.get("source_file", source_file)) for n in data.get("nested_types", [])
        ),
        documentation=data.get("documentation"),
        source_file=source_file,
    )


def _build_member(data: dict) -> Member:
    kind = MemberKind(data["member"])
    common = {
        "accessibility": Accessibility(data.get("accessibility", "public")),
        "documentation": data.get("documentation"),
    }
    if "is_static" in data:
        common["is_static"] = data["is_static"]

    if kind == MemberKind.PROPERTY:
        return Property(
            name=data["name"],
            type=TypeRef.parse(data["type"]),
            initializer_source_text=data.get("initializer_source_text"),
            **common,
        )
    if kind == MemberKind.CONST_FIELD:
        return ConstField(
            name=data["name"],
            type=TypeRef.parse(data["type"]),
            literal_value=_literal(data["value"]),
            **common,
        )
    if kind == MemberKind.ENUM_VALUE:
        return EnumValue(name=data["name"], **common)
    if kind == MemberKind.METHOD:
        return Method(
            name=data["name"],
            return_type=TypeRef.parse(data.get("return_type", "void")),
            parameters=_parameters(data),
            method_kind=MethodKind(data.get("method_kind", "ordinary")),
            **common,
        )
    return Constructor(name=data.get("name", ".ctor"), parameters=_parameters(data), **common)


def _parameters(data: dict) -> tuple[Parameter, ...]:
    return tuple(
        Parameter(name=p["name"], type=TypeRef.parse(p["type"])) for p in data.get("parameters", [])
    )


def _literal(value) -> str:
    # Canonical constants are written the way the source compiler prints them
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
