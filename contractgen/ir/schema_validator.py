"""Schema validator — structural validation of IR documents.

Runs before the loader builds any model objects, so that a malformed
document is rejected with every issue listed instead of failing on the
first missing key.
"""

from __future__ import annotations

import re

from contractgen.ir.schema import get_schema

# Property that discriminates the tagged member variants.
DISCRIMINATOR = "member"


def validate_schema(data: dict) -> list[str]:
    """Validate a parsed IR document against the IR JSON Schema.

    Args:
        data: The full parsed YAML/JSON document.

    Returns:
        List of error messages. Empty list means valid.
    """
    issues: list[str] = []
    schema = get_schema()
    _validate_node(data, schema, "", issues, schema)
    return issues


def _resolve(schema: dict, root: dict) -> dict:
    ref = schema.get("$ref")
    if not ref:
        return schema
    node = root
    for part in ref.lstrip("#/").split("/"):
        node = node[part]
    return node


def _validate_node(data, schema: dict, path: str, issues: list[str], root: dict):
    """Recursively validate data against a JSON Schema node."""
    schema = _resolve(schema, root)
    schema_type = schema.get("type")

    if schema_type and not _type_matches(data, schema_type):
        issues.append(f"{path or '/'}: expected type '{schema_type}', got {type(data).__name__}")
        return

    if "enum" in schema and data not in schema["enum"]:
        issues.append(f"{path or '/'}: value '{data}' not in allowed values {schema['enum']}")

    if schema_type == "string" and isinstance(data, str):
        min_len = schema.get("minLength", 0)
        if len(data) < min_len:
            issues.append(f"{path or '/'}: string too short (min {min_len}, got {len(data)})")
        if "pattern" in schema and not re.match(schema["pattern"], data):
            issues.append(
                f"{path or '/'}: string '{data}' does not match pattern '{schema['pattern']}'"
            )

    if schema_type == "object" and isinstance(data, dict):
        for req in schema.get("required", []):
            if req not in data:
                issues.append(f"{path or '/'}: missing required property '{req}'")

        props = schema.get("properties", {})
        for key, value in data.items():
            if key in props:
                _validate_node(value, props[key], f"{path}.{key}", issues, root)

    if schema_type == "array" and isinstance(data, list):
        items_schema = schema.get("items")
        if not items_schema:
            return
        items_schema = _resolve(items_schema, root)
        for i, item in enumerate(data):
            item_path = f"{path}[{i}]"
            if "oneOf" in items_schema:
                _validate_one_of(item, items_schema["oneOf"], item_path, issues, root)
            else:
                _validate_node(item, items_schema, item_path, issues, root)


def _validate_one_of(item, options: list[dict], path: str, issues: list[str], root: dict):
    """Validate a tagged variant, reporting against the option its tag selects."""
    if isinstance(item, dict) and DISCRIMINATOR in item:
        for option in options:
            tags = option.get("properties", {}).get(DISCRIMINATOR, {}).get("enum", [])
            if item[DISCRIMINATOR] in tags:
                _validate_node(item, option, path, issues, root)
                return
        known = [t for o in options for t in o["properties"][DISCRIMINATOR]["enum"]]
        issues.append(f"{path}.{DISCRIMINATOR}: unknown variant '{item[DISCRIMINATOR]}', expected one of {known}")
        return

    for option in options:
        test_issues: list[str] = []
        _validate_node(item, option, path, test_issues, root)
        if not test_issues:
            return
    issues.append(f"{path}: item does not match any of the allowed schemas")


def _type_matches(data, schema_type: str) -> bool:
    """Check if data matches the expected JSON Schema type."""
    type_map = {
        "string": str,
        "integer": int,
        "number": (int, float),
        "boolean": bool,
        "array": list,
        "object": dict,
        "null": type(None),
    }
    expected = type_map.get(schema_type)
    if expected is None:
        return True
    # YAML booleans are ints in Python; don't let them pass as integers
    if schema_type == "integer" and isinstance(data, bool):
        return False
    return isinstance(data, expected)
