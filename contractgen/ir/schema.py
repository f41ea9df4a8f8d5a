"""JSON Schema for the on-disk IR document.

This is the normative structural definition of the canonical model file that
a front end hands to the generator. Members are a tagged variant keyed by
``member``; types nest recursively through ``$defs/type``. Tools can export
the schema and use it with any JSON Schema validator.
"""

from contractgen.ir import IR_VERSION

_TYPE_REF = {
    "type": "string",
    "minLength": 1,
    "pattern": r"^[A-Za-z_][\w.<>, \[\]?]*$",
    "description": "Canonical display form, e.g. 'string', 'string?', 'System.Uri[]'.",
}

_ACCESSIBILITY = {"type": "string", "enum": ["public", "internal", "protected", "private"]}

_PARAMETERS = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["name", "type"],
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "type": _TYPE_REF,
        },
    },
}

_MEMBER_COMMON = {
    "name": {"type": "string", "minLength": 1},
    "accessibility": _ACCESSIBILITY,
    "is_static": {"type": "boolean"},
    "documentation": {"type": "string"},
}


def _member(tag: str, required: list[str], **properties) -> dict:
    return {
        "type": "object",
        "required": ["member", *required],
        "properties": {
            "member": {"type": "string", "enum": [tag]},
            **_MEMBER_COMMON,
            **properties,
        },
    }


IR_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": f"https://contractgen.dev/schema/ir/v{IR_VERSION}",
    "title": "Canonical Contract Model",
    "description": (
        "Intermediate representation of a data-contract model, produced once "
        "upstream and consumed read-only by every target-language writer."
    ),
    "type": "object",
    "required": ["ir_version", "namespace", "types"],
    "properties": {
        "ir_version": {
            "type": "string",
            "pattern": r"^\d+\.\d+$",
            "description": "Version of the IR schema this document targets.",
        },
        "namespace": {
            "type": "string",
            "minLength": 1,
            "description": "Canonical namespace of the contract types.",
        },
        "types": {"type": "array", "items": {"$ref": "#/$defs/type"}},
    },
    "$defs": {
        "type": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string", "pattern": r"^[A-Za-z_]\w*$"},
                "kind": {"type": "string", "enum": ["class", "static_class", "enum"]},
                "base_type": {"type": "string"},
                "is_static": {"type": "boolean"},
                "documentation": {"type": "string"},
                "source_file": {"type": "string"},
                "members": {
                    "type": "array",
                    "items": {
                        "oneOf": [
                            _member(
                                "property",
                                ["name", "type"],
                                type=_TYPE_REF,
                                initializer_source_text={"type": "string"},
                            ),
                            _member("const_field", ["name", "type", "value"], type=_TYPE_REF),
                            _member("enum_value", ["name"]),
                            _member(
                                "method",
                                ["name"],
                                return_type=_TYPE_REF,
                                parameters=_PARAMETERS,
                                method_kind={
                                    "type": "string",
                                    "enum": ["ordinary", "operator", "conversion", "accessor"],
                                },
                            ),
                            _member("constructor", [], parameters=_PARAMETERS),
                        ]
                    },
                },
                "nested_types": {"type": "array", "items": {"$ref": "#/$defs/type"}},
            },
        },
    },
}


def get_schema() -> dict:
    """Return the JSON Schema for IR documents."""
    return IR_SCHEMA
