"""Tests for the canonical IR: models, schema validation and loading."""

import dataclasses
import json
import tempfile

import pytest
import yaml

from contractgen.errors import ModelLoadError
from contractgen.ir import IR_VERSION
from contractgen.ir.loader import build_model, load_model
from contractgen.ir.models import (
    Accessibility,
    CanonicalModel,
    CanonicalType,
    ConstField,
    Constructor,
    EnumValue,
    MemberKind,
    Method,
    MethodKind,
    Property,
    TypeKind,
    TypeRef,
    is_rooted_path,
)
from contractgen.ir.schema import get_schema
from contractgen.ir.schema_validator import validate_schema


def _make_document(**overrides) -> dict:
    """Build a minimal valid IR document."""
    data = {
        "ir_version": IR_VERSION,
        "namespace": "Contoso.Contracts",
        "types": [
            {
                "name": "TunnelPort",
                "kind": "class",
                "source_file": "cs/src/Contracts/TunnelPort.cs",
                "documentation": "<summary>A tunnel port.</summary>",
                "members": [
                    {"member": "property", "name": "PortNumber", "type": "ushort"},
                    {
                        "member": "property",
                        "name": "Protocol",
                        "type": "string?",
                        "initializer_source_text": '{ get; set; } = "auto";',
                    },
                    {"member": "const_field", "name": "MaxPorts", "type": "int", "value": 10},
                    {
                        "member": "method",
                        "name": "IsValidProtocol",
                        "is_static": True,
                        "return_type": "bool",
                        "parameters": [{"name": "Protocol", "type": "string"}],
                    },
                    {
                        "member": "constructor",
                        "parameters": [{"name": "PortNumber", "type": "ushort"}],
                    },
                ],
                "nested_types": [
                    {
                        "name": "Protocols",
                        "kind": "static_class",
                        "is_static": True,
                        "members": [
                            {"member": "const_field", "name": "Http", "type": "string", "value": "http"},
                        ],
                    }
                ],
            },
            {
                "name": "TunnelKind",
                "kind": "enum",
                "source_file": "cs/src/Contracts/TunnelKind.cs",
                "members": [
                    {"member": "enum_value", "name": "Alpha"},
                    {"member": "enum_value", "name": "Beta"},
                ],
            },
        ],
    }
    data.update(overrides)
    return data


def _write(data: dict, suffix: str = ".yaml") -> str:
    f = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False)
    if suffix == ".json":
        json.dump(data, f)
    else:
        yaml.dump(data, f)
    f.close()
    return f.name


# --- Model Tests ---


def test_type_ref_parse_plain():
    ref = TypeRef.parse("string")
    assert ref == TypeRef("string")
    assert not ref.is_array
    assert not ref.is_nullable


def test_type_ref_parse_nullable_array():
    assert TypeRef.parse("string?") == TypeRef("string", is_nullable=True)
    assert TypeRef.parse("string[]") == TypeRef("string", is_array=True)
    assert TypeRef.parse("string[]?") == TypeRef("string", is_nullable=True, is_array=True)
    assert TypeRef.parse("string?[]") == TypeRef("string", is_array=True)


def test_type_ref_display():
    assert TypeRef.parse("System.Uri[]?").display == "System.Uri[]?"


def test_member_kinds():
    assert Property(name="A").kind == MemberKind.PROPERTY
    assert ConstField(name="B").kind == MemberKind.CONST_FIELD
    assert EnumValue(name="C").kind == MemberKind.ENUM_VALUE
    assert Method(name="D").kind == MemberKind.METHOD
    assert Constructor(name=".ctor").kind == MemberKind.CONSTRUCTOR


def test_const_and_enum_values_are_static():
    assert ConstField(name="X").is_static
    assert EnumValue(name="Y").is_static
    assert not Property(name="Z").is_static


def test_types_are_immutable():
    t = CanonicalType(name="Tunnel")
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.name = "Other"


def test_type_member_views():
    t = CanonicalType(
        name="Tunnel",
        members=(
            Property(name="Name"),
            ConstField(name="MaxLength"),
            Method(name="Validate", is_static=True),
            Constructor(name=".ctor"),
        ),
    )
    assert [p.name for p in t.properties] == ["Name"]
    assert [c.name for c in t.const_fields] == ["MaxLength"]
    assert [m.name for m in t.methods] == ["Validate"]
    assert len(t.constructors) == 1
    assert t.enum_values == []


def test_model_walk_and_find():
    inner = CanonicalType(name="Inner")
    outer = CanonicalType(name="Outer", nested_types=(CanonicalType(name="Middle", nested_types=(inner,)),))
    model = CanonicalModel(namespace="Ns", types=(outer, CanonicalType(name="Other")))
    assert [t.name for t in outer.walk()] == ["Outer", "Middle", "Inner"]
    assert model.type_count == 4
    assert model.find("Other").name == "Other"
    assert model.find("Inner") is None


# --- Schema Tests ---


def test_schema_exists():
    schema = get_schema()
    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"
    assert "type" in schema["$defs"]


def test_schema_valid_document():
    issues = validate_schema(_make_document())
    assert issues == [], f"Valid document should have no issues: {issues}"


def test_schema_missing_namespace():
    data = _make_document()
    del data["namespace"]
    issues = validate_schema(data)
    assert any("namespace" in i for i in issues)


def test_schema_unknown_member_variant():
    data = _make_document()
    data["types"][0]["members"].append({"member": "event", "name": "Changed"})
    issues = validate_schema(data)
    assert any("unknown variant 'event'" in i for i in issues)


def test_schema_member_missing_type():
    data = _make_document()
    data["types"][0]["members"].append({"member": "property", "name": "Broken"})
    issues = validate_schema(data)
    assert any("members[5]" in i and "'type'" in i for i in issues)


def test_schema_invalid_kind():
    data = _make_document()
    data["types"][1]["kind"] = "struct"
    issues = validate_schema(data)
    assert any("struct" in i for i in issues)


def test_schema_checks_nested_types():
    data = _make_document()
    data["types"][0]["nested_types"][0]["members"][0]["accessibility"] = "friend"
    issues = validate_schema(data)
    assert any("nested_types[0]" in i and "friend" in i for i in issues)


# --- Loader Tests ---


def test_load_yaml_model():
    model = load_model(_write(_make_document()))
    assert model.namespace == "Contoso.Contracts"
    assert [t.name for t in model.types] == ["TunnelPort", "TunnelKind"]

    port = model.types[0]
    assert port.kind == TypeKind.CLASS
    assert port.properties[1].type == TypeRef("string", is_nullable=True)
    assert port.properties[1].initializer_source_text == '{ get; set; } = "auto";'
    assert port.const_fields[0].literal_value == "10"
    assert port.methods[0].is_static
    assert port.methods[0].method_kind == MethodKind.ORDINARY
    assert port.methods[0].accessibility == Accessibility.PUBLIC
    assert port.constructors[0].parameters[0].type == TypeRef("ushort")


def test_load_json_model():
    model = load_model(_write(_make_document(), suffix=".json"))
    assert model.find("TunnelKind").kind == TypeKind.ENUM
    assert [v.name for v in model.find("TunnelKind").enum_values] == ["Alpha", "Beta"]


def test_nested_types_inherit_source_file():
    model = build_model(_make_document())
    nested = model.types[0].nested_types[0]
    assert nested.name == "Protocols"
    assert nested.source_file == "cs/src/Contracts/TunnelPort.cs"
    assert nested.kind == TypeKind.STATIC_CLASS


def test_load_unquoted_version():
    path = _write(_make_document(ir_version=1.0))
    model = load_model(path)
    assert model.ir_version == "1.0"


def test_load_rejects_other_major_version():
    with pytest.raises(ModelLoadError, match="Unsupported IR version"):
        build_model(_make_document(ir_version="2.0"))


def test_load_requires_source_file_for_top_level_types():
    data = _make_document()
    del data["types"][1]["source_file"]
    with pytest.raises(ModelLoadError) as exc:
        build_model(data)
    assert any("TunnelKind" in i for i in exc.value.issues)


def test_load_rejects_duplicate_types():
    data = _make_document()
    data["types"].append(dict(data["types"][1]))
    with pytest.raises(ModelLoadError, match="duplicate"):
        build_model(data)


def test_load_reports_schema_issues():
    with pytest.raises(ModelLoadError) as exc:
        build_model({"ir_version": IR_VERSION, "types": []})
    assert any("namespace" in i for i in exc.value.issues)


def test_load_missing_file():
    with pytest.raises(ModelLoadError, match="Cannot read"):
        load_model("/nonexistent/model.yaml")


def test_load_invalid_yaml():
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    f.write("types: [unclosed\n")
    f.close()
    with pytest.raises(ModelLoadError, match="Invalid model file"):
        load_model(f.name)


def test_load_boolean_constant():
    data = _make_document()
    data["types"][0]["members"][2]["value"] = True
    model = build_model(data)
    assert model.types[0].const_fields[0].literal_value == "true"


def test_load_rejects_rooted_source_files():
    data = _make_document()
    data["types"][0]["source_file"] = "/repo/cs/src/Contracts/TunnelPort.cs"
    data["types"][0]["nested_types"][0]["source_file"] = "C:\\repo\\Protocols.cs"
    data["types"][1]["source_file"] = "C:/repo/cs/src/Contracts/TunnelKind.cs"
    with pytest.raises(ModelLoadError) as exc:
        build_model(data)
    assert exc.value.issues == [
        ".types[0].source_file: '/repo/cs/src/Contracts/TunnelPort.cs' must be relative to the repository root",
        ".types[0].nested_types[0].source_file: 'C:\\repo\\Protocols.cs' must be relative to the repository root",
        ".types[1].source_file: 'C:/repo/cs/src/Contracts/TunnelKind.cs' must be relative to the repository root",
    ]


def test_rooted_path_detection():
    assert is_rooted_path("/repo/Tunnel.cs")
    assert is_rooted_path("C:\\repo\\Tunnel.cs")
    assert is_rooted_path("\\repo\\Tunnel.cs")
    assert not is_rooted_path("cs/src/Contracts/Tunnel.cs")
    assert not is_rooted_path("../Tunnel.cs")
