"""Tests for the contractgen command line."""

import json
import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from contractgen.cli import main
from contractgen.ir import IR_VERSION


def _write_model(types: list[dict]) -> str:
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump({"ir_version": IR_VERSION, "namespace": "Contoso.Contracts", "types": types}, f)
    f.close()
    return f.name


TUNNEL = {
    "name": "Tunnel",
    "source_file": "cs/src/Contracts/Tunnel.cs",
    "members": [{"member": "property", "name": "Name", "type": "string"}],
}

BROKEN = {
    "name": "TunnelLease",
    "source_file": "cs/src/Contracts/TunnelLease.cs",
    "members": [{"member": "property", "name": "LeaseId", "type": "System.Guid"}],
}


def test_schema_command():
    result = CliRunner().invoke(main, ["schema"])
    assert result.exit_code == 0
    assert json.loads(result.output)["title"] == "Canonical Contract Model"


def test_generate_writes_files():
    out = tempfile.mkdtemp()
    result = CliRunner().invoke(main, ["generate", _write_model([TUNNEL]), "--output", out])
    assert result.exit_code == 0, result.output
    assert (Path(out) / "java/src/main/java/com/microsoft/tunnels/contracts/Tunnel.java").exists()


def test_generate_fails_when_a_type_fails():
    out = tempfile.mkdtemp()
    result = CliRunner().invoke(main, ["generate", _write_model([TUNNEL, BROKEN]), "-o", out])
    assert result.exit_code == 1
    contracts = Path(out) / "java/src/main/java/com/microsoft/tunnels/contracts"
    assert (contracts / "Tunnel.java").exists()
    assert not (contracts / "TunnelLease.java").exists()


def test_generate_with_exclude():
    out = tempfile.mkdtemp()
    result = CliRunner().invoke(
        main, ["generate", _write_model([TUNNEL, BROKEN]), "-o", out, "--exclude", "TunnelLease"]
    )
    assert result.exit_code == 0, result.output


def test_render_plain():
    result = CliRunner().invoke(main, ["render", _write_model([TUNNEL]), "Tunnel", "--plain"])
    assert result.exit_code == 0
    assert "public class Tunnel {" in result.output
    assert "    public String name;" in result.output


def test_render_unknown_type():
    result = CliRunner().invoke(main, ["render", _write_model([TUNNEL]), "Nope", "--plain"])
    assert result.exit_code == 1


def test_validate_valid_model():
    result = CliRunner().invoke(main, ["validate", _write_model([TUNNEL])])
    assert result.exit_code == 0
    assert "Valid!" in result.output


def test_validate_invalid_model():
    result = CliRunner().invoke(main, ["validate", _write_model([{"name": "Tunnel"}])])
    assert result.exit_code == 1
    assert "source_file" in result.output


def test_generate_invalid_model_exits_2():
    result = CliRunner().invoke(main, ["generate", _write_model([{"kind": "class"}])])
    assert result.exit_code == 2
