"""Generator configuration, read from ``contractgen.yaml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from contractgen.errors import ContractGenError

DEFAULT_CONFIG_FILE = "contractgen.yaml"

DEFAULT_LICENSE_HEADER = [
    "Copyright (c) Microsoft Corporation.",
    "Licensed under the MIT license.",
]


@dataclass
class JavaOptions:
    package: str = "com.microsoft.tunnels.contracts"
    source_root: str = "java/src/main/java"

    @property
    def package_dir(self) -> str:
        return f"{self.source_root}/{self.package.replace('.', '/')}"


@dataclass
class GeneratorConfig:
    """Settings shared by every writer in a generation run."""

    # Overrides the namespace declared in the model when set
    namespace: str | None = None
    license_header: list[str] = field(default_factory=lambda: list(DEFAULT_LICENSE_HEADER))
    # Implementation-only helper types that never appear in output
    excluded_types: set[str] = field(default_factory=set)
    java: JavaOptions = field(default_factory=JavaOptions)

    @classmethod
    def from_dict(cls, data: dict) -> GeneratorConfig:
        java = data.get("java") or {}
        if not isinstance(java, dict):
            raise ContractGenError("'java' section of the config must be a mapping")
        options = {}
        for key in ("package", "source_root"):
            value = java.get(key)
            if value is None:
                continue
            if not isinstance(value, str) or not value:
                raise ContractGenError(f"'java.{key}' in the config must be a non-empty string")
            options[key] = value
        config = cls(
            namespace=data.get("namespace"),
            excluded_types=set(data.get("excluded_types") or []),
            java=JavaOptions(**options),
        )
        if "license_header" in data:
            header = data["license_header"] or []
            config.license_header = [header] if isinstance(header, str) else list(header)
        return config

    @classmethod
    def load(cls, path: str | Path | None = None) -> GeneratorConfig:
        """Load the config file at ``path``.

        With no path, ``contractgen.yaml`` in the working directory is used if
        present; otherwise defaults apply.
        """
        if path is None:
            path = Path(DEFAULT_CONFIG_FILE)
            if not path.exists():
                return cls()
        path = Path(path)

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ContractGenError(f"Cannot load config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ContractGenError(f"Config {path} must contain a mapping")
        return cls.from_dict(data)
