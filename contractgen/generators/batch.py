"""Batch generation — one file per top-level contract type.

A failure while rendering one type is recorded and logged, and generation
moves on to the next type; nothing is written for the failed type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from contractgen.config import GeneratorConfig
from contractgen.errors import ContractGenError
from contractgen.generators.contract_writer import ContractWriter, GeneratedFile
from contractgen.generators.java_writer import JavaContractWriter
from contractgen.ir.models import CanonicalModel, CanonicalType

logger = logging.getLogger(__name__)

WRITERS: dict[str, type[ContractWriter]] = {
    "java": JavaContractWriter,
}


@dataclass
class GenerationFailure:
    type_name: str
    error: str


@dataclass
class BatchResult:
    """Outcome of generating every top-level type in a model."""

    files: list[GeneratedFile] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return (
            f"[{status}] {len(self.files)} generated, {len(self.failures)} failed, "
            f"{len(self.skipped)} excluded"
        )


class FileOutputWriter:
    """Writes generated files beneath a root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def write(self, generated: GeneratedFile) -> Path:
        path = self.root / generated.relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generated.text, encoding="utf-8")
        return path


class ContractsGenerator:
    """Generates contract sources for every top-level type of a model."""

    def __init__(self, model: CanonicalModel, config: GeneratorConfig | None = None,
                 language: str = "java"):
        if language not in WRITERS:
            raise ContractGenError(
                f"Unsupported target language '{language}'. Must be one of: {sorted(WRITERS)}"
            )
        self.model = model
        self.config = config or GeneratorConfig()
        self.namespace = self.config.namespace or model.namespace
        self.writer = WRITERS[language](self.namespace, self.config)

    def contract_types(self) -> list[CanonicalType]:
        """Top-level types that get a file, in model order."""
        return [t for t in self.model.types if t.name not in self.config.excluded_types]

    def render(self, type_name: str) -> GeneratedFile:
        """Render a single top-level type without writing it."""
        contract = self.model.find(type_name)
        if contract is None:
            raise ContractGenError(f"Type '{type_name}' not found in model")
        if type_name in self.config.excluded_types:
            raise ContractGenError(f"Type '{type_name}' is excluded from generation")
        return self.writer.emit(contract)

    def generate(self, output: FileOutputWriter | None = None) -> BatchResult:
        """Render every contract type, writing each file when ``output`` is given."""
        result = BatchResult()
        result.skipped = [t.name for t in self.model.types if t.name in self.config.excluded_types]

        for contract in self.contract_types():
            try:
                generated = self.writer.emit(contract)
            except ContractGenError as e:
                logger.error("Skipping %s: %s", contract.name, e)
                result.failures.append(GenerationFailure(type_name=contract.name, error=str(e)))
                continue

            result.files.append(generated)
            if output is not None:
                path = output.write(generated)
                result.written.append(path)
                logger.info("Wrote %s", path)

        return result
