"""Exceptions raised while loading a canonical model or generating contracts."""

from __future__ import annotations


class ContractGenError(Exception):
    """Base class for all contractgen failures."""


class UnsupportedTypeError(ContractGenError):
    """A member's canonical type has no entry in the type mapping table.

    Fatal for the file being generated; sibling files are unaffected.
    """

    def __init__(self, canonical_type: str, member_name: str = ""):
        self.canonical_type = canonical_type
        self.member_name = member_name
        where = f" (member '{member_name}')" if member_name else ""
        super().__init__(f"Unsupported canonical type: {canonical_type}{where}")


class AmbiguousInitializerError(ContractGenError):
    """An initializer starts with '=' but its terminator could not be found."""

    def __init__(self, source_text: str):
        self.source_text = source_text
        super().__init__(f"Initializer has no terminator: {source_text!r}")


class ModelLoadError(ContractGenError):
    """The IR document could not be read or does not match the IR schema."""

    def __init__(self, message: str, issues: list[str] | None = None):
        self.issues = issues or []
        if self.issues:
            message = message + ":\n  " + "\n  ".join(self.issues)
        super().__init__(message)
