"""IR data models — the canonical contract model consumed by the writers.

These models are built once by the loader and are never mutated afterwards:
every dataclass is frozen and every sequence is a tuple, so a writer can walk
the same tree any number of times and get the same result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath, PureWindowsPath

from contractgen.ir import IR_VERSION


class Accessibility(Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    PROTECTED = "protected"
    PRIVATE = "private"


class TypeKind(Enum):
    CLASS = "class"
    STATIC_CLASS = "static_class"
    ENUM = "enum"


class MemberKind(Enum):
    PROPERTY = "property"
    CONST_FIELD = "const_field"
    ENUM_VALUE = "enum_value"
    METHOD = "method"
    CONSTRUCTOR = "constructor"


class MethodKind(Enum):
    ORDINARY = "ordinary"
    OPERATOR = "operator"
    CONVERSION = "conversion"
    ACCESSOR = "accessor"


# --- Type references ---


@dataclass(frozen=True)
class TypeRef:
    """A reference to a canonical type, e.g. ``string[]?``."""

    base_name: str
    is_nullable: bool = False
    is_array: bool = False

    @classmethod
    def parse(cls, display: str) -> TypeRef:
        """Parse the canonical display form of a type.

        ``string?`` is nullable, ``string[]`` is an array and ``string[]?`` is a
        nullable array. Nullability of array elements is not tracked.
        """
        text = display.strip()
        is_nullable = False
        is_array = False
        if text.endswith("?"):
            is_nullable = True
            text = text[:-1]
        if text.endswith("[]"):
            is_array = True
            text = text[:-2]
            if text.endswith("?"):
                text = text[:-1]
        return cls(base_name=text, is_nullable=is_nullable, is_array=is_array)

    @property
    def display(self) -> str:
        suffix = ("[]" if self.is_array else "") + ("?" if self.is_nullable else "")
        return self.base_name + suffix


@dataclass(frozen=True)
class Parameter:
    """A method or constructor parameter."""

    name: str
    type: TypeRef


# --- Members ---


@dataclass(frozen=True)
class Member:
    """Fields shared by every kind of member."""

    name: str
    accessibility: Accessibility = Accessibility.PUBLIC
    is_static: bool = False
    documentation: str | None = None

    kind: MemberKind = field(init=False, default=MemberKind.PROPERTY)


@dataclass(frozen=True)
class Property(Member):
    type: TypeRef = TypeRef("object")
    # Declaration text following the property name, e.g. "{ get; set; } = 5;"
    initializer_source_text: str | None = None

    kind: MemberKind = field(init=False, default=MemberKind.PROPERTY)


@dataclass(frozen=True)
class ConstField(Member):
    type: TypeRef = TypeRef("string")
    literal_value: str = ""
    is_static: bool = True

    kind: MemberKind = field(init=False, default=MemberKind.CONST_FIELD)


@dataclass(frozen=True)
class EnumValue(Member):
    is_static: bool = True

    kind: MemberKind = field(init=False, default=MemberKind.ENUM_VALUE)


@dataclass(frozen=True)
class Method(Member):
    return_type: TypeRef = TypeRef("void")
    parameters: tuple[Parameter, ...] = ()
    method_kind: MethodKind = MethodKind.ORDINARY

    kind: MemberKind = field(init=False, default=MemberKind.METHOD)


@dataclass(frozen=True)
class Constructor(Member):
    parameters: tuple[Parameter, ...] = ()

    kind: MemberKind = field(init=False, default=MemberKind.CONSTRUCTOR)


# --- Types ---


@dataclass(frozen=True)
class CanonicalType:
    """A contract type and everything nested inside it."""

    name: str
    kind: TypeKind = TypeKind.CLASS
    base_type_name: str | None = None
    is_static: bool = False
    members: tuple[Member, ...] = ()
    nested_types: tuple[CanonicalType, ...] = ()
    documentation: str | None = None
    source_file: str = ""

    @property
    def properties(self) -> list[Property]:
        return [m for m in self.members if isinstance(m, Property)]

    @property
    def const_fields(self) -> list[ConstField]:
        return [m for m in self.members if isinstance(m, ConstField)]

    @property
    def enum_values(self) -> list[EnumValue]:
        return [m for m in self.members if isinstance(m, EnumValue)]

    @property
    def methods(self) -> list[Method]:
        return [m for m in self.members if isinstance(m, Method)]

    @property
    def constructors(self) -> list[Constructor]:
        return [m for m in self.members if isinstance(m, Constructor)]

    def walk(self):
        """Yield this type and all nested types, depth first."""
        yield self
        for nested in self.nested_types:
            yield from nested.walk()


@dataclass(frozen=True)
class CanonicalModel:
    """The complete canonical model for one generation run.

    This is what the loader builds and what the batch generator reads.
    """

    namespace: str
    types: tuple[CanonicalType, ...] = ()
    ir_version: str = IR_VERSION

    def find(self, name: str) -> CanonicalType | None:
        for t in self.types:
            if t.name == name:
                return t
        return None

    @property
    def type_count(self) -> int:
        return sum(1 for t in self.types for _ in t.walk())


def is_rooted_path(path: str) -> bool:
    """True if ``path`` is absolute or drive-rooted on either POSIX or Windows.

    Source files are recorded relative to the repository root, so a rooted
    path cannot be made relative to an output file.
    """
    return bool(PurePosixPath(path).anchor or PureWindowsPath(path).anchor)
