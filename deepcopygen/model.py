"""Type model describing the declarations that deep-copy code is generated for."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Kind(str, Enum):
    """The category a type belongs to."""

    BUILTIN = "Builtin"
    STRUCT = "Struct"
    MAP = "Map"
    SLICE = "Slice"
    POINTER = "Pointer"
    ALIAS = "Alias"
    INTERFACE = "Interface"
    ARRAY = "Array"
    CHAN = "Chan"
    FUNC = "Func"
    DECLARATION_OF = "DeclarationOf"
    UNSUPPORTED = "Unsupported"
    UNKNOWN = ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Name:
    """A type name qualified by the import path of its package."""

    package: str = ""
    name: str = ""
    path: str = ""

    def __str__(self) -> str:
        if not self.package:
            return self.name
        return f"{self.package}.{self.name}"


@dataclass(eq=False)
class Signature:
    """The signature of a function or method."""

    receiver: Type | None = None
    parameters: list[Type] = field(default_factory=list)
    results: list[Type] = field(default_factory=list)
    variadic: bool = False
    comment_lines: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Type:
    """A type declaration or type expression.

    ``members`` maps struct field names to their types in declaration order.
    ``elem`` is the element of pointers, slices, maps and arrays, ``key`` the
    key of maps and ``underlying`` the type an alias stands for.
    """

    name: Name = field(default_factory=Name)
    kind: Kind = Kind.UNKNOWN
    comment_lines: list[str] = field(default_factory=list)
    second_closest_comment_lines: list[str] = field(default_factory=list)
    members: dict[str, Type] = field(default_factory=dict)
    elem: Type | None = None
    key: Type | None = None
    underlying: Type | None = None
    methods: dict[str, Type] = field(default_factory=dict)
    signature: Signature | None = None

    def __str__(self) -> str:
        return str(self.name)

    def __repr__(self) -> str:
        return f"Type({self.name!s}, {self.kind.name})"

    def is_primitive(self) -> bool:
        """True for builtins and aliases of builtins."""
        if self.kind is Kind.BUILTIN:
            return True
        return (
            self.kind is Kind.ALIAS
            and self.underlying is not None
            and self.underlying.kind is Kind.BUILTIN
        )

    def is_assignable(self) -> bool:
        """True if plain assignment yields an independent copy."""
        if self.is_primitive():
            return True
        if self.kind is Kind.STRUCT:
            return all(member.is_assignable() for member in self.members.values())
        return False

    def is_anonymous_struct(self) -> bool:
        """True for the empty anonymous struct and aliases of it."""
        if self.kind is Kind.STRUCT and self.name.name == "struct{}":
            return True
        return (
            self.kind is Kind.ALIAS
            and self.underlying is not None
            and self.underlying.is_anonymous_struct()
        )


@dataclass(eq=False)
class Package:
    """A package: its path, doc comments and declared types."""

    path: str
    source_path: str = ""
    name: str = ""
    comments: list[str] = field(default_factory=list)
    types: dict[str, Type] = field(default_factory=dict)


class Universe(dict):
    """All known packages, keyed by import path."""

    def type(self, name: Name) -> Type | None:
        """Return the type declared under ``name``, or None if unknown."""
        package = self.get(name.package)
        if package is None:
            return None
        return package.types.get(name.name)


def parse_fully_qualified_name(name: str) -> Name:
    """Split ``path/to/pkg.TypeName`` into package and type name."""
    package, sep, short = name.rpartition(".")
    if not sep:
        return Name(name=name)
    return Name(package=package, name=short)


def extract_comment_tags(marker: str, lines: list[str]) -> dict[str, list[str]]:
    """Collect ``<marker>key=value`` comment lines into lists of values per key.

    A key without ``=`` gets the empty string as its value.
    """
    out: dict[str, list[str]] = {}
    for line in lines:
        line = line.strip(" ")
        if not line or not line.startswith(marker):
            continue
        key, _, value = line[len(marker):].partition("=")
        out.setdefault(key, []).append(value)
    return out