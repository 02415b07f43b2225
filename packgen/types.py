"""Data types for a resolved IDL package"""

from dataclasses import dataclass, field
from typing import Optional, Union


# ── Field shapes ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Basic:
    """Primitive type such as bool, string or float64"""
    kind: str


@dataclass(frozen=True)
class Named:
    """Reference to a named member, possibly in another package"""
    name: str
    package: str
    package_name: str = ""
    underlying: Optional["StructShape"] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class MapOf:
    key: "FieldType"
    elem: "FieldType"


@dataclass(frozen=True)
class PointerTo:
    elem: "FieldType"


@dataclass(frozen=True)
class SliceOf:
    elem: "FieldType"


FieldType = Union[Basic, Named, MapOf, PointerTo, SliceOf]


@dataclass(frozen=True)
class Field:
    """Struct field; anonymous fields embed another struct"""
    name: str
    type: FieldType
    anonymous: bool = False


@dataclass(frozen=True)
class StructShape:
    """Underlying field set of a struct or resource"""
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class PropertyOptions:
    """Per-field metadata"""
    name: str
    optional: bool = False
    out: bool = False
    replaces: bool = False


# ── Members ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Position:
    filename: str
    line: int = 0


@dataclass
class Alias:
    name: str
    target: FieldType
    pos: Position = Position("")


@dataclass
class Const:
    name: str
    type: FieldType
    value: str
    pos: Position = Position("")


@dataclass
class Enum:
    name: str
    values: list[str] = field(default_factory=list)
    pos: Position = Position("")


@dataclass
class Struct:
    """Plain data shape, emitted as an interface"""
    name: str
    shape: StructShape = StructShape()
    options: list[PropertyOptions] = field(default_factory=list)
    pos: Position = Position("")


@dataclass
class Resource:
    """Stateful entity, emitted as a class plus an Args interface"""
    name: str
    shape: StructShape = StructShape()
    options: list[PropertyOptions] = field(default_factory=list)
    pos: Position = Position("")


Member = Union[Alias, Const, Enum, Struct, Resource]
TypeMember = Union[Struct, Resource]


# ── Files and packages ───────────────────────────────────────────────


@dataclass
class File:
    """A source file; member_keys holds declaration order"""
    path: str
    member_keys: list[str] = field(default_factory=list)
    members: dict[str, Member] = field(default_factory=dict)

    def add(self, member: Member):
        self.member_keys.append(member.name)
        self.members[member.name] = member

    def ordered_members(self) -> list[Member]:
        return [self.members[key] for key in self.member_keys]


@dataclass
class Package:
    """A compilation unit: files keyed by relative path"""
    name: str
    path: str
    files: dict[str, File] = field(default_factory=dict)
    member_files: dict[str, File] = field(default_factory=dict)

    def add_file(self, file: File):
        self.files[file.path] = file
        for key in file.member_keys:
            self.member_files[key] = file

    def named(self, name: str, underlying: Optional[StructShape] = None) -> Named:
        """Build a reference to one of this package's members"""
        return Named(name=name, package=self.path, package_name=self.name, underlying=underlying)
