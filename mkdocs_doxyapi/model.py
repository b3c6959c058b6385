"""
Typed object model for a loaded Doxygen XML export.

All records are frozen once built. The only post-construction write is
Compound.raw_content, attached once by the loader so the unparsed XML can be
handed on for full-text indexing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Protocol

from .kinds import (
    CompoundKind,
    Direction,
    MemberKind,
    SectionKind,
    TagKind,
    Virtuality,
    Visibility,
)


@dataclass(frozen=True)
class Location:
    file: str
    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class Tag:
    kind: TagKind
    title: Optional[str]
    description: str


@dataclass(frozen=True)
class Parameter:
    """A parameter as documented in a ``parameterlist``."""

    name: Optional[str]
    description: str
    direction: Direction = Direction.IN


@dataclass(frozen=True)
class Param:
    """A parameter as declared in a signature."""

    name: Optional[str]
    type: Optional[str]


@dataclass(frozen=True)
class Docblock:
    title: Optional[str] = None
    description: str = ""
    tag_map: dict[TagKind, tuple[Tag, ...]] = field(default_factory=dict)
    params: dict[str, Parameter] = field(default_factory=dict)
    retvals: tuple[Parameter, ...] = ()
    exceptions: tuple[Parameter, ...] = ()
    templateparams: tuple[Parameter, ...] = ()

    def has_tag(self, kind):
        return kind in self.tag_map

    def tag(self, kind):
        tags = self.tag_map.get(kind)
        return tags[0] if tags else None

    def tags(self, kind):
        return self.tag_map.get(kind, ())

    def has_tags(self):
        return bool(self.tag_map)

    def has_param(self, name):
        return name in self.params

    def param(self, name):
        return self.params.get(name)


class Documentable(Protocol):
    """Shape shared by compounds, members and enum values."""

    id: str
    name: Optional[str]
    details: Docblock


@dataclass(frozen=True)
class Include:
    id: Optional[str]
    file: str
    local: bool = False


@dataclass(frozen=True)
class Ref:
    id: Optional[str]
    name: str
    visibility: Visibility = Visibility.PUBLIC
    tooltip: Optional[str] = None


@dataclass(frozen=True)
class CompoundRef:
    id: Optional[str]
    name: str
    visibility: Visibility = Visibility.PUBLIC
    virtuality: Virtuality = Virtuality.NONE


@dataclass(frozen=True)
class Value:
    id: str
    name: Optional[str]
    initializer: Optional[str]
    details: Docblock


@dataclass(frozen=True)
class Member:
    id: str
    kind: MemberKind
    name: Optional[str]
    details: Docblock
    location: Optional[Location] = None
    type: Optional[str] = None
    initializer: Optional[str] = None
    exceptions: Optional[str] = None
    definition: Optional[str] = None
    argsstring: Optional[str] = None
    params: tuple[Param, ...] = ()
    values: tuple[Value, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    virtuality: Virtuality = Virtuality.NONE
    static: bool = False
    const: bool = False
    explicit: bool = False
    inline: bool = False
    virtual: bool = False
    volatile: bool = False
    mutable: bool = False
    readable: bool = False
    writable: bool = False
    initonly: bool = False
    settable: bool = False
    gettable: bool = False
    final: bool = False
    sealed: bool = False
    new: bool = False
    add: bool = False
    remove: bool = False
    raise_: bool = False


@dataclass(frozen=True)
class Compound:
    id: str
    kind: CompoundKind
    name: Optional[str]
    details: Docblock
    location: Optional[Location] = None
    title: Optional[str] = None
    visibility: Visibility = Visibility.PUBLIC
    final: bool = False
    sealed: bool = False
    abstract: bool = False
    parents: tuple[CompoundRef, ...] = ()
    children: tuple[CompoundRef, ...] = ()
    includes: tuple[Include, ...] = ()
    includedby: tuple[Include, ...] = ()
    dirs: tuple[Ref, ...] = ()
    files: tuple[Ref, ...] = ()
    classes: tuple[Ref, ...] = ()
    namespaces: tuple[Ref, ...] = ()
    pages: tuple[Ref, ...] = ()
    groups: tuple[Ref, ...] = ()
    sections: dict[SectionKind, tuple[Member, ...]] = field(default_factory=dict)
    source_file: str = ""
    mtime: float = 0.0
    raw_content: Optional[str] = field(default=None, compare=False)

    def attach_raw_content(self, raw):
        if self.raw_content is not None:
            raise AttributeError(f"raw content of {self.id!r} is already attached")
        object.__setattr__(self, "raw_content", raw)

    def each_section(self) -> Iterator[tuple[SectionKind, tuple[Member, ...]]]:
        yield from self.sections.items()

    def members(self) -> Iterator[Member]:
        for members in self.sections.values():
            yield from members


@dataclass(frozen=True)
class MemberReference:
    id: str
    name: Optional[str]
    kind: MemberKind


@dataclass(frozen=True)
class Reference:
    id: str
    name: Optional[str]
    kind: CompoundKind
    members: tuple[MemberReference, ...] = ()


@dataclass
class Index:
    """Kind-grouped navigation list built from ``index.xml``."""

    file: str = ""
    raw_content: str = ""
    mtime: float = 0.0
    sections: dict[CompoundKind, list[Reference]] = field(default_factory=dict)

    def add(self, reference):
        self.sections.setdefault(reference.kind, []).append(reference)
        return self

    def each_object(self, *kinds) -> Iterator[Reference]:
        for kind in kinds or tuple(self.sections):
            yield from self.sections.get(kind, ())

    def __len__(self):
        return sum(len(refs) for refs in self.sections.values())


@dataclass
class Registry:
    """All compounds of one load, keyed by id, plus the index."""

    compounds: dict[str, Compound] = field(default_factory=dict)
    index: Index = field(default_factory=Index)

    @property
    def index_file(self):
        return self.index.file

    def each_object(self) -> Iterator[Compound]:
        yield from self.compounds.values()

    def get(self, id) -> Optional[Compound]:
        return self.compounds.get(id)

    def resolve(self, ref) -> Optional[Compound]:
        """Look up the compound a Ref/CompoundRef/Include points at, if loaded."""
        if ref.id is None:
            return None
        return self.compounds.get(ref.id)

    def __len__(self):
        return len(self.compounds)
