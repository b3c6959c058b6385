"""
Closed taxonomy tables for Doxygen XML attribute values.

Every enumerated attribute is looked up by exact string match. Values that
are not in a table raise UnsupportedValue, so a new Doxygen schema value has
to be added here before it can be loaded.
"""

from __future__ import annotations

from enum import Enum

from .errors import UnsupportedValue


class CompoundKind(Enum):
    CLASS = "class"
    STRUCT = "struct"
    UNION = "union"
    INTERFACE = "interface"
    PROTOCOL = "protocol"
    CATEGORY = "category"
    EXCEPTION = "exception"
    SERVICE = "service"
    SINGLETON = "singleton"
    MODULE = "module"
    TYPE = "type"
    FILE = "file"
    NAMESPACE = "namespace"
    GROUP = "group"
    PAGE = "page"
    EXAMPLE = "example"
    DIR = "dir"


class MemberKind(Enum):
    DEFINE = "define"
    PROPERTY = "property"
    EVENT = "event"
    VARIABLE = "variable"
    TYPEDEF = "typedef"
    ENUM = "enum"
    ENUMVALUE = "enumvalue"
    FUNCTION = "function"
    SIGNAL = "signal"
    PROTOTYPE = "prototype"
    FRIEND = "friend"
    DCOP = "dcop"
    SLOT = "slot"
    INTERFACE = "interface"
    SERVICE = "service"


class SectionKind(Enum):
    USER_DEFINED = "user-defined"
    PUBLIC_TYPE = "public-type"
    PUBLIC_FUNC = "public-func"
    PUBLIC_ATTRIB = "public-attrib"
    PUBLIC_SLOT = "public-slot"
    SIGNAL = "signal"
    DCOP_FUNC = "dcop-func"
    PROPERTY = "property"
    EVENT = "event"
    PUBLIC_STATIC_FUNC = "public-static-func"
    PUBLIC_STATIC_ATTRIB = "public-static-attrib"
    PROTECTED_TYPE = "protected-type"
    PROTECTED_FUNC = "protected-func"
    PROTECTED_ATTRIB = "protected-attrib"
    PROTECTED_SLOT = "protected-slot"
    PROTECTED_STATIC_FUNC = "protected-static-func"
    PROTECTED_STATIC_ATTRIB = "protected-static-attrib"
    PACKAGE_TYPE = "package-type"
    PACKAGE_FUNC = "package-func"
    PACKAGE_ATTRIB = "package-attrib"
    PACKAGE_STATIC_FUNC = "package-static-func"
    PACKAGE_STATIC_ATTRIB = "package-static-attrib"
    PRIVATE_TYPE = "private-type"
    PRIVATE_FUNC = "private-func"
    PRIVATE_ATTRIB = "private-attrib"
    PRIVATE_SLOT = "private-slot"
    PRIVATE_STATIC_FUNC = "private-static-func"
    PRIVATE_STATIC_ATTRIB = "private-static-attrib"
    FRIEND = "friend"
    RELATED = "related"
    DEFINE = "define"
    PROTOTYPE = "prototype"
    TYPEDEF = "typedef"
    ENUM = "enum"
    FUNC = "func"
    VAR = "var"


class Visibility(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = "package"


class Virtuality(Enum):
    NONE = "non-virtual"
    VIRTUAL = "virtual"
    PURE = "pure-virtual"


class Direction(Enum):
    IN = "in"
    OUT = "out"
    INOUT = "inout"


class TagKind(Enum):
    SEE = "see"
    RETURN = "return"
    AUTHOR = "author"
    AUTHORS = "authors"
    VERSION = "version"
    SINCE = "since"
    DATE = "date"
    NOTE = "note"
    WARNING = "warning"
    PRE = "pre"
    POST = "post"
    COPYRIGHT = "copyright"
    INVARIANT = "invariant"
    REMARK = "remark"
    ATTENTION = "attention"
    PAR = "par"
    RCS = "rcs"


class ParameterListKind(Enum):
    PARAM = "param"
    RETVAL = "retval"
    EXCEPTION = "exception"
    TEMPLATEPARAM = "templateparam"


def _table(enum):
    return {member.value: member for member in enum}


_COMPOUND_KINDS = _table(CompoundKind)
_MEMBER_KINDS = _table(MemberKind)
_SECTION_KINDS = _table(SectionKind)
_VISIBILITIES = _table(Visibility)
_VIRTUALITIES = _table(Virtuality)
_DIRECTIONS = _table(Direction)
_TAG_KINDS = _table(TagKind)
_PARAMETER_LIST_KINDS = _table(ParameterListKind)


def _lookup(table, value, enum_name):
    try:
        return table[value]
    except (KeyError, TypeError):
        raise UnsupportedValue(value, enum_name) from None


def load_compound_kind(value) -> CompoundKind:
    return _lookup(_COMPOUND_KINDS, value, "compound kind")


def load_member_kind(value) -> MemberKind:
    return _lookup(_MEMBER_KINDS, value, "member kind")


def load_section_kind(value) -> SectionKind:
    return _lookup(_SECTION_KINDS, value, "section kind")


def load_tag_kind(value) -> TagKind:
    return _lookup(_TAG_KINDS, value, "tag kind")


def load_parameter_list_kind(value) -> ParameterListKind:
    return _lookup(_PARAMETER_LIST_KINDS, value, "parameter list kind")


def load_visibility(value) -> Visibility:
    if value is None:
        return Visibility.PUBLIC
    return _lookup(_VISIBILITIES, value, "visibility")


def load_virtuality(value) -> Virtuality:
    if value is None:
        return Virtuality.NONE
    return _lookup(_VIRTUALITIES, value, "virtuality")


def load_direction(value) -> Direction:
    if value is None:
        return Direction.IN
    return _lookup(_DIRECTIONS, value, "direction")


def load_bool(value) -> bool:
    return value == "yes"


# Page labels

_COMPOUND_LABELS = {
    CompoundKind.CLASS: "Class",
    CompoundKind.STRUCT: "Struct",
    CompoundKind.UNION: "Union",
    CompoundKind.INTERFACE: "Interface",
    CompoundKind.PROTOCOL: "Protocol",
    CompoundKind.CATEGORY: "Category",
    CompoundKind.EXCEPTION: "Exception",
    CompoundKind.SERVICE: "Service",
    CompoundKind.SINGLETON: "Singleton",
    CompoundKind.MODULE: "Module",
    CompoundKind.TYPE: "Type",
    CompoundKind.FILE: "File",
    CompoundKind.NAMESPACE: "Namespace",
    CompoundKind.GROUP: "Group",
    CompoundKind.PAGE: "Page",
    CompoundKind.EXAMPLE: "Example",
    CompoundKind.DIR: "Directory",
}

_MEMBER_LABELS = {
    MemberKind.DEFINE: "Macro",
    MemberKind.PROPERTY: "Property",
    MemberKind.EVENT: "Event",
    MemberKind.VARIABLE: "Variable",
    MemberKind.TYPEDEF: "Type",
    MemberKind.ENUM: "Enum",
    MemberKind.ENUMVALUE: "Enumerator",
    MemberKind.FUNCTION: "Function",
    MemberKind.SIGNAL: "Signal",
    MemberKind.PROTOTYPE: "Prototype",
    MemberKind.FRIEND: "Friend",
    MemberKind.DCOP: "DCOP",
    MemberKind.SLOT: "Slot",
    MemberKind.INTERFACE: "Interface",
    MemberKind.SERVICE: "Service",
}

_SECTION_WORDS = {
    "type": "Types",
    "func": "Functions",
    "attrib": "Attributes",
    "slot": "Slots",
    "signal": "Signals",
    "property": "Properties",
    "event": "Events",
    "friend": "Friends",
    "related": "Related",
    "define": "Macros",
    "prototype": "Prototypes",
    "typedef": "Typedefs",
    "enum": "Enumerations",
    "var": "Variables",
    "dcop": "DCOP",
    "user": "User",
    "defined": "Defined",
}


def compound_label(kind: CompoundKind) -> str:
    return _COMPOUND_LABELS[kind]


def member_label(kind: MemberKind) -> str:
    return _MEMBER_LABELS[kind]


def section_title(kind: SectionKind) -> str:
    """Heading for a section, e.g. ``public-static-func`` -> ``Public Static Functions``."""
    words = kind.value.split("-")
    return " ".join(_SECTION_WORDS.get(w, w.capitalize()) for w in words)
