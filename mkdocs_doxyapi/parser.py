"""
Doxygen XML loader.

Reads a Doxygen XML output directory in two passes: every compound file
becomes a Compound keyed by id, then ``index.xml`` becomes the kind-grouped
Index used for navigation. A malformed file or an unknown attribute value
anywhere aborts the whole load.
"""

from __future__ import annotations

import glob
import logging
import os
import xml.etree.ElementTree as ElementTree

from .docblock import DocblockAssembler
from .errors import LoadError
from .kinds import (
    Virtuality,
    load_bool,
    load_compound_kind,
    load_member_kind,
    load_section_kind,
    load_virtuality,
    load_visibility,
)
from .model import (
    Compound,
    CompoundRef,
    Include,
    Index,
    Location,
    Member,
    MemberReference,
    Param,
    Ref,
    Reference,
    Registry,
    Value,
)
from .transcode import Transcoder, plain_text, split_member_id

log = logging.getLogger("mkdocs.plugins.doxyapi")

INDEX_FILE = "index.xml"

# memberdef attribute -> Member field
_MEMBER_FLAGS = {
    "static": "static",
    "const": "const",
    "explicit": "explicit",
    "inline": "inline",
    "volatile": "volatile",
    "mutable": "mutable",
    "readable": "readable",
    "writable": "writable",
    "initonly": "initonly",
    "settable": "settable",
    "gettable": "gettable",
    "final": "final",
    "sealed": "sealed",
    "new": "new",
    "add": "add",
    "remove": "remove",
    "raise": "raise_",
}


def _text(node):
    return plain_text(node) if node is not None else None


def _read_xml(path):
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise LoadError(path, f"cannot read: {exc.strerror or exc}") from exc
    try:
        root = ElementTree.fromstring(data)
    except ElementTree.ParseError as exc:
        raise LoadError(path, f"malformed XML: {exc}") from exc
    return data.decode("utf-8", errors="replace"), root


def member_anchor(refid):
    _, anchor = split_member_id(refid)
    return anchor or refid


def load_location(node):
    if node is None:
        return None
    return Location(
        file=node.get("file", ""),
        line=int(node.get("line") or 1),
        column=int(node.get("column") or 1),
    )


def load_include(node):
    return Include(id=node.get("refid"), file=plain_text(node), local=load_bool(node.get("local")))


def load_ref(node):
    return Ref(
        id=node.get("refid"),
        name=plain_text(node),
        visibility=load_visibility(node.get("prot")),
        tooltip=node.get("tooltip"),
    )


def load_compound_ref(node):
    return CompoundRef(
        id=node.get("refid"),
        name=plain_text(node),
        visibility=load_visibility(node.get("prot")),
        virtuality=load_virtuality(node.get("virt")),
    )


def load_member_reference(node):
    return MemberReference(
        id=node.get("refid"),
        name=_text(node.find("name")),
        kind=load_member_kind(node.get("kind")),
    )


def load_compound_reference(node):
    return Reference(
        id=node.get("refid"),
        name=_text(node.find("name")),
        kind=load_compound_kind(node.get("kind")),
        members=tuple(load_member_reference(el) for el in node.findall("member")),
    )


class XmlLoader:
    def __init__(self, markdown, *, transcoder=None):
        self.docblocks = DocblockAssembler(markdown, transcoder or Transcoder())

    def load(self, xml_dir, index_file=INDEX_FILE) -> Registry:
        xml_dir = os.path.abspath(xml_dir)
        if not os.path.isdir(xml_dir):
            raise LoadError(xml_dir, "Doxygen XML directory not found")
        index_path = os.path.join(xml_dir, index_file)

        registry = Registry()
        for path in sorted(glob.glob(os.path.join(xml_dir, "*.xml"))):
            if path == index_path:
                continue
            self._load_compound_file(path, registry)

        if not os.path.isfile(index_path):
            raise LoadError(index_path, "index file not found")
        raw, root = _read_xml(index_path)
        registry.index = Index(file=index_path, raw_content=raw, mtime=os.path.getmtime(index_path))
        for element in root.findall("compound"):
            registry.index.add(load_compound_reference(element))

        log.info(
            "doxyapi: loaded %d compounds, %d index entries from %s",
            len(registry),
            len(registry.index),
            xml_dir,
        )
        return registry

    def _load_compound_file(self, path, registry):
        raw, root = _read_xml(path)
        mtime = os.path.getmtime(path)
        for element in root.findall("compounddef"):
            compound = self.load_compound(element, source_file=path, mtime=mtime)
            compound.attach_raw_content(raw)
            previous = registry.compounds.get(compound.id)
            if previous is not None:
                log.warning(
                    "doxyapi: duplicate compound id %s in %s (first seen in %s), keeping the later one",
                    compound.id,
                    path,
                    previous.source_file,
                )
            registry.compounds[compound.id] = compound

    def load_compound(self, node, *, source_file="", mtime=0.0) -> Compound:
        sections = {}
        for el in node.findall("sectiondef"):
            kind = load_section_kind(el.get("kind"))
            members = tuple(self.load_member(m) for m in el.findall("memberdef"))
            sections[kind] = sections.get(kind, ()) + members

        return Compound(
            id=node.get("id"),
            kind=load_compound_kind(node.get("kind")),
            name=_text(node.find("compoundname")),
            title=_text(node.find("title")),
            visibility=load_visibility(node.get("prot")),
            final=load_bool(node.get("final")),
            sealed=load_bool(node.get("sealed")),
            abstract=load_bool(node.get("abstract")),
            parents=tuple(load_compound_ref(el) for el in node.findall("basecompoundref")),
            children=tuple(load_compound_ref(el) for el in node.findall("derivedcompoundref")),
            includes=tuple(load_include(el) for el in node.findall("includes")),
            includedby=tuple(load_include(el) for el in node.findall("includedby")),
            dirs=tuple(load_ref(el) for el in node.findall("innerdir")),
            files=tuple(load_ref(el) for el in node.findall("innerfile")),
            classes=tuple(load_ref(el) for el in node.findall("innerclass")),
            namespaces=tuple(load_ref(el) for el in node.findall("innernamespace")),
            pages=tuple(load_ref(el) for el in node.findall("innerpage")),
            groups=tuple(load_ref(el) for el in node.findall("innergroup")),
            details=self.docblocks.load(node),
            location=load_location(node.find("location")),
            sections=sections,
            source_file=source_file,
            mtime=mtime,
        )

    def load_member(self, node) -> Member:
        line = self.docblocks.markdown_line
        virtuality = load_virtuality(node.get("virt"))
        flags = {field: load_bool(node.get(attr)) for attr, field in _MEMBER_FLAGS.items()}
        return Member(
            id=member_anchor(node.get("id", "")),
            kind=load_member_kind(node.get("kind")),
            name=_text(node.find("name")),
            type=line(node.find("type")),
            initializer=line(node.find("initializer")),
            exceptions=line(node.find("exceptions")),
            definition=_text(node.find("definition")),
            argsstring=_text(node.find("argsstring")),
            params=tuple(self.load_param(el) for el in node.findall("param")),
            values=tuple(self.load_enumvalue(el) for el in node.findall("enumvalue")),
            visibility=load_visibility(node.get("prot")),
            virtuality=virtuality,
            virtual=virtuality is not Virtuality.NONE,
            details=self.docblocks.load(node),
            location=load_location(node.find("location")),
            **flags,
        )

    def load_enumvalue(self, node) -> Value:
        return Value(
            id=member_anchor(node.get("id", "")),
            name=_text(node.find("name")),
            initializer=self.docblocks.markdown_line(node.find("initializer")),
            details=self.docblocks.load(node),
        )

    def load_param(self, node) -> Param:
        name = node.find("declname")
        if name is None:
            name = node.find("defname")
        return Param(name=_text(name), type=self.docblocks.markdown_line(node.find("type")))


def load_registry(xml_dir, markdown, *, index_file=INDEX_FILE, transcoder=None) -> Registry:
    return XmlLoader(markdown, transcoder=transcoder).load(xml_dir, index_file)
