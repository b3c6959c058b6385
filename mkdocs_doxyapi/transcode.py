"""
Doxygen description markup -> Markdown.

Doxygen descriptions are mixed content: text interleaved with inline and
block markup elements. Every element name the transcoder accepts is listed
in one dispatch table. Names that are deliberately dropped map to the empty
string, names that are deliberately not implemented raise
UnsupportedMarkup, and anything else is unknown and raises as well.
"""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as ElementTree

from .entities import ALIASED_ENTITIES, NAMED_ENTITIES, entity_for
from .errors import UnsupportedMarkup

API_PREFIX = "/api"

# Doxygen member ids are "<compound id>_1<anchor>"; plain underscores in
# names are escaped as "__", so "_1" only ever separates the two parts.
MEMBER_ID_SEPARATOR = "_1"

PASSTHROUGH_TAGS = frozenset(
    {
        "briefdescription",
        "detaileddescription",
        "description",
        "listitem",
        "parameterdescription",
        "type",
        "initializer",
        "exceptions",
        "title",
        "internal",
        "sect1",
        "sect2",
        "sect3",
        "sect4",
        "center",
        "small",
        "highlight",
        "codeline",
    }
)

IGNORED_TAGS = frozenset(
    {
        "formula",
        "programlisting",
        "indexentry",
        "simplesect",
        "parameterlist",
        "variablelist",
        "latexonly",
        "rtfonly",
        "manonly",
        "xmlonly",
        "docbookonly",
    }
)

UNSUPPORTED_TAGS = frozenset(
    {
        "table",
        "heading",
        "dotfile",
        "mscfile",
        "diafile",
        "toclist",
        "language",
        "xrefsect",
        "copydoc",
        "parblock",
        "plantuml",
        "msc",
    }
)

_WHITESPACE_RE = re.compile(r"\s+")
_EMPHASIS_RE = re.compile(r"[*_]")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def escape_text(text):
    """Normalize a text node for use as Markdown."""
    text = html.escape(text, quote=False)
    text = text.replace("\u00a0", "&nbsp;")
    text = text.strip("\n")
    text = _WHITESPACE_RE.sub(" ", text)
    return _EMPHASIS_RE.sub(r"\\\g<0>", text)


def plain_text(node):
    return "".join(node.itertext())


def normalize(markdown):
    markdown = _BLANK_LINES_RE.sub("\n\n", markdown)
    return markdown.strip()


def split_member_id(refid):
    """``classFoo_1a2b`` -> ``("classFoo", "a2b")``."""
    owner, sep, anchor = refid.rpartition(MEMBER_ID_SEPARATOR)
    if not sep or not owner:
        return refid, None
    return owner, anchor


def api_url(refid, anchor=None, prefix=API_PREFIX):
    url = f"{prefix}/{refid}"
    if anchor:
        url += f"#{anchor}"
    return url


def _indent_continuation(text, marker):
    first, *rest = text.split("\n")
    pad = " " * 4
    lines = [marker + first] + [pad + line if line else line for line in rest]
    return "\n".join(lines)


class Transcoder:
    def __init__(self, *, link_prefix=API_PREFIX, diagram_keyword="dot"):
        self.link_prefix = link_prefix
        self.diagram_keyword = diagram_keyword

        rules = {
            "para": self._para,
            "bold": self._bold,
            "emphasis": self._emphasis,
            "computeroutput": self._computeroutput,
            "preformatted": self._preformatted,
            "verbatim": self._verbatim,
            "dot": self._dot,
            "htmlonly": self._htmlonly,
            "superscript": self._wrap("sup"),
            "subscript": self._wrap("sub"),
            "strike": self._wrap("del"),
            "del": self._wrap("del"),
            "s": self._wrap("del"),
            "underline": self._wrap("ins"),
            "ins": self._wrap("ins"),
            "orderedlist": self._orderedlist,
            "itemizedlist": self._itemizedlist,
            "blockquote": self._blockquote,
            "ulink": self._ulink,
            "anchor": self._anchor,
            "ref": self._ref,
            "sp": lambda node: " ",
            "linebreak": lambda node: "\n",
            "hruler": lambda node: "\n\n---\n\n",
        }
        rules.update(dict.fromkeys(PASSTHROUGH_TAGS, self.children))
        rules.update(dict.fromkeys(IGNORED_TAGS, lambda node: ""))
        rules.update(dict.fromkeys(UNSUPPORTED_TAGS, self._unsupported))
        rules.update(dict.fromkeys(NAMED_ENTITIES, self._entity))
        rules.update(dict.fromkeys(ALIASED_ENTITIES, self._entity))
        # <image/> is both the "&image;" entity and a picture embed
        rules["image"] = self._image
        self._rules = rules

    def transcode(self, node: ElementTree.Element) -> str:
        rule = self._rules.get(node.tag)
        if rule is None:
            raise UnsupportedMarkup(node.tag, "unknown")
        return rule(node)

    def children(self, node):
        parts = []
        if node.text:
            parts.append(escape_text(node.text))
        for child in node:
            parts.append(self.transcode(child))
            if child.tail:
                parts.append(escape_text(child.tail))
        return "".join(parts)

    # ── inline ──

    def _para(self, node):
        return self.children(node) + "\n\n"

    def _bold(self, node):
        return "**" + escape_text(plain_text(node)) + "**"

    def _emphasis(self, node):
        return "*" + escape_text(plain_text(node)) + "*"

    def _computeroutput(self, node):
        return "<samp>" + escape_text(plain_text(node)) + "</samp>"

    def _preformatted(self, node):
        return "`` " + plain_text(node) + " ``"

    def _wrap(self, tag):
        def rule(node):
            return f"<{tag}>{self.children(node)}</{tag}>"

        return rule

    def _htmlonly(self, node):
        return plain_text(node)

    def _entity(self, node):
        return entity_for(node.tag)

    def _image(self, node):
        if node.attrib:
            return self._unsupported(node)
        return "&image;"

    def _unsupported(self, node):
        raise UnsupportedMarkup(node.tag)

    # ── blocks ──

    def _fence(self, code, language=""):
        code = code.strip("\n")
        return f"\n\n```{language}\n{code}\n```\n\n"

    def _verbatim(self, node):
        return self._fence(plain_text(node))

    def _dot(self, node):
        return self._fence(plain_text(node), self.diagram_keyword)

    def _orderedlist(self, node):
        items = [
            _indent_continuation(normalize(self.transcode(item)), f"{i}. ")
            for i, item in enumerate(node.findall("listitem"), 1)
        ]
        return "\n\n" + "\n".join(items) + "\n\n"

    def _itemizedlist(self, node):
        items = [
            _indent_continuation(normalize(self.transcode(item)), "* ")
            for item in node.findall("listitem")
        ]
        return "\n\n" + "\n".join(items) + "\n\n"

    def _blockquote(self, node):
        paras = []
        for para in node.findall("para"):
            lines = normalize(self.transcode(para)).split("\n")
            paras.append("\n".join(f"> {line}" if line else ">" for line in lines))
        return "\n\n" + "\n>\n".join(paras) + "\n\n"

    # ── links ──

    def _ulink(self, node):
        return f"[{self.children(node)}]({node.get('url')})"

    def _anchor(self, node):
        return f"[{self.children(node)}](#{node.get('id')})"

    def _ref(self, node):
        refid = node.get("refid")
        if not refid:
            return ""
        text = plain_text(node)
        if node.get("kindref") == "member":
            owner, anchor = split_member_id(refid)
            return f"[`{text}`]({api_url(owner, anchor, self.link_prefix)})"
        return f"[`{text}`]({api_url(refid, prefix=self.link_prefix)})"


def transcode(node, **kwargs):
    return Transcoder(**kwargs).transcode(node)
