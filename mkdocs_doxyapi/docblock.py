"""
Docblock assembly.

Pulls the structured parts of a description (title, simple sections,
parameter lists) out of a ``detaileddescription`` subtree and renders every
text-bearing node through the transcoder and the Markdown renderer.
"""

from __future__ import annotations

from .errors import UnsupportedMarkup
from .kinds import ParameterListKind, load_direction, load_parameter_list_kind, load_tag_kind
from .model import Docblock, Parameter, Tag
from .transcode import Transcoder, normalize, plain_text


class DocblockAssembler:
    def __init__(self, markdown, transcoder=None):
        self._render = markdown
        self._transcoder = transcoder or Transcoder()

    # ── text ──

    def _html(self, text):
        text = normalize(text)
        if not text:
            return ""
        return self._render(text).strip()

    def markdown(self, node):
        """Transcode and render a node; None when the node is absent."""
        if node is None:
            return None
        return self._html(self._transcoder.transcode(node))

    def markdown_line(self, node):
        """Like markdown(), without the wrapping paragraph of a one-liner."""
        html = self.markdown(node)
        if html and html.startswith("<p>") and html.endswith("</p>") and html.count("<p>") == 1:
            html = html[3:-4]
        return html

    # ── structure ──

    def load(self, node):
        brief = self.markdown(node.find("briefdescription")) or ""
        detailed_node = node.find("detaileddescription")
        detailed = self.markdown(detailed_node) or ""

        title = None
        tags = {}
        params = {}
        retvals = []
        exceptions = []
        templateparams = []

        if detailed_node is not None:
            tag_titles = {
                id(t) for sect in detailed_node.iter("simplesect") for t in sect.findall("title")
            }
            for el in detailed_node.iter():
                if el.tag == "simplesect":
                    tag = self.load_simplesect(el)
                    tags.setdefault(tag.kind, []).append(tag)
                elif el.tag == "title" and id(el) not in tag_titles:
                    title = self.markdown_line(el)
                elif el.tag == "parameterlist":
                    kind = load_parameter_list_kind(el.get("kind"))
                    items = [self.load_parameteritem(c) for c in el.findall("parameteritem")]
                    if kind is ParameterListKind.PARAM:
                        for item in items:
                            params[item.name] = item
                    elif kind is ParameterListKind.RETVAL:
                        retvals.extend(items)
                    elif kind is ParameterListKind.EXCEPTION:
                        exceptions.extend(items)
                    elif kind is ParameterListKind.TEMPLATEPARAM:
                        templateparams.extend(items)
                elif el.tag == "variablelist":
                    # TODO: render variable lists as definition lists
                    raise UnsupportedMarkup(el.tag)

        return Docblock(
            title=title,
            description="\n".join(part for part in (brief, detailed) if part),
            tag_map={kind: tuple(found) for kind, found in tags.items()},
            params=params,
            retvals=tuple(retvals),
            exceptions=tuple(exceptions),
            templateparams=tuple(templateparams),
        )

    def load_simplesect(self, node):
        title = node.find("title")
        body = "".join(self._transcoder.transcode(p) for p in node.findall("para"))
        return Tag(
            kind=load_tag_kind(node.get("kind")),
            title=plain_text(title) if title is not None else None,
            description=self._html(body),
        )

    def load_parameteritem(self, node):
        name = None
        names = node.find("parameternamelist")
        name_node = names.find("parametername") if names is not None else None
        if name_node is not None:
            name = plain_text(name_node).strip()
        return Parameter(
            name=name,
            direction=load_direction(name_node.get("direction") if name_node is not None else None),
            description=self.markdown(node.find("parameterdescription")) or "",
        )
