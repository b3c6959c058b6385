"""
Markdown pages for loaded compounds and for the API index.

Descriptions in the object model are already HTML, so pages are Markdown
skeletons (headings, signature fences) around raw HTML blocks for
descriptions, tags and parameter tables.
"""

from __future__ import annotations

import html
import re

from .kinds import (
    CompoundKind,
    MemberKind,
    TagKind,
    Visibility,
    compound_label,
    member_label,
    section_title,
)
from .transcode import API_PREFIX, api_url

_TAG_LABELS = {
    TagKind.SEE: "See also",
    TagKind.RETURN: "Returns",
    TagKind.AUTHOR: "Author",
    TagKind.AUTHORS: "Authors",
    TagKind.VERSION: "Version",
    TagKind.SINCE: "Since",
    TagKind.DATE: "Date",
    TagKind.NOTE: "Note",
    TagKind.WARNING: "Warning",
    TagKind.PRE: "Precondition",
    TagKind.POST: "Postcondition",
    TagKind.COPYRIGHT: "Copyright",
    TagKind.INVARIANT: "Invariant",
    TagKind.REMARK: "Remark",
    TagKind.ATTENTION: "Attention",
    TagKind.PAR: "",
    TagKind.RCS: "RCS",
}

INDEX_TITLES = {
    CompoundKind.CLASS: "Classes",
    CompoundKind.STRUCT: "Structs",
    CompoundKind.UNION: "Unions",
    CompoundKind.INTERFACE: "Interfaces",
    CompoundKind.PROTOCOL: "Protocols",
    CompoundKind.CATEGORY: "Categories",
    CompoundKind.EXCEPTION: "Exceptions",
    CompoundKind.SERVICE: "Services",
    CompoundKind.SINGLETON: "Singletons",
    CompoundKind.MODULE: "Modules",
    CompoundKind.TYPE: "Types",
    CompoundKind.FILE: "Files",
    CompoundKind.NAMESPACE: "Namespaces",
    CompoundKind.GROUP: "Groups",
    CompoundKind.PAGE: "Pages",
    CompoundKind.EXAMPLE: "Examples",
}

_CALLABLE_KINDS = frozenset(
    {
        MemberKind.FUNCTION,
        MemberKind.SIGNAL,
        MemberKind.SLOT,
        MemberKind.PROTOTYPE,
        MemberKind.FRIEND,
        MemberKind.DCOP,
    }
)

_TAG_RE = re.compile(r"<[^>]+>")


class RenderConfig:
    def __init__(self, *, heading_level=1, language="c", link_prefix=API_PREFIX, show_private=False):
        self.heading_level = heading_level
        self.language = language
        self.link_prefix = link_prefix
        self.show_private = show_private


def _heading(text, level):
    return f"{'#' * min(level, 6)} {text}"


def _code(text):
    return f"<code>{html.escape(text or '')}</code>"


def _strip_tags(fragment):
    return html.unescape(_TAG_RE.sub("", fragment or ""))


def anchor_id(obj):
    return obj.id


def page_title(compound):
    return compound.title or compound.name or compound.id


def summary(compound):
    return f'{compound.name} <small class="text-muted">{compound.kind.value}</small>'


def _link(ref, registry, cfg):
    name = html.escape(ref.name or ref.id or "")
    if ref.id is not None and registry.resolve(ref) is not None:
        return f'<a href="{api_url(ref.id, prefix=cfg.link_prefix)}"><code>{name}</code></a>'
    return f"<code>{name}</code>"


def member_signature(member):
    """Plain-text declaration shown in the member's code block."""
    if member.kind is MemberKind.DEFINE:
        sig = f"#define {member.name}"
        if member.params:
            sig += "(" + ", ".join(p.name or "" for p in member.params) + ")"
        if member.initializer:
            sig += " " + _strip_tags(member.initializer)
        return sig
    if member.kind is MemberKind.ENUM:
        return f"enum {member.name}"
    sig = member.definition or member.name or ""
    if member.kind in _CALLABLE_KINDS and member.argsstring:
        sig += member.argsstring
    return sig


# ── docblock pieces ──


def render_description(details):
    if not details.description:
        return []
    return [f'<div class="doxyapi-description">\n{details.description}\n</div>', ""]


def render_tags(details):
    parts = []
    for kind, tags in details.tag_map.items():
        for tag in tags:
            label = tag.title or _TAG_LABELS[kind]
            title = f"<strong>{html.escape(label)}</strong>\n" if label else ""
            parts += [
                f'<div class="doxyapi-tag doxyapi-tag-{kind.value}">\n{title}{tag.description}\n</div>',
                "",
            ]
    return parts


def _parameter_table(title, parameters, *, direction=False):
    if not parameters:
        return []
    head = "<th>Name</th>"
    if direction:
        head += "<th>Direction</th>"
    head += "<th>Description</th>"
    rows = []
    for p in parameters:
        row = f"<td>{_code(p.name)}</td>"
        if direction:
            row += f"<td>{p.direction.value}</td>"
        row += f"<td>{p.description}</td>"
        rows.append(f"<tr>{row}</tr>")
    return [
        f"**{title}**",
        "",
        '<table class="doxyapi-params">',
        f"<thead><tr>{head}</tr></thead>",
        "<tbody>",
        *rows,
        "</tbody>",
        "</table>",
        "",
    ]


def render_parameters(details):
    parts = []
    parts += _parameter_table("Template parameters", details.templateparams)
    parts += _parameter_table("Parameters", list(details.params.values()), direction=True)
    parts += _parameter_table("Return values", details.retvals)
    parts += _parameter_table("Exceptions", details.exceptions)
    return parts


def render_docblock(details):
    return render_description(details) + render_parameters(details) + render_tags(details)


# ── members ──


def render_values(values):
    if not values:
        return []
    rows = []
    for v in values:
        rows.append(
            f'<tr><td><a id="{anchor_id(v)}"></a>{_code(v.name)}</td>'
            f"<td>{v.initializer or ''}</td>"
            f"<td>{v.details.description}</td></tr>"
        )
    return [
        "**Values**",
        "",
        '<table class="doxyapi-values">',
        "<thead><tr><th>Name</th><th>Value</th><th>Description</th></tr></thead>",
        "<tbody>",
        *rows,
        "</tbody>",
        "</table>",
        "",
    ]


def render_member(member, cfg=None):
    if cfg is None:
        cfg = RenderConfig()
    parts = [
        f'<a id="{anchor_id(member)}"></a>',
        "",
        _heading(f"{member_label(member.kind)}: `{member.name}`", cfg.heading_level),
        "",
    ]
    sig = member_signature(member)
    if sig:
        parts += [f"```{cfg.language}", sig, "```", ""]
    parts += render_docblock(member.details)
    parts += render_values(member.values)
    return "\n".join(parts)


def _visible(member, cfg):
    return cfg.show_private or member.visibility is not Visibility.PRIVATE


# ── compounds ──


def _ref_list(title, refs, registry, cfg):
    if not refs:
        return []
    items = ", ".join(_link(ref, registry, cfg) for ref in refs)
    return [f"**{title}:** {items}", ""]


def _include_list(includes, registry, cfg):
    if not includes:
        return []
    items = []
    for inc in includes:
        text = f"<{inc.file}>" if not inc.local else f'"{inc.file}"'
        if inc.id is not None and registry.get(inc.id) is not None:
            items.append(f'<a href="{api_url(inc.id, prefix=cfg.link_prefix)}">{_code(text)}</a>')
        else:
            items.append(_code(text))
    return ["**Includes:** " + ", ".join(items), ""]


def render_compound(compound, registry, cfg=None):
    if cfg is None:
        cfg = RenderConfig()
    level = cfg.heading_level
    parts = [_heading(f"{compound_label(compound.kind)}: `{page_title(compound)}`", level), ""]

    if compound.location and compound.location.file:
        parts += [f"Defined in {_code(compound.location.file)}", ""]

    parts += render_docblock(compound.details)

    parts += _ref_list("Inherits from", compound.parents, registry, cfg)
    parts += _ref_list("Inherited by", compound.children, registry, cfg)
    parts += _include_list(compound.includes, registry, cfg)
    parts += _ref_list("Namespaces", compound.namespaces, registry, cfg)
    parts += _ref_list("Classes", compound.classes, registry, cfg)
    parts += _ref_list("Files", compound.files, registry, cfg)
    parts += _ref_list("Directories", compound.dirs, registry, cfg)
    parts += _ref_list("Groups", compound.groups, registry, cfg)
    parts += _ref_list("Pages", compound.pages, registry, cfg)

    mcfg = RenderConfig(
        heading_level=level + 2,
        language=cfg.language,
        link_prefix=cfg.link_prefix,
        show_private=cfg.show_private,
    )
    for kind, members in compound.each_section():
        shown = [m for m in members if _visible(m, cfg)]
        if not shown:
            continue
        parts += [_heading(section_title(kind), level + 1), ""]
        parts.append("\n\n---\n\n".join(render_member(m, mcfg) for m in shown))
        parts.append("")

    return "\n".join(parts)


def render_index(index, cfg=None, *, title="API docs"):
    if cfg is None:
        cfg = RenderConfig()
    parts = [_heading(title, cfg.heading_level), ""]
    for kind, heading in INDEX_TITLES.items():
        refs = list(index.each_object(kind))
        if not refs:
            continue
        parts += [_heading(heading, cfg.heading_level + 1), ""]
        for ref in refs:
            parts.append(f"* [`{ref.name}`]({api_url(ref.id, prefix=cfg.link_prefix)})")
        parts.append("")
    return "\n".join(parts)
