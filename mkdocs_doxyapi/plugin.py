"""
MkDocs plugin publishing a Doxygen XML export as API reference pages.

On config the Doxygen XML directory is loaded into a registry and turned
into one item per compound plus one index item; the items become generated
pages under ``output_dir`` and a nav section. Page Markdown is rendered on
demand when MkDocs asks for it.
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ElementTree
from dataclasses import dataclass
from typing import Any, Optional

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin
from mkdocs.structure.files import File

from .errors import DoxygenError
from .kinds import CompoundKind
from .model import Index
from .parser import INDEX_FILE, load_registry
from .renderer import INDEX_TITLES, RenderConfig, page_title, render_compound, render_index, summary
from .rendering import MarkdownRenderer
from .transcode import Transcoder

log = logging.getLogger("mkdocs.plugins.doxyapi")

INDEX_TITLE = "API docs"


@dataclass
class ApiItem:
    identifier: str
    title: str
    text: str
    summary: str
    mtime: float
    object: Any

    @property
    def is_index(self):
        return isinstance(self.object, Index)


def xml_text(raw):
    """Whitespace-collapsed text content of an XML document, for search."""
    if not raw:
        return ""
    root = ElementTree.fromstring(raw.encode("utf-8"))
    return " ".join("".join(root.itertext()).split())


def build_items(registry, prefix="api"):
    items = []
    for compound in registry.each_object():
        if compound.kind is CompoundKind.DIR:
            continue
        items.append(
            ApiItem(
                identifier=f"{prefix}/{compound.id}",
                title=compound.name,
                text=xml_text(compound.raw_content),
                summary=summary(compound),
                mtime=compound.mtime,
                object=compound,
            )
        )
    items.append(
        ApiItem(
            identifier=prefix,
            title=INDEX_TITLE,
            text=xml_text(registry.index.raw_content),
            summary=f'{INDEX_TITLE} <small class="text-muted">index</small>',
            mtime=registry.index.mtime,
            object=registry.index,
        )
    )
    return items


def item_uri(item):
    if item.is_index:
        return f"{item.identifier}/index.md"
    return f"{item.identifier}.md"


class DoxyApiConfig(MkDocsConfig):
    xml_dir = config_options.Type(str, default="")
    index_file = config_options.Type(str, default=INDEX_FILE)
    output_dir = config_options.Type(str, default="api")
    nav_title = config_options.Type(str, default=INDEX_TITLE)
    heading_level = config_options.Type(int, default=1)
    language = config_options.Type(str, default="c")
    diagram_keyword = config_options.Type(str, default="dot")
    dot_command = config_options.Type(str, default="dot")
    markdown_extensions = config_options.Type(list, default=[])
    show_private = config_options.Type(bool, default=False)


class DoxyApiPlugin(BasePlugin[DoxyApiConfig]):

    def __init__(self):
        super().__init__()
        self._registry = None
        self._items = []
        self._pages = {}
        self._tmpfiles = []

    def _render_config(self):
        return RenderConfig(
            heading_level=self.config["heading_level"],
            language=self.config["language"],
            link_prefix=self._link_prefix(),
            show_private=self.config["show_private"],
        )

    def _output_dir(self):
        return self.config["output_dir"].strip("/")

    def _link_prefix(self):
        return "/" + self._output_dir()

    def _load(self, config_dir):
        xml_dir = self.config["xml_dir"]
        if not xml_dir:
            raise PluginError("doxyapi: 'xml_dir' is not configured")
        if not os.path.isabs(xml_dir):
            xml_dir = os.path.normpath(os.path.join(config_dir, xml_dir))

        markdown = MarkdownRenderer(
            extensions=self.config["markdown_extensions"],
            diagram_keyword=self.config["diagram_keyword"],
            dot_command=self.config["dot_command"],
        )
        transcoder = Transcoder(
            link_prefix=self._link_prefix(),
            diagram_keyword=self.config["diagram_keyword"],
        )
        try:
            return load_registry(
                xml_dir,
                markdown,
                index_file=self.config["index_file"],
                transcoder=transcoder,
            )
        except DoxygenError as exc:
            raise PluginError(f"doxyapi: {exc}") from exc

    def _build_nav_tree(self):
        out_dir = self._output_dir()
        by_id = {item.object.id: item for item in self._items if not item.is_index}

        # entries follow the index file's document order
        nav = [{"Overview": f"{out_dir}/index.md"}]
        for kind, heading in INDEX_TITLES.items():
            refs = self._registry.index.each_object(kind)
            entries = [by_id[ref.id] for ref in refs if ref.id in by_id]
            if entries:
                nav.append({heading: [{page_title(i.object): item_uri(i)} for i in entries]})
        return nav

    def _inject_nav(self, config):
        top_title = self.config["nav_title"]
        section = {top_title: self._build_nav_tree()}

        nav = config.get("nav")
        if nav is None:
            # MkDocs builds the default nav from all files, generated ones included
            return
        for i, entry in enumerate(nav):
            if isinstance(entry, dict) and top_title in entry:
                nav[i] = section
                return
        nav.append(section)

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        config_dir = os.path.dirname(config.get("config_file_path", "") or "") or os.getcwd()

        self._pages.clear()
        self._tmpfiles.clear()

        # API links are site-absolute URLs that MkDocs cannot validate
        # against .md source files, so we silence those
        try:
            config["validation"]["links"]["unrecognized_links"] = 0
            config["validation"]["links"]["absolute_links"] = 0
        except (KeyError, TypeError):
            pass

        self._registry = self._load(config_dir)
        self._items = build_items(self._registry, self._output_dir())
        for item in self._items:
            self._pages[item_uri(item)] = item

        self._inject_nav(config)
        log.info("doxyapi: %d API pages under %s/", len(self._pages), self._output_dir())
        return config

    def on_files(self, files, *, config, **kwargs):
        for uri in sorted(self._pages):
            try:
                f = File.generated(config, uri, content="")
            except (AttributeError, TypeError):
                f = File(
                    uri,
                    config["docs_dir"],
                    config["site_dir"],
                    config.get("use_directory_urls", True),
                )
                dest = os.path.join(config["docs_dir"], uri)
                os.makedirs(os.path.dirname(dest), exist_ok=True)
                open(dest, "w").close()
                self._tmpfiles.append(dest)
            f.edit_uri = None
            files.append(f)
        return files

    def on_page_markdown(self, markdown, *, page, config, files, **kwargs):
        src_uri = getattr(page.file, "src_uri", None) or page.file.src_path
        item = self._pages.get(src_uri)
        if item is None:
            return markdown

        page.meta["title"] = item.title
        page.meta["summary"] = item.summary
        page.meta["mtime"] = item.mtime
        return self.render_item(item)

    def on_post_build(self, *, config, **kwargs):
        docs_dir = config["docs_dir"]
        for p in self._tmpfiles:
            try:
                os.remove(p)
            except OSError:
                pass
            d = os.path.dirname(p)
            while d != docs_dir:
                try:
                    os.rmdir(d)
                except OSError:
                    break
                d = os.path.dirname(d)

    # ── pages ──

    def render_item(self, item: ApiItem) -> str:
        cfg = self._render_config()
        if item.is_index:
            return render_index(item.object, cfg, title=item.title)
        return render_compound(item.object, self._registry, cfg)

    def item(self, identifier) -> Optional[ApiItem]:
        for item in self._items:
            if item.identifier == identifier:
                return item
        return None
