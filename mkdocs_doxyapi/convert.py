#!/usr/bin/env python3
"""
Export a Doxygen XML directory as Markdown API pages without running MkDocs.

Usage:
    python -m mkdocs_doxyapi.convert build/xml docs/
    python -m mkdocs_doxyapi.convert build/xml docs/ --prefix reference
    python -m mkdocs_doxyapi.convert build/xml docs/ --dry-run
"""

import argparse
import json
import logging
import os
import sys

from .errors import DoxygenError
from .parser import INDEX_FILE, load_registry
from .plugin import build_items, item_uri
from .renderer import RenderConfig, render_compound, render_index
from .rendering import MarkdownRenderer
from .transcode import Transcoder


def export(xml_dir, out_dir, *, prefix="api", index_file=INDEX_FILE, language="c", dry_run=False, markdown=None):
    """Write one page per item plus an ``items.json`` manifest; returns the page paths."""
    prefix = prefix.strip("/")
    link_prefix = "/" + prefix
    registry = load_registry(
        xml_dir,
        markdown or MarkdownRenderer(),
        index_file=index_file,
        transcoder=Transcoder(link_prefix=link_prefix),
    )
    cfg = RenderConfig(language=language, link_prefix=link_prefix)
    items = build_items(registry, prefix)

    written = []
    manifest = []
    for item in items:
        path = os.path.join(out_dir, item_uri(item))
        written.append(path)
        manifest.append(
            {
                "identifier": item.identifier,
                "title": item.title,
                "summary": item.summary,
                "mtime": item.mtime,
                "text": item.text,
            }
        )
        if dry_run:
            continue
        if item.is_index:
            content = render_index(item.object, cfg, title=item.title)
        else:
            content = render_compound(item.object, registry, cfg)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

    if not dry_run:
        with open(os.path.join(out_dir, prefix, "items.json"), "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2)
    return written


def main(argv=None):
    p = argparse.ArgumentParser(description="Export Doxygen XML as Markdown API pages")
    p.add_argument("xml_dir", help="Doxygen XML output directory")
    p.add_argument("out_dir", help="Directory the pages are written to")
    p.add_argument("--prefix", default="api", help="Sub-directory and link prefix of the pages (default: api)")
    p.add_argument("--index-file", default=INDEX_FILE, help="Index file name (default: index.xml)")
    p.add_argument("--language", default="c", help="Language of signature code blocks (default: c)")
    p.add_argument(
        "--dry-run", action="store_true", help="Show what would be written without writing files"
    )
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        written = export(
            args.xml_dir,
            args.out_dir,
            prefix=args.prefix,
            index_file=args.index_file,
            language=args.language,
            dry_run=args.dry_run,
        )
    except DoxygenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    tag = "[dry-run] " if args.dry_run else ""
    for path in written:
        print(f"{tag}wrote: {path}")
    print(f"\n{len(written)} pages {'would be ' if args.dry_run else ''}written")


if __name__ == "__main__":
    main()
