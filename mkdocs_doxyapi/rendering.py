"""
Markdown -> HTML bridge used for every description in the object model.

Fenced code blocks are taken out before Python-Markdown sees them: blocks
without a language become escaped ``<pre><code>``, blocks tagged with the
diagram keyword are drawn by Graphviz and inlined as a base64 PNG, anything
else goes through Pygments.
"""

from __future__ import annotations

import base64
import html
import logging
import re
import subprocess

import markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name

from .errors import RenderError

log = logging.getLogger("mkdocs.plugins.doxyapi")

DIAGRAM_KEYWORD = "dot"

# Fences may sit inside list items and block quotes: the opening line can
# carry a list marker, the following lines a continuation indent or "> ".
_FENCE_OPEN_RE = re.compile(
    r"^(?P<prefix>[ >]*(?:(?:[*+-]|\d+\.)[ ]+)?)(?P<fence>`{3,}|~{3,})[ ]*(?P<lang>[\w#.+-]*)[ ]*$"
)
_FENCE_CLOSE_RE = re.compile(r"^(?P<prefix>[ >]*)(?P<fence>`{3,}|~{3,})[ ]*$")


def _strip_prefix(line, prefix):
    if line.startswith(prefix):
        return line[len(prefix) :]
    if prefix.startswith(line.rstrip()):
        # blank line inside the block, possibly a bare ">"
        return ""
    return line


def plain_block(code):
    return f"<pre><code>{html.escape(code)}</code></pre>"


def highlight_code(code, language):
    lexer = get_lexer_by_name(language)
    formatter = HtmlFormatter(cssclass=f"highlight language-{language}")
    return highlight(code, lexer, formatter)


class GraphvizRenderer:
    """Runs ``dot -Tpng`` on a graph source and returns the PNG bytes."""

    def __init__(self, command="dot"):
        self.command = command

    def __call__(self, source):
        try:
            proc = subprocess.run(
                [self.command, "-Tpng"],
                input=source.encode("utf-8"),
                capture_output=True,
                check=True,
            )
        except FileNotFoundError as exc:
            raise RenderError(f"diagram renderer not found: {self.command}") from exc
        except subprocess.CalledProcessError as exc:
            stderr = exc.stderr.decode("utf-8", errors="replace").strip()
            raise RenderError(f"{self.command} failed: {stderr or exc}") from exc
        return proc.stdout


def diagram_image(png):
    data = base64.b64encode(png).decode("ascii")
    return f'<img src="data:image/png;base64,{data}" alt="diagram">'


class FencedBlockPreprocessor(Preprocessor):
    def __init__(self, md, *, highlighter, diagram_renderer, diagram_keyword):
        super().__init__(md)
        self.highlighter = highlighter
        self.diagram_renderer = diagram_renderer
        self.diagram_keyword = diagram_keyword

    def render_block(self, code, language):
        if not language:
            return plain_block(code)
        if language == self.diagram_keyword:
            return diagram_image(self.diagram_renderer(code))
        try:
            return self.highlighter(code, language)
        except Exception as exc:
            log.debug("doxyapi: highlighting %s block failed (%s), using plain block", language, exc)
            return plain_block(code)

    def _closing(self, lines, start, fence):
        for i in range(start, len(lines)):
            m = _FENCE_CLOSE_RE.match(lines[i])
            if m and m.group("fence") == fence:
                return i, m.group("prefix")
        return None, None

    def run(self, lines):
        out = []
        i = 0
        while i < len(lines):
            opening = _FENCE_OPEN_RE.match(lines[i])
            end, indent = self._closing(lines, i + 1, opening.group("fence")) if opening else (None, None)
            if end is None:
                out.append(lines[i])
                i += 1
                continue
            code = "\n".join(_strip_prefix(line, indent) for line in lines[i + 1 : end])
            block = self.render_block(code.rstrip("\n"), opening.group("lang"))
            out.append(opening.group("prefix") + self.md.htmlStash.store(block))
            i = end + 1
        return out


class FencedBlockExtension(Extension):
    def __init__(self, *, highlighter, diagram_renderer, diagram_keyword=DIAGRAM_KEYWORD):
        super().__init__()
        self.highlighter = highlighter
        self.diagram_renderer = diagram_renderer
        self.diagram_keyword = diagram_keyword

    def extendMarkdown(self, md):
        processor = FencedBlockPreprocessor(
            md,
            highlighter=self.highlighter,
            diagram_renderer=self.diagram_renderer,
            diagram_keyword=self.diagram_keyword,
        )
        # same slot as the stock fenced_code extension
        md.preprocessors.register(processor, "fenced_code_block", 25)


class MarkdownRenderer:
    """Callable turning Markdown text into HTML; one instance per build."""

    def __init__(
        self,
        *,
        extensions=(),
        highlighter=None,
        diagram_renderer=None,
        diagram_keyword=DIAGRAM_KEYWORD,
        dot_command="dot",
    ):
        fenced = FencedBlockExtension(
            highlighter=highlighter or highlight_code,
            diagram_renderer=diagram_renderer or GraphvizRenderer(dot_command),
            diagram_keyword=diagram_keyword,
        )
        self._md = markdown.Markdown(extensions=[fenced, *extensions])

    def __call__(self, text):
        self._md.reset()
        return self._md.convert(text)
