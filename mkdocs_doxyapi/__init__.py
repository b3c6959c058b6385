"""
mkdocs-doxyapi: Doxygen XML API documentation for MkDocs.

Loads a Doxygen XML export into a typed, cross-referenced object graph,
transcodes doc-comment markup to Markdown/HTML, and publishes one page per
compound plus an index page in the MkDocs build.
"""

__version__ = "1.0.0"
