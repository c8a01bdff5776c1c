"""Utilities for indexing, rendering, and generating juledoc Markdown pages."""

from .escape import escape_markdown
from .index import IndexBuilder
from .page_generator import DocumentationGenerator, SectionRenderer, render_document
from .renderer import ContextRenderer

__all__ = [
    "ContextRenderer",
    "DocumentationGenerator",
    "IndexBuilder",
    "SectionRenderer",
    "escape_markdown",
    "render_document",
]
