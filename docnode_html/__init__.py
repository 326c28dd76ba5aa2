"""Render documentation-comment markdown into sanitized HTML fragments.

The package resolves ``{@link}`` cross references against a graph of
documented modules and symbols, renders the markdown with python-markdown,
rewrites alert callouts and video links, and sanitizes the result against a
fixed allow-list. A ``docnode-html`` console script renders module pages from
a YAML description of the graph.

Exports
-------
- ``RenderContext``: graph, position and adapters shared by one render.
- ``markdown_to_html`` / ``render_markdown``: full or title-only renders.
- ``strip``: plain-text rendering.
- ``app`` / ``main``: the Cyclopts application and its entry point.

Examples
--------
>>> from docnode_html import RenderContext, render_markdown
>>> from docnode_html.models import DocGraph
>>> from docnode_html.resolve import RootPosition
>>> render_markdown(RenderContext(DocGraph(), RootPosition()), "~~old~~")
'<div class="markdown"><p><del>old</del></p></div>'
>>> from docnode_html import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .context import RenderContext
from .links import parse_links
from .render import (
    MarkdownToHtmlOptions,
    markdown_to_html,
    render_markdown,
    split_markdown_title,
    strip,
)
from .sanitize import sanitize_html, url_rewrite_scope

__all__ = [
    "MarkdownToHtmlOptions",
    "RenderContext",
    "app",
    "main",
    "markdown_to_html",
    "parse_links",
    "render_markdown",
    "sanitize_html",
    "split_markdown_title",
    "strip",
    "url_rewrite_scope",
]
