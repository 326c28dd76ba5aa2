"""Markdown-to-HTML rendering pipeline for documentation comments.

The subpackage wires python-markdown together with the in-repo extensions:

* :mod:`~docnode_html.render.gfm` adds GitHub-flavoured syntax;
* :mod:`~docnode_html.render.rewriter` turns alert block quotes and video
  links into rich HTML;
* :mod:`~docnode_html.render.summary` reduces a document to its title block;
* :mod:`~docnode_html.render.plain_text` extracts readable text;
* :mod:`~docnode_html.render.adapters` provides Pygments highlighting and the
  heading anchors adapter;
* :mod:`~docnode_html.render.pipeline` orchestrates a render end to end.
"""

from .adapters import CodeHighlighter, default_heading_adapter
from .pipeline import (
    MarkdownToHtmlOptions,
    doc_body_to_html,
    markdown_to_html,
    render_markdown,
    split_markdown_title,
    strip,
)

__all__ = [
    "CodeHighlighter",
    "MarkdownToHtmlOptions",
    "default_heading_adapter",
    "doc_body_to_html",
    "markdown_to_html",
    "render_markdown",
    "split_markdown_title",
    "strip",
]
