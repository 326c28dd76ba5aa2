"""Turn documentation markdown into sanitized HTML fragments or plain text.

Every render resolves ``{@link}`` references, parses the result with a fresh
``markdown.Markdown`` instance, and sanitizes the emitted HTML under the
context's URL rewriter.

Examples
--------
>>> from docnode_html.context import RenderContext
>>> from docnode_html.models import DocGraph
>>> from docnode_html.resolve import RootPosition
>>> ctx = RenderContext(DocGraph(), RootPosition())
>>> render_markdown(ctx, "Hello *world*")
'<div class="markdown"><p>Hello <em>world</em></p></div>'
>>> strip(ctx, "**bold** and a\\nline")
'bold and a line'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from markdown import Markdown

from ..links import parse_links
from ..sanitize import sanitize_html, url_rewrite_scope
from .gfm import GfmExtension
from .plain_text import PlainTextExtension
from .rewriter import TreeRewriteExtension
from .summary import TitleExtractExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from ..context import RenderContext
    from ..models import DocComment

logger = logging.getLogger(__name__)

MARKDOWN_CLASS = "markdown"
SUMMARY_CLASS = "markdown_summary"
BASE_EXTENSIONS = ("tables", "def_list", "fenced_code", "sane_lists")
EXTENSION_CONFIGS = {"tables": {"use_align_attribute": True}}


@dc.dataclass(frozen=True, slots=True)
class MarkdownToHtmlOptions:
    """Switches for :func:`markdown_to_html`.

    Attributes
    ----------
    title_only : bool
        Render only the first inline block of the document.
    no_toc : bool
        Leave the heading adapter out of a full render.
    """

    title_only: bool = False
    no_toc: bool = False


def _build_markdown(extensions: list[Extension]) -> Markdown:
    return Markdown(
        extensions=[*BASE_EXTENSIONS, GfmExtension(), *extensions],
        extension_configs=EXTENSION_CONFIGS,
        output_format="html",
    )


def _render_extensions(ctx: RenderContext, options: MarkdownToHtmlOptions) -> list[Extension]:
    if options.title_only:
        return [TitleExtractExtension()]
    extensions: list[Extension] = [TreeRewriteExtension()]
    if ctx.highlighter is not None:
        extensions.append(ctx.highlighter.extension())
    if ctx.heading_adapter is not None and not options.no_toc:
        extensions.append(ctx.heading_adapter)
    return extensions


def markdown_to_html(
    ctx: RenderContext,
    md: str,
    options: MarkdownToHtmlOptions | None = None,
) -> str | None:
    """Render documentation markdown into a sanitized HTML fragment.

    Parameters
    ----------
    ctx : RenderContext
        Graph, position and adapters for this render.
    md : str
        Raw documentation markdown, possibly containing ``{@link}`` references.
    options : MarkdownToHtmlOptions, optional
        Title-only and table-of-contents switches.

    Returns
    -------
    str or None
        ``<div class="markdown">…</div>`` for a full render or
        ``<div class="markdown_summary">…</div>`` for a title-only render;
        ``None`` when a title-only render finds no inline block.
    """
    options = options or MarkdownToHtmlOptions()
    converter = _build_markdown(_render_extensions(ctx, options))
    html = converter.convert(parse_links(md, ctx))

    if options.title_only and not html:
        logger.debug("no title block found in documentation")
        return None

    with url_rewrite_scope(ctx.current_module, ctx.url_rewriter):
        cleaned = sanitize_html(html)
    class_name = SUMMARY_CLASS if options.title_only else MARKDOWN_CLASS
    return f'<div class="{class_name}">{cleaned}</div>'


def render_markdown(ctx: RenderContext, md: str, *, no_toc: bool = False) -> str:
    """Render ``md`` in full, returning an empty string instead of ``None``."""
    return markdown_to_html(ctx, md, MarkdownToHtmlOptions(no_toc=no_toc)) or ""


def strip(ctx: RenderContext, md: str) -> str:
    """Return the plain text of ``md`` with links resolved and markup removed.

    Raw HTML produced by alerts, videos and code blocks is dropped; line
    breaks become single spaces and the result is trimmed.
    """
    converter = Markdown(
        extensions=[
            *BASE_EXTENSIONS,
            GfmExtension(),
            TreeRewriteExtension(),
            PlainTextExtension(),
        ],
        extension_configs=EXTENSION_CONFIGS,
    )
    converter.convert(parse_links(md, ctx))
    return converter.plain_text  # type: ignore[attr-defined]


def split_markdown_title(md: str) -> tuple[str | None, str | None]:
    """Split ``md`` into a title and a body.

    The split happens at the first blank line or the first code fence,
    whichever comes first. When either half is empty the whole text is
    returned as the body.

    Examples
    --------
    >>> split_markdown_title("Title\\n\\nBody")
    ('Title', '\\n\\nBody')
    >>> split_markdown_title("```ts\\nfoo()\\n```")
    (None, '```ts\\nfoo()\\n```')
    """
    candidates = [index for index in (md.find("\n\n"), md.find("```")) if index != -1]
    index = min(candidates, default=len(md))
    title, body = md[:index], md[index:]
    if not title:
        return None, body
    if not body:
        return None, title
    return title, body


def doc_body_to_html(
    ctx: RenderContext, doc: DocComment, *, summary: bool
) -> str | None:
    """Render the markdown body of ``doc``, or return ``None`` when it has none."""
    if doc.doc is None:
        return None
    return markdown_to_html(ctx, doc.doc, MarkdownToHtmlOptions(title_only=summary))


__all__ = [
    "MARKDOWN_CLASS",
    "SUMMARY_CLASS",
    "MarkdownToHtmlOptions",
    "doc_body_to_html",
    "markdown_to_html",
    "render_markdown",
    "split_markdown_title",
    "strip",
]
