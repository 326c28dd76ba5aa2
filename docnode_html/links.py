r"""Resolve ``{@link ...}`` cross references in documentation markdown.

Cross references are substituted before the markdown is parsed: each
``{@link TARGET}``, ``{@linkcode TARGET}`` or ``{@linkplain TARGET}`` becomes a
markdown link, inline code, or plain text depending on whether the target can
be resolved to something linkable.

Examples
--------
>>> from docnode_html.context import RenderContext
>>> from docnode_html.models import DocGraph
>>> from docnode_html.resolve import AllSymbolsPosition
>>> ctx = RenderContext(DocGraph(), AllSymbolsPosition())
>>> parse_links("see {@link https://example.com|the site}", ctx)
'see [the site](https://example.com)'
>>> parse_links("see {@linkcode missing}", ctx)
'see `missing`'
"""

from __future__ import annotations

import logging
import re
import typing as typ

from .resolve import ModulePosition, SymbolPosition

if typ.TYPE_CHECKING:
    from .context import RenderContext

logger = logging.getLogger(__name__)

DOC_LINK_PATTERN = re.compile(
    r"\{\s*@link(?P<modifier>code|plain)?\s+(?P<value>[^}]+)\}", re.MULTILINE
)
LINKABLE_PATTERN = re.compile(r"(^\.{0,2}/)|(^[A-Za-z]+:\S)")
MODULE_LINK_PATTERN = re.compile(r"^\[(\S+)\](?:\.(\S+)|\s|)$")


def _split_value(value: str) -> tuple[str, str]:
    """Split a link value into target and title at the first ``|`` or space."""
    for separator in ("|", " "):
        link, found, title = value.partition(separator)
        if found:
            return link.strip(), title.strip()
    return value, ""


def _resolve_module_link(
    match: re.Match[str], link: str, title: str, ctx: RenderContext
) -> tuple[str, str]:
    """Resolve a ``[module]`` or ``[module].symbol`` reference.

    Returns the (possibly unchanged) link and title.
    """
    module_name, symbol = match.group(1), match.group(2)
    module = ctx.graph.find_module(module_name)
    if module is None:
        external = ctx.href_resolver.resolve_external_module(module_name, symbol)
        if external is None:
            logger.debug("unknown module reference %r", link)
            return link, title
        return external

    if symbol is None:
        return ctx.resolve_path(ModulePosition(module)), title or module.display_name

    if ctx.graph.find_symbol(module, symbol) is None:
        logger.debug("module %r has no symbol %r", module.path, symbol)
        return link, title
    href = ctx.resolve_path(SymbolPosition(module, symbol))
    return href, title or f"{module.display_name} {symbol}"


def _replace_link(match: re.Match[str], ctx: RenderContext) -> str:
    """Render one cross reference occurrence as markdown."""
    code = match.group("modifier") == "code"
    link, title = _split_value(match.group("value"))

    module_match = MODULE_LINK_PATTERN.match(link)
    if module_match:
        link, title = _resolve_module_link(module_match, link, title, ctx)

    title = title or link
    href = ctx.lookup_symbol_href(link)
    if href is not None:
        link = href

    if LINKABLE_PATTERN.match(link):
        return f"[`{title}`]({link})" if code else f"[{title}]({link})"
    return f"`{title}`" if code else title


def parse_links(md: str, ctx: RenderContext) -> str:
    """Replace every cross reference in ``md`` with resolved markdown.

    Parameters
    ----------
    md : str
        Raw documentation markdown.
    ctx : RenderContext
        Context providing the documentation graph and resolvers.

    Returns
    -------
    str
        Markdown where each ``{@link}`` occurrence is a markdown link when the
        target is linkable, and plain or inline-code text otherwise.
    """
    return DOC_LINK_PATTERN.sub(lambda match: _replace_link(match, ctx), md)


__all__ = ["DOC_LINK_PATTERN", "LINKABLE_PATTERN", "MODULE_LINK_PATTERN", "parse_links"]
