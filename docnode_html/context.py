"""Read-only render context shared by every stage of one render invocation."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from .models import ModulePath
from .resolve import DefaultHrefResolver, SymbolPosition

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from .models import DocGraph, DocSymbol
    from .render.adapters import CodeHighlighter
    from .resolve import HrefResolver, RenderPosition

logger = logging.getLogger(__name__)

UrlRewriter = cabc.Callable[[ModulePath | None, str], str]
SymbolHrefLookup = cabc.Callable[[str], str | None]


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Bundle the documentation graph, current position and resolver capabilities.

    Attributes
    ----------
    graph : DocGraph
        Borrowed view of the documentation graph for this render session.
    position : RenderPosition
        Where in the output the current fragment is rendered.
    href_resolver : HrefResolver
        Computes relative paths and resolves global or external references.
    symbol_href : Callable[[str], str | None], optional
        Replaces the graph-based symbol lookup when supplied.
    url_rewriter : Callable[[ModulePath | None, str], str], optional
        Rewrites relative URLs during sanitization.
    heading_adapter : Extension, optional
        python-markdown extension attached to full renders for heading anchors.
    highlighter : CodeHighlighter, optional
        Pygments adapter attached to full renders for fenced code blocks.
    """

    graph: DocGraph
    position: RenderPosition
    href_resolver: HrefResolver = dc.field(default_factory=DefaultHrefResolver)
    symbol_href: SymbolHrefLookup | None = None
    url_rewriter: UrlRewriter | None = None
    heading_adapter: Extension | None = None
    highlighter: CodeHighlighter | None = None

    @property
    def current_module(self) -> ModulePath | None:
        """Return the module enclosing the current position, if any."""
        return self.position.module

    def with_position(self, position: RenderPosition) -> RenderContext:
        """Return a copy of the context anchored at ``position``."""
        return dc.replace(self, position=position)

    def resolve_path(self, target: RenderPosition) -> str:
        """Return the URL of ``target`` relative to the current position."""
        return self.href_resolver.resolve_path(self.position, target)

    def lookup_symbol_href(self, target: str) -> str | None:
        """Return an href for the symbol named ``target`` if one can be found.

        The current module is searched first, then every module of the graph
        in order, and finally the resolver's global symbols.
        """
        if self.symbol_href is not None:
            return self.symbol_href(target)

        current = self.current_module
        if current is not None:
            href = self._module_symbol_href(current, self.graph.get(current) or (), target)
            if href:
                return href
        for module, symbols in self.graph:
            if module == current:
                continue
            href = self._module_symbol_href(module, symbols, target)
            if href:
                return href

        href = self.href_resolver.resolve_global_symbol(target.split("."))
        if href is None:
            logger.debug("no symbol href for %r", target)
        return href

    def _module_symbol_href(
        self,
        module: ModulePath,
        symbols: cabc.Iterable[DocSymbol],
        target: str,
    ) -> str | None:
        if any(symbol.qualified_name == target for symbol in symbols):
            return self.resolve_path(SymbolPosition(module, target))
        return None


__all__ = ["RenderContext", "SymbolHrefLookup", "UrlRewriter"]
