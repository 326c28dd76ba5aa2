"""Render positions and the relative-href resolution between them.

A render position identifies where in the generated output a fragment is being
rendered: the site root, the aggregate "all symbols" page, a module page, or a
symbol page within a module. Relative links between positions follow the
output layout ``<module path>/index.html`` and ``<module path>/~/<symbol>.html``;
the main module lives at the root.

Examples
--------
>>> from docnode_html.models import ModulePath
>>> mod = ModulePath("/a.ts")
>>> href_path_resolve(SymbolPosition(mod, "foo"), SymbolPosition(mod, "bar"))
'../../.././/a.ts/~/bar.html'
>>> href_path_resolve(RootPosition(), ModulePosition(mod))
'.//a.ts/index.html'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import ModulePath


@dc.dataclass(frozen=True, slots=True)
class RootPosition:
    """The package index page."""

    @property
    def module(self) -> ModulePath | None:
        """Root pages are not scoped to a module."""
        return None


@dc.dataclass(frozen=True, slots=True)
class AllSymbolsPosition:
    """The aggregate page listing every symbol of the package."""

    @property
    def module(self) -> ModulePath | None:
        """The aggregate page is not scoped to a module."""
        return None


@dc.dataclass(frozen=True, slots=True)
class ModulePosition:
    """A module's own index page."""

    module: ModulePath


@dc.dataclass(frozen=True, slots=True)
class SymbolPosition:
    """A symbol's page within a module."""

    module: ModulePath
    symbol: str


RenderPosition = RootPosition | AllSymbolsPosition | ModulePosition | SymbolPosition


def _depth(position: RenderPosition) -> int:
    """Return how many directories ``position`` sits below the output root."""
    match position:
        case SymbolPosition(module=module):
            return 1 if module.is_main else len(module.path.split("/")) + 1
        case ModulePosition(module=module):
            return 0 if module.is_main else len(module.path.split("/"))
        case _:
            return 0


def href_path_resolve(current: RenderPosition, target: RenderPosition) -> str:
    """Return a URL for ``target`` relative to the page rendered at ``current``.

    Parameters
    ----------
    current : RenderPosition
        Position of the page containing the link.
    target : RenderPosition
        Position the link points at.

    Returns
    -------
    str
        Relative URL such as ``"../.././b.ts/~/baz.html"``.
    """
    backs = "../" * _depth(current)
    match target:
        case SymbolPosition(module=module, symbol=symbol) if module.is_main:
            return f"{backs}./~/{symbol}.html"
        case SymbolPosition(module=module, symbol=symbol):
            return f"{backs}./{module.path}/~/{symbol}.html"
        case ModulePosition(module=module) if not module.is_main:
            return f"{backs}./{module.path}/index.html"
        case AllSymbolsPosition():
            return f"{backs}./all_symbols.html"
        case _:
            return f"{backs}index.html"


class HrefResolver(typ.Protocol):
    """Resolve hrefs that the documentation graph alone cannot answer."""

    def resolve_path(self, current: RenderPosition, target: RenderPosition) -> str:
        """Return the URL of ``target`` relative to ``current``."""
        ...

    def resolve_global_symbol(self, symbol: cabc.Sequence[str]) -> str | None:
        """Return a URL for a global (built-in) symbol given its dotted parts."""
        ...

    def resolve_external_module(
        self, module: str, symbol: str | None
    ) -> tuple[str, str] | None:
        """Return ``(url, title)`` for a module reference unknown to the graph."""
        ...


class DefaultHrefResolver:
    """Resolve paths with :func:`href_path_resolve` and nothing else."""

    def resolve_path(self, current: RenderPosition, target: RenderPosition) -> str:
        """Return the URL of ``target`` relative to ``current``."""
        return href_path_resolve(current, target)

    def resolve_global_symbol(self, symbol: cabc.Sequence[str]) -> str | None:  # noqa: ARG002
        """Global symbols are unknown to the default resolver."""
        return None

    def resolve_external_module(
        self,
        module: str,  # noqa: ARG002
        symbol: str | None,  # noqa: ARG002
    ) -> tuple[str, str] | None:
        """External modules are unknown to the default resolver."""
        return None


__all__ = [
    "AllSymbolsPosition",
    "DefaultHrefResolver",
    "HrefResolver",
    "ModulePosition",
    "RenderPosition",
    "RootPosition",
    "SymbolPosition",
    "href_path_resolve",
]
