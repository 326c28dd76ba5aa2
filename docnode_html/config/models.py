"""Typed dataclasses produced by the render configuration loader."""

from __future__ import annotations

import dataclasses as dc
import posixpath
from pathlib import Path

from ..models import DocGraph, ModulePath
from ..url_rewriter import SourceUrlRewriter


class RenderConfigError(ValueError):
    """Raised when the render configuration is invalid or incomplete."""


def normalize_module_path(path: str) -> str:
    """Return ``path`` relative to the output root.

    Leading ``/`` and ``./`` prefixes are dropped so that a module page is
    written exactly as many directories deep as its relative links assume.

    Examples
    --------
    >>> normalize_module_path("/util/fs.ts")
    'util/fs.ts'
    >>> normalize_module_path("./mod.ts")
    'mod.ts'
    """
    return posixpath.normpath(path).lstrip("/")


@dc.dataclass(slots=True)
class RenderConfig:
    """Documentation graph plus the options shared by every module render."""

    graph: DocGraph
    pygments_style: str = "monokai"
    no_toc: bool = False
    output_dir: Path = Path("public")
    source_url: str | None = None
    default_module: str | None = None

    def get_module(self, name: str | None) -> ModulePath:
        """Return the requested module or fall back to the configured default."""
        if name is None:
            return self._get_default_module()
        module = self.graph.find_module(name) or self.graph.find_module(
            normalize_module_path(name)
        )
        if module is None:
            available = ", ".join(module.path for module in self.graph.modules)
            msg = f"Unknown module '{name}'. Known modules: {available}"
            raise KeyError(msg)
        return module

    def url_rewriter(self) -> SourceUrlRewriter | None:
        """Return the rewriter for relative URLs, if a source URL is configured."""
        if not self.source_url:
            return None
        return SourceUrlRewriter(self.source_url)

    def _get_default_module(self) -> ModulePath:
        """Return the default module, the main module or the first module."""
        if self.default_module:
            return self.get_module(self.default_module)
        modules = self.graph.modules
        if not modules:  # pragma: no cover - loader rejects empty graphs
            msg = "No modules configured."
            raise RenderConfigError(msg)
        return next((module for module in modules if module.is_main), modules[0])


__all__ = ["RenderConfig", "RenderConfigError", "normalize_module_path"]
