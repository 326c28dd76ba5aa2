"""Rewrite relative URLs in documentation comments to hosted source files."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

if typ.TYPE_CHECKING:
    from .models import ModulePath

DOC_PAGE_SUFFIX = ".html"


class SourceUrlRewriter:
    """Point relative asset links at the module's source tree.

    A doc comment in ``lib/http.ts`` that embeds ``./diagram.png`` refers to
    ``lib/diagram.png`` in the repository. With a base URL such as
    ``https://github.com/acme/lib/blob/v1.2.0`` the rewriter turns the link
    into ``https://github.com/acme/lib/blob/v1.2.0/lib/diagram.png`` so it
    keeps working once the documentation is published elsewhere.

    Fragment-only links, root-relative paths and links to generated
    documentation pages are returned unchanged.

    Examples
    --------
    >>> from docnode_html.models import ModulePath
    >>> rewrite = SourceUrlRewriter("https://example.com/src")
    >>> rewrite(ModulePath("lib/http.ts"), "./diagram.png")
    'https://example.com/src/lib/diagram.png'
    >>> rewrite(ModulePath("lib/http.ts"), "#usage")
    '#usage'
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def __call__(self, module: ModulePath | None, url: str) -> str:
        """Return ``url`` resolved against the directory of ``module``."""
        parsed = urlsplit(url)
        if (
            parsed.scheme
            or parsed.netloc
            or not parsed.path
            or parsed.path.startswith("/")
            or parsed.path.endswith(DOC_PAGE_SUFFIX)
        ):
            return url

        base_dir = posixpath.dirname(module.path.lstrip("/")) if module else ""
        joined = posixpath.normpath(posixpath.join(base_dir, parsed.path))
        while joined.startswith("../"):
            joined = joined[3:]
        if joined in (".", "", ".."):
            return url

        rewritten = f"{self.base_url}/{joined}"
        if parsed.query:
            rewritten = f"{rewritten}?{parsed.query}"
        if parsed.fragment:
            rewritten = f"{rewritten}#{parsed.fragment}"
        return rewritten


__all__ = ["SourceUrlRewriter"]
