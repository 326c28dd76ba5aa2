"""Allow-list sanitization of rendered documentation HTML.

The policy is built once at import time and never mutated. Sanitization runs
through a bleach :class:`~bleach.sanitizer.Cleaner`; cleaners are not safe to
share between threads, so each thread lazily builds its own from the shared
policy.

Relative URLs (``href``, ``src``, ``cite`` and ``poster`` values without a
scheme) are handed to the URL rewriter of the active
:func:`url_rewrite_scope`. Outside a scope, or when the scope carries no
rewriter, URLs pass through unchanged.

Examples
--------
>>> sanitize_html('<p onclick="x()">hi<script>bad()</script></p>')
'<p>hibad()</p>'
>>> with url_rewrite_scope(None, lambda module, url: f"/docs/{url}"):
...     sanitize_html('<img src="logo.png">')
'<img src="/docs/logo.png">'
"""

from __future__ import annotations

import collections.abc as cabc
import contextlib
import contextvars
import dataclasses as dc
import functools
import logging
import threading
import types
import typing as typ
from urllib.parse import urlsplit

from bleach.html5lib_shim import Filter
from bleach.sanitizer import Cleaner
from pygments.token import STANDARD_TYPES

if typ.TYPE_CHECKING:
    from .context import UrlRewriter
    from .models import ModulePath

logger = logging.getLogger(__name__)

URL_ATTRIBUTES = frozenset({"href", "src", "cite", "poster"})


@dc.dataclass(frozen=True, slots=True)
class SanitizerPolicy:
    """Immutable description of the HTML that survives sanitization.

    Attributes
    ----------
    tags : frozenset[str]
        Elements kept in the output; anything else is stripped while its text
        content is preserved.
    generic_attributes : frozenset[str]
        Attributes allowed on every kept element.
    tag_attributes : Mapping[str, frozenset[str]]
        Additional attributes allowed per element.
    allowed_classes : Mapping[str, frozenset[str]]
        Exact ``class`` values allowed per element.
    class_prefixes : Mapping[str, tuple[str, ...]]
        ``class`` prefixes allowed per element, such as ``language-`` on
        ``code``.
    protocols : frozenset[str]
        URL schemes allowed in URL-valued attributes.
    link_rel : str or None
        ``rel`` value forced onto every ``<a href>``.
    """

    tags: frozenset[str]
    generic_attributes: frozenset[str]
    tag_attributes: cabc.Mapping[str, frozenset[str]]
    allowed_classes: cabc.Mapping[str, frozenset[str]]
    class_prefixes: cabc.Mapping[str, tuple[str, ...]]
    protocols: frozenset[str]
    link_rel: str | None = "nofollow"

    def attribute_allowed(self, tag: str, name: str, value: str) -> bool:  # noqa: ARG002
        """Return whether attribute ``name`` may stay on ``tag``."""
        if name == "class":
            return tag in self.allowed_classes or tag in self.class_prefixes
        return name in self.generic_attributes or name in self.tag_attributes.get(
            tag, ()
        )

    def class_allowed(self, tag: str, name: str) -> bool:
        """Return whether the single class ``name`` may stay on ``tag``."""
        if name in self.allowed_classes.get(tag, ()):
            return True
        prefixes = self.class_prefixes.get(tag, ())
        return bool(prefixes) and name.startswith(prefixes)


_TABLE_ALIGN = frozenset({"align", "char", "charoff"})
_SVG_PRESENTATION = frozenset(
    {
        "fill",
        "fill-rule",
        "clip-rule",
        "stroke",
        "stroke-width",
        "stroke-linecap",
        "stroke-linejoin",
    }
)

SANITIZER_POLICY = SanitizerPolicy(
    tags=frozenset(
        {
            "a", "abbr", "acronym", "area", "article", "aside", "b", "bdi",
            "bdo", "blockquote", "br", "caption", "center", "cite", "code",
            "col", "colgroup", "data", "dd", "del", "details", "dfn", "div",
            "dl", "dt", "em", "figcaption", "figure", "footer", "h1", "h2",
            "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "i", "img",
            "ins", "kbd", "li", "map", "mark", "nav", "ol", "p", "pre", "q",
            "rp", "rt", "rtc", "ruby", "s", "samp", "small", "span", "strike",
            "strong", "sub", "summary", "sup", "table", "tbody", "td", "th",
            "thead", "time", "tr", "tt", "u", "ul", "var", "wbr",
            "video", "button", "svg", "path", "rect", "input",
        }
    ),  # fmt: skip
    generic_attributes=frozenset({"id", "align", "title", "lang"}),
    tag_attributes=types.MappingProxyType(
        {
            "a": frozenset({"href", "hreflang"}),
            "bdo": frozenset({"dir"}),
            "blockquote": frozenset({"cite"}),
            "col": _TABLE_ALIGN | {"span"},
            "colgroup": _TABLE_ALIGN | {"span"},
            "del": frozenset({"cite", "datetime"}),
            "hr": frozenset({"size", "width"}),
            "img": frozenset({"alt", "height", "src", "width"}),
            "ins": frozenset({"cite", "datetime"}),
            "ol": frozenset({"start"}),
            "q": frozenset({"cite"}),
            "table": _TABLE_ALIGN | {"summary"},
            "tbody": _TABLE_ALIGN,
            "td": _TABLE_ALIGN | {"colspan", "headers", "rowspan"},
            "tfoot": _TABLE_ALIGN,
            "th": _TABLE_ALIGN | {"colspan", "headers", "rowspan", "scope"},
            "thead": _TABLE_ALIGN,
            "tr": _TABLE_ALIGN,
            "video": frozenset({"src", "controls", "poster"}),
            "button": frozenset({"data-copy"}),
            "svg": _SVG_PRESENTATION
            | {"width", "height", "viewBox", "viewbox", "xmlns"},
            "path": _SVG_PRESENTATION | {"d"},
            "rect": _SVG_PRESENTATION | {"x", "y", "width", "height", "rx", "ry"},
            "input": frozenset({"type", "checked", "disabled"}),
        }
    ),
    allowed_classes=types.MappingProxyType(
        {
            "pre": frozenset({"highlight"}),
            "button": frozenset({"context_button"}),
            "div": frozenset(
                {
                    "alert",
                    "alert-note",
                    "alert-tip",
                    "alert-important",
                    "alert-warning",
                    "alert-caution",
                    "highlight",
                }
            ),
            "span": frozenset(name for name in STANDARD_TYPES.values() if name),
        }
    ),
    class_prefixes=types.MappingProxyType({"code": ("language-",)}),
    protocols=frozenset({"http", "https", "mailto", "tel"}),
)


@dc.dataclass(frozen=True, slots=True)
class UrlRewriteScope:
    """Module and rewriter applied to relative URLs during one sanitization."""

    module: ModulePath | None
    rewriter: UrlRewriter | None


_URL_REWRITE_SCOPE: contextvars.ContextVar[UrlRewriteScope | None] = (
    contextvars.ContextVar("docnode_url_rewrite_scope", default=None)
)


@contextlib.contextmanager
def url_rewrite_scope(
    module: ModulePath | None, rewriter: UrlRewriter | None
) -> cabc.Iterator[UrlRewriteScope]:
    """Activate ``rewriter`` for relative URLs sanitized within the block.

    The previous scope is restored on exit, even when sanitization raises.
    Scopes are local to the current thread or asyncio task.
    """
    scope = UrlRewriteScope(module, rewriter)
    token = _URL_REWRITE_SCOPE.set(scope)
    try:
        yield scope
    finally:
        _URL_REWRITE_SCOPE.reset(token)


def current_url_rewrite_scope() -> UrlRewriteScope | None:
    """Return the active URL rewrite scope, if any."""
    return _URL_REWRITE_SCOPE.get()


def is_relative_url(url: str) -> bool:
    """Return whether ``url`` carries no scheme."""
    return not urlsplit(url).scheme


def evaluate_relative_url(url: str) -> str:
    """Rewrite ``url`` with the active scope's rewriter when it is relative."""
    scope = _URL_REWRITE_SCOPE.get()
    if scope is None or scope.rewriter is None or not is_relative_url(url):
        return url
    rewritten = scope.rewriter(scope.module, url)
    logger.debug("rewrote relative url %r to %r", url, rewritten)
    return rewritten


class PolicyFilter(Filter):
    """Apply the class, ``rel`` and URL rules bleach has no direct knob for."""

    def __init__(self, source: typ.Any, policy: SanitizerPolicy) -> None:  # noqa: ANN401
        super().__init__(source)
        self.policy = policy

    def __iter__(self) -> cabc.Iterator[dict[str, typ.Any]]:
        for token in super().__iter__():
            if token["type"] in ("StartTag", "EmptyTag") and "data" in token:
                self._filter_attributes(token["name"], token["data"])
            yield token

    def _filter_attributes(
        self, tag: str, data: dict[tuple[str | None, str], str]
    ) -> None:
        class_key = (None, "class")
        if class_key in data:
            classes = [
                name
                for name in data[class_key].split()
                if self.policy.class_allowed(tag, name)
            ]
            if classes:
                data[class_key] = " ".join(classes)
            else:
                del data[class_key]

        for name in URL_ATTRIBUTES:
            key = (None, name)
            if key in data:
                data[key] = evaluate_relative_url(data[key])

        if tag == "a" and (None, "href") in data and self.policy.link_rel:
            data[(None, "rel")] = self.policy.link_rel


def build_cleaner(policy: SanitizerPolicy) -> Cleaner:
    """Return a bleach cleaner enforcing ``policy``."""
    return Cleaner(
        tags=policy.tags,
        attributes=policy.attribute_allowed,
        protocols=policy.protocols,
        strip=True,
        strip_comments=True,
        filters=[functools.partial(PolicyFilter, policy=policy)],
    )


_local = threading.local()


def _cleaner() -> Cleaner:
    cleaner = getattr(_local, "cleaner", None)
    if cleaner is None:
        cleaner = build_cleaner(SANITIZER_POLICY)
        _local.cleaner = cleaner
    return cleaner


def sanitize_html(html: str) -> str:
    """Return ``html`` reduced to the elements and attributes the policy allows.

    Sanitizing already sanitized markup returns it unchanged, as long as no
    URL rewriter is active.
    """
    return _cleaner().clean(html)


__all__ = [
    "SANITIZER_POLICY",
    "URL_ATTRIBUTES",
    "PolicyFilter",
    "SanitizerPolicy",
    "UrlRewriteScope",
    "build_cleaner",
    "current_url_rewrite_scope",
    "evaluate_relative_url",
    "is_relative_url",
    "sanitize_html",
    "url_rewrite_scope",
]
