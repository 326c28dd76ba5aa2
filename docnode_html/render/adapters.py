"""Pluggable heading and code-highlight adapters for the markdown pipeline."""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.extensions.toc import TocExtension
from markdown.preprocessors import Preprocessor
from markupsafe import Markup
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .assets import load_icon, render_template

if typ.TYPE_CHECKING:
    from markdown import Markdown

FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<indent>[ ]{0,3})(?P<fence>`{3,}|~{3,})[ \t]*"
    r"(?P<lang>[A-Za-z0-9_+#.-]*)[^\n]*\n"
    r"(?P<code>.*?)"
    r"^[ ]{0,3}(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


def _dedent(code: str, width: int) -> str:
    """Remove up to ``width`` leading spaces from every line of ``code``."""
    if not width:
        return code
    prefix = re.compile(rf"^[ ]{{1,{width}}}", re.MULTILINE)
    return prefix.sub("", code)


class CodeHighlighter:
    """Highlight fenced code blocks with Pygments and attach a copy button."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a highlighter for the given Pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for the stylesheet. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, nowrap=True)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".highlight")

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into a highlighted ``<pre>`` block with a copy button.

        Parameters
        ----------
        code : str
            Source snippet to highlight.
        language : str, optional
            Pygments lexer name; defaults to ``"text"`` when not provided or
            when the lexer lookup fails.

        Returns
        -------
        str
            ``<pre class="highlight">`` markup whose button carries the raw
            snippet in ``data-copy``.
        """
        lang = language or "text"
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        source = code.rstrip("\n")
        return render_template(
            "code_block.jinja",
            code=Markup(highlight(source, lexer, self._formatter)),  # noqa: S704
            source=source,
            copy_icon=load_icon("copy"),
        )

    def extension(self) -> Extension:
        """Return a python-markdown extension routing fenced blocks through Pygments."""
        return HighlightExtension(self)


class FencedHighlightPreprocessor(Preprocessor):
    """Replace fenced code blocks with highlighted HTML held in the stash."""

    def __init__(self, md: Markdown, highlighter: CodeHighlighter) -> None:
        super().__init__(md)
        self.highlighter = highlighter

    def run(self, lines: list[str]) -> list[str]:
        """Swap every fenced block in ``lines`` for a raw-HTML placeholder."""
        text = "\n".join(lines)
        while match := FENCED_BLOCK_PATTERN.search(text):
            code = _dedent(match.group("code"), len(match.group("indent")))
            html = self.highlighter.code_block(code, match.group("lang") or None)
            placeholder = self.md.htmlStash.store(html)
            indent = match.group("indent")
            text = f"{text[: match.start()]}\n{indent}{placeholder}\n{text[match.end() :]}"
        return text.split("\n")


class HighlightExtension(Extension):
    """Register :class:`FencedHighlightPreprocessor` ahead of ``fenced_code``."""

    def __init__(self, highlighter: CodeHighlighter) -> None:
        self.highlighter = highlighter
        super().__init__()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run before the built-in fenced code preprocessor claims the blocks."""
        md.preprocessors.register(
            FencedHighlightPreprocessor(md, self.highlighter), "docnode_highlight", 28
        )


def default_heading_adapter() -> Extension:
    """Return the heading adapter used for full renders: python-markdown's TOC."""
    return TocExtension(permalink=False)


__all__ = [
    "FENCED_BLOCK_PATTERN",
    "CodeHighlighter",
    "FencedHighlightPreprocessor",
    "HighlightExtension",
    "default_heading_adapter",
]
