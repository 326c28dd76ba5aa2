"""Collect the readable text of a parsed documentation comment."""

from __future__ import annotations

import html
import re
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

WHITESPACE_PATTERN = re.compile(r"\s+")
ENTITY_PATTERN = re.compile(r"&[#\w]+;")
SKIPPED_TAGS = frozenset({"pre", "script", "style"})


class PlainTextTreeprocessor(Treeprocessor):
    """Store the concatenated text of the document on ``md.plain_text``.

    Text and inline code literals are kept; stashed raw HTML (code blocks,
    alerts, videos) and preformatted blocks are dropped, while character
    entities are decoded. Line breaks and runs of spaces collapse into single
    spaces.
    """

    def run(self, root: Element) -> None:
        """Flatten ``root`` into text without altering the tree."""
        pieces: list[str] = []
        self._collect(root, pieces)
        text = HTML_PLACEHOLDER_RE.sub(self._restore_placeholder, "".join(pieces))
        self.md.plain_text = WHITESPACE_PATTERN.sub(" ", text).strip()  # type: ignore[attr-defined]

    def _restore_placeholder(self, match: re.Match[str]) -> str:
        raw = self.md.htmlStash.rawHtmlBlocks[int(match.group(1))]
        if isinstance(raw, str) and ENTITY_PATTERN.fullmatch(raw):
            return html.unescape(raw)
        return ""

    def _collect(self, element: Element, pieces: list[str]) -> None:
        if element.tag == "br":
            pieces.append("\n")
        elif element.text:
            pieces.append(element.text)
        for child in element:
            if child.tag not in SKIPPED_TAGS:
                self._collect(child, pieces)
            if child.tail:
                pieces.append(child.tail)


class PlainTextExtension(Extension):
    """Expose the plain text of the last conversion as ``md.plain_text``."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the text collector as the very last tree pass."""
        md.registerExtension(self)
        self.md = md
        md.plain_text = ""  # type: ignore[attr-defined]
        md.treeprocessors.register(
            PlainTextTreeprocessor(md), "docnode_plain_text", -10
        )

    def reset(self) -> None:
        """Forget the text collected by a previous conversion."""
        self.md.plain_text = ""  # type: ignore[attr-defined]


__all__ = ["PlainTextExtension", "PlainTextTreeprocessor"]
