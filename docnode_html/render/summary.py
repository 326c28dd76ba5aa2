"""Reduce a parsed documentation comment to its first inline block.

Title extraction keeps only inline-ish markup (paragraphs, headings and text
formatting). Every other element is pruned together with its children, while
the text that followed it is kept. Paragraphs that merely hold a stashed
block-level HTML placeholder, such as a fenced code block, are pruned too.
The first top-level element that survives becomes the summary.
"""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE

from ._tree import detach

if typ.TYPE_CHECKING:
    from markdown import Markdown

TITLE_TAGS = frozenset(
    {
        "p",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "code",
        "em",
        "strong",
        "del",
        "s",
        "sup",
        "a",
        "u",
        "ins",
        "span",
        "math",
        "mark",
    }
)
LEADING_TAG_PATTERN = re.compile(r"^</?([^ >/]+)")


class TitleExtractTreeprocessor(Treeprocessor):
    """Prune a document down to its first inline-only top-level element."""

    def run(self, root: etree.Element) -> etree.Element:
        """Return a new root holding at most one pruned top-level element."""
        self._prune(root)
        summary = etree.Element(root.tag)
        first = next(iter(root), None)
        if first is not None:
            first.tail = None
            summary.append(first)
        return summary

    def _prune(self, element: etree.Element) -> None:
        for child in list(element):
            if child.tag in TITLE_TAGS and not self._is_block_placeholder(child):
                self._prune(child)
            else:
                detach(element, child)

    def _is_block_placeholder(self, element: etree.Element) -> bool:
        """Return whether ``element`` is a paragraph wrapping stashed block HTML."""
        if element.tag != "p" or len(element):
            return False
        match = HTML_PLACEHOLDER_RE.fullmatch((element.text or "").strip())
        if match is None:
            return False
        raw = str(self.md.htmlStash.rawHtmlBlocks[int(match.group(1))])
        tag = LEADING_TAG_PATTERN.match(raw.lstrip())
        return tag is not None and self.md.is_block_level(tag.group(1))


class TitleExtractExtension(Extension):
    """Register the title-only pruning pass on a Markdown instance."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run the pruning pass once inline markup has been parsed."""
        md.treeprocessors.register(
            TitleExtractTreeprocessor(md), "docnode_title_extract", -5
        )


__all__ = ["TITLE_TAGS", "TitleExtractExtension", "TitleExtractTreeprocessor"]
