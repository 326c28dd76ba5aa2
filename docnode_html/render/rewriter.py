"""Rewrite parsed documentation trees before they are serialized.

Two constructs are recognised:

* GitHub-style alert callouts, i.e. block quotes whose first line is one of
  ``[!NOTE]``, ``[!TIP]``, ``[!IMPORTANT]``, ``[!WARNING]`` or ``[!CAUTION]``
  optionally followed by a custom title;
* links to ``.mov`` and ``.mp4`` files, which become inline ``<video>`` players.

Both are replaced by raw HTML kept in the Markdown instance's stash, so the
regular raw-HTML postprocessor splices them into the final output.

Examples
--------
>>> from markdown import Markdown
>>> md = Markdown(extensions=[TreeRewriteExtension()])
>>> md.convert("watch [demo](clip.mp4) now")
'<p>watch <video src="clip.mp4" controls></video> now</p>'
"""

from __future__ import annotations

import enum
import functools
import logging
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markupsafe import Markup

from ._tree import detach, replace
from .assets import load_icon, render_template

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown import Markdown

logger = logging.getLogger(__name__)

VIDEO_SUFFIXES = (".mov", ".mp4")


class AlertKind(enum.StrEnum):
    """Callout flavours recognised in block quotes."""

    NOTE = "note"
    TIP = "tip"
    IMPORTANT = "important"
    WARNING = "warning"
    CAUTION = "caution"

    @property
    def marker(self) -> str:
        """Return the ``[!KIND]`` marker that opens the callout."""
        return f"[!{self.value.upper()}]"

    @property
    def default_title(self) -> str:
        """Return the heading used when the marker carries no custom title."""
        return self.value.capitalize()

    @property
    def icon(self) -> str:
        """Return the name of the bundled SVG icon for this kind."""
        return _ALERT_ICONS[self]


_ALERT_ICONS: dict[AlertKind, str] = {
    AlertKind.NOTE: "info-circle",
    AlertKind.TIP: "bulb",
    AlertKind.IMPORTANT: "warning-message",
    AlertKind.WARNING: "warning-triangle",
    AlertKind.CAUTION: "warning-octagon",
}
ALERT_MARKERS: dict[str, AlertKind] = {kind.marker: kind for kind in AlertKind}


def serialize_fragment(md: Markdown, element: etree.Element) -> str:
    """Serialize ``element`` the same way ``md.convert`` serializes a document.

    The element is rendered with the instance's serializer and then passed
    through every registered postprocessor, so stashed raw HTML nested inside
    it is restored.
    """
    output = md.serializer(element)
    for postprocessor in md.postprocessors:
        output = postprocessor.run(output)
    return output.strip()


def match_alert(blockquote: etree.Element) -> tuple[AlertKind, str] | None:
    """Return the alert kind and title when ``blockquote`` is a callout."""
    if not len(blockquote) or blockquote[0].tag != "p":
        return None
    first_line = (blockquote[0].text or "").split("\n", 1)[0]
    marker, _, title = first_line.partition(" ")
    kind = ALERT_MARKERS.get(marker.strip())
    if kind is None:
        return None
    return kind, title.strip() or kind.default_title


def is_video_link(element: etree.Element) -> bool:
    """Return whether ``element`` is a link to an embeddable video file."""
    return element.tag == "a" and element.get("href", "").endswith(VIDEO_SUFFIXES)


class TreeRewriteTreeprocessor(Treeprocessor):
    """Replace alert block quotes and video links with stashed HTML."""

    def run(self, root: etree.Element) -> None:
        """Collect every rewrite in document order, then apply them."""
        for rewrite in self._collect(root):
            rewrite()

    def _collect(self, root: etree.Element) -> list[cabc.Callable[[], None]]:
        pending: list[cabc.Callable[[], None]] = []
        stack = [root]
        while stack:
            parent = stack.pop()
            descend: list[etree.Element] = []
            for child in parent:
                if child.tag == "blockquote" and (alert := match_alert(child)):
                    kind, title = alert
                    pending.append(
                        functools.partial(self._embed_alert, parent, child, kind, title)
                    )
                elif is_video_link(child):
                    pending.append(functools.partial(self._embed_video, parent, child))
                else:
                    descend.append(child)
            stack.extend(reversed(descend))
        return pending

    def _embed_alert(
        self,
        parent: etree.Element,
        blockquote: etree.Element,
        kind: AlertKind,
        title: str,
    ) -> None:
        paragraph = blockquote[0]
        _, newline, remainder = (paragraph.text or "").partition("\n")
        paragraph.text = remainder
        # a hard break right after the marker line ends the title
        if not newline and len(paragraph) and paragraph[0].tag == "br":
            detach(paragraph, paragraph[0])

        body = etree.Element("div")
        marker_only = not (paragraph.text or "").strip() and not len(paragraph)
        for child in list(blockquote):
            if child is paragraph and marker_only:
                continue
            body.append(child)

        html = render_template(
            "alert.jinja",
            kind=kind.value,
            icon=load_icon(kind.icon),
            title=title,
            body=Markup(serialize_fragment(self.md, body)),  # noqa: S704
        )
        placeholder = etree.Element("p")
        placeholder.text = self.md.htmlStash.store(html)
        replace(parent, blockquote, placeholder)
        logger.debug("rendered %s alert %r", kind.value, title)

    def _embed_video(self, parent: etree.Element, link: etree.Element) -> None:
        html = render_template("video.jinja", src=link.get("href", ""))
        detach(parent, link, self.md.htmlStash.store(html))


class TreeRewriteExtension(Extension):
    """Register the alert and video rewriting pass on a Markdown instance."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run after python-markdown's own inline, prettify and unescape passes."""
        md.treeprocessors.register(
            TreeRewriteTreeprocessor(md), "docnode_tree_rewrite", -5
        )


__all__ = [
    "ALERT_MARKERS",
    "VIDEO_SUFFIXES",
    "AlertKind",
    "TreeRewriteExtension",
    "TreeRewriteTreeprocessor",
    "is_video_link",
    "match_alert",
    "serialize_fragment",
]
