"""GitHub-flavoured markdown extras for python-markdown.

``GfmExtension`` adds the constructs documentation comments commonly rely on
that python-markdown does not parse by default:

* ``~~strikethrough~~`` rendered as ``<del>``;
* ``^superscript^`` rendered as ``<sup>``;
* bare ``https://`` and ``www.`` URLs turned into links;
* bare e-mail addresses turned into ``mailto:`` links;
* ``[ ]`` / ``[x]`` task list items rendered with disabled checkboxes;
* the GFM tag filter, which neutralises ``<script>``, ``<iframe>`` and
  similar raw HTML tags by escaping their opening bracket.

Examples
--------
>>> from markdown import Markdown
>>> Markdown(extensions=[GfmExtension()]).convert("~~gone~~")
'<p><del>gone</del></p>'
"""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor, SimpleTagInlineProcessor
from markdown.postprocessors import Postprocessor
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString

if typ.TYPE_CHECKING:
    from markdown import Markdown

STRIKETHROUGH_PATTERN = r"(~{2})(?!~)(.+?)(?<!~)\1"
SUPERSCRIPT_PATTERN = r"(\^)([^\^\s]+?)\1"
BARE_URL_PATTERN = (
    r"(?<![\w/<\"'=:@.])"
    r"((?:https?://|www\.)[^\s<>]*[^\s<>.,:;\"')\]!?*_~])"
)
BARE_EMAIL_PATTERN = (
    r"(?<![\w/<\"'=:@.+-])"
    r"([\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,})(?![\w@-])"
)
TASK_PATTERN = re.compile(r"^\[(?P<state>[ xX])\][ \t]+")
FILTERED_TAGS = (
    "title",
    "textarea",
    "style",
    "xmp",
    "iframe",
    "noembed",
    "noframes",
    "script",
    "plaintext",
)
TAG_FILTER_PATTERN = re.compile(
    rf"<(?=/?(?:{'|'.join(FILTERED_TAGS)})\b)", re.IGNORECASE
)


class BareUrlInlineProcessor(InlineProcessor):
    """Link URLs written without surrounding angle brackets."""

    ANCESTOR_EXCLUDES = ("a",)

    def handleMatch(  # type: ignore[override]  # noqa: N802
        self, m: re.Match[str], data: str
    ) -> tuple[etree.Element, int, int]:
        """Build an anchor for the matched URL, defaulting ``www.`` to HTTP."""
        url = m.group(1)
        element = etree.Element("a")
        element.set("href", url if "://" in url else f"http://{url}")
        element.text = AtomicString(url)
        return element, m.start(0), m.end(0)


class BareEmailInlineProcessor(InlineProcessor):
    """Link e-mail addresses written without surrounding angle brackets."""

    ANCESTOR_EXCLUDES = ("a",)

    def handleMatch(  # type: ignore[override]  # noqa: N802
        self, m: re.Match[str], data: str
    ) -> tuple[etree.Element, int, int]:
        """Build a ``mailto:`` anchor for the matched address."""
        address = m.group(1)
        element = etree.Element("a")
        element.set("href", f"mailto:{address}")
        element.text = AtomicString(address)
        return element, m.start(0), m.end(0)


class TaskListTreeprocessor(Treeprocessor):
    """Replace leading ``[ ]`` and ``[x]`` markers of list items with checkboxes."""

    def run(self, root: etree.Element) -> None:
        """Rewrite task list items in place."""
        for item in list(root.iter("li")):
            holder = item
            if len(item) and item[0].tag == "p" and not (item.text or "").strip():
                holder = item[0]
            text = holder.text or ""
            match = TASK_PATTERN.match(text)
            if match is None:
                continue
            checkbox = etree.Element("input", {"type": "checkbox", "disabled": ""})
            if match.group("state") != " ":
                checkbox.set("checked", "")
            checkbox.tail = f" {text[match.end() :]}"
            holder.text = None
            holder.insert(0, checkbox)


class TagFilterPostprocessor(Postprocessor):
    """Escape the opening bracket of tags GFM refuses to pass through."""

    def run(self, text: str) -> str:
        """Return ``text`` with filtered tags neutralised."""
        return TAG_FILTER_PATTERN.sub("&lt;", text)


class GfmExtension(Extension):
    """Register the GitHub-flavoured markdown extras on a Markdown instance."""

    def __init__(self, **kwargs: bool) -> None:
        self.config = {
            "autolink": [True, "Link bare http(s):// URLs, www. URLs and e-mails"],
            "tasklist": [True, "Render [ ] and [x] list items as checkboxes"],
            "tagfilter": [True, "Escape tags disallowed by GitHub"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register inline processors, the task list pass and the tag filter."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "gfm_strikethrough",
            65,
        )
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(SUPERSCRIPT_PATTERN, "sup"),
            "gfm_superscript",
            64,
        )
        if self.getConfig("autolink"):
            md.inlinePatterns.register(
                BareUrlInlineProcessor(BARE_URL_PATTERN, md), "gfm_autolink", 85
            )
            md.inlinePatterns.register(
                BareEmailInlineProcessor(BARE_EMAIL_PATTERN, md), "gfm_automail", 84
            )
        if self.getConfig("tasklist"):
            md.treeprocessors.register(
                TaskListTreeprocessor(md), "gfm_tasklist", 15
            )
        if self.getConfig("tagfilter"):
            md.postprocessors.register(
                TagFilterPostprocessor(md), "gfm_tagfilter", 25
            )


__all__ = [
    "BareEmailInlineProcessor",
    "BareUrlInlineProcessor",
    "GfmExtension",
    "TagFilterPostprocessor",
    "TaskListTreeprocessor",
]
