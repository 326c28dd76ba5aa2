"""Small ElementTree helpers shared by the tree processors."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element


def append_text(parent: Element, index: int, text: str) -> None:
    """Append ``text`` right before the child at ``index`` of ``parent``."""
    if not text:
        return
    if index == 0:
        parent.text = (parent.text or "") + text
    else:
        previous = parent[index - 1]
        previous.tail = (previous.tail or "") + text


def detach(parent: Element, child: Element, replacement: str = "") -> None:
    """Remove ``child`` from ``parent`` keeping its tail text in place.

    ``replacement`` is inserted where the element used to be, ahead of the
    preserved tail.
    """
    index = list(parent).index(child)
    parent.remove(child)
    append_text(parent, index, replacement + (child.tail or ""))


def replace(parent: Element, child: Element, new: Element) -> None:
    """Swap ``child`` for ``new`` at the same position, carrying the tail over."""
    index = list(parent).index(child)
    new.tail = child.tail
    parent.remove(child)
    parent.insert(index, new)


__all__ = ["append_text", "detach", "replace"]
