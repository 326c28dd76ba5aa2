"""Jinja templates and SVG icons bundled with the renderer."""

from __future__ import annotations

import functools
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
ICONS_DIR = TEMPLATES_DIR / "icons"


@functools.cache
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


@functools.cache
def load_icon(name: str) -> Markup:
    """Return the inline SVG markup of the icon called ``name``.

    Raises
    ------
    FileNotFoundError
        If no ``<name>.svg`` asset exists.
    """
    path = ICONS_DIR / f"{name}.svg"
    return Markup(path.read_text(encoding="utf-8").strip())  # noqa: S704


def render_template(name: str, **context: typ.Any) -> str:  # noqa: ANN401
    """Render the bundled template ``name`` with autoescaping enabled."""
    return _environment().get_template(name).render(**context)


__all__ = ["ICONS_DIR", "TEMPLATES_DIR", "load_icon", "render_template"]
