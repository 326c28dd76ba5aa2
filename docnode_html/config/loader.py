"""Load render configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ..models import DocGraph, DocGraphError
from .helpers import _build_module, _optional_str
from .models import RenderConfig, RenderConfigError


def load_render_config(path: Path) -> RenderConfig:
    """Load the YAML file describing the documentation graph and render options.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docnode.yaml``).

    Returns
    -------
    RenderConfig
        Parsed configuration holding the :class:`~docnode_html.models.DocGraph`
        and the shared render defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    RenderConfigError
        If modules are missing or malformed, for example when two modules
        share a path or a symbol has an unknown kind.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_render_config(Path("docnode.yaml"))  # doctest: +SKIP
    >>> [module.path for module in config.graph.modules]  # doctest: +SKIP
    ['mod.ts']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}

    modules_raw = raw.get("modules") or []
    if not modules_raw:
        msg = "No modules defined in render configuration."
        raise RenderConfigError(msg)
    if not isinstance(modules_raw, list):
        msg = "'modules' must be a list of module mappings."
        raise RenderConfigError(msg)

    modules = []
    for entry in modules_raw:
        match entry:
            case dict():
                modules.append(_build_module(entry))
            case _:
                msg = "Each module entry must be a mapping."
                raise RenderConfigError(msg)

    try:
        graph = DocGraph(modules)
    except DocGraphError as exc:
        raise RenderConfigError(str(exc)) from exc

    return RenderConfig(
        graph=graph,
        pygments_style=defaults.get("pygments_style", "monokai"),
        no_toc=bool(defaults.get("no_toc", False)),
        output_dir=Path(defaults.get("output_dir", "public")),
        source_url=_optional_str(defaults.get("source_url")),
        default_module=_optional_str(defaults.get("default_module")),
    )


__all__ = ["load_render_config"]
