"""Cyclopts CLI entrypoint for rendering documentation comments to HTML.

The ``docnode-html`` console script reads a YAML description of documented
modules (see :mod:`docnode_html.config`) and renders each module's
documentation fragment, prints the plain text of a single symbol's doc
comment, or emits the Pygments stylesheet matching highlighted code blocks.

Examples
--------
Render every configured module:

>>> from docnode_html.cli import main
>>> main()  # doctest: +SKIP

Render a single module into a custom directory:

>>> from docnode_html.cli import app
>>> app(
...     ["render", "--module", "mod.ts", "--output-dir", "dist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG, ENV_PREFIX, INDEX_FILENAME
from .config import RenderConfig, load_render_config
from .context import RenderContext
from .render.adapters import CodeHighlighter, default_heading_adapter
from .render.pipeline import strip as strip_markdown
from .resolve import ModulePosition, SymbolPosition
from .sections import ModuleDocSection

if typ.TYPE_CHECKING:
    from .models import ModulePath

logger = logging.getLogger(__name__)

app = App(name="docnode-html", config=cyclopts.config.Env(ENV_PREFIX, command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def module_output_path(output_dir: Path, module: ModulePath) -> Path:
    """Return where the page of ``module`` is written below ``output_dir``.

    The layout matches the relative links produced by
    :func:`docnode_html.resolve.href_path_resolve`.
    """
    if module.is_main:
        return output_dir / INDEX_FILENAME
    return output_dir / module.path.lstrip("/") / INDEX_FILENAME


def build_context(
    render_config: RenderConfig,
    module: ModulePath,
    highlighter: CodeHighlighter | None = None,
) -> RenderContext:
    """Return a render context anchored at the page of ``module``."""
    return RenderContext(
        graph=render_config.graph,
        position=ModulePosition(module),
        url_rewriter=render_config.url_rewriter(),
        heading_adapter=None if render_config.no_toc else default_heading_adapter(),
        highlighter=highlighter or CodeHighlighter(render_config.pygments_style),
    )


@app.command(help="Render module documentation fragments to HTML files.")
def render(
    *,
    module: typ.Annotated[
        str | None,
        Parameter(help="Module path or display name", env_var="DOCNODE_MODULE"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to render config", env_var="DOCNODE_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="DOCNODE_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Render the module documentation of the requested modules.

    Parameters
    ----------
    module : str or None, optional
        Module to render; when ``None`` (default) every module is rendered.
    config : Path, optional
        Path to the YAML configuration file (overridable via
        ``DOCNODE_CONFIG``).
    output_dir : Path or None, optional
        Override for the configured output directory.

    Returns
    -------
    None
        Writes one fragment per module and prints the written paths.
    """
    render_config = load_render_config(config)
    if module:
        targets = [render_config.get_module(module)]
    else:
        targets = render_config.graph.modules
    root = output_dir or render_config.output_dir
    highlighter = CodeHighlighter(render_config.pygments_style)

    for target in targets:
        ctx = build_context(render_config, target, highlighter)
        section = ModuleDocSection.build(ctx, target)
        path = module_output_path(root, target)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(section.render(), encoding="utf-8")
        logger.debug("rendered module %s", target.path)
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the plain text of a symbol's documentation.")
def strip(
    *,
    symbol: typ.Annotated[str, Parameter(help="Qualified symbol name")],
    module: typ.Annotated[
        str | None,
        Parameter(help="Module path or display name", env_var="DOCNODE_MODULE"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to render config", env_var="DOCNODE_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print the documentation of ``symbol`` with all markup removed.

    Raises
    ------
    KeyError
        If the module does not define ``symbol``.
    """
    render_config = load_render_config(config)
    target = render_config.get_module(module)
    found = render_config.graph.find_symbol(target, symbol)
    if found is None:
        msg = f"Module '{target.path}' has no symbol '{symbol}'."
        raise KeyError(msg)
    ctx = build_context(render_config, target).with_position(
        SymbolPosition(target, found.qualified_name)
    )
    text = strip_markdown(ctx, found.doc.doc or "")
    print(text)


@app.command(help="Print the Pygments CSS for highlighted code blocks.")
def stylesheet(
    *,
    style: typ.Annotated[
        str, Parameter(help="Pygments style name", env_var="DOCNODE_STYLE")
    ] = "monokai",
) -> None:
    """Print the stylesheet matching :class:`CodeHighlighter` output."""
    print(CodeHighlighter(style).stylesheet)


def main() -> None:
    """Invoke the Cyclopts application behind the `docnode-html` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
