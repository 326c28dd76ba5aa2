"""Load and validate the YAML configuration driving docnode-html renders.

The configuration lists the documented modules, their symbols and doc
comments, and the defaults shared by every render (Pygments style, output
directory, source URL for relative links). :func:`load_render_config` returns
a :class:`RenderConfig` whose ``graph`` is ready for the render pipeline.

Examples
--------
>>> from pathlib import Path
>>> from docnode_html.config import load_render_config
>>> config = load_render_config(Path("docnode.yaml"))  # doctest: +SKIP
>>> config.get_module(None).display_name  # doctest: +SKIP
'mod'
"""

from .loader import load_render_config
from .models import RenderConfig, RenderConfigError

__all__ = ["RenderConfig", "RenderConfigError", "load_render_config"]
