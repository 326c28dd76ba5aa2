"""Common literal values used across docnode_html.

These constants keep filenames and environment prefixes centralized so the
CLI, the path resolver and tests can import the same values without drifting.
Intended for internal use within the docnode_html package.

Examples
--------
>>> from docnode_html import _constants
>>> _constants.ENV_VAR_TEMPLATE.format(name="CONFIG")
'DOCNODE_CONFIG'
>>> _constants.INDEX_FILENAME
'index.html'
"""

from pathlib import Path

ENV_PREFIX = "DOCNODE_"
ENV_VAR_TEMPLATE = ENV_PREFIX + "{name}"
INDEX_FILENAME = "index.html"
DEFAULT_CONFIG = Path("docnode.yaml")
