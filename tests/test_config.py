"""Tests for loading the render configuration YAML."""

from __future__ import annotations

from pathlib import Path

import pytest

from docnode_html.config import RenderConfigError, load_render_config
from docnode_html.models import DocTag, SymbolKind
from docnode_html.url_rewriter import SourceUrlRewriter

CONFIG = """
defaults:
  pygments_style: friendly
  no_toc: true
  output_dir: dist
  source_url: https://github.com/acme/lib/blob/main
modules:
  - path: ./mod.ts
    main: true
    symbols:
      - kind: module_doc
        name: module_doc
        doc: The main module.
  - path: /util/fs.ts
    display_name: fs
    symbols:
      - name: readFile
        doc: Reads a file. See {@link writeFile}.
        tags:
          - kind: deprecated
            value: Use `open` instead.
          - kind: param
            name: path
            value: File to read.
      - name: writeFile
      - name: Reader
        kind: class
        qualified_name: fs.Reader
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "docnode.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_load_render_config(tmp_path: Path) -> None:
    config = load_render_config(_write(tmp_path, CONFIG))

    assert config.pygments_style == "friendly"
    assert config.no_toc is True
    assert config.output_dir == Path("dist")
    assert config.source_url == "https://github.com/acme/lib/blob/main"

    main, fs = config.graph.modules
    assert main.is_main
    assert main.path == "mod.ts"
    assert fs.path == "util/fs.ts"
    assert main.display_name == "mod.ts"
    assert fs.display_name == "fs"
    assert not fs.is_main

    read_file, write_file, reader = config.graph[fs]
    assert read_file.kind is SymbolKind.FUNCTION
    assert read_file.doc.doc == "Reads a file. See {@link writeFile}."
    assert read_file.doc.tags == (
        DocTag("deprecated", "Use `open` instead."),
        DocTag("param", "File to read.", "path"),
    )
    assert write_file.doc.doc is None
    assert reader.kind is SymbolKind.CLASS
    assert reader.qualified_name == "fs.Reader"


def test_defaults_apply(tmp_path: Path) -> None:
    config = load_render_config(_write(tmp_path, "modules:\n  - path: a.ts"))
    assert config.pygments_style == "monokai"
    assert config.no_toc is False
    assert config.output_dir == Path("public")
    assert config.source_url is None
    assert config.url_rewriter() is None


def test_url_rewriter(tmp_path: Path) -> None:
    config = load_render_config(_write(tmp_path, CONFIG))
    rewriter = config.url_rewriter()
    assert isinstance(rewriter, SourceUrlRewriter)
    assert rewriter.base_url == "https://github.com/acme/lib/blob/main"


class TestGetModule:
    """Module lookup by path, display name and defaults."""

    def test_lookup_by_path_and_display_name(self, tmp_path: Path) -> None:
        config = load_render_config(_write(tmp_path, CONFIG))
        fs = config.get_module("fs")
        assert config.get_module("util/fs.ts") is fs
        assert config.get_module("/util/fs.ts") is fs

    def test_none_prefers_main_module(self, tmp_path: Path) -> None:
        config = load_render_config(_write(tmp_path, CONFIG))
        assert config.get_module(None).path == "mod.ts"

    def test_none_uses_default_module(self, tmp_path: Path) -> None:
        text = CONFIG.replace("  no_toc: true", "  default_module: fs")
        config = load_render_config(_write(tmp_path, text))
        assert config.get_module(None).path == "util/fs.ts"

    def test_none_falls_back_to_first_module(self, tmp_path: Path) -> None:
        config = load_render_config(
            _write(tmp_path, "modules:\n  - path: a.ts\n  - path: b.ts")
        )
        assert config.get_module(None).path == "a.ts"

    def test_unknown_module(self, tmp_path: Path) -> None:
        config = load_render_config(_write(tmp_path, CONFIG))
        with pytest.raises(KeyError, match="Unknown module 'nope'"):
            config.get_module("nope")


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_render_config(tmp_path / "missing.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(TypeError, match="mapping"):
        load_render_config(_write(tmp_path, "- a\n- b"))


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("defaults:\n  no_toc: true", "No modules defined"),
        ("modules: a.ts", "must be a list"),
        ("modules:\n  - a.ts", "must be a mapping"),
        ("modules:\n  - display_name: a", "missing 'path'"),
        ("modules:\n  - path: ../outside.ts", "inside the output directory"),
        ("modules:\n  - path: /", "inside the output directory"),
        ("modules:\n  - path: /a.ts\n  - path: a.ts", "Duplicate module 'a.ts'"),
        ("modules:\n  - path: a.ts\n  - path: a.ts", "Duplicate module 'a.ts'"),
        ("modules:\n  - path: a.ts\n    symbols: x", "must be a list"),
        ("modules:\n  - path: a.ts\n    symbols:\n      - x", "must be mappings"),
        ("modules:\n  - path: a.ts\n    symbols:\n      - doc: x", "missing 'name'"),
        (
            "modules:\n  - path: a.ts\n    symbols:\n      - name: f\n        kind: macro",
            "unknown kind 'macro'",
        ),
        (
            "modules:\n  - path: a.ts\n    symbols:\n      - name: f\n        tags: x",
            "must be a list",
        ),
        (
            "modules:\n  - path: a.ts\n    symbols:\n"
            "      - name: f\n        tags:\n          - value: x",
            "needs a 'kind'",
        ),
    ],
)
def test_invalid_config(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(RenderConfigError, match=message):
        load_render_config(_write(tmp_path, text))
