"""Unit tests for the documentation graph and relative href resolution."""

from __future__ import annotations

import pytest

from docnode_html.context import RenderContext
from docnode_html.models import (
    DocComment,
    DocGraph,
    DocGraphError,
    DocSymbol,
    DocTag,
    ModulePath,
    SymbolKind,
)
from docnode_html.resolve import (
    AllSymbolsPosition,
    ModulePosition,
    RootPosition,
    SymbolPosition,
    href_path_resolve,
)

MAIN = ModulePath("./mod.ts", is_main=True)
NESTED = ModulePath("util/fs.ts")


@pytest.mark.parametrize(
    ("current", "target", "expected"),
    [
        (RootPosition(), ModulePosition(NESTED), "./util/fs.ts/index.html"),
        (RootPosition(), SymbolPosition(MAIN, "run"), "./~/run.html"),
        (RootPosition(), ModulePosition(MAIN), "index.html"),
        (RootPosition(), AllSymbolsPosition(), "./all_symbols.html"),
        (AllSymbolsPosition(), RootPosition(), "index.html"),
        (ModulePosition(MAIN), SymbolPosition(NESTED, "read"), "./util/fs.ts/~/read.html"),
        (ModulePosition(NESTED), RootPosition(), "../../index.html"),
        (SymbolPosition(MAIN, "run"), SymbolPosition(MAIN, "stop"), ".././~/stop.html"),
        (
            SymbolPosition(NESTED, "read"),
            SymbolPosition(NESTED, "write"),
            "../../.././util/fs.ts/~/write.html",
        ),
        (SymbolPosition(NESTED, "read"), AllSymbolsPosition(), "../../.././all_symbols.html"),
    ],
)
def test_href_path_resolve(current: object, target: object, expected: str) -> None:
    assert href_path_resolve(current, target) == expected  # type: ignore[arg-type]


def test_positions_expose_enclosing_module() -> None:
    assert RootPosition().module is None
    assert AllSymbolsPosition().module is None
    assert ModulePosition(NESTED).module == NESTED
    assert SymbolPosition(NESTED, "read").module == NESTED


def test_module_display_name_defaults_to_path() -> None:
    assert MAIN.display_name == "mod.ts"
    assert ModulePath("/b.ts").display_name == "b.ts"
    assert ModulePath("b.ts", display_name="bee").display_name == "bee"


def test_graph_rejects_duplicate_paths() -> None:
    with pytest.raises(DocGraphError, match="Duplicate module './mod.ts'"):
        DocGraph([(MAIN, []), (ModulePath("./mod.ts"), [])])


def test_graph_preserves_insertion_order() -> None:
    graph = DocGraph([(NESTED, []), (MAIN, [])])
    assert graph.modules == [NESTED, MAIN]
    assert [module for module, _symbols in graph] == [NESTED, MAIN]
    assert len(graph) == 2
    assert MAIN in graph
    assert graph.get(ModulePath("other.ts")) is None


def test_find_module_by_path_or_display_name() -> None:
    named = ModulePath("src/lib.ts", display_name="lib")
    graph = DocGraph([(named, [])])
    assert graph.find_module("src/lib.ts") is named
    assert graph.find_module("lib") is named
    assert graph.find_module("missing") is None


def test_symbol_defaults_and_lookup() -> None:
    symbol = DocSymbol("read", SymbolKind.FUNCTION)
    nested = DocSymbol("open", SymbolKind.FUNCTION, qualified_name="Fs.open")
    graph = DocGraph([(NESTED, [symbol, nested])])
    assert symbol.qualified_name == "read"
    assert graph.find_symbol(NESTED, "Fs.open") is nested
    assert graph.find_symbol(NESTED, "open") is None


def test_doc_comment_tag_helpers() -> None:
    doc = DocComment(
        "Body",
        (
            DocTag("example", "first"),
            DocTag("deprecated", "use other"),
            DocTag("param", "the path", name="path"),
            DocTag("example", "second"),
        ),
    )
    assert doc.deprecated == DocTag("deprecated", "use other")
    assert doc.examples == ["first", "second"]
    assert DocComment().deprecated is None


def test_symbol_kind_section_titles() -> None:
    assert SymbolKind.FUNCTION.section_title == "Functions"
    assert SymbolKind("type_alias") is SymbolKind.TYPE_ALIAS


def test_context_with_position_returns_copy(doc_graph: DocGraph, module_b: ModulePath) -> None:
    ctx = RenderContext(doc_graph, RootPosition())
    moved = ctx.with_position(ModulePosition(module_b))
    assert ctx.position == RootPosition()
    assert moved.current_module == module_b
    assert moved.graph is ctx.graph
    assert moved.resolve_path(SymbolPosition(module_b, "baz")) == "../.././/b.ts/~/baz.html"
