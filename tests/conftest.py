"""Shared fixtures for docnode_html tests.

The fixtures model a two-module package: ``/a.ts`` exporting ``foo`` and
``bar`` and ``/b.ts`` exporting ``baz``. Contexts are anchored either at the
``foo`` symbol page (for cross reference tests) or at the package root.
"""

from __future__ import annotations

import pytest

from docnode_html.context import RenderContext
from docnode_html.models import DocComment, DocGraph, DocSymbol, ModulePath, SymbolKind
from docnode_html.resolve import RootPosition, SymbolPosition


@pytest.fixture
def module_a() -> ModulePath:
    """Return the identifier of the ``/a.ts`` module."""
    return ModulePath("/a.ts")


@pytest.fixture
def module_b() -> ModulePath:
    """Return the identifier of the ``/b.ts`` module."""
    return ModulePath("/b.ts")


@pytest.fixture
def doc_graph(module_a: ModulePath, module_b: ModulePath) -> DocGraph:
    """Return a graph with ``foo``/``bar`` in ``/a.ts`` and ``baz`` in ``/b.ts``."""
    return DocGraph(
        [
            (
                module_a,
                [
                    DocSymbol("foo", SymbolKind.FUNCTION, DocComment("Does foo.")),
                    DocSymbol("bar", SymbolKind.FUNCTION, DocComment("Does bar.")),
                ],
            ),
            (module_b, [DocSymbol("baz", SymbolKind.CLASS, DocComment("A baz."))]),
        ]
    )


@pytest.fixture
def symbol_ctx(doc_graph: DocGraph, module_a: ModulePath) -> RenderContext:
    """Return a context rendering the page of ``foo`` in ``/a.ts``."""
    return RenderContext(doc_graph, SymbolPosition(module_a, "foo"))


@pytest.fixture
def root_ctx() -> RenderContext:
    """Return a context rendering at the root of an empty graph."""
    return RenderContext(DocGraph(), RootPosition())
