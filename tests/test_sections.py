"""Tests for example and module-documentation sections."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from docnode_html.context import RenderContext
from docnode_html.models import (
    DocComment,
    DocGraph,
    DocSymbol,
    DocTag,
    ModulePath,
    SymbolKind,
)
from docnode_html.resolve import RootPosition
from docnode_html.sections import (
    ExampleSection,
    ModuleDocSection,
    doc_examples,
    name_to_id,
)

MODULE_DOC = DocSymbol(
    "module_doc",
    SymbolKind.MODULE_DOC,
    DocComment(
        "Utilities for **b**.",
        (
            DocTag("deprecated", "Use `c` instead."),
            DocTag("example", "Basic use\n\n```ts\nbaz();\n```"),
            DocTag("example", "```ts\nnew Baz();\n```"),
        ),
    ),
)


@pytest.fixture
def main_module() -> ModulePath:
    """Return the package's main module."""
    return ModulePath("/mod.ts", is_main=True)


@pytest.fixture
def section_graph(main_module: ModulePath, module_b: ModulePath) -> DocGraph:
    """Return a graph whose ``/b.ts`` module carries a module doc comment."""
    return DocGraph(
        [
            (
                main_module,
                [MODULE_DOC, DocSymbol("run", SymbolKind.FUNCTION, DocComment("Runs."))],
            ),
            (
                module_b,
                [
                    MODULE_DOC,
                    DocSymbol(
                        "baz", SymbolKind.CLASS, DocComment("A baz.\n\nMore details.")
                    ),
                    DocSymbol("qux", SymbolKind.FUNCTION, DocComment("Runs qux.")),
                    DocSymbol("dep", SymbolKind.IMPORT, DocComment("Imported.")),
                    DocSymbol("Quux", SymbolKind.CLASS),
                ],
            ),
        ]
    )


@pytest.fixture
def section_ctx(section_graph: DocGraph) -> RenderContext:
    """Return a root context over ``section_graph``."""
    return RenderContext(section_graph, RootPosition())


@pytest.mark.parametrize(
    ("kind", "name", "expected"),
    [
        ("example", "0", "example_0"),
        ("section", "Type Aliases", "section_Type_Aliases"),
        ("function", " do  thing ", "function_do_thing"),
    ],
)
def test_name_to_id(kind: str, name: str, expected: str) -> None:
    assert name_to_id(kind, name) == expected


class TestExampleSection:
    """A single ``@example`` rendered with its title."""

    def test_titled_example(self, root_ctx: RenderContext) -> None:
        example = ExampleSection.build(root_ctx, "Basic use\n\n```ts\nbaz();\n```", 0)
        assert example.anchor == "example_0"
        assert example.title == "Basic use"
        assert example.markdown_title == '<div class="markdown"><p>Basic use</p></div>'
        soup = BeautifulSoup(example.markdown_body, "html.parser")
        assert soup.pre is not None
        assert "baz();" in soup.pre.get_text()

    def test_untitled_example_is_numbered(self, root_ctx: RenderContext) -> None:
        example = ExampleSection.build(root_ctx, "```ts\nnew Baz();\n```", 2)
        assert example.anchor == "example_2"
        assert example.title == "Example 3"
        assert "new Baz();" in example.markdown_body

    def test_doc_without_examples(self, root_ctx: RenderContext) -> None:
        assert doc_examples(root_ctx, DocComment("No examples.")) is None

    def test_doc_examples_keep_order(self, root_ctx: RenderContext) -> None:
        section = doc_examples(root_ctx, MODULE_DOC.doc)
        assert section is not None
        assert section.title == "Examples"
        assert [example.title for example in section.examples] == [
            "Basic use",
            "Example 2",
        ]


class TestModuleDocSection:
    """Module documentation plus the symbol listing of a module page."""

    def test_non_main_module(
        self, section_ctx: RenderContext, module_b: ModulePath
    ) -> None:
        section = ModuleDocSection.build(section_ctx, module_b)
        assert section.module == module_b
        assert section.deprecated == (
            '<div class="markdown"><p>Use <code>c</code> instead.</p></div>'
        )
        assert section.body == (
            '<div class="markdown"><p>Utilities for <strong>b</strong>.</p></div>'
        )
        assert [group.title for group in section.sections] == [
            "Examples",
            "Classes",
            "Functions",
        ]

    def test_symbol_entries(
        self, section_ctx: RenderContext, module_b: ModulePath
    ) -> None:
        section = ModuleDocSection.build(section_ctx, module_b)
        classes = section.sections[1]
        assert classes.anchor == "section_Classes"
        assert [entry.name for entry in classes.entries] == ["baz", "Quux"]
        baz, quux = classes.entries
        assert baz.href == "../.././/b.ts/~/baz.html"
        assert baz.summary == '<div class="markdown_summary"><p>A baz.</p></div>'
        assert quux.summary is None
        names = [entry.name for group in section.sections for entry in group.entries]
        assert "dep" not in names

    def test_main_module_lists_no_symbols(
        self, section_ctx: RenderContext, main_module: ModulePath
    ) -> None:
        section = ModuleDocSection.build(section_ctx, main_module)
        assert [group.title for group in section.sections] == ["Examples"]

    def test_module_without_doc(self, root_ctx: RenderContext) -> None:
        module = ModulePath("/plain.ts")
        ctx = RenderContext(
            DocGraph([(module, [DocSymbol("f", SymbolKind.FUNCTION)])]),
            root_ctx.position,
        )
        section = ModuleDocSection.build(ctx, module)
        assert section.deprecated is None
        assert section.body is None
        assert [group.title for group in section.sections] == ["Functions"]

    def test_unknown_module(self, section_ctx: RenderContext) -> None:
        with pytest.raises(KeyError):
            ModuleDocSection.build(section_ctx, ModulePath("/missing.ts"))

    def test_render(self, section_ctx: RenderContext, module_b: ModulePath) -> None:
        html = ModuleDocSection.build(section_ctx, module_b).render()
        soup = BeautifulSoup(html, "html.parser")
        root = soup.select_one("section#module_doc")
        assert root is not None
        assert root["data-module"] == "/b.ts"
        assert soup.select_one("div.deprecated") is not None
        assert [example["id"] for example in soup.select("div.example")] == [
            "example_0",
            "example_1",
        ]
        links = soup.select("div.symbol > a")
        assert [link.get_text() for link in links] == ["baz", "Quux", "qux"]
        assert links[0]["href"] == "../.././/b.ts/~/baz.html"
