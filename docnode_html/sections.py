"""Build the example and module-documentation sections of a documentation page."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from .models import SymbolKind
from .render.assets import render_template
from .render.pipeline import doc_body_to_html, render_markdown, split_markdown_title
from .resolve import ModulePosition, SymbolPosition

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .context import RenderContext
    from .models import DocComment, DocSymbol, ModulePath

WHITESPACE_PATTERN = re.compile(r"\s+")


def name_to_id(kind: str, name: str) -> str:
    """Return an anchor id for ``name`` within the ``kind`` namespace.

    Examples
    --------
    >>> name_to_id("example", "0")
    'example_0'
    >>> name_to_id("function", "do thing")
    'function_do_thing'
    """
    return f"{kind}_{WHITESPACE_PATTERN.sub('_', name.strip())}"


@dc.dataclass(frozen=True, slots=True)
class ExampleSection:
    """One rendered ``@example`` with its anchor, title and body HTML."""

    anchor: str
    title: str
    markdown_title: str
    markdown_body: str

    @classmethod
    def build(cls, ctx: RenderContext, example: str, index: int) -> ExampleSection:
        """Render ``example`` as the ``index``-th example of a symbol.

        The example's first paragraph (or everything before its first code
        fence) becomes the title; untitled examples are called
        ``"Example N"``.
        """
        title, body = split_markdown_title(example)
        title = title or f"Example {index + 1}"
        return cls(
            anchor=name_to_id("example", str(index)),
            title=title,
            markdown_title=render_markdown(ctx, title),
            markdown_body=render_markdown(ctx, body or "", no_toc=True),
        )


@dc.dataclass(frozen=True, slots=True)
class SymbolEntry:
    """Link to one symbol plus its title-only summary."""

    name: str
    href: str
    summary: str | None


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Titled group of examples or symbol entries."""

    title: str
    anchor: str
    examples: tuple[ExampleSection, ...] = ()
    entries: tuple[SymbolEntry, ...] = ()


def doc_examples(ctx: RenderContext, doc: DocComment) -> Section | None:
    """Return the "Examples" section of ``doc``, or ``None`` when it has none."""
    examples = tuple(
        ExampleSection.build(ctx, example, index)
        for index, example in enumerate(doc.examples)
    )
    if not examples:
        return None
    return Section(title="Examples", anchor="examples", examples=examples)


def _kind_sections(
    ctx: RenderContext, module: ModulePath, symbols: cabc.Iterable[DocSymbol]
) -> list[Section]:
    grouped: dict[SymbolKind, list[SymbolEntry]] = {}
    for symbol in symbols:
        if symbol.kind in (SymbolKind.MODULE_DOC, SymbolKind.IMPORT):
            continue
        target = SymbolPosition(module, symbol.qualified_name)
        grouped.setdefault(symbol.kind, []).append(
            SymbolEntry(
                name=symbol.qualified_name,
                href=ctx.resolve_path(target),
                summary=doc_body_to_html(ctx, symbol.doc, summary=True),
            )
        )
    return [
        Section(
            title=kind.section_title,
            anchor=name_to_id("section", kind.section_title),
            entries=tuple(entries),
        )
        for kind, entries in grouped.items()
    ]


@dc.dataclass(frozen=True, slots=True)
class ModuleDocSection:
    """Rendered module-level documentation of one module page.

    Attributes
    ----------
    module : ModulePath
        Module the section documents.
    deprecated : str or None
        Rendered ``@deprecated`` message of the module doc comment.
    sections : tuple[Section, ...]
        Examples of the module doc comment, followed, for non-main modules,
        by one section per symbol kind.
    body : str or None
        Rendered body of the module doc comment.
    """

    module: ModulePath
    deprecated: str | None
    sections: tuple[Section, ...]
    body: str | None

    @classmethod
    def build(cls, ctx: RenderContext, module: ModulePath) -> ModuleDocSection:
        """Render the module doc comment and symbol listing of ``module``.

        Raises
        ------
        KeyError
            If ``module`` is not part of ``ctx.graph``.
        """
        ctx = ctx.with_position(ModulePosition(module))
        symbols = ctx.graph[module]
        module_doc = next(
            (symbol for symbol in symbols if symbol.kind is SymbolKind.MODULE_DOC),
            None,
        )

        deprecated = None
        body = None
        sections: list[Section] = []
        if module_doc is not None:
            tag = module_doc.doc.deprecated
            if tag is not None:
                deprecated = render_markdown(ctx, tag.value or "")
            examples = doc_examples(ctx, module_doc.doc)
            if examples is not None:
                sections.append(examples)
            body = doc_body_to_html(ctx, module_doc.doc, summary=False)

        if not module.is_main:
            sections.extend(_kind_sections(ctx, module, symbols))

        return cls(
            module=module, deprecated=deprecated, sections=tuple(sections), body=body
        )

    def render(self) -> str:
        """Return the section as an HTML fragment."""
        return render_template("module_doc.jinja", section=self)


__all__ = [
    "ExampleSection",
    "ModuleDocSection",
    "Section",
    "SymbolEntry",
    "doc_examples",
    "name_to_id",
]
