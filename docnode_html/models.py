"""Typed dataclasses describing the documentation graph consumed by renderers."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class DocGraphError(ValueError):
    """Raised when a documentation graph violates its structural invariants."""


class SymbolKind(enum.StrEnum):
    """Kinds of documented declarations."""

    MODULE_DOC = "module_doc"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    ENUM = "enum"
    VARIABLE = "variable"
    NAMESPACE = "namespace"
    IMPORT = "import"

    @property
    def section_title(self) -> str:
        """Return the plural section heading used when grouping symbols."""
        return _KIND_TITLES[self]


_KIND_TITLES: dict[SymbolKind, str] = {
    SymbolKind.MODULE_DOC: "Module",
    SymbolKind.FUNCTION: "Functions",
    SymbolKind.CLASS: "Classes",
    SymbolKind.INTERFACE: "Interfaces",
    SymbolKind.TYPE_ALIAS: "Type Aliases",
    SymbolKind.ENUM: "Enums",
    SymbolKind.VARIABLE: "Variables",
    SymbolKind.NAMESPACE: "Namespaces",
    SymbolKind.IMPORT: "Imports",
}


@dc.dataclass(frozen=True, slots=True)
class ModulePath:
    """Stable identifier for one documented module.

    Attributes
    ----------
    path : str
        Path-like key of the module, unique within a :class:`DocGraph`.
    display_name : str
        Human-readable name; defaults to ``path`` without a leading ``./`` or
        ``/``.
    is_main : bool
        Whether the module is the package's main entrypoint.
    """

    path: str
    display_name: str = ""
    is_main: bool = False

    def __post_init__(self) -> None:
        """Derive the display name from the path when none was supplied."""
        if not self.display_name:
            name = self.path.removeprefix("./").lstrip("/")
            object.__setattr__(self, "display_name", name or self.path)


@dc.dataclass(frozen=True, slots=True)
class DocTag:
    """A single documentation-comment tag such as ``@deprecated`` or ``@example``.

    Attributes
    ----------
    kind : str
        Tag keyword without the ``@`` prefix.
    value : str or None
        Free-text payload of the tag.
    name : str or None
        Optional tag subject (for example the parameter name of ``@param``).
    """

    kind: str
    value: str | None = None
    name: str | None = None


@dc.dataclass(frozen=True, slots=True)
class DocComment:
    """Optional markdown body plus the ordered tags of a documentation comment."""

    doc: str | None = None
    tags: tuple[DocTag, ...] = ()

    @property
    def deprecated(self) -> DocTag | None:
        """Return the first ``@deprecated`` tag, if any."""
        return next((tag for tag in self.tags if tag.kind == "deprecated"), None)

    @property
    def examples(self) -> list[str]:
        """Return the markdown of every ``@example`` tag in declaration order."""
        return [tag.value or "" for tag in self.tags if tag.kind == "example"]


@dc.dataclass(frozen=True, slots=True)
class DocSymbol:
    """One exported declaration with its attached documentation comment."""

    name: str
    kind: SymbolKind
    doc: DocComment = dc.field(default_factory=DocComment)
    qualified_name: str = ""

    def __post_init__(self) -> None:
        """Default the qualified name to the plain symbol name."""
        if not self.qualified_name:
            object.__setattr__(self, "qualified_name", self.name)


class DocGraph:
    """Insertion-ordered mapping from :class:`ModulePath` to documented symbols.

    The order of modules and of the symbols within each module is the display
    order used by renderers. Module paths must be unique.

    Examples
    --------
    >>> graph = DocGraph([(ModulePath("mod.ts"), [DocSymbol("foo", SymbolKind.FUNCTION)])])
    >>> graph.find_module("mod.ts").display_name
    'mod.ts'
    """

    __slots__ = ("_modules",)

    def __init__(
        self,
        modules: cabc.Iterable[tuple[ModulePath, cabc.Iterable[DocSymbol]]] = (),
    ) -> None:
        self._modules: dict[ModulePath, tuple[DocSymbol, ...]] = {}
        seen: set[str] = set()
        for module, symbols in modules:
            if module.path in seen:
                msg = f"Duplicate module '{module.path}' in documentation graph."
                raise DocGraphError(msg)
            seen.add(module.path)
            self._modules[module] = tuple(symbols)

    def __iter__(self) -> cabc.Iterator[tuple[ModulePath, tuple[DocSymbol, ...]]]:
        return iter(self._modules.items())

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module: object) -> bool:
        return module in self._modules

    def __getitem__(self, module: ModulePath) -> tuple[DocSymbol, ...]:
        return self._modules[module]

    def get(self, module: ModulePath) -> tuple[DocSymbol, ...] | None:
        """Return the symbols of ``module`` or ``None`` when it is unknown."""
        return self._modules.get(module)

    @property
    def modules(self) -> list[ModulePath]:
        """Return module identifiers in insertion order."""
        return list(self._modules)

    def find_module(self, name: str) -> ModulePath | None:
        """Return the first module whose path or display name equals ``name``."""
        return next(
            (
                module
                for module in self._modules
                if name in (module.path, module.display_name)
            ),
            None,
        )

    def find_symbol(self, module: ModulePath, qualified_name: str) -> DocSymbol | None:
        """Return the symbol of ``module`` with an exact qualified-name match."""
        return next(
            (
                symbol
                for symbol in self._modules.get(module, ())
                if symbol.qualified_name == qualified_name
            ),
            None,
        )


__all__ = [
    "DocComment",
    "DocGraph",
    "DocGraphError",
    "DocSymbol",
    "DocTag",
    "ModulePath",
    "SymbolKind",
]
