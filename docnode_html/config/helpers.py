"""Builders turning raw YAML mappings into documentation graph objects."""

from __future__ import annotations

import typing as typ

from ..models import DocComment, DocSymbol, DocTag, ModulePath, SymbolKind
from .models import RenderConfigError, normalize_module_path


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_tags(raw: object, owner: str) -> tuple[DocTag, ...]:
    """Build the ordered tags of one documentation comment."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        msg = f"Tags of '{owner}' must be a list."
        raise RenderConfigError(msg)
    tags: list[DocTag] = []
    for entry in raw:
        match entry:
            case {"kind": str(kind), **rest}:
                value = rest.get("value")
                tags.append(
                    DocTag(
                        kind=kind,
                        value=None if value is None else str(value),
                        name=_optional_str(rest.get("name")),
                    )
                )
            case _:
                msg = f"Each tag of '{owner}' needs a 'kind'."
                raise RenderConfigError(msg)
    return tuple(tags)


def _build_symbol(payload: typ.Mapping[str, typ.Any], module: str) -> DocSymbol:
    """Build a DocSymbol from one entry of a module's ``symbols`` list."""
    name = _optional_str(payload.get("name"))
    if name is None:
        msg = f"Symbol in module '{module}' is missing 'name'."
        raise RenderConfigError(msg)
    raw_kind = payload.get("kind", SymbolKind.FUNCTION.value)
    try:
        kind = SymbolKind(raw_kind)
    except ValueError as exc:
        known = ", ".join(kind.value for kind in SymbolKind)
        msg = f"Symbol '{name}' has unknown kind '{raw_kind}'. Known kinds: {known}"
        raise RenderConfigError(msg) from exc
    doc = payload.get("doc")
    return DocSymbol(
        name=name,
        kind=kind,
        doc=DocComment(
            doc=None if doc is None else str(doc),
            tags=_build_tags(payload.get("tags"), name),
        ),
        qualified_name=_optional_str(payload.get("qualified_name")) or "",
    )


def _build_module(
    payload: typ.Mapping[str, typ.Any],
) -> tuple[ModulePath, list[DocSymbol]]:
    """Build a module identifier and its symbols from one ``modules`` entry."""
    path = _optional_str(payload.get("path"))
    if path is None:
        msg = "Module entry is missing 'path'."
        raise RenderConfigError(msg)
    normalized = normalize_module_path(path)
    if normalized in ("", ".") or normalized.split("/", 1)[0] == "..":
        msg = f"Module path '{path}' must stay inside the output directory."
        raise RenderConfigError(msg)
    module = ModulePath(
        path=normalized,
        display_name=_optional_str(payload.get("display_name")) or "",
        is_main=bool(payload.get("main", False)),
    )
    symbols_raw = payload.get("symbols") or []
    if not isinstance(symbols_raw, list):
        msg = f"Symbols of module '{path}' must be a list."
        raise RenderConfigError(msg)
    symbols: list[DocSymbol] = []
    for entry in symbols_raw:
        match entry:
            case dict():
                symbols.append(_build_symbol(entry, path))
            case _:
                msg = f"Symbol entries of module '{path}' must be mappings."
                raise RenderConfigError(msg)
    return module, symbols
