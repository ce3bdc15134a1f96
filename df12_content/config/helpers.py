"""Utility helpers shared by the source configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import CollectionConfig, PageConfig, SourceConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flatten_sections(
    payload: cabc.Mapping[str, typ.Any] | None, *, option: str
) -> dict[str, cabc.Mapping[str, typ.Any]]:
    """Flatten ``{section: {name: {...}}}`` into ``{"section.name": {...}}``."""
    if not payload:
        return {}
    if not isinstance(payload, cabc.Mapping):
        msg = f"'{option}' must be a mapping."
        raise SourceConfigError(msg)
    flattened: dict[str, cabc.Mapping[str, typ.Any]] = {}
    for section, entries in payload.items():
        if not isinstance(entries, cabc.Mapping):
            msg = f"'{option}.{section}' must be a mapping."
            raise SourceConfigError(msg)
        for name, entry in entries.items():
            if not isinstance(entry, cabc.Mapping):
                msg = f"'{option}.{section}.{name}' must be a mapping."
                raise SourceConfigError(msg)
            flattened[f"{section}.{name}"] = entry
    return flattened


def _merge_page(
    key: str, base: PageConfig | None, override: cabc.Mapping[str, typ.Any]
) -> PageConfig:
    """Merge an override mapping into the default page definition."""
    path = _optional_str(override.get("path")) or (base.path if base else None)
    template = _optional_str(override.get("template")) or (
        base.template if base else key
    )
    if not path:
        msg = f"Page '{key}' is missing 'path'."
        raise SourceConfigError(msg)
    return PageConfig(path=path, template=template)


def _merge_collection(
    key: str, base: CollectionConfig | None, override: cabc.Mapping[str, typ.Any]
) -> CollectionConfig:
    """Merge an override mapping into the default collection definition."""
    folder = _optional_str(override.get("folder")) or (base.folder if base else None)
    if not folder:
        msg = f"Collection '{key}' is missing 'folder'."
        raise SourceConfigError(msg)
    if "slug_prefix" in override:
        slug_prefix = _optional_str(override.get("slug_prefix"))
    else:
        slug_prefix = base.slug_prefix if base else None
    template = _optional_str(override.get("template")) or (
        base.template if base else key
    )
    return CollectionConfig(folder=folder, slug_prefix=slug_prefix, template=template)


__all__ = [
    "_flatten_sections",
    "_merge_collection",
    "_merge_page",
    "_optional_str",
]
