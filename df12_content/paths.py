"""Derive item identity and slugs from content file locations.

Every content item is addressed by where its markdown file sits relative to
the root folder of its category. :func:`resolve_item_path` turns that location
into an :class:`ItemPath` without touching the filesystem; :func:`safe_slug`
normalizes user supplied or derived slugs into lowercase, URL-safe paths.

Examples
--------
>>> from pathlib import Path
>>> item = resolve_item_path(
...     Path("blog/authors/jane-doe.md"), Path("blog/authors")
... )
>>> item.id, item.default_slug
('jane-doe', 'jane-doe')
>>> safe_slug(item.default_slug, prefix="authors")
'authors/jane-doe'
"""

from __future__ import annotations

import dataclasses as dc
import os
import re
import typing as typ
from pathlib import Path

from ._constants import MARKDOWN_SUFFIXES

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_UNSAFE_SLUG_CHARS = re.compile(r"[^a-z0-9._-]+")


@dc.dataclass(slots=True, frozen=True)
class ItemPath:
    """Identity of a content item derived from its file location.

    Attributes
    ----------
    id : str
        File name without its final extension.
    default_slug : str
        Path relative to the category root joined with ``/``, extension
        stripped. Equals ``id`` for files placed directly in the root.
    directory : Path
        Folder containing the markdown file; companion files and the assets
        folder are resolved against it.
    """

    id: str
    default_slug: str
    directory: Path


def _drop_extension(name: str) -> str:
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def resolve_item_path(path: Path, root: Path) -> ItemPath:
    """Return the :class:`ItemPath` for ``path`` inside the category ``root``.

    Parameters
    ----------
    path : Path
        Location of the markdown file.
    root : Path
        Root folder of the category the file belongs to.

    Returns
    -------
    ItemPath
        Identity, default slug, and containing directory of the item.
    """
    item_id = _drop_extension(path.name)
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = ()
    default_slug = _drop_extension("/".join(parts)) if parts else item_id
    return ItemPath(id=item_id, default_slug=default_slug, directory=path.parent)


def _normalize_segment(segment: str) -> str:
    lowered = _UNSAFE_SLUG_CHARS.sub("-", segment.strip().lower()).strip("-")
    # Dot-only segments are relative path steps, not names.
    return lowered if lowered.strip(".") else ""


def safe_slug(slug: str, *, prefix: str | None = None) -> str:
    """Lowercase ``slug``, replace unsafe characters, and apply ``prefix``.

    Runs of characters outside ``[a-z0-9._-]`` become a single hyphen within
    each ``/`` separated segment; empty segments and segments made only of
    dots are dropped.
    """
    segments = [_normalize_segment(part) for part in slug.split("/")]
    normalized = "/".join(part for part in segments if part)
    if not prefix:
        return normalized
    head = safe_slug(prefix)
    if not head:
        return normalized
    return f"{head}/{normalized}" if normalized else head


def markdown_path_for(base: Path) -> Path:
    """Return ``base.md`` when it exists, otherwise ``base.markdown``."""
    for suffix in MARKDOWN_SUFFIXES:
        candidate = base.with_name(base.name + suffix)
        if candidate.is_file():
            return candidate
    return base.with_name(base.name + MARKDOWN_SUFFIXES[-1])


def first_existing(
    directory: Path, item_id: str, suffixes: cabc.Iterable[str]
) -> Path | None:
    """Return the first ``<item_id><suffix>`` file present in ``directory``."""
    for suffix in suffixes:
        candidate = directory / f"{item_id}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def iter_markdown_files(root: Path) -> list[Path]:
    """Return every markdown file below ``root`` in a stable order.

    Raises
    ------
    OSError
        If ``root`` exists but cannot be listed.
    """
    # rglob ignores permission errors, so probe the root explicitly.
    with os.scandir(root):
        pass
    return sorted(
        path
        for path in root.rglob("*")
        if path.suffix in MARKDOWN_SUFFIXES and path.is_file()
    )


__all__ = [
    "ItemPath",
    "first_existing",
    "iter_markdown_files",
    "markdown_path_for",
    "resolve_item_path",
    "safe_slug",
]
