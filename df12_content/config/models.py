"""Typed dataclasses describing the content source configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import (
    DEFAULT_COLLECTIONS,
    DEFAULT_CONTENTS_FOLDER,
    DEFAULT_DATE_FORMAT,
    DEFAULT_PAGES,
)


class SourceConfigError(ValueError):
    """Raised when the source configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PageConfig:
    """Location and template of a singleton page such as the home page."""

    path: str
    template: str


@dc.dataclass(slots=True)
class CollectionConfig:
    """Folder, slug prefix, and fallback template of a repeated collection."""

    folder: str
    slug_prefix: str | None
    template: str


def _default_pages() -> dict[str, PageConfig]:
    return {
        key: PageConfig(path=path, template=template)
        for key, (path, template) in DEFAULT_PAGES.items()
    }


def _default_collections() -> dict[str, CollectionConfig]:
    return {
        key: CollectionConfig(folder=folder, slug_prefix=prefix, template=template)
        for key, (folder, prefix, template) in DEFAULT_COLLECTIONS.items()
    }


@dc.dataclass(slots=True)
class SourceConfig:
    """Resolved configuration for loading a content source directory.

    Attributes
    ----------
    source_dir : Path
        Root of the site sources.
    contents_folder : str
        Content root relative to ``source_dir``.
    date_format : str
        ``strptime`` format used for publication and expiration dates.
    recursive_assets : bool
        Whether asset enumeration descends into subdirectories.
    pages : dict[str, PageConfig]
        Singleton pages keyed by dotted name (``main.home``).
    collections : dict[str, CollectionConfig]
        Repeated collections keyed by dotted name (``blog.posts``).
    """

    source_dir: Path
    contents_folder: str = DEFAULT_CONTENTS_FOLDER
    date_format: str = DEFAULT_DATE_FORMAT
    recursive_assets: bool = True
    pages: dict[str, PageConfig] = dc.field(default_factory=_default_pages)
    collections: dict[str, CollectionConfig] = dc.field(
        default_factory=_default_collections
    )

    @property
    def contents_dir(self) -> Path:
        return self.source_dir / self.contents_folder

    def get_page(self, key: str) -> PageConfig:
        """Return the singleton page configured under ``key``."""
        try:
            return self.pages[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.pages))
            msg = f"Unknown page '{key}'. Known pages: {available}"
            raise SourceConfigError(msg) from exc

    def get_collection(self, key: str) -> CollectionConfig:
        """Return the collection configured under ``key``."""
        try:
            return self.collections[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.collections))
            msg = f"Unknown collection '{key}'. Known collections: {available}"
            raise SourceConfigError(msg) from exc


__all__ = ["CollectionConfig", "PageConfig", "SourceConfig", "SourceConfigError"]
