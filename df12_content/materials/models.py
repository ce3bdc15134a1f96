"""Dataclasses describing loaded content items and the aggregate tree."""

from __future__ import annotations

import collections.abc as cabc  # noqa: TC003 - used for runtime type metadata
import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(slots=True, frozen=True)
class Hreflang:
    """Alternate-language link for a content item."""

    lang: str
    url: str


@dc.dataclass(slots=True, frozen=True)
class Material:
    """One normalized content item ready for rendering.

    Attributes
    ----------
    id : str
        File name of the markdown source without its extension.
    path : Path
        Location of the markdown source.
    slug : str
        Normalized site-relative identifier, including any category prefix.
    title : str
        Title from front matter, or an empty string.
    description : str
        Description from front matter, or an empty string.
    image : str | None
        Cover image, kept only when the file exists in the assets folder.
    draft : bool
        Always ``False`` for loaded items; drafts never materialize.
    publication : datetime
        Effective publication time (UTC).
    expiration : datetime | None
        Expiration time (UTC), when configured.
    css : tuple[str, ...]
        Stylesheets to include; an auto-detected ``style.css`` comes first.
    js : tuple[str, ...]
        Scripts to include; an auto-detected ``main.js`` comes first.
    template : str
        Template identifier used by the renderer.
    assets_path : str
        Assets folder name relative to the item's directory.
    last_modification : datetime
        Modification time of the markdown source (UTC).
    redirects : tuple[str, ...]
        Legacy paths that should redirect to this item.
    user_defined : Mapping[str, Any]
        Front matter without reserved keys, plus any explicit
        ``userDefined`` mapping.
    data : tuple[Mapping[str, Any], ...]
        Records from the companion ``<id>.data.yaml`` file.
    front_matter : Mapping[str, Any]
        Merged front matter as parsed, as a read-only view.
    markdown : str
        Document body with the front matter block removed.
    assets : tuple[str, ...]
        Files found in the assets folder, relative to it.
    noindex : bool
        Whether search engines should skip the item.
    canonical : str | None
        Preferred URL for duplicate content.
    hreflang : tuple[Hreflang, ...] | None
        Alternate-language links; ``None`` when the key is absent and an
        empty tuple when it was given without valid entries.
    """

    id: str
    path: Path
    slug: str
    title: str
    description: str
    image: str | None
    draft: bool
    publication: dt.datetime
    expiration: dt.datetime | None
    css: tuple[str, ...]
    js: tuple[str, ...]
    template: str
    assets_path: str
    last_modification: dt.datetime
    redirects: tuple[str, ...]
    user_defined: cabc.Mapping[str, typ.Any]
    data: tuple[cabc.Mapping[str, typ.Any], ...]
    front_matter: cabc.Mapping[str, typ.Any]
    markdown: str
    assets: tuple[str, ...]
    noindex: bool = False
    canonical: str | None = None
    hreflang: tuple[Hreflang, ...] | None = None

    def with_slug(self, slug: str) -> Material:
        """Return a copy of the material using ``slug``."""
        return dc.replace(self, slug=slug)


@dc.dataclass(slots=True, frozen=True)
class Diagnostic:
    """A collection item that was dropped while scanning.

    Only ``path`` and ``message`` take part in equality so repeated runs over
    the same input compare equal.
    """

    path: Path
    message: str
    error: Exception = dc.field(compare=False, repr=False)


@dc.dataclass(slots=True, frozen=True)
class MainPages:
    home: Material
    not_found: Material


@dc.dataclass(slots=True, frozen=True)
class BlogPages:
    home: Material | None = None
    authors: Material | None = None
    tags: Material | None = None
    posts: Material | None = None


@dc.dataclass(slots=True, frozen=True)
class DocsPages:
    home: Material | None = None
    categories: Material | None = None
    guides: Material | None = None


@dc.dataclass(slots=True, frozen=True)
class Pages:
    """Singleton pages plus the custom page collection."""

    main: MainPages
    blog: BlogPages
    docs: DocsPages
    custom: tuple[Material, ...] = ()


@dc.dataclass(slots=True, frozen=True)
class Blog:
    authors: tuple[Material, ...] = ()
    tags: tuple[Material, ...] = ()
    posts: tuple[Material, ...] = ()


@dc.dataclass(slots=True, frozen=True)
class Docs:
    categories: tuple[Material, ...] = ()
    guides: tuple[Material, ...] = ()


@dc.dataclass(slots=True, frozen=True)
class MaterialsTree:
    """Every content item loaded in one generation run.

    Attributes
    ----------
    pages : Pages
        Home, not-found, and overview pages alongside custom pages.
    blog : Blog
        Author, tag, and post collections.
    docs : Docs
        Category and guide collections.
    now : datetime
        Clock value the run was evaluated against.
    diagnostics : tuple[Diagnostic, ...]
        Collection items dropped because they failed to load.
    """

    pages: Pages
    blog: Blog
    docs: Docs
    now: dt.datetime
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def dropped(self) -> int:
        return len(self.diagnostics)

    def collections(self) -> dict[str, tuple[Material, ...]]:
        """Return each repeated collection keyed by its configuration name."""
        return {
            "pages.custom": self.pages.custom,
            "blog.authors": self.blog.authors,
            "blog.tags": self.blog.tags,
            "blog.posts": self.blog.posts,
            "docs.categories": self.docs.categories,
            "docs.guides": self.docs.guides,
        }

    def singletons(self) -> dict[str, Material | None]:
        """Return each singleton page keyed by its configuration name."""
        return {
            "main.home": self.pages.main.home,
            "main.not_found": self.pages.main.not_found,
            "blog.home": self.pages.blog.home,
            "blog.authors": self.pages.blog.authors,
            "blog.tags": self.pages.blog.tags,
            "blog.posts": self.pages.blog.posts,
            "docs.home": self.pages.docs.home,
            "docs.categories": self.pages.docs.categories,
            "docs.guides": self.pages.docs.guides,
        }

    def materials(self) -> cabc.Iterator[Material]:
        """Yield every loaded item, singleton pages first."""
        for material in self.singletons().values():
            if material is not None:
                yield material
        for items in self.collections().values():
            yield from items


__all__ = [
    "Blog",
    "BlogPages",
    "Diagnostic",
    "Docs",
    "DocsPages",
    "Hreflang",
    "MainPages",
    "Material",
    "MaterialsTree",
    "Pages",
]
