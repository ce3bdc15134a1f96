"""Load every configured page and collection into a :class:`MaterialsTree`.

:class:`ContentTreeLoader` walks the content root described by a
:class:`~df12_content.config.SourceConfig`. Singleton pages are looked up by
path; the home and not-found pages are required and abort the run when they
cannot be produced. Collections are scanned leniently: an item that fails to
load is dropped and recorded as a :class:`Diagnostic` while the rest of the
scan continues.

Example
-------
>>> from pathlib import Path
>>> from df12_content.config import load_source_config
>>> from df12_content.materials import ContentTreeLoader
>>> config = load_source_config(Path("site"))  # doctest: +SKIP
>>> tree = ContentTreeLoader(config).load()  # doctest: +SKIP
>>> [post.slug for post in tree.blog.posts]  # doctest: +SKIP
['posts/hello-world']
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

from .._constants import (
    HOME_SLUG,
    MARKDOWN_SUFFIXES,
    NOT_FOUND_SLUG,
)
from ..paths import iter_markdown_files, markdown_path_for
from .assembler import MaterialAssembler
from .errors import ContentReadError, MaterialError, MissingRequiredPageError
from .models import (
    Blog,
    BlogPages,
    Diagnostic,
    Docs,
    DocsPages,
    MainPages,
    Material,
    MaterialsTree,
    Pages,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..config import SourceConfig

logger = logging.getLogger(__name__)

_FORCED_SLUGS = {"main.home": HOME_SLUG, "main.not_found": NOT_FOUND_SLUG}


class ContentTreeLoader:
    """Resolve all singleton pages and collections of a content source."""

    def __init__(
        self, config: SourceConfig, *, now: dt.datetime | None = None
    ) -> None:
        """Initialize the loader.

        Parameters
        ----------
        config : SourceConfig
            Source configuration naming page paths and collection folders.
        now : datetime, optional
            Fixed clock for temporal filtering. When omitted, the current UTC
            time is captured once at the start of each :meth:`load` call.
        """
        self.config = config
        self.now = now

    def load(self) -> MaterialsTree:
        """Load the full content tree from a fresh filesystem snapshot.

        Returns
        -------
        MaterialsTree
            Every visible item, grouped by page and collection, plus the
            diagnostics for collection items that were dropped.

        Raises
        ------
        MissingRequiredPageError
            If the home or not-found page is absent, filtered out, or fails
            to load.
        MaterialError
            If an optional overview page exists but cannot be loaded.
        ContentReadError
            If a collection folder exists but cannot be listed.
        """
        now = self.now or dt.datetime.now(dt.UTC)
        assembler = MaterialAssembler(
            now=now,
            date_format=self.config.date_format,
            recursive_assets=self.config.recursive_assets,
        )
        run = _LoadRun(self.config, assembler)

        main = MainPages(
            home=run.required_page("main.home"),
            not_found=run.required_page("main.not_found"),
        )
        pages = Pages(
            main=main,
            blog=BlogPages(
                home=run.page("blog.home"),
                authors=run.page("blog.authors"),
                tags=run.page("blog.tags"),
                posts=run.page("blog.posts"),
            ),
            docs=DocsPages(
                home=run.page("docs.home"),
                categories=run.page("docs.categories"),
                guides=run.page("docs.guides"),
            ),
            custom=run.collection("pages.custom"),
        )
        tree = MaterialsTree(
            pages=pages,
            blog=Blog(
                authors=run.collection("blog.authors"),
                tags=run.collection("blog.tags"),
                posts=run.collection("blog.posts"),
            ),
            docs=Docs(
                categories=run.collection("docs.categories"),
                guides=run.collection("docs.guides"),
            ),
            now=now,
            diagnostics=tuple(run.diagnostics),
        )
        for key, items in tree.collections().items():
            logger.info("Loaded %d item(s) for %s", len(items), key)
        if tree.dropped:
            logger.info("Dropped %d item(s) that failed to load", tree.dropped)
        return tree


class _LoadRun:
    """State for a single :meth:`ContentTreeLoader.load` call."""

    def __init__(self, config: SourceConfig, assembler: MaterialAssembler) -> None:
        self.config = config
        self.assembler = assembler
        self.diagnostics: list[Diagnostic] = []

    def page(self, key: str) -> Material | None:
        """Return the singleton page ``key`` or ``None`` when it is absent."""
        page = self.config.get_page(key)
        base = self.config.contents_dir / page.path
        material = self.assembler.assemble(
            markdown_path_for(base), root=base, template=page.template
        )
        if material is not None and key in _FORCED_SLUGS:
            return material.with_slug(_FORCED_SLUGS[key])
        return material

    def required_page(self, key: str) -> Material:
        """Return the singleton page ``key`` or raise when it cannot be built."""
        base = self.config.contents_dir / self.config.get_page(key).path
        source = markdown_path_for(base)
        try:
            material = self.page(key)
        except MaterialError as exc:
            reason = f"failed to load ({exc})"
            raise MissingRequiredPageError(key, source, reason) from exc
        if material is None:
            if source.is_file():
                raise MissingRequiredPageError(key, source, "is not published")
            expected = base.with_name(base.name + MARKDOWN_SUFFIXES[0])
            raise MissingRequiredPageError(key, expected, "is missing")
        return material

    def collection(self, key: str) -> tuple[Material, ...]:
        """Scan the collection ``key``, dropping items that fail to load."""
        collection = self.config.get_collection(key)
        root = self.config.contents_dir / collection.folder
        if not root.is_dir():
            return ()
        try:
            sources = iter_markdown_files(root)
        except OSError as exc:
            msg = f"Cannot list collection folder '{root}': {exc}"
            raise ContentReadError(msg) from exc

        materials: list[Material] = []
        for source in sources:
            try:
                material = self.assembler.assemble(
                    source,
                    root=root,
                    slug_prefix=collection.slug_prefix,
                    template=collection.template,
                )
            except MaterialError as exc:
                self._record(source, exc)
                continue
            if material is not None:
                materials.append(material)
        return tuple(materials)

    def _record(self, path: Path, error: MaterialError) -> None:
        logger.warning("Dropping %s: %s", path, error)
        self.diagnostics.append(
            Diagnostic(path=path, message=str(error), error=error)
        )


__all__ = ["ContentTreeLoader"]
