"""Turn one markdown source and its companion files into a :class:`Material`.

A content item is a markdown file with optional siblings sharing its id:

* ``<id>.yaml`` or ``<id>.yml``: front matter overrides, deep-merged over the
  document's own header (the first file found wins).
* ``<id>.data.yaml`` / ``<id>.data.yml``: an ordered list of records.
* ``<id>/`` (or the folder named by ``assets.path``): assets, with
  ``style.css`` and ``main.js`` picked up automatically.

:class:`MaterialAssembler` resolves all of that against a fixed clock. Missing
companions simply mean the feature is absent; anything malformed is raised as
:class:`~df12_content.materials.errors.MaterialError`.

Example
-------
>>> import datetime as dt
>>> from pathlib import Path
>>> from df12_content.materials import MaterialAssembler
>>> assembler = MaterialAssembler(now=dt.datetime.now(dt.UTC))
>>> material = assembler.assemble(
...     Path("contents/blog/posts/hello.md"),
...     root=Path("contents/blog/posts"),
...     slug_prefix="posts",
...     template="blog.single.post",
... )  # doctest: +SKIP
>>> material.slug  # doctest: +SKIP
'posts/hello'
"""

from __future__ import annotations

import datetime as dt
import logging
import types
import typing as typ
from pathlib import Path

from .._constants import (
    COMPANION_SUFFIXES,
    DATA_SUFFIXES,
    DEFAULT_DATE_FORMAT,
    RESERVED_FRONT_MATTER_KEYS,
    SCRIPT_ASSET,
    STYLE_ASSET,
)
from ..front_matter import (
    FrontMatter,
    FrontMatterParser,
    ParseError,
    merge_front_matter,
    strip_front_matter,
)
from ..paths import first_existing, resolve_item_path, safe_slug
from ..temporal import TemporalFilter
from .errors import MaterialError
from .models import Hreflang, Material

logger = logging.getLogger(__name__)


class MaterialAssembler:
    """Build normalized materials from markdown files on disk."""

    def __init__(
        self,
        *,
        now: dt.datetime,
        parser: FrontMatterParser | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        recursive_assets: bool = True,
    ) -> None:
        """Initialize the assembler.

        Parameters
        ----------
        now : datetime
            Clock value captured at the start of the run; every item is
            filtered against it.
        parser : FrontMatterParser, optional
            Parser used for headers and companion files.
        date_format : str, optional
            ``strptime`` format for publication and expiration dates.
        recursive_assets : bool, optional
            Whether asset enumeration descends into subdirectories.
        """
        self.parser = parser or FrontMatterParser()
        self.temporal_filter = TemporalFilter(now, date_format=date_format)
        self.recursive_assets = recursive_assets

    def assemble(
        self,
        path: Path,
        *,
        root: Path,
        slug_prefix: str | None = None,
        template: str,
    ) -> Material | None:
        """Return the material for ``path`` or ``None`` when it is not visible.

        Parameters
        ----------
        path : Path
            Markdown source file.
        root : Path
            Root folder of the item's category; the default slug is the path
            relative to it.
        slug_prefix : str, optional
            Prefix prepended to the normalized slug.
        template : str
            Template used when the front matter does not name one.

        Returns
        -------
        Material | None
            ``None`` when the file does not exist or the item is a draft,
            scheduled for later, or expired.

        Raises
        ------
        MaterialError
            If the document or a companion file cannot be read or parsed.
        """
        if not path.is_file():
            return None
        try:
            return self._assemble(
                path, root=root, slug_prefix=slug_prefix, template=template
            )
        except MaterialError:
            raise
        except (OSError, ParseError, UnicodeDecodeError) as exc:
            raise MaterialError(path, str(exc)) from exc

    def _assemble(
        self,
        path: Path,
        *,
        root: Path,
        slug_prefix: str | None,
        template: str,
    ) -> Material | None:
        item = resolve_item_path(path, root)
        raw_markdown = path.read_text(encoding="utf-8")
        front_matter = self._load_front_matter(raw_markdown, item.directory, item.id)
        data = self._load_data(item.directory, item.id)

        meta = FrontMatter(front_matter)
        visibility = self.temporal_filter.evaluate(meta)
        if not visibility.included:
            logger.debug("Skipping %s: %s", path, visibility.reason)
            return None

        slug = meta.non_empty_string("slug") or item.default_slug
        assets_path = meta.non_empty_string("assets.path") or item.id
        assets_dir = item.directory / assets_path

        return Material(
            id=item.id,
            path=path,
            slug=safe_slug(slug, prefix=slug_prefix),
            title=meta.string("title") or "",
            description=meta.string("description") or "",
            image=self._resolve_image(meta, assets_dir),
            draft=visibility.draft,
            publication=visibility.publication,
            expiration=visibility.expiration,
            css=self._includes(meta, "css", assets_dir, assets_path, STYLE_ASSET),
            js=self._includes(meta, "js", assets_dir, assets_path, SCRIPT_ASSET),
            template=meta.non_empty_string("template") or template,
            assets_path=assets_path,
            last_modification=dt.datetime.fromtimestamp(
                path.stat().st_mtime, tz=dt.UTC
            ),
            redirects=tuple(meta.string_list("redirects.from") or ()),
            user_defined=types.MappingProxyType(_user_defined(meta)),
            data=tuple(types.MappingProxyType(record) for record in data),
            front_matter=types.MappingProxyType(front_matter),
            markdown=strip_front_matter(raw_markdown),
            assets=self._list_assets(assets_dir),
            noindex=meta.boolean("noindex") or False,
            canonical=meta.non_empty_string("canonical"),
            hreflang=_hreflang(meta),
        )

    def _load_front_matter(
        self, raw_markdown: str, directory: Path, item_id: str
    ) -> dict[str, typ.Any]:
        front_matter = self.parser.parse(raw_markdown)
        companion = first_existing(directory, item_id, COMPANION_SUFFIXES)
        if companion is None:
            return front_matter
        override = self.parser.load_mapping(companion.read_text(encoding="utf-8"))
        return merge_front_matter(front_matter, override)

    def _load_data(self, directory: Path, item_id: str) -> list[dict[str, typ.Any]]:
        data_file = first_existing(directory, item_id, DATA_SUFFIXES)
        if data_file is None:
            return []
        try:
            return self.parser.load_records(data_file.read_text(encoding="utf-8"))
        except ParseError as exc:
            raise MaterialError(data_file, str(exc)) from exc

    @staticmethod
    def _resolve_image(meta: FrontMatter, assets_dir: Path) -> str | None:
        image = meta.non_empty_string("image")
        if image is None or not (assets_dir / image).is_file():
            return None
        return image

    @staticmethod
    def _includes(
        meta: FrontMatter,
        key: str,
        assets_dir: Path,
        assets_path: str,
        detected: str,
    ) -> tuple[str, ...]:
        explicit = tuple(meta.string_list(key) or ())
        if (assets_dir / detected).is_file():
            return (f"./{assets_path}/{detected}", *explicit)
        return explicit

    def _list_assets(self, assets_dir: Path) -> tuple[str, ...]:
        if not assets_dir.is_dir():
            return ()
        if self.recursive_assets:
            candidates = assets_dir.rglob("*")
        else:
            candidates = assets_dir.iterdir()
        return tuple(
            sorted(
                path.relative_to(assets_dir).as_posix()
                for path in candidates
                if path.is_file()
            )
        )


def _user_defined(meta: FrontMatter) -> dict[str, typ.Any]:
    """Return front matter minus reserved keys plus any ``userDefined`` map."""
    remaining = {
        key: value
        for key, value in meta.raw.items()
        if key not in RESERVED_FRONT_MATTER_KEYS
    }
    return merge_front_matter(remaining, meta.mapping("userDefined") or {})


def _hreflang(meta: FrontMatter) -> tuple[Hreflang, ...] | None:
    """Return valid ``{lang, url}`` entries, or ``None`` when the key is absent."""
    if "hreflang" not in meta:
        return None
    entries: list[Hreflang] = []
    for record in meta.records("hreflang") or []:
        lang = record.get("lang")
        url = record.get("url")
        if isinstance(lang, str) and lang and isinstance(url, str) and url:
            entries.append(Hreflang(lang=lang, url=url))
    return tuple(entries)


__all__ = ["MaterialAssembler"]
