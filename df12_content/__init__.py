"""Load df12 markdown content into a normalized in-memory tree.

This package reads a directory of markdown documents and their companion
metadata, filters drafts and scheduled or expired items, and hands the
resulting :class:`~df12_content.materials.MaterialsTree` to the site renderer.
It also builds per-document navigation trees from headings.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``ContentTreeLoader``: loads every configured page and collection.
- ``load_source_config``: reads the optional ``config.yaml``.
- ``build_toc``: returns the table-of-contents forest for markdown text.

Examples
--------
>>> from pathlib import Path
>>> from df12_content import ContentTreeLoader, load_source_config
>>> tree = ContentTreeLoader(load_source_config(Path("site"))).load()  # doctest: +SKIP
>>> from df12_content import build_toc
>>> [node.fragment for node in build_toc("## Getting started")]
['getting-started']
"""

from __future__ import annotations

from .cli import app, main
from .config import load_source_config
from .materials import ContentTreeLoader
from .toc import build_toc

__all__ = ["ContentTreeLoader", "app", "build_toc", "load_source_config", "main"]
