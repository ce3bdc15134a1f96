"""Shared fixtures for building throwaway content source trees.

Tests describe a site as a mapping of relative paths to file contents and let
``write_tree`` materialize it under ``tmp_path``. The ``site_dir`` fixture
provides the smallest valid site (home and not-found pages only) so each test
only adds the files it cares about.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

NOW = dt.datetime(2024, 5, 1, 12, 0, 0, tzinfo=dt.UTC)


def write_tree(root: Path, files: cabc.Mapping[str, str]) -> None:
    """Write each ``relative path -> text`` entry below ``root``."""
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")


@pytest.fixture
def now() -> dt.datetime:
    """Return the fixed clock used across temporal tests."""
    return NOW


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Return a source directory containing only the required pages."""
    source = tmp_path / "site"
    write_tree(
        source,
        {
            "contents/pages/home.md": """
                ---
                title: Home
                ---
                Welcome.
            """,
            "contents/pages/404.md": """
                ---
                title: Not found
                ---
                Nothing here.
            """,
        },
    )
    return source


@pytest.fixture
def make_tree() -> cabc.Callable[[Path, cabc.Mapping[str, str]], None]:
    """Return :func:`write_tree` so tests can add files to a source tree."""
    return write_tree
