"""Load the content source configuration YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import DEFAULT_CONFIG_FILE
from .helpers import _flatten_sections, _merge_collection, _merge_page, _optional_str
from .models import SourceConfig, SourceConfigError

_CONTENT_OPTIONS = frozenset({"folder", "date_format", "recursive_assets"})


def load_source_config(
    source_dir: Path, config_path: Path | None = None
) -> SourceConfig:
    """Load the YAML configuration describing where content lives.

    Parameters
    ----------
    source_dir : Path
        Root directory of the site sources.
    config_path : Path, optional
        Explicit configuration file. When omitted, ``config.yaml`` inside
        ``source_dir`` is used if present, otherwise built-in defaults apply.

    Returns
    -------
    SourceConfig
        Parsed configuration with defaults filled in for every page and
        collection that the file does not override.

    Raises
    ------
    FileNotFoundError
        If ``config_path`` is given but does not exist.
    SourceConfigError
        If the YAML structure is not a mapping, names unknown pages or
        collections, or leaves a required path empty.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from df12_content.config import load_source_config
    >>> config = load_source_config(Path("site"))  # doctest: +SKIP
    >>> config.get_collection("blog.posts").slug_prefix  # doctest: +SKIP
    'posts'
    """
    if config_path is None:
        candidate = source_dir / DEFAULT_CONFIG_FILE
        if not candidate.exists():
            return SourceConfig(source_dir=source_dir)
        config_path = candidate
    elif not config_path.exists():
        msg = f"Configuration file '{config_path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with config_path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SourceConfigError(msg)
    return build_source_config(source_dir, loaded)


def build_source_config(
    source_dir: Path, raw: cabc.Mapping[str, typ.Any]
) -> SourceConfig:
    """Build a :class:`SourceConfig` from an already parsed mapping."""
    config = SourceConfig(source_dir=source_dir)
    contents = raw.get("contents") or {}
    if not isinstance(contents, cabc.Mapping):
        msg = "'contents' must be a mapping."
        raise SourceConfigError(msg)

    config.contents_folder = _optional_str(contents.get("folder")) or (
        config.contents_folder
    )
    config.date_format = _optional_str(contents.get("date_format")) or (
        config.date_format
    )
    recursive = contents.get("recursive_assets", config.recursive_assets)
    if not isinstance(recursive, bool):
        msg = "'contents.recursive_assets' must be a boolean."
        raise SourceConfigError(msg)
    config.recursive_assets = recursive

    collections_raw = {
        key: value for key, value in contents.items() if key not in _CONTENT_OPTIONS
    }
    for key, payload in _flatten_sections(collections_raw, option="contents").items():
        if key not in config.collections:
            msg = f"Unknown collection 'contents.{key}'."
            raise SourceConfigError(msg)
        config.collections[key] = _merge_collection(
            key, config.collections[key], payload
        )

    for key, payload in _flatten_sections(raw.get("pages"), option="pages").items():
        if key not in config.pages:
            msg = f"Unknown page 'pages.{key}'."
            raise SourceConfigError(msg)
        config.pages[key] = _merge_page(key, config.pages[key], payload)
    return config


__all__ = ["build_source_config", "load_source_config"]
