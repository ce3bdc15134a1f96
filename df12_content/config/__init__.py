"""Load and validate the content source configuration for df12 builds.

This subpackage parses an optional ``config.yaml`` in the source directory,
merges it over built-in defaults for every singleton page and collection, and
produces a :class:`SourceConfig` that the content loader consumes.

Examples
--------
>>> from pathlib import Path
>>> from df12_content.config import load_source_config
>>> config = load_source_config(Path("site"))  # doctest: +SKIP
>>> config.get_page("main.home").path  # doctest: +SKIP
'pages/home'
"""

from .loader import build_source_config, load_source_config
from .models import CollectionConfig, PageConfig, SourceConfig, SourceConfigError

__all__ = [
    "CollectionConfig",
    "PageConfig",
    "SourceConfig",
    "SourceConfigError",
    "build_source_config",
    "load_source_config",
]
