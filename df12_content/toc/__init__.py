"""Build navigation trees from the headings of a markdown document."""

from .builder import build_toc_tree, insert_entry
from .extension import (
    TableOfContentsExtension,
    TableOfContentsTreeprocessor,
    build_toc,
    extract_toc_entries,
)
from .models import TocEntry, TocNode
from .visitor import HeadingVisitor, heading_text, slugify_fragment

__all__ = [
    "HeadingVisitor",
    "TableOfContentsExtension",
    "TableOfContentsTreeprocessor",
    "TocEntry",
    "TocNode",
    "build_toc",
    "build_toc_tree",
    "extract_toc_entries",
    "heading_text",
    "insert_entry",
    "slugify_fragment",
]
