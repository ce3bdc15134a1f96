"""Python-Markdown extension that captures a document's table of contents.

Add :class:`TableOfContentsExtension` to a ``markdown.Markdown`` instance and,
after :meth:`~markdown.Markdown.convert`, read ``md.toc_entries`` (flat list)
and ``md.toc_tree`` (nested forest). :func:`build_toc` wraps both steps for a
raw markdown document, dropping any front matter first.

Example
-------
>>> [node.text for node in build_toc("## Install\\n\\n### Linux\\n")]
['Install']
"""

from __future__ import annotations

import typing as typ

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from ..front_matter import strip_front_matter
from .builder import build_toc_tree
from .visitor import DEFAULT_LEVELS, HeadingVisitor

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from .models import TocEntry, TocNode

# Runs after the built-in "unescape" processor (priority 0).
TOC_PROCESSOR_PRIORITY = -1


class TableOfContentsExtension(Extension):
    """Record eligible headings and their nesting while converting markdown."""

    def __init__(self, levels: cabc.Iterable[int] = DEFAULT_LEVELS) -> None:
        super().__init__()
        self.levels = frozenset(levels)
        self.md: Markdown | None = None

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the ToC treeprocessor on the Markdown instance."""
        self.md = md
        md.registerExtension(self)
        self.reset()
        processor = TableOfContentsTreeprocessor(md, HeadingVisitor(self.levels))
        md.treeprocessors.register(processor, "df12_toc", TOC_PROCESSOR_PRIORITY)

    def reset(self) -> None:
        """Clear results left over from a previous conversion."""
        if self.md is not None:
            self.md.toc_entries = []  # type: ignore[attr-defined]
            self.md.toc_tree = []  # type: ignore[attr-defined]


class TableOfContentsTreeprocessor(Treeprocessor):
    """Store the visitor's headings and forest on the Markdown instance."""

    def __init__(self, md: Markdown, visitor: HeadingVisitor) -> None:
        super().__init__(md)
        self.visitor = visitor

    def run(self, root: Element) -> None:
        entries = self.visitor.visit(root)
        self.md.toc_entries = entries  # type: ignore[attr-defined]
        self.md.toc_tree = build_toc_tree(entries)  # type: ignore[attr-defined]


def extract_toc_entries(
    markdown_text: str, *, levels: cabc.Iterable[int] = DEFAULT_LEVELS
) -> list[TocEntry]:
    """Return the flat heading list for ``markdown_text``."""
    md = _convert(markdown_text, levels)
    return list(md.toc_entries)  # type: ignore[attr-defined]


def build_toc(
    markdown_text: str, *, levels: cabc.Iterable[int] = DEFAULT_LEVELS
) -> list[TocNode]:
    """Return the navigation forest for ``markdown_text``."""
    md = _convert(markdown_text, levels)
    return list(md.toc_tree)  # type: ignore[attr-defined]


def _convert(markdown_text: str, levels: cabc.Iterable[int]) -> Markdown:
    extension = TableOfContentsExtension(levels)
    md = Markdown(extensions=["sane_lists", "tables", "fenced_code", extension])
    md.convert(strip_front_matter(markdown_text))
    return md


__all__ = [
    "TableOfContentsExtension",
    "TableOfContentsTreeprocessor",
    "build_toc",
    "extract_toc_entries",
]
