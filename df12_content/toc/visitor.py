"""Collect navigation headings from a parsed markdown element tree.

Python-Markdown parses a document into an :mod:`xml.etree.ElementTree`
structure. :class:`HeadingVisitor` walks that tree depth first, in document
order, and records every ``<h2>``/``<h3>`` it finds, including headings nested
inside lists or block quotes. ``<h1>`` is reserved for the page title and
deeper levels are too granular for navigation.

Example
-------
>>> from xml.etree.ElementTree import fromstring
>>> root = fromstring("<div><h1>Title</h1><h2>Install <code>pkg</code></h2></div>")
>>> [(e.level, e.text, e.fragment) for e in HeadingVisitor().visit(root)]
[(2, 'Install pkg', 'install-pkg')]
"""

from __future__ import annotations

import re
import typing as typ

from markdown import util

from .models import TocEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

DEFAULT_LEVELS = frozenset({2, 3})
HEADING_TAG = re.compile(r"^h([1-6])$")
_PLACEHOLDER = re.compile(f"{util.STX}[^{util.ETX}]*{util.ETX}")


def slugify_fragment(text: str) -> str:
    """Lowercase ``text`` and collapse non-alphanumeric runs into hyphens."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def heading_text(element: Element) -> str:
    """Return the flattened plain text of a heading element."""
    text = _PLACEHOLDER.sub("", "".join(element.itertext()))
    return " ".join(text.split())


class HeadingVisitor:
    """Depth-first, pre-order collector of eligible headings."""

    def __init__(self, levels: cabc.Iterable[int] = DEFAULT_LEVELS) -> None:
        self.levels = frozenset(levels)

    def visit(self, element: Element) -> list[TocEntry]:
        """Return the eligible headings found under ``element``."""
        match = HEADING_TAG.match(str(element.tag))
        if match is not None:
            return self.visit_heading(element, int(match.group(1)))
        entries: list[TocEntry] = []
        for child in element:
            entries.extend(self.visit(child))
        return entries

    def visit_heading(self, element: Element, level: int) -> list[TocEntry]:
        if level not in self.levels:
            return []
        text = heading_text(element)
        return [TocEntry(level=level, text=text, fragment=slugify_fragment(text))]


__all__ = ["DEFAULT_LEVELS", "HeadingVisitor", "heading_text", "slugify_fragment"]
