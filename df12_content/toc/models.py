"""Immutable records describing a document's table of contents."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True, frozen=True)
class TocEntry:
    """A heading eligible for navigation, in document order.

    Attributes
    ----------
    level : int
        Heading level (``2`` for ``<h2>``).
    text : str
        Plain text of the heading.
    fragment : str
        Anchor derived from ``text``.
    """

    level: int
    text: str
    fragment: str


@dc.dataclass(slots=True, frozen=True)
class TocNode:
    """A heading together with the headings nested beneath it.

    Every child has a strictly greater ``level`` than its parent and children
    keep document order.
    """

    level: int
    text: str
    fragment: str
    children: tuple[TocNode, ...] = ()

    @classmethod
    def from_entry(cls, entry: TocEntry) -> TocNode:
        return cls(level=entry.level, text=entry.text, fragment=entry.fragment)

    def as_dict(self) -> dict[str, object]:
        """Return a plain nested mapping, for templates and JSON output."""
        return {
            "level": self.level,
            "text": self.text,
            "fragment": self.fragment,
            "children": [child.as_dict() for child in self.children],
        }


__all__ = ["TocEntry", "TocNode"]
