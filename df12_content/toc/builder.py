"""Fold a flat, document-ordered heading list into a navigation forest.

Each new entry is attached below the most recently inserted root whose level
is lower than its own, descending through that root's latest children while a
shallower child exists. Entries that no root can hold become new roots. Nodes
are immutable; every insertion rebuilds the path it touches.

Example
-------
>>> from df12_content.toc.models import TocEntry
>>> forest = build_toc_tree(
...     [TocEntry(2, "A", "a"), TocEntry(3, "B", "b"), TocEntry(2, "C", "c")]
... )
>>> [(node.text, [child.text for child in node.children]) for node in forest]
[('A', ['B']), ('C', [])]
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .models import TocEntry, TocNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _last_shallower(nodes: tuple[TocNode, ...], level: int) -> int | None:
    """Return the index of the last node whose level is below ``level``."""
    for index in range(len(nodes) - 1, -1, -1):
        if nodes[index].level < level:
            return index
    return None


def _attach(parent: TocNode, node: TocNode) -> TocNode:
    index = _last_shallower(parent.children, node.level)
    if index is None:
        return dc.replace(parent, children=(*parent.children, node))
    children = list(parent.children)
    children[index] = _attach(children[index], node)
    return dc.replace(parent, children=tuple(children))


def insert_entry(forest: tuple[TocNode, ...], entry: TocEntry) -> tuple[TocNode, ...]:
    """Return a new forest with ``entry`` inserted at its nesting point."""
    node = TocNode.from_entry(entry)
    index = _last_shallower(forest, entry.level)
    if index is None:
        return (*forest, node)
    roots = list(forest)
    roots[index] = _attach(roots[index], node)
    return tuple(roots)


def build_toc_tree(entries: cabc.Iterable[TocEntry]) -> list[TocNode]:
    """Return the navigation forest for ``entries``.

    Parameters
    ----------
    entries : Iterable[TocEntry]
        Headings in document order.

    Returns
    -------
    list[TocNode]
        Top-level nodes in document order; several roots are returned when
        the document has more than one heading at its shallowest level.
    """
    forest: tuple[TocNode, ...] = ()
    for entry in entries:
        forest = insert_entry(forest, entry)
    return list(forest)


__all__ = ["build_toc_tree", "insert_entry"]
