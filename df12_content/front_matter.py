r"""Parse front matter blocks and companion YAML files into plain mappings.

Markdown sources may open with a ``---`` delimited YAML header. This module
splits that header from the body, loads it with ruamel.yaml, and offers typed
accessors so callers never poke at raw dynamic values directly. Companion
``<id>.yaml`` files are merged over the embedded header with
:func:`merge_front_matter`.

Example
-------
>>> from df12_content.front_matter import (
...     FrontMatter,
...     FrontMatterParser,
...     strip_front_matter,
... )
>>> parser = FrontMatterParser()
>>> meta = FrontMatter(parser.parse("---\ntitle: Hello\n---\nBody"))
>>> meta.string("title")
'Hello'
>>> strip_front_matter("---\ntitle: Hello\n---\nBody")
'Body'
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
OPENING_DELIMITER = re.compile(r"\A---[ \t]*\r?\n")


class ParseError(ValueError):
    """Raised when metadata YAML is malformed or has an unexpected shape."""


class _MetadataConstructor(SafeConstructor):
    """Safe constructor that keeps impossible timestamps as plain text.

    ``2024-13-45 10:00:00`` matches the YAML timestamp pattern but cannot be
    built into a datetime. Returning the scalar leaves the decision to the
    date parser that consumes it.
    """

    def construct_yaml_timestamp(
        self, node: typ.Any, values: typ.Any = None
    ) -> object:
        try:
            return super().construct_yaml_timestamp(node, values)
        except ValueError:
            return self.construct_scalar(node)


_MetadataConstructor.add_default_constructor("timestamp")


def _build_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    loader.Constructor = _MetadataConstructor
    return loader


class FrontMatterParser:
    """Load YAML metadata from markdown headers and standalone files."""

    def parse(self, markdown: str) -> dict[str, typ.Any]:
        """Return the mapping stored in the document's front matter block.

        Parameters
        ----------
        markdown : str
            Raw document text, optionally opening with a ``---`` block.

        Returns
        -------
        dict[str, Any]
            Parsed metadata; empty when the document has no header.

        Raises
        ------
        ParseError
            If the header is unterminated, is not valid YAML, or does not
            contain a mapping.
        """
        match = FRONT_MATTER_PATTERN.match(markdown)
        if match is None:
            if OPENING_DELIMITER.match(markdown):
                msg = "Front matter block is missing its closing '---' delimiter."
                raise ParseError(msg)
            return {}
        return self.load_mapping(match.group(1))

    def load_mapping(self, text: str) -> dict[str, typ.Any]:
        """Parse ``text`` as a YAML mapping; an empty document yields ``{}``."""
        loaded = self._load(text)
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            msg = f"Expected a YAML mapping, got {type(loaded).__name__}."
            raise ParseError(msg)
        return dict(loaded)

    def load_records(self, text: str) -> list[dict[str, typ.Any]]:
        """Parse ``text`` as an ordered list of YAML mappings.

        A mapping at the document root is rejected rather than wrapped, as is
        any list entry that is not itself a mapping.
        """
        loaded = self._load(text)
        if loaded is None:
            return []
        if not isinstance(loaded, list):
            msg = f"Expected a YAML list of mappings, got {type(loaded).__name__}."
            raise ParseError(msg)
        records: list[dict[str, typ.Any]] = []
        for index, entry in enumerate(loaded):
            if not isinstance(entry, dict):
                msg = f"Entry {index} is a {type(entry).__name__}, not a mapping."
                raise ParseError(msg)
            records.append(dict(entry))
        return records

    @staticmethod
    def _load(text: str) -> object:
        try:
            return _build_loader().load(text)
        except (YAMLError, ValueError) as exc:
            msg = f"Malformed YAML: {exc}"
            raise ParseError(msg) from exc


def strip_front_matter(markdown: str) -> str:
    """Return ``markdown`` without its leading front matter block."""
    match = FRONT_MATTER_PATTERN.match(markdown)
    if match is None:
        return markdown
    return markdown[match.end() :]


def merge_front_matter(
    base: cabc.Mapping[str, typ.Any], override: cabc.Mapping[str, typ.Any]
) -> dict[str, typ.Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested mappings merge key by key; any other value in ``override``
    replaces the base value wholesale (lists included).
    """
    merged: dict[str, typ.Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, cabc.Mapping) and isinstance(value, cabc.Mapping):
            merged[key] = merge_front_matter(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


_MISSING = object()


@dc.dataclass(slots=True, frozen=True)
class FrontMatter:
    """Typed read access over a parsed front matter mapping.

    Keys containing dots (``assets.path``) resolve either as a literal key or
    by walking nested mappings. Each accessor returns ``None`` when the value
    is absent or has the wrong type.
    """

    raw: cabc.Mapping[str, typ.Any]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._lookup(key) is not _MISSING

    def value(self, key: str) -> typ.Any | None:
        found = self._lookup(key)
        return None if found is _MISSING else found

    def string(self, key: str) -> str | None:
        found = self.value(key)
        return found if isinstance(found, str) else None

    def non_empty_string(self, key: str) -> str | None:
        found = self.string(key)
        return found or None

    def boolean(self, key: str) -> bool | None:
        found = self.value(key)
        return found if isinstance(found, bool) else None

    def string_list(self, key: str) -> list[str] | None:
        found = self.value(key)
        if not isinstance(found, list):
            return None
        if not all(isinstance(item, str) for item in found):
            return None
        return list(found)

    def mapping(self, key: str) -> dict[str, typ.Any] | None:
        found = self.value(key)
        return dict(found) if isinstance(found, cabc.Mapping) else None

    def records(self, key: str) -> list[dict[str, typ.Any]] | None:
        found = self.value(key)
        if not isinstance(found, list):
            return None
        return [dict(item) for item in found if isinstance(item, cabc.Mapping)]

    def _lookup(self, key: str) -> object:
        if key in self.raw:
            return self.raw[key]
        node: object = self.raw
        for part in key.split("."):
            if not isinstance(node, cabc.Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node


__all__ = [
    "FrontMatter",
    "FrontMatterParser",
    "ParseError",
    "merge_front_matter",
    "strip_front_matter",
]
