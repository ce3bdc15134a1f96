"""Exceptions raised while assembling and loading content materials."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class MaterialError(RuntimeError):
    """Raised when a single content item cannot be assembled.

    The underlying failure (for example a :class:`~df12_content.front_matter.ParseError`)
    is chained as ``__cause__``.
    """

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class MissingRequiredPageError(MaterialError):
    """Raised when the home or not-found page cannot be resolved."""

    def __init__(self, key: str, path: Path, reason: str) -> None:
        option = f"pages.{key}.path"
        message = (
            f"required page '{key}' {reason}; create '{path}' or point "
            f"'{option}' in the source config at an existing file"
        )
        super().__init__(path, message)
        self.key = key


class ContentReadError(OSError):
    """Raised when a collection folder exists but cannot be listed."""


__all__ = ["ContentReadError", "MaterialError", "MissingRequiredPageError"]
