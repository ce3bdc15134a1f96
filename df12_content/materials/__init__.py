"""Assemble content items and load them into a materials tree.

Exports
-------
- :class:`MaterialAssembler`: builds one :class:`Material` from a markdown file.
- :class:`ContentTreeLoader`: resolves every configured page and collection.
- :class:`MaterialsTree` and friends: the immutable result handed to rendering.
"""

from .assembler import MaterialAssembler
from .errors import ContentReadError, MaterialError, MissingRequiredPageError
from .loader import ContentTreeLoader
from .models import (
    Blog,
    BlogPages,
    Diagnostic,
    Docs,
    DocsPages,
    Hreflang,
    MainPages,
    Material,
    MaterialsTree,
    Pages,
)

__all__ = [
    "Blog",
    "BlogPages",
    "ContentReadError",
    "ContentTreeLoader",
    "Diagnostic",
    "Docs",
    "DocsPages",
    "Hreflang",
    "MainPages",
    "Material",
    "MaterialError",
    "MaterialsTree",
    "MissingRequiredPageError",
    "Pages",
]
