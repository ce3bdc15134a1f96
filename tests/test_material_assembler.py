"""Tests for assembling a single material from markdown and companions."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from df12_content.front_matter import ParseError
from df12_content.materials import Hreflang, MaterialAssembler, MaterialError

if typ.TYPE_CHECKING:
    from pathlib import Path

POSTS = "blog/posts"


@pytest.fixture
def assembler(now: dt.datetime) -> MaterialAssembler:
    """Return an assembler bound to the shared fixed clock."""
    return MaterialAssembler(now=now)


def _assemble(assembler: MaterialAssembler, root: Path, name: str, **kwargs: typ.Any):
    return assembler.assemble(
        root / POSTS / name,
        root=root / POSTS,
        slug_prefix=kwargs.pop("slug_prefix", "posts"),
        template=kwargs.pop("template", "blog.single.post"),
    )


def test_missing_file_is_absent(assembler: MaterialAssembler, tmp_path: Path) -> None:
    """A file that does not exist is not an error."""
    assert _assemble(assembler, tmp_path, "ghost.md") is None


def test_defaults_for_bare_document(
    assembler: MaterialAssembler, tmp_path: Path, make_tree, now: dt.datetime
) -> None:
    """A document without front matter gets empty and fallback values."""
    make_tree(tmp_path, {f"{POSTS}/Hello World.md": "Just text.\n"})
    material = _assemble(assembler, tmp_path, "Hello World.md")
    assert material is not None
    assert material.id == "Hello World"
    assert material.slug == "posts/hello-world"
    assert material.title == ""
    assert material.description == ""
    assert material.template == "blog.single.post"
    assert material.assets_path == "Hello World"
    assert material.publication == now
    assert material.image is None
    assert material.css == ()
    assert material.js == ()
    assert material.redirects == ()
    assert material.data == ()
    assert material.assets == ()
    assert material.noindex is False
    assert material.canonical is None
    assert material.hreflang is None
    assert material.markdown == "Just text.\n"


def test_front_matter_fields_are_resolved(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """Explicit metadata overrides every default."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/first.md": """
                ---
                slug: Custom/Path
                title: First post
                description: An introduction
                template: blog.featured
                redirects:
                  from:
                    - /old/first
                noindex: true
                canonical: https://example.com/first
                css:
                  - https://cdn.example.com/a.css
                js:
                  - https://cdn.example.com/a.js
                category: news
                ---
                # First
            """,
        },
    )
    material = _assemble(assembler, tmp_path, "first.md")
    assert material is not None
    assert material.slug == "posts/custom/path"
    assert material.title == "First post"
    assert material.description == "An introduction"
    assert material.template == "blog.featured"
    assert material.redirects == ("/old/first",)
    assert material.noindex is True
    assert material.canonical == "https://example.com/first"
    assert material.css == ("https://cdn.example.com/a.css",)
    assert material.js == ("https://cdn.example.com/a.js",)
    assert material.markdown == "# First\n"
    assert material.user_defined == {
        "redirects": {"from": ["/old/first"]},
        "noindex": True,
        "canonical": "https://example.com/first",
        "css": ["https://cdn.example.com/a.css"],
        "js": ["https://cdn.example.com/a.js"],
        "category": "news",
    }


def test_companion_yaml_deep_merges_over_header(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """``<id>.yaml`` wins over the header and beats ``<id>.yml``."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": """
                ---
                title: Header title
                seo:
                  keywords: [a]
                  author: jane
                ---
                Body
            """,
            f"{POSTS}/post.yaml": """
                title: Companion title
                seo:
                  keywords: [b]
            """,
            f"{POSTS}/post.yml": """
                title: Ignored title
            """,
        },
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.title == "Companion title"
    assert material.front_matter["seo"] == {"keywords": ["b"], "author": "jane"}


def test_companion_can_unpublish_item(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """Temporal fields from the companion file take part in filtering."""
    make_tree(
        tmp_path,
        {f"{POSTS}/post.md": "Body\n", f"{POSTS}/post.yml": "draft: true\n"},
    )
    assert _assemble(assembler, tmp_path, "post.md") is None


def test_data_file_records_are_loaded(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """``<id>.data.yml`` provides ordered records."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": "Body\n",
            f"{POSTS}/post.data.yml": """
                - name: one
                - name: two
            """,
        },
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.data == ({"name": "one"}, {"name": "two"})


def test_data_file_with_root_mapping_is_rejected(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """A data file whose root is a mapping fails with a chained ParseError."""
    make_tree(
        tmp_path,
        {f"{POSTS}/post.md": "Body\n", f"{POSTS}/post.data.yaml": "name: one\n"},
    )
    with pytest.raises(MaterialError) as excinfo:
        _assemble(assembler, tmp_path, "post.md")
    assert isinstance(excinfo.value.__cause__, ParseError), (
        f"expected ParseError cause, got {excinfo.value.__cause__!r}"
    )
    assert excinfo.value.path.name == "post.data.yaml"


def test_malformed_header_raises_material_error(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """Header syntax errors are wrapped with the offending path."""
    make_tree(tmp_path, {f"{POSTS}/post.md": "---\ntitle: [oops\n---\nBody\n"})
    with pytest.raises(MaterialError, match="post.md"):
        _assemble(assembler, tmp_path, "post.md")


def test_assets_are_detected_and_listed(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """style.css and main.js are injected ahead of explicit includes."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": """
                ---
                image: cover.png
                css:
                  - extra.css
                ---
                Body
            """,
            f"{POSTS}/post/style.css": "body {}\n",
            f"{POSTS}/post/main.js": "console.log(1)\n",
            f"{POSTS}/post/cover.png": "png\n",
            f"{POSTS}/post/img/inline.svg": "<svg/>\n",
        },
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.css == ("./post/style.css", "extra.css")
    assert material.js == ("./post/main.js",)
    assert material.image == "cover.png"
    assert material.assets == ("cover.png", "img/inline.svg", "main.js", "style.css")


def test_assets_listing_can_be_flat(
    now: dt.datetime, tmp_path: Path, make_tree
) -> None:
    """Non-recursive enumeration skips nested folders."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": "Body\n",
            f"{POSTS}/post/a.txt": "a\n",
            f"{POSTS}/post/nested/b.txt": "b\n",
        },
    )
    assembler = MaterialAssembler(now=now, recursive_assets=False)
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.assets == ("a.txt",)


def test_custom_assets_path(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """``assets.path`` redirects asset lookup to another folder."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": "---\nassets:\n  path: shared\n---\nBody\n",
            f"{POSTS}/shared/style.css": "body {}\n",
        },
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.assets_path == "shared"
    assert material.css == ("./shared/style.css",)


def test_missing_image_is_absent(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """An image that does not exist in the assets folder is dropped."""
    make_tree(tmp_path, {f"{POSTS}/post.md": "---\nimage: missing.png\n---\nBody\n"})
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.image is None
    assert material.front_matter["image"] == "missing.png"


def test_hreflang_filters_incomplete_entries(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """Entries missing ``lang`` or ``url`` are dropped."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": """
                ---
                hreflang:
                  - lang: de
                    url: https://example.com/de/post
                  - lang: fr
                  - url: https://example.com/es/post
                ---
                Body
            """,
        },
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.hreflang == (
        Hreflang(lang="de", url="https://example.com/de/post"),
    )


def test_hreflang_without_valid_entries_is_empty_list(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """A present but unusable ``hreflang`` key yields an explicit empty list."""
    make_tree(
        tmp_path,
        {f"{POSTS}/post.md": "---\nhreflang:\n  - lang: de\n---\nBody\n"},
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.hreflang == ()


def test_explicit_user_defined_mapping_is_merged(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """An explicit ``userDefined`` mapping is merged over the leftovers."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": """
                ---
                title: Post
                featured: false
                userDefined:
                  featured: true
                  accent: teal
                ---
                Body
            """,
        },
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert material.user_defined == {"featured": True, "accent": "teal"}


def test_scheduled_item_is_absent(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """Items published after ``now`` never materialize."""
    make_tree(
        tmp_path,
        {f"{POSTS}/post.md": '---\npublication: "2024-05-01 12:00:01"\n---\nBody\n'},
    )
    assert _assemble(assembler, tmp_path, "post.md") is None


def test_material_collections_are_read_only(
    assembler: MaterialAssembler, tmp_path: Path, make_tree
) -> None:
    """Loaded metadata cannot be changed in place after assembly."""
    make_tree(
        tmp_path,
        {
            f"{POSTS}/post.md": "---\ntitle: Post\naccent: teal\n---\nBody\n",
            f"{POSTS}/post.data.yml": "- name: one\n",
        },
    )
    material = _assemble(assembler, tmp_path, "post.md")
    assert material is not None
    assert isinstance(material.css, tuple)
    assert isinstance(material.assets, tuple)
    with pytest.raises(TypeError):
        material.front_matter["title"] = "Changed"  # type: ignore[index]
    with pytest.raises(TypeError):
        material.user_defined["accent"] = "red"  # type: ignore[index]
    with pytest.raises(TypeError):
        material.data[0]["name"] = "two"  # type: ignore[index]
