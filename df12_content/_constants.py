"""Common literal values used across df12_content.

These constants keep filenames, front-matter keys, and default layout values
centralized so the loader, assembler, and tests can import the same values
without drifting. Intended for internal use within the df12_content package.

Examples
--------
>>> from df12_content import _constants
>>> _constants.COMPANION_SUFFIXES
('.yaml', '.yml')
>>> "slug" in _constants.RESERVED_FRONT_MATTER_KEYS
True
"""

MARKDOWN_SUFFIXES = (".md", ".markdown")
COMPANION_SUFFIXES = (".yaml", ".yml")
DATA_SUFFIXES = (".data.yaml", ".data.yml")

STYLE_ASSET = "style.css"
SCRIPT_ASSET = "main.js"

DEFAULT_CONFIG_FILE = "config.yaml"
DEFAULT_CONTENTS_FOLDER = "contents"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

HOME_SLUG = ""
NOT_FOUND_SLUG = "404"

RESERVED_FRONT_MATTER_KEYS = frozenset(
    {"slug", "title", "description", "coverImage", "image", "template", "userDefined"}
)

# key -> (path without extension, template)
DEFAULT_PAGES: dict[str, tuple[str, str]] = {
    "main.home": ("pages/home", "main.home"),
    "main.not_found": ("pages/404", "main.404"),
    "blog.home": ("pages/blog", "blog.home"),
    "blog.authors": ("pages/blog/authors", "blog.authors"),
    "blog.tags": ("pages/blog/tags", "blog.tags"),
    "blog.posts": ("pages/blog/posts", "blog.posts"),
    "docs.home": ("pages/docs", "docs.home"),
    "docs.categories": ("pages/docs/categories", "docs.categories"),
    "docs.guides": ("pages/docs/guides", "docs.guides"),
}

# key -> (folder, slug prefix, template)
DEFAULT_COLLECTIONS: dict[str, tuple[str, str | None, str]] = {
    "pages.custom": ("pages/custom", None, "pages.single.page"),
    "blog.authors": ("blog/authors", "authors", "blog.single.author"),
    "blog.tags": ("blog/tags", "tags", "blog.single.tag"),
    "blog.posts": ("blog/posts", "posts", "blog.single.post"),
    "docs.categories": ("docs/categories", "docs", "docs.single.category"),
    "docs.guides": ("docs/guides", "docs", "docs.single.guide"),
}
