"""Cyclopts CLI entrypoint for inspecting df12 content sources.

The ``content`` console script loads a source directory the same way the site
build does and reports what it found, which makes it handy for checking
scheduled or expired items and for spotting files that fail to parse before a
release. ``content toc`` prints the navigation tree derived from a single
markdown document.

Examples
--------
Summarise the content tree in the current directory:

>>> from df12_content.cli import main
>>> main()  # doctest: +SKIP

Evaluate publication dates as of a fixed moment and fail on dropped items:

>>> from df12_content.cli import app
>>> app(
...     ["load", "--source-dir", "site", "--now", "2024-06-01T00:00:00", "--strict"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import datetime as dt
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from .config import SourceConfigError, load_source_config
from .materials import (
    ContentReadError,
    ContentTreeLoader,
    MaterialError,
    MaterialsTree,
)
from .toc import TocNode, build_toc
from .toc.visitor import DEFAULT_LEVELS

app = App(name="content", config=cyclopts.config.Env("DF12_CONTENT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _summarize(tree: MaterialsTree) -> dict[str, typ.Any]:
    """Return a JSON-friendly overview of ``tree``."""
    return {
        "now": tree.now.isoformat(),
        "pages": {
            key: None if material is None else material.slug
            for key, material in tree.singletons().items()
        },
        "collections": {
            key: [material.slug for material in items]
            for key, items in tree.collections().items()
        },
        "diagnostics": [
            {"path": _format_path(item.path), "message": item.message}
            for item in tree.diagnostics
        ],
    }


@app.command(help="Load the content tree and report what was found.")
def load(
    *,
    source_dir: typ.Annotated[
        Path, Parameter(help="Site source directory")
    ] = Path(),
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to the source config file"),
    ] = None,
    now: typ.Annotated[
        dt.datetime | None,
        Parameter(help="Evaluate publication dates at this ISO timestamp"),
    ] = None,
    as_json: typ.Annotated[
        bool, Parameter(name="--json", help="Print a JSON summary")
    ] = False,
    strict: typ.Annotated[
        bool, Parameter(help="Exit non-zero when any collection item was dropped")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Load every configured page and collection from ``source_dir``.

    Parameters
    ----------
    source_dir : Path, optional
        Root of the site sources; defaults to the working directory.
    config : Path or None, optional
        Explicit configuration file. When omitted, ``config.yaml`` inside
        ``source_dir`` is used if present.
    now : datetime or None, optional
        Fixed clock for draft/publication/expiration filtering; naive values
        are treated as UTC.
    as_json : bool, optional
        Print a machine-readable summary instead of one line per collection.
    strict : bool, optional
        Treat dropped collection items as a failure.
    verbose : bool, optional
        Emit debug logging, including every filtered item.

    Returns
    -------
    None
        Prints the summary to stdout.

    Raises
    ------
    SystemExit
        With status ``1`` when the configuration cannot be loaded, a
        required page is missing, a page fails to load, a collection folder cannot be listed, or
        ``strict`` is set and items were dropped.
    """
    _configure_logging(verbose=verbose)
    if now is not None and now.tzinfo is None:
        now = now.replace(tzinfo=dt.UTC)
    try:
        source_config = load_source_config(source_dir, config)
        tree = ContentTreeLoader(source_config, now=now).load()
    except (
        FileNotFoundError,
        SourceConfigError,
        YAMLError,
        MaterialError,
        ContentReadError,
    ) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if as_json:
        encoded = msgspec_json.encode(_summarize(tree))
        print(msgspec_json.format(encoded, indent=2).decode("utf-8"))
    else:
        for key, items in tree.collections().items():
            print(f"{key}: {len(items)} loaded")
        for item in tree.diagnostics:
            print(f"dropped {_format_path(item.path)}: {item.message}")

    if strict and tree.dropped:
        print(f"error: {tree.dropped} item(s) failed to load", file=sys.stderr)
        raise SystemExit(1)


def _print_nodes(nodes: list[TocNode] | tuple[TocNode, ...], depth: int = 0) -> None:
    for node in nodes:
        print(f"{'  ' * depth}- {node.text} (#{node.fragment})")
        _print_nodes(node.children, depth + 1)


@app.command(help="Print the table of contents of a markdown document.")
def toc(
    path: typ.Annotated[Path, Parameter(help="Markdown file to inspect")],
    *,
    levels: typ.Annotated[
        list[int] | None, Parameter(help="Heading levels to include")
    ] = None,
    as_json: typ.Annotated[
        bool, Parameter(name="--json", help="Print the tree as JSON")
    ] = False,
) -> None:
    """Print the navigation forest derived from the headings in ``path``.

    Parameters
    ----------
    path : Path
        Markdown document; any front matter block is ignored.
    levels : list[int] or None, optional
        Heading levels to include; defaults to ``2`` and ``3``.
    as_json : bool, optional
        Print nested JSON instead of an indented outline.
    """
    forest = build_toc(
        path.read_text(encoding="utf-8"), levels=levels or DEFAULT_LEVELS
    )
    if as_json:
        encoded = msgspec_json.encode([node.as_dict() for node in forest])
        print(msgspec_json.format(encoded, indent=2).decode("utf-8"))
        return
    _print_nodes(forest)


def main() -> None:
    """Invoke the Cyclopts application that powers the `content` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
