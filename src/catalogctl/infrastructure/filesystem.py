"""Async filesystem operations for catalog resources.

INVARIANT: Files are truth. Every resource is one directory holding an
``index.md`` metadata document plus attached files; there is no index
or cache beside them.

Pure parsing/rendering lives in :mod:`catalogctl.domain.content`. This
module handles file I/O, path derivation, and document discovery. All
calls suspend on I/O through anyio and raise
:class:`~catalogctl.errors.IOFailure` when the OS call fails. Multi-file
operations (moves, recursive deletes) are not atomic.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import anyio
import anyio.to_thread

from catalogctl.domain.content import parse_frontmatter, render_frontmatter
from catalogctl.domain.types import ResourceType
from catalogctl.errors import IOFailure

INDEX_FILE = "index.md"
VERSIONED_DIR = "versioned"

# Directories to skip when discovering metadata documents.
_SKIP_DIRS = frozenset({".git", "node_modules", ".venv", "dist", ".catalogctl"})


@contextmanager
def _io(op: str, path: Path) -> Iterator[None]:
    """Re-raise ``OSError`` from *op* on *path* as :class:`IOFailure`."""
    try:
        yield
    except OSError as exc:
        msg = f"{op} failed for {path}: {exc.strerror or exc}"
        raise IOFailure(msg, op=op, path=path) from exc


# ---------------------------------------------------------------------------
# Path derivation
# ---------------------------------------------------------------------------


def _ensure_inside(base: Path, path: Path, *, strict: bool = False) -> Path:
    """Refuse *path* unless it resolves inside *base* (below it when *strict*)."""
    resolved = path.resolve()
    base_resolved = base.resolve()
    if not resolved.is_relative_to(base_resolved) or (strict and resolved == base_resolved):
        msg = f"Path escapes {base}: {path}"
        raise ValueError(msg)
    return path


def _relative_segments(relative: str) -> list[str]:
    """Split a caller-supplied relative path, refusing reserved segments."""
    segments = [part for part in relative.strip("/").split("/") if part not in ("", ".")]
    if not segments:
        msg = f"Empty resource path: {relative!r}"
        raise ValueError(msg)
    if ".." in segments:
        msg = f"Resource paths may not contain '..': {relative!r}"
        raise ValueError(msg)
    if VERSIONED_DIR in segments:
        msg = f"{VERSIONED_DIR!r} is reserved for archived versions: {relative!r}"
        raise ValueError(msg)
    return segments


def resource_dir(
    root: Path,
    resource_type: ResourceType,
    resource_id: str,
    path: str | None = None,
) -> Path:
    """Resolve the directory a resource is written to.

    - Default: ``{root}/{type}s/{id}``
    - With *path*: ``{root}/{type}s/{path}`` (leading slashes ignored)

    The result always lies strictly below ``{root}/{type}s``.
    """
    base = root / resource_type.directory
    segments = _relative_segments(path if path and path.strip("/") else resource_id)
    return _ensure_inside(base, base.joinpath(*segments), strict=True)


def child_path(directory: Path, name: str) -> Path:
    """Join *name* onto *directory*, refusing results outside *directory*."""
    if not name or name in (".", ".."):
        msg = f"Invalid file name: {name!r}"
        raise ValueError(msg)
    return _ensure_inside(directory, directory / name, strict=True)


def is_archived(root: Path, directory: Path) -> bool:
    """Return True if *directory* lies under a ``versioned/`` segment."""
    try:
        parts = directory.relative_to(root).parts
    except ValueError:
        parts = directory.parts
    return VERSIONED_DIR in parts


# ---------------------------------------------------------------------------
# Document I/O
# ---------------------------------------------------------------------------


async def read_document(directory: Path) -> tuple[dict[str, Any], str]:
    """Read ``index.md`` in *directory*, returning ``(frontmatter, body)``."""
    path = directory / INDEX_FILE
    with _io("read", path):
        content = await anyio.Path(path).read_text(encoding="utf-8")
    return parse_frontmatter(content)


async def write_document(directory: Path, frontmatter: dict[str, Any], body: str) -> None:
    """Write frontmatter + body to ``index.md`` in *directory*.

    Creates the directory and its parents if they don't exist.
    """
    rendered = render_frontmatter(frontmatter, body)
    path = directory / INDEX_FILE
    with _io("write", path):
        await anyio.Path(directory).mkdir(parents=True, exist_ok=True)
        await anyio.Path(path).write_text(rendered, encoding="utf-8")


async def has_document(directory: Path) -> bool:
    with _io("stat", directory):
        return await anyio.Path(directory / INDEX_FILE).is_file()


async def write_file(path: Path, content: str) -> None:
    """Create or overwrite the single file at *path*."""
    with _io("write", path):
        await anyio.Path(path.parent).mkdir(parents=True, exist_ok=True)
        await anyio.Path(path).write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _walk_documents(base: Path) -> list[Path]:
    results: list[Path] = []
    for path in base.rglob(INDEX_FILE):
        if not path.is_file():
            continue
        if any(part in _SKIP_DIRS for part in path.relative_to(base).parts):
            continue
        results.append(path)
    return sorted(results)


async def find_documents(root: Path, resource_type: ResourceType | None = None) -> list[Path]:
    """Discover every metadata document under the catalog.

    Walks ``{root}`` (or ``{root}/{type}s`` when *resource_type* is given)
    in lexicographic path order, skipping tooling directories such as
    ``.git/`` and ``node_modules/``.
    """
    base = root / resource_type.directory if resource_type is not None else root
    with _io("scan", base):
        if not await anyio.Path(base).is_dir():
            return []
        return await anyio.to_thread.run_sync(_walk_documents, base)


# ---------------------------------------------------------------------------
# Moves and deletes
# ---------------------------------------------------------------------------


def _holds_document(path: Path) -> bool:
    return path.is_dir() and any(path.rglob(INDEX_FILE))


def _owned_entries(directory: Path) -> list[Path]:
    """Entries of *directory* that belong to its own resource.

    Excludes the ``versioned/`` tree and nested resource directories,
    which stay with the id directory when the resource moves or goes.
    """
    return sorted(
        entry
        for entry in directory.iterdir()
        if entry.name != VERSIONED_DIR and not _holds_document(entry)
    )


async def move_entries(source: Path, destination: Path) -> list[Path]:
    """Move the resource owned by *source* into *destination*.

    Returns the moved entries (as paths under *source*). The destination
    is created; a crash mid-way leaves entries split between both.
    """
    with _io("move", source):
        entries = await anyio.to_thread.run_sync(_owned_entries, source)
        await anyio.Path(destination).mkdir(parents=True, exist_ok=False)
        for entry in entries:
            await anyio.to_thread.run_sync(shutil.move, entry, destination / entry.name)
    return entries


def _remove_entries(directory: Path) -> None:
    for entry in _owned_entries(directory):
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
    if not any(directory.iterdir()):
        directory.rmdir()


async def remove_entries(directory: Path) -> None:
    """Delete the resource owned by *directory*, keeping archives and nested resources.

    The directory itself is removed once nothing is left in it.
    """
    with _io("remove", directory):
        await anyio.to_thread.run_sync(_remove_entries, directory)


async def remove_tree(directory: Path) -> None:
    """Delete *directory* and everything beneath it."""
    with _io("remove", directory):
        await anyio.to_thread.run_sync(shutil.rmtree, directory)


async def exists(path: Path) -> bool:
    with _io("stat", path):
        return await anyio.Path(path).exists()


async def remove_document(directory: Path) -> None:
    """Delete only the ``index.md`` of *directory*; attachments stay."""
    path = directory / INDEX_FILE
    with _io("remove", path):
        await anyio.Path(path).unlink()
