"""Resource store — read, write, archive, attach, and remove resources.

The store is a small document database over the filesystem: ``(id,
version)`` is the composite key, a directory holds exactly one resource
version, and archiving is a directory move. Every operation takes the
catalog root explicitly.

Each operation is a short sequence of individually fallible filesystem
steps. Nothing is rolled back: a failure part-way through (for example
between archiving and writing the next version, or inside
:func:`add_reference`) leaves the catalog in the intermediate state,
which is logged and recoverable by re-running the remaining steps.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml.error import YAMLError

from catalogctl.domain.resource import Reference, Resource, ResourceFile
from catalogctl.domain.types import LATEST, ResourceType
from catalogctl.errors import AlreadyExists, ArchiveConflict, MalformedResource, NotFound
from catalogctl.infrastructure.filesystem import (
    INDEX_FILE,
    VERSIONED_DIR,
    child_path,
    exists,
    has_document,
    is_archived,
    move_entries,
    read_document,
    remove_document,
    remove_entries,
    remove_tree,
    resource_dir,
    write_document,
    write_file,
)
from catalogctl.infrastructure.resolver import Candidate, find_candidates, has_version, resolve

__all__ = [
    "add_file_to_resource",
    "add_reference",
    "get_resource",
    "has_version",
    "read_resource",
    "rm_resource",
    "rm_resource_by_id",
    "version_resource",
    "write_resource",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


async def read_resource(directory: Path) -> Resource:
    """Load the resource stored in *directory*.

    Raises:
        NotFound: If *directory* holds no metadata document.
        MalformedResource: If the document cannot be parsed or lacks
            ``id`` / ``version``.
    """
    if not await has_document(directory):
        msg = f"No {INDEX_FILE} found in {directory}"
        raise NotFound(msg, path=directory)
    try:
        fm, body = await read_document(directory)
    except (YAMLError, UnicodeDecodeError) as exc:
        msg = f"Unparseable metadata document in {directory}: {exc}"
        raise MalformedResource(msg, path=directory) from exc
    return Resource.from_document(fm, body)


async def get_resource(
    root: Path,
    resource_id: str,
    version: str | None = None,
    resource_type: ResourceType | None = None,
) -> Resource:
    """Resolve *resource_id* at *version* and read it."""
    location = await resolve(root, resource_id, version, resource_type)
    return await read_resource(location.directory)


# ---------------------------------------------------------------------------
# Write
# ---------------------------------------------------------------------------


async def _remove_location(root: Path, directory: Path) -> None:
    """Delete one resource location.

    Archived locations go entirely. A Primary location loses its document
    and attachments but keeps ``versioned/`` and nested resources.
    """
    if is_archived(root, directory):
        await remove_tree(directory)
    else:
        await remove_entries(directory)


def _conflicts(
    root: Path,
    resource: Resource,
    target: Path,
    candidates: list[Candidate],
) -> list[Path]:
    """Other locations that would break (id, version) or Primary uniqueness."""
    target_archived = is_archived(root, target)
    found: list[Path] = []
    for candidate in candidates:
        if candidate.directory == target:
            continue
        same_version = candidate.version == resource.version
        second_primary = candidate.primary and not target_archived
        if (same_version or second_primary) and candidate.directory not in found:
            found.append(candidate.directory)
    return found


async def write_resource(
    root: Path,
    resource: Resource,
    resource_type: ResourceType,
    *,
    path: str | None = None,
    override: bool = False,
) -> Path:
    """Write *resource* to ``{root}/{type}s/{path or id}``.

    Reference lists are deduplicated by ``(id, version)`` first.

    Without *override* the write fails if the target already holds a
    document, if another Primary location exists for the id, or if the
    same ``(id, version)`` is stored anywhere else. With *override* those
    locations are removed and the target's document and attachments are
    replaced; its ``versioned/`` tree is kept.

    Returns:
        The directory written to.

    Raises:
        AlreadyExists: On a conflicting write without *override*.
    """
    target = resource_dir(root, resource_type, resource.id, path)
    return await _write_to(root, resource.deduplicated(), resource_type, target, override=override)


async def _write_to(
    root: Path,
    resource: Resource,
    resource_type: ResourceType,
    target: Path,
    *,
    override: bool = False,
) -> Path:
    occupied = await has_document(target)
    candidates = await find_candidates(root, resource.id, resource_type)
    others = _conflicts(root, resource, target, candidates)

    if not override and (occupied or others):
        where = target if occupied else others[0]
        msg = (
            f"Failed to write {resource_type.value} {resource.id!r} "
            f"version {resource.version!r}: {where} is already taken"
        )
        raise AlreadyExists(msg, id=resource.id, version=resource.version, path=where)

    for directory in others:
        logger.info("Replacing %s %s at %s", resource_type.value, resource.id, directory)
        await _remove_location(root, directory)
    if occupied:
        await remove_entries(target)

    frontmatter, body = resource.to_document()
    await write_document(target, frontmatter, body)
    logger.debug("Wrote %s %s@%s to %s", resource_type.value, resource.id, resource.version, target)
    return target


# ---------------------------------------------------------------------------
# Archive
# ---------------------------------------------------------------------------


async def version_resource(
    root: Path,
    resource_id: str,
    resource_type: ResourceType | None = None,
) -> Path:
    """Move the Primary of *resource_id* into ``versioned/<version>/``.

    The document and every attached file move; ``versioned/`` itself and
    nested resources stay put. Afterwards the id has no Primary location
    until the next write. Version monotonicity is not enforced.

    Returns:
        The archive directory.

    Raises:
        NotFound: If the id has no Primary location.
        ArchiveConflict: If ``versioned/<version>`` already exists.
    """
    primary = await resolve(root, resource_id, LATEST, resource_type)
    resource = await read_resource(primary.directory)
    destination = child_path(primary.directory / VERSIONED_DIR, resource.version)

    if await exists(destination):
        msg = (
            f"Version {resource.version!r} of {resource_id!r} "
            f"is already archived at {destination}"
        )
        raise ArchiveConflict(msg, id=resource_id, version=resource.version, path=destination)

    moved = await move_entries(primary.directory, destination)
    logger.info(
        "Archived %s@%s (%d entries) to %s",
        resource_id,
        resource.version,
        len(moved),
        destination,
    )
    return destination


# ---------------------------------------------------------------------------
# Attach
# ---------------------------------------------------------------------------


async def add_file_to_resource(
    root: Path,
    resource_id: str,
    file: ResourceFile,
    version: str | None = None,
    resource_type: ResourceType | None = None,
) -> Path:
    """Write *file* into the resolved resource directory.

    Only that one file is created or overwritten; the metadata document
    is never touched.
    """
    if file.file_name == INDEX_FILE:
        msg = f"Refusing to overwrite the metadata document {INDEX_FILE}"
        raise ValueError(msg)
    location = await resolve(root, resource_id, version, resource_type)
    path = child_path(location.directory, file.file_name)
    await write_file(path, file.content)
    logger.debug("Attached %s to %s@%s", file.file_name, resource_id, location.version)
    return path


# ---------------------------------------------------------------------------
# Remove
# ---------------------------------------------------------------------------


async def rm_resource(root: Path, resource_type: ResourceType, path: str) -> None:
    """Delete ``{root}/{type}s/{path}`` and everything beneath it."""
    target = resource_dir(root, resource_type, "", path)
    if not await exists(target):
        msg = f"No {resource_type.value} found at {path!r}"
        raise NotFound(msg, path=target)
    await remove_tree(target)
    logger.info("Removed %s", target)


async def rm_resource_by_id(
    root: Path,
    resource_id: str,
    version: str | None = None,
    resource_type: ResourceType | None = None,
) -> None:
    """Delete one resolved location of *resource_id*.

    An Archived version is deleted with its whole directory. The Primary
    (``version`` omitted or ``"latest"``) loses its document and
    attachments; archived versions under it survive. Not idempotent: a
    second call raises :class:`NotFound`.
    """
    location = await resolve(root, resource_id, version, resource_type)
    await _remove_location(root, location.directory)
    logger.info("Removed %s@%s from %s", resource_id, location.version, location.directory)


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------


async def add_reference(
    root: Path,
    resource_type: ResourceType,
    resource_id: str,
    field: str,
    reference: Reference,
    version: str | None = None,
) -> bool:
    """Append *reference* to the *field* list of a resource.

    Read-modify-write: fetch, append unless ``(id, version)`` is already
    listed, remove the old metadata document, write the new one to the
    same directory. Attached files are left in place. A failure between
    the remove and the write leaves the resource missing until it is
    written again.

    Returns:
        False if the reference was already present (nothing written).
    """
    location = await resolve(root, resource_id, version, resource_type)
    resource = await read_resource(location.directory)
    updated, added = resource.with_reference(field, reference)
    if not added:
        logger.debug(
            "%s@%s already lists %s in %s", resource_id, location.version, reference.key, field
        )
        return False

    await remove_document(location.directory)
    try:
        await _write_to(root, updated.deduplicated(), resource_type, location.directory)
    except Exception:
        logger.error(
            "Removed %s@%s but failed to write it back to %s",
            resource_id,
            location.version,
            location.directory,
        )
        raise
    return True
