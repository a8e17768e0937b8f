"""Path resolver — map (id, version token) to a resource directory.

Resources may live at caller-chosen paths, so resolution walks the whole
catalog (or one type directory) and matches on the ``id`` declared inside
each metadata document rather than on directory names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml.error import YAMLError

from catalogctl.domain.types import ResourceType
from catalogctl.domain.versions import best_match, is_latest
from catalogctl.errors import NotFound
from catalogctl.infrastructure.filesystem import find_documents, is_archived, read_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A directory whose metadata document declares the requested id."""

    directory: Path
    version: str
    archived: bool

    @property
    def primary(self) -> bool:
        return not self.archived


async def find_candidates(
    root: Path,
    resource_id: str,
    resource_type: ResourceType | None = None,
) -> list[Candidate]:
    """Return every Primary and Archived location declaring *resource_id*.

    Candidates come back in lexicographic path order. Documents that
    cannot be parsed, or that declare no version, are skipped with a
    warning.
    """
    candidates: list[Candidate] = []
    for path in await find_documents(root, resource_type):
        try:
            fm, _body = await read_document(path.parent)
        except (YAMLError, UnicodeDecodeError):
            logger.warning("Skipping unparseable metadata document: %s", path)
            continue
        if str(fm.get("id", "")) != resource_id:
            continue
        version = fm.get("version")
        if version is None:
            logger.warning("Skipping %s: resource %r declares no version", path, resource_id)
            continue
        candidates.append(
            Candidate(
                directory=path.parent,
                version=str(version),
                archived=is_archived(root, path.parent),
            )
        )
    return candidates


def _not_found(
    resource_id: str,
    version: str | None,
    resource_type: ResourceType | None,
) -> NotFound:
    kind = resource_type.value if resource_type is not None else "resource"
    if is_latest(version):
        msg = f"No {kind} found with id {resource_id!r}"
    else:
        msg = f"No {kind} found with id {resource_id!r} and version {version!r}"
    return NotFound(msg, id=resource_id, version=version or "latest")


def select(
    candidates: list[Candidate],
    resource_id: str,
    version: str | None,
) -> Candidate | None:
    """Apply a version token to already-discovered candidates."""
    if is_latest(version):
        primaries = [c for c in candidates if c.primary]
        if len(primaries) > 1:
            logger.warning(
                "Resource %r has %d primary locations; using %s",
                resource_id,
                len(primaries),
                primaries[0].directory,
            )
        return primaries[0] if primaries else None
    return best_match(candidates, str(version))


async def resolve(
    root: Path,
    resource_id: str,
    version: str | None = None,
    resource_type: ResourceType | None = None,
) -> Candidate:
    """Locate the directory holding *resource_id* at *version*.

    - ``None`` / ``"latest"``: the Primary location.
    - exact version: Primary first, then Archived locations.
    - semver range: the highest satisfying version.

    Raises:
        NotFound: If no directory matches.
    """
    candidates = await find_candidates(root, resource_id, resource_type)
    match = select(candidates, resource_id, version)
    if match is None:
        raise _not_found(resource_id, version, resource_type)
    logger.debug("Resolved %s@%s to %s", resource_id, version or "latest", match.directory)
    return match


async def has_version(
    root: Path,
    resource_id: str,
    version: str | None = None,
    resource_type: ResourceType | None = None,
) -> bool:
    """Return True if *resource_id* resolves at *version*."""
    try:
        await resolve(root, resource_id, version, resource_type)
    except NotFound:
        return False
    return True
