"""ResourceService — store operations bound to one resource type."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from catalogctl.domain.resource import Reference, Resource, ResourceFile
from catalogctl.domain.types import ResourceType
from catalogctl.infrastructure import store
from catalogctl.services.base import BaseService

if TYPE_CHECKING:
    from catalogctl.config.settings import CatalogSettings


class ResourceService(BaseService):
    """Get, write, version, attach to, and remove resources of one type.

    Usage::

        events = ResourceService(settings, ResourceType.EVENT)
        await events.write(Resource(id="OrderPlaced", version="0.0.1"))
        await events.version("OrderPlaced")
    """

    def __init__(self, settings: CatalogSettings, resource_type: ResourceType) -> None:
        super().__init__(settings)
        self.resource_type = resource_type

    async def get(self, resource_id: str, version: str | None = None) -> Resource:
        """Return the latest resource, or a specific version or semver range."""
        return await store.get_resource(self.root, resource_id, version, self.resource_type)

    async def write(
        self,
        resource: Resource,
        *,
        path: str | None = None,
        override: bool = False,
    ) -> Path:
        """Write a resource; *path* is relative to this type's directory."""
        return await store.write_resource(
            self.root, resource, self.resource_type, path=path, override=override
        )

    async def version(self, resource_id: str) -> Path:
        """Move the latest resource into ``versioned/<version>/``."""
        return await store.version_resource(self.root, resource_id, self.resource_type)

    async def rm(self, path: str) -> None:
        """Delete the resource directory at *path* (relative to this type's directory)."""
        await store.rm_resource(self.root, self.resource_type, path)

    async def rm_by_id(self, resource_id: str, version: str | None = None) -> None:
        await store.rm_resource_by_id(self.root, resource_id, version, self.resource_type)

    async def add_file(
        self,
        resource_id: str,
        file: ResourceFile,
        version: str | None = None,
    ) -> Path:
        return await store.add_file_to_resource(
            self.root, resource_id, file, version, self.resource_type
        )

    async def has_version(self, resource_id: str, version: str | None = None) -> bool:
        """Return True if *version* (``latest``, exact, or a range) exists."""
        return await store.has_version(self.root, resource_id, version, self.resource_type)

    async def _add_reference(
        self,
        resource_id: str,
        field: str,
        reference: Reference,
        version: str | None,
    ) -> bool:
        return await store.add_reference(
            self.root, self.resource_type, resource_id, field, reference, version
        )
