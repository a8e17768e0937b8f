"""DomainService — domains and the services they group."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogctl.domain.resource import Reference
from catalogctl.domain.types import ResourceType
from catalogctl.services.resources import ResourceService

if TYPE_CHECKING:
    from catalogctl.config.settings import CatalogSettings


class DomainService(ResourceService):
    """Resource operations for domains, plus service membership."""

    def __init__(self, settings: CatalogSettings) -> None:
        super().__init__(settings, ResourceType.DOMAIN)

    async def add_service(
        self,
        domain_id: str,
        service: Reference,
        version: str | None = None,
    ) -> bool:
        """Add *service* to the domain's ``services`` list.

        Calling twice with the same ``(id, version)`` leaves one entry.
        Returns False when the service was already listed.
        """
        return await self._add_reference(domain_id, "services", service, version)
