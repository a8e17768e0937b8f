"""ServiceService — services and the messages they send and receive."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from catalogctl.domain.resource import Reference
from catalogctl.domain.types import ResourceType
from catalogctl.services.resources import ResourceService

if TYPE_CHECKING:
    from catalogctl.config.settings import CatalogSettings

Direction = Literal["sends", "receives"]


class ServiceService(ResourceService):
    """Resource operations for services, plus message wiring."""

    def __init__(self, settings: CatalogSettings) -> None:
        super().__init__(settings, ResourceType.SERVICE)

    async def add_message(
        self,
        service_id: str,
        message: Reference,
        direction: Direction,
        version: str | None = None,
    ) -> bool:
        """Record that the service sends or receives *message*.

        Returns False when the message was already listed for *direction*.
        """
        if direction not in ("sends", "receives"):
            msg = f"Direction must be 'sends' or 'receives', got {direction!r}"
            raise ValueError(msg)
        return await self._add_reference(service_id, direction, message, version)
