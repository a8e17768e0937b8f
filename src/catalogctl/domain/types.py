"""Resource types and version tokens.

The resource type is a plain discriminator that selects the canonical
subdirectory under the catalog root (``domain`` -> ``domains/``).
"""

from __future__ import annotations

from enum import StrEnum

# Version token that selects the Primary location of an id.
LATEST = "latest"


class ResourceType(StrEnum):
    """Resource types stored in the catalog."""

    DOMAIN = "domain"
    SERVICE = "service"
    EVENT = "event"
    COMMAND = "command"
    QUERY = "query"
    CHANNEL = "channel"

    @property
    def directory(self) -> str:
        """Catalog-relative directory holding resources of this type."""
        return f"{self.value}s"
