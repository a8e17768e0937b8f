"""BaseService — foundation for the per-type catalog services.

Every service receives :class:`CatalogSettings` at construction time and
passes the catalog root to each store call; the store keeps no state of
its own.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalogctl.config.settings import CatalogSettings


class BaseService:
    """Base for all service-layer classes."""

    def __init__(self, settings: CatalogSettings) -> None:
        self._settings = settings

    @property
    def root(self) -> Path:
        """The catalog root every operation is applied to."""
        return self._settings.catalog_root
