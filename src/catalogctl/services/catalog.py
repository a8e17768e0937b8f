"""Catalog — one entry point holding a service per resource type."""

from __future__ import annotations

from pathlib import Path

from catalogctl.config.settings import CatalogSettings
from catalogctl.domain.types import ResourceType
from catalogctl.services.domains import DomainService
from catalogctl.services.resources import ResourceService
from catalogctl.services.services import ServiceService


class Catalog:
    """Per-type services sharing one catalog root.

    Usage::

        catalog = Catalog.at("/path/to/catalog")
        domain = await catalog.domains.get("Orders")
        await catalog.domains.add_service("Orders", Reference(id="OrderService", version="2.0.0"))
    """

    def __init__(self, settings: CatalogSettings) -> None:
        self.settings = settings
        if settings.verbose or settings.log_json:
            from catalogctl.config.logging import configure_logging

            configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        self.domains = DomainService(settings)
        self.services = ServiceService(settings)
        self.events = ResourceService(settings, ResourceType.EVENT)
        self.commands = ResourceService(settings, ResourceType.COMMAND)
        self.queries = ResourceService(settings, ResourceType.QUERY)
        self.channels = ResourceService(settings, ResourceType.CHANNEL)

    @classmethod
    def at(cls, root: str | Path, **overrides: object) -> Catalog:
        """Build a catalog for *root*, honouring any catalogctl.toml there."""
        return cls(CatalogSettings.load(catalog_root=Path(root), **overrides))

    @property
    def root(self) -> Path:
        return self.settings.catalog_root

    def for_type(self, resource_type: ResourceType) -> ResourceService:
        """Return the service handling *resource_type*."""
        return {
            ResourceType.DOMAIN: self.domains,
            ResourceType.SERVICE: self.services,
            ResourceType.EVENT: self.events,
            ResourceType.COMMAND: self.commands,
            ResourceType.QUERY: self.queries,
            ResourceType.CHANNEL: self.channels,
        }[resource_type]
