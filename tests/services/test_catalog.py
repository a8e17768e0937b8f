"""Tests for the Catalog entry point and per-type ResourceService."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from catalogctl import Catalog, NotFound, ResourceType
from catalogctl.domain.resource import ResourceFile
from catalogctl.services.domains import DomainService
from catalogctl.services.resources import ResourceService
from tests.conftest import make_resource

pytestmark = pytest.mark.anyio


class TestCatalog:
    async def test_at_builds_from_path(self, catalog_root: Path) -> None:
        catalog = Catalog.at(catalog_root)
        assert catalog.root == catalog_root
        assert isinstance(catalog.domains, DomainService)

    async def test_for_type(self, catalog: Catalog) -> None:
        for resource_type in ResourceType:
            service = catalog.for_type(resource_type)
            assert isinstance(service, ResourceService)
            assert service.resource_type is resource_type

    async def test_verbose_configures_logging(self, catalog_root: Path) -> None:
        root_logger = logging.getLogger()
        handlers = root_logger.handlers[:]
        level = logging.getLogger("catalogctl").level
        try:
            Catalog.at(catalog_root, verbose=True)
            assert logging.getLogger("catalogctl").level == logging.DEBUG
        finally:
            root_logger.handlers = handlers
            logging.getLogger("catalogctl").setLevel(level)


class TestResourceService:
    async def test_types_are_isolated(self, catalog: Catalog, catalog_root: Path) -> None:
        await catalog.events.write(make_resource("OrderPlaced", "0.0.1"))
        assert (catalog_root / "events" / "OrderPlaced" / "index.md").is_file()
        assert await catalog.events.has_version("OrderPlaced")
        assert not await catalog.commands.has_version("OrderPlaced")
        with pytest.raises(NotFound, match="command"):
            await catalog.commands.get("OrderPlaced")

    async def test_lifecycle(self, catalog: Catalog) -> None:
        events = catalog.events
        await events.write(make_resource("OrderPlaced", "0.0.1"))
        await events.add_file("OrderPlaced", ResourceFile(file_name="schema.json", content="{}"))
        archived = await events.version("OrderPlaced")
        assert (archived / "schema.json").is_file()
        await events.write(make_resource("OrderPlaced", "0.0.2"))

        assert (await events.get("OrderPlaced")).version == "0.0.2"
        assert (await events.get("OrderPlaced", "0.0.1")).version == "0.0.1"
        assert await events.has_version("OrderPlaced", "0.0.x")

        await events.rm_by_id("OrderPlaced", "0.0.1")
        assert not await events.has_version("OrderPlaced", "0.0.1")
        await events.rm("/OrderPlaced")
        assert not await events.has_version("OrderPlaced", "0.0.x")

    async def test_write_with_path_and_override(self, catalog: Catalog, catalog_root: Path) -> None:
        target = await catalog.domains.write(make_resource("Payment"), path="/Inventory/Payment")
        assert target == catalog_root / "domains" / "Inventory" / "Payment"
        await catalog.domains.write(
            make_resource("Payment", summary="Updated"), path="/Inventory/Payment", override=True
        )
        assert (await catalog.domains.get("Payment")).summary == "Updated"
