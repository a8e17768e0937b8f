"""Shared pytest fixtures and test helpers for catalogctl tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from catalogctl.config.settings import CatalogSettings
from catalogctl.domain.resource import Resource
from catalogctl.services.catalog import Catalog


@pytest.fixture
def anyio_backend() -> str:
    """Run ``@pytest.mark.anyio`` tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def catalog_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary catalog directory with the per-type directories."""
    monkeypatch.delenv("CATALOGCTL_CONFIG", raising=False)
    (tmp_path / "domains").mkdir()
    (tmp_path / "services").mkdir()
    (tmp_path / "events").mkdir()
    return tmp_path


@pytest.fixture
def settings(catalog_root: Path) -> CatalogSettings:
    return CatalogSettings.load(catalog_root=catalog_root)


@pytest.fixture
def catalog(settings: CatalogSettings) -> Catalog:
    return Catalog(settings)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_resource(resource_id: str = "Orders", version: str = "1.0.0", **kwargs: Any) -> Resource:
    """Build a resource with sensible defaults for name/summary/markdown."""
    fields: dict[str, Any] = {
        "name": f"{resource_id} name",
        "summary": f"All about {resource_id}",
        "markdown": "# Hello world",
    }
    fields.update(kwargs)
    return Resource(id=resource_id, version=version, **fields)


def write_raw_document(directory: Path, frontmatter: str, body: str = "") -> Path:
    """Write an ``index.md`` by hand, bypassing the store."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "index.md"
    path.write_text(f"---\n{frontmatter.strip()}\n---\n{body}", encoding="utf-8")
    return path
