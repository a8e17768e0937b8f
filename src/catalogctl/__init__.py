"""catalogctl — versioned filesystem store for documentation catalogs."""

from __future__ import annotations

from catalogctl.domain.resource import Reference, Resource
from catalogctl.domain.types import LATEST, ResourceType
from catalogctl.errors import (
    AlreadyExists,
    ArchiveConflict,
    CatalogError,
    IOFailure,
    MalformedResource,
    NotFound,
)
from catalogctl.services.catalog import Catalog

__version__ = "0.1.0"

__all__ = [
    "LATEST",
    "AlreadyExists",
    "ArchiveConflict",
    "Catalog",
    "CatalogError",
    "IOFailure",
    "MalformedResource",
    "NotFound",
    "Reference",
    "Resource",
    "ResourceType",
    "__version__",
]
