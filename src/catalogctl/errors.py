"""Error kinds raised by the resource store.

None of these are recovered inside the store: every operation surfaces
them to its caller. Multi-step operations (archive-then-write,
add-reference) may fail after some of their filesystem effects landed,
so callers must treat a failed one as possibly half-applied.
"""

from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for catalog store failures.

    Attributes:
        code: Stable machine-readable error code.
        detail: Context for the failure (ids, versions, paths).
    """

    code = "CATALOG_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_payload(self) -> dict[str, Any]:
        """Return a ``{code, message, detail}`` dict for error reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "detail": {k: str(v) for k, v in self.detail.items()},
        }


class NotFound(CatalogError):
    """No resource matched the requested id, version, or path."""

    code = "NOT_FOUND"


class AlreadyExists(CatalogError):
    """A write without ``override`` hit an occupied location or (id, version)."""

    code = "ALREADY_EXISTS"


class ArchiveConflict(CatalogError):
    """The ``versioned/<version>`` destination of an archive is populated."""

    code = "ARCHIVE_CONFLICT"


class MalformedResource(CatalogError):
    """A metadata document is missing required fields or fails validation."""

    code = "MALFORMED_RESOURCE"


class IOFailure(CatalogError):
    """An underlying filesystem call failed (disk, permissions)."""

    code = "IO_FAILURE"
