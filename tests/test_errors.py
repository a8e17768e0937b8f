"""Tests for error kinds and their reporting payloads."""

from __future__ import annotations

from pathlib import Path

import pytest

from catalogctl.errors import (
    AlreadyExists,
    ArchiveConflict,
    CatalogError,
    IOFailure,
    MalformedResource,
    NotFound,
)
from catalogctl.infrastructure import store


class TestToPayload:
    def test_shape(self) -> None:
        error = NotFound("No domain found", id="Orders", version="2.x")
        assert error.to_payload() == {
            "code": "NOT_FOUND",
            "message": "No domain found",
            "detail": {"id": "Orders", "version": "2.x"},
        }

    def test_detail_values_stringified(self) -> None:
        error = AlreadyExists("taken", path=Path("/catalog/domains/Orders"), missing=["id"])
        detail = error.to_payload()["detail"]
        assert detail == {"path": "/catalog/domains/Orders", "missing": "['id']"}

    def test_no_detail(self) -> None:
        assert CatalogError("boom").to_payload() == {
            "code": "CATALOG_ERROR",
            "message": "boom",
            "detail": {},
        }

    @pytest.mark.parametrize(
        ("error_cls", "code"),
        [
            (NotFound, "NOT_FOUND"),
            (AlreadyExists, "ALREADY_EXISTS"),
            (ArchiveConflict, "ARCHIVE_CONFLICT"),
            (MalformedResource, "MALFORMED_RESOURCE"),
            (IOFailure, "IO_FAILURE"),
        ],
    )
    def test_codes(self, error_cls: type[CatalogError], code: str) -> None:
        error = error_cls("failed")
        assert isinstance(error, CatalogError)
        assert error.to_payload()["code"] == code
        assert str(error) == "failed"

    @pytest.mark.anyio
    async def test_store_error_payload(self, catalog_root: Path) -> None:
        with pytest.raises(NotFound) as exc_info:
            await store.get_resource(catalog_root, "Orders", "1.0.0")
        payload = exc_info.value.to_payload()
        assert payload["code"] == "NOT_FOUND"
        assert payload["message"] == str(exc_info.value)
        assert all(isinstance(value, str) for value in payload["detail"].values())
