"""Resource and Reference models.

Resource attributes map 1:1 to YAML frontmatter keys of the resource's
metadata document; the document body becomes :attr:`Resource.markdown`.
Keys the model does not declare (``owners``, ``badges``, ...) are kept as
pydantic extras so they survive a read/write cycle untouched.

All models are frozen. Mutating helpers return new instances.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Self

from pydantic import BaseModel, Field, ValidationError, field_validator

from catalogctl.domain.content import to_plain
from catalogctl.domain.types import LATEST
from catalogctl.errors import MalformedResource

# Frontmatter keys holding lists of references to other resources.
REFERENCE_FIELDS: tuple[str, ...] = ("services", "sends", "receives")

_REQUIRED_FIELDS: tuple[str, ...] = ("id", "version")


def _coerce_version(value: Any) -> Any:
    # YAML reads an unquoted ``1.0`` or ``2`` as a number.
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class Reference(BaseModel):
    """Non-owning ``{id, version}`` pointer to another resource."""

    model_config = {"frozen": True}

    id: str
    version: str = LATEST

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, value: Any) -> Any:
        return _coerce_version(value)

    @property
    def key(self) -> tuple[str, str]:
        return (self.id, self.version)


def unique_references(refs: Iterable[Reference]) -> list[Reference]:
    """Drop references whose ``(id, version)`` pair was already seen.

    The first occurrence wins and the order of the survivors is kept.
    Different versions of the same id are not duplicates.
    """
    seen: set[tuple[str, str]] = set()
    result: list[Reference] = []
    for ref in refs:
        if ref.key in seen:
            continue
        seen.add(ref.key)
        result.append(ref)
    return result


class Resource(BaseModel):
    """A versioned catalog entity (domain, service, event, ...)."""

    model_config = {"frozen": True, "extra": "allow"}

    id: str
    version: str
    name: str | None = None
    summary: str | None = None
    markdown: str = ""
    services: list[Reference] | None = None
    sends: list[Reference] | None = None
    receives: list[Reference] | None = None

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, value: Any) -> Any:
        return _coerce_version(value)

    @field_validator("markdown", mode="before")
    @classmethod
    def strip_markdown(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    # ------------------------------------------------------------------
    # Document conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_document(cls, frontmatter: dict[str, Any], body: str) -> Self:
        """Build a resource from a parsed metadata document.

        Raises:
            MalformedResource: If ``id`` or ``version`` is missing, or a
                field does not validate.
        """
        missing = [key for key in _REQUIRED_FIELDS if frontmatter.get(key) in (None, "")]
        if missing:
            msg = f"Metadata document is missing required fields: {', '.join(missing)}"
            raise MalformedResource(msg, missing=missing)

        data = to_plain(frontmatter)
        data.pop("markdown", None)
        try:
            return cls.model_validate({**data, "markdown": body})
        except ValidationError as exc:
            msg = f"Invalid metadata for resource {data.get('id')!r}: {exc}"
            raise MalformedResource(msg, id=data.get("id")) from exc

    def to_document(self) -> tuple[dict[str, Any], str]:
        """Return the ``(frontmatter, body)`` pair to serialize."""
        frontmatter = self.model_dump(mode="json", exclude={"markdown"}, exclude_none=True)
        return frontmatter, self.markdown

    # ------------------------------------------------------------------
    # Reference lists
    # ------------------------------------------------------------------

    def references(self, field: str) -> list[Reference]:
        """Return the reference list stored under *field* (empty if unset)."""
        if field not in REFERENCE_FIELDS:
            msg = f"Unknown reference field: {field!r}"
            raise ValueError(msg)
        return list(getattr(self, field) or [])

    def deduplicated(self) -> Self:
        """Return a copy whose reference lists hold unique ``(id, version)`` pairs."""
        updates = {
            field: unique_references(refs)
            for field in REFERENCE_FIELDS
            if (refs := getattr(self, field)) is not None
        }
        return self.model_copy(update=updates)

    def with_reference(self, field: str, ref: Reference) -> tuple[Self, bool]:
        """Append *ref* to the list under *field* unless already present.

        Returns:
            ``(resource, added)`` where *added* is False when an entry with
            the same ``(id, version)`` was already listed.
        """
        refs = self.references(field)
        if any(existing.key == ref.key for existing in refs):
            return self, False
        return self.model_copy(update={field: [*refs, ref]}), True


class ResourceFile(BaseModel):
    """An auxiliary file attached to a resource directory."""

    model_config = {"frozen": True, "populate_by_name": True}

    file_name: str = Field(alias="fileName")
    content: str
