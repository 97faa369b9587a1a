"""Base model shared by all docbox wire models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


__all__ = ["DocboxBaseModel", "DocboxRequestModel"]


class DocboxBaseModel(BaseModel):
    """Base model with common configuration for docbox API responses."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=False,
        extra="ignore",  # Ignore unknown fields from API
    )


class DocboxRequestModel(DocboxBaseModel):
    """Base model for request bodies.

    Unset optional fields are left out of the serialized payload so the
    server applies its own defaults.
    """

    def to_payload(self) -> dict[str, object]:
        """Serialize for a JSON request body, omitting ``None`` fields."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)
