"""User model."""

from __future__ import annotations

from docbox_client.models.base import DocboxBaseModel


__all__ = ["User"]


class User(DocboxBaseModel):
    """User known to docbox.

    Name and image are taken from the most recent modification the user
    performed, so either may be missing.
    """

    id: str
    name: str | None = None
    image_id: str | None = None
