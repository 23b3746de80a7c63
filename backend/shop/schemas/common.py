"""Common Marshmallow schemas and validators shared across resources."""

from __future__ import annotations

import uuid

from marshmallow import Schema, ValidationError, fields, validate


def validate_uuid(value: str | None) -> None:
    """Reject reference values that are not UUID strings (``None`` passes)."""
    if value is None:
        return
    try:
        uuid.UUID(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Not a valid UUID.") from exc


def reference(**kwargs) -> fields.String:
    """Nullable foreign-key field: a UUID string or ``null``."""
    return fields.String(allow_none=True, load_default=None, validate=validate_uuid, **kwargs)


def text(max_length: int) -> fields.String:
    """Optional free-text field defaulting to an empty string."""
    return fields.String(load_default="", validate=validate.Length(max=max_length))


class SeoFieldsSchema(Schema):
    """Image, description and meta tags carried by catalog pages."""

    image = text(512)
    description = fields.String(load_default="")
    meta_title = text(255)
    meta_keywords = text(255)
    meta_description = text(512)


class TimestampsSchema(Schema):
    """Read-only identity and audit fields present on every resource."""

    id = fields.String(required=True)
    date_created = fields.AwareDateTime(required=True)
    date_updated = fields.AwareDateTime(required=True)
