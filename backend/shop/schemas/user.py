"""User resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, post_load, validate, validates_schema

from shop.auth.claims import Role


def _roles(**kwargs: Any) -> fields.List:
    return fields.List(
        fields.String(validate=validate.OneOf([r.value for r in Role])),
        validate=validate.Length(min=1),
        **kwargs,
    )


class _PasswordConfirmMixin(Schema):
    """Require ``password_confirm`` to echo ``password`` and drop it after load."""

    @validates_schema
    def check_confirmation(self, data: dict[str, Any], **_: Any) -> None:
        if "password" in data and data.get("password") != data.get("password_confirm"):
            raise ValidationError("Passwords do not match.", field_name="password_confirm")

    @post_load
    def drop_confirmation(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data.pop("password_confirm", None)
        return data


class UserCreateSchema(_PasswordConfirmMixin):
    """Payload for creating a user (admin only)."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    roles = _roles(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))
    password_confirm = fields.String(required=True, load_only=True)


class UserUpdateSchema(_PasswordConfirmMixin):
    """Partial update payload; any subset of the fields below."""

    name = fields.String(validate=validate.Length(min=1, max=100))
    email = fields.Email(validate=validate.Length(max=254))
    roles = _roles()
    password = fields.String(load_only=True, validate=validate.Length(min=1))
    password_confirm = fields.String(load_only=True)


class UserSchema(Schema):
    """Representation of a user. Password material is never dumped."""

    id = fields.String(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    roles = fields.List(fields.String(), required=True)
    date_created = fields.AwareDateTime(required=True)
    date_updated = fields.AwareDateTime(required=True)


class TokenSchema(Schema):
    token = fields.String(required=True)
