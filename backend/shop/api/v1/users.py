"""User account endpoints and token issuance."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from shop.api.deps import (
    json_response,
    load_json,
    no_content,
    request_values,
    require_auth,
    require_role,
    timing,
)
from shop.auth import Claims, Role, get_issuer, get_key_store
from shop.core.errors import NotFound, Unauthorized
from shop.schemas import TokenSchema, UserCreateSchema, UserSchema, UserUpdateSchema
from shop.services import NewUser, UserService

bp = Blueprint("users", __name__)

_create_schema = UserCreateSchema()
_update_schema = UserUpdateSchema()
_user_schema = UserSchema()
_users_schema = UserSchema(many=True)
_token_schema = TokenSchema()


def _service() -> UserService:
    cfg = current_app.config
    return UserService(
        issuer=cfg.get("AUTH_ISSUER", "shop backend"),
        audience=cfg.get("AUTH_AUDIENCE", "shop"),
        token_ttl=cfg.get("AUTH_TOKEN_TTL", 3600),
    )


@bp.get("/<int:page>/<int:rows>")
@timing
@require_role(Role.ADMIN)
def list_users(page: int, rows: int, claims: Claims):
    """Return one page of users. Admin only."""

    values = request_values()
    return json_response(_users_schema.dump(_service().query(values.trace_id, page, rows)))


@bp.get("/token/<kid>")
@timing
def issue_token(kid: str):
    """Exchange HTTP Basic email/password credentials for a token signed with ``kid``."""

    auth = request.authorization
    if auth is None or auth.type != "basic" or not auth.username:
        raise Unauthorized("must provide email and password in Basic auth")

    values = request_values()
    claims = _service().authenticate(values.trace_id, values.now, auth.username, auth.password or "")
    if kid not in get_key_store():
        raise NotFound(f"signing key not found: {kid}")
    token = get_issuer().generate(kid, claims)
    return json_response(_token_schema.dump({"token": token}))


@bp.get("/<user_id>")
@timing
@require_auth
def get_user(user_id: str, claims: Claims):
    values = request_values()
    return json_response(_user_schema.dump(_service().query_by_id(values.trace_id, claims, user_id)))


@bp.post("")
@timing
@require_auth
def create_user(claims: Claims):
    """Create an account. Admin only."""

    payload = load_json(_create_schema)
    values = request_values()
    info = _service().create(values.trace_id, claims, NewUser(**payload), values.now)
    return json_response(_user_schema.dump(info), status=201)


@bp.route("/<user_id>", methods=["PUT", "PATCH"])
@timing
@require_role(Role.ADMIN)
def update_user(user_id: str, claims: Claims):
    """Patch an account. Admin only."""

    payload = load_json(_update_schema)
    values = request_values()
    _service().update(values.trace_id, claims, user_id, payload, values.now)
    return no_content()


@bp.delete("/<user_id>")
@timing
@require_role(Role.ADMIN)
def delete_user(user_id: str, claims: Claims):
    """Delete an account. Admin only."""

    values = request_values()
    _service().delete(values.trace_id, claims, user_id)
    return no_content()
