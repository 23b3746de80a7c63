"""Flask CLI commands for signing keys and operator tokens."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path

import click
from flask import current_app
from flask.cli import with_appcontext

from shop.auth import get_issuer, get_key_store
from shop.auth.keys import generate_private_key, private_key_pem
from shop.services import ServiceError, UserService

LOGGER = logging.getLogger(__name__)


@click.group("keys")
def keys_cli() -> None:
    """Manage token signing keys."""


@keys_cli.command("generate")
@click.option("--kid", default=None, help="Key identifier; a random UUID when omitted.")
@click.option(
    "--folder",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination folder; defaults to AUTH_KEYS_FOLDER.",
)
@with_appcontext
def generate_command(kid: str | None, folder: Path | None) -> None:
    """Write a new 2048-bit RSA private key as ``<kid>.pem`` and print the kid."""
    kid = kid or str(uuid.uuid4())
    folder = folder or Path(current_app.config.get("AUTH_KEYS_FOLDER") or "./keys")
    folder.mkdir(parents=True, exist_ok=True)
    target = folder / f"{kid}.pem"
    if target.exists():
        raise click.UsageError(f"Key file already exists: {target}")

    target.write_bytes(private_key_pem(generate_private_key()))
    target.chmod(0o600)
    LOGGER.info("Generated signing key %s in %s", kid, folder)
    click.echo(kid)


@keys_cli.command("token")
@click.option("--kid", default=None, help="Signing key id; defaults to AUTH_ACTIVE_KID.")
@click.option("--email", required=True, help="Account email.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
@with_appcontext
def token_command(kid: str | None, email: str, password: str) -> None:
    """Authenticate an account and print a signed token for it."""
    kid = kid or current_app.config.get("AUTH_ACTIVE_KID") or ""
    if not kid:
        raise click.UsageError("Pass --kid or set AUTH_ACTIVE_KID.")
    if kid not in get_key_store():
        raise click.UsageError(f"Unknown key id {kid!r}; known: {get_key_store().kids()}")

    cfg = current_app.config
    service = UserService(
        issuer=cfg.get("AUTH_ISSUER", "shop backend"),
        audience=cfg.get("AUTH_AUDIENCE", "shop"),
        token_ttl=cfg.get("AUTH_TOKEN_TTL", 3600),
    )
    try:
        claims = service.authenticate("cli", datetime.now(UTC), email, password)
    except ServiceError as exc:
        raise click.ClickException(exc.message) from exc

    token = get_issuer().generate(kid, claims)
    click.echo(f"-----BEGIN TOKEN-----\n{token}\n-----END TOKEN-----")
