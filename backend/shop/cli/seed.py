"""Flask CLI commands for development database seeding."""

from __future__ import annotations

import logging
import os

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from shop.core.config import ENV_VAR
from shop.core.extensions import db
from shop.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _seed(verbose: bool) -> None:
    try:
        summary = seed_data.run_all(db, verbose=verbose)
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


def is_production() -> bool:
    """``True`` when ``APP_ENV`` says production and the app is not in debug/testing."""
    if os.getenv(ENV_VAR, "").strip().lower() != "production":
        return False
    return not (current_app.debug or current_app.testing)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log each seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Development data commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    for name in ("shop.seeds", __name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Insert the development accounts and catalog rows that are missing."""
    _seed(bool(ctx.obj.get("verbose", False)))


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed."""
    if is_production():
        raise click.UsageError("'flask seed fresh' is not available in production.")
    if not yes:
        click.confirm("This will DROP all tables and recreate them. Continue?", abort=True)

    LOGGER.info("Recreating database schema...")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _seed(bool(ctx.obj.get("verbose", False)))
