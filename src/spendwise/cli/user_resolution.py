"""CLI helpers for user resolution."""

from __future__ import annotations

import click
from spendwise.domain.user import UserService
from spendwise.utils.user_resolver import resolve_user


def resolve_user_or_exit(ctx: click.Context, user: str | int) -> int:
    """Resolve a username or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_user(UserService(ctx.obj["db"]), user)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
