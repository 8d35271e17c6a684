"""CLI error handling helpers."""

import click

from spendwise.domain.errors import DomainError
from spendwise.log import get_logger

logger = get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a domain error to stderr and exit with status 1."""
    logger.debug(
        "command_failed",
        command=ctx.command_path,
        error_type=type(error).__name__,
        error=str(error),
    )
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
