"""User management commands."""

import click
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.user_resolution import resolve_user_or_exit
from spendwise.domain.errors import DomainError
from spendwise.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("username")
@click.option("--email", required=True, help="Email address")
@click.pass_context
def create_user(ctx, username: str, email: str):
    """Create a new user."""
    service = UserService(ctx.obj["db"])
    try:
        user_id = service.create_user(username=username, email=email)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{username.strip()}' (ID: {user_id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = UserService(ctx.obj["db"])
    users = service.list_users()
    if not users:
        click.echo("No users found. Use 'user create' to add one.")
        return

    click.echo(f"{'ID':<6} {'Username':<20} {'Email':<30}")
    click.echo("-" * 58)
    for user in users:
        click.echo(f"{user.id:<6} {user.username:<20} {user.email:<30}")


@user_group.command("delete")
@click.argument("user")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_user(ctx, user: str, yes: bool):
    """Delete a user and everything they own."""
    service = UserService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    if not yes:
        click.confirm(
            f"Delete user {user_id} with all transactions, budgets, goals and notifications?",
            abort=True,
        )
    try:
        service.delete_user(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted user {user_id}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
