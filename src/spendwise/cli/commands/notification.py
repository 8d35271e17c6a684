"""Notification inbox commands."""

import click
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.user_resolution import resolve_user_or_exit
from spendwise.domain.errors import DomainError
from spendwise.domain.notification import NotificationService


@click.group()
def notification_group():
    """Read budget and goal notifications."""
    pass


@notification_group.command("list")
@click.option("--user", required=True, help="Username or ID")
@click.option("--unread", "unread_only", is_flag=True, help="Only unread notifications")
@click.pass_context
def list_notifications(ctx, user: str, unread_only: bool):
    """List notifications, newest first."""
    service = NotificationService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    notifications = service.list_notifications(user_id, unread_only=unread_only)
    if not notifications:
        click.echo("No notifications.")
        return

    click.echo(f"{service.unread_count(user_id)} unread")
    for note in notifications:
        marker = " " if note.is_read else "*"
        click.echo(f"{marker} {note.id:<5} {note.created_at:%Y-%m-%d %H:%M}  {note.message}")


@notification_group.command("read")
@click.argument("notification_id", type=int, required=False)
@click.option("--user", required=True, help="Username or ID")
@click.option("--all", "mark_all", is_flag=True, help="Mark every notification as read")
@click.pass_context
def read_notifications(ctx, notification_id: int | None, user: str, mark_all: bool):
    """Mark one notification, or all of them, as read."""
    service = NotificationService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)

    if mark_all == (notification_id is not None):
        click.echo("Error: Give either a notification ID or --all.", err=True)
        ctx.exit(1)

    if mark_all:
        count = service.mark_all_as_read(user_id)
        click.echo(f"Marked {count} notifications as read")
        return

    try:
        service.mark_as_read(user_id, notification_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Marked notification {notification_id} as read")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notification_group, name="notification")
