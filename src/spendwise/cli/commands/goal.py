"""Savings goal commands."""

import click
from spendwise.cli.date_filters import parse_date_or_exit
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.user_resolution import resolve_user_or_exit
from spendwise.domain.entities import Goal, GoalStatus
from spendwise.domain.errors import DomainError
from spendwise.domain.goal import GoalService
from spendwise.utils.amount_parser import parse_amount

STATUS_CHOICE = click.Choice([status.value.lower() for status in GoalStatus], case_sensitive=False)


def parse_amount_or_exit(ctx: click.Context, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def echo_goal(goal: Goal) -> None:
    """Print a goal's progress."""
    click.echo(f"Goal {goal.id}: {goal.name} [{goal.status.display_name}]")
    click.echo(
        f"  Saved: {goal.current_amount.format()} of {goal.target_amount.format()} "
        f"({goal.progress_percentage}%)"
    )
    click.echo(f"  Target date: {goal.target_date}")
    if goal.completed_at is not None:
        click.echo(f"  Completed: {goal.completed_at:%Y-%m-%d %H:%M}")


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.option("--user", required=True, help="Username or ID")
@click.option("--target", "target_amount", required=True, help="Amount to save")
@click.option("--by", "target_date", required=True, help="Target date (YYYY-MM-DD or relative like 'next year')")
@click.option("--description", help="Goal description")
@click.pass_context
def create_goal(ctx, name: str, user: str, target_amount: str, target_date: str, description: str | None):
    """Create a savings goal.

    Examples:
        spendwise goal create "New laptop" --user alice --target 1500 --by 2025-06-01
    """
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    target = parse_amount_or_exit(ctx, target_amount)
    by = parse_date_or_exit(ctx, target_date, "target date")
    try:
        goal_id = service.create_goal(
            user_id=user_id,
            name=name,
            target_amount=target,
            target_date=by,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created goal '{name.strip()}' (ID: {goal_id})")
    click.echo(f"  Save {target.format()} by {by}")


@goal_group.command("list")
@click.option("--user", required=True, help="Username or ID")
@click.option("--status", type=STATUS_CHOICE, help="Only goals with this status")
@click.option("--search", help="Keyword in name or description")
@click.option("--overdue", is_flag=True, help="Only active goals past their target date")
@click.pass_context
def list_goals(ctx, user: str, status: str | None, search: str | None, overdue: bool):
    """List goals ordered by target date."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)

    if overdue:
        goals = service.list_overdue_goals(user_id)
    elif search:
        goals = service.search_goals(user_id, search)
    else:
        goals = service.list_goals(user_id, status=GoalStatus(status.upper()) if status else None)
    if status and (overdue or search):
        goals = [goal for goal in goals if goal.status.value == status.upper()]

    if not goals:
        click.echo("No goals found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Status':<10} {'Saved':>12} / {'Target':<12} {'Progress':>9}  Target date")
    click.echo("-" * 90)
    for goal in goals:
        click.echo(
            f"{goal.id:<6} {goal.name:<24} {goal.status.display_name:<10} "
            f"{goal.current_amount.format():>12} / {goal.target_amount.format():<12} "
            f"{str(goal.progress_percentage) + '%':>9}  {goal.target_date}"
        )


@goal_group.command("contribute")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def contribute(ctx, goal_id: int, amount: str, user: str):
    """Add money to an active goal."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    money = parse_amount_or_exit(ctx, amount)
    try:
        goal = service.contribute(user_id, goal_id, money)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added {money.format()} to '{goal.name}'")
    echo_goal(goal)


@goal_group.command("set-progress")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def set_progress(ctx, goal_id: int, amount: str, user: str):
    """Set the amount saved so far."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    money = parse_amount_or_exit(ctx, amount)
    try:
        goal = service.set_progress(user_id, goal_id, money)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_goal(goal)


@goal_group.command("complete")
@click.argument("goal_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def complete_goal(ctx, goal_id: int, user: str):
    """Mark a goal as completed."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        goal = service.complete_goal(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_goal(goal)


@goal_group.command("cancel")
@click.argument("goal_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def cancel_goal(ctx, goal_id: int, user: str):
    """Cancel a goal."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        goal = service.cancel_goal(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_goal(goal)


@goal_group.command("reactivate")
@click.argument("goal_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def reactivate_goal(ctx, goal_id: int, user: str):
    """Return a completed or cancelled goal to active."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        goal = service.reactivate_goal(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_goal(goal)


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.option("--name", help="New name")
@click.option("--target", "target_amount", help="New target amount")
@click.option("--by", "target_date", help="New target date")
@click.option("--description", help="New description")
@click.pass_context
def update_goal(
    ctx,
    goal_id: int,
    user: str,
    name: str | None,
    target_amount: str | None,
    target_date: str | None,
    description: str | None,
):
    """Update a goal. Only the options given are changed."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        goal = service.get_goal(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    target = parse_amount_or_exit(ctx, target_amount) if target_amount else goal.target_amount
    by = parse_date_or_exit(ctx, target_date, "target date") if target_date else goal.target_date
    try:
        goal = service.update_goal(
            user_id,
            goal_id,
            name=name if name is not None else goal.name,
            target_amount=target,
            target_date=by,
            description=description if description is not None else goal.description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_goal(goal)


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def delete_goal(ctx, goal_id: int, user: str):
    """Delete a goal."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        service.delete_goal(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted goal {goal_id}")


@goal_group.command("summary")
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def goal_summary(ctx, user: str):
    """Summarize active goals."""
    service = GoalService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    summary = service.goal_summary(user_id)
    click.echo("Goal summary:")
    click.echo(f"  Active goals: {summary.active_goals_count}")
    click.echo(f"  Saved: {summary.total_current_amount.format()} of {summary.total_target_amount.format()}")
    click.echo(f"  Remaining: {summary.total_remaining_amount.format()}")
    click.echo(f"  Overall progress: {summary.overall_progress_percentage}%")
    click.echo(f"  Near completion: {summary.near_completion_count}")
    click.echo(f"  Overdue: {summary.overdue_count}")
    click.echo(f"  Completed: {summary.completed_count}")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
