"""Budget management commands."""

import click
from dateutil.relativedelta import relativedelta
from spendwise.cli.date_filters import parse_date_or_exit
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.user_resolution import resolve_user_or_exit
from spendwise.domain.budget import BudgetService
from spendwise.domain.category import CategoryService
from spendwise.domain.entities import BudgetStatus
from spendwise.domain.errors import DomainError
from spendwise.utils.amount_parser import parse_amount
from spendwise.utils.date_parser import get_date_range


def format_status_line(status: BudgetStatus) -> str:
    """One-line summary of a budget's spending state."""
    budget = status.budget
    flag = " OVER BUDGET" if status.exceeded else ""
    return (
        f"{budget.id:<6} {budget.name:<24} {status.spent.format():>12} / "
        f"{budget.amount.format():<12} {status.utilization}%{flag}"
    )


@click.group()
def budget_group():
    """Manage budgets."""
    pass


@budget_group.command("create")
@click.argument("name")
@click.option("--user", required=True, help="Username or ID")
@click.option("--amount", required=True, help="Spending limit")
@click.option("--start-date", help="First day (default: first of this month)")
@click.option("--end-date", help="Last day (default: one month after the start)")
@click.option("--category", help="Category name (default: all expenses)")
@click.option("--description", help="Budget description")
@click.pass_context
def create_budget(
    ctx,
    name: str,
    user: str,
    amount: str,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    description: str | None,
):
    """Create a budget for a date window.

    Examples:
        spendwise budget create "Groceries" --user alice --amount 400 --category "Food & Dining"
        spendwise budget create "Everything" --user alice --amount 2000 --start-date 2024-01-01 --end-date 2024-01-31
    """
    db = ctx.obj["db"]
    budget_service = BudgetService(db)
    category_service = CategoryService(db)

    user_id = resolve_user_or_exit(ctx, user)

    default_start, _ = get_date_range("this-month")
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else default_start
    if end_date:
        end = parse_date_or_exit(ctx, end_date, "end date")
    else:
        end = start + relativedelta(months=1, days=-1)

    try:
        budget_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        category_id = category_service.require_category_by_name(category).id if category else None
        budget_id = budget_service.create_budget(
            user_id=user_id,
            name=name,
            amount=budget_amount,
            start_date=start,
            end_date=end,
            category_id=category_id,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    scope = f" for '{category}'" if category else ""
    click.echo(f"Created budget '{name}'{scope} (ID: {budget_id})")
    click.echo(f"  {budget_amount.format()} from {start} to {end}")


@budget_group.command("list")
@click.option("--user", required=True, help="Username or ID")
@click.option("--active", "active_only", is_flag=True, help="Only budgets covering today")
@click.pass_context
def list_budgets(ctx, user: str, active_only: bool):
    """List budgets with their spending."""
    service = BudgetService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    statuses = service.list_budget_statuses(user_id, active_only=active_only)
    if not statuses:
        click.echo("No budgets found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Spent':>12} / {'Amount':<12} Used")
    click.echo("-" * 70)
    for status in statuses:
        click.echo(format_status_line(status))


@budget_group.command("status")
@click.argument("budget_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def budget_status(ctx, budget_id: int, user: str):
    """Show detailed spending state for one budget."""
    service = BudgetService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        status = service.get_budget_status(user_id, budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    budget = status.budget
    click.echo(f"Budget: {budget.name}")
    click.echo(f"  Period: {budget.start_date} to {budget.end_date} ({status.total_days} days)")
    click.echo(f"  Amount: {budget.amount.format()}")
    click.echo(f"  Spent: {status.spent.format()} ({status.utilization}%)")
    click.echo(f"  Remaining: {status.remaining.format()}")
    click.echo(f"  Days remaining: {status.days_remaining}")
    if status.exceeded:
        click.echo("  Status: Exceeded")
    elif status.active:
        click.echo("  Status: Active")
    else:
        click.echo("  Status: Inactive")


@budget_group.command("delete")
@click.argument("budget_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def delete_budget(ctx, budget_id: int, user: str):
    """Delete a budget."""
    service = BudgetService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        service.delete_budget(user_id, budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted budget {budget_id}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
