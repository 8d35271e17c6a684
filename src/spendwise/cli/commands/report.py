"""Financial report commands."""

import click
from spendwise.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.user_resolution import resolve_user_or_exit
from spendwise.domain.entities import CategoryBreakdown
from spendwise.domain.errors import DomainError
from spendwise.domain.report import ReportService
from spendwise.utils.date_parser import get_date_range


def print_breakdown(title: str, rows: tuple[CategoryBreakdown, ...]) -> None:
    """Print per-category totals under a heading."""
    click.echo(f"\n{title}:")
    if not rows:
        click.echo("  (none)")
        return
    for row in rows:
        click.echo(f"  {row.category_name:<24} {row.total.format():>12}  ({row.count})")


def resolve_range_or_default(ctx, start_date, end_date, kwargs):
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
    )
    # Missing bounds come from the current month.
    default_start, default_end = get_date_range("this-month")
    return start or default_start, end or default_end


@click.group()
def report_group():
    """Financial reports."""
    pass


@report_group.command("summary")
@click.option("--user", required=True, help="Username or ID")
@click.option("--start-date", help="First day (default: first of this month)")
@click.option("--end-date", help="Last day (default: today)")
@period_options
@click.pass_context
def summary_report(ctx, user: str, start_date: str | None, end_date: str | None, **kwargs):
    """Income, expenses and per-category breakdowns."""
    service = ReportService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    start, end = resolve_range_or_default(ctx, start_date, end_date, kwargs)
    try:
        summary = service.financial_summary(user_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Financial summary {summary.start_date} to {summary.end_date}")
    click.echo(f"  Income:      {summary.total_income.format():>12}")
    click.echo(f"  Expenses:    {summary.total_expenses.format():>12}")
    click.echo(f"  Net savings: {summary.net_savings.format():>12}")
    print_breakdown("Income by category", summary.income_breakdown)
    print_breakdown("Expenses by category", summary.expense_breakdown)


@report_group.command("trend")
@click.option("--user", required=True, help="Username or ID")
@click.option("--start-date", help="First day (default: first of this month)")
@click.option("--end-date", help="Last day (default: today)")
@click.option("--fill-gaps", is_flag=True, help="Include days without transactions")
@period_options
@click.pass_context
def trend_report(
    ctx, user: str, start_date: str | None, end_date: str | None, fill_gaps: bool, **kwargs
):
    """Daily income and expense totals."""
    service = ReportService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    start, end = resolve_range_or_default(ctx, start_date, end_date, kwargs)
    try:
        report = service.trend_report(user_id, start, end, fill_gaps=fill_gaps)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not report.points:
        click.echo("No transactions found.")
        return

    click.echo(f"{'Date':<12} {'Income':>12} {'Expense':>12}")
    click.echo("-" * 38)
    for point in report.points:
        click.echo(
            f"{point.day.isoformat():<12} {point.income.format():>12} {point.expense.format():>12}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
