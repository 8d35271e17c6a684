"""Transaction management commands."""

from datetime import datetime, time

import click
from spendwise.cli.date_filters import (
    collect_period_flags,
    parse_date_or_exit,
    period_options,
    resolve_cli_date_range,
)
from spendwise.cli.error_handling import handle_domain_error
from spendwise.cli.user_resolution import resolve_user_or_exit
from spendwise.domain.category import CategoryService
from spendwise.domain.entities import TransactionType
from spendwise.domain.errors import DomainError
from spendwise.domain.transaction import TransactionService
from spendwise.utils.amount_parser import parse_amount

TYPE_CHOICE = click.Choice(["income", "expense"], case_sensitive=False)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--user", required=True, help="Username or ID")
@click.option("--type", "transaction_type", type=TYPE_CHOICE, default="expense", help="Transaction type (default: expense)")
@click.option("--amount", required=True, help="Positive amount (e.g., 45.60 or $1,200)")
@click.option("--category", required=True, help="Category name")
@click.option("--description", required=True, help="Transaction description")
@click.option("--date", "date_str", help="Transaction date (YYYY-MM-DD or relative like 'yesterday'; default: now)")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    user: str,
    transaction_type: str,
    amount: str,
    category: str,
    description: str,
    date_str: str | None,
    notes: str | None,
):
    """Record an income or expense.

    Examples:
        spendwise transaction add --user alice --amount 45.60 --category "Food & Dining" --description "Groceries"
        spendwise transaction add --user alice --type income --amount 3000 --category Salary --description "March salary"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    category_service = CategoryService(db)

    user_id = resolve_user_or_exit(ctx, user)

    occurred_at = None
    if date_str:
        occurred_at = datetime.combine(parse_date_or_exit(ctx, date_str, "date"), time.min)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        category_obj = category_service.require_category_by_name(category)
        transaction_id = transaction_service.record_transaction(
            user_id=user_id,
            amount=txn_amount,
            transaction_type=TransactionType(transaction_type.upper()),
            category_id=category_obj.id,
            description=description,
            occurred_at=occurred_at,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Type: {transaction_type.capitalize()}")
    click.echo(f"  Amount: {txn_amount.format()}")
    click.echo(f"  Category: {category_obj.name}")
    click.echo(f"  Description: {description.strip()}")


@transaction_group.command("list")
@click.option("--user", required=True, help="Username or ID")
@click.option("--type", "transaction_type", type=TYPE_CHOICE, help="Only show one type")
@click.option("--category", help="Category name")
@click.option("--start-date", help="First day (inclusive)")
@click.option("--end-date", help="Last day (inclusive)")
@period_options
@click.pass_context
def list_transactions(
    ctx,
    user: str,
    transaction_type: str | None,
    category: str | None,
    start_date: str | None,
    end_date: str | None,
    **kwargs,
):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    category_service = CategoryService(db)

    user_id = resolve_user_or_exit(ctx, user)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
    )

    try:
        category_id = category_service.require_category_by_name(category).id if category else None
        transactions = transaction_service.list_transactions(
            user_id=user_id,
            start_date=start,
            end_date=end,
            category_id=category_id,
            transaction_type=TransactionType(transaction_type.upper()) if transaction_type else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>12}  {'Category':<20} Description")
    click.echo("-" * 80)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.occurred_on.isoformat():<12} "
            f"{txn.transaction_type.display_name:<8} {txn.signed_amount.format():>12}  "
            f"{txn.category_name:<20} {txn.description}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--user", required=True, help="Username or ID")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, user: str):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, user)
    try:
        service.delete_transaction(user_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
