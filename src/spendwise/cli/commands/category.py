"""Category management commands."""

import click
from spendwise.cli.error_handling import handle_domain_error
from spendwise.domain.category import CategoryService
from spendwise.domain.entities import CategoryType
from spendwise.domain.errors import DomainError

TYPE_CHOICE = click.Choice(["income", "expense"], case_sensitive=False)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=TYPE_CHOICE, help="Only show one type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories grouped by type."""
    service = CategoryService(ctx.obj["db"])
    wanted = CategoryType(category_type.upper()) if category_type else None
    categories = service.list_categories(category_type=wanted)
    if not categories:
        click.echo("No categories found. Run 'category init' to create default categories.")
        return

    for kind in CategoryType:
        rows = [cat for cat in categories if cat.category_type == kind]
        if not rows:
            continue
        click.echo(f"\n{kind.display_name}:")
        for cat in rows:
            click.echo(f"  {cat.name} (ID: {cat.id}) {cat.color}")


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=TYPE_CHOICE, default="expense", help="Category type (default: expense)")
@click.option("--color", help="Hex color, e.g. #28a745 (default: #007bff)")
@click.option("--description", help="Category description")
@click.pass_context
def create_category(ctx, name: str, category_type: str, color: str | None, description: str | None):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(
            name=name,
            category_type=CategoryType(category_type.upper()),
            color=color,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {category_type.lower()} category '{name}' (ID: {category_id})")


@category_group.command("delete")
@click.argument("name")
@click.pass_context
def delete_category(ctx, name: str):
    """Delete a category that has no transactions or budgets."""
    service = CategoryService(ctx.obj["db"])
    try:
        category = service.require_category_by_name(name)
        service.delete_category(category.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{name}'")


@category_group.command("init")
@click.pass_context
def init_categories(ctx):
    """Create the default income and expense categories."""
    service = CategoryService(ctx.obj["db"])
    created = service.initialize_default_categories()
    if created == 0:
        click.echo("Categories already exist.")
        return
    click.echo(f"Successfully created {created} categories.")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
