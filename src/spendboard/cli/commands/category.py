"""Category (expense type) commands."""

import click
from spendboard.domain.category import CategoryService
from spendboard.cli.error_handling import handle_domain_error
from spendboard.cli.resolution import resolve_category_or_exit


@click.group()
def category_group():
    """Manage expense categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'spendboard category init' to create the defaults.")
        return

    click.echo("\nCategories:")
    click.echo("-" * 60)
    for cat in categories:
        click.echo(f"ID: {cat.id:3d} | {cat.name:25s} | Code: {cat.code}")


@category_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--code", help="Category code (derived from the name if omitted)")
@click.pass_context
def create_category(ctx, name: str, code: str | None):
    """Create a new category.

    Examples:
        spendboard category create "Location"
        spendboard category create "Note de frais" --code NDF
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(name=name, code=code)
        category = service.get_category(category_id)
        click.echo(f"Created category '{category.name}' (ID: {category_id}, code: {category.code})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("init")
@click.pass_context
def init_categories(ctx):
    """Create the categories recognized by the spreadsheet importer."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.init_default_categories()
    if created:
        click.echo(f"Created {len(created)} categories: {', '.join(created)}")
    else:
        click.echo("Default categories already exist.")


@category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a category.

    CATEGORY can be a category name or ID. The category can only be
    deleted if no expenses reference it.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)
    category_obj = resolve_category_or_exit(ctx, db, category)

    if not yes and not click.confirm(
        f"Are you sure you want to delete category '{category_obj.name}' (ID: {category_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_category(category_obj.id)
        click.echo(f"Deleted category '{category_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
