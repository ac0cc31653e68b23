"""Expense commands."""

import click
from spendboard.domain.expense import ExpenseService
from spendboard.cli.error_handling import handle_domain_error
from spendboard.cli.resolution import (
    resolve_project_or_exit,
    resolve_category_or_exit,
    parse_date_or_exit,
    parse_amount_or_exit,
)


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.option("--project", required=True, help="Project name or ID")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--amount", required=True, help="Expense amount (e.g., 1250.50 or '1 250,50')")
@click.option(
    "--date",
    "expense_date",
    default="today",
    show_default=True,
    help="Expense date (YYYY-MM-DD, DD/MM/YYYY or 'today', 'yesterday')",
)
@click.option("--description", help="Expense description")
@click.option("--supplier", help="Supplier name (created if unknown)")
@click.option("--invoice", help="Invoice reference")
@click.pass_context
def add_expense(
    ctx,
    project: str,
    category: str,
    amount: str,
    expense_date: str,
    description: str | None,
    supplier: str | None,
    invoice: str | None,
):
    """Add an expense.

    Examples:
        spendboard expense add --project Alpha --category FOURNISSEUR --amount 1200
        spendboard expense add --project 2 --category NDF --amount "85,40" --date 2024-03-12
    """
    db = ctx.obj["db"]
    service = ExpenseService(db)

    project_obj = resolve_project_or_exit(ctx, db, project)
    category_obj = resolve_category_or_exit(ctx, db, category)
    parsed_amount = parse_amount_or_exit(ctx, amount)
    parsed_date = parse_date_or_exit(ctx, expense_date)

    try:
        expense_id = service.create_expense(
            project_id=project_obj.id,
            category_id=category_obj.id,
            amount=parsed_amount,
            expense_date=parsed_date,
            description=description,
            supplier_name=supplier,
            invoice_reference=invoice,
        )
        click.echo(f"Added expense {expense_id}: {parsed_amount:,.2f} on {project_obj.name}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@expense_group.command("list")
@click.option("--project", help="Only show this project (name or ID)")
@click.option("--category", help="Only show this category (name or ID)")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.option("--limit", type=int, help="Maximum number of expenses to show")
@click.pass_context
def list_expenses(
    ctx,
    project: str | None,
    category: str | None,
    start_date: str | None,
    end_date: str | None,
    limit: int | None,
):
    """List expenses, newest first."""
    db = ctx.obj["db"]
    service = ExpenseService(db)

    project_id = resolve_project_or_exit(ctx, db, project).id if project else None
    category_id = resolve_category_or_exit(ctx, db, category).id if category else None
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    expenses = service.list_expenses(
        start_date=start,
        end_date=end,
        project_id=project_id,
        category_id=category_id,
        limit=limit,
    )
    if not expenses:
        click.echo("No expenses found.")
        return

    projects = {p.id: p.name for p in db.list_projects()}
    categories = {c.id: c.name for c in db.list_categories()}

    click.echo("\nExpenses:")
    click.echo("-" * 90)
    for e in expenses:
        click.echo(
            f"ID: {e.id:4d} | {e.expense_date} | {e.amount:>12,.2f} | "
            f"{projects.get(e.project_id, '?'):20s} | {categories.get(e.category_id, '?'):15s} | "
            f"{e.description or ''}"
        )
    total = sum(e.amount for e in expenses)
    click.echo("-" * 90)
    click.echo(f"{len(expenses)} expenses, total {total:,.2f}")


@expense_group.command("edit")
@click.argument("expense_id", type=int)
@click.option("--project", help="New project (name or ID)")
@click.option("--category", help="New category (name or ID)")
@click.option("--amount", help="New amount")
@click.option("--date", "expense_date", help="New date")
@click.option("--description", help="New description")
@click.option("--supplier", help="New supplier name (empty string clears it)")
@click.option("--invoice", help="New invoice reference")
@click.pass_context
def edit_expense(
    ctx,
    expense_id: int,
    project: str | None,
    category: str | None,
    amount: str | None,
    expense_date: str | None,
    description: str | None,
    supplier: str | None,
    invoice: str | None,
):
    """Edit an expense. Only the given options change."""
    db = ctx.obj["db"]
    service = ExpenseService(db)

    fields = {}
    if project is not None:
        fields["project_id"] = resolve_project_or_exit(ctx, db, project).id
    if category is not None:
        fields["category_id"] = resolve_category_or_exit(ctx, db, category).id
    if amount is not None:
        fields["amount"] = parse_amount_or_exit(ctx, amount)
    if expense_date is not None:
        fields["expense_date"] = parse_date_or_exit(ctx, expense_date)
    if description is not None:
        fields["description"] = description
    if invoice is not None:
        fields["invoice_reference"] = invoice

    if not fields and supplier is None:
        click.echo("Nothing to update.")
        return

    try:
        service.update_expense(expense_id, supplier_name=supplier, **fields)
        click.echo(f"Updated expense {expense_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.pass_context
def delete_expense(ctx, expense_id: int):
    """Delete an expense."""
    db = ctx.obj["db"]
    service = ExpenseService(db)

    try:
        service.delete_expense(expense_id)
        click.echo(f"Deleted expense {expense_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
