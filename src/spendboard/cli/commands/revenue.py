"""Revenue commands."""

import click
from spendboard.domain.revenue import RevenueService, PAYMENT_STATUSES
from spendboard.cli.error_handling import handle_domain_error
from spendboard.cli.resolution import (
    resolve_project_or_exit,
    parse_date_or_exit,
    parse_amount_or_exit,
)


@click.group()
def revenue_group():
    """Manage revenues."""
    pass


@revenue_group.command("add")
@click.option("--project", required=True, help="Project name or ID")
@click.option("--amount", required=True, help="Revenue amount")
@click.option("--date", "revenue_date", default="today", show_default=True, help="Revenue date")
@click.option("--description", help="Revenue description")
@click.option("--invoice", help="Invoice reference")
@click.option(
    "--status",
    type=click.Choice(PAYMENT_STATUSES),
    default="pending",
    show_default=True,
    help="Payment status",
)
@click.pass_context
def add_revenue(
    ctx,
    project: str,
    amount: str,
    revenue_date: str,
    description: str | None,
    invoice: str | None,
    status: str,
):
    """Add a revenue entry.

    Examples:
        spendboard revenue add --project Alpha --amount 20000 --invoice F-2024-001
        spendboard revenue add --project 2 --amount 5000 --status received
    """
    db = ctx.obj["db"]
    service = RevenueService(db)

    project_obj = resolve_project_or_exit(ctx, db, project)
    parsed_amount = parse_amount_or_exit(ctx, amount)
    parsed_date = parse_date_or_exit(ctx, revenue_date)

    try:
        revenue_id = service.create_revenue(
            project_id=project_obj.id,
            amount=parsed_amount,
            revenue_date=parsed_date,
            description=description,
            invoice_reference=invoice,
            payment_status=status,
        )
        click.echo(f"Added revenue {revenue_id}: {parsed_amount:,.2f} on {project_obj.name}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@revenue_group.command("list")
@click.option("--project", help="Only show this project (name or ID)")
@click.option("--status", type=click.Choice(PAYMENT_STATUSES), help="Only show this payment status")
@click.option("--search", "text", help="Text to find in project, description or invoice")
@click.pass_context
def list_revenues(ctx, project: str | None, status: str | None, text: str | None):
    """List revenues, newest first."""
    db = ctx.obj["db"]
    service = RevenueService(db)

    project_id = resolve_project_or_exit(ctx, db, project).id if project else None
    revenues = service.list_revenues(project_id=project_id, payment_status=status, text=text)
    if not revenues:
        click.echo("No revenues found.")
        return

    projects = {p.id: p.name for p in db.list_projects()}

    click.echo("\nRevenues:")
    click.echo("-" * 90)
    for r in revenues:
        click.echo(
            f"ID: {r.id:4d} | {r.revenue_date} | {r.amount:>12,.2f} | "
            f"{projects.get(r.project_id, '?'):20s} | {r.payment_status:8s} | "
            f"{r.invoice_reference or ''}"
        )
    click.echo("-" * 90)
    click.echo(f"{len(revenues)} revenues, total {service.total_amount(revenues):,.2f}")


@revenue_group.command("status")
@click.argument("revenue_id", type=int)
@click.argument("status", type=click.Choice(PAYMENT_STATUSES))
@click.pass_context
def set_revenue_status(ctx, revenue_id: int, status: str):
    """Change the payment status of a revenue entry."""
    db = ctx.obj["db"]
    service = RevenueService(db)

    try:
        service.update_payment_status(revenue_id, status)
        click.echo(f"Revenue {revenue_id} is now {status}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@revenue_group.command("delete")
@click.argument("revenue_id", type=int)
@click.pass_context
def delete_revenue(ctx, revenue_id: int):
    """Delete a revenue entry."""
    db = ctx.obj["db"]
    service = RevenueService(db)

    try:
        service.delete_revenue(revenue_id)
        click.echo(f"Deleted revenue {revenue_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register revenue commands with main CLI."""
    cli.add_command(revenue_group, name="revenue")
