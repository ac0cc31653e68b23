"""Dashboard commands."""

import click
from spendboard.domain.dashboard import DashboardService
from spendboard.utils.date_parser import PERIOD_TYPES, COMPARISON_TYPES

period_option = click.option(
    "--period",
    type=click.Choice(PERIOD_TYPES),
    default="all",
    show_default=True,
    help="Only count expenses since the start of the current month, quarter or year",
)


@click.group()
def dashboard_group():
    """Show spending dashboards."""
    pass


@dashboard_group.command("stats")
@click.pass_context
def show_stats(ctx):
    """Show project and expense totals."""
    stats = DashboardService(ctx.obj["db"]).project_stats()

    click.echo(f"Projects:             {stats.project_count}")
    click.echo(f"Expenses:             {stats.expense_count}")
    click.echo(f"Total spent:          {stats.total_amount:,.2f}")
    click.echo(f"Average per project:  {stats.average_per_project:,.2f}")


@dashboard_group.command("monthly")
@click.pass_context
def show_monthly(ctx):
    """Show total expenses per month."""
    totals = DashboardService(ctx.obj["db"]).monthly_totals()
    if not totals:
        click.echo("No expenses found.")
        return

    click.echo("\nMonthly expenses:")
    click.echo("-" * 30)
    for month, total in totals:
        click.echo(f"{month}  {total:>15,.2f}")


@dashboard_group.command("by-category")
@click.pass_context
def show_by_category(ctx):
    """Show total expenses per category."""
    totals = DashboardService(ctx.obj["db"]).totals_by_category()
    if not totals:
        click.echo("No expenses found.")
        return

    grand_total = sum(total for _, total in totals)
    click.echo("\nExpenses by category:")
    click.echo("-" * 50)
    for name, total in totals:
        share = total / grand_total * 100 if grand_total else 0
        click.echo(f"{name:25s} {total:>15,.2f} {share:5.0f}%")


@dashboard_group.command("projects")
@period_option
@click.option("--limit", type=int, default=8, show_default=True, help="Number of projects")
@click.pass_context
def show_projects(ctx, period: str, limit: int):
    """Compare total expenses per project."""
    totals = DashboardService(ctx.obj["db"]).project_comparison(period=period, limit=limit)
    if not totals:
        click.echo("No expenses found.")
        return

    click.echo(f"\nExpenses per project ({period}):")
    click.echo("-" * 40)
    for name, total in totals:
        click.echo(f"{name:20s} {total:>15,.2f}")


@dashboard_group.command("top")
@period_option
@click.option("--limit", type=int, default=5, show_default=True, help="Number of projects")
@click.pass_context
def show_top(ctx, period: str, limit: int):
    """Show the projects with the highest spending and their budget use."""
    entries = DashboardService(ctx.obj["db"]).top_projects(period=period, limit=limit)
    if not entries:
        click.echo("No expenses found.")
        return

    click.echo(f"\nTop projects ({period}):")
    click.echo("-" * 90)
    for rank, entry in enumerate(entries, start=1):
        line = (
            f"{rank}. {entry.name:20s} | {entry.total_spent:>12,.2f} | "
            f"{entry.expense_count:3d} expenses | {entry.share:5.1f}% | {entry.status:9s}"
        )
        if entry.budget > 0:
            line += f" | {entry.budget_utilization:5.1f}% of budget ({entry.budget_alert})"
        click.echo(line)


@dashboard_group.command("trend")
@click.pass_context
def show_trend(ctx):
    """Compare this month with the previous month."""
    stats = DashboardService(ctx.obj["db"]).trending_stats()

    click.echo(f"Projects:                  {stats.project_count}")
    click.echo(
        f"Expenses this month:       {stats.current_month_total:,.2f} "
        f"({stats.amount_trend:+.1f}%)"
    )
    click.echo(
        f"Transactions this month:   {stats.current_month_count} "
        f"({stats.count_trend:+.1f}%)"
    )
    click.echo(f"Average per transaction:   {stats.average_per_transaction:,.2f}")


@dashboard_group.command("compare")
@click.argument("kind", type=click.Choice(COMPARISON_TYPES), default="month-prev")
@click.pass_context
def show_compare(ctx, kind: str):
    """Compare per-project spending between two periods.

    KIND is month-prev, month-next, quarter-prev or quarter-next.
    """
    entries = DashboardService(ctx.obj["db"]).period_comparison(kind)
    if not entries:
        click.echo("No expenses in either period.")
        return

    click.echo(f"\nPeriod comparison ({kind}):")
    click.echo(f"{'Project':20s} {'Current':>15s} {'Compared':>15s}")
    click.echo("-" * 52)
    for entry in entries:
        click.echo(
            f"{entry.name:20s} {entry.current_period:>15,.2f} {entry.compare_period:>15,.2f}"
        )


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard_group, name="dashboard")
