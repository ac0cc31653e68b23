"""Project management commands."""

import click
from spendboard.domain.project import ProjectService, PROJECT_STATUSES
from spendboard.domain.dashboard import DashboardService
from spendboard.cli.error_handling import handle_domain_error
from spendboard.cli.resolution import (
    resolve_project_or_exit,
    parse_date_or_exit,
    parse_amount_or_exit,
)


@click.group()
def project_group():
    """Manage projects."""
    pass


@project_group.command("create")
@click.argument("name", metavar="PROJECT_NAME")
@click.option("--description", help="Project description")
@click.option("--client", help="Client name")
@click.option(
    "--status",
    type=click.Choice(PROJECT_STATUSES),
    default="active",
    show_default=True,
    help="Project status",
)
@click.option("--budget", help="Project budget (e.g., 15000 or '15 000,50')")
@click.option("--start-date", help="Start date (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--end-date", help="End date (YYYY-MM-DD or DD/MM/YYYY)")
@click.pass_context
def create_project(
    ctx,
    name: str,
    description: str | None,
    client: str | None,
    status: str,
    budget: str | None,
    start_date: str | None,
    end_date: str | None,
):
    """Create a new project.

    Examples:
        spendboard project create "Villa Alpha" --client "ACME" --budget 50000
        spendboard project create "Beta" --start-date 2024-01-01 --end-date 2024-06-30
    """
    db = ctx.obj["db"]
    service = ProjectService(db)

    try:
        project_id = service.create_project(
            name=name,
            description=description,
            client=client,
            status=status,
            budget=parse_amount_or_exit(ctx, budget, "budget") if budget else None,
            start_date=parse_date_or_exit(ctx, start_date, "start date") if start_date else None,
            end_date=parse_date_or_exit(ctx, end_date, "end date") if end_date else None,
        )
        click.echo(f"Created project '{name.strip()}' (ID: {project_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@project_group.command("list")
@click.option("--status", type=click.Choice(PROJECT_STATUSES), help="Only show this status")
@click.pass_context
def list_projects(ctx, status: str | None):
    """List all projects."""
    db = ctx.obj["db"]
    service = ProjectService(db)

    projects = service.list_projects(status=status)
    if not projects:
        click.echo("No projects found.")
        return

    click.echo("\nProjects:")
    click.echo("-" * 80)
    for p in projects:
        budget = f"{p.budget:,.2f}" if p.budget is not None else "-"
        click.echo(
            f"ID: {p.id:3d} | {p.name:25s} | {p.status:9s} | "
            f"Client: {p.client or '-':15s} | Budget: {budget}"
        )


@project_group.command("show")
@click.argument("project", metavar="PROJECT")
@click.pass_context
def show_project(ctx, project: str):
    """Show a project with its spending and revenue.

    PROJECT can be a project name or ID.
    """
    db = ctx.obj["db"]
    project_obj = resolve_project_or_exit(ctx, db, project)
    summary = DashboardService(db).project_summary(project_obj.id)

    click.echo(f"\nProject {project_obj.id}: {project_obj.name}")
    click.echo("-" * 60)
    click.echo(f"Status:       {project_obj.status}")
    click.echo(f"Client:       {project_obj.client or '-'}")
    click.echo(f"Description:  {project_obj.description or '-'}")
    click.echo(f"Start date:   {project_obj.start_date or '-'}")
    click.echo(f"End date:     {project_obj.end_date or '-'}")
    if project_obj.budget is not None:
        click.echo(f"Budget:       {project_obj.budget:,.2f}")
    click.echo(f"Expenses:     {summary.expense_count} ({summary.total_spent:,.2f})")
    click.echo(f"Revenue:      {summary.total_revenue:,.2f}")
    click.echo(f"Margin:       {summary.margin:,.2f}")
    if project_obj.budget:
        click.echo(f"Budget used:  {summary.budget_utilization:.1f}%")


@project_group.command("edit")
@click.argument("project", metavar="PROJECT")
@click.option("--name", help="New project name")
@click.option("--description", help="New description")
@click.option("--client", help="New client name")
@click.option("--status", type=click.Choice(PROJECT_STATUSES), help="New status")
@click.option("--budget", help="New budget")
@click.option("--start-date", help="New start date")
@click.option("--end-date", help="New end date")
@click.pass_context
def edit_project(
    ctx,
    project: str,
    name: str | None,
    description: str | None,
    client: str | None,
    status: str | None,
    budget: str | None,
    start_date: str | None,
    end_date: str | None,
):
    """Edit a project.

    PROJECT can be a project name or ID. Only the given options change.

    Examples:
        spendboard project edit "Alpha" --status completed
        spendboard project edit 3 --budget 75000 --end-date 2024-12-31
    """
    db = ctx.obj["db"]
    service = ProjectService(db)
    project_obj = resolve_project_or_exit(ctx, db, project)

    fields = {}
    if name is not None:
        fields["name"] = name
    if description is not None:
        fields["description"] = description
    if client is not None:
        fields["client"] = client
    if status is not None:
        fields["status"] = status
    if budget is not None:
        fields["budget"] = parse_amount_or_exit(ctx, budget, "budget")
    if start_date is not None:
        fields["start_date"] = parse_date_or_exit(ctx, start_date, "start date")
    if end_date is not None:
        fields["end_date"] = parse_date_or_exit(ctx, end_date, "end date")

    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        service.update_project(project_obj.id, **fields)
        click.echo(f"Updated project {project_obj.id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@project_group.command("delete")
@click.argument("project", metavar="PROJECT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_project(ctx, project: str, yes: bool):
    """Delete a project.

    PROJECT can be a project name or ID. The project can only be deleted
    if no expenses or revenues reference it.
    """
    db = ctx.obj["db"]
    service = ProjectService(db)
    project_obj = resolve_project_or_exit(ctx, db, project)

    if not yes and not click.confirm(
        f"Are you sure you want to delete project '{project_obj.name}' (ID: {project_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_project(project_obj.id)
        click.echo(f"Deleted project '{project_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register project commands with main CLI."""
    cli.add_command(project_group, name="project")
