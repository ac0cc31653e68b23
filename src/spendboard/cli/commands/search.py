"""Global search command."""

import click
from spendboard.domain.search import SearchService, MIN_TERM_LENGTH


@click.command("search")
@click.argument("term")
@click.pass_context
def search(ctx, term: str):
    """Search expenses and projects.

    Matches expense descriptions and project names, descriptions and
    clients, ignoring case.

    Examples:
        spendboard search alpha
    """
    db = ctx.obj["db"]
    service = SearchService(db)

    if len(term.strip()) < MIN_TERM_LENGTH:
        click.echo(f"Search term must be at least {MIN_TERM_LENGTH} characters.")
        return

    results = service.search(term)
    if results.is_empty:
        click.echo(f"No results for '{term}'.")
        return

    if results.projects:
        click.echo("\nProjects:")
        for p in results.projects:
            click.echo(f"  ID: {p.id:3d} | {p.name} ({p.client or '-'})")

    if results.expenses:
        projects = {p.id: p.name for p in db.list_projects()}
        click.echo("\nExpenses:")
        for e in results.expenses:
            click.echo(
                f"  ID: {e.id:4d} | {e.expense_date} | {e.amount:>12,.2f} | "
                f"{projects.get(e.project_id, '?')} | {e.description or ''}"
            )


def register_commands(cli):
    """Register search command with main CLI."""
    cli.add_command(search)
