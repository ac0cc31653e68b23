"""Spreadsheet export command."""

import click
from spendboard.domain.export import ExportService, EXPORT_TYPES
from spendboard.cli.error_handling import handle_domain_error


@click.command("export")
@click.argument("export_type", type=click.Choice(EXPORT_TYPES))
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    help="Output file (defaults to spendboard-<type>-<date>.xlsx)",
)
@click.pass_context
def export(ctx, export_type: str, output: str | None):
    """Export expenses or projects to an .xlsx workbook.

    Examples:
        spendboard export expenses
        spendboard export projects --output projets.xlsx
    """
    db = ctx.obj["db"]
    service = ExportService(db)

    try:
        path = service.export(export_type, output_path=output)
        click.echo(f"Exported {export_type} to {path}")
    except (ValueError, OSError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
