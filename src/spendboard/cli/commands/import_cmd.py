"""Spreadsheet import command."""

import click
from spendboard.domain.sheet_import import SheetImportService
from spendboard.domain.errors import SheetImportError
from spendboard.cli.error_handling import handle_domain_error
from spendboard.cli.progress import ImportProgress


@click.command("import")
@click.argument("sheet_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Show the records that would be imported without writing")
@click.pass_context
def import_sheet(ctx, sheet_file: str, dry_run: bool):
    """Import expenses from an .xlsx sheet.

    The first sheet must have a header row with a "Projet" column, a
    "Désignation" (or "Catégorie") column and month columns (Janvier to
    Décembre). Each positive amount becomes one expense dated the first
    of its month in the current year. Missing projects and categories are
    created.

    Examples:
        spendboard import depenses-2024.xlsx
        spendboard import depenses-2024.xlsx --dry-run
    """
    db = ctx.obj["db"]
    service = SheetImportService(db)

    try:
        if dry_run:
            result = service.preview_file(sheet_file)
            records = result.records
            click.echo(f"\nDry run: {len(records)} records would be imported")
            for record in records:
                click.echo(
                    f"  Row {record.row_number:4d} | {record.project_name:20s} | "
                    f"{record.category_label:15s} | {record.period_key:10s} | {record.amount:>12,.2f}"
                )
            if result.errors:
                click.echo(f"  Errors: {len(result.errors)}")
                for _, message in result.errors:
                    click.echo(f"    {message}", err=True)
            return

        with ImportProgress() as progress:
            outcome = service.import_file(sheet_file, progress_callback=progress.update)
    except (SheetImportError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Succeeded: {outcome.succeeded}")
    click.echo(f"  Failed: {outcome.failed}")
    click.echo(f"  Total: {outcome.total}")
    if outcome.rejected_rows:
        click.echo(f"  Rejected rows: {outcome.rejected_rows}")
    if outcome.created_projects:
        click.echo(f"  New projects: {', '.join(outcome.created_projects)}")
    if outcome.created_categories:
        click.echo(f"  New categories: {', '.join(outcome.created_categories)}")
    if outcome.error_messages:
        click.echo(f"  Errors: {len(outcome.error_messages)}")
        for _, message in outcome.error_messages:
            click.echo(f"    {message}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_sheet)
