"""CLI helpers for resolving references and parsing input, or exiting with an error."""

from datetime import date
from decimal import Decimal

import click

from spendboard.domain.entities import Category, Project
from spendboard.domain.errors import NotFoundError, category_name_not_found
from spendboard.domain.category import CategoryService
from spendboard.domain.project import ProjectService
from spendboard.cli.error_handling import handle_domain_error
from spendboard.utils.amount_parser import parse_amount
from spendboard.utils.date_parser import parse_date


def resolve_project_or_exit(ctx: click.Context, db, project: str) -> Project:
    """Resolve a project name or ID, or exit with a CLI error."""
    try:
        return ProjectService(db).resolve_project(project)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(ctx: click.Context, db, category: str) -> Category:
    """Resolve a category name or ID, or exit with a CLI error."""
    service = CategoryService(db)
    value = category.strip()
    found = None
    if value.isdigit():
        found = service.get_category(int(value))
    if found is None:
        found = service.get_category_by_name(value)
    if found is None:
        handle_domain_error(ctx, NotFoundError(category_name_not_found(value)))
    return found


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse an amount option, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
