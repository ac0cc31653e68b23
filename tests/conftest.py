"""Shared pytest fixtures for spendboard tests."""

import tempfile
import os
from io import BytesIO
from datetime import date
from decimal import Decimal
import pytest
from openpyxl import Workbook

from spendboard.database.factories import create_sqlite_database
from spendboard.domain.project import ProjectService
from spendboard.domain.category import CategoryService
from spendboard.domain.supplier import SupplierService
from spendboard.domain.expense import ExpenseService
from spendboard.domain.revenue import RevenueService
from spendboard.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def clean_logging():
    """Drop the CLI log handler between tests."""
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def project_service(temp_db):
    """Create a ProjectService with a temporary database."""
    return ProjectService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def supplier_service(temp_db):
    """Create a SupplierService with a temporary database."""
    return SupplierService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def revenue_service(temp_db):
    """Create a RevenueService with a temporary database."""
    return RevenueService(temp_db)


@pytest.fixture
def sample_project(project_service):
    """Create a sample project for testing."""
    project_id = project_service.create_project(
        name="Villa Alpha",
        description="Renovation",
        client="ACME",
        budget=Decimal("10000"),
        start_date=date(2024, 1, 1),
    )
    return project_service.get_project(project_id)


@pytest.fixture
def sample_categories(category_service):
    """Create the default categories and return their IDs by name."""
    category_service.init_default_categories()
    return {c.name: c.id for c in category_service.list_categories()}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def build_workbook(rows, extra_sheets=None) -> bytes:
    """Return .xlsx bytes whose first sheet holds the given rows.

    An empty list in rows leaves a blank row in the sheet.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Dépenses"
    for row in rows:
        sheet.append(list(row))
    for title, sheet_rows in (extra_sheets or {}).items():
        extra = workbook.create_sheet(title)
        for row in sheet_rows:
            extra.append(list(row))

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_workbook():
    """Return a function building .xlsx bytes from rows."""
    return build_workbook


@pytest.fixture
def workbook_file(tmp_path):
    """Return a function writing rows to an .xlsx file and returning its path."""

    def _write(rows, name="depenses.xlsx"):
        path = tmp_path / name
        path.write_bytes(build_workbook(rows))
        return path

    return _write
