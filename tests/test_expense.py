"""Tests for expense and supplier services and commands."""

import pytest
from datetime import date
from decimal import Decimal

from spendboard.cli.main import cli
from spendboard.domain.errors import ValidationError, NotFoundError


@pytest.fixture
def expense_args(sample_project, sample_categories):
    """Valid arguments for creating an expense."""
    return {
        "project_id": sample_project.id,
        "category_id": sample_categories["FOURNISSEUR"],
        "amount": Decimal("1250.50"),
        "expense_date": date(2024, 3, 12),
        "description": "Carrelage",
    }


def test_create_expense(expense_service, expense_args):
    """Test creating an expense."""
    expense_id = expense_service.create_expense(**expense_args, invoice_reference="F-001")

    expense = expense_service.get_expense(expense_id)
    assert expense.amount == Decimal("1250.50")
    assert expense.expense_date == date(2024, 3, 12)
    assert expense.invoice_reference == "F-001"
    assert expense.supplier_id is None


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), None])
def test_create_expense_rejects_non_positive_amount(expense_service, expense_args, amount):
    """Test that the amount must be positive."""
    expense_args["amount"] = amount
    with pytest.raises(ValidationError):
        expense_service.create_expense(**expense_args)


def test_create_expense_unknown_project(expense_service, expense_args):
    """Test that the project must exist."""
    expense_args["project_id"] = 999
    with pytest.raises(NotFoundError):
        expense_service.create_expense(**expense_args)


def test_create_expense_unknown_category(expense_service, expense_args):
    """Test that the category must exist."""
    expense_args["category_id"] = 999
    with pytest.raises(NotFoundError):
        expense_service.create_expense(**expense_args)


def test_create_expense_reuses_supplier(expense_service, supplier_service, expense_args):
    """Test that suppliers are created once and matched by name."""
    first = expense_service.create_expense(**expense_args, supplier_name="Point P")
    second = expense_service.create_expense(**expense_args, supplier_name="point p")

    assert len(supplier_service.list_suppliers()) == 1
    assert (
        expense_service.get_expense(first).supplier_id
        == expense_service.get_expense(second).supplier_id
    )


def test_get_or_create_supplier_requires_name(supplier_service):
    """Test that a blank supplier name is rejected."""
    with pytest.raises(ValidationError):
        supplier_service.get_or_create_supplier("  ")


def test_update_expense(expense_service, expense_args, sample_categories):
    """Test changing amount, category and supplier."""
    expense_id = expense_service.create_expense(**expense_args, supplier_name="Point P")

    expense_service.update_expense(
        expense_id,
        amount=Decimal("99"),
        category_id=sample_categories["NDF"],
        supplier_name="",
    )

    expense = expense_service.get_expense(expense_id)
    assert expense.amount == Decimal("99")
    assert expense.category_id == sample_categories["NDF"]
    assert expense.supplier_id is None


def test_update_expense_validates_amount(expense_service, expense_args):
    """Test that updates keep the amount positive."""
    expense_id = expense_service.create_expense(**expense_args)
    with pytest.raises(ValidationError):
        expense_service.update_expense(expense_id, amount=Decimal("0"))


def test_update_missing_expense(expense_service):
    """Test updating an expense that doesn't exist."""
    with pytest.raises(NotFoundError):
        expense_service.update_expense(999, amount=Decimal("1"))


def test_list_expenses_filters_and_order(expense_service, expense_args, sample_categories):
    """Test date filters, category filter and newest-first order."""
    for day, category in [(1, "FOURNISSEUR"), (20, "NDF"), (10, "FOURNISSEUR")]:
        expense_args["expense_date"] = date(2024, 3, day)
        expense_args["category_id"] = sample_categories[category]
        expense_service.create_expense(**expense_args)

    dates = [e.expense_date.day for e in expense_service.list_expenses()]
    assert dates == [20, 10, 1]

    filtered = expense_service.list_expenses(
        start_date=date(2024, 3, 5), category_id=sample_categories["FOURNISSEUR"]
    )
    assert [e.expense_date.day for e in filtered] == [10]
    assert len(expense_service.list_expenses(limit=2)) == 2


def test_delete_expense(expense_service, expense_args):
    """Test deleting an expense."""
    expense_id = expense_service.create_expense(**expense_args)

    expense_service.delete_expense(expense_id)

    assert expense_service.get_expense(expense_id) is None
    with pytest.raises(NotFoundError):
        expense_service.delete_expense(expense_id)


def test_expense_add_command(cli_runner, temp_db, sample_project, sample_categories):
    """Test adding an expense by project and category name."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "expense",
            "add",
            "--project",
            "Villa Alpha",
            "--category",
            "sous traitant",
            "--amount",
            "1 250,50",
            "--date",
            "12/03/2024",
            "--supplier",
            "Point P",
        ],
    )

    assert result.exit_code == 0
    assert "Added expense" in result.output
    expense = temp_db.list_expenses()[0]
    assert expense.amount == Decimal("1250.50")
    assert expense.expense_date == date(2024, 3, 12)
    assert expense.category_id == sample_categories["SOUS TRAITANT"]


def test_expense_add_invalid_amount(cli_runner, temp_db, sample_project, sample_categories):
    """Test that an unparseable amount exits with an error."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "expense",
            "add",
            "--project",
            "Villa Alpha",
            "--category",
            "NDF",
            "--amount",
            "abc",
        ],
    )

    assert result.exit_code == 1
    assert "Error: Invalid amount" in result.output
    assert temp_db.list_expenses() == []


def test_expense_add_unknown_category(cli_runner, temp_db, sample_project):
    """Test that an unknown category exits with an error."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "expense",
            "add",
            "--project",
            "Villa Alpha",
            "--category",
            "Location",
            "--amount",
            "10",
        ],
    )

    assert result.exit_code == 1
    assert "Error: Category 'Location' not found" in result.output


def test_expense_list_command(cli_runner, temp_db, expense_service, expense_args):
    """Test listing expenses with a total line."""
    expense_service.create_expense(**expense_args)

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "expense", "list"])

    assert result.exit_code == 0
    assert "Carrelage" in result.output
    assert "1 expenses, total 1,250.50" in result.output


def test_expense_edit_and_delete_commands(cli_runner, temp_db, expense_service, expense_args):
    """Test editing then deleting an expense."""
    expense_id = expense_service.create_expense(**expense_args)

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "expense", "edit", str(expense_id), "--amount", "80"],
    )
    assert result.exit_code == 0
    temp_db.disconnect()
    assert temp_db.get_expense(expense_id).amount == Decimal("80")

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "expense", "delete", str(expense_id)]
    )
    assert result.exit_code == 0
    assert temp_db.get_expense(expense_id) is None


def test_expense_delete_missing(cli_runner, temp_db):
    """Test deleting an unknown expense."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "expense", "delete", "42"])

    assert result.exit_code == 1
    assert "Error: Expense 42 not found" in result.output
