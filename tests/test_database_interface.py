"""Tests for the SQLAlchemy store."""

import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from spendboard.database import create_sqlite_database
from spendboard.domain.entities import Project, Category, Expense
from spendboard.domain.errors import NotFoundError


def test_store_returns_domain_entities(temp_db):
    """Test that reads return frozen domain dataclasses, not ORM rows."""
    project_id = temp_db.create_project(name="Alpha", budget=Decimal("100"))
    category_id = temp_db.create_category(name="NDF", code="NDF")
    expense_id = temp_db.create_expense(
        project_id=project_id,
        category_id=category_id,
        amount=Decimal("12.34"),
        expense_date=date(2024, 1, 1),
    )

    assert isinstance(temp_db.get_project(project_id), Project)
    assert isinstance(temp_db.get_category(category_id), Category)
    expense = temp_db.get_expense(expense_id)
    assert isinstance(expense, Expense)
    assert expense.amount == Decimal("12.34")
    assert temp_db.get_project(project_id).created_at is not None


def test_lookup_by_name_ignores_case(temp_db):
    """Test case-insensitive name lookup, including non-ASCII letters."""
    temp_db.create_project(name="Résidence Été")
    temp_db.create_category(name="SOUS TRAITANT", code="SOUS_TRAITANT")
    temp_db.create_supplier(name="Point P")

    assert temp_db.get_project_by_name("RÉSIDENCE ÉTÉ").name == "Résidence Été"
    assert temp_db.get_category_by_name("sous traitant").code == "SOUS_TRAITANT"
    assert temp_db.get_supplier_by_name(" point p ").name == "Point P"
    assert temp_db.get_project_by_name("Residence Ete") is None


def test_lists_are_ordered(temp_db):
    """Test name ordering for references and date ordering for expenses."""
    beta = temp_db.create_project(name="Beta")
    temp_db.create_project(name="Alpha")
    category_id = temp_db.create_category(name="NDF", code="NDF")
    first = temp_db.create_expense(beta, category_id, Decimal("1"), date(2024, 1, 5))
    second = temp_db.create_expense(beta, category_id, Decimal("2"), date(2024, 1, 5))
    older = temp_db.create_expense(beta, category_id, Decimal("3"), date(2023, 12, 1))

    assert [p.name for p in temp_db.list_projects()] == ["Alpha", "Beta"]
    assert [e.id for e in temp_db.list_expenses()] == [second, first, older]
    assert [e.id for e in temp_db.list_expenses(end_date=date(2023, 12, 31))] == [older]


def test_dependency_counts(temp_db):
    """Test the counts used to block deletions."""
    project_id = temp_db.create_project(name="Alpha")
    category_id = temp_db.create_category(name="NDF", code="NDF")
    temp_db.create_expense(project_id, category_id, Decimal("1"), date(2024, 1, 5))
    temp_db.create_revenue(project_id, Decimal("5"), date(2024, 1, 6))

    assert temp_db.get_project_expense_count(project_id) == 1
    assert temp_db.get_project_revenue_count(project_id) == 1
    assert temp_db.get_category_expense_count(category_id) == 1


def test_update_rejects_unknown_fields(temp_db):
    """Test that only known columns can be updated."""
    project_id = temp_db.create_project(name="Alpha")

    with pytest.raises(ValueError):
        temp_db.update_project(project_id, colour="red")


def test_update_and_delete_missing_rows(temp_db):
    """Test that missing IDs raise NotFoundError."""
    with pytest.raises(NotFoundError):
        temp_db.update_project(42, name="Ghost")
    with pytest.raises(NotFoundError):
        temp_db.delete_expense(42)
    with pytest.raises(NotFoundError):
        temp_db.update_revenue(42, payment_status="received")


def test_failed_commit_rolls_back(temp_db):
    """Test that the store stays usable after a constraint violation."""
    temp_db.create_category(name="NDF", code="NDF")

    with pytest.raises(IntegrityError):
        temp_db.create_category(name="NDF", code="NDF")

    assert [c.name for c in temp_db.list_categories()] == ["NDF"]


def test_create_sqlite_database_uses_env(monkeypatch, tmp_path):
    """Test that the database path falls back to the environment variable."""
    path = tmp_path / "env.db"
    monkeypatch.setenv("SPENDBOARD_DB_PATH", str(path))

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{path}"
    db.disconnect()
