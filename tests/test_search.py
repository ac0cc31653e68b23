"""Tests for global search."""

from datetime import date
from decimal import Decimal

from spendboard.cli.main import cli
from spendboard.domain.search import SearchService, MAX_RESULTS


def add_expense(expense_service, project_id, category_id, description, day=1):
    return expense_service.create_expense(
        project_id=project_id,
        category_id=category_id,
        amount=Decimal("10"),
        expense_date=date(2024, 1, day),
        description=description,
    )


def test_short_term_matches_nothing(temp_db, sample_project):
    """Test that one-character terms return no results."""
    results = SearchService(temp_db).search("v")

    assert results.is_empty


def test_search_projects_by_name_description_and_client(temp_db, project_service, sample_project):
    """Test the project fields that are searched."""
    project_service.create_project(name="Beta", client="Villeneuve SA")
    project_service.create_project(name="Gamma", description="Extension villa")
    project_service.create_project(name="Delta")

    results = SearchService(temp_db).search("VILL")

    assert sorted(p.name for p in results.projects) == ["Beta", "Gamma", "Villa Alpha"]
    assert results.expenses == ()


def test_search_expenses_by_description_or_project(
    temp_db, project_service, expense_service, sample_project, sample_categories
):
    """Test matching expenses on description or project name."""
    other_id = project_service.create_project(name="Beta")
    ndf = sample_categories["NDF"]
    by_project = add_expense(expense_service, sample_project.id, ndf, "Repas")
    by_description = add_expense(expense_service, other_id, ndf, "Essence villa")
    add_expense(expense_service, other_id, ndf, "Parking")

    results = SearchService(temp_db).search("villa")

    assert sorted(e.id for e in results.expenses) == sorted([by_project, by_description])


def test_search_caps_results(temp_db, expense_service, sample_project, sample_categories):
    """Test that at most five expenses are returned, newest first."""
    for day in range(1, 9):
        add_expense(expense_service, sample_project.id, sample_categories["NDF"], "Repas", day)

    results = SearchService(temp_db).search("repas")

    assert len(results.expenses) == MAX_RESULTS
    assert [e.expense_date.day for e in results.expenses] == [8, 7, 6, 5, 4]


def test_search_command(cli_runner, temp_db, sample_project):
    """Test the search command output."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "search", "acme"])

    assert result.exit_code == 0
    assert "Projects:" in result.output
    assert "Villa Alpha" in result.output


def test_search_command_no_results(cli_runner, temp_db):
    """Test the message when nothing matches."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "search", "zz"])

    assert result.exit_code == 0
    assert "No results for 'zz'" in result.output


def test_search_command_short_term(cli_runner, temp_db):
    """Test the message for a too-short term."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "search", "z"])

    assert result.exit_code == 0
    assert "at least 2 characters" in result.output
