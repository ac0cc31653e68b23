"""Tests for dashboard aggregates."""

import pytest
from datetime import date
from decimal import Decimal

from spendboard.cli.main import cli
from spendboard.domain.dashboard import (
    DashboardService,
    budget_alert,
    shorten_name,
)
from spendboard.domain.errors import NotFoundError

TODAY = date(2024, 3, 15)


@pytest.fixture
def spending(project_service, expense_service, sample_project, sample_categories):
    """Spread expenses over two projects and three months.

    Villa Alpha (budget 10000): 2000 in January, 3000 in February, 4000 in March.
    Un projet au nom très long (no budget): 1000 in March, 500 in December 2023.
    """
    long_id = project_service.create_project(name="Un projet au nom très long")
    rows = [
        (sample_project.id, "FOURNISSEUR", "2000", date(2024, 1, 10)),
        (sample_project.id, "NDF", "3000", date(2024, 2, 5)),
        (sample_project.id, "FOURNISSEUR", "4000", date(2024, 3, 2)),
        (long_id, "SOUS TRAITANT", "1000", date(2024, 3, 10)),
        (long_id, "NDF", "500", date(2023, 12, 20)),
    ]
    for project_id, category, amount, day in rows:
        expense_service.create_expense(
            project_id=project_id,
            category_id=sample_categories[category],
            amount=Decimal(amount),
            expense_date=day,
        )
    return {"alpha": sample_project.id, "long": long_id}


@pytest.fixture
def dashboard(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


def test_shorten_name():
    """Test chart label truncation."""
    assert shorten_name("Villa Alpha") == "Villa Alpha"
    assert shorten_name("Un projet au nom très long") == "Un projet au no..."


@pytest.mark.parametrize(
    "utilization,expected",
    [(95.0, "over budget"), (90.0, "budget warning"), (80.0, "budget warning"), (75.0, "budget ok"), (0.0, "budget ok")],
)
def test_budget_alert(utilization, expected):
    """Test the budget alert thresholds."""
    assert budget_alert(utilization) == expected


def test_project_stats(dashboard, spending):
    """Test headline counters."""
    stats = dashboard.project_stats()

    assert stats.project_count == 2
    assert stats.expense_count == 5
    assert stats.total_amount == Decimal("10500")
    assert stats.average_per_project == Decimal("5250")


def test_project_stats_empty(dashboard):
    """Test counters on an empty store."""
    stats = dashboard.project_stats()

    assert stats.project_count == 0
    assert stats.total_amount == Decimal("0")
    assert stats.average_per_project == Decimal("0")


def test_monthly_totals(dashboard, spending):
    """Test totals per month in ascending order."""
    assert dashboard.monthly_totals() == [
        ("2023-12", Decimal("500")),
        ("2024-01", Decimal("2000")),
        ("2024-02", Decimal("3000")),
        ("2024-03", Decimal("5000")),
    ]


def test_totals_by_category(dashboard, spending):
    """Test totals per category, largest first."""
    assert dashboard.totals_by_category() == [
        ("FOURNISSEUR", Decimal("6000")),
        ("NDF", Decimal("3500")),
        ("SOUS TRAITANT", Decimal("1000")),
    ]


def test_project_comparison_by_period(dashboard, spending):
    """Test per-project totals within the current month."""
    assert dashboard.project_comparison(period="month", today=TODAY) == [
        ("Villa Alpha", Decimal("4000")),
        ("Un projet au no...", Decimal("1000")),
    ]
    assert dashboard.project_comparison(period="all", limit=1, today=TODAY) == [
        ("Villa Alpha", Decimal("9000")),
    ]


def test_top_projects(dashboard, spending):
    """Test ranking with share and budget use."""
    top = dashboard.top_projects(period="year", today=TODAY)

    assert [t.name for t in top] == ["Villa Alpha", "Un projet au nom très long"]
    alpha, other = top
    assert alpha.total_spent == Decimal("9000")
    assert alpha.expense_count == 3
    assert alpha.share == pytest.approx(90.0)
    assert alpha.budget_utilization == pytest.approx(90.0)
    assert alpha.budget_alert == "budget warning"
    assert other.total_spent == Decimal("1000")
    assert other.budget == Decimal("0")
    assert other.budget_utilization == 0.0


def test_trending_stats(dashboard, spending):
    """Test this month against last month."""
    stats = dashboard.trending_stats(today=TODAY)

    assert stats.current_month_total == Decimal("5000")
    assert stats.current_month_count == 2
    assert stats.previous_month_total == Decimal("3000")
    assert stats.previous_month_count == 1
    assert stats.amount_trend == pytest.approx(66.666, rel=1e-3)
    assert stats.count_trend == pytest.approx(100.0)
    assert stats.average_per_transaction == Decimal("2500")


def test_trending_stats_without_previous_month(dashboard, spending):
    """Test that trends are zero when the previous month is empty."""
    stats = dashboard.trending_stats(today=date(2024, 5, 1))

    assert stats.current_month_count == 0
    assert stats.amount_trend == 0.0
    assert stats.average_per_transaction == Decimal("0")


def test_period_comparison_month_prev(dashboard, spending):
    """Test March against February."""
    entries = dashboard.period_comparison("month-prev", today=TODAY)

    assert [(e.name, e.current_period, e.compare_period) for e in entries] == [
        ("Villa Alpha", Decimal("4000"), Decimal("3000")),
        ("Un projet au no...", Decimal("1000"), Decimal("0")),
    ]


def test_period_comparison_quarter_prev(dashboard, spending):
    """Test the first quarter against the last quarter of 2023."""
    entries = dashboard.period_comparison("quarter-prev", today=TODAY)

    by_name = {e.name: (e.current_period, e.compare_period) for e in entries}
    assert by_name["Villa Alpha"] == (Decimal("9000"), Decimal("0"))
    assert by_name["Un projet au no..."] == (Decimal("1000"), Decimal("500"))


def test_period_comparison_unknown_kind(dashboard):
    """Test that an unknown comparison is rejected."""
    with pytest.raises(ValueError):
        dashboard.period_comparison("week-prev", today=TODAY)


def test_project_summary(dashboard, revenue_service, spending):
    """Test a project's spending, revenue and margin."""
    revenue_service.create_revenue(spending["alpha"], Decimal("12000"), date(2024, 3, 1))

    summary = dashboard.project_summary(spending["alpha"])

    assert summary.expense_count == 3
    assert summary.total_spent == Decimal("9000")
    assert summary.total_revenue == Decimal("12000")
    assert summary.margin == Decimal("3000")
    assert summary.budget_utilization == pytest.approx(90.0)

    with pytest.raises(NotFoundError):
        dashboard.project_summary(999)


def test_dashboard_stats_command(cli_runner, temp_db, spending):
    """Test the stats command output."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "dashboard", "stats"])

    assert result.exit_code == 0
    assert "Projects:             2" in result.output
    assert "Total spent:          10,500.00" in result.output


def test_dashboard_by_category_command(cli_runner, temp_db, spending):
    """Test the category breakdown command."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "dashboard", "by-category"]
    )

    assert result.exit_code == 0
    assert "FOURNISSEUR" in result.output
    assert "6,000.00" in result.output


def test_dashboard_top_command(cli_runner, temp_db, spending):
    """Test the top projects command with all-time totals."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "dashboard", "top", "--period", "all"]
    )

    assert result.exit_code == 0
    assert "1. Villa Alpha" in result.output
    assert "of budget" in result.output


def test_dashboard_empty_commands(cli_runner, temp_db):
    """Test the dashboard views on an empty store."""
    for view in ("monthly", "by-category", "projects", "top"):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "dashboard", view])
        assert result.exit_code == 0
        assert "No expenses found" in result.output
