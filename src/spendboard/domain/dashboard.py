"""Dashboard aggregation domain service.

Turns stored expenses, projects and revenues into the plain structures the
dashboard views display: headline stats, monthly and per-category totals,
project rankings, month-over-month trends and period comparisons.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from spendboard.database.base import Database
from spendboard.domain.entities import Expense, Project
from spendboard.domain.errors import NotFoundError, project_not_found
from spendboard.utils.date_parser import (
    period_start,
    comparison_windows,
    month_start,
    month_end,
)

UNDEFINED_CATEGORY = "Non défini"
UNDEFINED_PROJECT = "Projet non défini"
NAME_DISPLAY_LENGTH = 15

BUDGET_OVER_THRESHOLD = 90
BUDGET_WARNING_THRESHOLD = 75


@dataclass(frozen=True)
class ProjectStats:
    """Headline counters for the dashboard."""

    project_count: int
    expense_count: int
    total_amount: Decimal
    average_per_project: Decimal


@dataclass(frozen=True)
class TopProject:
    """One entry of the top-projects ranking."""

    name: str
    total_spent: Decimal
    expense_count: int
    budget: Decimal
    status: str
    share: float
    budget_utilization: float

    @property
    def budget_alert(self) -> str:
        return budget_alert(self.budget_utilization)


@dataclass(frozen=True)
class TrendingStats:
    """Current month compared with the previous month."""

    project_count: int
    current_month_total: Decimal
    current_month_count: int
    previous_month_total: Decimal
    previous_month_count: int
    amount_trend: float
    count_trend: float
    average_per_transaction: Decimal


@dataclass(frozen=True)
class PeriodComparisonEntry:
    """Per-project totals in the current and the compared window."""

    name: str
    current_period: Decimal
    compare_period: Decimal


@dataclass(frozen=True)
class ProjectSummary:
    """Financial summary of a single project."""

    project: Project
    expense_count: int
    total_spent: Decimal
    total_revenue: Decimal
    margin: Decimal
    budget_utilization: float


def shorten_name(name: str) -> str:
    """Truncate a name for chart labels."""
    if len(name) > NAME_DISPLAY_LENGTH:
        return name[:NAME_DISPLAY_LENGTH] + "..."
    return name


def budget_alert(utilization: float) -> str:
    """Classify a budget utilization percentage."""
    if utilization > BUDGET_OVER_THRESHOLD:
        return "over budget"
    if utilization > BUDGET_WARNING_THRESHOLD:
        return "budget warning"
    return "budget ok"


def _percent(part: Decimal, whole: Decimal) -> float:
    if not whole:
        return 0.0
    return float(part / whole * 100)


def _trend(current, previous) -> float:
    if not previous:
        return 0.0
    return float((Decimal(current) - Decimal(previous)) / Decimal(previous) * 100)


class DashboardService:
    """Service for computing dashboard aggregates."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def project_stats(self) -> ProjectStats:
        """Count projects and expenses and total the amounts spent."""
        project_count = len(self.db.list_projects())
        expenses = self.db.list_expenses()
        total = self._sum(expenses)
        average = total / project_count if project_count else Decimal("0")
        return ProjectStats(
            project_count=project_count,
            expense_count=len(expenses),
            total_amount=total,
            average_per_project=average,
        )

    def monthly_totals(self) -> list[tuple[str, Decimal]]:
        """Total expenses per month.

        Returns:
            List of (YYYY-MM, total) pairs in ascending month order
        """
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for expense in self.db.list_expenses():
            totals[expense.expense_date.strftime("%Y-%m")] += expense.amount
        return sorted(totals.items())

    def totals_by_category(self) -> list[tuple[str, Decimal]]:
        """Total expenses per category name, largest first."""
        names = {c.id: c.name for c in self.db.list_categories()}
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for expense in self.db.list_expenses():
            totals[names.get(expense.category_id, UNDEFINED_CATEGORY)] += expense.amount
        return sorted(totals.items(), key=lambda item: (-item[1], item[0]))

    def project_comparison(
        self, period: str = "all", limit: int = 8, today: Optional[date] = None
    ) -> list[tuple[str, Decimal]]:
        """Total expenses per project within a period, largest first.

        Args:
            period: One of month, quarter, year, all
            limit: Maximum number of projects returned
            today: Reference date for the period (defaults to today)

        Returns:
            List of (shortened project name, total) pairs
        """
        expenses = self.db.list_expenses(start_date=period_start(period, today))
        totals = self._totals_by_project(expenses)
        ranked = sorted(totals.items(), key=lambda item: -item[1])[:limit]
        return [(shorten_name(name), total) for name, total in ranked]

    def top_projects(
        self, period: str = "all", limit: int = 5, today: Optional[date] = None
    ) -> list[TopProject]:
        """Rank projects by amount spent within a period.

        Each entry carries its share of the period total and how much of
        its budget has been used (0 when the project has no budget).

        Args:
            period: One of month, quarter, year, all
            limit: Maximum number of projects returned
            today: Reference date for the period (defaults to today)

        Returns:
            List of TopProject entries, largest spend first
        """
        projects = {p.id: p for p in self.db.list_projects()}
        expenses = self.db.list_expenses(start_date=period_start(period, today))

        spent: dict[int, Decimal] = defaultdict(Decimal)
        counts: dict[int, int] = defaultdict(int)
        for expense in expenses:
            spent[expense.project_id] += expense.amount
            counts[expense.project_id] += 1

        grand_total = sum(spent.values(), Decimal("0"))
        entries = []
        for project_id, total in spent.items():
            project = projects.get(project_id)
            budget = (project.budget if project else None) or Decimal("0")
            entries.append(
                TopProject(
                    name=project.name if project else UNDEFINED_PROJECT,
                    total_spent=total,
                    expense_count=counts[project_id],
                    budget=budget,
                    status=project.status if project else "active",
                    share=_percent(total, grand_total),
                    budget_utilization=_percent(total, budget),
                )
            )

        entries.sort(key=lambda entry: -entry.total_spent)
        return entries[:limit]

    def trending_stats(self, today: Optional[date] = None) -> TrendingStats:
        """Compare this month's spending with the previous month's."""
        today = today or date.today()
        current_start = month_start(today)
        previous_start = current_start - relativedelta(months=1)

        current = self.db.list_expenses(start_date=current_start, end_date=month_end(today))
        previous = self.db.list_expenses(
            start_date=previous_start, end_date=month_end(previous_start)
        )

        current_total = self._sum(current)
        previous_total = self._sum(previous)
        return TrendingStats(
            project_count=len(self.db.list_projects()),
            current_month_total=current_total,
            current_month_count=len(current),
            previous_month_total=previous_total,
            previous_month_count=len(previous),
            amount_trend=_trend(current_total, previous_total),
            count_trend=_trend(len(current), len(previous)),
            average_per_transaction=(
                current_total / len(current) if current else Decimal("0")
            ),
        )

    def period_comparison(
        self, kind: str = "month-prev", today: Optional[date] = None
    ) -> list[PeriodComparisonEntry]:
        """Compare per-project spending between two windows.

        Args:
            kind: One of month-prev, month-next, quarter-prev, quarter-next
            today: Reference date (defaults to today)

        Returns:
            Up to ten entries ordered by combined total, projects with no
            spending in either window left out

        Raises:
            ValueError: If kind is not recognized
        """
        (cur_start, cur_end), (cmp_start, cmp_end) = comparison_windows(kind, today)
        current = self._totals_by_project(
            self.db.list_expenses(start_date=cur_start, end_date=cur_end)
        )
        compared = self._totals_by_project(
            self.db.list_expenses(start_date=cmp_start, end_date=cmp_end)
        )

        entries = [
            PeriodComparisonEntry(
                name=shorten_name(name),
                current_period=current.get(name, Decimal("0")),
                compare_period=compared.get(name, Decimal("0")),
            )
            for name in set(current) | set(compared)
        ]
        entries = [e for e in entries if e.current_period > 0 or e.compare_period > 0]
        entries.sort(key=lambda e: (-(e.current_period + e.compare_period), e.name))
        return entries[:10]

    def project_summary(self, project_id: int) -> ProjectSummary:
        """Summarize spending and revenue for one project.

        Raises:
            NotFoundError: If project not found
        """
        project = self.db.get_project(project_id)
        if project is None:
            raise NotFoundError(project_not_found(project_id))

        expenses = self.db.list_expenses(project_id=project_id)
        revenues = self.db.list_revenues(project_id=project_id)
        total_spent = self._sum(expenses)
        total_revenue = sum((r.amount for r in revenues), Decimal("0"))
        return ProjectSummary(
            project=project,
            expense_count=len(expenses),
            total_spent=total_spent,
            total_revenue=total_revenue,
            margin=total_revenue - total_spent,
            budget_utilization=_percent(total_spent, project.budget or Decimal("0")),
        )

    def _totals_by_project(self, expenses: list[Expense]) -> dict[str, Decimal]:
        names = {p.id: p.name for p in self.db.list_projects()}
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for expense in expenses:
            totals[names.get(expense.project_id, UNDEFINED_PROJECT)] += expense.amount
        return dict(totals)

    @staticmethod
    def _sum(expenses: list[Expense]) -> Decimal:
        return sum((e.amount for e in expenses), Decimal("0"))
