"""Global search domain service."""

from dataclasses import dataclass

from spendboard.database.base import Database
from spendboard.domain.entities import Expense, Project

MIN_TERM_LENGTH = 2
MAX_RESULTS = 5


@dataclass(frozen=True)
class SearchResults:
    """Matches for a global search term."""

    expenses: tuple[Expense, ...]
    projects: tuple[Project, ...]

    @property
    def is_empty(self) -> bool:
        return not self.expenses and not self.projects


class SearchService:
    """Service for searching across expenses and projects."""

    def __init__(self, db: Database):
        """Initialize search service.

        Args:
            db: Database instance
        """
        self.db = db

    def search(self, term: str) -> SearchResults:
        """Search expenses and projects for a term.

        Matching is a case-insensitive substring test. Expenses match on their
        description or their project's name; projects match on name,
        description or client. Terms shorter than two characters match
        nothing.

        Args:
            term: Search term

        Returns:
            SearchResults with at most five expenses and five projects
        """
        needle = (term or "").strip().lower()
        if len(needle) < MIN_TERM_LENGTH:
            return SearchResults(expenses=(), projects=())

        projects = self.db.list_projects()
        project_names = {p.id: p.name.lower() for p in projects}

        matching_projects = [
            p
            for p in projects
            if needle in p.name.lower()
            or needle in (p.description or "").lower()
            or needle in (p.client or "").lower()
        ]

        matching_expenses = []
        for expense in self.db.list_expenses():
            if needle in (expense.description or "").lower() or needle in project_names.get(
                expense.project_id, ""
            ):
                matching_expenses.append(expense)
                if len(matching_expenses) == MAX_RESULTS:
                    break

        return SearchResults(
            expenses=tuple(matching_expenses),
            projects=tuple(matching_projects[:MAX_RESULTS]),
        )
