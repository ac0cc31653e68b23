"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from spendboard.domain.entities import (
    Project,
    Category,
    Supplier,
    Expense,
    Revenue,
)


class Database(ABC):
    """Abstract database interface for spendboard.

    The store is a plain CRUD + filter/sort contract. Every call may raise;
    callers that must survive store failures (the spreadsheet importer)
    catch them at their own boundary.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Project operations
    @abstractmethod
    def create_project(
        self,
        name: str,
        description: Optional[str] = None,
        client: Optional[str] = None,
        status: str = "active",
        budget: Optional[Decimal] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        """Create a project. Returns project ID."""
        pass

    @abstractmethod
    def get_project(self, project_id: int) -> Optional[Project]:
        """Get project by ID."""
        pass

    @abstractmethod
    def get_project_by_name(self, name: str) -> Optional[Project]:
        """Get project by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_projects(self, status: Optional[str] = None) -> list[Project]:
        """List projects ordered by name, optionally filtered by status."""
        pass

    @abstractmethod
    def update_project(self, project_id: int, **fields) -> None:
        """Update the given project fields."""
        pass

    @abstractmethod
    def delete_project(self, project_id: int) -> None:
        """Delete a project."""
        pass

    @abstractmethod
    def get_project_expense_count(self, project_id: int) -> int:
        """Count expenses referencing a project."""
        pass

    @abstractmethod
    def get_project_revenue_count(self, project_id: int) -> int:
        """Count revenues referencing a project."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, code: str) -> int:
        """Create an expense category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List categories ordered by name."""
        pass

    @abstractmethod
    def get_category_expense_count(self, category_id: int) -> int:
        """Count expenses referencing a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    # Supplier operations
    @abstractmethod
    def create_supplier(self, name: str) -> int:
        """Create a supplier. Returns supplier ID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        """Get supplier by ID."""
        pass

    @abstractmethod
    def get_supplier_by_name(self, name: str) -> Optional[Supplier]:
        """Get supplier by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_suppliers(self) -> list[Supplier]:
        """List suppliers ordered by name."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        project_id: int,
        category_id: int,
        amount: Decimal,
        expense_date: date,
        description: Optional[str] = None,
        supplier_id: Optional[int] = None,
        invoice_reference: Optional[str] = None,
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        project_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> list[Expense]:
        """List expenses, newest first, with optional filters.

        Args:
            start_date: Optional inclusive lower bound on expense_date
            end_date: Optional inclusive upper bound on expense_date
            project_id: Optional project ID filter
            category_id: Optional category ID filter
        """
        pass

    @abstractmethod
    def update_expense(self, expense_id: int, **fields) -> None:
        """Update the given expense fields."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass

    # Revenue operations
    @abstractmethod
    def create_revenue(
        self,
        project_id: int,
        amount: Decimal,
        revenue_date: date,
        description: Optional[str] = None,
        invoice_reference: Optional[str] = None,
        payment_status: str = "pending",
    ) -> int:
        """Create a revenue entry. Returns revenue ID."""
        pass

    @abstractmethod
    def get_revenue(self, revenue_id: int) -> Optional[Revenue]:
        """Get revenue by ID."""
        pass

    @abstractmethod
    def list_revenues(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        project_id: Optional[int] = None,
        payment_status: Optional[str] = None,
    ) -> list[Revenue]:
        """List revenues, newest first, with optional filters."""
        pass

    @abstractmethod
    def update_revenue(self, revenue_id: int, **fields) -> None:
        """Update the given revenue fields."""
        pass

    @abstractmethod
    def delete_revenue(self, revenue_id: int) -> None:
        """Delete a revenue entry."""
        pass
