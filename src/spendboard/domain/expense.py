"""Expense domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal

from spendboard.database.base import Database
from spendboard.domain.entities import Expense as ExpenseEntity
from spendboard.domain.errors import (
    ValidationError,
    NotFoundError,
    project_not_found,
    category_not_found,
    expense_not_found,
)
from spendboard.domain.supplier import SupplierService


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db
        self.supplier_service = SupplierService(db)

    def create_expense(
        self,
        project_id: int,
        category_id: int,
        amount: Decimal,
        expense_date: date,
        description: Optional[str] = None,
        supplier_name: Optional[str] = None,
        invoice_reference: Optional[str] = None,
    ) -> int:
        """Create an expense.

        Args:
            project_id: Project ID
            category_id: Category ID
            amount: Expense amount (must be positive)
            expense_date: Expense date
            description: Optional description
            supplier_name: Optional supplier name, created if unknown
            invoice_reference: Optional invoice reference

        Returns:
            Expense ID

        Raises:
            ValidationError: If amount or date is invalid
            NotFoundError: If project or category doesn't exist
        """
        self._validate_amount(amount)
        if expense_date is None:
            raise ValidationError("Expense date is required")
        self._check_references(project_id, category_id)

        supplier_id = None
        if supplier_name and supplier_name.strip():
            supplier_id = self.supplier_service.get_or_create_supplier(supplier_name)

        return self.db.create_expense(
            project_id=project_id,
            category_id=category_id,
            amount=amount,
            expense_date=expense_date,
            description=description,
            supplier_id=supplier_id,
            invoice_reference=invoice_reference,
        )

    def get_expense(self, expense_id: int) -> Optional[ExpenseEntity]:
        """Get expense by ID.

        Args:
            expense_id: Expense ID

        Returns:
            Expense entity or None if not found
        """
        return self.db.get_expense(expense_id)

    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        project_id: Optional[int] = None,
        category_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[ExpenseEntity]:
        """List expenses, newest first.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            project_id: Optional project ID filter
            category_id: Optional category ID filter
            limit: Optional maximum number of expenses to return

        Returns:
            List of expense entities
        """
        expenses = self.db.list_expenses(
            start_date=start_date,
            end_date=end_date,
            project_id=project_id,
            category_id=category_id,
        )
        if limit is not None:
            expenses = expenses[:limit]
        return expenses

    def update_expense(
        self,
        expense_id: int,
        supplier_name: Optional[str] = None,
        **fields,
    ) -> None:
        """Update an expense.

        Args:
            expense_id: Expense ID
            supplier_name: Optional supplier name; an empty string clears it
            **fields: Expense fields to change (project_id, category_id,
                amount, expense_date, description, invoice_reference)

        Raises:
            NotFoundError: If expense, project or category doesn't exist
            ValidationError: If amount is invalid
        """
        expense = self.db.get_expense(expense_id)
        if expense is None:
            raise NotFoundError(expense_not_found(expense_id))

        if "amount" in fields:
            self._validate_amount(fields["amount"])
        self._check_references(
            fields.get("project_id", expense.project_id),
            fields.get("category_id", expense.category_id),
        )

        if supplier_name is not None:
            fields["supplier_id"] = (
                self.supplier_service.get_or_create_supplier(supplier_name)
                if supplier_name.strip()
                else None
            )

        if fields:
            self.db.update_expense(expense_id, **fields)

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense.

        Raises:
            NotFoundError: If expense not found
        """
        if self.db.get_expense(expense_id) is None:
            raise NotFoundError(expense_not_found(expense_id))
        self.db.delete_expense(expense_id)

    def _check_references(self, project_id: int, category_id: int) -> None:
        if self.db.get_project(project_id) is None:
            raise NotFoundError(project_not_found(project_id))
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    @staticmethod
    def _validate_amount(amount: Decimal) -> None:
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than zero")
