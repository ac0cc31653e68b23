"""Revenue domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal

from spendboard.database.base import Database
from spendboard.domain.entities import Revenue as RevenueEntity, PaymentStatus
from spendboard.domain.errors import (
    ValidationError,
    NotFoundError,
    project_not_found,
    revenue_not_found,
    invalid_choice,
)

PAYMENT_STATUSES = [status.value for status in PaymentStatus]


class RevenueService:
    """Service for managing revenues."""

    def __init__(self, db: Database):
        """Initialize revenue service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_revenue(
        self,
        project_id: int,
        amount: Decimal,
        revenue_date: date,
        description: Optional[str] = None,
        invoice_reference: Optional[str] = None,
        payment_status: str = PaymentStatus.PENDING.value,
    ) -> int:
        """Create a revenue entry.

        Args:
            project_id: Project ID
            amount: Revenue amount (must be positive)
            revenue_date: Revenue date
            description: Optional description
            invoice_reference: Optional invoice reference
            payment_status: One of pending, received, overdue

        Returns:
            Revenue ID

        Raises:
            ValidationError: If a field is invalid
            NotFoundError: If project doesn't exist
        """
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        if revenue_date is None:
            raise ValidationError("Revenue date is required")
        self._validate_status(payment_status)
        if self.db.get_project(project_id) is None:
            raise NotFoundError(project_not_found(project_id))

        return self.db.create_revenue(
            project_id=project_id,
            amount=amount,
            revenue_date=revenue_date,
            description=description,
            invoice_reference=invoice_reference,
            payment_status=payment_status,
        )

    def get_revenue(self, revenue_id: int) -> Optional[RevenueEntity]:
        """Get revenue by ID."""
        return self.db.get_revenue(revenue_id)

    def list_revenues(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        project_id: Optional[int] = None,
        payment_status: Optional[str] = None,
        text: Optional[str] = None,
    ) -> list[RevenueEntity]:
        """List revenues, newest first.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            project_id: Optional project ID filter
            payment_status: Optional payment status filter
            text: Optional case-insensitive text matched against the project
                name, description and invoice reference

        Returns:
            List of revenue entities
        """
        if payment_status is not None:
            self._validate_status(payment_status)

        revenues = self.db.list_revenues(
            start_date=start_date,
            end_date=end_date,
            project_id=project_id,
            payment_status=payment_status,
        )
        if not text:
            return revenues

        needle = text.lower()
        project_names = {p.id: p.name for p in self.db.list_projects()}
        return [
            r
            for r in revenues
            if needle in project_names.get(r.project_id, "").lower()
            or needle in (r.description or "").lower()
            or needle in (r.invoice_reference or "").lower()
        ]

    def total_amount(self, revenues: list[RevenueEntity]) -> Decimal:
        """Sum the amounts of the given revenues."""
        return sum((r.amount for r in revenues), Decimal("0"))

    def update_payment_status(self, revenue_id: int, payment_status: str) -> None:
        """Change the payment status of a revenue entry.

        Raises:
            NotFoundError: If revenue not found
            ValidationError: If payment status is invalid
        """
        self._validate_status(payment_status)
        if self.db.get_revenue(revenue_id) is None:
            raise NotFoundError(revenue_not_found(revenue_id))
        self.db.update_revenue(revenue_id, payment_status=payment_status)

    def delete_revenue(self, revenue_id: int) -> None:
        """Delete a revenue entry.

        Raises:
            NotFoundError: If revenue not found
        """
        if self.db.get_revenue(revenue_id) is None:
            raise NotFoundError(revenue_not_found(revenue_id))
        self.db.delete_revenue(revenue_id)

    @staticmethod
    def _validate_status(payment_status: str) -> None:
        if payment_status not in PAYMENT_STATUSES:
            raise ValidationError(
                invalid_choice("payment status", payment_status, PAYMENT_STATUSES)
            )
