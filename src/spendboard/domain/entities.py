"""Domain model entities for spendboard.

These are pure data classes representing business concepts, independent of
database schema. The store layer converts its rows into these before handing
them to services.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    """Payment status of a revenue entry."""

    PENDING = "pending"
    RECEIVED = "received"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class Project:
    """Project domain entity."""

    id: int
    name: str
    description: Optional[str]
    client: Optional[str]
    status: str
    budget: Optional[Decimal]
    start_date: Optional[date]
    end_date: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Expense category (expense type) domain entity."""

    id: int
    name: str
    code: str
    created_at: datetime


@dataclass(frozen=True)
class Supplier:
    """Supplier domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    project_id: int
    category_id: int
    supplier_id: Optional[int]
    amount: Decimal
    expense_date: date
    description: Optional[str]
    invoice_reference: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Revenue:
    """Revenue domain entity."""

    id: int
    project_id: int
    amount: Decimal
    revenue_date: date
    description: Optional[str]
    invoice_reference: Optional[str]
    payment_status: str
    created_at: datetime
