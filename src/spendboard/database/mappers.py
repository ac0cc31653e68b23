"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the services never see ORM
instances and the schema can change without touching them.
"""

from spendboard.domain import entities as domain
from spendboard.database.models import (
    Project as ORMProject,
    Category as ORMCategory,
    Supplier as ORMSupplier,
    Expense as ORMExpense,
    Revenue as ORMRevenue,
)


def project_to_domain(orm_project: ORMProject) -> domain.Project:
    """Convert SQLAlchemy Project model to domain Project entity."""
    return domain.Project(
        id=orm_project.id,
        name=orm_project.name,
        description=orm_project.description,
        client=orm_project.client,
        status=orm_project.status,
        budget=orm_project.budget,
        start_date=orm_project.start_date,
        end_date=orm_project.end_date,
        created_at=orm_project.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        code=orm_category.code,
        created_at=orm_category.created_at,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Supplier:
    """Convert SQLAlchemy Supplier model to domain Supplier entity."""
    return domain.Supplier(
        id=orm_supplier.id,
        name=orm_supplier.name,
        created_at=orm_supplier.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        project_id=orm_expense.project_id,
        category_id=orm_expense.category_id,
        supplier_id=orm_expense.supplier_id,
        amount=orm_expense.amount,
        expense_date=orm_expense.expense_date,
        description=orm_expense.description,
        invoice_reference=orm_expense.invoice_reference,
        created_at=orm_expense.created_at,
    )


def revenue_to_domain(orm_revenue: ORMRevenue) -> domain.Revenue:
    """Convert SQLAlchemy Revenue model to domain Revenue entity."""
    return domain.Revenue(
        id=orm_revenue.id,
        project_id=orm_revenue.project_id,
        amount=orm_revenue.amount,
        revenue_date=orm_revenue.revenue_date,
        description=orm_revenue.description,
        invoice_reference=orm_revenue.invoice_reference,
        payment_status=orm_revenue.payment_status,
        created_at=orm_revenue.created_at,
    )
