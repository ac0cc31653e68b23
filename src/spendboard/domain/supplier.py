"""Supplier domain service."""

from typing import Optional

from spendboard.database.base import Database
from spendboard.domain.entities import Supplier as SupplierEntity
from spendboard.domain.errors import ValidationError


class SupplierService:
    """Service for managing suppliers."""

    def __init__(self, db: Database):
        """Initialize supplier service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_or_create_supplier(self, name: str) -> int:
        """Return the ID of the supplier with this name, creating it if needed.

        Args:
            name: Supplier name (matched case-insensitively)

        Returns:
            Supplier ID

        Raises:
            ValidationError: If name is empty
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Supplier name is required")

        supplier = self.db.get_supplier_by_name(name)
        if supplier is not None:
            return supplier.id
        return self.db.create_supplier(name=name)

    def get_supplier(self, supplier_id: int) -> Optional[SupplierEntity]:
        """Get supplier by ID."""
        return self.db.get_supplier(supplier_id)

    def list_suppliers(self) -> list[SupplierEntity]:
        """List all suppliers."""
        return self.db.list_suppliers()
