"""Category (expense type) domain service."""

from typing import Optional

from spendboard.database.base import Database
from spendboard.domain.entities import Category as CategoryEntity
from spendboard.domain.errors import (
    ValidationError,
    NotFoundError,
    ConflictError,
    DependencyError,
    category_not_found,
    duplicate_name,
    delete_blocked,
)
from spendboard.domain.row_normalizer import CATEGORY_VOCABULARY
from spendboard.utils.text import derive_code


class CategoryService:
    """Service for managing expense categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, code: Optional[str] = None) -> int:
        """Create a category.

        Args:
            name: Category name (unique, case-insensitive)
            code: Optional code; derived from the name when omitted
                (e.g., "Sous traitant" -> "SOUS_TRAITANT")

        Returns:
            Category ID

        Raises:
            ValidationError: If name is empty or no code can be derived
            ConflictError: If the name or code is already taken
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")

        try:
            code = derive_code(code or name)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_name("Category", name))
        for cat in self.db.list_categories():
            if cat.code == code:
                raise ConflictError(f"Category with code '{code}' already exists")

        return self.db.create_category(name=name, code=code)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[CategoryEntity]:
        """Get category by name (case-insensitive)."""
        return self.db.get_category_by_name(name)

    def list_categories(self) -> list[CategoryEntity]:
        """List all categories.

        Returns:
            List of category entities ordered by name
        """
        return self.db.list_categories()

    def init_default_categories(self) -> list[str]:
        """Create the categories the spreadsheet importer recognizes.

        Existing categories are left untouched.

        Returns:
            Names of the categories that were created
        """
        created = []
        for name in CATEGORY_VOCABULARY:
            if self.db.get_category_by_name(name) is None:
                self.db.create_category(name=name, code=derive_code(name))
                created.append(name)
        return created

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If category not found
            DependencyError: If expenses still reference it
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))

        expense_count = self.db.get_category_expense_count(category_id)
        if expense_count > 0:
            raise DependencyError(
                delete_blocked("category", category_id, {"expense": expense_count})
            )

        self.db.delete_category(category_id)
