"""Project domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal

from spendboard.database.base import Database
from spendboard.domain.entities import Project as ProjectEntity, ProjectStatus
from spendboard.domain.errors import (
    ValidationError,
    NotFoundError,
    ConflictError,
    DependencyError,
    project_not_found,
    project_name_not_found,
    duplicate_name,
    delete_blocked,
    invalid_choice,
)

PROJECT_STATUSES = [status.value for status in ProjectStatus]


class ProjectService:
    """Service for managing projects."""

    def __init__(self, db: Database):
        """Initialize project service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_project(
        self,
        name: str,
        description: Optional[str] = None,
        client: Optional[str] = None,
        status: str = ProjectStatus.ACTIVE.value,
        budget: Optional[Decimal] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        """Create a new project.

        Args:
            name: Project name (unique, case-insensitive)
            description: Optional description
            client: Optional client name
            status: One of active, on_hold, completed
            budget: Optional budget (must not be negative)
            start_date: Optional start date
            end_date: Optional end date (must not precede start_date)

        Returns:
            Project ID

        Raises:
            ValidationError: If a field is invalid
            ConflictError: If a project with the same name exists
        """
        name = self._validate_name(name)
        self._validate_fields(status, budget, start_date, end_date)

        if self.db.get_project_by_name(name) is not None:
            raise ConflictError(duplicate_name("Project", name))

        return self.db.create_project(
            name=name,
            description=description,
            client=client,
            status=status,
            budget=budget,
            start_date=start_date,
            end_date=end_date,
        )

    def get_project(self, project_id: int) -> Optional[ProjectEntity]:
        """Get project by ID.

        Args:
            project_id: Project ID

        Returns:
            Project entity or None if not found
        """
        return self.db.get_project(project_id)

    def get_project_by_name(self, name: str) -> Optional[ProjectEntity]:
        """Get project by name (case-insensitive)."""
        return self.db.get_project_by_name(name)

    def list_projects(self, status: Optional[str] = None) -> list[ProjectEntity]:
        """List projects, optionally filtered by status.

        Raises:
            ValidationError: If status is not a known project status
        """
        if status is not None and status not in PROJECT_STATUSES:
            raise ValidationError(invalid_choice("status", status, PROJECT_STATUSES))
        return self.db.list_projects(status=status)

    def resolve_project(self, name_or_id: str) -> ProjectEntity:
        """Resolve a project from a numeric ID or a name.

        Args:
            name_or_id: Project ID as text, or project name

        Returns:
            Project entity

        Raises:
            NotFoundError: If no project matches
        """
        value = name_or_id.strip()
        if value.isdigit():
            project = self.db.get_project(int(value))
            if project is not None:
                return project

        project = self.db.get_project_by_name(value)
        if project is None:
            raise NotFoundError(project_name_not_found(value))
        return project

    def update_project(self, project_id: int, **fields) -> None:
        """Update a project.

        Only the given fields are changed. Validation runs against the
        merged result, so moving only the end date before the stored start
        date is rejected too.

        Raises:
            NotFoundError: If project not found
            ValidationError: If a field is invalid
            ConflictError: If the new name collides with another project
        """
        project = self.db.get_project(project_id)
        if project is None:
            raise NotFoundError(project_not_found(project_id))

        if "name" in fields:
            fields["name"] = self._validate_name(fields["name"])
            existing = self.db.get_project_by_name(fields["name"])
            if existing is not None and existing.id != project_id:
                raise ConflictError(duplicate_name("Project", fields["name"]))

        self._validate_fields(
            fields.get("status", project.status),
            fields.get("budget", project.budget),
            fields.get("start_date", project.start_date),
            fields.get("end_date", project.end_date),
        )

        if fields:
            self.db.update_project(project_id, **fields)

    def delete_project(self, project_id: int) -> None:
        """Delete a project.

        Raises:
            NotFoundError: If project not found
            DependencyError: If expenses or revenues still reference it
        """
        project = self.db.get_project(project_id)
        if project is None:
            raise NotFoundError(project_not_found(project_id))

        expense_count = self.db.get_project_expense_count(project_id)
        revenue_count = self.db.get_project_revenue_count(project_id)
        if expense_count > 0 or revenue_count > 0:
            raise DependencyError(
                delete_blocked(
                    "project",
                    project_id,
                    {"expense": expense_count, "revenue": revenue_count},
                )
            )

        self.db.delete_project(project_id)

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Project name is required")
        return name

    @staticmethod
    def _validate_fields(
        status: str,
        budget: Optional[Decimal],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> None:
        if status not in PROJECT_STATUSES:
            raise ValidationError(invalid_choice("status", status, PROJECT_STATUSES))
        if budget is not None and budget < 0:
            raise ValidationError("Budget must not be negative")
        if start_date is not None and end_date is not None and end_date < start_date:
            raise ValidationError("End date must not be before start date")
