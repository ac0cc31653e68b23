"""Spreadsheet export domain service."""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from openpyxl import Workbook

from spendboard.database.base import Database
from spendboard.domain.errors import ValidationError, invalid_choice

logger = logging.getLogger(__name__)

EXPORT_TYPES = ["expenses", "projects"]

EXPENSE_HEADERS = [
    "Date",
    "Montant",
    "Description",
    "Projet",
    "Client",
    "Type de dépense",
    "Fournisseur",
    "Référence facture",
]
PROJECT_HEADERS = [
    "Nom",
    "Description",
    "Client",
    "Budget",
    "Date de début",
    "Date de fin",
    "Statut",
    "Date de création",
]
SHEET_TITLES = {"expenses": "Dépenses", "projects": "Projets"}


def default_export_filename(export_type: str, today: Optional[date] = None) -> str:
    """Return the default file name for an export, e.g. spendboard-expenses-2024-03-01.xlsx."""
    today = today or date.today()
    return f"spendboard-{export_type}-{today.isoformat()}.xlsx"


class ExportService:
    """Service for exporting expenses and projects to .xlsx workbooks."""

    def __init__(self, db: Database):
        """Initialize export service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_rows(self, export_type: str) -> tuple[list[str], list[list]]:
        """Build the header and data rows for an export.

        Args:
            export_type: "expenses" or "projects"

        Returns:
            Tuple of (headers, rows), newest entries first

        Raises:
            ValidationError: If export_type is not supported
        """
        if export_type == "expenses":
            return EXPENSE_HEADERS, self._expense_rows()
        if export_type == "projects":
            return PROJECT_HEADERS, self._project_rows()
        raise ValidationError(invalid_choice("export type", export_type, EXPORT_TYPES))

    def export(self, export_type: str, output_path: Optional[str] = None) -> Path:
        """Write an export workbook.

        Args:
            export_type: "expenses" or "projects"
            output_path: Target file; defaults to default_export_filename()
                in the current directory

        Returns:
            Path of the written workbook

        Raises:
            ValidationError: If export_type is not supported
        """
        headers, rows = self.build_rows(export_type)

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_TITLES[export_type]
        sheet.append(headers)
        for row in rows:
            sheet.append(row)

        path = Path(output_path or default_export_filename(export_type))
        workbook.save(path)
        logger.info("Exported %d %s to %s", len(rows), export_type, path)
        return path

    def _expense_rows(self) -> list[list]:
        projects = {p.id: p for p in self.db.list_projects()}
        categories = {c.id: c.name for c in self.db.list_categories()}
        suppliers = {s.id: s.name for s in self.db.list_suppliers()}

        rows = []
        for expense in self.db.list_expenses():
            project = projects.get(expense.project_id)
            rows.append(
                [
                    expense.expense_date,
                    expense.amount,
                    expense.description or "",
                    project.name if project else "",
                    (project.client or "") if project else "",
                    categories.get(expense.category_id, ""),
                    suppliers.get(expense.supplier_id, "") if expense.supplier_id else "",
                    expense.invoice_reference or "",
                ]
            )
        return rows

    def _project_rows(self) -> list[list]:
        projects = sorted(
            self.db.list_projects(), key=lambda p: (p.created_at, p.id), reverse=True
        )
        return [
            [
                p.name,
                p.description or "",
                p.client or "",
                p.budget if p.budget is not None else "",
                p.start_date or "",
                p.end_date or "",
                p.status,
                p.created_at,
            ]
            for p in projects
        ]
