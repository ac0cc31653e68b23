"""Spreadsheet import domain service.

Runs an expense sheet through reading, layout detection and row
normalization, then resolves each record's project and category (creating
missing ones) and writes one expense per record.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Optional

from spendboard.database.base import Database
from spendboard.domain.row_normalizer import (
    NormalizationResult,
    NormalizedRecord,
    normalize_rows,
)
from spendboard.domain.sheet_layout import MONTHS, detect_layout
from spendboard.domain.sheet_reader import read_sheet
from spendboard.logging_setup import SUMMARY_LEVEL
from spendboard.utils.text import derive_code

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


def _key(name: str) -> str:
    return name.strip().lower()


class ReferenceCache:
    """Project and category IDs by lowercased name for one import batch.

    Categories are also indexed by code, so a label spelled differently
    from an existing category with the same code reuses that category.

    Built from a single snapshot of the store and extended as the batch
    creates new references. Assumes nothing else writes projects or
    categories while the batch runs.
    """

    def __init__(
        self,
        projects: dict[str, int],
        categories: dict[str, int],
        codes: Optional[dict[str, int]] = None,
    ):
        self.projects = projects
        self.categories = categories
        self.codes = codes if codes is not None else {}

    @classmethod
    def load(cls, db: Database) -> "ReferenceCache":
        """Snapshot the existing projects and categories."""
        categories = db.list_categories()
        return cls(
            projects={_key(p.name): p.id for p in db.list_projects()},
            categories={_key(c.name): c.id for c in categories},
            codes={c.code: c.id for c in categories},
        )

    def project_id(self, name: str) -> Optional[int]:
        return self.projects.get(_key(name))

    def add_project(self, name: str, project_id: int) -> None:
        self.projects[_key(name)] = project_id

    def category_id(self, name: str) -> Optional[int]:
        return self.categories.get(_key(name))

    def category_id_by_code(self, code: str) -> Optional[int]:
        return self.codes.get(code)

    def add_category(self, name: str, category_id: int, code: Optional[str] = None) -> None:
        self.categories[_key(name)] = category_id
        if code is not None:
            self.codes[code] = category_id


@dataclass
class ImportOutcome:
    """Running totals of an import.

    ``total`` counts the records handed to the writer, so
    ``succeeded + failed == total`` always holds. Rows rejected earlier by
    the normalizer are counted in ``rejected_rows`` and listed in
    ``error_messages`` alongside write failures.
    """

    succeeded: int = 0
    failed: int = 0
    total: int = 0
    success_records: list[NormalizedRecord] = field(default_factory=list)
    error_messages: list[tuple[int, str]] = field(default_factory=list)
    rejected_rows: int = 0
    created_projects: list[str] = field(default_factory=list)
    created_categories: list[str] = field(default_factory=list)

    def record_success(self, record: NormalizedRecord) -> None:
        self.succeeded += 1
        self.success_records.append(record)

    def record_failure(self, row_number: int, message: str) -> None:
        self.failed += 1
        self.error_messages.append((row_number, message))


def expense_date_for(period_key: str, today: Optional[date] = None) -> date:
    """Return the first day of the period's month in the current year.

    Raises:
        ValueError: If period_key is not a known month
    """
    today = today or date.today()
    return date(today.year, MONTHS.index(period_key) + 1, 1)


def expense_description(period_key: str) -> str:
    """Return the description written on imported expenses."""
    return f"Imported from spreadsheet ({period_key})"


def resolve_and_write(
    db: Database,
    records: Iterable[NormalizedRecord],
    cache: Optional[ReferenceCache] = None,
    progress_callback: Optional[ProgressCallback] = None,
    today: Optional[date] = None,
    outcome: Optional[ImportOutcome] = None,
) -> ImportOutcome:
    """Write one expense per record, creating missing projects and categories.

    Records are processed one at a time in order. A failure on one record
    (reference creation or expense write) is recorded against its row and
    the batch moves on; nothing already written is undone.

    Args:
        db: Database instance
        records: Normalized records to write
        cache: Reference cache for this batch; loaded from db when omitted
        progress_callback: Called with the completed percentage (0-100)
            after each record
        today: Reference date for the expense year (defaults to today)
        outcome: Outcome to add to; a new one is created when omitted

    Returns:
        The completed ImportOutcome
    """
    records = list(records)
    outcome = outcome if outcome is not None else ImportOutcome()
    outcome.total += len(records)

    if cache is None:
        try:
            cache = ReferenceCache.load(db)
        except Exception as e:
            logger.error("Could not load projects and categories: %s", e)
            for record in records:
                outcome.record_failure(
                    record.row_number,
                    f"Row {record.row_number}: could not load references: {e}",
                )
            return outcome

    count = len(records)
    for index, record in enumerate(records):
        try:
            project_id = cache.project_id(record.project_name)
            if project_id is None:
                project_id = db.create_project(name=record.project_name)
                cache.add_project(record.project_name, project_id)
                outcome.created_projects.append(record.project_name)
                logger.info("Created project '%s'", record.project_name)

            category_id = cache.category_id(record.category_label)
            if category_id is None:
                code = derive_code(record.category_label)
                category_id = cache.category_id_by_code(code)
                if category_id is not None:
                    cache.add_category(record.category_label, category_id)
            if category_id is None:
                category_id = db.create_category(name=record.category_label, code=code)
                cache.add_category(record.category_label, category_id, code)
                outcome.created_categories.append(record.category_label)
                logger.info("Created category '%s'", record.category_label)

            db.create_expense(
                project_id=project_id,
                category_id=category_id,
                amount=record.amount,
                expense_date=expense_date_for(record.period_key, today),
                description=expense_description(record.period_key),
            )
        except Exception as e:
            message = f"Row {record.row_number}: {e}"
            logger.warning(message)
            outcome.record_failure(record.row_number, message)
        else:
            outcome.record_success(record)

        if progress_callback is not None:
            progress_callback((index + 1) / count * 100)

    return outcome


class SheetImportService:
    """Service for importing expense spreadsheets."""

    def __init__(self, db: Database, vocabulary: Optional[Iterable[str]] = None):
        """Initialize sheet import service.

        Args:
            db: Database instance
            vocabulary: Optional override of the accepted category labels
        """
        self.db = db
        self.vocabulary = tuple(vocabulary) if vocabulary is not None else None

    def preview(self, content: bytes) -> NormalizationResult:
        """Read and normalize a workbook without writing anything.

        Args:
            content: Raw bytes of an .xlsx workbook

        Returns:
            NormalizationResult with the records an import would write

        Raises:
            DecodeError: If the bytes are not a readable workbook
            LayoutNotFoundError: If no header row is found
        """
        grid = read_sheet(content)
        layout = detect_layout(grid)
        return normalize_rows(grid, layout, self.vocabulary)

    def preview_file(self, file_path: str) -> NormalizationResult:
        """Read and normalize a workbook file without writing anything.

        Raises:
            FileNotFoundError: If the file doesn't exist
            DecodeError: If the file is not a readable workbook
            LayoutNotFoundError: If no header row is found
        """
        return self.preview(self._read_file(file_path))

    def import_bytes(
        self,
        content: bytes,
        progress_callback: Optional[ProgressCallback] = None,
        today: Optional[date] = None,
    ) -> ImportOutcome:
        """Import expenses from workbook bytes.

        Reading and layout errors abort the import before anything is
        written. Once writing starts every record is attempted.

        Args:
            content: Raw bytes of an .xlsx workbook
            progress_callback: Called with the completed percentage (0-100)
            today: Reference date for the expense year (defaults to today)

        Returns:
            ImportOutcome for the batch

        Raises:
            DecodeError: If the bytes are not a readable workbook
            LayoutNotFoundError: If no header row is found
        """
        result = self.preview(content)
        records = result.records

        outcome = ImportOutcome()
        outcome.rejected_rows = len(result.errors)
        outcome.error_messages.extend(result.errors)

        logger.info(
            "Writing %d records (%d rows rejected)", len(records), outcome.rejected_rows
        )
        resolve_and_write(
            self.db,
            records,
            cache=None,
            progress_callback=progress_callback,
            today=today,
            outcome=outcome,
        )
        logger.log(
            SUMMARY_LEVEL,
            "Import finished: %d succeeded, %d failed, %d total",
            outcome.succeeded,
            outcome.failed,
            outcome.total,
        )
        return outcome

    def import_file(
        self,
        file_path: str,
        progress_callback: Optional[ProgressCallback] = None,
        today: Optional[date] = None,
    ) -> ImportOutcome:
        """Import expenses from a workbook file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            DecodeError: If the file is not a readable workbook
            LayoutNotFoundError: If no header row is found
        """
        logger.info("Importing %s", file_path)
        return self.import_bytes(
            self._read_file(file_path), progress_callback=progress_callback, today=today
        )

    @staticmethod
    def _read_file(file_path: str) -> bytes:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Spreadsheet not found: {file_path}")
        return path.read_bytes()
