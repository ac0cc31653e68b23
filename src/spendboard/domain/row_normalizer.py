"""Turn the data rows of an expense sheet into normalized expense records.

Rows below the header are read in order. The project cell is often filled
only on the first row of a group (merged cells), so the last project seen
carries forward to the rows that leave it blank. Every row and every period
cell yields exactly one outcome: a record, a silent skip, or a row error.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Union

from spendboard.domain.sheet_layout import SheetLayout
from spendboard.domain.sheet_reader import RawGrid
from spendboard.utils.amount_parser import parse_cell_amount
from spendboard.utils.text import cell_text, normalize_label

logger = logging.getLogger(__name__)

# Expense categories recognized in the designation column
CATEGORY_VOCABULARY = ("FOURNISSEUR", "SOUS TRAITANT", "NDF")


@dataclass(frozen=True)
class NormalizedRecord:
    """One positive amount for a project, category and period."""

    project_name: str
    category_label: str
    period_key: str
    amount: Decimal
    row_number: int


@dataclass(frozen=True)
class Emitted:
    """A period cell produced a record."""

    record: NormalizedRecord


@dataclass(frozen=True)
class SkippedSilently:
    """A row or cell carried nothing to import."""

    row_number: int
    reason: str
    period_key: Optional[str] = None


@dataclass(frozen=True)
class SkippedWithError:
    """A row could not be imported and must be reported."""

    row_number: int
    message: str


RowOutcome = Union[Emitted, SkippedSilently, SkippedWithError]


@dataclass(frozen=True)
class NormalizationResult:
    """Every outcome produced while normalizing a sheet, in sheet order."""

    outcomes: tuple[RowOutcome, ...]

    @property
    def records(self) -> list[NormalizedRecord]:
        return [o.record for o in self.outcomes if isinstance(o, Emitted)]

    @property
    def errors(self) -> list[tuple[int, str]]:
        return [
            (o.row_number, o.message)
            for o in self.outcomes
            if isinstance(o, SkippedWithError)
        ]

    @property
    def silent_skips(self) -> list[SkippedSilently]:
        return [o for o in self.outcomes if isinstance(o, SkippedSilently)]


def _cell(row: tuple, column_index: int):
    if column_index < len(row):
        return row[column_index]
    return None


def normalize_rows(
    grid: RawGrid,
    layout: SheetLayout,
    vocabulary: Optional[Iterable[str]] = None,
) -> NormalizationResult:
    """Normalize the rows below the header into expense records.

    Args:
        grid: Rows read from the sheet
        layout: Detected layout of the sheet
        vocabulary: Accepted category labels; defaults to CATEGORY_VOCABULARY.
            Labels match without regard to case or accents, and records carry
            the vocabulary spelling.

    Returns:
        NormalizationResult with one outcome per skipped row, per row error
        and per period cell considered

    Raises:
        ValueError: If the layout itself is invalid
    """
    layout.validate()
    known = {
        normalize_label(label): label
        for label in (vocabulary if vocabulary is not None else CATEGORY_VOCABULARY)
    }

    outcomes: list[RowOutcome] = []
    current_project_name: Optional[str] = None

    for row_index in range(layout.header_row_index + 1, len(grid)):
        row = grid[row_index]
        row_number = row_index + 1

        project_text = cell_text(_cell(row, layout.project_column))
        if project_text:
            current_project_name = project_text

        category_text = cell_text(_cell(row, layout.category_column))
        if not category_text:
            outcomes.append(SkippedSilently(row_number, "empty category"))
            continue

        if current_project_name is None:
            message = f"Row {row_number}: project undefined for category row '{category_text}'"
            logger.warning(message)
            outcomes.append(SkippedWithError(row_number, message))
            continue

        category_label = known.get(normalize_label(category_text))
        if category_label is None:
            message = f"Row {row_number}: unrecognized category '{category_text}'"
            logger.warning(message)
            outcomes.append(SkippedWithError(row_number, message))
            continue

        for period in layout.period_columns:
            value = _cell(row, period.column_index)
            if cell_text(value) == "":
                outcomes.append(SkippedSilently(row_number, "empty amount", period.period_key))
                continue
            try:
                amount = parse_cell_amount(value)
            except ValueError:
                outcomes.append(
                    SkippedSilently(row_number, "non-numeric amount", period.period_key)
                )
                continue
            if amount <= 0:
                outcomes.append(
                    SkippedSilently(row_number, "non-positive amount", period.period_key)
                )
                continue

            outcomes.append(
                Emitted(
                    NormalizedRecord(
                        project_name=current_project_name,
                        category_label=category_label,
                        period_key=period.period_key,
                        amount=amount,
                        row_number=row_number,
                    )
                )
            )

    result = NormalizationResult(outcomes=tuple(outcomes))
    logger.debug(
        "Normalized %d rows: %d records, %d row errors",
        max(len(grid) - layout.header_row_index - 1, 0),
        len(result.records),
        len(result.errors),
    )
    return result
