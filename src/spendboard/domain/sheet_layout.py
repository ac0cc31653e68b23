"""Locate the header row and period columns of an expense sheet."""

import logging
from dataclasses import dataclass

from spendboard.domain.errors import LayoutNotFoundError
from spendboard.domain.sheet_reader import RawGrid
from spendboard.utils.text import normalize_label, cell_text

logger = logging.getLogger(__name__)

# Canonical period keys in calendar order
MONTHS = (
    "Janvier",
    "Février",
    "Mars",
    "Avril",
    "Mai",
    "Juin",
    "Juillet",
    "Août",
    "Septembre",
    "Octobre",
    "Novembre",
    "Décembre",
)

PROJECT_LABELS = frozenset({"projet", "project", "nom du projet", "project name"})
CATEGORY_LABELS = frozenset(
    {"designation", "categorie", "category", "type de depense", "type"}
)

_MONTH_LOOKUP = {normalize_label(name): (name, index + 1) for index, name in enumerate(MONTHS)}


@dataclass(frozen=True)
class PeriodColumn:
    """A header cell recognized as a period."""

    column_index: int
    column_label: str
    period_key: str
    month: int


@dataclass(frozen=True)
class SheetLayout:
    """Where the data of an expense sheet lives."""

    header_row_index: int
    project_column: int
    category_column: int
    period_columns: tuple[PeriodColumn, ...]

    def validate(self) -> None:
        """Check the layout is usable for normalization.

        Raises:
            ValueError: If an index is negative, the project and category
                columns coincide, or there are no period columns
        """
        if self.header_row_index < 0:
            raise ValueError("header_row_index must not be negative")
        if self.project_column < 0 or self.category_column < 0:
            raise ValueError("column indexes must not be negative")
        if self.project_column == self.category_column:
            raise ValueError("project and category columns must differ")
        if not self.period_columns:
            raise ValueError("layout has no period columns")


def detect_layout(grid: RawGrid) -> SheetLayout:
    """Find the first row that looks like the sheet's header.

    A header row holds a project label, a category/designation label and
    at least one month name, compared without case or accents. The first
    qualifying row wins.

    Args:
        grid: Rows read from the sheet

    Returns:
        SheetLayout for the header row

    Raises:
        LayoutNotFoundError: If no row qualifies
    """
    for row_index, row in enumerate(grid):
        project_column = None
        category_column = None
        period_columns = []

        for column_index, value in enumerate(row):
            label = normalize_label(value)
            if not label:
                continue
            if project_column is None and label in PROJECT_LABELS:
                project_column = column_index
            elif category_column is None and label in CATEGORY_LABELS:
                category_column = column_index
            else:
                period = _MONTH_LOOKUP.get(label)
                if period is not None:
                    period_key, month = period
                    period_columns.append(
                        PeriodColumn(
                            column_index=column_index,
                            column_label=cell_text(value),
                            period_key=period_key,
                            month=month,
                        )
                    )

        if project_column is not None and category_column is not None and period_columns:
            layout = SheetLayout(
                header_row_index=row_index,
                project_column=project_column,
                category_column=category_column,
                period_columns=tuple(period_columns),
            )
            logger.debug(
                "Header found on row %d: project column %d, category column %d, %d periods",
                row_index + 1,
                project_column,
                category_column,
                len(period_columns),
            )
            return layout

    raise LayoutNotFoundError(
        "No header row found: expected a project column, a category/designation "
        "column and at least one month column (Janvier to Décembre)"
    )
