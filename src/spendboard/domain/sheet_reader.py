"""Decode spreadsheet bytes into a grid of raw cell values."""

import logging
from datetime import datetime
from decimal import Decimal
from io import BytesIO
from typing import Union, Optional

from openpyxl import load_workbook

from spendboard.domain.errors import DecodeError

logger = logging.getLogger(__name__)

CellValue = Optional[Union[str, int, float, Decimal, datetime]]
RawGrid = tuple[tuple[CellValue, ...], ...]


def read_sheet(content: bytes) -> RawGrid:
    """Read the first sheet of a workbook into a RawGrid.

    Cells keep their stored values (formulas are read as their cached
    results). Blank rows and blank cells are kept as None so row indexes
    line up with the sheet; rows may differ in length.

    Args:
        content: Raw bytes of an .xlsx workbook

    Returns:
        Tuple of rows, each a tuple of cell values

    Raises:
        DecodeError: If the bytes are not a readable workbook, or the
            workbook has no sheets
    """
    if not content:
        raise DecodeError("Could not read workbook: file is empty")

    try:
        workbook = load_workbook(BytesIO(content), data_only=True)
    except Exception as exc:
        raise DecodeError(f"Could not read workbook: {exc}") from exc

    try:
        if not workbook.worksheets:
            raise DecodeError("Workbook contains no sheets")

        sheet = workbook.worksheets[0]
        grid = tuple(tuple(row) for row in sheet.iter_rows(values_only=True))
    finally:
        workbook.close()

    logger.debug("Read sheet '%s': %d rows", sheet.title, len(grid))
    return grid
