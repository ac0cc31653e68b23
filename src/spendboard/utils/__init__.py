"""Utility functions for spendboard."""

from spendboard.utils.date_parser import parse_date
from spendboard.utils.amount_parser import parse_amount, parse_cell_amount
from spendboard.utils.text import normalize_label, derive_code

__all__ = ["parse_date", "parse_amount", "parse_cell_amount", "normalize_label", "derive_code"]
