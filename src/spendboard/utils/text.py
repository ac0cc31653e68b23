"""Text normalization helpers for matching spreadsheet labels."""

import re
import unicodedata
from typing import Any


def cell_text(value: Any) -> str:
    """Return the trimmed text of a cell, or an empty string for blanks."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).replace("\xa0", " ").strip()


def normalize_label(value: Any) -> str:
    """Fold a label for comparison.

    Lowercases, strips accents and collapses internal whitespace, so
    "  Février " and "FEVRIER" compare equal.
    """
    text = cell_text(value)
    decomposed = unicodedata.normalize("NFKD", text)
    without_accents = "".join(c for c in decomposed if not unicodedata.combining(c))
    return re.sub(r"\s+", " ", without_accents).lower()


def derive_code(name: str) -> str:
    """Derive an uppercase identifier from a display name.

    Example: "Sous traitant" -> "SOUS_TRAITANT", "Note de frais" -> "NOTE_DE_FRAIS".
    """
    folded = normalize_label(name).upper()
    code = re.sub(r"[^A-Z0-9]+", "_", folded).strip("_")
    if not code:
        raise ValueError(f"Cannot derive a code from '{name}'")
    return code
