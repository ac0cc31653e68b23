"""Tests for reading workbook bytes into a raw grid."""

import pytest

from spendboard.domain.errors import DecodeError
from spendboard.domain.sheet_reader import read_sheet


def test_read_sheet_returns_raw_values(make_workbook):
    """Test that cell values come back unformatted and in order."""
    content = make_workbook(
        [
            ["Projet", "Designation", "Janvier"],
            ["Alpha", "FOURNISSEUR", 1000],
        ]
    )

    grid = read_sheet(content)

    assert grid[0] == ("Projet", "Designation", "Janvier")
    assert grid[1] == ("Alpha", "FOURNISSEUR", 1000)


def test_read_sheet_keeps_blank_rows(make_workbook):
    """Test that blank rows stay in place so row numbers line up."""
    content = make_workbook(
        [
            ["Rapport 2024"],
            [],
            ["Projet", "Designation", "Janvier"],
        ]
    )

    grid = read_sheet(content)

    assert len(grid) == 3
    assert all(value is None for value in grid[1])
    assert grid[2][0] == "Projet"


def test_read_sheet_uses_first_sheet_only(make_workbook):
    """Test that later sheets are ignored."""
    content = make_workbook(
        [["first"]],
        extra_sheets={"Autre": [["second"]]},
    )

    grid = read_sheet(content)

    assert grid[0][0] == "first"


@pytest.mark.parametrize("content", [b"", b"not a spreadsheet", b"PK\x03\x04broken"])
def test_read_sheet_rejects_unreadable_bytes(content):
    """Test that unreadable input raises DecodeError."""
    with pytest.raises(DecodeError):
        read_sheet(content)
