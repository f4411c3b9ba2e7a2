"""Tests for the sequential PAML parser and writer."""

import io
from pathlib import Path

import pytest

from biosym.io.paml import read_paml, write_paml


def test_read_paml(tmp_path: Path) -> None:
    """Test reading a sequential PAML file with wrapped lines."""
    paml_file = tmp_path / "test.nuc"
    paml_file.write_text(
        """  2   12

seq1 human
ATG CCC
AAA ---
seq2
atgccc
aaaTTT
"""
    )

    records = list(read_paml(paml_file))

    assert records == [
        ("seq1", "human", "ATGCCCAAA---"),
        ("seq2", "", "ATGCCCAAATTT"),
    ]


def test_read_paml_truncated(tmp_path: Path) -> None:
    """Test that a short record is reported."""
    paml_file = tmp_path / "test.nuc"
    paml_file.write_text("2 6\nseq1\nATGCCC\nseq2\nATG\n")

    with pytest.raises(ValueError, match="seq2"):
        list(read_paml(paml_file))


def test_read_paml_missing_sequence(tmp_path: Path) -> None:
    """Test that fewer records than declared are reported."""
    paml_file = tmp_path / "test.nuc"
    paml_file.write_text("2 3\nseq1\nATG\n")

    with pytest.raises(ValueError, match="ended early"):
        list(read_paml(paml_file))


def test_read_paml_bad_header(tmp_path: Path) -> None:
    """Test that a malformed header is reported."""
    paml_file = tmp_path / "test.nuc"
    paml_file.write_text("two six\n")

    with pytest.raises(ValueError, match="header"):
        list(read_paml(paml_file))


def test_read_empty_paml(tmp_path: Path) -> None:
    """Test reading an empty PAML file."""
    paml_file = tmp_path / "empty.nuc"
    paml_file.write_text("")

    assert list(read_paml(paml_file)) == []


def test_write_paml(tmp_path: Path) -> None:
    """Test that written records read back unchanged."""
    records = [("seq1", "human", "ATGCCC---"), ("seq2", "", "ATGCCCAAA")]
    paml_file = tmp_path / "out.nuc"

    with paml_file.open("w") as handle:
        write_paml(records, handle, line_width=4)

    assert paml_file.read_text().splitlines()[0] == "2 9"
    assert list(read_paml(paml_file)) == records


def test_write_paml_unequal_lengths() -> None:
    """Test that PAML output needs equal lengths."""
    with pytest.raises(ValueError):
        write_paml([("a", "", "AC"), ("b", "", "ACG")], io.StringIO())
