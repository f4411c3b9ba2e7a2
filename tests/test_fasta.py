"""Tests for FASTA parser and writer."""

import io
from pathlib import Path

import pytest

from biosym.core.errors import InvalidSymbolError
from biosym.core.sequences import Sequence
from biosym.core.symbols import DNA
from biosym.io.fasta import read_fasta, read_sequences, write_fasta, write_sequences


def test_read_fasta(tmp_path: Path) -> None:
    """Test reading a FASTA file."""
    fasta_content = """>seq1
ATGCATGC
ATGCATGC
>seq2
GGGGCCCC
"""
    fasta_file = tmp_path / "test.fa"
    fasta_file.write_text(fasta_content)

    sequences = list(read_fasta(fasta_file))

    assert len(sequences) == 2
    assert sequences[0] == ("seq1", "", "ATGCATGCATGCATGC")
    assert sequences[1] == ("seq2", "", "GGGGCCCC")


def test_read_fasta_with_header_info(tmp_path: Path) -> None:
    """Test that the rest of the header becomes the description."""
    fasta_content = """>seq1 description here
ATGCATGC
"""
    fasta_file = tmp_path / "test.fa"
    fasta_file.write_text(fasta_content)

    sequences = list(read_fasta(fasta_file))

    assert sequences[0][0] == "seq1"
    assert sequences[0][1] == "description here"


def test_read_fasta_uppercase(tmp_path: Path) -> None:
    """Test that sequences are converted to uppercase."""
    fasta_content = """>seq1
atgcATGC
"""
    fasta_file = tmp_path / "test.fa"
    fasta_file.write_text(fasta_content)

    sequences = list(read_fasta(fasta_file))

    assert sequences[0][2] == "ATGCATGC"


def test_read_empty_fasta(tmp_path: Path) -> None:
    """Test reading an empty FASTA file."""
    fasta_file = tmp_path / "empty.fa"
    fasta_file.write_text("")

    sequences = list(read_fasta(fasta_file))

    assert len(sequences) == 0


def test_read_sequences(tmp_path: Path) -> None:
    """Test reading typed sequences."""
    fasta_file = tmp_path / "test.fa"
    fasta_file.write_text(">seq1 gene\nAC-GT\n")

    sequences = list(read_sequences(fasta_file, DNA))

    assert sequences[0].name == "seq1"
    assert sequences[0].description == "gene"
    assert str(sequences[0]) == "AC-GT"


def test_read_sequences_invalid(tmp_path: Path) -> None:
    """Test that invalid characters are reported."""
    fasta_file = tmp_path / "test.fa"
    fasta_file.write_text(">seq1\nACJT\n")

    with pytest.raises(InvalidSymbolError):
        list(read_sequences(fasta_file, DNA))


def test_write_fasta() -> None:
    """Test writing FASTA to an open stream."""
    records = [("seq1", "", "ATGCATGC"), ("seq2", "desc", "GGGGCCCC")]
    handle = io.StringIO()

    write_fasta(records, handle, line_width=4)

    lines = handle.getvalue().strip().split("\n")
    assert lines[0] == ">seq1"
    assert lines[1] == "ATGC"
    assert lines[2] == "ATGC"
    assert lines[3] == ">seq2 desc"
    assert not handle.closed


def test_write_sequences_round_trip(tmp_path: Path) -> None:
    """Test that written sequences read back unchanged."""
    seqs = [Sequence.from_text("AC-GT", DNA, "s1", "first"), Sequence.from_text("ACCGT", DNA, "s2")]
    fasta_file = tmp_path / "out.fa"

    with fasta_file.open("w") as handle:
        write_sequences(seqs, handle)

    assert list(read_sequences(fasta_file, DNA)) == seqs
