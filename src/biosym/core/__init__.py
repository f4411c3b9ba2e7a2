"""Core data structures and generic algorithms."""

from biosym.core.alignment import (
    column_indices,
    remove_gap_columns,
    remove_sparse_columns,
    snp_columns,
)
from biosym.core.codons import GeneticCode
from biosym.core.errors import (
    BiosymError,
    DimensionMismatchError,
    EmptySequenceError,
    InvalidSymbolError,
)
from biosym.core.sequences import Alignment, Sequence
from biosym.core.splitter import Splitter, section
from biosym.core.symbols import Alphabet, AminoAcid, Codon, Nucleotide

__all__ = [
    "Alphabet",
    "AminoAcid",
    "Codon",
    "Nucleotide",
    "GeneticCode",
    "Sequence",
    "Alignment",
    "Splitter",
    "section",
    "column_indices",
    "remove_gap_columns",
    "remove_sparse_columns",
    "snp_columns",
    "BiosymError",
    "DimensionMismatchError",
    "EmptySequenceError",
    "InvalidSymbolError",
]
