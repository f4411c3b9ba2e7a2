"""biosym: typed biological symbol sequences and generic alignment algorithms."""

__version__ = "0.1.0"

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
from biosym.core.symbols import (
    CODON,
    DNA,
    PROTEIN,
    Alphabet,
    AminoAcid,
    Codon,
    Nucleotide,
)

__all__ = [
    "Alphabet",
    "AminoAcid",
    "Codon",
    "Nucleotide",
    "DNA",
    "PROTEIN",
    "CODON",
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
