"""Input/output utilities."""

from biosym.io.fasta import read_fasta, read_sequences, write_fasta, write_sequences
from biosym.io.output import OutputFormat, format_columns, format_runs
from biosym.io.paml import read_paml, write_paml

__all__ = [
    "read_fasta",
    "read_sequences",
    "write_fasta",
    "write_sequences",
    "read_paml",
    "write_paml",
    "format_runs",
    "format_columns",
    "OutputFormat",
]
