"""Sequence and Alignment containers for typed symbol sequences."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence as SequenceABC
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

from biosym.core.codons import DEFAULT_CODE, GeneticCode, nucleotides_from_codons
from biosym.core.errors import DimensionMismatchError
from biosym.core.symbols import DNA, DNA_AMBIGUOUS, Alphabet, Codon, Nucleotide
from biosym.io.fasta import read_fasta

S = TypeVar("S")


@dataclass(frozen=True)
class Sequence(Generic[S]):
    """An immutable sequence of symbols from one alphabet, with its metadata."""

    symbols: tuple[S, ...]
    alphabet: Alphabet[S]
    name: str = ""
    description: str = ""

    @classmethod
    def from_text(
        cls,
        raw: str,
        alphabet: Alphabet[S],
        name: str = "",
        description: str = "",
    ) -> Sequence[S]:
        """Parse raw text into a typed sequence.

        Args:
            raw: Sequence text, case-insensitive; whitespace is ignored
            alphabet: Alphabet the text is written in
            name: Sequence identifier
            description: Free-form description

        Raises:
            InvalidSymbolError: If the text holds a code outside the alphabet
        """
        return cls(tuple(alphabet.parse(raw)), alphabet, name, description)

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, index: int) -> S:
        return self.symbols[index]

    def __iter__(self) -> Iterator[S]:
        return iter(self.symbols)

    def __str__(self) -> str:
        return self.alphabet.format(self.symbols)

    def to_list(self) -> list[S]:
        """Plain list of symbols, the form the generic algorithms work on."""
        return list(self.symbols)

    def with_symbols(self, symbols: Iterable[S]) -> Sequence[S]:
        """New sequence with the same name and description but other symbols."""
        return Sequence(tuple(symbols), self.alphabet, self.name, self.description)

    def to_codons(
        self, code: GeneticCode | None = None, reading_frame: int = 1
    ) -> Sequence[Codon]:
        """Group a nucleotide sequence into codon symbols.

        Args:
            code: Genetic code for translation (uses standard if None)
            reading_frame: Reading frame (1, 2, or 3)

        Returns:
            Codon sequence carrying the same name and description
        """
        if self.alphabet.family != "nucleotide":
            raise TypeError(f"Cannot build codons from a {self.alphabet.family} sequence")
        code = code or DEFAULT_CODE
        codons = code.codons_from_nucleotides(self.symbols, reading_frame)  # type: ignore[arg-type]
        return Sequence(
            tuple(codons),
            code.alphabet(ambiguous=self.alphabet.ambiguous),
            self.name,
            self.description,
        )

    def to_nucleotides(self) -> Sequence[Nucleotide]:
        """Flatten a codon sequence back into nucleotides."""
        if self.alphabet.family != "codon":
            raise TypeError(f"Cannot flatten a {self.alphabet.family} sequence")
        alphabet = DNA_AMBIGUOUS if self.alphabet.ambiguous else DNA
        return Sequence(
            tuple(nucleotides_from_codons(self.symbols)),  # type: ignore[arg-type]
            alphabet,
            self.name,
            self.description,
        )

    def translate(self, code: GeneticCode | None = None, reading_frame: int = 1) -> str:
        """Translate a nucleotide or codon sequence to amino-acid text.

        Gap codons translate to '-'.
        """
        if self.alphabet.family == "codon":
            return "".join(c.amino_acid.value for c in self.symbols)  # type: ignore[attr-defined]
        codons = self.to_codons(code, reading_frame)
        return "".join(c.amino_acid.value for c in codons.symbols)


@dataclass(frozen=True)
class Alignment(Generic[S]):
    """A set of aligned sequences: same alphabet family, same length."""

    sequences: tuple[Sequence[S], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        families = {seq.alphabet.family for seq in self.sequences}
        if len(families) > 1:
            raise ValueError(
                f"Alignment mixes alphabet families: {', '.join(sorted(families))}"
            )
        lengths = [len(seq) for seq in self.sequences]
        if len(set(lengths)) > 1:
            raise DimensionMismatchError(lengths)

    @classmethod
    def from_records(
        cls,
        records: Iterable[tuple[str, str, str]],
        alphabet: Alphabet[S],
    ) -> Alignment[S]:
        """Build an alignment from (name, description, raw) records."""
        return cls(
            tuple(
                Sequence.from_text(raw, alphabet, name, description)
                for name, description, raw in records
            )
        )

    @classmethod
    def from_fasta(cls, path: str | Path, alphabet: Alphabet[S]) -> Alignment[S]:
        """Load an alignment from a FASTA file.

        Args:
            path: Path to FASTA file
            alphabet: Alphabet of the sequences in the file

        Returns:
            Alignment containing all sequences from the file
        """
        return cls.from_records(read_fasta(path), alphabet)

    def __len__(self) -> int:
        return len(self.sequences)

    def __getitem__(self, index: int) -> Sequence[S]:
        return self.sequences[index]

    def __iter__(self) -> Iterator[Sequence[S]]:
        return iter(self.sequences)

    @property
    def alignment_length(self) -> int:
        """Length of the alignment (based on first sequence)."""
        if not self.sequences:
            return 0
        return len(self.sequences[0])

    @property
    def names(self) -> list[str]:
        return [seq.name for seq in self.sequences]

    @property
    def alphabet(self) -> Alphabet[S] | None:
        if not self.sequences:
            return None
        return self.sequences[0].alphabet

    def matrix(self) -> list[list[S]]:
        """Rows as plain symbol lists, for the alignment functions."""
        return [seq.to_list() for seq in self.sequences]

    def rewrap(self, rows: SequenceABC[SequenceABC[S]]) -> Alignment[S]:
        """Attach this alignment's names and descriptions to transformed rows."""
        return Alignment(tuple(rewrap(self.sequences, rows)))


def rewrap(
    sequences: SequenceABC[Sequence[S]],
    rows: SequenceABC[SequenceABC[S]],
) -> list[Sequence[S]]:
    """Pair transformed symbol rows with the sequences they came from.

    Args:
        sequences: Original sequences, in row order
        rows: Transformed rows, one per original sequence

    Returns:
        New sequences carrying the original metadata
    """
    if len(sequences) != len(rows):
        raise ValueError(
            f"Cannot rewrap {len(rows)} rows onto {len(sequences)} sequences"
        )
    return [seq.with_symbols(row) for seq, row in zip(sequences, rows)]
