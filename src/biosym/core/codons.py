"""Genetic code and codon symbol utilities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache

from biosym.core.errors import InvalidSymbolError
from biosym.core.symbols import (
    CODON_GAP,
    Alphabet,
    AminoAcid,
    Codon,
    Nucleotide,
    codon_alphabet,
)
from biosym.data.genetic_codes import STANDARD_CODE


class GeneticCode:
    """Represents a genetic code for building and translating codon symbols."""

    def __init__(self, code: dict[str, str] | None = None):
        """Initialize with a codon-to-amino-acid mapping.

        Args:
            code: Dict mapping codons to single-letter amino acids.
                  Uses standard code if not provided.
        """
        self.code = code if code is not None else STANDARD_CODE

    @lru_cache(maxsize=4096)
    def translate(self, codon: str) -> str:
        """Translate a codon to its amino acid.

        Args:
            codon: Three-letter codon string

        Returns:
            Single-letter amino acid code, or 'X' for unknown
        """
        codon = codon.upper()
        return self.code.get(codon, "X")

    @lru_cache(maxsize=None)
    def alphabet(self, ambiguous: bool = False) -> Alphabet[Codon]:
        """Codon alphabet whose symbols carry this code's amino acids."""
        return codon_alphabet(self.code, ambiguous=ambiguous)

    def codon(self, nucleotides: Sequence[Nucleotide]) -> Codon:
        """Build the codon symbol for a nucleotide triplet.

        An all-gap triplet becomes the codon gap; a triplet containing ``N``
        translates to ``X``.

        Raises:
            InvalidSymbolError: If the triplet is partially gapped or not
                three nucleotides long
        """
        triplet = tuple(nucleotides)
        text = "".join(n.value for n in triplet)
        if len(triplet) != 3:
            raise InvalidSymbolError(text, "codon")
        gaps = triplet.count(Nucleotide.GAP)
        if gaps == 3:
            return CODON_GAP
        if gaps:
            raise InvalidSymbolError(text, "codon")
        amino = AminoAcid.from_code(self.translate(text))
        return Codon(amino, triplet)  # type: ignore[arg-type]

    def codons_from_nucleotides(
        self, nucleotides: Sequence[Nucleotide], reading_frame: int = 1
    ) -> list[Codon]:
        """Group nucleotides into codon symbols.

        Args:
            nucleotides: Nucleotide symbols
            reading_frame: Reading frame (1, 2, or 3); incomplete trailing
                codons are dropped

        Returns:
            List of codon symbols
        """
        if reading_frame not in (1, 2, 3):
            raise ValueError(f"Reading frame must be 1, 2, or 3, got {reading_frame}")
        start = reading_frame - 1
        return [
            self.codon(nucleotides[i : i + 3])
            for i in range(start, len(nucleotides) - 2, 3)
        ]


def nucleotides_from_codons(codons: Iterable[Codon]) -> list[Nucleotide]:
    """Flatten codon symbols back into their nucleotides."""
    return [nt for codon in codons for nt in codon.nucleotides]


def amino_acids_from_codons(codons: Iterable[Codon]) -> list[AminoAcid]:
    """Project codon symbols onto the amino acids they carry."""
    return [codon.amino_acid for codon in codons]


# Default genetic code instance
DEFAULT_CODE = GeneticCode()
