"""Symbol types and alphabet families.

Symbols are plain immutable values. They know nothing about alignments:
whether a symbol counts as a gap is decided by the :class:`GapSet` of the
alphabet it belongs to, and that predicate is handed to the algorithms that
need it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from itertools import product
from typing import Generic, TypeVar

from biosym.core.errors import InvalidSymbolError
from biosym.data.genetic_codes import (
    AMBIGUOUS_AMINO_ACID,
    AMBIGUOUS_NUCLEOTIDE,
    GAP_CHARS,
    NUCLEOTIDES,
    STANDARD_CODE,
)

S = TypeVar("S")


class Nucleotide(Enum):
    """DNA nucleotides, the ambiguity code ``N`` and the nucleotide gap."""

    A = "A"
    C = "C"
    G = "G"
    T = "T"
    N = "N"
    GAP = "-"

    def __str__(self) -> str:
        return self.value


class AminoAcid(Enum):
    """Amino acid residues by one-letter code."""

    ALA = "A"
    CYS = "C"
    ASP = "D"
    GLU = "E"
    PHE = "F"
    GLY = "G"
    HIS = "H"
    ILE = "I"
    LYS = "K"
    LEU = "L"
    MET = "M"
    ASN = "N"
    PRO = "P"
    GLN = "Q"
    ARG = "R"
    SER = "S"
    THR = "T"
    VAL = "V"
    TRP = "W"
    TYR = "Y"
    STOP = "*"
    X = "X"
    GAP = "-"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> AminoAcid:
        """Look up a residue by its one-letter code."""
        return _AMINO_ACIDS_BY_CODE[code.upper()]


_AMINO_ACIDS_BY_CODE: dict[str, AminoAcid] = {aa.value: aa for aa in AminoAcid}


@dataclass(frozen=True)
class Codon:
    """A nucleotide triplet together with the amino acid it encodes.

    Both representations travel with the symbol, so a codon alignment can be
    filtered once and projected to either nucleotides or amino acids
    afterwards.
    """

    amino_acid: AminoAcid
    nucleotides: tuple[Nucleotide, Nucleotide, Nucleotide]

    @property
    def code(self) -> str:
        return "".join(n.value for n in self.nucleotides)

    def __str__(self) -> str:
        return self.code


CODON_GAP = Codon(AminoAcid.GAP, (Nucleotide.GAP, Nucleotide.GAP, Nucleotide.GAP))


@dataclass(frozen=True)
class GapSet(Generic[S]):
    """Gap-membership predicate for one alphabet family.

    Instances are callable, so they can be passed wherever an
    ``is_gap(symbol) -> bool`` function is expected. They are also picklable,
    which lets them cross process boundaries.
    """

    symbols: frozenset[S]

    def __call__(self, symbol: S) -> bool:
        return symbol in self.symbols


@dataclass(frozen=True, eq=False)
class Alphabet(Generic[S]):
    """A closed set of symbols of one family plus its text codes.

    Args:
        name: Human readable alphabet name
        family: Alphabet family; sequences of one alignment share it
        codes: Mapping of upper-case text codes to symbols
        gap: The family's designated gap symbol
        width: Number of text characters per symbol
        ambiguous: Whether extended/ambiguous codes are accepted
        extra_gaps: Further symbols treated as gap-equivalent
    """

    name: str
    family: str
    codes: Mapping[str, S]
    gap: S
    width: int = 1
    ambiguous: bool = False
    extra_gaps: frozenset[S] = field(default_factory=frozenset)

    @property
    def is_gap(self) -> GapSet[S]:
        """The gap predicate of this alphabet."""
        return GapSet(frozenset({self.gap}) | self.extra_gaps)

    @property
    def symbols(self) -> frozenset[S]:
        return frozenset(self.codes.values())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.symbols

    def __repr__(self) -> str:
        return f"Alphabet({self.name!r})"

    def symbol(self, code: str, position: int | None = None) -> S:
        """Convert one text code to its symbol.

        Args:
            code: Text code, case-insensitive
            position: Offset of the code in its source text, for error reports

        Returns:
            The matching symbol

        Raises:
            InvalidSymbolError: If the code is not part of this alphabet
        """
        try:
            return self.codes[code.upper()]
        except KeyError:
            raise InvalidSymbolError(code, self.name, position) from None

    def parse(self, raw: str) -> list[S]:
        """Convert raw text to a list of symbols.

        Whitespace is ignored. For multi-character alphabets the text must
        split evenly into codes.

        Raises:
            InvalidSymbolError: On an unknown code or a trailing partial code
        """
        text = "".join(raw.split())
        remainder = len(text) % self.width
        if remainder:
            start = len(text) - remainder
            raise InvalidSymbolError(text[start:], self.name, start)
        return [
            self.symbol(text[i : i + self.width], i)
            for i in range(0, len(text), self.width)
        ]

    def format(self, symbols: Iterable[S]) -> str:
        """Render symbols back to upper-case text."""
        return "".join(str(s) for s in symbols)

    def with_gaps(self, *symbols: S) -> Alphabet[S]:
        """Return a variant that also treats ``symbols`` as gaps.

        Useful when missing data such as ``N`` should count as "no data here".
        """
        for symbol in symbols:
            if symbol not in self:
                raise InvalidSymbolError(str(symbol), self.name)
        extra = self.extra_gaps | frozenset(symbols)
        missing = ",".join(sorted(str(s) for s in extra))
        return Alphabet(
            name=f"{self.name} [{missing} as gap]",
            family=self.family,
            codes=self.codes,
            gap=self.gap,
            width=self.width,
            ambiguous=self.ambiguous,
            extra_gaps=extra,
        )


def _with_gap_codes(codes: dict[str, S], gap: S) -> dict[str, S]:
    for char in GAP_CHARS:
        codes[char] = gap
    return codes


def nucleotide_alphabet(ambiguous: bool = False) -> Alphabet[Nucleotide]:
    """Build the DNA alphabet, optionally accepting ``N``."""
    codes = {nt: Nucleotide(nt) for nt in NUCLEOTIDES}
    if ambiguous:
        codes[AMBIGUOUS_NUCLEOTIDE] = Nucleotide.N
    return Alphabet(
        name="DNA (ambiguous)" if ambiguous else "DNA",
        family="nucleotide",
        codes=_with_gap_codes(codes, Nucleotide.GAP),
        gap=Nucleotide.GAP,
        ambiguous=ambiguous,
    )


def protein_alphabet(ambiguous: bool = False) -> Alphabet[AminoAcid]:
    """Build the protein alphabet (twenty residues and stop), optionally with ``X``."""
    excluded = {AminoAcid.GAP, AminoAcid.X}
    codes = {aa.value: aa for aa in AminoAcid if aa not in excluded}
    if ambiguous:
        codes[AMBIGUOUS_AMINO_ACID] = AminoAcid.X
    return Alphabet(
        name="protein (ambiguous)" if ambiguous else "protein",
        family="protein",
        codes=_with_gap_codes(codes, AminoAcid.GAP),
        gap=AminoAcid.GAP,
        ambiguous=ambiguous,
    )


def codon_alphabet(
    code: Mapping[str, str] | None = None,
    ambiguous: bool = False,
) -> Alphabet[Codon]:
    """Build a codon alphabet from a codon-to-amino-acid table.

    Args:
        code: Dict mapping codons to single-letter amino acids.
              Uses the standard code if not provided.
        ambiguous: Accept triplets containing ``N`` (translated as ``X``)

    Returns:
        Alphabet of :class:`Codon` symbols with width 3
    """
    table = code if code is not None else STANDARD_CODE
    letters = NUCLEOTIDES + [AMBIGUOUS_NUCLEOTIDE] if ambiguous else NUCLEOTIDES
    codes: dict[str, Codon] = {}
    for triplet in product(letters, repeat=3):
        text = "".join(triplet)
        amino = table.get(text, AMBIGUOUS_AMINO_ACID)
        nts = tuple(Nucleotide(nt) for nt in triplet)
        codes[text] = Codon(AminoAcid.from_code(amino), nts)  # type: ignore[arg-type]
    for char in GAP_CHARS:
        codes[char * 3] = CODON_GAP
    return Alphabet(
        name="codon (ambiguous)" if ambiguous else "codon",
        family="codon",
        codes=codes,
        gap=CODON_GAP,
        width=3,
        ambiguous=ambiguous,
    )


DNA = nucleotide_alphabet()
DNA_AMBIGUOUS = nucleotide_alphabet(ambiguous=True)
PROTEIN = protein_alphabet()
PROTEIN_AMBIGUOUS = protein_alphabet(ambiguous=True)
CODON = codon_alphabet()
CODON_AMBIGUOUS = codon_alphabet(ambiguous=True)

ALPHABETS: dict[str, tuple[Alphabet, Alphabet]] = {
    "dna": (DNA, DNA_AMBIGUOUS),
    "protein": (PROTEIN, PROTEIN_AMBIGUOUS),
    "codon": (CODON, CODON_AMBIGUOUS),
}


def get_alphabet(name: str, ambiguous: bool = False) -> Alphabet:
    """Look up a predefined alphabet by name (``dna``, ``protein`` or ``codon``)."""
    try:
        strict, extended = ALPHABETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown alphabet: {name!r}. Must be one of {', '.join(ALPHABETS)}"
        ) from None
    return extended if ambiguous else strict
