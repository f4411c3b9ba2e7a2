"""Tests for symbol types and alphabets."""

import pickle

import pytest

from biosym.core.errors import InvalidSymbolError
from biosym.core.symbols import (
    CODON,
    CODON_AMBIGUOUS,
    CODON_GAP,
    DNA,
    DNA_AMBIGUOUS,
    PROTEIN,
    PROTEIN_AMBIGUOUS,
    AminoAcid,
    Codon,
    GapSet,
    Nucleotide,
    get_alphabet,
)


class TestSymbols:
    """Tests for symbol value semantics."""

    def test_value_equality(self) -> None:
        """Test that symbols compare by value."""
        a = Codon(AminoAcid.MET, (Nucleotide.A, Nucleotide.T, Nucleotide.G))
        b = Codon(AminoAcid.MET, (Nucleotide.A, Nucleotide.T, Nucleotide.G))

        assert a == b
        assert a is not b
        assert hash(a) == hash(b)

    def test_gaps_differ_between_families(self) -> None:
        """Test that each family has its own gap."""
        assert Nucleotide.GAP != AminoAcid.GAP
        assert CODON_GAP != Nucleotide.GAP
        assert CODON_GAP != AminoAcid.GAP

    def test_symbols_have_no_gap_query(self) -> None:
        """Test that gap classification lives outside the symbols."""
        assert not hasattr(Nucleotide.GAP, "is_gap")
        assert not hasattr(CODON_GAP, "is_gap")

    def test_codon_text(self) -> None:
        """Test codon text rendering."""
        codon = CODON.symbol("atg")

        assert codon.code == "ATG"
        assert str(codon) == "ATG"
        assert codon.amino_acid == AminoAcid.MET


class TestAlphabet:
    """Tests for Alphabet parsing and gap predicates."""

    def test_parse_dna(self) -> None:
        """Test parsing nucleotide text."""
        symbols = DNA.parse("AGc-T")

        assert symbols == [Nucleotide.A, Nucleotide.G, Nucleotide.C, Nucleotide.GAP, Nucleotide.T]

    def test_parse_ignores_whitespace(self) -> None:
        """Test that whitespace in raw text is skipped."""
        assert DNA.parse("AC GT\nA") == DNA.parse("ACGTA")

    def test_dot_is_gap(self) -> None:
        """Test that '.' is read as the family gap."""
        assert DNA.parse(".") == [Nucleotide.GAP]
        assert PROTEIN.parse(".") == [AminoAcid.GAP]

    def test_invalid_symbol(self) -> None:
        """Test that unknown codes raise InvalidSymbolError."""
        with pytest.raises(InvalidSymbolError) as excinfo:
            DNA.parse("ACXT")

        assert excinfo.value.code == "X"
        assert excinfo.value.position == 2

    def test_strict_rejects_ambiguity(self) -> None:
        """Test that strict alphabets reject ambiguity codes."""
        with pytest.raises(InvalidSymbolError):
            DNA.parse("ACNT")
        with pytest.raises(InvalidSymbolError):
            PROTEIN.parse("MKX")

    def test_ambiguous_accepts_ambiguity(self) -> None:
        """Test that ambiguous alphabets accept extended codes."""
        assert DNA_AMBIGUOUS.parse("N") == [Nucleotide.N]
        assert PROTEIN_AMBIGUOUS.parse("X") == [AminoAcid.X]

    def test_invalid_symbol_is_value_error(self) -> None:
        """Test that InvalidSymbolError can be caught as ValueError."""
        with pytest.raises(ValueError):
            DNA.symbol("Z")

    def test_parse_protein(self) -> None:
        """Test parsing amino-acid text including stop."""
        symbols = PROTEIN.parse("MK-*")

        assert symbols == [AminoAcid.MET, AminoAcid.LYS, AminoAcid.GAP, AminoAcid.STOP]

    def test_parse_codons(self) -> None:
        """Test parsing codon text in triplets."""
        symbols = CODON.parse("ATG---TAA")

        assert len(symbols) == 3
        assert symbols[0].amino_acid == AminoAcid.MET
        assert symbols[1] == CODON_GAP
        assert symbols[2].amino_acid == AminoAcid.STOP

    def test_parse_codons_partial_triplet(self) -> None:
        """Test that text not divisible into codons is rejected."""
        with pytest.raises(InvalidSymbolError) as excinfo:
            CODON.parse("ATGGC")

        assert excinfo.value.code == "GC"

    def test_parse_codons_partial_gap(self) -> None:
        """Test that partially gapped codons are rejected."""
        with pytest.raises(InvalidSymbolError):
            CODON.parse("A--")

    def test_ambiguous_codon(self) -> None:
        """Test that codons with N translate to X in the ambiguous alphabet."""
        codon = CODON_AMBIGUOUS.symbol("ANG")

        assert codon.amino_acid == AminoAcid.X
        with pytest.raises(InvalidSymbolError):
            CODON.symbol("ANG")

    def test_format(self) -> None:
        """Test formatting symbols back to text."""
        assert DNA.format(DNA.parse("acg-t")) == "ACG-T"
        assert CODON.format(CODON.parse("atg...")) == "ATG---"

    def test_is_gap(self) -> None:
        """Test the alphabet's gap predicate."""
        assert DNA.is_gap(Nucleotide.GAP)
        assert not DNA.is_gap(Nucleotide.A)
        assert not DNA.is_gap(AminoAcid.GAP)
        assert CODON.is_gap(CODON_GAP)

    def test_with_gaps(self) -> None:
        """Test adding gap-equivalent symbols."""
        alphabet = DNA_AMBIGUOUS.with_gaps(Nucleotide.N)

        assert alphabet.is_gap(Nucleotide.N)
        assert alphabet.is_gap(Nucleotide.GAP)
        assert not DNA_AMBIGUOUS.is_gap(Nucleotide.N)
        assert alphabet.family == "nucleotide"

    def test_with_gaps_rejects_foreign_symbol(self) -> None:
        """Test that extra gaps must belong to the alphabet."""
        with pytest.raises(InvalidSymbolError):
            DNA.with_gaps(AminoAcid.X)

    def test_gap_set_pickles(self) -> None:
        """Test that gap predicates survive pickling."""
        predicate = pickle.loads(pickle.dumps(DNA.is_gap))

        assert isinstance(predicate, GapSet)
        assert predicate(Nucleotide.GAP)

    def test_get_alphabet(self) -> None:
        """Test looking up alphabets by name."""
        assert get_alphabet("dna") is DNA
        assert get_alphabet("DNA", ambiguous=True) is DNA_AMBIGUOUS
        assert get_alphabet("codon") is CODON

        with pytest.raises(ValueError):
            get_alphabet("rna")
