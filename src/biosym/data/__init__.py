"""Static data for genetic codes and symbol codes."""

from biosym.data.genetic_codes import NUCLEOTIDES, STANDARD_CODE

__all__ = ["STANDARD_CODE", "NUCLEOTIDES"]
