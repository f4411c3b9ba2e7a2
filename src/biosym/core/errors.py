"""Exception types raised by the core algorithms."""

from __future__ import annotations

from collections.abc import Sequence


class BiosymError(ValueError):
    """Base class for all biosym input errors."""


class InvalidSymbolError(BiosymError):
    """A text code is not a member of the selected alphabet."""

    def __init__(self, code: str, alphabet: str, position: int | None = None):
        self.code = code
        self.alphabet = alphabet
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Invalid symbol {code!r}{where} for alphabet {alphabet}")

    def __reduce__(self):
        return type(self), (self.code, self.alphabet, self.position)


class EmptySequenceError(BiosymError):
    """An operation that needs at least one symbol received none."""

    def __init__(self, message: str = "Cannot split an empty sequence"):
        super().__init__(message)


class DimensionMismatchError(BiosymError):
    """Rows of an alignment matrix have unequal lengths."""

    def __init__(self, lengths: Sequence[int]):
        self.lengths = tuple(lengths)
        distinct = sorted(set(self.lengths))
        super().__init__(
            f"Alignment rows have unequal lengths: found {len(distinct)} distinct "
            f"lengths {distinct} across {len(self.lengths)} rows"
        )

    def __reduce__(self):
        return type(self), (self.lengths,)
