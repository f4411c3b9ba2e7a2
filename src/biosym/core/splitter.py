"""Split symbol sequences into maximal gap and non-gap runs.

The splitter works on any symbol type. It never inspects the symbols
themselves; the caller supplies the gap predicate, usually an alphabet's
``is_gap``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ProcessPoolExecutor
from itertools import groupby
from typing import Generic, TypeVar

from biosym.core.errors import EmptySequenceError
from biosym.utils.logging import get_logger
from biosym.utils.parallel import get_worker_count

S = TypeVar("S")

GapPredicate = Callable[[S], bool]

logger = get_logger("splitter")


class Splitter(Generic[S]):
    """Partitions sequences into runs using one gap predicate."""

    def __init__(self, is_gap: GapPredicate[S]):
        self.is_gap = is_gap

    def classify(self, symbols: Sequence[S]) -> Iterator[tuple[bool, list[S]]]:
        """Iterate over ``(is_gap, run)`` pairs from left to right.

        Raises:
            EmptySequenceError: If ``symbols`` is empty, at call time
        """
        if len(symbols) == 0:
            raise EmptySequenceError()
        return self._runs(symbols)

    def _runs(self, symbols: Sequence[S]) -> Iterator[tuple[bool, list[S]]]:
        # Keyed on truthiness, not on the raw predicate value
        for gapped, run in groupby(symbols, key=lambda s: bool(self.is_gap(s))):
            yield gapped, list(run)

    def section(self, symbols: Sequence[S]) -> list[list[S]]:
        """Split symbols into maximal runs of uniform gap classification.

        Args:
            symbols: Non-empty sequence of symbols

        Returns:
            Runs in input order; concatenated they reproduce ``symbols``

        Raises:
            EmptySequenceError: If ``symbols`` is empty
        """
        runs = [run for _, run in self.classify(symbols)]
        logger.debug("Split %d symbols into %d runs", len(symbols), len(runs))
        return runs

    def section_many(
        self, sequences: Sequence[Sequence[S]], workers: int = 1
    ) -> list[list[list[S]]]:
        """Split several independent sequences.

        Args:
            sequences: Sequences to split
            workers: Worker processes (0=auto, 1=sequential). The predicate
                and symbols must be picklable when more than one is used.

        Returns:
            One list of runs per input sequence, in input order
        """
        num_workers = get_worker_count(workers, len(sequences))
        if num_workers == 1:
            return [self.section(seq) for seq in sequences]
        logger.debug("Splitting %d sequences on %d workers", len(sequences), num_workers)
        with ProcessPoolExecutor(max_workers=num_workers) as executor:
            return list(executor.map(self.section, sequences))


def section(symbols: Sequence[S], is_gap: GapPredicate[S]) -> list[list[S]]:
    """Split symbols into maximal gap/non-gap runs.

    >>> from biosym.core.symbols import DNA
    >>> runs = section(DNA.parse("AG--CT-T"), DNA.is_gap)
    >>> [DNA.format(run) for run in runs]
    ['AG', '--', 'CT', '-', 'T']
    """
    return Splitter(is_gap).section(symbols)

