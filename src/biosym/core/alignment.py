"""Column operations over alignment matrices.

A matrix is a sequence of rows, each row a plain sequence of symbols. All
functions are generic over the symbol type and return new lists; the input
is never modified. Every function checks that rows have equal length before
looking at any column.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TypeVar

import numpy as np

from biosym.core.errors import DimensionMismatchError
from biosym.utils.logging import get_logger

S = TypeVar("S")

Matrix = Sequence[Sequence[S]]
ColumnPredicate = Callable[[tuple[S, ...]], bool]

logger = get_logger("alignment")


def check_dimensions(matrix: Matrix[S]) -> int:
    """Verify that all rows have the same length.

    Args:
        matrix: Alignment rows

    Returns:
        Number of columns (0 for an empty matrix)

    Raises:
        DimensionMismatchError: If row lengths differ
    """
    lengths = [len(row) for row in matrix]
    if not lengths:
        return 0
    if any(length != lengths[0] for length in lengths):
        raise DimensionMismatchError(lengths)
    return lengths[0]


def columns(matrix: Matrix[S]) -> Iterator[tuple[S, ...]]:
    """Yield each column of the matrix in index order."""
    num_columns = check_dimensions(matrix)
    for j in range(num_columns):
        yield tuple(row[j] for row in matrix)


def column_indices(matrix: Matrix[S], predicate: ColumnPredicate[S]) -> list[int]:
    """Visit every column and collect the indices where ``predicate`` holds.

    Args:
        matrix: Alignment rows
        predicate: Function receiving one column as a tuple

    Returns:
        Ascending zero-based column indices
    """
    return [j for j, column in enumerate(columns(matrix)) if predicate(column)]


def gap_counts(matrix: Matrix[S], is_gap: Callable[[S], bool]) -> np.ndarray:
    """Count gap symbols per column.

    Returns:
        Integer array with one entry per column
    """
    num_columns = check_dimensions(matrix)
    if num_columns == 0:
        return np.zeros(0, dtype=int)
    mask = np.array([[is_gap(symbol) for symbol in row] for row in matrix], dtype=bool)
    return mask.sum(axis=0)


def remove_columns(matrix: Matrix[S], indices: Iterable[int]) -> list[list[S]]:
    """Drop the given columns from every row.

    Args:
        matrix: Alignment rows
        indices: Zero-based column indices to drop

    Returns:
        New rows, all shortened by the same columns
    """
    num_columns = check_dimensions(matrix)
    drop = set(indices)
    out_of_range = [j for j in drop if not 0 <= j < num_columns]
    if out_of_range:
        raise IndexError(
            f"Column indices {sorted(out_of_range)} out of range for {num_columns} columns"
        )
    keep = [j for j in range(num_columns) if j not in drop]
    return [[row[j] for j in keep] for row in matrix]


def _remove_flagged(
    matrix: Matrix[S], flagged: np.ndarray
) -> tuple[list[list[S]], list[int]]:
    removed = [int(j) for j in np.flatnonzero(flagged)]
    return remove_columns(matrix, removed), removed


def remove_sparse_columns(
    matrix: Matrix[S],
    is_gap: Callable[[S], bool],
    threshold: int = 1,
) -> tuple[list[list[S]], list[int]]:
    """Remove columns holding fewer than ``threshold`` non-gap symbols.

    Decisions are made on the original matrix, column by column. With the
    default threshold of 1 only columns made entirely of gaps are removed.

    Args:
        matrix: Alignment rows
        is_gap: Gap predicate of the rows' alphabet
        threshold: Minimum number of non-gap symbols a column needs to stay

    Returns:
        Tuple of (filtered rows, ascending removed column indices)
    """
    if threshold < 1:
        raise ValueError(f"Threshold must be at least 1, got {threshold}")
    counts = gap_counts(matrix, is_gap)
    residues = len(matrix) - counts
    logger.debug("Removing columns with < %d residues from %d columns", threshold, len(counts))
    return _remove_flagged(matrix, residues < threshold)


def remove_gap_columns(
    matrix: Matrix[S],
    is_gap: Callable[[S], bool],
    min_gaps: int = 1,
) -> tuple[list[list[S]], list[int]]:
    """Remove columns holding at least ``min_gaps`` gap symbols.

    With the default of 1 any column containing a gap is removed.

    Args:
        matrix: Alignment rows
        is_gap: Gap predicate of the rows' alphabet
        min_gaps: Number of gaps that marks a column for removal

    Returns:
        Tuple of (filtered rows, ascending removed column indices)
    """
    if min_gaps < 1:
        raise ValueError(f"min_gaps must be at least 1, got {min_gaps}")
    counts = gap_counts(matrix, is_gap)
    logger.debug("Removing columns with >= %d gaps from %d columns", min_gaps, len(counts))
    return _remove_flagged(matrix, counts >= min_gaps)


def distinct_symbols(column: Iterable[S], is_gap: Callable[[S], bool]) -> set[S]:
    """Get the set of unique non-gap symbols in a column."""
    return {symbol for symbol in column if not is_gap(symbol)}


def snp_columns(matrix: Matrix[S], is_gap: Callable[[S], bool]) -> list[int]:
    """Get indices of columns with more than one distinct non-gap symbol.

    Args:
        matrix: Alignment rows
        is_gap: Gap predicate of the rows' alphabet

    Returns:
        Ascending zero-based column indices
    """
    return column_indices(matrix, lambda column: len(distinct_symbols(column, is_gap)) > 1)


def original_indices(indices: Iterable[int], removed: Sequence[int]) -> list[int]:
    """Map column indices of a filtered matrix back to the original matrix.

    Args:
        indices: Column indices in the filtered matrix
        removed: Ascending removal log produced by the filtering step

    Returns:
        Corresponding column indices in the original matrix
    """
    mapped = []
    for index in indices:
        original = index
        for dropped in removed:
            if dropped <= original:
                original += 1
            else:
                break
        mapped.append(original)
    return mapped
