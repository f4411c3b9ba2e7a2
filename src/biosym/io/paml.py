"""Sequential PAML alignment parser and writer.

Layout: a header line ``<number of sequences> <alignment length>``, then for
each sequence a name line followed by sequence lines until the declared
length is reached. Spaces inside sequence lines are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from biosym.io.fasta import DEFAULT_LINE_WIDTH
from biosym.utils.logging import get_logger

logger = get_logger("io.paml")


def read_paml(path: str | Path) -> Iterator[tuple[str, str, str]]:
    """Parse a sequential PAML file and yield (name, description, sequence) tuples.

    Args:
        path: Path to PAML file

    Yields:
        Tuples of (sequence_name, description, sequence_string)

    Raises:
        ValueError: If the header is malformed or a record is truncated
    """
    path = Path(path)
    with path.open() as f:
        lines = (line.strip() for line in f)
        lines = (line for line in lines if line)

        header = next(lines, None)
        if header is None:
            return
        fields = header.split()
        try:
            num_seqs, length = int(fields[0]), int(fields[1])
        except (IndexError, ValueError):
            raise ValueError(f"Invalid PAML header in {path}: {header!r}") from None

        for _ in range(num_seqs):
            name_line = next(lines, None)
            if name_line is None:
                raise ValueError(f"{path}: expected {num_seqs} sequences, file ended early")
            parts = name_line.split(maxsplit=1)
            name = parts[0]
            description = parts[1] if len(parts) > 1 else ""

            seq_parts: list[str] = []
            collected = 0
            while collected < length:
                line = next(lines, None)
                if line is None:
                    raise ValueError(
                        f"{path}: sequence {name!r} has {collected} of {length} characters"
                    )
                chunk = "".join(line.split()).upper()
                seq_parts.append(chunk)
                collected += len(chunk)
            seq = "".join(seq_parts)
            if len(seq) != length:
                raise ValueError(
                    f"{path}: sequence {name!r} has {len(seq)} characters, expected {length}"
                )
            yield name, description, seq

    logger.debug("Read %d records from %s", num_seqs, path)


def write_paml(
    records: Iterable[tuple[str, str, str]],
    handle: TextIO,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> None:
    """Write records to an open text stream in sequential PAML format.

    Args:
        records: Iterable of (name, description, sequence) tuples of equal length
        handle: Writable text stream
        line_width: Characters per line for sequence wrapping
    """
    records = list(records)
    lengths = {len(seq) for _, _, seq in records}
    if len(lengths) > 1:
        raise ValueError(f"PAML records must have equal lengths, got {sorted(lengths)}")
    length = lengths.pop() if lengths else 0

    handle.write(f"{len(records)} {length}\n")
    for name, description, seq in records:
        handle.write(f"{name} {description}\n" if description else f"{name}\n")
        for i in range(0, len(seq), line_width):
            handle.write(seq[i : i + line_width] + "\n")
