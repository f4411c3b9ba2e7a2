"""FASTA file parser and writer."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from biosym.utils.logging import get_logger

if TYPE_CHECKING:
    from biosym.core.sequences import Sequence
    from biosym.core.symbols import Alphabet

DEFAULT_LINE_WIDTH = 70

logger = get_logger("io.fasta")


def read_fasta(path: str | Path) -> Iterator[tuple[str, str, str]]:
    """Parse a FASTA file and yield (name, description, sequence) tuples.

    Records are yielded as soon as they are complete; the file is never
    read into memory as a whole.

    Args:
        path: Path to FASTA file

    Yields:
        Tuples of (sequence_name, description, sequence_string)
    """
    path = Path(path)
    name: str | None = None
    description = ""
    seq_parts: list[str] = []
    count = 0

    with path.open() as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            if line.startswith(">"):
                if name is not None:
                    count += 1
                    yield name, description, "".join(seq_parts)
                header = line[1:].split(maxsplit=1)
                name = header[0] if header else ""
                description = header[1] if len(header) > 1 else ""
                seq_parts = []
            else:
                seq_parts.append(line.upper())

        if name is not None:
            count += 1
            yield name, description, "".join(seq_parts)

    logger.debug("Read %d records from %s", count, path)


def read_sequences(path: str | Path, alphabet: Alphabet) -> Iterator[Sequence]:
    """Parse a FASTA file into typed sequences.

    Raises:
        InvalidSymbolError: If a record holds a code outside ``alphabet``
    """
    from biosym.core.sequences import Sequence

    for name, description, raw in read_fasta(path):
        yield Sequence.from_text(raw, alphabet, name, description)


def write_fasta(
    records: Iterable[tuple[str, str, str]],
    handle: TextIO,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> None:
    """Write records to an open text stream in FASTA format.

    The stream is neither opened nor closed here.

    Args:
        records: Iterable of (name, description, sequence) tuples
        handle: Writable text stream
        line_width: Characters per line for sequence wrapping
    """
    for name, description, seq in records:
        header = f"{name} {description}" if description else name
        handle.write(f">{header}\n")
        for i in range(0, len(seq), line_width):
            handle.write(seq[i : i + line_width] + "\n")


def write_sequences(
    sequences: Iterable[Sequence],
    handle: TextIO,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> None:
    """Write typed sequences to an open text stream in FASTA format."""
    write_fasta(
        ((seq.name, seq.description, str(seq)) for seq in sequences),
        handle,
        line_width=line_width,
    )
