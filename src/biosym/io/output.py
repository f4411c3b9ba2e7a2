"""Output formatters for splitter and alignment results."""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum


class OutputFormat(Enum):
    """Supported output formats."""

    PRETTY = "pretty"
    TSV = "tsv"
    JSON = "json"


def format_runs(
    results: Sequence[tuple[str, Sequence[tuple[bool, str]]]],
    format: OutputFormat = OutputFormat.PRETTY,
) -> str:
    """Format splitter runs for output.

    Args:
        results: List of (sequence_name, [(is_gap, run_text), ...]) tuples
        format: Output format

    Returns:
        Formatted string representation
    """
    if format == OutputFormat.PRETTY:
        lines = []
        for name, runs in results:
            lines.append(f"=== {name} ===")
            lines.append(" | ".join(text for _, text in runs))
        return "\n".join(lines)

    elif format == OutputFormat.JSON:
        data = {
            name: [
                {"gap": gap, "start": start, "symbols": text}
                for gap, start, text in _offsets(runs)
            ]
            for name, runs in results
        }
        return json.dumps(data, indent=2)

    elif format == OutputFormat.TSV:
        lines = ["name\trun\tgap\tstart\tend\tsymbols"]
        for name, runs in results:
            for i, (gap, start, text) in enumerate(_offsets(runs)):
                end = start + len(text)
                lines.append(f"{name}\t{i}\t{str(gap).lower()}\t{start}\t{end}\t{text}")
        return "\n".join(lines)

    else:
        raise ValueError(f"Unknown format: {format}")


def _offsets(runs: Sequence[tuple[bool, str]]) -> list[tuple[bool, int, str]]:
    """Attach the text offset at which each run starts."""
    offsets = []
    start = 0
    for gap, text in runs:
        offsets.append((gap, start, text))
        start += len(text)
    return offsets


def format_columns(
    indices: Sequence[int],
    num_columns: int,
    label: str = "columns",
    format: OutputFormat = OutputFormat.PRETTY,
) -> str:
    """Format a list of column indices (SNP columns, removal log).

    Args:
        indices: Ascending zero-based column indices
        num_columns: Number of columns in the alignment that was analysed
        label: What the indices describe
        format: Output format

    Returns:
        Formatted string representation
    """
    if format == OutputFormat.PRETTY:
        listed = ", ".join(str(i) for i in indices) if indices else "none"
        return f"{label} ({len(indices)} of {num_columns}): {listed}"

    elif format == OutputFormat.JSON:
        return json.dumps(
            {"label": label, "num_columns": num_columns, "indices": list(indices)},
            indent=2,
        )

    elif format == OutputFormat.TSV:
        return "\n".join([label] + [str(i) for i in indices])

    else:
        raise ValueError(f"Unknown format: {format}")
