"""Command-line interface for biosym."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Iterator
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional, TextIO

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from biosym import __version__
from biosym.core.alignment import remove_gap_columns, remove_sparse_columns, snp_columns
from biosym.core.sequences import Alignment, Sequence
from biosym.core.splitter import Splitter
from biosym.core.symbols import Alphabet, get_alphabet
from biosym.io.fasta import read_fasta, write_sequences
from biosym.io.output import OutputFormat, format_columns, format_runs
from biosym.io.paml import read_paml, write_paml
from biosym.utils.logging import configure_logging, get_logger
from biosym.utils.parallel import get_worker_count

stderr_console = Console(stderr=True)

logger = get_logger("cli")

READERS = {"fasta": read_fasta, "paml": read_paml}

# Batches smaller than this run sequentially
BATCH_MIN_TASKS = 10

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"biosym {__version__}")
        raise typer.Exit()


def create_progress() -> Progress:
    """Create a progress bar that writes to stderr."""
    return Progress(
        SpinnerColumn(style="bold magenta"),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=stderr_console,
    )


def resolve_alphabet(name: str, ambiguous: bool, missing_as_gap: bool) -> Alphabet:
    """Pick the alphabet selected on the command line."""
    try:
        alphabet = get_alphabet(name, ambiguous=ambiguous or missing_as_gap)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    if missing_as_gap:
        unknown = alphabet.symbols - get_alphabet(name).symbols
        alphabet = alphabet.with_gaps(*unknown)
    return alphabet


def parse_format(output_format: str) -> OutputFormat:
    if output_format not in ("pretty", "tsv", "json"):
        typer.echo(f"Error: Invalid format '{output_format}'. Must be pretty, tsv, or json.", err=True)
        raise typer.Exit(1)
    return OutputFormat(output_format)


def parse_log_level(log_level: str) -> str:
    level = log_level.upper()
    if level not in LOG_LEVELS:
        typer.echo(
            f"Error: Invalid log level '{log_level}'. Must be one of {', '.join(LOG_LEVELS)}.",
            err=True,
        )
        raise typer.Exit(1)
    return level


def get_reader(input_format: str) -> Callable[[Path], Iterator[tuple[str, str, str]]]:
    if input_format not in READERS:
        typer.echo(f"Error: Invalid input format '{input_format}'. Must be fasta or paml.", err=True)
        raise typer.Exit(1)
    return READERS[input_format]


def load_sequences(path: Path, input_format: str, alphabet: Alphabet) -> list[Sequence]:
    """Read an unaligned sequence file, reporting bad input as a CLI error."""
    reader = get_reader(input_format)
    try:
        return [
            Sequence.from_text(raw, alphabet, name, description)
            for name, description, raw in reader(path)
        ]
    except (ValueError, OSError) as e:
        typer.echo(f"Error: {path}: {e}", err=True)
        raise typer.Exit(1) from e


def load_alignment(path: Path, input_format: str, alphabet: Alphabet) -> Alignment:
    """Read an alignment file, reporting bad input as a CLI error."""
    reader = get_reader(input_format)
    try:
        return Alignment.from_records(reader(path), alphabet)
    except (ValueError, OSError) as e:
        typer.echo(f"Error: {path}: {e}", err=True)
        raise typer.Exit(1) from e


app = typer.Typer(
    name="biosym",
    help="biosym: typed biological sequences and generic alignment tools.\n\n"
    "Split sequences into gap runs, strip sparse alignment columns and "
    "find SNP columns for DNA, protein and codon alignments.",
    no_args_is_help=True,
)

AlphabetOption = Annotated[
    str,
    typer.Option("--alphabet", "-a", help="Sequence alphabet: dna, protein, or codon"),
]
AmbiguousOption = Annotated[
    bool,
    typer.Option("--ambiguous", help="Accept ambiguity codes (N, X)"),
]
MissingOption = Annotated[
    bool,
    typer.Option("--missing-as-gap", help="Treat ambiguity codes as gaps (implies --ambiguous)"),
]
InputFormatOption = Annotated[
    str,
    typer.Option("--input-format", "-i", help="Input format: fasta or paml"),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format"),
]


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug messages to stderr"),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option("--log-level", envvar="BIOSYM_LOG_LEVEL", help="Log level"),
    ] = "WARNING",
) -> None:
    """biosym: typed biological sequences and generic alignment tools."""
    configure_logging("DEBUG" if verbose else parse_log_level(log_level))


@app.command()
def split(
    input_file: Annotated[Path, typer.Argument(help="Path to sequence file")],
    alphabet_name: AlphabetOption = "dna",
    ambiguous: AmbiguousOption = False,
    missing_as_gap: MissingOption = False,
    input_format: InputFormatOption = "fasta",
    output_format: FormatOption = "pretty",
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", min=0, help="Parallel workers (0=auto, 1=sequential)"),
    ] = 1,
) -> None:
    """Split each sequence into maximal runs of gap and non-gap symbols.

    Examples:

        biosym split aln.fa

        biosym split aln.fa --alphabet codon --format tsv
    """
    fmt = parse_format(output_format)
    alphabet = resolve_alphabet(alphabet_name, ambiguous, missing_as_gap)
    records = load_sequences(input_file, input_format, alphabet)

    sequences = [seq for seq in records if len(seq) > 0]
    for seq in records:
        if len(seq) == 0:
            typer.echo(f"Warning: skipping empty sequence '{seq.name}'", err=True)

    splitter = Splitter(alphabet.is_gap)
    all_runs = splitter.section_many([seq.to_list() for seq in sequences], workers=workers)
    results = [
        (seq.name, [(alphabet.is_gap(run[0]), alphabet.format(run)) for run in runs])
        for seq, runs in zip(sequences, all_runs)
    ]
    typer.echo(format_runs(results, fmt))


@app.command()
def strip(
    input_file: Annotated[Path, typer.Argument(help="Path to alignment file")],
    alphabet_name: AlphabetOption = "dna",
    ambiguous: AmbiguousOption = False,
    missing_as_gap: MissingOption = False,
    input_format: InputFormatOption = "fasta",
    threshold: Annotated[
        int,
        typer.Option("--threshold", "-t", min=1, help="Minimum non-gap symbols a column needs to stay"),
    ] = 1,
    min_gaps: Annotated[
        Optional[int],
        typer.Option("--min-gaps", min=1, help="Instead remove columns with at least this many gaps"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the filtered alignment here instead of stdout"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--output-format", help="Alignment output format: fasta or paml"),
    ] = "fasta",
) -> None:
    """Remove sparse columns from an alignment.

    The filtered alignment goes to stdout (or --output); the removed column
    indices are reported on stderr.

    Examples:

        biosym strip aln.fa > stripped.fa

        biosym strip aln.fa --min-gaps 1 -o no_gaps.fa
    """
    if output_format not in ("fasta", "paml"):
        typer.echo(f"Error: Invalid output format '{output_format}'. Must be fasta or paml.", err=True)
        raise typer.Exit(1)
    alphabet = resolve_alphabet(alphabet_name, ambiguous, missing_as_gap)
    alignment = load_alignment(input_file, input_format, alphabet)

    if min_gaps is not None:
        rows, removed = remove_gap_columns(alignment.matrix(), alphabet.is_gap, min_gaps)
    else:
        rows, removed = remove_sparse_columns(alignment.matrix(), alphabet.is_gap, threshold)
    filtered = alignment.rewrap(rows)

    def write(handle: TextIO) -> None:
        if output_format == "paml":
            write_paml(((s.name, s.description, str(s)) for s in filtered), handle)
        else:
            write_sequences(filtered, handle)

    if output is None:
        write(sys.stdout)
    else:
        with output.open("w") as handle:
            write(handle)

    typer.echo(format_columns(removed, alignment.alignment_length, "removed columns"), err=True)


@app.command()
def snps(
    input_file: Annotated[Path, typer.Argument(help="Path to alignment file")],
    alphabet_name: AlphabetOption = "dna",
    ambiguous: AmbiguousOption = False,
    missing_as_gap: MissingOption = False,
    input_format: InputFormatOption = "fasta",
    output_format: FormatOption = "pretty",
) -> None:
    """List columns holding more than one distinct non-gap symbol.

    Examples:

        biosym snps aln.fa

        biosym snps aln.fa --alphabet codon --format json
    """
    fmt = parse_format(output_format)
    alphabet = resolve_alphabet(alphabet_name, ambiguous, missing_as_gap)
    alignment = load_alignment(input_file, input_format, alphabet)

    indices = snp_columns(alignment.matrix(), alphabet.is_gap)
    typer.echo(format_columns(indices, alignment.alignment_length, "SNP columns", fmt))


@dataclass
class BatchTask:
    """One alignment file to summarize in a worker process."""

    file_path: Path
    input_format: str
    alphabet: Alphabet
    threshold: int


@dataclass
class BatchSummary:
    """Column statistics for one alignment file."""

    name: str
    num_sequences: int
    num_columns: int
    removed_columns: int
    snp_columns: int

    def to_dict(self) -> dict:
        """Convert summary to a dictionary."""
        return {
            "num_sequences": self.num_sequences,
            "num_columns": self.num_columns,
            "removed_columns": self.removed_columns,
            "snp_columns": self.snp_columns,
        }


def summarize_alignment(task: BatchTask) -> BatchSummary:
    """Strip sparse columns and count SNP columns of one alignment file."""
    alignment = Alignment.from_records(
        READERS[task.input_format](task.file_path), task.alphabet
    )
    matrix = alignment.matrix()
    _, removed = remove_sparse_columns(matrix, task.alphabet.is_gap, task.threshold)
    return BatchSummary(
        name=task.file_path.stem,
        num_sequences=len(alignment),
        num_columns=alignment.alignment_length,
        removed_columns=len(removed),
        snp_columns=len(snp_columns(matrix, task.alphabet.is_gap)),
    )


def run_batch(tasks: list[BatchTask], num_workers: int) -> tuple[list[BatchSummary], list[str]]:
    """Summarize alignments, sequentially or with ProcessPoolExecutor."""
    summaries: list[BatchSummary] = []
    warnings: list[str] = []

    with create_progress() as progress:
        task_id = progress.add_task("Summarizing alignments", total=len(tasks))
        if num_workers == 1:
            for task in tasks:
                try:
                    summaries.append(summarize_alignment(task))
                except (ValueError, OSError) as e:
                    warnings.append(f"Error processing {task.file_path.name}: {e}")
                progress.advance(task_id)
        else:
            with ProcessPoolExecutor(max_workers=num_workers) as executor:
                futures = {executor.submit(summarize_alignment, task): task for task in tasks}
                for future in as_completed(futures):
                    try:
                        summaries.append(future.result())
                    except (ValueError, OSError) as e:
                        task = futures[future]
                        warnings.append(f"Error processing {task.file_path.name}: {e}")
                    progress.advance(task_id)

    summaries.sort(key=lambda s: s.name)
    return summaries, warnings


def format_summaries(summaries: list[BatchSummary], fmt: OutputFormat) -> str:
    """Format batch summaries for output."""
    if fmt == OutputFormat.JSON:
        return json.dumps({s.name: s.to_dict() for s in summaries}, indent=2)
    header = "file\tsequences\tcolumns\tremoved\tsnps"
    rows = [
        f"{s.name}\t{s.num_sequences}\t{s.num_columns}\t{s.removed_columns}\t{s.snp_columns}"
        for s in summaries
    ]
    if fmt == OutputFormat.TSV:
        return "\n".join([header] + rows)
    return "\n".join(
        f"=== {s.name} ===\n"
        f"  sequences: {s.num_sequences}, columns: {s.num_columns}\n"
        f"  sparse columns removed: {s.removed_columns}\n"
        f"  SNP columns: {s.snp_columns}"
        for s in summaries
    )


def find_alignment_files(input_dir: Path, input_format: str) -> list[Path]:
    """Auto-detect alignment files in a directory.

    Tries common extensions for the input format in order and returns files
    matching the first pattern that finds results.
    """
    patterns = ["*.fa", "*.fasta", "*.fna"] if input_format == "fasta" else ["*.phy", "*.paml", "*.nuc"]
    for pattern in patterns:
        files = sorted(input_dir.glob(pattern))
        if files:
            return files
    return []


@app.command()
def batch(
    input_dir: Annotated[
        Path,
        typer.Argument(help="Directory containing alignment files", file_okay=False),
    ],
    alphabet_name: AlphabetOption = "dna",
    ambiguous: AmbiguousOption = False,
    missing_as_gap: MissingOption = False,
    input_format: InputFormatOption = "fasta",
    output_format: FormatOption = "tsv",
    threshold: Annotated[
        int,
        typer.Option("--threshold", "-t", min=1, help="Minimum non-gap symbols a column needs to stay"),
    ] = 1,
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", min=0, help="Parallel workers (0=auto, 1=sequential)"),
    ] = 0,
) -> None:
    """Summarize sparse and SNP columns for every alignment in a directory.

    Examples:

        biosym batch alignments/

        biosym batch alignments/ --alphabet codon -w 4 --format json
    """
    fmt = parse_format(output_format)
    get_reader(input_format)
    alphabet = resolve_alphabet(alphabet_name, ambiguous, missing_as_gap)

    files = find_alignment_files(input_dir, input_format)
    if not files:
        typer.echo(f"Error: No alignment files found in {input_dir}", err=True)
        raise typer.Exit(1)

    tasks = [BatchTask(path, input_format, alphabet, threshold) for path in files]
    num_workers = get_worker_count(workers, len(tasks), min_tasks=BATCH_MIN_TASKS)
    logger.debug("Processing %d files with %d workers", len(tasks), num_workers)
    summaries, warnings = run_batch(tasks, num_workers)

    for warning in warnings:
        typer.echo(warning, err=True)

    typer.echo(format_summaries(summaries, fmt))


if __name__ == "__main__":
    app()
