"""
User interface module for decoreco.

This module handles console output including:
- File listing (--list)
- Per-file progress messages
- The closing summary table and timing
"""

from pathlib import Path
from typing import List, Sequence, Tuple

from ..system.system_utils import format_size, format_duration, truncate, terminal_width
from ..processing.results import JobOutcome, JobStatus, RunSummary
from ....utils.logging import print_separator

SIZE_COL = 12


def _table(headers: Sequence[str], rows: List[Tuple[str, ...]], name_width: int) -> List[str]:
    """Render a plain box table: first column left-aligned, the rest right-aligned."""
    widths = [max(name_width, len(headers[0]))] + [SIZE_COL] * (len(headers) - 1)

    def fmt(cells: Sequence[str]) -> str:
        first = f" {cells[0]:<{widths[0]}} "
        rest = [f" {c:>{w}} " for c, w in zip(cells[1:], widths[1:])]
        return "|" + "|".join([first] + rest) + "|"

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [border, fmt(headers), border]
    lines.extend(fmt(row) for row in rows)
    lines.append(border)
    return lines


def _name_width(other_columns: int) -> int:
    return max(10, terminal_width() - other_columns * (SIZE_COL + 3) - 4 - 3)


def format_file_list(files: Sequence[Path], sizes: Sequence[int]) -> List[str]:
    """Table of files and their sizes."""
    width = _name_width(1)
    rows = [(truncate(str(f), width), format_size(s)) for f, s in zip(files, sizes)]
    return _table(("file", "size"), rows, max((len(r[0]) for r in rows), default=4))


def print_file_list(files: Sequence[Path]):
    """Print the collected files with their sizes."""
    sizes = [f.stat().st_size for f in files]
    for line in format_file_list(files, sizes):
        print(line)


def progress_message(outcome: JobOutcome) -> str:
    """Progress bar message for a finished file."""
    if outcome.status == JobStatus.IMPROVED:
        return f"smaller by {outcome.percent_smaller}% {outcome.file}"
    return f"larger by {outcome.percent_larger}% {outcome.file}"


def format_summary_table(summary: RunSummary) -> List[str]:
    """Per-file old/new/saved sizes plus a totals row."""
    width = _name_width(3)
    rows = [
        (truncate(name, width), format_size(old), format_size(new), format_size(old - new))
        for name, old, new in summary.processed
    ]
    rows.append((
        "total",
        format_size(summary.total_bytes),
        format_size(summary.new_total_bytes),
        format_size(summary.saved_bytes),
    ))
    name_col = max(len(r[0]) for r in rows)
    return _table(("file", "old size", "new size", "saved size"), rows, name_col)


def per_mb_seconds(elapsed: float, total_bytes: int) -> float:
    """Elapsed time per MB of original data; the whole elapsed time when under a MB."""
    megabytes = total_bytes / 1_000_000
    if megabytes < 1:
        return elapsed
    return elapsed / megabytes


def print_summary(summary: RunSummary, elapsed: float, dry_run: bool = False):
    """Print the end-of-run report."""
    print("done.")
    print_separator(terminal_width())

    saved_bytes, total_bytes = summary.snapshot()
    if saved_bytes == 0:
        print("no files were compressed.")
    else:
        verb = "would be saved" if dry_run else "saved"
        print(f"total size {verb}: {format_size(saved_bytes)} "
              f"({summary.saved_percent}% of original)")
        print("files compressed:")
        for line in format_summary_table(summary):
            print(line)

    print(f"took {format_duration(elapsed)} total, "
          f"on average {format_duration(per_mb_seconds(elapsed, total_bytes))} per MB")
    print(f"{summary.improved} improved, {summary.not_improved} not improved, {summary.failed} failed")
