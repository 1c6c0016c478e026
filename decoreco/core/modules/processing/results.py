"""
Result aggregation for decoreco.

Each worker produces one JobOutcome; the run's single RunSummary folds them
in under a lock.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class JobStatus(Enum):
    IMPROVED = "improved"
    NOT_IMPROVED = "not_improved"
    FAILED = "failed"


@dataclass(frozen=True)
class JobOutcome:
    """Result of transcoding one file."""
    file: Path
    original_size: int
    new_size: int
    status: JobStatus
    reason: Optional[str] = None

    @property
    def saved_bytes(self) -> int:
        return self.original_size - self.new_size

    @property
    def percent_smaller(self) -> int:
        if self.original_size <= 0:
            return 0
        return 100 - (self.new_size * 100) // self.original_size

    @property
    def percent_larger(self) -> int:
        if self.original_size <= 0:
            return 0
        return (self.new_size * 100) // self.original_size - 100

    @classmethod
    def failed(cls, file: Path, reason: str, original_size: int = 0) -> "JobOutcome":
        return cls(file=file, original_size=original_size, new_size=0,
                   status=JobStatus.FAILED, reason=reason)


def classify(original_size: int, new_size: int) -> JobStatus:
    """Strictly smaller output counts as an improvement."""
    if new_size < original_size:
        return JobStatus.IMPROVED
    return JobStatus.NOT_IMPROVED


@dataclass
class RunSummary:
    """
    Totals for a run, shared across workers.

    saved_bytes never exceeds total_bytes; both only grow. processed keeps
    (file, old size, new size) for improved files in completion order.
    """
    saved_bytes: int = 0
    total_bytes: int = 0
    processed: List[Tuple[str, int, int]] = field(default_factory=list)
    not_improved: int = 0
    failed: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, outcome: JobOutcome) -> None:
        """Fold one outcome into the totals."""
        with self._lock:
            if outcome.status == JobStatus.IMPROVED:
                self.total_bytes += outcome.original_size
                self.saved_bytes += outcome.original_size - outcome.new_size
                self.processed.append((str(outcome.file), outcome.original_size, outcome.new_size))
            elif outcome.status == JobStatus.NOT_IMPROVED:
                self.not_improved += 1
            else:
                self.failed += 1

    def snapshot(self) -> Tuple[int, int]:
        """Consistent (saved_bytes, total_bytes) pair."""
        with self._lock:
            return self.saved_bytes, self.total_bytes

    @property
    def improved(self) -> int:
        return len(self.processed)

    @property
    def new_total_bytes(self) -> int:
        return self.total_bytes - self.saved_bytes

    @property
    def saved_percent(self) -> int:
        """Saved bytes as a whole percentage of the improved files' original size."""
        if self.total_bytes <= 0:
            return 0
        return (self.saved_bytes * 100) // self.total_bytes
