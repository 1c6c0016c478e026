"""
Job processing module for decoreco.

This module handles parallel transcoding operations including:
- FileTask dataclass for per-file job configuration
- Worker count policy
- ParallelTranscoder for concurrent processing into the scratch area
"""

import os
import concurrent.futures
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from ....utils.logging import get_logger
from ..system.system_utils import get_file_size
from ...exceptions import EncodeError
from .results import JobOutcome, classify
from .transcoding_engine import (
    EncodeMode, ImageMode, Transcoder, IMAGE_OUTPUT_EXT
)

logger = get_logger("job_processor")


@dataclass(frozen=True)
class FileTask:
    """One file to transcode and the scratch path it is written to."""
    source_path: Path
    scratch_path: Path
    index: int


def resolve_worker_count(threads: int, mode: EncodeMode) -> int:
    """
    Number of concurrent transcodes.

    An explicit count is used as given. 0 means one worker per CPU in video
    mode and a single worker in image mode.
    """
    if threads > 0:
        return threads
    if isinstance(mode, ImageMode):
        return 1
    return os.cpu_count() or 1


def scratch_name(source: Path, index: int, mode: EncodeMode) -> str:
    """Scratch file name, unique per task index."""
    if isinstance(mode, ImageMode):
        return f"{index}.{IMAGE_OUTPUT_EXT}"
    ext = source.suffix[1:]
    return f"{index}.{ext}" if ext else str(index)


class ParallelTranscoder:
    """
    Runs one transcode per file on a bounded thread pool.

    Originals are only read; every output goes to the task's scratch path.
    """

    def __init__(self, transcoder: Transcoder, mode: EncodeMode, scratch_dir: Path, workers: int = 1):
        self.transcoder = transcoder
        self.mode = mode
        self.scratch_dir = scratch_dir
        self.workers = max(1, workers)

    def build_tasks(self, files: Sequence[Path]) -> List[FileTask]:
        return [
            FileTask(source_path=f, scratch_path=self.scratch_dir / scratch_name(f, i, self.mode), index=i)
            for i, f in enumerate(files)
        ]

    def process_task(self, task: FileTask) -> JobOutcome:
        """Transcode one file and classify the result. Never raises for per-file errors."""
        source = task.source_path
        try:
            # Clean up any stale output
            if task.scratch_path.exists():
                task.scratch_path.unlink()

            self.transcoder.encode(source, task.scratch_path, self.mode)

            original_size = get_file_size(source)
            new_size = get_file_size(task.scratch_path)
        except EncodeError as e:
            return JobOutcome.failed(source, str(e))
        except OSError as e:
            return JobOutcome.failed(source, f"{source}: {e.strerror or e}")

        status = classify(original_size, new_size)
        logger.debug(f"{source}: {original_size} -> {new_size} ({status.value})")
        return JobOutcome(file=source, original_size=original_size, new_size=new_size, status=status)

    def iter_outcomes(self, tasks: Sequence[FileTask]) -> Iterator[Tuple[FileTask, JobOutcome]]:
        """
        Yield (task, outcome) pairs as jobs complete; order is not deterministic.

        If the consumer stops early (interrupt, exit, generator close), queued
        jobs are cancelled and only the encodes already running are waited for.
        """
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as executor:
            future_to_task = {executor.submit(self.process_task, task): task for task in tasks}
            try:
                for future in concurrent.futures.as_completed(future_to_task):
                    yield future_to_task[future], future.result()
            except BaseException:
                logger.debug("run interrupted, cancelling queued jobs")
                executor.shutdown(wait=False, cancel_futures=True)
                raise
