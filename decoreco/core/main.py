"""
Main orchestration module for decoreco.

This module coordinates a run using the modular components:
- File collection
- Parallel transcoding into a scratch area
- Result aggregation and progress display
- Replacement of improved originals and the closing report
"""

import argparse
import contextlib
import time
from pathlib import Path
from typing import List, Optional, Sequence

from .. import __version__
from ..config import get_config
from ..utils.logging import get_logger, set_debug_mode, create_progress_bar
from .exceptions import DecorecoError, ReplaceError
from .modules.processing.file_collector import collect_files
from .modules.processing.transcoding_engine import (
    EncodeMode, ImageMode, VideoMode, Transcoder, ExternalTranscoder,
    VIDEO_CODECS, AUDIO_CODECS
)
from .modules.processing.job_processor import ParallelTranscoder, resolve_worker_count
from .modules.processing.results import JobOutcome, JobStatus, RunSummary
from .modules.processing.finalizer import finalize
from .modules.system.system_utils import scratch_area, install_signal_handlers
from .modules.interface.user_interface import print_file_list, print_summary, progress_message

logger = get_logger("main")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def build_parser(config: Optional[dict] = None) -> argparse.ArgumentParser:
    """Command-line parser; config supplies the defaults for codecs and threads."""
    config = config or get_config()
    ap = argparse.ArgumentParser(
        prog="decoreco",
        description="Re-encode video, audio and image files to save space."
    )
    ap.add_argument("path", nargs="?", help="path to check for media files")
    ap.add_argument("-S", "--set", nargs="+", metavar="FILE",
                    help="process only these files, ignore path")
    ap.add_argument("-D", "--depth", type=_non_negative_int,
                    help="how many levels deep to search for media files")
    ap.add_argument("-d", "--dry-run", action="store_true", help="don't actually replace anything")
    ap.add_argument("-l", "--list", action="store_true",
                    help="list files that would be processed and their sizes")
    ap.add_argument("-s", "--sort", action="store_true", help="sort the files by size")
    ap.add_argument("-r", "--reverse", action="store_true", help="reverse the sort")
    ap.add_argument("-v", "--video-codec", choices=VIDEO_CODECS, default=config["video_codec"],
                    help="video codec to use (default: %(default)s)")
    ap.add_argument("-a", "--audio-codec", choices=AUDIO_CODECS, default=config["audio_codec"],
                    help="audio codec to use (default: %(default)s)")
    ap.add_argument("-i", "--images", action="store_true",
                    help="compress images to JPEG XL instead of re-encoding videos")
    ap.add_argument("-t", "--threads", type=_non_negative_int, default=config["threads"],
                    help="number of files to process at once, 0 = auto (default: %(default)s)")
    ap.add_argument("--debug", action="store_true", default=config["debug"],
                    help="show external commands and other diagnostics")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def resolve_mode(args: argparse.Namespace) -> EncodeMode:
    """Pick the encode mode once from the parsed flags."""
    if args.images:
        return ImageMode()
    return VideoMode(video_codec=args.video_codec, audio_codec=args.audio_codec)


def run_pipeline(files: Sequence[Path], mode: EncodeMode, scratch_dir: Path,
                 transcoder: Optional[Transcoder] = None, workers: int = 1,
                 dry_run: bool = False) -> RunSummary:
    """
    Transcode every file, fold results into a RunSummary and replace
    improved originals (unless dry_run).

    Per-file failures are reported and counted; they never stop the run.
    """
    transcoder = transcoder or ExternalTranscoder()
    dispatcher = ParallelTranscoder(transcoder, mode, scratch_dir, workers)
    summary = RunSummary()
    tasks = dispatcher.build_tasks(files)

    outcomes = dispatcher.iter_outcomes(tasks)
    with contextlib.closing(outcomes), create_progress_bar(total=len(tasks), unit="files") as progress:
        for task, outcome in outcomes:
            if outcome.status == JobStatus.IMPROVED:
                try:
                    finalize(task.source_path, task.scratch_path, mode, dry_run=dry_run)
                except ReplaceError as e:
                    outcome = JobOutcome.failed(task.source_path, str(e), outcome.original_size)

            if outcome.status == JobStatus.FAILED:
                logger.error(f"failed to decoreco: {outcome.reason}")
            else:
                progress.set_description_str(progress_message(outcome))

            summary.record(outcome)
            progress.update(1)

            # outputs that were not moved into place are dropped right away
            task.scratch_path.unlink(missing_ok=True)

    return summary


def main(argv: Optional[List[str]] = None) -> int:
    """Run decoreco; returns the process exit code."""
    config = get_config()
    ap = build_parser(config)
    args = ap.parse_args(argv)
    set_debug_mode(args.debug)

    if args.set is None and args.path is None:
        ap.print_help()
        return 0

    install_signal_handlers()
    mode = resolve_mode(args)

    try:
        files = collect_files(
            root=Path(args.path) if args.path else None,
            explicit=args.set,
            images=args.images,
            depth=args.depth,
            sort=args.sort,
            reverse=args.reverse,
        )
    except DecorecoError as e:
        logger.error(str(e))
        return 1

    if not files:
        print("no files found!")
        return 0

    logger.info(f"found {len(files)} file{'' if len(files) == 1 else 's'}!")

    if args.list:
        print_file_list(files)
        return 0

    if args.dry_run:
        logger.info("dry run enabled, no files will be modified.")

    workers = resolve_worker_count(args.threads, mode)
    logger.debug(f"mode: {mode}, workers: {workers}")

    start = time.monotonic()
    try:
        with scratch_area() as scratch:
            summary = run_pipeline(files, mode, scratch, workers=workers, dry_run=args.dry_run)
            print_summary(summary, time.monotonic() - start, dry_run=args.dry_run)
    except DecorecoError as e:
        logger.error(str(e))
        return 1

    return 0
