"""
System utilities for decoreco.

This module provides system-level utilities including:
- External command execution
- Scratch directory lifecycle
- File size queries
- Human-readable size and duration formatting
"""

import os
import sys
import shlex
import signal
import atexit
import shutil
import subprocess
import tempfile
import contextlib
from pathlib import Path
from typing import Optional

from ....utils.logging import get_logger
from ...exceptions import ScratchAreaError

logger = get_logger("system_utils")

# Scratch directories still on disk; removed at interpreter exit if a run
# is interrupted before its context manager unwinds.
SCRATCH_DIRS: set = set()


def _cleanup():
    """Remove any scratch directories left behind on exit"""
    for d in list(SCRATCH_DIRS):
        shutil.rmtree(d, ignore_errors=True)
        logger.cleanup(f"removed {d}")
        SCRATCH_DIRS.discard(d)


atexit.register(_cleanup)


def install_signal_handlers():
    """Turn SIGINT/SIGTERM into a normal exit so cleanup handlers run."""
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, lambda s, f: sys.exit(1))


def run_command(cmd: list[str], timeout: Optional[float] = None, capture_output: bool = True,
                text: bool = True, check: bool = False) -> subprocess.CompletedProcess:
    """
    Standardized subprocess command runner.

    Args:
        cmd: Command as list of strings
        timeout: Timeout in seconds (default: None, wait for completion)
        capture_output: Whether to capture stdout/stderr (default: True)
        text: Whether to use text mode (default: True)
        check: Whether to raise exception on non-zero exit (default: False)

    Returns:
        CompletedProcess object
    """
    logger.cmd(" ".join(shlex.quote(c) for c in cmd))
    return subprocess.run(
        cmd,
        capture_output=capture_output,
        text=text,
        errors="replace" if text else None,
        timeout=timeout,
        check=check
    )


def get_file_size(path: Path) -> int:
    """Current on-disk size of a file in bytes. Raises OSError."""
    return os.stat(path).st_size


@contextlib.contextmanager
def scratch_area(prefix: str = "decoreco"):
    """
    Context manager for the run's scratch directory.

    The directory is removed when the context exits, whether the run
    succeeded or not. Failure to create or remove it is fatal; a removal
    failure while the run is already raising is only logged, so the run's
    own error is the one that propagates.

    Yields:
        Path: Path to the scratch directory
    """
    try:
        scratch = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as e:
        raise ScratchAreaError(f"failed to create scratch directory: {e}") from e

    SCRATCH_DIRS.add(str(scratch))
    logger.debug(f"scratch directory: {scratch}")
    completed = False
    try:
        yield scratch
        completed = True
    finally:
        try:
            shutil.rmtree(scratch)
        except FileNotFoundError:
            pass
        except OSError as e:
            message = f"failed to remove scratch directory {scratch}: {e}"
            if completed:
                raise ScratchAreaError(message) from e
            logger.error(message)
        else:
            logger.cleanup(f"removed {scratch}")
        finally:
            SCRATCH_DIRS.discard(str(scratch))


def format_size(bytes_size: int) -> str:
    """Convert bytes to human readable format:
    - Bytes: integer no decimal ("500 B", "0 B")
    - >= KiB: two decimals ("1.50 KiB", "2.00 MiB")
    """
    negative = bytes_size < 0
    size = float(abs(bytes_size))
    units = ['B', 'KiB', 'MiB', 'GiB', 'TiB', 'PiB']
    unit_index = 0
    while unit_index < len(units) - 1 and size >= 1024.0:
        size /= 1024.0
        unit_index += 1
    unit = units[unit_index]
    if unit == 'B':
        formatted = f"{int(size)} {unit}"
    else:
        formatted = f"{size:.2f} {unit}"
    return f"-{formatted}" if negative else formatted


def format_duration(seconds: float) -> str:
    """Format a duration as e.g. "250ms", "42s", "3m7s", "1h2m"; zero parts are omitted."""
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    total = int(seconds)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    parts = []
    if h:
        parts.append(f"{h}h")
    if m:
        parts.append(f"{m}m")
    if s:
        parts.append(f"{s}s")
    return "".join(parts)


def truncate(text: str, max_len: int) -> str:
    """Truncate text to max_len characters, appending '...' when cut."""
    if max_len <= 0:
        return "..."
    if len(text) > max_len:
        return f"{text[:max_len]}..."
    return text


def terminal_width(fallback: int = 90) -> int:
    """Current terminal width, or fallback when not attached to a terminal."""
    return shutil.get_terminal_size((fallback, 24)).columns
