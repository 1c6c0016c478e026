"""
File Collection Module

Resolves the set of files a run operates on:
- Explicit file lists (blank entries dropped)
- Directory walks filtered by extension group and depth
- Zero-byte and unreadable file filtering
- Optional ordering by file size
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ....utils.logging import get_logger
from ...exceptions import CollectionError

logger = get_logger("file_collector")

VIDEO_EXTENSIONS = ("mp4", "mkv", "webm", "mov", "avi")
IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "avif", "heic")


def extensions_for(images: bool) -> Sequence[str]:
    """Extension group searched for in the given mode."""
    return IMAGE_EXTENSIONS if images else VIDEO_EXTENSIONS


def clean_explicit(paths: Iterable[str]) -> List[Path]:
    """Pass an explicit file list through, minus blank entries."""
    return [Path(p) for p in paths if p and p.strip()]


def discover_files(root: Path, extensions: Sequence[str], depth: Optional[int] = None) -> List[Path]:
    """
    Walk root for regular files with one of the given extensions.
    Symlinks are skipped, as with ``find -type f``.

    Args:
        root: Directory to search
        extensions: Extensions without dots; matched case-insensitively
        depth: Maximum depth as with ``find -maxdepth`` (files directly in
            root are at depth 1); None means unlimited

    Returns:
        Sorted list of matching files

    Raises:
        CollectionError: root is missing, not a directory, or unreadable
    """
    if not root.exists():
        raise CollectionError(f"path not found: {root}")
    if not root.is_dir():
        raise CollectionError(f"not a directory: {root}")
    if depth is not None and depth < 0:
        raise CollectionError(f"invalid depth: {depth}")

    wanted = {ext.lower() for ext in extensions}
    root_parts = len(root.parts)

    def _fail(err: OSError):
        raise CollectionError(f"failed to search {err.filename or root}: {err.strerror or err}") from err

    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_fail):
        current = Path(dirpath)
        level = len(current.parts) - root_parts + 1
        if depth is not None:
            if level > depth:
                dirnames[:] = []
                continue
            if level == depth:
                dirnames[:] = []
        for name in filenames:
            path = current / name
            if path.suffix[1:].lower() in wanted and path.is_file() and not path.is_symlink():
                found.append(path)

    return sorted(found)


def filter_nonempty(files: Iterable[Path]) -> List[Path]:
    """Drop zero-byte files, and files whose metadata cannot be read (with a warning)."""
    kept: List[Path] = []
    for f in files:
        try:
            size = f.stat().st_size
        except OSError as e:
            logger.warn(f"failed to read file '{f}': {e.strerror or e}")
            continue
        if size == 0:
            logger.debug(f"skipping empty file {f}")
            continue
        kept.append(f)
    return kept


def sort_by_size(files: Sequence[Path], reverse: bool = False) -> List[Path]:
    """Order files by size, ascending (or descending with reverse)."""
    try:
        return sorted(files, key=lambda f: f.stat().st_size, reverse=reverse)
    except OSError as e:
        raise CollectionError(f"failed to read file info for {e.filename}: {e.strerror or e}") from e


def collect_files(root: Optional[Path] = None, explicit: Optional[Sequence[str]] = None,
                  images: bool = False, depth: Optional[int] = None,
                  sort: bool = False, reverse: bool = False) -> List[Path]:
    """
    Complete collection workflow: explicit list or discovery, empty-file
    filtering, then optional size ordering.

    An explicit list takes precedence over root. ``reverse`` only applies
    together with ``sort``.
    """
    if explicit is not None:
        files = clean_explicit(explicit)
    elif root is not None:
        logger.discovery(f"searching for media files in {root}")
        files = discover_files(root, extensions_for(images), depth)
    else:
        raise CollectionError("no path or file set given")

    files = filter_nonempty(files)

    if sort:
        files = sort_by_size(files, reverse=reverse)

    return files
