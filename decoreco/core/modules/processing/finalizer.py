"""
Replacement of originals with improved outputs.
"""

import os
import shutil
from pathlib import Path

from ....utils.logging import get_logger
from ...exceptions import ReplaceError
from .transcoding_engine import EncodeMode, ImageMode, IMAGE_OUTPUT_EXT

logger = get_logger("finalizer")


def target_path(source: Path, mode: EncodeMode) -> Path:
    """Where an improved output ends up: over the source, or <source>.jxl for images."""
    if isinstance(mode, ImageMode):
        return source.with_name(f"{source.name}.{IMAGE_OUTPUT_EXT}")
    return source


def replace_atomically(new_file: Path, target: Path) -> None:
    """
    Move new_file over target in a single rename.

    The scratch directory usually lives on another filesystem, so the file
    is first staged next to the target and then renamed into place.
    """
    staged = target.with_name(f".{target.name}.decoreco-tmp")
    try:
        shutil.move(str(new_file), str(staged))
        os.replace(staged, target)
    except OSError as e:
        try:
            if staged.exists():
                staged.unlink()
        except OSError:
            logger.warn(f"could not remove staged file {staged}")
        raise ReplaceError(f"failed to replace {target}: {e}") from e


def finalize(source: Path, scratch_path: Path, mode: EncodeMode, dry_run: bool = False) -> Path:
    """
    Put an improved output in place of its original.

    In image mode the output gets a .jxl name and the original is deleted.
    With dry_run nothing is moved.

    Returns:
        The path the output was (or would have been) written to
    """
    target = target_path(source, mode)
    if dry_run:
        return target

    replace_atomically(scratch_path, target)
    if isinstance(mode, ImageMode):
        try:
            source.unlink()
        except OSError as e:
            raise ReplaceError(f"wrote {target} but failed to remove old file {source}: {e}") from e
    logger.debug(f"replaced {source} -> {target}")
    return target
