"""Exceptions raised by the decoreco pipeline.

Fatal errors (``CollectionError``, ``ScratchAreaError``) abort the run before
any file is touched. Per-file errors (``EncodeError``, ``ReplaceError``) are
caught at the worker boundary and reported without stopping other files.
"""

from pathlib import Path
from typing import Optional


class DecorecoError(Exception):
    """Base exception for decoreco errors."""


class CollectionError(DecorecoError):
    """Raised when the file set cannot be collected (missing root, walk failure)."""


class ScratchAreaError(DecorecoError):
    """Raised when the scratch directory cannot be created or removed."""


class EncodeError(DecorecoError):
    """Raised when an external encoder cannot produce output for a file.

    Attributes:
        source: The file that failed to encode.
        stderr: Captured error output of the encoder, if any.
    """

    def __init__(self, message: str, source: Optional[Path] = None, stderr: str = "") -> None:
        self.source = source
        self.stderr = stderr
        super().__init__(message)


class UnsupportedFormatError(EncodeError):
    """Raised when an image has an extension the image encoder is not run on."""

    def __init__(self, source: Path) -> None:
        super().__init__(f"{source} is not a supported image format", source=source)


class ReplaceError(DecorecoError):
    """Raised when an improved output cannot be moved over its original."""
