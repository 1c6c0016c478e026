"""
Transcoding engine module for decoreco.

This module handles the encoding operations including:
- Encode mode selection (video via ffmpeg, images via cjxl)
- Encoder command building
- Running the external encoder behind the Transcoder interface
"""

import abc
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from ..system.system_utils import run_command
from ...exceptions import EncodeError, UnsupportedFormatError

VIDEO_CODECS = ("h264", "hevc", "vp9", "vp8", "av1")
AUDIO_CODECS = ("aac", "opus", "vorbis", "mp3")

# Image extensions and whether cjxl should encode them losslessly
IMAGE_LOSSLESS = {
    "png": True,
    "jpg": False,
    "jpeg": False,
}

IMAGE_OUTPUT_EXT = "jxl"


@dataclass(frozen=True)
class VideoMode:
    """Re-encode audio/video with ffmpeg using the given codecs."""
    video_codec: str = "h264"
    audio_codec: str = "aac"


@dataclass(frozen=True)
class ImageMode:
    """Re-encode images to JPEG XL with cjxl."""


EncodeMode = Union[VideoMode, ImageMode]


def file_extension(path: Path) -> str:
    """Lower-cased extension without the dot ("" when there is none)."""
    return path.suffix[1:].lower()


def build_encode_cmd(source: Path, output: Path, mode: EncodeMode) -> List[str]:
    """
    Build the external encoder command for a single file.

    Args:
        source: Input media file (never written to)
        output: Scratch output path
        mode: VideoMode or ImageMode

    Returns:
        Command as a list of arguments

    Raises:
        UnsupportedFormatError: image mode and the source is not png/jpg/jpeg
    """
    if isinstance(mode, ImageMode):
        lossless = IMAGE_LOSSLESS.get(file_extension(source))
        if lossless is None:
            raise UnsupportedFormatError(source)
        cmd = ["cjxl"]
        if lossless:
            cmd.extend(["-d", "0"])
        cmd.extend([str(source), str(output)])
        return cmd

    return [
        "ffmpeg", "-i", str(source),
        "-c:v", mode.video_codec,
        "-c:a", mode.audio_codec,
        # keep subtitles and container metadata
        "-c:s", "copy",
        "-map_metadata", "0",
        "-y", str(output),
    ]


class Transcoder(abc.ABC):
    """Produces a re-encoded copy of a media file."""

    @abc.abstractmethod
    def encode(self, source: Path, output: Path, mode: EncodeMode) -> None:
        """Encode source into output. Raises EncodeError on failure."""


class ExternalTranscoder(Transcoder):
    """Transcoder backed by the ffmpeg and cjxl binaries."""

    def encode(self, source: Path, output: Path, mode: EncodeMode) -> None:
        cmd = build_encode_cmd(source, output, mode)
        try:
            result = run_command(cmd)
        except OSError as e:
            raise EncodeError(f"{cmd[0]}: {e}", source=source) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise EncodeError(f"{source}\n{stderr}", source=source, stderr=stderr)
