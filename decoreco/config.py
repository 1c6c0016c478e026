"""Configuration management for decoreco."""

import os
from pathlib import Path
from typing import Optional, Dict, Any


def load_env_file(env_path: Optional[Path] = None) -> Dict[str, str]:
    """Load environment variables from .env file."""
    if env_path is None:
        # Look for .env in current directory, then in package directory
        candidates = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for candidate in candidates:
            if candidate.exists():
                env_path = candidate
                break

    env_vars = {}

    if env_path and env_path.exists():
        with open(env_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    if '=' in line:
                        key, value = line.split('=', 1)
                        env_vars[key.strip()] = value.strip()

    return env_vars


def get_config(env_path: Optional[Path] = None) -> Dict[str, Any]:
    """Get configuration from environment variables and .env file.

    Keys in the .env file are lower case (``threads=4``); environment
    variables use the DECORECO_ prefix (``DECORECO_THREADS=4``).
    """
    env_vars = load_env_file(env_path)

    try:
        threads = int(env_vars.get('threads', os.getenv('DECORECO_THREADS', '0')))
    except ValueError:
        threads = 0

    config = {
        'threads': max(0, threads),
        'video_codec': env_vars.get('video_codec', os.getenv('DECORECO_VIDEO_CODEC', 'h264')),
        'audio_codec': env_vars.get('audio_codec', os.getenv('DECORECO_AUDIO_CODEC', 'aac')),
        'debug': env_vars.get('debug', os.getenv('DEBUG', 'false')).lower() in ('true', '1', 'yes'),
    }

    return config
