"""
decoreco - re-encode video, audio and image files to save space.
"""

__version__ = "1.0.0"
__author__ = "Jabster28"

from .config import get_config, load_env_file

__all__ = [
    "__version__",
    "get_config",
    "load_env_file",
]
