"""
Logging utilities for decoreco

Provides consistent logging patterns used throughout the codebase:
- [INFO] for general information
- [WARN] for warnings
- [ERROR] for errors (written to stderr)
- [DEBUG] for debug information
- [DISCOVERY] for file discovery messages
- [CLEANUP] for scratch area cleanup
- [CMD] for external commands (debug only)

All output goes through tqdm.write so messages can be printed while a
progress bar is active without corrupting it.

Usage:
    from decoreco.utils.logging import get_logger, set_debug_mode

    set_debug_mode(True)
    logger = get_logger("file_collector")
    logger.info("This is an info message")
    logger.debug("Only shown in debug mode")
"""

import os
import sys
from enum import Enum
from typing import Optional

from tqdm import tqdm

# Global logging configuration
_DEBUG_ENABLED = os.getenv('DEBUG', '').lower() in ('1', 'true', 'yes')
_QUIET_MODE = False


class LogLevel(Enum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


def set_debug_mode(enabled: bool):
    """Enable or disable debug mode globally"""
    global _DEBUG_ENABLED
    _DEBUG_ENABLED = enabled


def set_quiet_mode(enabled: bool):
    """Enable or disable quiet mode (suppress INFO and DEBUG messages)"""
    global _QUIET_MODE
    _QUIET_MODE = enabled


class Logger:
    """Tagged console logger with consistent formatting"""

    def __init__(self, module_name: str = ""):
        self.module_name = module_name
        self.prefix = f"[{module_name}] " if module_name else ""

    def _should_log(self, level: LogLevel) -> bool:
        if level == LogLevel.DEBUG and not _DEBUG_ENABLED:
            return False
        if _QUIET_MODE and level in (LogLevel.DEBUG, LogLevel.INFO):
            return False
        return True

    def _emit(self, tag: str, message: str, level: LogLevel):
        if not self._should_log(level):
            return
        # module prefix only on debug-level output
        prefix = self.prefix if level == LogLevel.DEBUG else ""
        stream = sys.stderr if level == LogLevel.ERROR else sys.stdout
        tqdm.write(f"[{tag}] {prefix}{message}", file=stream)

    def debug(self, message: str):
        """Log debug message (only if debug mode enabled)"""
        self._emit("DEBUG", message, LogLevel.DEBUG)

    def info(self, message: str):
        """Log informational message"""
        self._emit("INFO", message, LogLevel.INFO)

    def warn(self, message: str):
        """Log warning message"""
        self._emit("WARN", message, LogLevel.WARN)

    def error(self, message: str):
        """Log error message"""
        self._emit("ERROR", message, LogLevel.ERROR)

    def discovery(self, message: str):
        """Log file discovery message"""
        self._emit("DISCOVERY", message, LogLevel.INFO)

    def cleanup(self, message: str):
        """Log cleanup operation"""
        self._emit("CLEANUP", message, LogLevel.DEBUG)

    def cmd(self, message: str):
        """Log command execution message"""
        self._emit("CMD", message, LogLevel.DEBUG)


def get_logger(module_name: str = "") -> Logger:
    """Get a logger instance for a module"""
    return Logger(module_name)


def create_progress_bar(total: Optional[int] = None, desc: str = "", unit: str = "it",
                        position: Optional[int] = None, leave: bool = True) -> tqdm:
    """Create a progress bar with consistent styling"""
    return tqdm(total=total, desc=desc, unit=unit, position=position, leave=leave,
                bar_format="[{elapsed}] {bar:40} {n_fmt:>5}/{total_fmt:<5} {desc}",
                ascii=" -#", disable=_QUIET_MODE)


def print_separator(width: int = 90):
    """Print a separator line"""
    print("-" * width)
