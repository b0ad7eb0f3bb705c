"""
Logging utilities for Genie Patcher.
Provides error logging with timestamps and traceback support.
"""

import os
import sys
from datetime import datetime
from typing import Optional

from constants import LOG_FILE

# Module-level log file path
_log_file: str = LOG_FILE


def get_log_file() -> str:
    """Get the current log file path."""
    return _log_file


def update_log_file_path(log_dir: str) -> None:
    """
    Point the error log at a different directory.

    Args:
        log_dir: Directory that will hold error.log
    """
    global _log_file
    _log_file = os.path.join(log_dir, "error.log")


def log_error(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
) -> None:
    """
    Append an error message to the log file.

    Args:
        error_msg: The error message to log
        error_type: Optional error type/class name
        traceback_str: Optional traceback string
    """
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_message = f"[{timestamp}] ERROR: {error_msg}\n"

    if error_type:
        log_message += f"Type: {error_type}\n"

    if traceback_str:
        log_message += f"Traceback:\n{traceback_str}\n"

    log_message += "-" * 80 + "\n"

    try:
        log_dir = os.path.dirname(_log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_log_file, "a") as f:
            f.write(log_message)
    except OSError as e:
        # If logging fails, print to stderr as fallback
        print(f"Failed to write to log file: {e}", file=sys.stderr)
        print(log_message, file=sys.stderr)
