"""
Utility functions for Genie Patcher.
"""

from .logging import log_error, update_log_file_path, get_log_file
from .formatting import format_size, format_patch, format_summary

__all__ = [
    "log_error",
    "update_log_file_path",
    "get_log_file",
    "format_size",
    "format_patch",
    "format_summary",
]
