"""
Formatting utilities for Genie Patcher.
Provides functions for reporting patches and file sizes.
"""

from services.genie_patcher.models import Patch


def format_size(size_bytes: float) -> str:
    """
    Convert bytes to human readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string with appropriate unit (B, KB, MB, GB, TB)
    """
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def format_patch(patch: Patch) -> str:
    """Two-line report of a written patch: lowercase hex, no prefix."""
    return f"Offset: {patch.offset:x}\nData: {patch.value:x}"


def format_summary(applied: int, total: int, size_bytes: float) -> str:
    """One-line summary printed after a successful run."""
    skipped = total - applied
    line = f"Applied {applied}/{total} code(s) to {format_size(size_bytes)} image"
    if skipped:
        line += f" ({skipped} compare mismatch)"
    return line
