"""
Configuration management for Genie Patcher.
"""

from .settings import (
    load_settings,
    save_settings,
    get_default_settings,
    Settings,
)

__all__ = [
    'load_settings',
    'save_settings',
    'get_default_settings',
    'Settings',
]
