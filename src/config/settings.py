"""
Settings management for Genie Patcher.
Handles loading, saving, and merging patcher settings.
"""

import json
import os
import traceback
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from constants import CONFIG_FILE, TEMP_LOG_DIR
from services.genie_patcher.models import NES_BANK_SIZE, NES_HEADER_SIZE


@dataclass
class Settings:
    """Patcher settings with default values."""

    header_size: int = NES_HEADER_SIZE  # bytes before the first bank
    bank_size: int = NES_BANK_SIZE  # base offset advance per code
    log_dir: str = ""
    quiet: bool = False  # suppress per-patch reports

    def __post_init__(self):
        """Set default paths if not specified."""
        if not self.log_dir:
            self.log_dir = TEMP_LOG_DIR

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create Settings from dictionary."""
        # Filter out unknown keys
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered_data)


def get_default_settings() -> Dict[str, Any]:
    """Get default settings as a dictionary."""
    return Settings().to_dict()


def _check_types(
    loaded: Dict[str, Any], defaults: Dict[str, Any], path: str
) -> Dict[str, Any]:
    """
    Drop values whose JSON type does not match the default's type.

    bool is not accepted for int fields, nor int for bool fields. Each
    rejected value is logged and the default is used instead.
    """
    checked = {}
    for key, value in loaded.items():
        if key not in defaults:
            continue
        expected = type(defaults[key])
        if type(value) is not expected:
            from utils.logging import log_error

            log_error(
                f"Ignoring setting {key!r} in {path}: expected {expected.__name__}, "
                f"got {type(value).__name__} {value!r}",
                "TypeError",
            )
            continue
        checked[key] = value
    return checked


def load_settings(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from config file.

    A missing file is not an error. An unreadable or malformed file is
    logged and the defaults are used.

    Args:
        config_path: Path to a JSON config file (defaults to CONFIG_FILE)

    Returns:
        Dictionary of settings with defaults for missing values
    """
    path = config_path or CONFIG_FILE
    default_settings = get_default_settings()

    if not os.path.exists(path):
        return default_settings

    try:
        with open(path, "r") as f:
            loaded_settings = json.load(f)
        if not isinstance(loaded_settings, dict):
            raise ValueError(f"Expected a JSON object in {path}")
        # Merge with defaults, dropping unknown keys and mistyped values
        merged = {**default_settings, **_check_types(loaded_settings, default_settings, path)}
        return Settings.from_dict(merged).to_dict()
    except (OSError, ValueError, TypeError) as e:
        from utils.logging import log_error

        log_error(
            f"Failed to load settings from {path}, using defaults",
            type(e).__name__,
            traceback.format_exc(),
        )
        return default_settings


def save_settings(settings_to_save: Dict[str, Any], config_path: Optional[str] = None) -> bool:
    """
    Save settings to config file.

    Args:
        settings_to_save: Dictionary of settings to save
        config_path: Destination path (defaults to CONFIG_FILE)

    Returns:
        True if successful, False otherwise
    """
    path = config_path or CONFIG_FILE
    try:
        # Create directory if it doesn't exist
        config_dir = os.path.dirname(path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(path, "w") as f:
            json.dump(settings_to_save, f, indent=2)
        return True
    except (OSError, TypeError) as e:
        from utils.logging import log_error

        log_error("Failed to save settings", type(e).__name__, traceback.format_exc())
        return False
