"""Game Genie Patcher service.

Decodes NES Game Genie codes and applies them to a copy of a ROM image.
"""

from services.genie_patcher.patcher import GeniePatcher, apply_codes, split_codes

__all__ = ["GeniePatcher", "apply_codes", "split_codes"]
