"""Game Genie Patcher - Main orchestrator.

Copies the source ROM, then applies each code in the order given. Every
code targets the next 32 KiB bank: the base offset starts after the iNES
header and advances one bank per code, so code N's compare read sees the
writes made by codes 0..N-1.
"""

import traceback
from typing import Callable, Iterable, List, Optional

from services.genie_patcher.errors import GenieError, exit_code_for
from services.genie_patcher.models import (
    NES_BANK_SIZE,
    NES_HEADER_SIZE,
    Patch,
    PatchResult,
    Platform,
)
from services.genie_patcher.platforms import get_decoder
from services.genie_patcher.rom_image import (
    RomImage,
    copy_rom,
    remove_partial_output,
)
from utils.logging import log_error

CODE_SEPARATOR = "+"


def split_codes(codes: str) -> List[str]:
    """Split a "+"-joined code list, keeping order and the codes untouched."""
    return codes.split(CODE_SEPARATOR)


def apply_codes(
    image: RomImage,
    codes: Iterable[str],
    platform: Platform = Platform.NES,
    header_size: int = NES_HEADER_SIZE,
    bank_size: int = NES_BANK_SIZE,
    on_patch: Optional[Callable[[Patch], None]] = None,
) -> List[Patch]:
    """Decode and write each code into an open image, in order.

    The first error propagates; codes after it are neither decoded nor
    written.

    Returns:
        The patches written, in order.
    """
    decode = get_decoder(platform)
    base_offset = header_size
    patches: List[Patch] = []

    for code in codes:
        patch = decode(code, image, base_offset)
        image.write_byte(patch.offset, patch.value)
        patches.append(patch)
        if on_patch:
            on_patch(patch)
        base_offset += bank_size

    return patches


class GeniePatcher:
    """Applies a list of Game Genie codes to a copy of a ROM."""

    def __init__(
        self,
        on_status: Optional[Callable[[str], None]] = None,
        header_size: int = NES_HEADER_SIZE,
        bank_size: int = NES_BANK_SIZE,
    ):
        self.on_status = on_status
        self.header_size = header_size
        self.bank_size = bank_size

    def _status(self, message: str) -> None:
        if self.on_status:
            self.on_status(message)

    def patch_rom(
        self,
        rom_path: str,
        output_path: str,
        codes: List[str],
        platform: Platform = Platform.NES,
        on_patch: Optional[Callable[[Patch], None]] = None,
    ) -> PatchResult:
        """Copy ``rom_path`` to ``output_path`` and apply ``codes`` to the copy.

        Args:
            rom_path: Path to source ROM (left untouched)
            output_path: Path for patched ROM
            codes: Codes in application order
            platform: Code format to decode with
            on_patch: Called with each patch after it is written

        Returns:
            PatchResult with success status and details. On failure after
            the copy was made, the output file is removed.
        """
        try:
            # Fail on an unsupported platform before touching the filesystem
            get_decoder(platform)
        except GenieError as e:
            return self._fail(e, output_path, cleanup=False)

        self._status(f"Copying {rom_path} -> {output_path}")
        try:
            copy_rom(rom_path, output_path)
        except GenieError as e:
            return self._fail(e, output_path, cleanup=False)

        patches: List[Patch] = []

        def _record(patch: Patch) -> None:
            patches.append(patch)
            if on_patch:
                on_patch(patch)

        try:
            with RomImage(output_path) as image:
                self._status(f"Applying {len(codes)} code(s)...")
                apply_codes(
                    image,
                    codes,
                    platform=platform,
                    header_size=self.header_size,
                    bank_size=self.bank_size,
                    on_patch=_record,
                )
        except GenieError as e:
            result = self._fail(e, output_path, cleanup=True)
            result.patches = patches
            return result

        return PatchResult(
            success=True,
            output_path=output_path,
            patches=patches,
        )

    def _fail(self, error: GenieError, output_path: str, cleanup: bool) -> PatchResult:
        """Log an error, optionally remove the partial output, and build a result."""
        log_error(str(error), type(error).__name__, traceback.format_exc())
        if cleanup:
            remove_partial_output(output_path)
        return PatchResult(
            success=False,
            error=str(error),
            exit_code=exit_code_for(error),
        )
