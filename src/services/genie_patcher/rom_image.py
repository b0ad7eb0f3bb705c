"""ROM image access for the Game Genie patcher.

The source ROM is never modified: it is copied to the output path first and
the copy is patched in place with single-byte positioned reads and writes.
The image is never resized, so any access outside the file is an error.
"""

import os
import shutil
import traceback

from services.genie_patcher.errors import ImageIOError, RomFileError
from utils.logging import log_error


def remove_partial_output(output_path: str) -> bool:
    """Delete a half-written output file, if one exists.

    Returns:
        False if the file exists and could not be removed (the failure is
        logged), True otherwise.
    """
    if not os.path.isfile(output_path):
        return True
    try:
        os.remove(output_path)
        return True
    except OSError as e:
        log_error(
            f"Unable to remove partial output {output_path}",
            type(e).__name__,
            traceback.format_exc(),
        )
        return False


def copy_rom(rom_path: str, output_path: str) -> None:
    """Copy the source ROM to the output path.

    Raises:
        RomFileError: If the source is not a regular file or the copy fails.
            A partial copy is removed before raising, unless the output file
            was already there before this call.
    """
    if not os.path.isfile(rom_path):
        raise RomFileError(f"Unable to read {rom_path}")
    output_existed = os.path.exists(output_path)
    if output_existed and os.path.samefile(rom_path, output_path):
        raise RomFileError(f"Output path is the input ROM: {output_path}")

    try:
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        shutil.copyfile(rom_path, output_path)
    except (OSError, shutil.Error) as e:
        if not output_existed:
            remove_partial_output(output_path)
        raise RomFileError(f"Unable to copy {rom_path} to {output_path}: {e}") from e


class RomImage:
    """A ROM file opened once for combined reading and writing."""

    def __init__(self, path: str):
        self.path = path
        self.size: int = 0
        self._file = None

    def open(self) -> "RomImage":
        """Open the image read/write without buffering."""
        try:
            self._file = open(self.path, "r+b", buffering=0)
            self.size = os.fstat(self._file.fileno()).st_size
        except OSError as e:
            raise RomFileError(f"Unable to open ROM file for reading: {self.path}") from e
        return self

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "RomImage":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _check_offset(self, offset: int, action: str) -> None:
        if self._file is None:
            raise ImageIOError(f"Unable to {action} {self.path}: image is not open")
        if offset < 0 or offset >= self.size:
            raise ImageIOError(
                f"Unable to {action} offset 0x{offset:x}: outside image of "
                f"0x{self.size:x} bytes"
            )

    def read_byte(self, offset: int) -> int:
        """Read the byte stored at ``offset``."""
        self._check_offset(offset, "read")
        try:
            self._file.seek(offset)
            data = self._file.read(1)
        except OSError as e:
            raise ImageIOError(f"Unable to read ROM file at 0x{offset:x}: {e}") from e
        if len(data) != 1:
            raise ImageIOError(f"Unable to read ROM file at 0x{offset:x}: short read")
        return data[0]

    def write_byte(self, offset: int, value: int) -> None:
        """Write one byte at ``offset``."""
        self._check_offset(offset, "write")
        if not 0 <= value <= 0xFF:
            raise ImageIOError(f"Value 0x{value:x} does not fit in a byte")
        try:
            self._file.seek(offset)
            written = self._file.write(bytes([value]))
        except OSError as e:
            raise ImageIOError(
                f"Unable to write code data to file at 0x{offset:x}: {e}"
            ) from e
        if written != 1:
            raise ImageIOError(f"Unable to write code data to file at 0x{offset:x}")
