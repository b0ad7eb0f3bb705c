"""Exceptions raised while decoding codes and patching ROM images.

Every error carries a human readable message; ``exit_code_for`` maps an
error to the process status the CLI terminates with.
"""

from constants import EXIT_FAILURE, EXIT_INVALID_CODE


class GenieError(Exception):
    """Base class for all patcher errors."""
    pass


class GenieDecodeError(GenieError):
    """Raised when a code cannot be decoded."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class InvalidCharacterError(GenieDecodeError):
    """Raised when a code contains a symbol outside the Game Genie alphabet."""

    def __init__(self, code: str, char: str):
        super().__init__(code, f"Invalid code input: {char!r} in {code!r}")
        self.char = char


class InvalidCodeLengthError(GenieDecodeError):
    """Raised when a code is neither 6 nor 8 characters long."""

    def __init__(self, code: str):
        super().__init__(
            code, f"Invalid code length: {code!r} has {len(code)} characters, expected 6 or 8"
        )


class PlatformNotImplementedError(GenieError):
    """Raised when the selected platform has no decoder."""

    def __init__(self, platform, reason: str = ""):
        message = f"Platform not implemented: {platform.value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.platform = platform


class RomFileError(GenieError):
    """Raised when the input ROM is unusable or the output copy cannot be made."""
    pass


class ImageIOError(GenieError):
    """Raised when a positioned read or write on the target image fails."""
    pass


def exit_code_for(error: Exception) -> int:
    """Map an error to the process exit status."""
    if isinstance(error, InvalidCharacterError):
        return EXIT_INVALID_CODE
    return EXIT_FAILURE
