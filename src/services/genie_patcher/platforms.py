"""Per-platform code decoders.

Every platform resolves to either a SupportedCodec, which carries the
decode function, or an UnsupportedCodec, which carries the reason it
cannot be used. Callers go through get_decoder(), which raises for
unsupported platforms instead of handing back something that does nothing.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Union

from services.genie_patcher.decoder import decode_nes
from services.genie_patcher.errors import PlatformNotImplementedError
from services.genie_patcher.models import Patch, Platform

# (code, image, base_offset) -> Patch
Decoder = Callable[[str, object, int], Patch]


@dataclass(frozen=True)
class SupportedCodec:
    platform: Platform
    decode: Decoder


@dataclass(frozen=True)
class UnsupportedCodec:
    platform: Platform
    reason: str = "code format not implemented"


PlatformCodec = Union[SupportedCodec, UnsupportedCodec]


PLATFORM_CODECS: Dict[Platform, PlatformCodec] = {
    Platform.GAMEBOY: UnsupportedCodec(Platform.GAMEBOY),
    Platform.GAMEGEAR: UnsupportedCodec(Platform.GAMEGEAR),
    Platform.MASTERSYSTEM: UnsupportedCodec(Platform.MASTERSYSTEM),
    Platform.GENESIS: UnsupportedCodec(Platform.GENESIS),
    Platform.NES: SupportedCodec(Platform.NES, decode_nes),
    Platform.SNES: UnsupportedCodec(Platform.SNES),
}


def get_codec(platform: Platform) -> PlatformCodec:
    """Look up the codec entry for a platform."""
    return PLATFORM_CODECS[platform]


def is_supported(platform: Platform) -> bool:
    return isinstance(get_codec(platform), SupportedCodec)


def get_decoder(platform: Platform) -> Decoder:
    """Return the decode function for a platform.

    Raises:
        PlatformNotImplementedError: If the platform has no decoder.
    """
    codec = get_codec(platform)
    if isinstance(codec, UnsupportedCodec):
        raise PlatformNotImplementedError(platform, codec.reason)
    return codec.decode
