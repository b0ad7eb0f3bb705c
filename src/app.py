"""
Genie Patcher command line application.

Parses arguments, loads settings, and hands the code list to the patcher.
Decode and I/O errors come back as a failed PatchResult; this module only
reports them and turns them into the process exit status.
"""

import argparse
import os
import sys
from typing import List, Optional

from constants import APP_NAME, APP_VERSION, EXIT_FAILURE, EXIT_OK
from config.settings import load_settings
from services.genie_patcher.models import PLATFORM_ALIASES, Patch, parse_platform
from services.genie_patcher.patcher import GeniePatcher, split_codes
from utils.formatting import format_patch, format_summary
from utils.logging import update_log_file_path


def _int_literal(value: str) -> int:
    """argparse type accepting 16, 0x10, 0o20 or 0b10000."""
    try:
        number = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Patch a ROM with Game Genie codes",
    )
    parser.add_argument(
        "codes",
        metavar="CODES",
        help="One or more codes joined by '+', applied in order",
    )
    parser.add_argument(
        "mode",
        metavar="MODE",
        type=str.lower,
        choices=sorted(PLATFORM_ALIASES),
        help="ROM mode selection: " + ", ".join(sorted(PLATFORM_ALIASES)),
    )
    parser.add_argument("rom_in", metavar="INPUT", help="Path to input ROM file")
    parser.add_argument(
        "rom_out",
        metavar="OUTPUT",
        help="Desired output path for patched ROM",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="Settings file (JSON)",
    )
    parser.add_argument(
        "--header-size",
        type=_int_literal,
        default=None,
        help="Bytes skipped before the first bank (default 0x10)",
    )
    parser.add_argument(
        "--bank-size",
        type=_int_literal,
        default=None,
        help="Base offset advance after each code (default 0x8000)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=None,
        help="Do not print each written patch",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the patcher. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    update_log_file_path(settings["log_dir"])

    try:
        header_size = int(
            args.header_size if args.header_size is not None else settings["header_size"]
        )
        bank_size = int(
            args.bank_size if args.bank_size is not None else settings["bank_size"]
        )
    except (TypeError, ValueError):
        print("Invalid header_size/bank_size in settings", file=sys.stderr)
        return EXIT_FAILURE
    quiet = args.quiet if args.quiet is not None else bool(settings["quiet"])

    def _report(patch: Patch) -> None:
        if not quiet:
            print(format_patch(patch))

    patcher = GeniePatcher(header_size=header_size, bank_size=bank_size)
    codes = split_codes(args.codes)
    result = patcher.patch_rom(
        args.rom_in,
        args.rom_out,
        codes,
        platform=parse_platform(args.mode),
        on_patch=_report,
    )

    if not result.success:
        print(result.error, file=sys.stderr)
        return result.exit_code

    if not quiet:
        print(
            format_summary(
                result.codes_applied,
                len(result.patches),
                os.path.getsize(result.output_path),
            )
        )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
