#!/usr/bin/env python3
"""
fwextract Command Line Interface.

Runs the same extraction pipeline the disassembler commands use, against
a flat binary image.

Usage:
    fwextract types
    fwextract info <image> --type gc --address 0x1000 [options]
    fwextract extract <image> --type gc --address 0x1000 [-o out.bin] [options]
    fwextract --version
"""

import sys
import argparse
from typing import List, Optional

from fwextract import __version__
from fwextract.core.config import Config
from fwextract.core.exceptions import ExtractionError, FwExtractError
from fwextract.core.logger import setup_logging
from fwextract.core.models import FIRMWARE_LAYOUTS, Endianness, FirmwareType
from fwextract.extractors.firmware_extractor import FirmwareExtractor
from fwextract.host.console import ConsoleInteraction
from fwextract.host.raw import RawBinaryView, RawSymbol
from fwextract.utils import format_address, format_size, parse_int


# ANSI Colors
class Colors:
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    END = "\033[0m"
    BOLD = "\033[1m"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="fwextract",
        description="Extract GC/SDMA/Catalyst firmware blobs embedded in a binary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fwextract types
  fwextract info driver.bin --type gc --address 0x1000
  fwextract extract driver.bin --type sdma --address 0x2000 --symbol _sdma_fw=0x2000:0x40
  fwextract extract kernel.bin --type gc --address 0x1000 --base 0xffff0000 --endian big
        """,
    )

    parser.add_argument("-v", "--version", action="version", version=f"fwextract {__version__}")
    parser.add_argument("-c", "--config", help="Path to configuration file", default=None)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("types", help="List firmware types and header layouts")

    image_args = argparse.ArgumentParser(add_help=False)
    image_args.add_argument("image", help="Path to binary image")
    image_args.add_argument(
        "-t", "--type", required=True, help="Firmware type (gc, sdma, catalyst)"
    )
    image_args.add_argument(
        "-a", "--address", required=True, type=parse_int, help="Header or symbol address"
    )
    image_args.add_argument(
        "--base", type=parse_int, default=0, help="Load address of the image (default: 0)"
    )
    image_args.add_argument(
        "--endian", choices=["little", "big"], default="little", help="Byte order of the image"
    )
    image_args.add_argument(
        "--address-size",
        type=int,
        choices=[4, 8],
        default=8,
        help="Pointer width of the image in bytes",
    )
    image_args.add_argument(
        "--symbol",
        action="append",
        default=[],
        metavar="NAME=ADDR[:SIZE]",
        help="Symbol to place in the image (repeatable)",
    )

    subparsers.add_parser(
        "info", parents=[image_args], help="Show the firmware header at an address"
    )

    extract_parser = subparsers.add_parser(
        "extract", parents=[image_args], help="Extract firmware at an address to a file"
    )
    extract_parser.add_argument(
        "-o", "--output", help="Output file (default: <name>.<ext> in --output-dir)"
    )
    extract_parser.add_argument(
        "--output-dir", default=".", help="Directory for the default output file"
    )

    return parser


def load_view(args) -> RawBinaryView:
    """Build a raw view from image arguments."""
    symbols = [RawSymbol.parse(s) for s in args.symbol]
    return RawBinaryView.from_file(
        args.image,
        base_address=args.base,
        endianness=Endianness(args.endian),
        address_size=args.address_size,
        symbols=symbols,
    )


def cmd_types(args, config: Config) -> int:
    """List firmware types."""
    enabled = set(config.extractor.firmware_types())
    print(f"\n{Colors.CYAN}Firmware header layouts:{Colors.END}")
    print(f"  {'Type':10} {'Size field':>10} {'Offset field':>13}  Enabled")
    for fw_type in sorted(FIRMWARE_LAYOUTS):
        layout = FIRMWARE_LAYOUTS[fw_type]
        mark = "yes" if fw_type in enabled else "no"
        print(
            f"  {fw_type.label:10} {format_address(layout.size_field_offset):>10} "
            f"{format_address(layout.offset_field_offset):>13}  {mark}"
        )
    return 0


def cmd_info(args, config: Config) -> int:
    """Show the decoded header at an address."""
    fw_type = FirmwareType.from_string(args.type)
    view = load_view(args)
    extractor = FirmwareExtractor(config)

    resolved, header = extractor.read_header(view, fw_type, args.address)

    print(f"\n{Colors.BOLD}{fw_type.label} firmware at {format_address(args.address)}{Colors.END}")
    print(f"  Name:         {resolved.display_name}")
    print(f"  Symbol:       {'yes' if resolved.symbol_found else 'no'}")
    print(f"  Header base:  {format_address(resolved.header_base)}")

    if header is None:
        print(f"{Colors.FAIL}  Header could not be decoded{Colors.END}")
        return 1

    print(f"  Data offset:  {format_address(header.data_offset)}")
    print(f"  Data size:    {header.data_size} ({format_size(header.data_size)})")

    if not extractor.range_is_mapped(view, header):
        print(f"{Colors.FAIL}  Data range is outside the image{Colors.END}")
        return 1

    print(f"{Colors.GREEN}  Extractable{Colors.END}")
    return 0


def cmd_extract(args, config: Config) -> int:
    """Extract firmware to a file."""
    fw_type = FirmwareType.from_string(args.type)
    view = load_view(args)
    extractor = FirmwareExtractor(config)
    interaction = ConsoleInteraction(output=args.output, output_dir=args.output_dir)

    outcome = extractor.extract_and_save(view, fw_type, args.address, interaction)

    if not outcome.succeeded:
        print(f"{Colors.FAIL}Extraction failed: {outcome.error or outcome.state.name}{Colors.END}")
        return 1

    print(
        f"{Colors.GREEN}Saved {outcome.name} "
        f"({format_size(outcome.bytes_written)}) to {outcome.path}{Colors.END}"
    )
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    setup_logging(level=log_level)

    try:
        config = Config.load(args.config)
    except FwExtractError as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.END}")
        sys.exit(2)

    if args.debug:
        config.log_level = "DEBUG"
    setup_logging(level=config.log_level, log_file=config.log_file)

    handlers = {
        "types": cmd_types,
        "info": cmd_info,
        "extract": cmd_extract,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(0)

    try:
        sys.exit(handler(args, config))
    except (ValueError, ExtractionError) as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.END}")
        sys.exit(2)
    except OSError as e:
        print(f"{Colors.FAIL}Error: Cannot read image: {e}{Colors.END}")
        sys.exit(2)


if __name__ == "__main__":
    main()
