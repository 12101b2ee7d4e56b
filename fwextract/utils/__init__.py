"""
Utility functions for fwextract.
"""

from typing import Optional


def parse_int(value: str) -> int:
    """Parse a decimal or 0x-prefixed integer, as typed on a command line."""
    value = value.strip().replace("_", "")
    if value.lower().endswith("h") and len(value) > 1:
        # IDA-style hex suffix, e.g. 1000h
        return int(value[:-1], 16)
    return int(value, 0)


def format_size(size_bytes: float) -> str:
    """Format byte size to human readable string."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.2f} {unit}" if unit != "B" else f"{int(size_bytes)} B"
        size_bytes /= 1024
    return f"{size_bytes:.2f} TB"


def format_address(address: Optional[int], width: int = 0) -> str:
    """Uppercase hex address, optionally zero padded to ``width`` bytes."""
    if address is None:
        return "-"
    return f"0x{address:0{width * 2}X}" if width else f"0x{address:X}"
