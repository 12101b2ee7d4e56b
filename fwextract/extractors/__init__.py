"""
Firmware extraction modules.
"""

from .firmware_extractor import FirmwareExtractor
from .header_reader import HeaderReader, decode_uint
from .symbol_resolver import resolve, strip_leading_underscore

__all__ = [
    "FirmwareExtractor",
    "HeaderReader",
    "decode_uint",
    "resolve",
    "strip_leading_underscore",
]
