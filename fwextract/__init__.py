"""
fwextract - Embedded GPU firmware extractor for disassembler hosts

Extracts GC and SDMA microcode, and AMD Catalyst driver firmware, from
binaries loaded in a disassembler. A firmware header at the selected
address (or at the start of the symbol containing it) gives the data
offset and size; the referenced bytes are validated against the
binary's mapped range and saved to a file.

Features:
- Per-type header layouts (GC, SDMA, Catalyst)
- Endian and pointer-width aware header decoding
- Symbol-based naming of extracted blobs
- Binary Ninja address commands
- Headless command line over flat images

License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

import sys

from fwextract.core.config import Config
from fwextract.core.logger import get_logger
from fwextract.extractors.firmware_extractor import FirmwareExtractor

__all__ = [
    "Config",
    "FirmwareExtractor",
    "get_logger",
    "__version__",
]

# Loaded as a Binary Ninja plugin: register the address commands
if "binaryninja" in sys.modules:
    from fwextract.host.binja import register_plugin

    register_plugin()
