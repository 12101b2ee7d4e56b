"""
Core modules for fwextract.
"""

from .config import Config
from .exceptions import (
    ExtractionError,
    FirmwareOutOfRangeError,
    FirmwareReadError,
    FirmwareWriteError,
    FwExtractError,
    HeaderNotFoundError,
)
from .logger import get_logger, setup_logging
from .models import (
    FIRMWARE_LAYOUTS,
    Endianness,
    ExtractedFirmware,
    ExtractionOutcome,
    ExtractionState,
    FirmwareHeader,
    FirmwareLayout,
    FirmwareType,
    MessageIcon,
    ResolvedAddress,
    get_layout,
)

__all__ = [
    "Config",
    "get_logger",
    "setup_logging",
    "FIRMWARE_LAYOUTS",
    "Endianness",
    "ExtractedFirmware",
    "ExtractionOutcome",
    "ExtractionState",
    "FirmwareHeader",
    "FirmwareLayout",
    "FirmwareType",
    "MessageIcon",
    "ResolvedAddress",
    "get_layout",
    "FwExtractError",
    "ExtractionError",
    "HeaderNotFoundError",
    "FirmwareOutOfRangeError",
    "FirmwareReadError",
    "FirmwareWriteError",
]
