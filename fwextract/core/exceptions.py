"""
Custom exceptions for fwextract.

Defines a hierarchy of exceptions for the error conditions met while
locating, validating and saving embedded firmware blobs.
"""


class FwExtractError(Exception):
    """Base exception for all fwextract errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(FwExtractError):
    """Base class for firmware extraction errors."""
    pass


class HeaderNotFoundError(ExtractionError):
    """Firmware header fields could not be decoded at the address."""
    pass


class FirmwareOutOfRangeError(ExtractionError):
    """Decoded firmware range lies outside the binary's mapped space."""
    pass


class FirmwareReadError(ExtractionError):
    """Host returned fewer bytes than the header declared."""
    pass


class FirmwareWriteError(ExtractionError):
    """Extracted firmware could not be written to disk."""
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(FwExtractError):
    """Base class for configuration errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Configuration file or value is invalid."""
    pass


# ============================================================================
# Host Errors
# ============================================================================

class HostError(FwExtractError):
    """Base class for disassembler host errors."""
    pass


class HostUnavailableError(HostError):
    """Host API could not be imported."""
    pass


# ============================================================================
# Helper Functions
# ============================================================================

def format_exception_chain(exc: Exception) -> str:
    """Format exception chain for logging."""
    chain = []
    current = exc
    while current:
        chain.append(f"{type(current).__name__}: {current}")
        current = current.__cause__
    return " -> ".join(chain)
