"""
Host commands for fwextract.
"""

from .extract_command import CommandRegistry, ExtractorCommand

__all__ = ["CommandRegistry", "ExtractorCommand"]
