"""
Disassembler host interfaces and adapters.

The Binary Ninja adapter lives in ``fwextract.host.binja`` and is only
importable inside the host application.
"""

from .base import BinaryViewBase, Interaction, Symbol
from .console import ConsoleInteraction
from .raw import RawBinaryView, RawSymbol

__all__ = [
    "BinaryViewBase",
    "Interaction",
    "Symbol",
    "ConsoleInteraction",
    "RawBinaryView",
    "RawSymbol",
]
