"""
Host interfaces consumed by the extractor.

The disassembler host owns the binary image, its symbol table and the
user interface. Adapters for a concrete host implement these classes.
"""

import abc
from typing import Optional

from ..core.models import Endianness, MessageIcon


class Symbol(abc.ABC):
    """A named, addressed entity in the host's analysis database."""

    @property
    @abc.abstractmethod
    def canonical_address(self) -> int:
        """Lowest address of the symbol."""
        pass

    @property
    @abc.abstractmethod
    def full_name(self) -> str:
        """Fully qualified symbol name."""
        pass

    def __repr__(self):
        return f"<{type(self).__name__} {self.full_name!r} @ 0x{self.canonical_address:X}>"


class BinaryViewBase(abc.ABC):
    """
    Read-only view of a loaded binary.

    Subclasses must implement:
    - read_bytes(): may return fewer bytes than requested
    - default_endianness(), address_width()
    - symbol_at(): symbol whose range contains the address, or None
    - is_address_valid(): whether the address is backed by the image
    """

    @abc.abstractmethod
    def read_bytes(self, address: int, length: int) -> bytes:
        pass

    @abc.abstractmethod
    def default_endianness(self) -> Endianness:
        pass

    @abc.abstractmethod
    def address_width(self) -> int:
        pass

    @abc.abstractmethod
    def symbol_at(self, address: int) -> Optional[Symbol]:
        pass

    @abc.abstractmethod
    def is_address_valid(self, address: int) -> bool:
        pass


class Interaction(abc.ABC):
    """Modal prompts offered by the host."""

    @abc.abstractmethod
    def prompt_save_path(
        self, title: str, default_extension: str, default_filename: str
    ) -> Optional[str]:
        """Ask for a destination path. Returns None if the user cancels."""
        pass

    @abc.abstractmethod
    def show_message(self, title: str, body: str, icon: MessageIcon = MessageIcon.INFO):
        pass
