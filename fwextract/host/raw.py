"""
Binary view over a flat file image.

Lets the extractor run without a disassembler: the image is mapped at a
load base, and symbols can be supplied by the caller.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..core.models import Endianness
from .base import BinaryViewBase, Symbol


@dataclass(frozen=True)
class RawSymbol(Symbol):
    """Symbol record for a raw image."""

    name: str
    address: int
    size: int = 1

    @property
    def canonical_address(self) -> int:
        return self.address

    @property
    def full_name(self) -> str:
        return self.name

    def contains(self, address: int) -> bool:
        return self.address <= address < self.address + max(self.size, 1)

    @classmethod
    def parse(cls, spec: str) -> "RawSymbol":
        """Parse a ``NAME=ADDR[:SIZE]`` symbol description."""
        name, sep, rest = spec.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid symbol '{spec}' (expected NAME=ADDR[:SIZE])")
        addr_str, _, size_str = rest.partition(":")
        try:
            address = int(addr_str, 0)
            size = int(size_str, 0) if size_str else 1
        except ValueError:
            raise ValueError(f"Invalid address or size in symbol '{spec}'")
        if address < 0 or size < 0:
            raise ValueError(f"Negative address or size in symbol '{spec}'")
        return cls(name=name, address=address, size=size)


class RawBinaryView(BinaryViewBase):
    """
    Flat image mapped at ``base_address``.

    Valid addresses are ``[base_address, base_address + len(data))``.
    """

    def __init__(
        self,
        data: bytes,
        base_address: int = 0,
        endianness: Endianness = Endianness.LITTLE,
        address_size: int = 8,
        symbols: Optional[Iterable[RawSymbol]] = None,
    ):
        if address_size not in (4, 8):
            raise ValueError(f"Unsupported address size: {address_size}")
        self.data = bytes(data)
        self.base_address = base_address
        self.endianness = endianness
        self.address_size = address_size
        self.symbols: List[RawSymbol] = sorted(symbols or [], key=lambda s: s.address)

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs) -> "RawBinaryView":
        with open(path, "rb") as f:
            data = f.read()
        return cls(data, **kwargs)

    @property
    def start(self) -> int:
        return self.base_address

    @property
    def end(self) -> int:
        return self.base_address + len(self.data)

    def read_bytes(self, address: int, length: int) -> bytes:
        if length <= 0 or not self.is_address_valid(address):
            return b""
        start = address - self.base_address
        return self.data[start:start + length]

    def default_endianness(self) -> Endianness:
        return self.endianness

    def address_width(self) -> int:
        return self.address_size

    def symbol_at(self, address: int) -> Optional[RawSymbol]:
        # Innermost (highest starting) symbol wins when ranges nest
        for symbol in reversed(self.symbols):
            if symbol.contains(address):
                return symbol
        return None

    def is_address_valid(self, address: int) -> bool:
        return self.start <= address < self.end
