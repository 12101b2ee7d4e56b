"""
Firmware header decoding.

Reads the size and data-offset fields of a firmware header out of a
binary view. Byte order and pointer width come from the view on every
call, so the same reader works on 32/64-bit and LE/BE targets.
"""

import struct
from typing import Optional

from ..core.logger import get_logger
from ..core.models import Endianness, FirmwareHeader, FirmwareLayout, FirmwareType, get_layout
from ..host.base import BinaryViewBase

logger = get_logger(__name__)

SIZE_FIELD_WIDTH = 4

# struct codes by field width
_WIDTH_CODES = {4: "I", 8: "Q"}
_ORDER_PREFIX = {Endianness.LITTLE: "<", Endianness.BIG: ">"}


def decode_uint(data: bytes, width: int, endianness: Endianness) -> Optional[int]:
    """Decode an unsigned integer of exactly ``width`` bytes."""
    code = _WIDTH_CODES.get(width)
    if code is None or len(data) != width:
        return None
    return struct.unpack(_ORDER_PREFIX[endianness] + code, data)[0]


class HeaderReader:
    """Decode ``(data_offset, data_size)`` pairs for one firmware type."""

    def __init__(self, view: BinaryViewBase, fw_type: FirmwareType):
        self.view = view
        self.fw_type = fw_type
        self.layout: FirmwareLayout = get_layout(fw_type)

    def _read_field(self, address: int, width: int) -> Optional[int]:
        data = self.view.read_bytes(address, width)
        return decode_uint(data, width, self.view.default_endianness())

    def read_size(self, base: int) -> Optional[int]:
        """Read the 32-bit size field."""
        return self._read_field(base + self.layout.size_field_offset, SIZE_FIELD_WIDTH)

    def read_offset(self, base: int) -> Optional[int]:
        """Read the pointer-sized data offset field."""
        return self._read_field(
            base + self.layout.offset_field_offset, self.view.address_width()
        )

    def read_header(self, base: int) -> Optional[FirmwareHeader]:
        """Read both fields; None if either cannot be decoded."""
        data_offset = self.read_offset(base)
        if data_offset is None:
            logger.debug(f"{self.fw_type.label}: no offset field at 0x{base:X}")
            return None
        data_size = self.read_size(base)
        if data_size is None:
            logger.debug(f"{self.fw_type.label}: no size field at 0x{base:X}")
            return None
        return FirmwareHeader(base_address=base, data_offset=data_offset, data_size=data_size)
