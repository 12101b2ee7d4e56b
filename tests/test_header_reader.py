"""
Tests for firmware header decoding.
"""

import struct

import pytest

from conftest import build_image
from fwextract.core.models import Endianness, FirmwareType
from fwextract.extractors.header_reader import HeaderReader, decode_uint
from fwextract.host.raw import RawBinaryView


class TestDecodeUint:
    def test_little_endian(self):
        assert decode_uint(b"\x04\x00\x00\x00", 4, Endianness.LITTLE) == 4
        assert decode_uint(b"\x20\x10\x00\x00\x00\x00\x00\x00", 8, Endianness.LITTLE) == 0x1020

    def test_big_endian(self):
        assert decode_uint(b"\x00\x00\x00\x04", 4, Endianness.BIG) == 4
        assert decode_uint(b"\x00\x00\x00\x00\x00\x00\x10\x20", 8, Endianness.BIG) == 0x1020

    def test_short_data(self):
        assert decode_uint(b"\x01\x02\x03", 4, Endianness.LITTLE) is None
        assert decode_uint(b"", 8, Endianness.BIG) is None

    def test_unsupported_width(self):
        assert decode_uint(b"\x01\x02", 2, Endianness.LITTLE) is None


class TestHeaderReader:
    @pytest.mark.parametrize("fw_type", list(FirmwareType))
    @pytest.mark.parametrize("endianness", list(Endianness))
    @pytest.mark.parametrize("address_size", [4, 8])
    def test_decodes_written_fields(self, fw_type, endianness, address_size):
        data = build_image(
            0x200,
            fw_type=fw_type,
            header_base=0x100,
            data_offset=0x89ABCDEF,
            data_size=0x12345678,
            endianness=endianness,
            address_size=address_size,
        )
        view = RawBinaryView(data, endianness=endianness, address_size=address_size)

        header = HeaderReader(view, fw_type).read_header(0x100)

        assert header is not None
        assert header.base_address == 0x100
        assert header.data_offset == 0x89ABCDEF
        assert header.data_size == 0x12345678

    def test_64bit_offset_uses_full_width(self):
        data = build_image(0x40, header_base=0, data_offset=0xFFFF800000001000, data_size=1)
        view = RawBinaryView(data, address_size=8)

        assert HeaderReader(view, FirmwareType.GC).read_offset(0) == 0xFFFF800000001000

    def test_32bit_offset_zero_extended(self):
        data = build_image(0x40, header_base=0, data_offset=0xFFFFFFFF, address_size=4)
        view = RawBinaryView(data, address_size=4)

        assert HeaderReader(view, FirmwareType.GC).read_offset(0) == 0xFFFFFFFF

    def test_endianness_queried_from_view(self):
        data = bytearray(0x40)
        data[0xC:0x10] = struct.pack(">I", 0x10)
        data[0x20:0x28] = struct.pack(">Q", 0x30)

        be = HeaderReader(RawBinaryView(bytes(data), endianness=Endianness.BIG), FirmwareType.GC)
        le = HeaderReader(RawBinaryView(bytes(data), endianness=Endianness.LITTLE), FirmwareType.GC)

        assert be.read_size(0) == 0x10
        assert le.read_size(0) == 0x10000000

    def test_sdma_layout(self):
        data = bytearray(0x20)
        data[0x8:0xC] = struct.pack("<I", 7)
        data[0x10:0x18] = struct.pack("<Q", 0x18)
        reader = HeaderReader(RawBinaryView(bytes(data)), FirmwareType.SDMA)

        header = reader.read_header(0)
        assert (header.data_offset, header.data_size) == (0x18, 7)

    def test_truncated_offset_field(self):
        # GC offset field needs bytes 0x20..0x28; image stops at 0x24
        view = RawBinaryView(bytes(0x24))
        reader = HeaderReader(view, FirmwareType.GC)

        assert reader.read_size(0) == 0
        assert reader.read_offset(0) is None
        assert reader.read_header(0) is None

    def test_header_outside_image(self):
        view = RawBinaryView(bytes(0x40), base_address=0x1000)
        reader = HeaderReader(view, FirmwareType.SDMA)

        assert reader.read_size(0x0) is None
        assert reader.read_header(0x0) is None
        assert reader.read_header(0x5000) is None
