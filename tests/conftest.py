"""
Pytest configuration and fixtures for fwextract tests.
"""

import struct
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fwextract.core.config import Config
from fwextract.core.models import Endianness, FirmwareType, get_layout
from fwextract.host.base import Interaction
from fwextract.host.raw import RawBinaryView, RawSymbol


class RecordingInteraction(Interaction):
    """Interaction that answers prompts from a preset path and records calls."""

    def __init__(self, save_path=None):
        self.save_path = save_path
        self.prompts = []
        self.messages = []

    def prompt_save_path(self, title, default_extension, default_filename):
        self.prompts.append((title, default_extension, default_filename))
        return self.save_path

    def show_message(self, title, body, icon=None):
        self.messages.append((title, body, icon))


def build_image(
    size,
    fw_type=FirmwareType.GC,
    header_base=0,
    data_offset=0,
    data_size=0,
    payload=None,
    payload_at=None,
    endianness=Endianness.LITTLE,
    address_size=8,
    image_base=0,
):
    """Build a flat image with a firmware header at ``header_base``."""
    image = bytearray(size)
    layout = get_layout(fw_type)
    order = "<" if endianness == Endianness.LITTLE else ">"
    ptr = "Q" if address_size == 8 else "I"

    size_at = header_base - image_base + layout.size_field_offset
    offset_at = header_base - image_base + layout.offset_field_offset
    image[size_at:size_at + 4] = struct.pack(order + "I", data_size)
    image[offset_at:offset_at + address_size] = struct.pack(order + ptr, data_offset)

    if payload is not None:
        start = (payload_at if payload_at is not None else data_offset) - image_base
        image[start:start + len(payload)] = payload

    return bytes(image)


@pytest.fixture(scope="session")
def project_root():
    """Return project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(log_level="DEBUG")


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def interaction(temp_dir):
    """Interaction that saves to a file in the temp directory."""
    return RecordingInteraction(save_path=str(temp_dir / "out.bin"))


@pytest.fixture
def gc_view():
    """Little-endian 64-bit image with a GC header at 0x1000 pointing at 4 bytes."""
    data = build_image(
        0x1100,
        fw_type=FirmwareType.GC,
        header_base=0x1000,
        data_offset=0x1040,
        data_size=4,
        payload=b"\xde\xad\xbe\xef",
    )
    return RawBinaryView(data, endianness=Endianness.LITTLE, address_size=8)


@pytest.fixture
def symbol_view():
    """Image with a GC header under the symbol ``_fw_blob`` at 0x2000."""
    data = build_image(
        0x2100,
        fw_type=FirmwareType.GC,
        header_base=0x2000,
        data_offset=0x2080,
        data_size=8,
        payload=b"FIRMWARE",
    )
    return RawBinaryView(
        data,
        symbols=[RawSymbol(name="_fw_blob", address=0x2000, size=0x28)],
    )


@pytest.fixture
def sample_image_file(temp_dir):
    """gc_view's image written to disk for CLI tests."""
    path = temp_dir / "driver.bin"
    path.write_bytes(
        build_image(
            0x1100,
            header_base=0x1000,
            data_offset=0x1040,
            data_size=4,
            payload=b"\xde\xad\xbe\xef",
        )
    )
    return path


# Markers for test categories
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "scenario: end-to-end extraction scenarios")
