"""
Data models for fwextract.

Defines the firmware type tags, the per-type header layout table and the
transient records produced during a single extraction.
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, List, Optional


class FirmwareType(Enum):
    """Firmware families with a known header layout."""

    GC = "gc"
    SDMA = "sdma"
    CATALYST = "catalyst"

    @property
    def label(self) -> str:
        """Human readable name used in command titles."""
        labels = {
            FirmwareType.GC: "GC",
            FirmwareType.SDMA: "SDMA",
            FirmwareType.CATALYST: "Catalyst",
        }
        return labels[self]

    @classmethod
    def from_string(cls, type_str: str) -> "FirmwareType":
        """Parse firmware type from string."""
        try:
            return cls(type_str.strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown firmware type '{type_str}' (expected one of: {valid})")

    def __lt__(self, other):
        if not isinstance(other, FirmwareType):
            return NotImplemented
        order = list(FirmwareType)
        return order.index(self) < order.index(other)


class Endianness(Enum):
    """Byte order."""

    LITTLE = "little"
    BIG = "big"


class MessageIcon(Enum):
    """Severity of a message shown to the user."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ExtractionState(Enum):
    """States of a single extract-and-save invocation."""

    IDLE = auto()
    RESOLVING = auto()
    VALIDATED = auto()
    REJECTED = auto()
    CHOOSING_PATH = auto()
    ABORTED = auto()
    WRITTEN = auto()
    WRITE_FAILED = auto()


@dataclass(frozen=True)
class FirmwareLayout:
    """Byte displacements of the header fields from the header base."""

    size_field_offset: int
    offset_field_offset: int


FIRMWARE_LAYOUTS: Dict[FirmwareType, FirmwareLayout] = {
    FirmwareType.GC: FirmwareLayout(size_field_offset=0xC, offset_field_offset=0x20),
    FirmwareType.SDMA: FirmwareLayout(size_field_offset=0x8, offset_field_offset=0x10),
    FirmwareType.CATALYST: FirmwareLayout(size_field_offset=0xC, offset_field_offset=0x20),
}


def get_layout(fw_type: FirmwareType) -> FirmwareLayout:
    """Return the header layout for a firmware type."""
    return FIRMWARE_LAYOUTS[fw_type]


@dataclass(frozen=True)
class FirmwareHeader:
    """Header decoded from the binary for one invocation."""

    base_address: int
    data_offset: int
    data_size: int

    @property
    def data_end(self) -> int:
        return self.data_offset + self.data_size

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "base_address": self.base_address,
            "data_offset": self.data_offset,
            "data_size": self.data_size,
            "data_end": self.data_end,
        }


@dataclass(frozen=True)
class ResolvedAddress:
    """Header base and display name derived from a raw address."""

    display_name: str
    header_base: int
    symbol_found: bool = False


@dataclass
class ExtractedFirmware:
    """Firmware bytes copied out of the binary, ready to be saved."""

    suggested_name: str
    data: bytes
    extension: str = "bin"

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def suggested_filename(self) -> str:
        return f"{self.suggested_name}.{self.extension}"


@dataclass
class ExtractionOutcome:
    """Terminal state and details of an extract-and-save invocation."""

    state: ExtractionState = ExtractionState.IDLE
    name: Optional[str] = None
    path: Optional[str] = None
    bytes_written: int = 0
    error: Optional[str] = None
    history: List[ExtractionState] = field(default_factory=list)

    def advance(self, state: ExtractionState):
        """Move to ``state`` and record the transition."""
        self.state = state
        self.history.append(state)

    def finish(self) -> "ExtractionOutcome":
        """Record the return to idle; ``state`` keeps the terminal state."""
        self.history.append(ExtractionState.IDLE)
        return self

    @property
    def succeeded(self) -> bool:
        return self.state == ExtractionState.WRITTEN

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "state": self.state.name.lower(),
            "name": self.name,
            "path": self.path,
            "bytes_written": self.bytes_written,
            "error": self.error,
            "history": [s.name.lower() for s in self.history],
        }
