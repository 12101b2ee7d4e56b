"""
Firmware extraction module.

Locates a firmware header at an address of a loaded binary, validates
the range it points to against the binary's mapped space, copies the
bytes out and saves them to a user-chosen file.
"""

from typing import Optional, Tuple

from ..core.config import Config
from ..core.exceptions import (
    ExtractionError,
    FirmwareOutOfRangeError,
    FirmwareReadError,
    FirmwareWriteError,
    HeaderNotFoundError,
    format_exception_chain,
)
from ..core.logger import get_command_logger, get_logger
from ..core.models import (
    ExtractedFirmware,
    ExtractionOutcome,
    ExtractionState,
    FirmwareHeader,
    FirmwareType,
    MessageIcon,
    ResolvedAddress,
)
from ..host.base import BinaryViewBase, Interaction
from .header_reader import HeaderReader
from .symbol_resolver import resolve

logger = get_logger(__name__)


class FirmwareExtractor:
    """
    Extract embedded firmware blobs from a binary view.

    Holds configuration only; every call re-reads the view, so nothing
    decoded is carried over between invocations.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def resolve(self, view: BinaryViewBase, address: int) -> ResolvedAddress:
        return resolve(view, address, self.config.extractor.fallback_prefix)

    def read_header(
        self, view: BinaryViewBase, fw_type: FirmwareType, address: int
    ) -> Tuple[ResolvedAddress, Optional[FirmwareHeader]]:
        """Resolve the address and decode the header at the resolved base."""
        resolved = self.resolve(view, address)
        header = HeaderReader(view, fw_type).read_header(resolved.header_base)
        return resolved, header

    @staticmethod
    def range_is_mapped(view: BinaryViewBase, header: FirmwareHeader) -> bool:
        """Both ends of the data range must be addressable."""
        # hosts truncate addresses to their native width; a wrapped end could look valid
        max_address = (1 << (8 * view.address_width())) - 1
        if header.data_end > max_address:
            return False
        return view.is_address_valid(header.data_offset) and view.is_address_valid(
            header.data_end
        )

    def inspect(
        self, view: BinaryViewBase, fw_type: FirmwareType, address: int
    ) -> Optional[Tuple[ResolvedAddress, FirmwareHeader]]:
        """Return the resolved address and validated header, or None."""
        resolved, header = self.read_header(view, fw_type, address)
        if header is None or not self.range_is_mapped(view, header):
            return None
        return resolved, header

    def is_extractable(self, view: BinaryViewBase, fw_type: FirmwareType, address: int) -> bool:
        """
        Whether a firmware of ``fw_type`` can be extracted at ``address``.

        Called by the host for every candidate address to decide if the
        command is offered, so it never raises and has no side effects.
        """
        try:
            return self.inspect(view, fw_type, address) is not None
        except Exception as e:
            logger.debug(f"Header probe at 0x{address:X} failed: {format_exception_chain(e)}")
            return False

    def extract(
        self, view: BinaryViewBase, fw_type: FirmwareType, address: int
    ) -> ExtractedFirmware:
        """
        Copy the firmware bytes referenced by the header at ``address``.

        Raises:
            HeaderNotFoundError: header fields could not be decoded
            FirmwareOutOfRangeError: data range is not fully mapped
            FirmwareReadError: host returned a short read
        """
        resolved, header = self.read_header(view, fw_type, address)
        details = {"type": fw_type.label, "base": f"0x{resolved.header_base:X}"}

        if header is None:
            raise HeaderNotFoundError(
                f"No {fw_type.label} firmware header at 0x{address:X}", details=details
            )

        if not self.range_is_mapped(view, header):
            raise FirmwareOutOfRangeError(
                f"{fw_type.label} firmware range 0x{header.data_offset:X}-0x{header.data_end:X} "
                "is outside the binary",
                details=details,
            )

        data = view.read_bytes(header.data_offset, header.data_size)
        if len(data) != header.data_size:
            raise FirmwareReadError(
                f"Read {len(data)} of {header.data_size} bytes at 0x{header.data_offset:X}",
                details=details,
            )

        logger.debug(
            f"{fw_type.label} firmware '{resolved.display_name}': "
            f"{header.data_size} bytes at 0x{header.data_offset:X}"
        )

        return ExtractedFirmware(
            suggested_name=resolved.display_name,
            data=data,
            extension=self.config.extractor.default_extension,
        )

    def save(self, firmware: ExtractedFirmware, path: str) -> int:
        """Write firmware bytes to ``path``. Returns the byte count."""
        try:
            with open(path, "wb") as f:
                f.write(firmware.data)
        except OSError as e:
            raise FirmwareWriteError(f"File was not saved: {e}") from e

        logger.info(f"Saved {firmware.size} bytes of '{firmware.suggested_name}' to {path}")
        return firmware.size

    def extract_and_save(
        self,
        view: BinaryViewBase,
        fw_type: FirmwareType,
        address: int,
        interaction: Interaction,
    ) -> ExtractionOutcome:
        """
        Run one extraction command end to end.

        Failures are reported through ``interaction`` and recorded in the
        returned outcome; nothing is raised to the caller.
        """
        log = get_command_logger(fw_type.label, address)
        notify = self.config.notify
        outcome = ExtractionOutcome()
        outcome.advance(ExtractionState.RESOLVING)

        try:
            firmware = self.extract(view, fw_type, address)
        except ExtractionError as e:
            outcome.advance(ExtractionState.REJECTED)
            outcome.error = e.message
            log.info(f"Rejected: {e}")
            if notify.missing_header:
                interaction.show_message("No firmware found", e.message, MessageIcon.WARNING)
            return outcome.finish()
        except Exception as e:
            outcome.advance(ExtractionState.REJECTED)
            outcome.error = str(e)
            log.error(f"Host error while reading firmware: {format_exception_chain(e)}")
            interaction.show_message("Whoops", f"Could not read firmware: {e}", MessageIcon.ERROR)
            return outcome.finish()

        outcome.advance(ExtractionState.VALIDATED)
        outcome.name = firmware.suggested_name

        outcome.advance(ExtractionState.CHOOSING_PATH)
        path = interaction.prompt_save_path(
            f"Save {firmware.suggested_name}",
            firmware.extension,
            firmware.suggested_filename,
        )
        if not path:
            outcome.advance(ExtractionState.ABORTED)
            log.info("Save cancelled")
            if notify.cancelled:
                interaction.show_message("Cancelled", "Firmware was not saved.", MessageIcon.INFO)
            return outcome.finish()

        outcome.path = str(path)
        try:
            outcome.bytes_written = self.save(firmware, outcome.path)
        except FirmwareWriteError as e:
            outcome.advance(ExtractionState.WRITE_FAILED)
            outcome.error = e.message
            log.error(format_exception_chain(e))
            interaction.show_message("Whoops", e.message, MessageIcon.ERROR)
            return outcome.finish()

        outcome.advance(ExtractionState.WRITTEN)
        if notify.success:
            interaction.show_message(
                "Firmware saved",
                f"Saved {outcome.bytes_written} bytes to {outcome.path}",
                MessageIcon.INFO,
            )
        return outcome.finish()
