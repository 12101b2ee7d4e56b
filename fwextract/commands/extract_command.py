"""
Address commands offered to the disassembler host.

Each firmware type gets one command. The host calls ``is_valid`` to
decide whether to offer it at an address and ``run`` when the user
picks it.
"""

from typing import Callable, Dict, List, Optional

from ..core.config import Config
from ..core.logger import get_logger
from ..core.models import ExtractionOutcome, FirmwareType
from ..extractors.firmware_extractor import FirmwareExtractor
from ..host.base import BinaryViewBase, Interaction

logger = get_logger(__name__)


class ExtractorCommand:
    """Extract one firmware type at an address."""

    def __init__(self, fw_type: FirmwareType, extractor: FirmwareExtractor, menu_prefix: str = ""):
        self.fw_type = fw_type
        self.extractor = extractor
        self.menu_prefix = menu_prefix

    @property
    def name(self) -> str:
        return f"{self.menu_prefix}Extract {self.fw_type.label} firmware"

    @property
    def description(self) -> str:
        return f"Save the {self.fw_type.label} firmware referenced by the header at this address"

    def is_valid(self, view: BinaryViewBase, address: int) -> bool:
        return self.extractor.is_extractable(view, self.fw_type, address)

    def run(
        self, view: BinaryViewBase, address: int, interaction: Interaction
    ) -> ExtractionOutcome:
        return self.extractor.extract_and_save(view, self.fw_type, address, interaction)

    def __repr__(self):
        return f"<ExtractorCommand {self.name!r}>"


# (name, description, action(view, address), is_valid(view, address))
RegisterCallback = Callable[[str, str, Callable, Callable], None]


class CommandRegistry:
    """Registry of the extraction commands enabled by configuration."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.extractor = FirmwareExtractor(self.config)
        self._commands: Dict[FirmwareType, ExtractorCommand] = {}

        for fw_type in self.config.extractor.firmware_types():
            self.add(fw_type)

    def add(self, fw_type: FirmwareType) -> ExtractorCommand:
        """Create the command for ``fw_type`` if not already present."""
        if fw_type not in self._commands:
            self._commands[fw_type] = ExtractorCommand(
                fw_type, self.extractor, self.config.extractor.menu_prefix
            )
        return self._commands[fw_type]

    def get(self, fw_type: FirmwareType) -> Optional[ExtractorCommand]:
        return self._commands.get(fw_type)

    def list_commands(self) -> List[ExtractorCommand]:
        """Commands in firmware type order."""
        return [self._commands[t] for t in sorted(self._commands)]

    def register_with(self, register: RegisterCallback, interaction: Interaction, wrap_view=None):
        """
        Hand every command to a host registration function.

        ``wrap_view`` converts the host's native view object into a
        ``BinaryViewBase`` before the command sees it.
        """
        wrap = wrap_view or (lambda view: view)

        for command in self.list_commands():

            def action(view, address, command=command):
                command.run(wrap(view), address, interaction)

            def is_valid(view, address, command=command):
                return command.is_valid(wrap(view), address)

            register(command.name, command.description, action, is_valid)
            logger.debug(f"Registered command: {command.name}")
