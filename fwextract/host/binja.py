"""
Binary Ninja adapter.

Wraps ``binaryninja.BinaryView`` and the interaction API behind the
host interfaces and registers the extraction commands. The
``binaryninja`` module ships with the application; it is imported only
when dialogs are shown or commands are registered, so the view adapter
works on any object with the ``BinaryView`` surface.
"""

from typing import Optional

from ..core.exceptions import ConfigurationError, HostUnavailableError
from ..core.logger import get_logger, setup_logging
from ..core.models import Endianness, MessageIcon
from .base import BinaryViewBase, Interaction, Symbol

logger = get_logger(__name__)


def _require_binaryninja():
    try:
        import binaryninja
    except ImportError as e:
        raise HostUnavailableError(
            "Binary Ninja API is only available inside Binary Ninja"
        ) from e
    return binaryninja


class BinjaSymbol(Symbol):
    def __init__(self, symbol: "binaryninja.Symbol"):
        self._symbol = symbol

    @property
    def canonical_address(self) -> int:
        return self._symbol.address

    @property
    def full_name(self) -> str:
        return self._symbol.full_name


class BinjaView(BinaryViewBase):
    """Read-only adapter over a live ``BinaryView``."""

    def __init__(self, bv: "binaryninja.BinaryView"):
        self.bv = bv

    def read_bytes(self, address: int, length: int) -> bytes:
        return self.bv.read(address, length)

    def default_endianness(self) -> Endianness:
        if getattr(self.bv.endianness, "name", None) == "BigEndian":
            return Endianness.BIG
        return Endianness.LITTLE

    def address_width(self) -> int:
        return self.bv.address_size

    def symbol_at(self, address: int) -> Optional[BinjaSymbol]:
        symbol = self.bv.get_symbol_at(address)
        if symbol is None:
            symbol = self._containing_data_var_symbol(address)
        if symbol is None:
            return None
        return BinjaSymbol(symbol)

    def _containing_data_var_symbol(self, address: int):
        # get_data_var_at only matches a variable starting exactly at the address
        start = self.bv.get_previous_data_var_start_before(address + 1)
        if start is None or start > address:
            return None
        var = self.bv.get_data_var_at(start)
        if var is None or not var.address <= address < var.address + max(var.type.width, 1):
            return None
        return var.symbol

    def is_address_valid(self, address: int) -> bool:
        return self.bv.is_valid_offset(address)


class BinjaInteraction(Interaction):
    def prompt_save_path(
        self, title: str, default_extension: str, default_filename: str
    ) -> Optional[str]:
        _require_binaryninja()
        from binaryninja.interaction import get_save_filename_input

        path = get_save_filename_input(title, default_extension, default_filename)
        if isinstance(path, bytes):
            path = path.decode("utf-8")
        return path or None

    def show_message(self, title: str, body: str, icon: MessageIcon = MessageIcon.INFO):
        _require_binaryninja()
        from binaryninja.enums import MessageBoxButtonSet, MessageBoxIcon
        from binaryninja.interaction import show_message_box

        icons = {
            MessageIcon.INFO: MessageBoxIcon.InformationIcon,
            MessageIcon.WARNING: MessageBoxIcon.WarningIcon,
            MessageIcon.ERROR: MessageBoxIcon.ErrorIcon,
        }
        show_message_box(title, body, MessageBoxButtonSet.OKButtonSet, icons[icon])


def register_plugin(config=None):
    """Register one address command per enabled firmware type."""
    binaryninja = _require_binaryninja()
    from ..commands import CommandRegistry
    from ..core.config import Config

    if config is None:
        try:
            config = Config.load()
        except ConfigurationError as e:
            logger.error(f"{e}; using default configuration")
            config = Config()
        errors = config.validate()
        if errors:
            logger.error(f"Invalid configuration ({'; '.join(errors)}); using defaults")
            config = Config()
        setup_logging(level=config.log_level, log_file=config.log_file, use_colors=False)

    registry = CommandRegistry(config)
    registry.register_with(
        binaryninja.PluginCommand.register_for_address,
        BinjaInteraction(),
        wrap_view=BinjaView,
    )
    logger.info(f"Registered {len(registry.list_commands())} firmware extraction commands")
    return registry
