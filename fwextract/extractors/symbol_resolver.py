"""
Map a raw address to a header base and an output name.
"""

from ..core.models import ResolvedAddress
from ..host.base import BinaryViewBase, Symbol

DEFAULT_FALLBACK_PREFIX = "data_"


def symbol_to_name(symbol: Symbol) -> str:
    """Symbol name with a single leading underscore removed."""
    return strip_leading_underscore(symbol.full_name)


def strip_leading_underscore(name: str) -> str:
    """Remove exactly one leading underscore, if present."""
    return name[1:] if name.startswith("_") else name


def fallback_name(address: int, prefix: str = DEFAULT_FALLBACK_PREFIX) -> str:
    """Name for an address with no symbol, e.g. ``data_1A2B``."""
    return f"{prefix}{address:X}"


def resolve(
    view: BinaryViewBase, raw_address: int, fallback_prefix: str = DEFAULT_FALLBACK_PREFIX
) -> ResolvedAddress:
    """
    Resolve ``raw_address`` through the view's symbol table.

    An enclosing symbol gives its start address as the header base and
    its name as the display name. Otherwise the raw address is used as
    is, named ``data_<HEX>``.
    """
    symbol = view.symbol_at(raw_address)
    if symbol is None:
        return ResolvedAddress(
            display_name=fallback_name(raw_address, fallback_prefix),
            header_base=raw_address,
        )
    return ResolvedAddress(
        display_name=symbol_to_name(symbol),
        header_base=symbol.canonical_address,
        symbol_found=True,
    )
