"""Core value types: modules and selector entries."""

from __future__ import annotations

import re
from dataclasses import dataclass

from eth_utils import is_address, to_checksum_address

from routergen.errors import ConfigurationError

SELECTOR_BITS = 32
MAX_SELECTOR = (1 << SELECTOR_BITS) - 1

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_HEX_SELECTOR_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]{1,8}$")


def parse_selector(value: int | str) -> int:
    """Parse a selector given as an int or a hex string (with or without 0x).

    Raises ValueError if the value is not a 4-byte unsigned integer.
    """
    if isinstance(value, bool):
        msg = f"Invalid selector: {value!r}"
        raise ValueError(msg)
    if isinstance(value, int):
        if not 0 <= value <= MAX_SELECTOR:
            msg = f"Selector out of range: {value:#x}"
            raise ValueError(msg)
        return value
    if isinstance(value, str) and _HEX_SELECTOR_RE.match(value.strip()):
        return int(value.strip(), 16)
    msg = f"Invalid selector: {value!r}"
    raise ValueError(msg)


def format_selector(selector: int) -> str:
    """Canonical form: lowercase, 0x-prefixed, 8 hex digits."""
    return f"0x{selector:08x}"


@dataclass(frozen=True)
class Module:
    """A deployed module the router forwards calls to.

    Attributes:
        name: Contract name, also used as the constant name in the router.
        address: EIP-55 checksummed deployment address.
    """

    name: str
    address: str

    @classmethod
    def create(cls, name: str, address: str) -> Module:
        """Validate and normalize a module name/address pair."""
        if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
            msg = f"Invalid module name: {name!r}"
            raise ConfigurationError(msg)
        if not isinstance(address, str) or not is_address(address):
            msg = f"Invalid address for module {name}: {address!r}"
            raise ConfigurationError(msg)
        return cls(name=name, address=to_checksum_address(address))


@dataclass(frozen=True)
class SelectorEntry:
    """One exposed function of one module.

    Attributes:
        selector: Selector as an unsigned 32-bit integer.
        module: Name of the module that implements the function.
        signature: Human-readable signature, e.g. "balanceOf(address)".
    """

    selector: int
    module: str
    signature: str

    @property
    def selector_hex(self) -> str:
        return format_selector(self.selector)
