"""Router source emitter.

Provides the RouterEmitter class that handles the Solidity/Yul text of the
generated router. The generator walks the dispatch tree and calls Emitter
methods, keeping tree traversal apart from syntax.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from routergen.models import format_selector

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

    from routergen.models import Module, SelectorEntry

TAB = "    "


class RouterEmitter:
    """Generates router source lines.

    Handles:
    - Line emission with automatic indentation
    - Module address constants
    - Yul comparison blocks and exhaustive switches
    """

    def __init__(self, stream: TextIO, indent: int = 0) -> None:
        """Initialize the emitter.

        Args:
            stream: Output stream where code is written.
            indent: Initial indentation level, in tabs of four spaces.
        """
        self.stream = stream
        self.indent = indent

    # =========================================================================
    # Core Emission
    # =========================================================================

    def line(self, code: str) -> None:
        """Emit a single line with the current indentation."""
        self.stream.write(TAB * self.indent + code + "\n")

    def indent_inc(self) -> None:
        self.indent += 1

    def indent_dec(self) -> None:
        self.indent -= 1

    # =========================================================================
    # Module Section
    # =========================================================================

    def emit_address_constant(self, module: Module) -> None:
        """Emit `address constant Name = 0x...;` for one module."""
        self.line(f"address constant {module.name} = {module.address};")

    # =========================================================================
    # Dispatch Section
    # =========================================================================

    def open_lt_branch(self, threshold: int) -> None:
        """Open `if lt(sig,threshold) {` and indent its body."""
        self.line(f"if lt(sig,{format_selector(threshold)}) {{")
        self.indent_inc()

    def close_block(self) -> None:
        self.indent_dec()
        self.line("}")

    def emit_switch(self, entries: Sequence[SelectorEntry]) -> None:
        """Emit an exhaustive switch over `entries`.

        Each case sets `result` to the owning module. The default case
        leaves the lookup with `result` unset, i.e. the zero address, and
        the trailing `leave` stops a matched lookup from falling through
        into the next sibling subtree.
        """
        self.line("switch sig")
        for entry in entries:
            self.line(
                f"case {entry.selector_hex} {{ result := {entry.module} }} "
                f"// {entry.module}.{entry.signature}"
            )
        self.line("default { leave }")
        self.line("leave")
