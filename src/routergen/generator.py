"""Router generation - simple functional design.

Pipeline: collect selectors -> sort -> build tree -> render. Every step is
pure except the selector source, which may read files.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from io import StringIO
from typing import Any

from routergen.emitter import RouterEmitter
from routergen.errors import ConfigurationError, ResolutionError
from routergen.models import Module, SelectorEntry
from routergen.selectors import collect_selectors, sort_selectors
from routergen.sources import MappingSelectorSource, SelectorSource
from routergen.templates import (
    MODULES_INDENT,
    MODULES_PLACEHOLDER,
    NETWORK_PLACEHOLDER,
    PLACEHOLDERS,
    ROUTER_TEMPLATE,
    SELECTORS_INDENT,
    SELECTORS_PLACEHOLDER,
)
from routergen.tree import (
    DEFAULT_MAX_LEAF_SIZE,
    Branch,
    DispatchNode,
    build_tree,
    check_max_leaf_size,
    describe_tree,
    min_selector,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Output of one generation run.

    Attributes:
        source: Rendered router source.
        modules: Modules in declaration order.
        entries: All selectors, ascending.
        tree: Dispatch tree the source was rendered from.
    """

    source: str
    modules: tuple[Module, ...]
    entries: tuple[SelectorEntry, ...]
    tree: DispatchNode


# =============================================================================
# Input Validation
# =============================================================================


def check_template(template: str) -> None:
    """Ensure the template carries all three placeholders."""
    if not isinstance(template, str) or not template.strip():
        msg = "Router template is empty"
        raise ConfigurationError(msg)
    missing = [token for token in PLACEHOLDERS if token not in template]
    if missing:
        msg = f"Router template is missing placeholder(s): {', '.join(missing)}"
        raise ConfigurationError(msg)


def coerce_modules(modules: Sequence[Any]) -> list[Module]:
    """Accept Module objects or (name, address) pairs, preserving order."""
    result: list[Module] = []
    seen: set[str] = set()
    for item in modules:
        if isinstance(item, Module):
            module = Module.create(item.name, item.address)
        elif isinstance(item, Mapping):
            module = Module.create(item.get("name"), item.get("address"))
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            module = Module.create(item[0], item[1])
        else:
            msg = f"Cannot interpret module declaration: {item!r}"
            raise ConfigurationError(msg)
        if module.name in seen:
            msg = f"Module {module.name} is declared more than once"
            raise ConfigurationError(msg)
        seen.add(module.name)
        result.append(module)
    return result


# =============================================================================
# Rendering
# =============================================================================


def substitute(template: str, values: Mapping[str, str]) -> str:
    """Replace the first occurrence of each placeholder.

    Positions are located in the original template, so text substituted for
    one placeholder is never scanned for another.
    """
    positions = sorted((template.index(token), token) for token in values)
    parts: list[str] = []
    cursor = 0
    for index, token in positions:
        parts.append(template[cursor:index])
        parts.append(values[token])
        cursor = index + len(token)
    parts.append(template[cursor:])
    return "".join(parts)


def render_modules(modules: Sequence[Module], indent: int = MODULES_INDENT) -> str:
    """Render one address constant per module, in the given order."""
    output = StringIO()
    emitter = RouterEmitter(output, indent=indent)
    for module in modules:
        emitter.emit_address_constant(module)
    return output.getvalue().rstrip("\n")


def render_dispatch(tree: DispatchNode, indent: int = SELECTORS_INDENT) -> str:
    """Render the lookup body for a dispatch tree."""
    output = StringIO()
    emitter = RouterEmitter(output, indent=indent)
    _render_node(tree, emitter)
    return output.getvalue().rstrip("\n")


def _render_node(node: DispatchNode, emitter: RouterEmitter) -> None:
    if isinstance(node, Branch):
        # Left subtree under the comparison, right subtree falls through
        emitter.open_lt_branch(min_selector(node.right).selector)
        _render_node(node.left, emitter)
        emitter.close_block()
        _render_node(node.right, emitter)
    else:
        emitter.emit_switch(node.entries)


def render_router(
    template: str,
    target_label: str,
    modules: Sequence[Module],
    tree: DispatchNode,
) -> str:
    check_template(template)
    return substitute(
        template,
        {
            NETWORK_PLACEHOLDER: target_label,
            MODULES_PLACEHOLDER: render_modules(modules),
            SELECTORS_PLACEHOLDER: render_dispatch(tree),
        },
    )


# =============================================================================
# Entry Points
# =============================================================================


def generate_router(
    modules: Sequence[Any],
    source: SelectorSource,
    target_label: str,
    template: str = ROUTER_TEMPLATE,
    max_leaf_size: int = DEFAULT_MAX_LEAF_SIZE,
    max_workers: int = 1,
) -> GenerationResult:
    """Run the full pipeline against a selector source.

    Configuration is checked before any selector is fetched.
    """
    check_max_leaf_size(max_leaf_size)
    check_template(template)
    module_list = coerce_modules(modules)

    entries = sort_selectors(
        collect_selectors(module_list, source, max_workers=max_workers)
    )
    tree = build_tree(entries, max_leaf_size)

    stats = describe_tree(tree)
    logger.debug(
        "Dispatch tree: %d leaves, depth %d, worst case %d comparisons",
        stats.leaves,
        stats.depth,
        stats.worst_case_comparisons,
    )

    text = render_router(template, target_label, module_list, tree)
    return GenerationResult(
        source=text,
        modules=tuple(module_list),
        entries=tuple(entries),
        tree=tree,
    )


def generate(
    modules: Sequence[Any],
    selectors_by_module: Mapping[str, Any],
    target_label: str,
    template: str = ROUTER_TEMPLATE,
    max_leaf_size: int = DEFAULT_MAX_LEAF_SIZE,
) -> str:
    """Generate router source from in-memory inputs.

    Args:
        modules: Ordered modules, as Module objects or (name, address) pairs.
        selectors_by_module: Module name -> list of (selector, signature).
        target_label: Network name written into the header.
        template: Template containing @network, @modules and @selectors.
        max_leaf_size: Maximum selectors per switch block.

    Returns:
        Router source code.
    """
    check_max_leaf_size(max_leaf_size)
    check_template(template)
    module_list = coerce_modules(modules)

    declared = {m.name for m in module_list}
    unknown = sorted(set(selectors_by_module) - declared)
    if unknown:
        msg = f"Selectors supplied for undeclared module(s): {', '.join(unknown)}"
        raise ResolutionError(msg)

    result = generate_router(
        module_list,
        MappingSelectorSource(selectors_by_module),
        target_label,
        template=template,
        max_leaf_size=max_leaf_size,
    )
    return result.source
