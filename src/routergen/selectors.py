"""Selector collection and ordering.

The collector asks a source for every module's selectors, the sorter puts
them in numeric order and rejects collisions. Both run before any tree is
built.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from routergen.errors import CollisionError, ResolutionError
from routergen.models import Module, SelectorEntry, parse_selector
from routergen.sources import RawSelector, SelectorSource

logger = logging.getLogger(__name__)


def _resolve_module(module: Module, source: SelectorSource) -> list[SelectorEntry]:
    """Fetch one module's selectors and stamp them with the module name."""
    try:
        raw = source.get_selectors(module.name)
    except ResolutionError:
        raise
    except Exception as e:
        msg = f"Failed to resolve selectors for module {module.name}: {e}"
        raise ResolutionError(msg, module=module.name) from e

    return [_make_entry(module.name, item) for item in raw]


def _make_entry(module: str, item: RawSelector) -> SelectorEntry:
    selector, signature = item
    try:
        value = parse_selector(selector)
    except ValueError as e:
        msg = f"Module {module} exposes {signature} with a bad selector: {e}"
        raise ResolutionError(msg, module=module) from e
    return SelectorEntry(selector=value, module=module, signature=signature)


def collect_selectors(
    modules: Sequence[Module],
    source: SelectorSource,
    max_workers: int = 1,
) -> list[SelectorEntry]:
    """Gather the selectors of all modules into one flat, unordered list.

    Args:
        modules: Modules to resolve.
        source: Interface source queried once per module.
        max_workers: Number of concurrent fetches (1 = sequential).

    Returns:
        All entries, grouped by module in the given module order.

    Raises:
        ResolutionError: If any module cannot be resolved. No partial
            result is returned.
    """
    if max_workers <= 1 or len(modules) <= 1:
        per_module = [_resolve_module(m, source) for m in modules]
    else:
        with ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="SelectorFetch"
        ) as executor:
            futures = [executor.submit(_resolve_module, m, source) for m in modules]
            # result() re-raises the first failure in module order
            per_module = [f.result() for f in futures]

    entries = [entry for group in per_module for entry in group]
    logger.info(
        "Found %d modules with %d selectors in total", len(modules), len(entries)
    )
    return entries


def sort_selectors(entries: Iterable[SelectorEntry]) -> list[SelectorEntry]:
    """Return entries ordered by numeric selector value, ascending.

    Raises:
        CollisionError: If two entries share a selector value.
    """
    ordered = sorted(entries, key=lambda e: e.selector)
    for prev, curr in zip(ordered, ordered[1:]):
        if prev.selector == curr.selector:
            raise CollisionError(prev, curr)
    return ordered
