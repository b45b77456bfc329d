"""Dispatch tree construction.

The sorted selector list is split by rank into a binary tree. Each leaf
becomes one exhaustive `switch`, each branch one `lt` comparison, so the
leaf size bounds the work done per lookup.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from routergen.errors import ConfigurationError
from routergen.models import SelectorEntry

DEFAULT_MAX_LEAF_SIZE = 9


@dataclass(frozen=True)
class Leaf:
    """Terminal node: a group of entries matched by a single switch."""

    entries: tuple[SelectorEntry, ...]


@dataclass(frozen=True)
class Branch:
    """Internal node: selectors below the right subtree's minimum go left."""

    left: DispatchNode
    right: DispatchNode


DispatchNode = Leaf | Branch


def check_max_leaf_size(max_leaf_size: int) -> None:
    if (
        isinstance(max_leaf_size, bool)
        or not isinstance(max_leaf_size, int)
        or max_leaf_size < 1
    ):
        msg = f"max_leaf_size must be a positive integer, got {max_leaf_size!r}"
        raise ConfigurationError(msg)


def build_tree(
    entries: Sequence[SelectorEntry], max_leaf_size: int = DEFAULT_MAX_LEAF_SIZE
) -> DispatchNode:
    """Partition sorted entries into a balanced dispatch tree.

    A node holding more than `max_leaf_size` entries is split in two, the
    left half taking ceil(count / 2) entries. Splitting is by rank only,
    never by the numeric spread of the selectors.

    Args:
        entries: Entries sorted by selector, free of collisions.
        max_leaf_size: Maximum entries per leaf (>= 1).

    Returns:
        Root node of the tree. An empty input yields a single empty Leaf.
    """
    check_max_leaf_size(max_leaf_size)
    return _split(tuple(entries), max_leaf_size)


def _split(entries: tuple[SelectorEntry, ...], max_leaf_size: int) -> DispatchNode:
    if len(entries) <= max_leaf_size:
        return Leaf(entries)
    mid = math.ceil(len(entries) / 2)
    return Branch(
        left=_split(entries[:mid], max_leaf_size),
        right=_split(entries[mid:], max_leaf_size),
    )


def min_selector(node: DispatchNode) -> SelectorEntry:
    """Return the first entry of the leftmost leaf under `node`."""
    while isinstance(node, Branch):
        node = node.left
    if not node.entries:
        msg = "Empty leaf has no minimum selector"
        raise ValueError(msg)
    return node.entries[0]


def iter_leaves(node: DispatchNode) -> Iterator[Leaf]:
    """Yield leaves left to right."""
    if isinstance(node, Leaf):
        yield node
    else:
        yield from iter_leaves(node.left)
        yield from iter_leaves(node.right)


def iter_entries(node: DispatchNode) -> Iterator[SelectorEntry]:
    """Yield all entries in tree order (equal to ascending selector order)."""
    for leaf in iter_leaves(node):
        yield from leaf.entries


def tree_depth(node: DispatchNode) -> int:
    """Number of branch levels above the deepest leaf."""
    if isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(node.left), tree_depth(node.right))


@dataclass(frozen=True)
class TreeStats:
    """Shape summary of a dispatch tree.

    Attributes:
        entries: Total number of selectors.
        leaves: Number of switch blocks.
        branches: Number of `lt` comparisons emitted.
        depth: Branch levels above the deepest leaf.
        largest_leaf: Size of the biggest switch.
        worst_case_comparisons: Comparisons on the longest lookup path
            (branch tests plus switch cases).
    """

    entries: int
    leaves: int
    branches: int
    depth: int
    largest_leaf: int
    worst_case_comparisons: int


def _worst_path(node: DispatchNode) -> int:
    if isinstance(node, Leaf):
        return len(node.entries)
    return 1 + max(_worst_path(node.left), _worst_path(node.right))


def describe_tree(node: DispatchNode) -> TreeStats:
    leaves = list(iter_leaves(node))
    return TreeStats(
        entries=sum(len(leaf.entries) for leaf in leaves),
        leaves=len(leaves),
        branches=len(leaves) - 1,
        depth=tree_depth(node),
        largest_leaf=max(len(leaf.entries) for leaf in leaves),
        worst_case_comparisons=_worst_path(node),
    )
