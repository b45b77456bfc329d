"""routergen: selector-dispatch router generator."""

from __future__ import annotations

from routergen.errors import (
    CollisionError,
    ConfigurationError,
    ResolutionError,
    RouterGenError,
)
from routergen.generator import GenerationResult, generate, generate_router
from routergen.models import Module, SelectorEntry
from routergen.tree import Branch, Leaf, build_tree

__all__ = [
    "Branch",
    "CollisionError",
    "ConfigurationError",
    "GenerationResult",
    "Leaf",
    "Module",
    "ResolutionError",
    "RouterGenError",
    "SelectorEntry",
    "build_tree",
    "generate",
    "generate_router",
]
