"""Interface sources: where the selectors of each module come from.

A source answers one question: which (selector, signature) pairs does a
given module expose? Selectors are never computed here, only read.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from routergen.errors import ResolutionError

logger = logging.getLogger(__name__)

# (selector, signature); selector is an int or a hex string
RawSelector = tuple[int | str, str]


class SelectorSource(Protocol):
    """Anything that can list the selectors exposed by a module."""

    def get_selectors(self, module: str) -> list[RawSelector]: ...


def _coerce_items(module: str, items: Any) -> list[RawSelector]:
    """Accept (selector, signature) pairs or {"selector", "signature"} dicts."""
    if isinstance(items, Mapping) or not isinstance(items, Iterable):
        msg = (
            f"Selectors for module {module} must be a list, "
            f"got {type(items).__name__}"
        )
        raise ResolutionError(msg, module=module)

    pairs: list[RawSelector] = []
    for item in items:
        if isinstance(item, Mapping):
            selector = item.get("selector")
            signature = item.get("signature") or item.get("name")
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            selector, signature = item
        else:
            msg = f"Malformed selector entry for module {module}: {item!r}"
            raise ResolutionError(msg, module=module)
        if selector is None or not signature:
            msg = f"Malformed selector entry for module {module}: {item!r}"
            raise ResolutionError(msg, module=module)
        pairs.append((selector, str(signature)))
    return pairs


class MappingSelectorSource:
    """In-memory source backed by a module name -> selectors mapping."""

    def __init__(self, selectors_by_module: Mapping[str, Any]) -> None:
        self.selectors_by_module = selectors_by_module

    def get_selectors(self, module: str) -> list[RawSelector]:
        if module not in self.selectors_by_module:
            msg = f"No selectors supplied for module {module}"
            raise ResolutionError(msg, module=module)
        return _coerce_items(module, self.selectors_by_module[module])


class ArtifactSelectorSource:
    """Reads `<directory>/<Module>.json` compiler artifacts.

    Three layouts are understood:
    - solc standard JSON output: {"evm": {"methodIdentifiers": {sig: hex}}}
    - a flattened artifact: {"methodIdentifiers": {sig: hex}}
    - an explicit list: {"selectors": [{"selector": hex, "signature": sig}]}
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def artifact_path(self, module: str) -> Path:
        return self.directory / f"{module}.json"

    def get_selectors(self, module: str) -> list[RawSelector]:
        path = self.artifact_path(module)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            msg = f"Cannot read artifact for module {module}: {e}"
            raise ResolutionError(msg, module=module) from e
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in artifact {path}: {e}"
            raise ResolutionError(msg, module=module) from e

        if not isinstance(data, dict):
            msg = f"Artifact {path} is not a JSON object"
            raise ResolutionError(msg, module=module)

        identifiers = data.get("methodIdentifiers")
        if identifiers is None and isinstance(data.get("evm"), dict):
            identifiers = data["evm"].get("methodIdentifiers")

        if isinstance(identifiers, dict):
            pairs = [(sel, sig) for sig, sel in identifiers.items()]
        elif "selectors" in data:
            pairs = _coerce_items(module, data["selectors"])
        else:
            msg = f"Artifact {path} has no methodIdentifiers or selectors"
            raise ResolutionError(msg, module=module)

        logger.debug("Read %d selectors for %s from %s", len(pairs), module, path)
        return pairs
