"""Deployment ledger: the JSON file recording where each module lives.

The ledger is an explicit state holder. Reads go through `data`, and every
change goes through `mutate(fn)`, which applies `fn` to a copy of the data
and commits it to disk when something actually changed.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from routergen.errors import ConfigurationError
from routergen.models import Module

logger = logging.getLogger(__name__)

LEDGER_SCHEMA: dict[str, Any] = {
    "properties": {
        "completed": False,
        "totalGasUsed": 0,
    },
    "transactions": {},
    "contracts": {
        "modules": {},
    },
}


class DeploymentLedger:
    """A `deployment.json` file loaded into memory."""

    def __init__(self, path: Path, data: dict[str, Any]) -> None:
        self.path = Path(path)
        self._data = data

    @classmethod
    def load(cls, path: Path) -> DeploymentLedger:
        """Load an existing ledger file."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            msg = f"Deployment ledger not found: {path}"
            raise ConfigurationError(msg) from e
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Cannot read deployment ledger {path}: {e}"
            raise ConfigurationError(msg) from e
        if not isinstance(data, dict):
            msg = f"Deployment ledger {path} is not a JSON object"
            raise ConfigurationError(msg)
        return cls(path, data)

    @classmethod
    def open(cls, path: Path) -> DeploymentLedger:
        """Load the ledger, creating it from the empty schema if missing."""
        path = Path(path)
        if path.exists():
            return cls.load(path)
        ledger = cls(path, copy.deepcopy(LEDGER_SCHEMA))
        ledger.commit()
        logger.info("New deployment file created: %s", path)
        return ledger

    @property
    def data(self) -> dict[str, Any]:
        """A copy of the ledger contents; edit through `mutate`."""
        return copy.deepcopy(self._data)

    def mutate(self, fn: Callable[[dict[str, Any]], None]) -> bool:
        """Apply `fn` to a copy of the data and commit if it changed.

        Returns:
            True if the ledger was written.
        """
        draft = copy.deepcopy(self._data)
        fn(draft)
        if draft == self._data:
            logger.debug("No changes - skipping write to %s", self.path)
            return False
        self._data = draft
        self.commit()
        return True

    def commit(self) -> None:
        """Serialize the current data to the ledger file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=2) + "\n", encoding="utf-8")
        logger.debug("Deployment file saved: %s", self.path)

    # =========================================================================
    # Modules
    # =========================================================================

    def _module_records(self, data: dict[str, Any]) -> dict[str, Any]:
        """Return the modules section of `data`, creating it if absent.

        Ledgers written by older deployers keep modules at the top level.
        """
        if isinstance(data.get("modules"), dict) and "contracts" not in data:
            records = data["modules"]
        else:
            contracts = data.setdefault("contracts", {})
            if not isinstance(contracts, dict):
                msg = f"Deployment ledger {self.path} has a malformed contracts section"
                raise ConfigurationError(msg)
            records = contracts.setdefault("modules", {})
        if not isinstance(records, dict):
            msg = f"Deployment ledger {self.path} has a malformed modules section"
            raise ConfigurationError(msg)
        return records

    def modules(self) -> list[Module]:
        """Modules in ledger order, with validated checksummed addresses."""
        modules = []
        for name, record in self._module_records(self.data).items():
            address = record.get("deployedAddress") if isinstance(record, dict) else ""
            if not address:
                msg = f"Module {name} has no deployedAddress in {self.path}"
                raise ConfigurationError(msg)
            modules.append(Module.create(name, address))
        return modules

    def set_module_address(self, name: str, address: str) -> bool:
        """Record a module's deployed address."""
        module = Module.create(name, address)

        def update(data: dict[str, Any]) -> None:
            record = self._module_records(data).setdefault(module.name, {})
            record["deployedAddress"] = module.address

        return self.mutate(update)
