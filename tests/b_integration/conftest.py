"""Shared fixtures: a small on-disk project with a ledger and artifacts."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

ADDRESS_A = "0x" + "aa" * 20
ADDRESS_B = "0x" + "bb" * 20


def write_json(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


def _make_project(root: Path, leaf_size: int = 9) -> Path:
    """Lay out a ledger, two artifacts and a config file under `root`."""
    write_json(
        root / "deployments" / "local" / "deployment.json",
        {
            "properties": {"completed": True},
            "contracts": {
                "modules": {
                    "OwnerModule": {"deployedAddress": ADDRESS_A},
                    "TokenModule": {"deployedAddress": ADDRESS_B},
                }
            },
        },
    )
    write_json(
        root / "artifacts" / "OwnerModule.json",
        {
            "evm": {
                "methodIdentifiers": {"owner()": "8da5cb5b", "renounce()": "0000abcd"}
            }
        },
    )
    write_json(
        root / "artifacts" / "TokenModule.json",
        {
            "methodIdentifiers": {
                "balanceOf(address)": "70a08231",
                "transfer(address,uint256)": "a9059cbb",
                "approve(address,uint256)": "095ea7b3",
            }
        },
    )
    config = root / "routergen.yaml"
    config.write_text(
        "network: local\n"
        "deployment: deployments/local/deployment.json\n"
        "artifacts: artifacts\n"
        f"max_leaf_size: {leaf_size}\n"
    )
    return config


@pytest.fixture
def make_project() -> Callable[..., Path]:
    return _make_project


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Path to the routergen.yaml of a freshly laid out project."""
    return _make_project(tmp_path)
