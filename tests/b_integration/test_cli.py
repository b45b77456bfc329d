"""Integration tests for the routergen command line."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from routergen.cli import create_parser, main

ADDRESS_A = "0x" + "aa" * 20


def run(config: Path, *args: str) -> int:
    return main(["--config", str(config), *args])


class TestGenerateCommand:
    def test_writes_router(
        self, tmp_path: Path, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(project, "generate") == 0

        router = tmp_path / "contracts" / "Router_local.sol"
        assert router.exists()
        assert "contract Router" in router.read_text()
        assert "2 modules, 5 selectors" in capsys.readouterr().out

    def test_stdout(
        self, tmp_path: Path, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(project, "generate", "--stdout", "--network", "sepolia") == 0

        out = capsys.readouterr().out
        assert "for the sepolia network" in out
        assert not (tmp_path / "contracts").exists()

    def test_output_override(self, tmp_path: Path, project: Path) -> None:
        target = tmp_path / "out" / "R_{network}.sol"
        assert run(project, "generate", "-o", str(target)) == 0
        assert (tmp_path / "out" / "R_local.sol").exists()

    def test_error_exit_status(
        self, tmp_path: Path, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        artifact = tmp_path / "artifacts" / "TokenModule.json"
        data = json.loads(artifact.read_text())
        # Same selector as OwnerModule.owner()
        data["methodIdentifiers"]["clash()"] = "8da5cb5b"
        artifact.write_text(json.dumps(data))

        assert run(project, "generate") == 1
        out = capsys.readouterr().out
        assert out.startswith("Error: Selector 0x8da5cb5b")
        assert not (tmp_path / "contracts").exists()

    def test_invalid_leaf_size(self, project: Path) -> None:
        assert run(project, "generate", "--max-leaf-size", "0") == 1

    def test_braces_in_project_path(
        self, tmp_path: Path, make_project: Callable[..., Path]
    ) -> None:
        root = tmp_path / "proj{v1}"
        assert run(make_project(root), "generate") == 0
        assert (root / "contracts" / "Router_local.sol").exists()

    def test_braces_in_output_override(self, tmp_path: Path, project: Path) -> None:
        target = tmp_path / "out{x}" / "R_{network}.sol"
        assert run(project, "generate", "-o", str(target)) == 0
        assert (tmp_path / "out{x}" / "R_local.sol").exists()


class TestTreeCommand:
    def test_shows_stats(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(project, "tree", "--max-leaf-size", "2", "--leaves") == 0

        out = capsys.readouterr().out
        assert "max leaf size 2" in out
        assert "Selectors:              5" in out
        # 5 -> (3, 2) -> ((2, 1), 2)
        assert "Leaves (switches):      3" in out
        assert "0x0000abcd" in out


class TestLedgerCommands:
    def test_list_modules(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(project, "modules") == 0
        out = capsys.readouterr().out
        assert "OwnerModule" in out
        assert "Total: 2 module(s)" in out

    def test_set_module(
        self, tmp_path: Path, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(project, "set-module", "FeeModule", ADDRESS_A) == 0
        assert run(project, "set-module", "FeeModule", ADDRESS_A) == 0

        out = capsys.readouterr().out
        assert "Recorded FeeModule" in out
        assert "already recorded" in out

        ledger = tmp_path / "deployments" / "local" / "deployment.json"
        modules = json.loads(ledger.read_text())["contracts"]["modules"]
        assert list(modules) == ["OwnerModule", "TokenModule", "FeeModule"]

    def test_set_module_rejects_bad_address(self, project: Path) -> None:
        assert run(project, "set-module", "FeeModule", "0xdead") == 1


class TestParser:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage: routergen" in capsys.readouterr().out

    def test_defaults(self) -> None:
        args = create_parser().parse_args(["generate"])
        assert args.config == "routergen.yaml"
        assert args.max_leaf_size is None
        assert args.stdout is False
