"""Generator configuration loaded from `routergen.yaml`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from routergen.errors import ConfigurationError
from routergen.templates import ROUTER_TEMPLATE
from routergen.tree import DEFAULT_MAX_LEAF_SIZE, check_max_leaf_size

DEFAULT_CONFIG_NAME = "routergen.yaml"
DEFAULT_OUTPUT = "contracts/Router_{network}.sol"
DEFAULT_MAX_WORKERS = 4


@dataclass
class GeneratorConfig:
    """Configuration for one router generation.

    Attributes:
        network: Target network name, written into the router header.
        deployment: Path to the deployment ledger (deployment.json).
        artifacts: Directory holding one `<Module>.json` artifact per module.
        output: Output path; `{network}` is replaced by the network name.
        template: Custom template path, or None for the built-in router.
        max_leaf_size: Maximum selectors per switch block.
        max_workers: Concurrent artifact reads.
    """

    network: str
    deployment: Path
    artifacts: Path
    output: str = DEFAULT_OUTPUT
    template: Path | None = None
    max_leaf_size: int = DEFAULT_MAX_LEAF_SIZE
    max_workers: int = DEFAULT_MAX_WORKERS

    @property
    def output_path(self) -> Path:
        return Path(self.output.replace("{network}", self.network))

    def read_template(self) -> str:
        if self.template is None:
            return ROUTER_TEMPLATE
        try:
            return self.template.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Cannot read router template {self.template}: {e}"
            raise ConfigurationError(msg) from e


def _resolve(base_path: Path, value: str | None) -> Path | None:
    if value is None:
        return None
    path = Path(value)
    return path if path.is_absolute() else base_path / path


def load_config(config_path: Path) -> GeneratorConfig:
    """Load generator configuration from YAML.

    Relative paths are resolved against the directory of the config file.

    Args:
        config_path: Path to routergen.yaml.

    Returns:
        GeneratorConfig.
    """
    config_path = Path(config_path)
    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        msg = f"Cannot read configuration {config_path}: {e}"
        raise ConfigurationError(msg) from e
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {config_path}: {e}"
        raise ConfigurationError(msg) from e

    if not isinstance(data, dict):
        msg = f"Configuration {config_path} must be a mapping"
        raise ConfigurationError(msg)

    required = ("network", "deployment", "artifacts")
    missing = [key for key in required if not data.get(key)]
    if missing:
        msg = f"Configuration {config_path} is missing: {', '.join(missing)}"
        raise ConfigurationError(msg)

    base_path = config_path.parent
    output = str(_resolve(base_path, data.get("output") or DEFAULT_OUTPUT))

    config = GeneratorConfig(
        network=str(data["network"]),
        deployment=_resolve(base_path, data["deployment"]),
        artifacts=_resolve(base_path, data["artifacts"]),
        output=output,
        template=_resolve(base_path, data.get("template")),
        max_leaf_size=data.get("max_leaf_size", DEFAULT_MAX_LEAF_SIZE),
        max_workers=data.get("max_workers", DEFAULT_MAX_WORKERS),
    )
    check_max_leaf_size(config.max_leaf_size)
    if not isinstance(config.max_workers, int) or config.max_workers < 1:
        msg = f"max_workers must be a positive integer, got {config.max_workers!r}"
        raise ConfigurationError(msg)
    return config
