"""Config-driven generation: ledger + artifacts in, router file out."""

from __future__ import annotations

import logging
from pathlib import Path

from routergen.config import GeneratorConfig
from routergen.generator import GenerationResult, generate_router
from routergen.ledger import DeploymentLedger
from routergen.sources import ArtifactSelectorSource

logger = logging.getLogger(__name__)


def generate_from_config(config: GeneratorConfig) -> GenerationResult:
    """Generate the router described by `config` without writing it."""
    template = config.read_template()
    modules = DeploymentLedger.load(config.deployment).modules()
    logger.info("Generating router source for %s", config.network)

    return generate_router(
        modules,
        ArtifactSelectorSource(config.artifacts),
        config.network,
        template=template,
        max_leaf_size=config.max_leaf_size,
        max_workers=config.max_workers,
    )


def write_router(result: GenerationResult, path: Path) -> Path:
    """Write generated source to `path`, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.source, encoding="utf-8")
    logger.info("Router code generated: %s", path)
    return path
