"""Command-line interface for the router generator.

Provides the `routergen` command with subcommands for:
- Generating the router source
- Inspecting the dispatch tree
- Listing and recording module addresses in the deployment ledger
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from routergen.config import DEFAULT_CONFIG_NAME, GeneratorConfig, load_config
from routergen.errors import RouterGenError
from routergen.ledger import DeploymentLedger
from routergen.runner import generate_from_config, write_router
from routergen.tree import describe_tree, iter_leaves


def _load_config(args: argparse.Namespace) -> GeneratorConfig:
    """Load the config file and apply command-line overrides."""
    config = load_config(Path(args.config))
    overrides = {}
    if getattr(args, "network", None):
        overrides["network"] = args.network
    if getattr(args, "max_leaf_size", None) is not None:
        overrides["max_leaf_size"] = args.max_leaf_size
    if getattr(args, "output", None):
        overrides["output"] = args.output
    return dataclasses.replace(config, **overrides)


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate the router source."""
    config = _load_config(args)
    result = generate_from_config(config)

    if args.stdout:
        print(result.source, end="")
        return 0

    path = write_router(result, config.output_path)
    print(
        f"Router for {config.network}: {len(result.modules)} modules, "
        f"{len(result.entries)} selectors -> {path}"
    )
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    """Show the shape of the dispatch tree."""
    config = _load_config(args)
    result = generate_from_config(config)
    stats = describe_tree(result.tree)

    print(f"Dispatch tree for {config.network} (max leaf size {config.max_leaf_size})")
    print("=" * 60)
    print(f"  Selectors:              {stats.entries}")
    print(f"  Leaves (switches):      {stats.leaves}")
    print(f"  Branches (lt checks):   {stats.branches}")
    print(f"  Depth:                  {stats.depth}")
    print(f"  Largest leaf:           {stats.largest_leaf}")
    print(f"  Worst-case comparisons: {stats.worst_case_comparisons}")

    if args.leaves:
        print()
        print(f"{'Leaf':>5} {'Size':>5} {'First':>12} {'Last':>12}")
        print("-" * 37)
        for index, leaf in enumerate(iter_leaves(result.tree)):
            if leaf.entries:
                first = leaf.entries[0].selector_hex
                last = leaf.entries[-1].selector_hex
            else:
                first = last = "-"
            print(f"{index:>5} {len(leaf.entries):>5} {first:>12} {last:>12}")

    return 0


def cmd_modules(args: argparse.Namespace) -> int:
    """List modules recorded in the deployment ledger."""
    config = load_config(Path(args.config))
    modules = DeploymentLedger.load(config.deployment).modules()

    if not modules:
        print("No modules recorded yet.")
        return 0

    print(f"{'Module':<30} Address")
    print("-" * 74)
    for module in modules:
        print(f"{module.name:<30} {module.address}")
    print("-" * 74)
    print(f"Total: {len(modules)} module(s)")
    return 0


def cmd_set_module(args: argparse.Namespace) -> int:
    """Record a module address in the deployment ledger."""
    config = load_config(Path(args.config))
    ledger = DeploymentLedger.open(config.deployment)

    if ledger.set_module_address(args.name, args.address):
        print(f"Recorded {args.name} in {ledger.path}")
    else:
        print(f"{args.name} already recorded at that address")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="routergen",
        description="Generate selector-dispatch router contracts",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_NAME,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_NAME})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate command
    generate_parser = subparsers.add_parser("generate", help="Generate the router")
    generate_parser.add_argument("--network", help="Override the target network")
    generate_parser.add_argument(
        "--max-leaf-size",
        type=int,
        help="Maximum selectors per switch block (default: from config, else 9)",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        help="Output path; {network} is replaced by the network name",
    )
    generate_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the router instead of writing it",
    )
    generate_parser.set_defaults(func=cmd_generate)

    # tree command
    tree_parser = subparsers.add_parser("tree", help="Show the dispatch tree shape")
    tree_parser.add_argument("--network", help="Override the target network")
    tree_parser.add_argument(
        "--max-leaf-size",
        type=int,
        help="Maximum selectors per switch block",
    )
    tree_parser.add_argument(
        "--leaves",
        action="store_true",
        help="List every leaf with its selector range",
    )
    tree_parser.set_defaults(func=cmd_tree)

    # modules command
    modules_parser = subparsers.add_parser("modules", help="List ledger modules")
    modules_parser.set_defaults(func=cmd_modules)

    # set-module command
    set_parser = subparsers.add_parser(
        "set-module", help="Record a module address in the ledger"
    )
    set_parser.add_argument("name", help="Module contract name")
    set_parser.add_argument("address", help="Deployed address")
    set_parser.set_defaults(func=cmd_set_module)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s | %(name)s | %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except RouterGenError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
