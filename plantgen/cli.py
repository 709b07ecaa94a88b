"""
Command-Line Interface

CLI for generating plant meshes from genome presets or JSON genome files
and checking genome files for configuration errors.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from genomespec import Genome, ConfigurationError, get_preset, list_presets, collect_genome_errors
from plant_policies import GenerationPolicy
from .api import generate_with_report
from .core.errors import InvariantViolation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plantgen",
        description="Procedural plant mesh generation from genomes",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate a plant and print its report")
    source = gen_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--preset", "-p",
        type=str,
        choices=list_presets(),
        help="Named genome preset",
    )
    source.add_argument(
        "--genome", "-g",
        type=str,
        help="Path to a JSON genome file",
    )
    gen_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (overrides the genome's seed)",
    )
    gen_parser.add_argument(
        "--policy",
        type=str,
        default=None,
        help="Path to a JSON generation policy (leaf and shading settings)",
    )
    gen_parser.add_argument(
        "--single-sided-leaves",
        action="store_true",
        help="Emit one face per leaf instead of two",
    )
    gen_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )

    # Validate command
    val_parser = subparsers.add_parser("validate", help="Validate a genome file")
    val_parser.add_argument(
        "--genome", "-g",
        type=str,
        required=True,
        help="Path to a JSON genome file",
    )

    # Presets command
    subparsers.add_parser("presets", help="List genome presets")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "generate":
        return run_generate(args)
    if args.command == "validate":
        return run_validate(args)
    if args.command == "presets":
        return run_presets(args)
    return 1


def run_generate(args) -> int:
    """Run the generate command."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.preset:
            genome = get_preset(args.preset)
        else:
            genome = Genome.from_json(args.genome)
        if args.seed is not None:
            genome = genome.with_seed(args.seed)
    except (ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        policy = load_policy(args.policy)
    except (ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.single_sided_leaves:
        policy.leaf.double_sided = False

    try:
        _, report = generate_with_report(genome, policy)
    except InvariantViolation as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return 2

    print(report.to_json())
    return 0


def load_policy(path: Optional[str]) -> GenerationPolicy:
    """Load a generation policy from a JSON file, or the defaults when no path is given."""
    if path is None:
        return GenerationPolicy()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"'{path}': {e}") from e

    if not isinstance(data, dict) or not all(
        isinstance(data.get(section, {}), dict) for section in ("leaf", "shading")
    ):
        raise ConfigurationError(
            f"'{path}': policy must be an object with 'leaf' and 'shading' objects"
        )
    return GenerationPolicy.from_dict(data)


def run_validate(args) -> int:
    """Run the validate command."""
    try:
        with open(args.genome, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    errors = collect_genome_errors(data)
    if errors:
        print(f"{args.genome}: {len(errors)} error(s)")
        for error in errors:
            print(f"  - {error}")
        return 1

    print(f"{args.genome}: OK")
    return 0


def run_presets(args) -> int:
    """Run the presets command."""
    for name in list_presets():
        print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
