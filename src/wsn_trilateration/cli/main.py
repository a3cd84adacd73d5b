#!/usr/bin/env python3
"""
Main CLI entry point for the trilateration simulator
"""

import argparse
import logging
import sys

from ..config import SimulationConfig, create_example_config
from ..exceptions import TrilaterationError
from ..localization.heuristics import Heuristic
from ..simulation import TrilaterationSimulation

logger = logging.getLogger(__name__)


def build_config(args) -> SimulationConfig:
    """Load the config file (if any) and apply command-line overrides"""
    config = SimulationConfig(args.config) if args.config else SimulationConfig()
    overrides = {
        'network.n_nodes': args.nodes,
        'network.anchor_fraction': args.anchor_fraction,
        'network.field_size': args.field_size,
        'network.max_range': args.range,
        'network.dimension': args.dimension,
        'ranging.max_signal_error': args.signal_error,
        'localization.heuristic': args.heuristic,
        'system.repetitions': args.runs,
        'system.seed': args.seed,
    }
    if args.non_iterative:
        overrides['localization.iterative'] = False
    return config.with_overrides(overrides)


def cmd_simulate(args):
    """Run the Monte-Carlo localization experiment"""
    config = build_config(args)
    if config.system.verbose and not args.verbose:
        logging.getLogger("wsn_trilateration").setLevel(logging.INFO)
    logger.info(config.summary())

    summary = TrilaterationSimulation(config).run()
    summary.write(sys.stdout)


def cmd_validate(args):
    """Validate a configuration file"""
    config = SimulationConfig(args.config)
    errors = config.validate()
    if errors:
        print("Validation errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)
    print("Configuration is valid")
    print(config.summary())


def cmd_create_example(args):
    """Write an example configuration file"""
    config = create_example_config(args.output)
    print(f"Example config saved to {args.output}")
    print(config.summary())


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Iterative trilateration simulator for wireless sensor networks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with defaults (300 nodes, 15%% anchors, R=15)
  %(prog)s simulate

  # Run a config file with a different heuristic and seed
  %(prog)s simulate --config configs/default.yaml --heuristic MOST_RELEVANT_NEIGHBOR --seed 7

  # Single-pass localization from anchors only
  %(prog)s simulate --non-iterative --signal-error 0.45

  # Validate a config
  %(prog)s validate --config configs/default.yaml
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="WSN Trilateration v1.0.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log run progress (-v) or every localization (-vv)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Simulate command
    parser_sim = subparsers.add_parser(
        "simulate",
        help="Run the Monte-Carlo localization experiment"
    )
    parser_sim.add_argument("--config", help="Path to YAML config file")
    parser_sim.add_argument("--nodes", type=int, help="Number of nodes N")
    parser_sim.add_argument("--anchor-fraction", type=float, help="Fraction of anchor nodes f")
    parser_sim.add_argument("--field-size", type=float, help="Field side length L")
    parser_sim.add_argument("--range", type=float, help="Maximum sensor range R")
    parser_sim.add_argument("--signal-error", type=float, help="Maximum relative signal error r")
    parser_sim.add_argument(
        "--heuristic",
        choices=[h.name for h in Heuristic],
        help="Reference selection heuristic"
    )
    parser_sim.add_argument("--runs", type=int, help="Number of repetitions E")
    parser_sim.add_argument("--dimension", type=int, choices=[2, 3], help="Field dimensionality")
    parser_sim.add_argument("--seed", type=int, help="Random seed")
    parser_sim.add_argument(
        "--non-iterative",
        action="store_true",
        help="Localize from anchors only in a single pass"
    )
    parser_sim.set_defaults(func=cmd_simulate)

    # Validate command
    parser_val = subparsers.add_parser(
        "validate",
        help="Validate a configuration file"
    )
    parser_val.add_argument("--config", required=True, help="Path to YAML config file")
    parser_val.set_defaults(func=cmd_validate)

    # Create example command
    parser_ex = subparsers.add_parser(
        "create-example",
        help="Write an example configuration file"
    )
    parser_ex.add_argument(
        "--output",
        default="configs/example.yaml",
        help="Output file path"
    )
    parser_ex.set_defaults(func=cmd_create_example)

    # Parse arguments
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    # Execute command
    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except (TrilaterationError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
