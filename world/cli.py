"""Command-line launcher: generate a network and print it as JSON."""

import argparse
import logging
import sys

from core.errors import ConfigError
from world.generation.generator import WorldGenerator
from world.generation.params import WorldConfig
from world.io.snapshot import build_snapshot, dumps_snapshot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Settlement road network generator")
    parser.add_argument("--settlements", type=int, default=100, help="Number of settlements")
    parser.add_argument("--hub-percent", type=float, default=0.05, help="Share of hubs (0, 1]")
    parser.add_argument(
        "--mesh-distance", type=float, default=50.0, help="Max distance for mesh roads"
    )
    parser.add_argument("--width", type=float, default=800.0, help="Map width")
    parser.add_argument("--height", type=float, default=600.0, help="Map height")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--indent", action="store_true", help="Pretty-print the JSON output")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # stdout carries the JSON document, logs go to stderr
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )

    try:
        config = WorldConfig.from_dict(
            {
                "x_range": (0.0, args.width),
                "y_range": (0.0, args.height),
                "settlement_count": args.settlements,
                "hub_percent": args.hub_percent,
                "mesh_distance_threshold": args.mesh_distance,
                "seed": args.seed,
            }
        )
    except ConfigError as e:
        logger.error(str(e))
        return 2

    generator = WorldGenerator(config)
    network = generator.generate()
    snapshot = build_snapshot(network, config, generator.stats())

    sys.stdout.write(dumps_snapshot(snapshot, indent=args.indent).decode())
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
