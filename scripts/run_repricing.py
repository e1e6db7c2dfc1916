#!/usr/bin/env python3
"""
Repricing Runner

Applies a batch of stats snapshots to the demo catalog, the way the external
scheduler drives the exchange after each game night.

Snapshot file format (JSON object keyed by instrument id):

    {
      "1": {"stats": {"ppg": 30.1, "rpg": 8.0, "apg": 7.5}, "sentiment": 0.4},
      "3": {"injury_status": "moderate", "volume": 120, "average_volume": 200}
    }
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from athlete_exchange.core.config import get_settings
from athlete_exchange.infrastructure.catalog import build_in_memory_exchange


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else get_settings().log_level
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


def load_snapshots(path: Path) -> dict[int, dict]:
    """Load snapshots keyed by integer instrument id."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError("Snapshot file must contain a JSON object keyed by instrument id")
    return {int(key): value for key, value in raw.items()}


def main():
    parser = argparse.ArgumentParser(
        description="Reprice the demo athlete catalog from a snapshot file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Reprice from a snapshot file
  python run_repricing.py --snapshots data/snapshots/2025-01-15.json

  # Reprice every instrument on volume alone
  python run_repricing.py --all
        """,
    )

    parser.add_argument("--snapshots", type=str, help="JSON file of stats snapshots")
    parser.add_argument(
        "--all", action="store_true", help="Reprice every instrument with an empty snapshot"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    setup_logging(args.debug)

    if not args.snapshots and not args.all:
        logger.error("Provide --snapshots or --all")
        return 1

    exchange = build_in_memory_exchange(seed_demo=True)

    if args.snapshots:
        path = Path(args.snapshots)
        if not path.exists():
            logger.error(f"File not found: {path}")
            return 1
        try:
            snapshots = load_snapshots(path)
        except (ValueError, json.JSONDecodeError) as e:
            logger.error(f"Invalid snapshot file {path}: {e}")
            return 1
    else:
        snapshots = {instrument.id: None for instrument in exchange.list_instruments()}

    report = exchange.reprice_all(snapshots)

    for instrument in report.repriced:
        change = instrument.price_change_percent()
        print(
            f"{instrument.name:<24}{instrument.previous_price:>10} -> {instrument.current_price:>10}"
            f"  ({change}%, hotness {instrument.hotness})"
        )
    for instrument_id, reason in report.failures.items():
        print(f"FAILED {instrument_id}: {reason}")

    return 0 if not report.failures else 2


if __name__ == "__main__":
    sys.exit(main())
