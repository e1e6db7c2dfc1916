#!/usr/bin/env python3
"""
Trading Session Simulator

Seeds an in-memory exchange with the demo catalog, registers a number of
simulated traders, runs random buy/sell orders against it and prints the
resulting leaderboard and market overview.
"""

import argparse
import random
import sys

from loguru import logger
from tqdm import tqdm

from athlete_exchange.core.config import get_settings
from athlete_exchange.core.enums import TradeDirection
from athlete_exchange.core.exchange import Exchange
from athlete_exchange.infrastructure.catalog import build_in_memory_exchange


class TradingSessionSimulator:
    """Drives random orders through an Exchange."""

    def __init__(self, exchange: Exchange, seed: int | None = None):
        self.exchange = exchange
        self.rng = random.Random(seed)
        self.rejections: dict[str, int] = {}

    def register_traders(self, count: int) -> list[int]:
        """Register `count` simulated traders and return their ids."""
        return [self.exchange.register_user(f"trader_{i + 1}").id for i in range(count)]

    def random_order(self, user_id: int, max_shares: int) -> None:
        """Place one random order for a user; sells only target held instruments."""
        holdings = self.exchange.get_portfolio(user_id)
        if holdings and self.rng.random() < 0.4:
            position = self.rng.choice(holdings)
            direction = TradeDirection.SELL
            instrument_id = position.instrument.id
            shares = self.rng.randint(1, position.holding.shares)
        else:
            instrument = self.rng.choice(self.exchange.list_instruments())
            direction = TradeDirection.BUY
            instrument_id = instrument.id
            shares = self.rng.randint(1, max_shares)

        result = self.exchange.execute_trade(user_id, instrument_id, direction, shares)
        if not result.ok:
            code = result.error.code
            self.rejections[code] = self.rejections.get(code, 0) + 1

    def run(self, user_ids: list[int], orders: int, max_shares: int) -> None:
        for _ in tqdm(range(orders), desc="Placing orders", unit="order"):
            self.random_order(self.rng.choice(user_ids), max_shares)


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else get_settings().log_level
    # tqdm.write keeps log lines off the progress bar
    logger.add(
        lambda msg: tqdm.write(msg, end=""),
        colorize=True,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


def print_results(exchange: Exchange, simulator: TradingSessionSimulator, top: int) -> None:
    print(f"\n{'Rank':<6}{'Trader':<16}{'Net worth':>14}{'Cash':>14}{'Holdings':>14}")
    for entry in exchange.get_leaderboard(top):
        print(
            f"{entry.rank:<6}{entry.username:<16}{entry.net_worth:>14}"
            f"{entry.cash:>14}{entry.portfolio_value:>14}"
        )

    overview = exchange.market_overview()
    print(f"\nMarket cap:     {overview.market_cap}")
    print(f"Daily volume:   {overview.daily_volume}")
    print(f"Active traders: {overview.active_traders}")
    if overview.top_gainer:
        print(f"Top gainer:     {overview.top_gainer.short_name} ({overview.top_gainer.change_percent}%)")
    if simulator.rejections:
        print(f"Rejected:       {simulator.rejections}")


def main():
    parser = argparse.ArgumentParser(
        description="Simulate a trading session against the demo athlete catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ten traders, 500 orders
  python simulate_trading_session.py --traders 10 --orders 500

  # Reproducible run with debug logging
  python simulate_trading_session.py --seed 42 --debug

  # Quiet run showing only warnings
  EXCHANGE_LOG_LEVEL=WARNING python simulate_trading_session.py
        """,
    )

    parser.add_argument("--traders", type=int, default=5, help="Number of simulated traders (default: 5)")
    parser.add_argument("--orders", type=int, default=200, help="Number of orders to place (default: 200)")
    parser.add_argument(
        "--max-shares", type=int, default=10, help="Largest buy order in shares (default: 10)"
    )
    parser.add_argument("--top", type=int, default=10, help="Leaderboard rows to print (default: 10)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    setup_logging(args.debug)

    if args.traders <= 0 or args.orders < 0 or args.max_shares <= 0:
        logger.error("--traders and --max-shares must be positive, --orders non-negative")
        return 1

    exchange = build_in_memory_exchange(seed_demo=True)
    simulator = TradingSessionSimulator(exchange, seed=args.seed)

    try:
        user_ids = simulator.register_traders(args.traders)
        simulator.run(user_ids, args.orders, args.max_shares)
    except KeyboardInterrupt:
        logger.warning("Simulation interrupted")

    print_results(exchange, simulator, args.top)
    return 0


if __name__ == "__main__":
    sys.exit(main())
