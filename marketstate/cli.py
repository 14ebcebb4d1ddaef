"""
Command-line interface for the market-state service.

Usage:
    python -m marketstate serve --port 8000
    python -m marketstate whitelist --all
    python -m marketstate order 42 --chain-id 943
    python -m marketstate prices HEX priceUSD
    python -m marketstate prefetch HEX PLS PLSX --priority HEX
"""

import argparse
import asyncio
import logging
import sys

from .api import run_server
from .chain import ChainReader, ChainReadError, RetryingChainReader
from .config import ConfigError, ConfigManager
from .core.storage import build_price_store
from .orders import OrderReader, filled_percentage, reconcile_fill_percentage
from .prefetch import AssetPrefetchScheduler, PrefetchTarget
from .prices import BadRequestError, HistoricPriceGateway, PriceSeriesData, PriceSeriesEmpty
from .whitelist import WhitelistAggregator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marketstate",
        description="Whitelist, order progress and historic prices for the limit-order exchange",
    )
    parser.add_argument(
        "--chain-id", type=int, help="Chain to read from (defaults to DEFAULT_CHAIN_ID)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address (defaults to API_HOST)")
    serve.add_argument("--port", type=int, help="Bind port (defaults to API_PORT)")

    whitelist = subparsers.add_parser("whitelist", help="Print whitelisted tokens")
    whitelist.add_argument(
        "--all", action="store_true", help="Include inactive entries"
    )

    order = subparsers.add_parser("order", help="Print fill progress of one order")
    order.add_argument("order_id", type=int)

    prices = subparsers.add_parser("prices", help="Print a historic price series")
    prices.add_argument("symbol")
    prices.add_argument("field")

    prefetch = subparsers.add_parser("prefetch", help="Warm the asset host for coin logos")
    prefetch.add_argument("asset_ids", nargs="+")
    prefetch.add_argument(
        "--priority", action="append", default=[], help="Asset id to fetch first (repeatable)"
    )

    return parser


def _reader(config: ConfigManager, chain_id):
    return RetryingChainReader(ChainReader.for_chain(config.chains, chain_id))


async def show_whitelist(config: ConfigManager, args) -> int:
    aggregator = WhitelistAggregator(_reader(config, args.chain_id))
    if args.all:
        snapshot = await aggregator.get_all_entries()
        entries = snapshot.entries
        print(f"{snapshot.total_count} whitelisted tokens ({len(snapshot.active_entries)} active)")
    else:
        entries = await aggregator.get_active_tokens()
        print(f"{len(entries)} active tokens")

    for entry in entries:
        state = "active" if entry.is_active else "inactive"
        print(f"{entry.index:>5}  {entry.token_address}  {state}")
    return 0


async def show_order(config: ConfigManager, args) -> int:
    order_reader = OrderReader(_reader(config, args.chain_id))
    order = await order_reader.get_order(args.order_id)
    remaining = reconcile_fill_percentage(order)
    filled = filled_percentage(order)
    status = order.status.name.lower() if order.status is not None else "unknown"

    print(f"Order {order.order_id} ({status})")
    print(f"  remaining: {remaining} ({remaining / 10**16:.2f}%)")
    print(f"  filled:    {filled} ({filled / 10**16:.2f}%)")
    return 0


async def show_prices(config: ConfigManager, args) -> int:
    store = build_price_store(config.database)
    gateway = HistoricPriceGateway(store)
    try:
        result = await gateway.get_historic_series(args.symbol, args.field)
    finally:
        if store is not None:
            await store.disconnect()

    if isinstance(result, PriceSeriesData):
        for point in result.points:
            when = point.date.isoformat() if point.date is not None else "unknown date"
            print(f"{when}  {point.price}")
        return 0
    if isinstance(result, PriceSeriesEmpty):
        print(f"No price data ({result.reason})")
        return 0

    logger.error(f"Price store failed: {result.message}")
    return 1


async def run_prefetch(config: ConfigManager, args) -> int:
    priority = set(args.priority)
    targets = [PrefetchTarget(asset_id, asset_id in priority) for asset_id in args.priority]
    targets += [PrefetchTarget(asset_id) for asset_id in args.asset_ids]

    scheduler = AssetPrefetchScheduler(config.prefetch)
    await scheduler.run(targets)
    print(f"Loaded {scheduler.loaded_count - scheduler.failed_count}/{scheduler.total_count} assets")
    return 0


COMMANDS = {
    "whitelist": show_whitelist,
    "order": show_order,
    "prices": show_prices,
    "prefetch": run_prefetch,
}


def main(argv=None) -> int:
    """Parse arguments and run one command, returning the exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigManager()
        if args.command == "serve":
            run_server(config, host=args.host, port=args.port)
            return 0
        return asyncio.run(COMMANDS[args.command](config, args))
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except (ChainReadError, BadRequestError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def run() -> None:
    sys.exit(main())
