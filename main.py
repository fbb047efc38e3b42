# main.py — call one alts.trade endpoint from the command line
import os
import sys
import json
import argparse
import logging

from dotenv import load_dotenv

from config import SETTINGS
from adapters.altstrade_adapter import AltsTradeAdapter
from helpers.errors import AltsTradeError

logger = logging.getLogger("altstrade")

# operation name -> positional argument names
OPERATIONS = {
    "markets": (),
    "currencies": (),
    "ticker": ("market",),
    "trade_history": ("market",),
    "order_book": ("market",),
    "balance": (),
    "pending_deposits": (),
    "deposits_history": (),
    "deposit_keys": ("coin_code",),
    "pending_withdraws": (),
    "withdraws_history": (),
    "place_order": ("market", "action", "amount", "price"),
    "cancel_order": ("order_id",),
    "my_open_orders": ("market",),
    "all_my_open_orders": (),
    "my_trades": ("market",),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="alts.trade REST client")
    parser.add_argument("operation", choices=sorted(OPERATIONS))
    parser.add_argument("args", nargs="*")
    return parser


def coerce_args(operation: str, raw):
    names = OPERATIONS[operation]
    if len(raw) != len(names):
        raise ValueError(f"{operation} expects {len(names)} argument(s): {' '.join(names) or '-'}")
    values = list(raw)
    if operation == "place_order":
        values[3] = float(values[3])
    return values


def main(argv=None, client=None) -> int:
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    )

    parser = build_parser()
    try:
        opts = parser.parse_args(argv)
    except SystemExit as e:
        return 2 if e.code else 0

    try:
        values = coerce_args(opts.operation, opts.args)
    except ValueError as e:
        logger.error(str(e))
        return 2

    client = client or AltsTradeAdapter.from_env(SETTINGS)
    try:
        result = getattr(client, opts.operation)(*values).result()
    except AltsTradeError as e:
        logger.error(f"{opts.operation} failed: {e}")
        return 1
    finally:
        client.close()

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
