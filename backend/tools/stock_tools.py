#!/usr/bin/env python3
"""
Run the stock tools against a live API from the command line.

Usage:
    python tools/stock_tools.py list
    python tools/stock_tools.py call list_low_stock_products
    python tools/stock_tools.py call update_stock --arg product_id=1 --arg movement_type=StockOut --arg quantity=2
"""
import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import argparse
import json

from stockledger.client.stock_api import StockApiClient
from stockledger.client.tools import TOOLS, call_tool
from stockledger.config import settings
from stockledger.logging_setup import setup_logging


def parse_args_kv(pairs):
    """``key=value`` pairs into a dict; values are decoded as JSON when possible."""
    out = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep:
            raise SystemExit(f"--arg expects key=value, got {pair!r}")
        try:
            out[key] = json.loads(raw)
        except ValueError:
            out[key] = raw
    return out


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Stock API tools")
    parser.add_argument("--base-url", default=settings.STOCK_API_URL)
    sub = parser.add_subparsers(dest="mode", required=True)

    sub.add_parser("list", help="list the available tools")

    c = sub.add_parser("call", help="run one tool and print its result")
    c.add_argument("tool", choices=sorted(TOOLS))
    c.add_argument("--arg", action="append", metavar="KEY=VALUE")

    args = parser.parse_args(argv)
    setup_logging("WARNING")

    if args.mode == "list":
        for name, tool in TOOLS.items():
            print(f"{name:26} {tool.description}")
        return 0

    client = StockApiClient(base_url=args.base_url)
    result = call_tool(args.tool, parse_args_kv(args.arg), client=client)
    print(json.dumps(result, indent=2, default=str))
    return 0 if result.get("success") else 2


if __name__ == "__main__":
    sys.exit(main())
