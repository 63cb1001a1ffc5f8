#!/usr/bin/env python3
"""
Rightmove tool server entry point.

Usage:
  python -m rightmove_mcp                      # serve JSON-RPC on stdio
  python -m rightmove_mcp tools                # print the tool schemas
  python -m rightmove_mcp url "GU9 0LA" --min-price 1000000 --radius 1
  python -m rightmove_mcp call search_properties '{"location": "London"}'

Add -v for INFO logging, -vv for DEBUG (always on stderr).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import Settings
from .errors import InvalidArguments
from .models import PROPERTY_TYPES, SORT_TYPES
from .server import StdioServer
from .tools import ToolRouter, parse_search_params
from .urls import SearchUrlBuilder


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="rightmove-mcp", description="Rightmove search/detail/statistics tools over JSON-RPC.")
    p.add_argument("--verbosity", "-v", action="count", default=0, help="-v for INFO, -vv for DEBUG")
    sub = p.add_subparsers(dest="command")

    sub.add_parser("serve", help="Serve tools over line-delimited JSON-RPC on stdio (default)")
    sub.add_parser("tools", help="Print the tool schemas as JSON")

    u = sub.add_parser("url", help="Print the search URL for the given filters (no network)")
    u.add_argument("location", help="Place name or postcode, e.g. 'London' or 'GU9 0LA'")
    u.add_argument("--min-price", type=float)
    u.add_argument("--max-price", type=float)
    u.add_argument("--property-type", choices=PROPERTY_TYPES)
    u.add_argument("--bedrooms", type=int)
    u.add_argument("--radius", type=float)
    u.add_argument("--sort-type", type=int, choices=SORT_TYPES)
    u.add_argument("--index", type=int)

    c = sub.add_parser("call", help="Dispatch one tool call and print its result")
    c.add_argument("tool", help="search_properties | get_property_details | get_area_statistics")
    c.add_argument("arguments", nargs="?", default="{}", help="JSON object of tool arguments")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbosity or 0)
    settings = Settings.from_env()

    if args.command == "tools":
        print(json.dumps({"tools": ToolRouter(settings).list_tools()}, indent=2))
        return 0

    if args.command == "url":
        raw = {
            "location": args.location,
            "minPrice": args.min_price,
            "maxPrice": args.max_price,
            "propertyType": args.property_type,
            "bedrooms": args.bedrooms,
            "radius": args.radius,
            "sortType": args.sort_type,
            "index": args.index,
        }
        try:
            params = parse_search_params(raw, settings.page_size)
        except InvalidArguments as e:
            print(f"❌ {e.message}", file=sys.stderr)
            return 2
        builder = SearchUrlBuilder(settings)
        print(builder.build(params))
        print(builder.build_manual(params))
        return 0

    if args.command == "call":
        try:
            tool_args = json.loads(args.arguments)
        except ValueError as e:
            print(f"❌ Invalid arguments JSON: {e}", file=sys.stderr)
            return 2
        outcome = ToolRouter(settings).dispatch(args.tool, tool_args)
        print(json.dumps(outcome.to_response(), indent=2, ensure_ascii=False))
        return 1 if outcome.is_error else 0

    StdioServer(ToolRouter(settings)).serve()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
