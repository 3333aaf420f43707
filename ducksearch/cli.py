"""Command-line search: `ducksearch "query"`."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from ducksearch.config.loader import load_config
from ducksearch.engine import DuckDuckGoClient, DuckDuckGoSearchError, ResultRecord, SearchOptions
from ducksearch.engine.url import SAFE_SEARCH_PARAM


def format_results(query: str, results: list[ResultRecord]) -> str:
    """Render results as a numbered plain-text list."""
    if not results:
        return f"No results for: {query}"

    lines = [f"Results for: {query}\n"]
    for i, item in enumerate(results, 1):
        lines.append(f"{i}. {item.title}\n   {item.url}")
        if item.description:
            lines.append(f"   {item.description}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ducksearch", description="Search DuckDuckGo from the terminal.")
    parser.add_argument("query", nargs="+")
    parser.add_argument("-n", "--max-results", type=int, default=None)
    parser.add_argument("--locale", default=None, help="kl region code, e.g. us-en")
    parser.add_argument("--offset", type=int, default=None)
    parser.add_argument("--safe-search", choices=tuple(SAFE_SEARCH_PARAM), default=None)
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    query = " ".join(args.query)
    client = DuckDuckGoClient(load_config(args.config))
    options = SearchOptions(
        locale=args.locale,
        offset=args.offset,
        safe_search=args.safe_search,
        max_results=args.max_results,
    )

    try:
        results = asyncio.run(client.search(query, options))
    except DuckDuckGoSearchError as e:
        detail = f"{e.message}: {e.cause}" if e.cause else e.message
        print(f"Error: {detail}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
    else:
        print(format_results(query, results))
    return 0
