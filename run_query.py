#!/usr/bin/env python3
"""
Run a single query against Athena and print the rows
"""

import asyncio
import argparse
import logging
import sys

from athena_runner import Config, QueryService, ReusePolicy, QueryServiceError


def format_row(row) -> str:
    return " | ".join(cell.get('VarCharValue', '') for cell in row.get('Data', []))


async def main():
    parser = argparse.ArgumentParser(description="Athena Query Runner")
    parser.add_argument('--config', default='config',
                       help='Configuration directory (default: config)')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--sql', help='Query text')
    source.add_argument('--file', help='File containing the query')
    parser.add_argument('--reuse-minutes', type=int, default=0,
                       help='Reuse results newer than this many minutes (default: off)')
    parser.add_argument('--timeout', type=float, default=None,
                       help='Give up waiting after this many seconds')
    parser.add_argument('--all-pages', action='store_true',
                       help='Fetch every result page instead of the first')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    if args.file:
        with open(args.file, 'r') as f:
            sql = f.read()
    else:
        sql = args.sql

    reuse = None
    if args.reuse_minutes > 0:
        reuse = ReusePolicy(enabled=True, max_age_minutes=args.reuse_minutes)

    service = QueryService.from_config(Config(args.config))

    try:
        execution_id = await service.submit(sql, reuse)
        print(f"Execution ID: {execution_id}")
        await service.poller.wait(execution_id, timeout=args.timeout)
        if args.all_pages:
            rows = await service.fetcher.fetch_all(execution_id)
        else:
            rows = await service.fetcher.fetch(execution_id)
    except QueryServiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("-" * 80)
    for row in rows:
        print(format_row(row))
    print("-" * 80)
    print(f"{len(rows)} rows")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
