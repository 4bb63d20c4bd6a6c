#!/usr/bin/env python3
"""
Find the fastest Cloudflare edge IPs.

This tool collects candidate IPs from the configured public sources, probes
each one over HTTPS and prints the fastest responders. Every run also appends
a JSONL and a text report to the configured report directory.

Usage:
    python3 find_fast_ips.py [--config config.json] [--limit 25] [--concurrency 10] [--json]
"""

import argparse
import asyncio
import json
import sys

from cfip_finder.config import Config
from cfip_finder.pipeline import run_pipeline


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Find the fastest CDN edge IPs")
    parser.add_argument(
        "--config",
        default="config.json",
        help="Path to configuration file (default: config.json)"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of fastest IPs to keep (overrides top_n in config)"
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Number of IPs tested at once per group (overrides concurrency in config)"
    )
    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Skip writing run reports to the report directory"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the ranked result as JSON instead of progress output"
    )
    parser.add_argument(
        "--publish-metrics",
        action="store_true",
        help="Publish probe delays to CloudWatch (needs 'cloudwatch' in config)"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = Config(args.config)

    if args.limit is not None and args.limit < 0:
        print(f"[ERROR] --limit cannot be negative, got {args.limit}")
        sys.exit(1)
    if args.concurrency is not None and args.concurrency < 1:
        print(f"[ERROR] --concurrency must be at least 1, got {args.concurrency}")
        sys.exit(1)
    if args.publish_metrics and config.cloudwatch_region is None:
        print("[ERROR] --publish-metrics needs a 'cloudwatch' section with a 'region' in the config")
        sys.exit(1)

    try:
        _, batch = asyncio.run(run_pipeline(
            config,
            limit=args.limit,
            concurrency=args.concurrency,
            write_reports=not args.no_report,
            publish_metrics=args.publish_metrics,
            show_progress=not args.json,
        ))
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted")
        sys.exit(130)

    if args.json:
        print(json.dumps(batch.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
