#!/usr/bin/env python3
"""
runt: run every test executable under a batch directory.

  runt BATCH_DIR             # dispatch, print one json_event per executable
  runt --dry-run BATCH_DIR   # list what would run
  runt --summary BATCH_DIR   # also print a table on stderr
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from runt.core.configuration import load_config
from runt.core.driver import Driver
from runt.core.errors import EventSerializationError, RuntError
from runt.core.report import render_summary
from runt.utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="runt", description="Run a batch of test executables in parallel")
    parser.add_argument("batch", help="Batch directory containing test executables")
    parser.add_argument("--config", default=None, help="YAML configuration file (default: $RUNT_CONFIG)")
    parser.add_argument("--max-parallel", type=int, default=None, help="Max concurrently running children (default: 4)")
    parser.add_argument("--source", default=None, help="@source label for emitted events")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None)
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--summary", action="store_true", help="Print a result table on stderr")
    parser.add_argument("--strict", action="store_true", help="Exit 1 if any executable failed")
    parser.add_argument("--dry-run", action="store_true", help="Only list discovered executables")
    return parser


def problem(parser: argparse.ArgumentParser, err: BaseException) -> int:
    print(str(err), file=sys.stderr)
    print(f"USAGE: {parser.prog} (options) batch-dir", file=sys.stderr)
    parser.print_usage(sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config).override(
            max_parallel=args.max_parallel,
            source=args.source,
            log_level=args.log_level,
            log_file=args.log_file,
        )
    except RuntError as e:
        return problem(parser, e)

    # With a log file, the file gets cfg.log_level and stderr stays at WARNING
    console_level = "WARNING" if cfg.log_file else cfg.log_level
    try:
        setup_logging(level=cfg.log_level, log_file=cfg.log_file, console_level=console_level)
    except OSError as e:
        return problem(parser, e)
    log = logging.getLogger("runt")

    driver = Driver(config=cfg)
    try:
        found = driver.use_batch(args.batch)
    except (RuntError, OSError) as e:
        return problem(parser, e)

    if args.dry_run:
        for path in found:
            print(path)
        return 0

    results = driver.launch_suites()
    try:
        lines = driver.json_events()
    except EventSerializationError as e:
        log.error("Event output failed: %s", e)
        print(str(e), file=sys.stderr)
        return 1
    for line in lines:
        print(line)
    sys.stdout.flush()

    if args.summary:
        sys.stderr.write(render_summary(results))

    failed = [r for r in results if not r.ok]
    if args.strict and failed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
