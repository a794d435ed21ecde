#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Initialization setup (logging)
"""

import argparse

from utils.core.logging import cleanup_logs, get_logger, log_section, setup_logging

log = get_logger()


def get_log_mode_from_args(args: argparse.Namespace) -> str:
    if args.debug:
        return 'debug'
    if args.verbose:
        return 'verbose'
    return 'customer'


def setup_logging_and_cleanup(args: argparse.Namespace) -> None:
    """Setup logging and clean up old logs"""
    # Clean up old log files on startup
    removed = cleanup_logs()

    log_mode = get_log_mode_from_args(args)

    # Setup logging (skip log files in dev mode)
    setup_logging(log_mode, write_logs=not getattr(args, "dev", False))

    if log_mode != 'customer':
        log_section(log, "Historic Mode Starting", "🚀", {
            "Verbose Mode": "Enabled" if args.verbose else "Disabled",
            "Bridge Port": args.port if args.port else "auto-discovery",
            "Old Logs Removed": removed,
        })
