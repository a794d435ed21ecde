#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line argument parsing
"""

import argparse
from typing import Optional, Sequence

from config import DEFAULT_VERBOSE


def setup_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse and return command line arguments"""
    ap = argparse.ArgumentParser(
        description="Rose Historic Mode - historic flag on the skin selection rewards icon"
    )

    # General arguments
    ap.add_argument("--verbose", action="store_true", default=DEFAULT_VERBOSE,
                   help="Enable verbose logging (developer mode - shows all technical details)")
    ap.add_argument("--debug", action="store_true", default=False,
                   help="Enable ultra-detailed debug logging (includes trace level records)")
    ap.add_argument("--dev", action="store_true", default=False,
                   help="Development run: do not write log files")

    # Bridge arguments
    ap.add_argument("--port", type=int, default=None,
                   help="Connect to this bridge port and skip discovery")
    ap.add_argument("--reconnect-delay", type=float, default=None,
                   help="Seconds between bridge reconnect attempts (overrides config.ini)")

    return ap.parse_args(argv)
