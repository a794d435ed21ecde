#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for Rose Historic Mode
"""

import sys
from typing import Optional, Sequence

# Python version check
MIN_PYTHON = (3, 9)
if sys.version_info < MIN_PYTHON:
    raise RuntimeError(
        f"Rose Historic Mode requires Python {MIN_PYTHON[0]}.{MIN_PYTHON[1]} or newer. "
        "Please upgrade your interpreter."
    )

from .setup.arguments import setup_arguments
from .setup.initialization import setup_logging_and_cleanup
from .core.plugin import HistoricModePlugin
from .core.settings import PluginSettings
from .runtime.loop import run_plugin

from ui.dom import Document
from utils.core.logging import get_logger, shutdown_logging

log = get_logger()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Program entry point that prepares and launches the plugin."""
    # Parse arguments
    args = setup_arguments(argv)

    # Setup logging and cleanup
    setup_logging_and_cleanup(args)

    try:
        settings = PluginSettings.load(args)
        # Headless run: the in-memory document stands in for the client page
        plugin = HistoricModePlugin(Document(), settings)
        run_plugin(plugin)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        # Top-level exception handler to catch any unhandled crashes
        import traceback

        error_msg = f"""
================================================================================
FATAL ERROR - Rose Historic Mode Crashed
================================================================================
Error: {e}
Type: {type(e).__name__}

Traceback:
{traceback.format_exc()}
================================================================================
"""
        print(error_msg, file=sys.stderr)
        sys.exit(1)
