#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Signal handlers for graceful shutdown
"""

import asyncio
import signal

from utils.core.logging import get_logger

log = get_logger()


def setup_signal_handlers(loop: asyncio.AbstractEventLoop, stop_event: asyncio.Event) -> None:
    """Set stop_event on SIGINT/SIGTERM so the plugin can shut down cleanly"""
    def _request_stop(signum: int) -> None:
        if stop_event.is_set():
            return  # Prevent multiple shutdown attempts
        log.info(f"Received signal {signum}, initiating graceful shutdown...")
        stop_event.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, _request_stop, signum)
        except (NotImplementedError, RuntimeError):
            # Windows event loops have no add_signal_handler; Ctrl+C still
            # arrives as KeyboardInterrupt in run_plugin
            log.debug(f"Signal handler for {signum} not supported on this platform")
