#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main application loop
"""

import asyncio
from typing import Optional

from main.core.plugin import HistoricModePlugin
from main.core.signals import setup_signal_handlers
from utils.core.logging import get_logger, log_section

log = get_logger()


async def serve(plugin: HistoricModePlugin, stop_event: Optional[asyncio.Event] = None) -> None:
    """Run the plugin until stop_event is set"""
    stop_event = stop_event or asyncio.Event()
    setup_signal_handlers(asyncio.get_running_loop(), stop_event)
    try:
        await plugin.start()
        await stop_event.wait()
    finally:
        await plugin.stop()


def run_plugin(plugin: HistoricModePlugin) -> None:
    """Run the plugin on a fresh event loop"""
    try:
        asyncio.run(serve(plugin))
    except KeyboardInterrupt:
        log_section(log, "Shutting Down (Keyboard Interrupt)", "⚠️")
