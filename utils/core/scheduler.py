#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Timer Scheduling
Single-threaded delayed callbacks on top of the asyncio event loop
"""

import asyncio
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything able to run a callback later on the plugin's event loop"""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by loop.call_later

    Callbacks run on the loop thread one at a time, so handlers never
    interleave. Stale callbacks are expected to check their own guards
    when they fire instead of being cancelled.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)
