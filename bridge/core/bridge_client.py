#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bridge Client
Persistent websocket connection to the Rose host with an outbound queue
that survives reconnects
"""

import asyncio
import enum
import json
from collections import deque
from typing import Any, Awaitable, Callable, Deque, List, Optional, Union

from websockets.asyncio.client import connect as ws_connect
from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI

from config import (
    BRIDGE_OPEN_TIMEOUT_S,
    BRIDGE_PING_INTERVAL_S,
    BRIDGE_PING_TIMEOUT_S,
    BRIDGE_RECONNECT_DELAY_S,
)
from utils.core.logging import get_logger
from utils.core.scheduler import AsyncioScheduler, Scheduler

from .port_resolver import BridgeEndpoint

log = get_logger()


class ConnectionState(enum.Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


MessageHandler = Callable[[dict], None]


async def _default_connect(url: str):
    return await ws_connect(
        url,
        open_timeout=BRIDGE_OPEN_TIMEOUT_S,
        ping_interval=BRIDGE_PING_INTERVAL_S,
        ping_timeout=BRIDGE_PING_TIMEOUT_S,
        # The bridge is local; never route it through a proxy
        proxy=None,
    )


class BridgeClient:
    """Owns the socket, the reconnect policy and the outbound queue"""

    def __init__(
        self,
        endpoint: BridgeEndpoint,
        scheduler: Optional[Scheduler] = None,
        reconnect_delay: float = BRIDGE_RECONNECT_DELAY_S,
        connect: Optional[Callable[[str], Awaitable[Any]]] = None,
    ):
        """Initialize bridge client

        Args:
            endpoint: Resolved bridge endpoint
            scheduler: Timer source for reconnect attempts
            reconnect_delay: Fixed delay between reconnect attempts
            connect: Coroutine factory opening a websocket for a URL
        """
        self.endpoint = endpoint
        self.scheduler = scheduler or AsyncioScheduler()
        self.reconnect_delay = reconnect_delay
        self._connect = connect or _default_connect

        self._socket = None
        self._state = ConnectionState.CLOSED
        self._outbound: Deque[str] = deque()
        self._handlers: List[MessageHandler] = []
        self._open_listeners: List[Callable[[], None]] = []
        self._task: Optional[asyncio.Task] = None
        self._flush_task: Optional[asyncio.Task] = None
        self._flush_socket = None
        self._retry_scheduled = False
        self._closed = False

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is ConnectionState.OPEN and self._socket is not None

    @property
    def pending(self) -> List[str]:
        """Messages waiting for the next open connection"""
        return list(self._outbound)

    def add_handler(self, handler: MessageHandler) -> None:
        self._handlers.append(handler)

    def add_open_listener(self, listener: Callable[[], None]) -> None:
        self._open_listeners.append(listener)

    # ------------------------------------------------------------- lifecycle

    def connect(self) -> None:
        """Open a connection unless one is already open or being opened"""
        if self._closed or self._state is not ConnectionState.CLOSED:
            return
        self._state = ConnectionState.CONNECTING
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        url = self.endpoint.ws_url
        try:
            socket = await self._connect(url)
        except (OSError, asyncio.TimeoutError, InvalidHandshake, InvalidURI) as e:
            log.debug(f"[bridge] Connection to {url} failed: {e}")
            self._on_closed()
            return

        if self._closed:
            await socket.close()
            self._on_closed()
            return

        self._socket = socket
        self._state = ConnectionState.OPEN
        self._on_open()
        try:
            async for raw in socket:
                self._dispatch(raw)
        except ConnectionClosed as e:
            log.warning("WebSocket bridge error", extra={"data": {"error": str(e)}})
        finally:
            if self._socket is socket:
                self._on_closed()

    def _on_open(self) -> None:
        log.info("WebSocket bridge connected")
        self._start_flush()
        for listener in list(self._open_listeners):
            try:
                listener()
            except Exception as e:  # noqa: BLE001
                log.error(f"[bridge] Open listener failed: {e}", exc_info=True)

    def _on_closed(self) -> None:
        was_open = self._state is ConnectionState.OPEN
        self._state = ConnectionState.CLOSED
        self._socket = None
        if was_open:
            log.info("WebSocket bridge closed, reconnecting...")
        self._schedule_retry()

    def _schedule_retry(self) -> None:
        if self._closed or self._retry_scheduled:
            return
        self._retry_scheduled = True
        self.scheduler.call_later(self.reconnect_delay, self._retry)

    def _retry(self) -> None:
        self._retry_scheduled = False
        if not self.ready:
            self.connect()

    async def close(self) -> None:
        """Stop reconnecting and close the socket"""
        self._closed = True
        socket = self._socket
        self._socket = None
        self._state = ConnectionState.CLOSED
        if socket is not None:
            await socket.close()
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    # --------------------------------------------------------------- inbound

    def _dispatch(self, raw: Union[str, bytes]) -> None:
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as e:
            log.error("Failed to parse bridge message", extra={"data": {"error": str(e)}})
            return
        if not isinstance(payload, dict):
            log.error("Failed to parse bridge message", extra={"data": {"error": "not an object"}})
            return
        for handler in list(self._handlers):
            try:
                handler(payload)
            except Exception as e:  # noqa: BLE001
                log.error(f"[bridge] Handler failed for {payload.get('type')!r}: {e}", exc_info=True)

    # -------------------------------------------------------------- outbound

    def send(self, message: Union[dict, str]) -> None:
        """Send now if connected, otherwise queue for the next connection"""
        if isinstance(message, dict):
            message = json.dumps(message)
        self._outbound.append(message)
        if self.ready:
            self._start_flush()

    def _start_flush(self) -> None:
        running = self._flush_task is not None and not self._flush_task.done()
        if running and self._flush_socket is self._socket:
            return
        self._flush_socket = self._socket
        self._flush_task = asyncio.get_running_loop().create_task(self._flush(self._socket))

    async def _flush(self, socket) -> None:
        # Head of the queue is only dropped once the socket accepted it,
        # so a failed send is retried on the next connection
        while self._outbound and self._socket is socket and socket is not None:
            message = self._outbound[0]
            try:
                await socket.send(message)
            except ConnectionClosed:
                return
            if self._socket is not socket:
                return
            self._outbound.popleft()
