#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Historic Mode plugin
Wires discovery, the bridge, message routing and the view synchronizer together
"""

import asyncio
import logging
from typing import Callable, Optional

from bridge.communication.message_router import MessageRouter
from bridge.communication.telemetry import attach_bridge_logging
from bridge.core.bridge_client import BridgeClient
from bridge.core.port_resolver import BridgeEndpoint, BridgePortResolver
from config import APP_VERSION, LOG_PREFIX
from ui.skin_label import SkinNameLabel
from ui.styles import inject_stylesheet
from ui.view_synchronizer import ViewSynchronizer
from utils.core.logging import get_logger, log_event, log_section, log_success
from utils.core.scheduler import AsyncioScheduler, Scheduler

from .settings import PluginSettings

log = get_logger()


class HistoricModePlugin:
    """Owns every component for one plugin session"""

    def __init__(
        self,
        document,
        settings: Optional[PluginSettings] = None,
        scheduler: Optional[Scheduler] = None,
        resolver: Optional[BridgePortResolver] = None,
        bridge_factory: Optional[Callable[[BridgeEndpoint], BridgeClient]] = None,
    ):
        """Initialize plugin

        Args:
            document: Document of the client page
            settings: Effective plugin settings
            scheduler: Timer source shared by every component
            resolver: Bridge port resolver (built lazily when discovery is needed)
            bridge_factory: Builds the bridge client for a resolved endpoint
        """
        self.document = document
        self.settings = settings or PluginSettings()
        self.scheduler = scheduler or AsyncioScheduler()
        self._resolver = resolver
        self._bridge_factory = bridge_factory

        self.endpoint: Optional[BridgeEndpoint] = None
        self.bridge: Optional[BridgeClient] = None
        self.synchronizer: Optional[ViewSynchronizer] = None
        self.router: Optional[MessageRouter] = None
        self._log_handler: Optional[logging.Handler] = None

    @property
    def resolver(self) -> BridgePortResolver:
        if self._resolver is None:
            self._resolver = BridgePortResolver(timeout=self.settings.probe_timeout)
        return self._resolver

    def _make_bridge(self, endpoint: BridgeEndpoint) -> BridgeClient:
        if self._bridge_factory is not None:
            return self._bridge_factory(endpoint)
        return BridgeClient(endpoint, self.scheduler, reconnect_delay=self.settings.reconnect_delay)

    async def resolve_endpoint(self) -> BridgeEndpoint:
        if self.settings.port:
            log.info(f"[bridge] Using bridge port from command line: {self.settings.port}")
            return BridgeEndpoint(self.settings.port)
        # requests is blocking; keep the loop free while probing
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.resolver.resolve)

    async def start(self) -> None:
        log.info(f"{LOG_PREFIX} Initializing...")

        self.endpoint = await self.resolve_endpoint()
        self.bridge = self._make_bridge(self.endpoint)
        self._log_handler = attach_bridge_logging(self.bridge)

        self.synchronizer = ViewSynchronizer(
            self.document,
            self.bridge,
            self.scheduler,
            label=SkinNameLabel(self.document, self.scheduler, timeout=self.settings.label_timeout),
            timings=self.settings.timings,
        )
        self.router = MessageRouter(self.synchronizer)
        self.bridge.add_handler(self.router.handle_message)
        self.bridge.add_open_listener(self._on_bridge_open)

        self.synchronizer.reset()
        if inject_stylesheet(self.document):
            log.debug("[ui] Injected historic flag stylesheet")

        self.bridge.connect()
        self.synchronizer.request_asset()

        log_section(log, "Historic Mode Initialized", "🏳", {
            "Version": APP_VERSION,
            "Bridge": self.endpoint.ws_url,
        })

    def _on_bridge_open(self) -> None:
        log_event(log, "Connected to Rose", "🔌", {"Bridge": self.endpoint.ws_url})

    async def stop(self) -> None:
        if self.synchronizer is not None:
            self.synchronizer.stop()
        if self._log_handler is not None:
            get_logger().removeHandler(self._log_handler)
            self._log_handler = None
        if self.bridge is not None:
            await self.bridge.close()
        log_success(log, "Historic Mode stopped", "👋")
