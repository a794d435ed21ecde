#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bridge Port Discovery
Finds the port the Rose host is listening on (cache, default port, sweep, legacy sweep)
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, Optional

import requests

from config import (
    BRIDGE_DEFAULT_PORT,
    BRIDGE_HOST,
    BRIDGE_PORT_PATH,
    BRIDGE_PORT_STORAGE_KEY,
    DISCOVERY_END_PORT,
    DISCOVERY_PROBE_TIMEOUT_S,
    DISCOVERY_START_PORT,
    LEGACY_PORT_PATH,
)
from utils.core.logging import get_logger

from .storage import LocalStorage

log = get_logger()


@dataclass(frozen=True)
class BridgeEndpoint:
    """Where the Rose bridge can be reached"""
    port: int
    host: str = BRIDGE_HOST

    @property
    def ws_url(self) -> str:
        return f"ws://{self.host}:{self.port}"

    def http_url(self, path: str) -> str:
        return f"http://{self.host}:{self.port}{path}"


def parse_port(text: str) -> Optional[int]:
    """Parse a discovery response body into a port number"""
    try:
        port = int(text.strip())
    except (AttributeError, ValueError):
        return None
    if 0 < port <= 65535:
        return port
    return None


class BridgePortResolver:
    """Resolves the bridge endpoint; never raises"""

    def __init__(
        self,
        storage: Optional[LocalStorage] = None,
        session: Optional[requests.Session] = None,
        host: str = BRIDGE_HOST,
        default_port: int = BRIDGE_DEFAULT_PORT,
        start_port: int = DISCOVERY_START_PORT,
        end_port: int = DISCOVERY_END_PORT,
        timeout: float = DISCOVERY_PROBE_TIMEOUT_S,
    ):
        """Initialize resolver

        Args:
            storage: Persisted key/value store holding the cached port
            session: HTTP session used for probes
            host: Host the Rose bridge runs on
            default_port: Port probed first and returned when everything fails
            start_port: First port of the discovery sweep
            end_port: Last port of the discovery sweep (inclusive)
            timeout: Per-probe timeout in seconds
        """
        self.storage = storage or LocalStorage()
        self.session = session or requests.Session()
        # Local discovery must never go through a proxy
        self.session.trust_env = False
        self.host = host
        self.default_port = default_port
        self.start_port = start_port
        self.end_port = end_port
        self.timeout = timeout

    @property
    def candidate_ports(self) -> list[int]:
        return list(range(self.start_port, self.end_port + 1))

    def resolve(self) -> BridgeEndpoint:
        """Determine the bridge endpoint, falling back to the default port"""
        port = self._from_cache()
        if port is not None:
            log.info(f"[bridge] Loaded bridge port from cache: {port}")
            return BridgeEndpoint(port, self.host)

        port = self.probe(self.default_port, BRIDGE_PORT_PATH)
        if port is not None:
            self._remember(port)
            log.info(f"[bridge] Loaded bridge port from default port: {port}")
            return BridgeEndpoint(port, self.host)

        port = self.sweep(BRIDGE_PORT_PATH)
        if port is not None:
            self._remember(port)
            log.info(f"[bridge] Loaded bridge port: {port}")
            return BridgeEndpoint(port, self.host)

        port = self.sweep(LEGACY_PORT_PATH)
        if port is not None:
            self._remember(port)
            log.info(f"[bridge] Loaded bridge port (legacy): {port}")
            return BridgeEndpoint(port, self.host)

        log.warning(f"[bridge] Failed to load bridge port, using default ({self.default_port})")
        return BridgeEndpoint(self.default_port, self.host)

    def _from_cache(self) -> Optional[int]:
        cached = parse_port(self.storage.get_item(BRIDGE_PORT_STORAGE_KEY) or "")
        if cached is None:
            return None
        port = self.probe(cached, BRIDGE_PORT_PATH)
        if port is None:
            log.debug(f"[bridge] Cached bridge port {cached} is stale, discarding")
            self.storage.remove_item(BRIDGE_PORT_STORAGE_KEY)
        return port

    def _remember(self, port: int) -> None:
        self.storage.set_item(BRIDGE_PORT_STORAGE_KEY, port)

    def probe(self, port: int, path: str) -> Optional[int]:
        """Ask one candidate port for the bridge port

        Non-2xx statuses, timeouts, connection errors and malformed bodies
        all count as a failed probe.
        """
        url = BridgeEndpoint(port, self.host).http_url(path)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            log.trace(f"[bridge] Probe {url} failed: {e}")
            return None
        if not response.ok:
            log.trace(f"[bridge] Probe {url} returned HTTP {response.status_code}")
            return None
        return parse_port(response.text)

    def sweep(self, path: str, ports: Optional[Iterable[int]] = None) -> Optional[int]:
        """Probe every candidate port concurrently and return the first answer"""
        candidates = list(ports) if ports is not None else self.candidate_ports
        if not candidates:
            return None
        executor = ThreadPoolExecutor(max_workers=len(candidates), thread_name_prefix="BridgeProbe")
        try:
            futures = [executor.submit(self.probe, port, path) for port in candidates]
            for future in as_completed(futures):
                port = future.result()
                if port is not None:
                    return port
            return None
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
