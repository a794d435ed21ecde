#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Message Router
Routes inbound bridge messages to the view synchronizer
"""

from utils.core.logging import get_logger

log = get_logger()


class MessageRouter:
    """Dispatches parsed bridge payloads by their type field"""

    def __init__(self, synchronizer):
        """Initialize message router

        Args:
            synchronizer: View synchronizer receiving state updates
        """
        self.synchronizer = synchronizer

    def handle_message(self, payload: dict) -> None:
        """Handle a parsed bridge message

        Args:
            payload: Decoded JSON object
        """
        payload_type = payload.get("type")

        if payload_type == "historic-state":
            self.synchronizer.handle_historic_state(payload)
        elif payload_type == "phase-change":
            self.synchronizer.handle_phase_change(payload)
        elif payload_type == "local-asset-url":
            self.synchronizer.handle_local_asset_url(payload)
        else:
            # Rose broadcasts to every plugin; most types are not ours
            log.trace(f"[router] Ignoring message type: {payload_type!r}")

    __call__ = handle_message
