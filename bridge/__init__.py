#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bridge integration package
Connection to the Rose host: discovery, websocket client and telemetry
"""

from .core.bridge_client import BridgeClient
from .core.port_resolver import BridgeEndpoint, BridgePortResolver

__all__ = ["BridgeClient", "BridgeEndpoint", "BridgePortResolver"]
