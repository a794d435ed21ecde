#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bridge Communication Package
Contains inbound message routing and outbound log telemetry
"""

from .message_router import MessageRouter
from .telemetry import BridgeLogHandler, attach_bridge_logging, build_log_payload

__all__ = [
    'MessageRouter',
    'BridgeLogHandler',
    'attach_bridge_logging',
    'build_log_payload',
]
