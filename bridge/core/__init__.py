#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bridge Core Package
Contains port discovery, local storage and the websocket bridge client
"""

from .bridge_client import BridgeClient, ConnectionState
from .port_resolver import BridgeEndpoint, BridgePortResolver, parse_port
from .storage import LocalStorage

__all__ = [
    'BridgeClient',
    'ConnectionState',
    'BridgeEndpoint',
    'BridgePortResolver',
    'parse_port',
    'LocalStorage',
]
