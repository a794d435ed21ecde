#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
State Package
Plugin state owned by the view synchronizer
"""

from .plugin_state import (
    AssetCacheEntry,
    ClientPhaseState,
    HistoricState,
    RetryCounter,
    SyncState,
)

__all__ = [
    'AssetCacheEntry',
    'ClientPhaseState',
    'HistoricState',
    'RetryCounter',
    'SyncState',
]
