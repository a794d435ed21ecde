#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
UI Package - Client page integration

Modules:
- dom: Document interface and the in-memory implementation
- decoration: Historic flag styles on the rewards element
- target_locator: Search for the rewards element
- skin_label: Transient historic skin name label
- view_synchronizer: Phase/state machine tying the above together
"""

from ui.decoration import DecorationApplier
from ui.dom import Document, Element, MutationObserver
from ui.skin_label import SkinNameLabel
from ui.styles import inject_stylesheet
from ui.target_locator import RewardsElementLocator
from ui.view_synchronizer import SyncTimings, ViewSynchronizer

__all__ = [
    'DecorationApplier',
    'Document',
    'Element',
    'MutationObserver',
    'SkinNameLabel',
    'inject_stylesheet',
    'RewardsElementLocator',
    'SyncTimings',
    'ViewSynchronizer',
]
