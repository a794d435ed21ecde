#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core subpackage
"""

from .plugin import HistoricModePlugin
from .settings import PluginSettings
from .signals import setup_signal_handlers

__all__ = [
    'HistoricModePlugin',
    'PluginSettings',
    'setup_signal_handlers',
]
