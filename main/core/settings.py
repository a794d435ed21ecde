#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Plugin settings
Effective timings built from constants, config.ini overrides and CLI flags
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from config import (
    BRIDGE_RECONNECT_DELAY_S,
    CONFIG_SECTION,
    DISCOVERY_PROBE_TIMEOUT_S,
    HISTORIC_LATE_SYNC_DELAY_S,
    HISTORIC_SYNC_DELAY_S,
    MUTATION_SYNC_DELAY_S,
    PHASE_ENTER_SYNC_DELAY_S,
    SKIN_LABEL_TIMEOUT_S,
    SYNC_RETRY_DELAY_S,
    SYNC_RETRY_LIMIT,
    get_config_float,
    get_config_int,
)
from ui.view_synchronizer import SyncTimings
from utils.core.logging import get_logger

log = get_logger()


@dataclass
class PluginSettings:
    """Everything the plugin needs to know before it starts"""
    port: Optional[int] = None
    reconnect_delay: float = BRIDGE_RECONNECT_DELAY_S
    probe_timeout: float = DISCOVERY_PROBE_TIMEOUT_S
    label_timeout: float = SKIN_LABEL_TIMEOUT_S
    timings: SyncTimings = field(default_factory=SyncTimings)

    @classmethod
    def load(cls, args=None, config_path: Optional[Path] = None) -> "PluginSettings":
        """Build settings from config.ini, then apply command line overrides

        Args:
            args: Parsed command line arguments (optional)
            config_path: Explicit config.ini location (defaults to the user data dir)
        """
        def _float(option: str, default: float) -> float:
            value = get_config_float(CONFIG_SECTION, option, default, config_path)
            if value < 0:
                log.warning(f"[config] Ignoring negative {option}={value}, using {default}")
                return default
            return value

        retry_limit = get_config_int(CONFIG_SECTION, "sync_retry_limit", SYNC_RETRY_LIMIT, config_path)
        if retry_limit < 0:
            log.warning(f"[config] Ignoring negative sync_retry_limit={retry_limit}, using {SYNC_RETRY_LIMIT}")
            retry_limit = SYNC_RETRY_LIMIT

        settings = cls(
            reconnect_delay=_float("reconnect_delay_s", BRIDGE_RECONNECT_DELAY_S),
            probe_timeout=_float("probe_timeout_s", DISCOVERY_PROBE_TIMEOUT_S),
            label_timeout=_float("skin_label_timeout_s", SKIN_LABEL_TIMEOUT_S),
            timings=SyncTimings(
                phase_enter_delay=_float("phase_enter_sync_delay_s", PHASE_ENTER_SYNC_DELAY_S),
                historic_delay=_float("historic_sync_delay_s", HISTORIC_SYNC_DELAY_S),
                historic_late_delay=_float("historic_late_sync_delay_s", HISTORIC_LATE_SYNC_DELAY_S),
                retry_delay=_float("sync_retry_delay_s", SYNC_RETRY_DELAY_S),
                retry_limit=retry_limit,
                mutation_delay=_float("mutation_sync_delay_s", MUTATION_SYNC_DELAY_S),
            ),
        )

        if args is not None:
            if getattr(args, "port", None):
                settings.port = args.port
            if getattr(args, "reconnect_delay", None) is not None:
                settings.reconnect_delay = max(0.0, args.reconnect_delay)
        return settings
