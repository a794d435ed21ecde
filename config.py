#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Global constants for Rose Historic Mode
All arbitrary values are centralized here for easy tracking and modification
"""

import configparser
from pathlib import Path
from typing import Optional

# =============================================================================
# APPLICATION METADATA
# =============================================================================

APP_VERSION = "1.0.0"
LOG_SOURCE = "LU-HistoricMode"          # "source" field of chroma-log telemetry
LOG_PREFIX = "[Rose-HistoricMode]"


# =============================================================================
# BRIDGE DISCOVERY CONSTANTS
# =============================================================================

BRIDGE_HOST = "localhost"
BRIDGE_DEFAULT_PORT = 50000              # Used when discovery finds nothing
DISCOVERY_START_PORT = 50000             # First candidate port of the sweep
DISCOVERY_END_PORT = 50010               # Last candidate port of the sweep (inclusive)
BRIDGE_PORT_PATH = "/bridge-port"        # Discovery endpoint served by Rose
LEGACY_PORT_PATH = "/port"               # Older Rose versions only serve this one
BRIDGE_PORT_STORAGE_KEY = "rose_bridge_port"
DISCOVERY_PROBE_TIMEOUT_S = 1.0          # Per-probe HTTP timeout
STORAGE_FILE_NAME = "historic_mode_storage.json"


# =============================================================================
# BRIDGE CONNECTION CONSTANTS
# =============================================================================

BRIDGE_RECONNECT_DELAY_S = 3.0           # Fixed delay between reconnect attempts (no backoff)
BRIDGE_OPEN_TIMEOUT_S = 5.0              # Websocket handshake timeout
BRIDGE_PING_INTERVAL_S = 20              # Matches the Rose server keepalive
BRIDGE_PING_TIMEOUT_S = 20


# =============================================================================
# VIEW SYNCHRONIZATION CONSTANTS
# =============================================================================

# Phases during which the decoration is meaningful
TARGET_PHASES = frozenset({"ChampSelect", "FINALIZATION"})

# Empirically tuned delays covering client render latency (seconds)
PHASE_ENTER_SYNC_DELAY_S = 0.1           # Resync after entering champ select
HISTORIC_SYNC_DELAY_S = 0.1              # First resync after a historic-state update
HISTORIC_LATE_SYNC_DELAY_S = 1.0         # Second resync when historic mode is active
SYNC_RETRY_DELAY_S = 0.5                 # Delay between element lookups
SYNC_RETRY_LIMIT = 5                     # Retries after the initial lookup
MUTATION_SYNC_DELAY_S = 0.0              # Coalesced resync after DOM mutations

# Skin name label
SKIN_LABEL_TIMEOUT_S = 6.0               # Auto-expiry of the floating skin name label


# =============================================================================
# DOM CONTRACT
# =============================================================================

HISTORIC_FLAG_ASSET_PATH = "historic_flag.png"
REWARDS_SELECTOR = ".skin-selection-item-information.loyalty-reward-icon--rewards"
SELECTED_ITEM_SELECTOR = ".skin-selection-item.skin-selection-item-selected"
CAROUSEL_SELECTOR = ".skin-selection-carousel"
CAROUSEL_ITEM_SELECTOR = ".skin-selection-item"
ITEM_INFORMATION_SELECTOR = ".skin-selection-item-information"
REWARDS_MARKER_CLASS = "loyalty-reward-icon--rewards"

HISTORIC_FLAG_CLASS = "lu-historic-flag-active"
RANDOM_FLAG_CLASS = "lu-random-flag-active"
SKIN_LABEL_CLASS = "lu-historic-skin-label"
SKIN_LABEL_TEXT_CLASS = "lu-historic-skin-label-text"
SKIN_LABEL_CLOSE_CLASS = "lu-historic-skin-label-close"
STYLE_ELEMENT_ID = "lu-historic-mode-style"


# =============================================================================
# LOGGING CONSTANTS
# =============================================================================

LOG_MAX_FILE_SIZE_MB_DEFAULT = 5         # Size before the session log rolls over
LOG_MAX_AGE_S = 24 * 60 * 60             # Logs older than this are removed on startup
LOG_SEPARATOR_WIDTH = 80                 # Width of separator lines in logs (e.g., "=" * 80)
LOG_FILE_PATTERN = "historic_*.log"
LOG_TIMESTAMP_FORMAT = "%d-%m-%Y_%H-%M-%S"  # European format, Windows-compatible


# =============================================================================
# DEFAULT ARGUMENTS
# =============================================================================

DEFAULT_VERBOSE = False
CONFIG_SECTION = "HistoricMode"


# =============================================================================
# CONFIG FILE ACCESS
# =============================================================================

def get_config_file_path() -> Path:
    """Get the path to the config.ini file"""
    from utils.core.paths import get_user_data_dir
    return get_user_data_dir() / "config.ini"


def _read_config(config_path: Optional[Path] = None) -> configparser.ConfigParser:
    config = configparser.ConfigParser()
    path = config_path or get_config_file_path()
    if path.exists():
        try:
            config.read(path, encoding="utf-8")
        except configparser.Error:
            # A broken config file must not prevent startup
            return configparser.ConfigParser()
    return config


def get_config_option(section: str, option: str, default: Optional[str] = None,
                      config_path: Optional[Path] = None) -> Optional[str]:
    """Read a raw string option from config.ini"""
    config = _read_config(config_path)
    if config.has_option(section, option):
        return config.get(section, option)
    return default


def get_config_float(section: str, option: str, default: float,
                     config_path: Optional[Path] = None) -> float:
    """Read a float option from config.ini, falling back to default on bad values"""
    raw = get_config_option(section, option, None, config_path)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_config_int(section: str, option: str, default: int,
                   config_path: Optional[Path] = None) -> int:
    """Read an integer option from config.ini, falling back to default on bad values"""
    raw = get_config_option(section, option, None, config_path)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def set_config_option(section: str, option: str, value, config_path: Optional[Path] = None) -> None:
    """Write an option to config.ini, creating the file if needed"""
    path = config_path or get_config_file_path()
    config = _read_config(path)
    if not config.has_section(section):
        config.add_section(section)
    config.set(section, option, str(value))
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        config.write(f)
