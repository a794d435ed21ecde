#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Path utilities for Rose Historic Mode
Handles user data directories shared with the Rose host
"""

import os
from pathlib import Path


def get_user_data_dir() -> Path:
    """
    Get the user data directory where the application can write files.
    Same location the Rose host uses, so both sides share state and logs.
    """
    override = os.environ.get("ROSE_DATA_DIR")
    if override:
        return Path(override)

    if os.name == "nt":  # Windows
        localappdata = os.environ.get("LOCALAPPDATA")
        if localappdata:
            return Path(localappdata) / "Rose"
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile) / "AppData" / "Local" / "Rose"
        return Path.cwd() / "Rose"
    else:  # Linux/macOS
        xdg_data_home = os.environ.get("XDG_DATA_HOME")
        if xdg_data_home:
            return Path(xdg_data_home) / "Rose"
        return Path.home() / ".local" / "share" / "Rose"


def get_state_dir() -> Path:
    """
    Get the state directory path for persisted plugin state.
    Creates the directory if it doesn't exist.
    """
    state_dir = get_user_data_dir() / "state"
    state_dir.mkdir(parents=True, exist_ok=True)
    return state_dir


def get_logs_dir() -> Path:
    """
    Get the logs directory path.
    Creates the directory if it doesn't exist.
    """
    logs_dir = get_user_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir
