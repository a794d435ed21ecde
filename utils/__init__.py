#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utils Package - Utility functions and helpers

This package is organized into subpackages:
- core: Core utilities (logging, paths, timer scheduling)
"""

# Import paths first (doesn't depend on config)
from utils.core.paths import get_user_data_dir, get_state_dir, get_logs_dir


# Lazy imports for modules that depend on config (to avoid circular imports)
def __getattr__(name):
    """Lazy import for modules that may have circular dependencies"""
    if name in {'get_logger', 'setup_logging', 'log_section', 'log_success', 'get_log_mode', 'log_event'}:
        from utils.core.logging import (
            get_logger, setup_logging, log_section, log_success, get_log_mode, log_event
        )
        return locals()[name]
    raise AttributeError(f"module 'utils' has no attribute {name!r}")


__all__ = ['get_user_data_dir', 'get_state_dir', 'get_logs_dir']
