#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup subpackage
"""

from .arguments import setup_arguments
from .initialization import get_log_mode_from_args, setup_logging_and_cleanup

__all__ = [
    'setup_arguments',
    'get_log_mode_from_args',
    'setup_logging_and_cleanup',
]
