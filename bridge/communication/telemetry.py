#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bridge Telemetry
Forwards plugin log records to the Rose host as chroma-log messages
"""

import logging
from typing import Optional

from config import LOG_SOURCE


def level_name(levelno: int) -> str:
    """Map a logging level onto the plugin log levels understood by Rose"""
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    return "debug"


def build_log_payload(record: logging.LogRecord, source: str = LOG_SOURCE) -> dict:
    payload = {
        "type": "chroma-log",
        "source": source,
        "level": level_name(record.levelno),
        "message": record.getMessage(),
        "timestamp": int(record.created * 1000),
    }
    data = getattr(record, "data", None)
    if data:
        payload["data"] = data
    return payload


class BridgeLogHandler(logging.Handler):
    """Logging handler sending records over the bridge

    The bridge queues records while disconnected and flushes them on the next
    connection, so the host may see a line twice across reconnects. Local
    console and file output come from the regular root handlers.
    """

    def __init__(self, bridge, source: str = LOG_SOURCE, level: int = logging.DEBUG):
        super().__init__(level)
        self.bridge = bridge
        self.source = source
        self._emitting = False

    def emit(self, record: logging.LogRecord) -> None:
        # Records logged while sending would recurse into the bridge
        if self._emitting:
            return
        self._emitting = True
        try:
            self.bridge.send(build_log_payload(record, self.source))
        except Exception:
            self.handleError(record)
        finally:
            self._emitting = False


def attach_bridge_logging(bridge, logger: Optional[logging.Logger] = None) -> BridgeLogHandler:
    """Install a BridgeLogHandler on the plugin logger and return it"""
    from utils.core.logging import get_logger
    logger = logger or get_logger()
    handler = BridgeLogHandler(bridge)
    logger.addHandler(handler)
    return handler
