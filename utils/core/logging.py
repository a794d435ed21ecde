#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration and utilities
"""

# Standard library imports
import os
import queue
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

# Third-party imports
import logging
import logging.handlers

# Local imports
from config import (
    LOG_FILE_PATTERN,
    LOG_MAX_AGE_S,
    LOG_MAX_FILE_SIZE_MB_DEFAULT,
    LOG_SEPARATOR_WIDTH,
    LOG_TIMESTAMP_FORMAT,
)

# Add custom TRACE logging level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def trace(self, message, *args, **kwargs):
    """Log a trace message (ultra-detailed, below DEBUG)"""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = trace

PLUGIN_LOGGER_NAME = "historic"

# Global log mode (set by setup_logging)
_CURRENT_LOG_MODE = 'customer'
_QUEUE_LISTENER: Optional[logging.handlers.QueueListener] = None

_FORMATS = {
    'customer': "%(_when)s | %(message)s",
    'verbose': "%(_when)s | %(levelname)-7s | %(message)s",
    'debug': "%(_when)s | %(levelname)-7s | %(name)-15s | %(funcName)-20s | %(message)s",
}

_LEVELS = {
    'customer': logging.INFO,
    'verbose': logging.DEBUG,
    'debug': TRACE,
}


def get_log_mode() -> str:
    """Get the current logging mode"""
    return _CURRENT_LOG_MODE


class _Fmt(logging.Formatter):
    """Formatter stamping records with a wall-clock time field"""

    def __init__(self, fmt: str, when_format: str):
        super().__init__(fmt)
        self.when_format = when_format

    def format(self, record):
        record._when = time.strftime(self.when_format, time.localtime(record.created))
        return super().format(record)


class SizeRotatingCompositeHandler(logging.Handler):
    """
    A handler that delegates to an inner file handler and rolls over
    to a new file when the current file size reaches a threshold.

    - Creates files as: base.ext, base.ext.1, base.ext.2, ...
    - Does not delete on rotation (retention handled by cleanup_logs on startup)
    """

    def __init__(self, base_path: Path, max_bytes: int):
        super().__init__()
        self.base_path = Path(base_path)
        self.max_bytes = max_bytes
        self._index = 0
        self.current_path = self.base_path
        self.current_handler = logging.FileHandler(self.current_path, encoding='utf-8')

    def _maybe_rotate(self):
        try:
            current_size = self.current_path.stat().st_size if self.current_path.exists() else 0
        except OSError:
            return
        if current_size < self.max_bytes:
            return
        self.current_handler.close()
        self._index += 1
        self.current_path = self.base_path.with_name(f"{self.base_path.name}.{self._index}")
        self.current_handler = logging.FileHandler(self.current_path, encoding='utf-8')
        self.current_handler.setLevel(self.level)
        if self.formatter is not None:
            self.current_handler.setFormatter(self.formatter)

    def emit(self, record):
        try:
            self._maybe_rotate()
            self.current_handler.emit(record)
        except Exception:
            self.handleError(record)

    def setFormatter(self, fmt):
        super().setFormatter(fmt)
        self.current_handler.setFormatter(fmt)

    def setLevel(self, level):
        super().setLevel(level)
        self.current_handler.setLevel(level)

    def close(self):
        self.current_handler.close()
        super().close()


class SafeStreamHandler(logging.StreamHandler):
    """A stream handler that safely handles None streams and broken pipes"""

    def __init__(self, stream=None):
        if stream is None:
            import io
            stream = io.StringIO()
        super().__init__(stream)

    def emit(self, record):
        try:
            msg = self.format(record)
            self.stream.write(msg + self.terminator)
            self.stream.flush()
        except (AttributeError, BlockingIOError, BrokenPipeError, OSError, ValueError):
            # Stream is blocking or broken - skip this message
            pass



class NonBlockingQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that never blocks the event loop"""

    def enqueue(self, record):
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            # Queue is full - drop the message silently
            pass


def _output_stream():
    # Windowed builds redirect stdout to devnull; prefer stderr then
    if sys.stdout is not None and getattr(sys.stdout, 'name', None) == os.devnull:
        return sys.stderr if sys.stderr is not None else sys.stdout
    return sys.stdout if sys.stdout is not None else sys.stderr


def setup_logging(log_mode: str = 'customer', *, write_logs: bool = True) -> Optional[Path]:
    """
    Setup logging configuration with three modes.

    Args:
        log_mode: 'customer' (clean logs), 'verbose' (developer), or 'debug' (ultra-detailed)
        write_logs: If False, skip creating log files (useful for --dev runs).

    Returns:
        Path of the session log file, or None when file logging is disabled.
    """
    global _CURRENT_LOG_MODE, _QUEUE_LISTENER
    if log_mode not in _FORMATS:
        log_mode = 'customer'
    _CURRENT_LOG_MODE = log_mode
    level = _LEVELS[log_mode]
    fmt = _FORMATS[log_mode]

    console_handler = SafeStreamHandler(_output_stream())
    console_handler.setFormatter(_Fmt(fmt, "%H:%M:%S"))
    console_handler.setLevel(level)
    handlers: list[logging.Handler] = [console_handler]

    log_file = None
    if write_logs:
        try:
            from .paths import get_logs_dir
            timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
            log_file = get_logs_dir() / f"historic_{timestamp}.log"
            max_bytes = int(LOG_MAX_FILE_SIZE_MB_DEFAULT * 1024 * 1024)
            file_handler = SizeRotatingCompositeHandler(log_file, max_bytes)
            file_handler.setFormatter(_Fmt(fmt, "%Y-%m-%d %H:%M:%S"))
            file_handler.setLevel(level)
            handlers.append(file_handler)
        except OSError as e:
            # If file logging fails, continue without it
            log_file = None
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    shutdown_logging()

    # Console and file writes happen off the event loop thread
    log_queue: queue.Queue = queue.Queue(maxsize=1000)
    _QUEUE_LISTENER = logging.handlers.QueueListener(
        log_queue, *handlers, respect_handler_level=True
    )
    _QUEUE_LISTENER.start()

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(NonBlockingQueueHandler(log_queue))
    # Root logger must be at TRACE so every handler sees every record
    root.setLevel(TRACE)

    # Suppress library chatter
    logging.getLogger("websockets").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = logging.getLogger("startup")
    if log_mode == 'customer':
        if log_file:
            logger.info(f"✅ Historic Mode Started (Log: {log_file.name})")
        else:
            logger.info("✅ Historic Mode Started (logs disabled)")
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        if log_file:
            logger.info(f"Historic Mode - Starting... (Log file: {log_file.name})")
        else:
            logger.info("Historic Mode - Starting... (logs disabled)")
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        if log_mode == 'debug':
            logger.info("Debug mode: ON (ultra-detailed logs with function traces)")
        else:
            logger.info("Verbose mode: ON (developer logs with technical details)")

    return log_file


def shutdown_logging() -> None:
    """Stop the background log writer, flushing pending records"""
    global _QUEUE_LISTENER
    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None


def get_logger(name: str = PLUGIN_LOGGER_NAME) -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def cleanup_logs(logs_dir: Optional[Path] = None, max_age_s: float = LOG_MAX_AGE_S) -> int:
    """
    Delete log files older than max_age_s.

    Returns:
        Number of files removed
    """
    if logs_dir is None:
        from .paths import get_user_data_dir
        logs_dir = get_user_data_dir() / "logs"
    if not logs_dir.exists():
        return 0

    removed = 0
    now = time.time()
    for log_file in logs_dir.glob(LOG_FILE_PATTERN + "*"):
        try:
            if now - log_file.stat().st_mtime > max_age_s:
                log_file.unlink()
                removed += 1
        except OSError:
            pass
    return removed


# ==================== Pretty Logging Helpers ====================

def log_section(logger: logging.Logger, title: str, icon: str = "📌", details: dict = None, mode: str = None):
    """
    Log a section with title and optional details

    Args:
        logger: Logger instance
        title: Main title text (will be uppercased in verbose/debug mode)
        icon: Emoji icon to use
        details: Optional dict of key-value pairs to display
        mode: 'customer', 'verbose' or 'debug'. If None, uses current global log mode.

    Example:
        log_section(log, "Bridge Connected", "🔌", {"Port": 50000})
    """
    if mode is None:
        mode = get_log_mode()

    if mode == 'customer':
        if details:
            detail_str = ", ".join(f"{k}: {v}" for k, v in details.items())
            logger.info(f"{icon} {title} ({detail_str})")
        else:
            logger.info(f"{icon} {title}")
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        logger.info(f"{icon} {title.upper()}")
        if details:
            for key, value in details.items():
                logger.info(f"   📋 {key}: {value}")
        logger.info("=" * LOG_SEPARATOR_WIDTH)


def log_event(logger: logging.Logger, event: str, icon: str = "✓", details: dict = None):
    """
    Log a single event with optional details

    Example:
        log_event(log, "Historic flag shown", "🏳", {"URL": url})
    """
    logger.info(f"{icon} {event}")
    if details:
        for key, value in details.items():
            logger.info(f"   • {key}: {value}")


def log_success(logger: logging.Logger, message: str, icon: str = "✅"):
    """Log a success message"""
    logger.info(f"{icon} {message}")
