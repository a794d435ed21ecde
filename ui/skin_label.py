#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
SkinNameLabel - floating label showing the historic skin name
Dismissible by the user and removed automatically after a fixed time.
"""

from typing import Any, Optional, Tuple

from config import (
    SKIN_LABEL_CLASS,
    SKIN_LABEL_CLOSE_CLASS,
    SKIN_LABEL_TEXT_CLASS,
    SKIN_LABEL_TIMEOUT_S,
)
from utils.core.logging import get_logger

log = get_logger()


def is_empty_name(name: Optional[str]) -> bool:
    return name is None or not str(name).strip()


class SkinNameLabel:
    """Transient label mirroring historic-state updates"""

    def __init__(self, document, scheduler, timeout: float = SKIN_LABEL_TIMEOUT_S):
        self.document = document
        self.scheduler = scheduler
        self.timeout = timeout
        self.element = None
        self.content_key: Optional[Tuple[Any, str]] = None
        # Bumped on every change; expiry timers from older generations are ignored
        self._generation = 0

    @property
    def visible(self) -> bool:
        return self.element is not None and self.element.is_connected

    @property
    def text(self) -> Optional[str]:
        if self.element is None:
            return None
        return self.element.query_selector(f".{SKIN_LABEL_TEXT_CLASS}").text

    def update(self, skin_id: Any, name: Optional[str]) -> None:
        """Show, refresh or remove the label for a historic-state update"""
        if is_empty_name(name):
            self.remove()
            return

        name = name.strip()
        key = (skin_id, name)
        if not self.visible:
            self._create(name)
            log.debug(f"[label] Showing historic skin label: {name}")
        elif key != self.content_key:
            self.element.query_selector(f".{SKIN_LABEL_TEXT_CLASS}").text = name
            log.debug(f"[label] Updated historic skin label: {name}")
        self.content_key = key
        self._arm_expiry()

    def _create(self, name: str) -> None:
        label = self.document.create_element("div", classes=(SKIN_LABEL_CLASS,))
        label.append_child(self.document.create_element("span", classes=(SKIN_LABEL_TEXT_CLASS,), text=name))
        close = self.document.create_element("span", classes=(SKIN_LABEL_CLOSE_CLASS,), text="×")
        close.add_event_listener("click", lambda _element: self.dismiss())
        label.append_child(close)
        self.document.body.append_child(label)
        self.element = label

    def _arm_expiry(self) -> None:
        self._generation += 1
        generation = self._generation
        self.scheduler.call_later(self.timeout, lambda: self._expire(generation))

    def _expire(self, generation: int) -> None:
        if generation != self._generation:
            return
        log.debug("[label] Historic skin label expired")
        self.remove()

    def dismiss(self) -> None:
        log.debug("[label] Historic skin label dismissed")
        self.remove()

    def remove(self) -> None:
        self._generation += 1
        self.content_key = None
        if self.element is not None:
            self.element.remove()
            self.element = None
