#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rewards Element Locator
Finds the loyalty rewards icon of the currently selected skin
"""

from typing import Optional

from config import (
    CAROUSEL_ITEM_SELECTOR,
    CAROUSEL_SELECTOR,
    ITEM_INFORMATION_SELECTOR,
    REWARDS_MARKER_CLASS,
    REWARDS_SELECTOR,
    SELECTED_ITEM_SELECTOR,
)
from utils.core.logging import get_logger

log = get_logger()


class RewardsElementLocator:
    """Ordered fallback search for the decoration target"""

    def __init__(self, document):
        self.document = document

    def find(self):
        """Locate the rewards element in the live tree, or None"""
        selected_item = self.document.query_selector(SELECTED_ITEM_SELECTOR)
        if selected_item is not None:
            info = selected_item.query_selector(REWARDS_SELECTOR)
            if info is not None:
                log.debug("Found rewards element in selected skin item")
                return info

        element = self.document.query_selector(REWARDS_SELECTOR)
        if element is not None:
            log.debug("Found rewards element via direct selector")
            return element

        carousel = self.document.query_selector(CAROUSEL_SELECTOR)
        if carousel is not None:
            for item in carousel.query_selector_all(CAROUSEL_ITEM_SELECTOR):
                info = item.query_selector(ITEM_INFORMATION_SELECTOR)
                if info is not None and info.class_list.contains(REWARDS_MARKER_CLASS):
                    log.debug("Found rewards element in carousel item")
                    return info

        log.debug("Rewards element not found anywhere")
        return None

    def observation_scope(self) -> Optional[object]:
        """Container that outlives champ select re-renders"""
        return self.document.body
