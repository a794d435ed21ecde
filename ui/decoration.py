#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Historic flag decoration on the loyalty rewards element
Shares the element (and its positioning styles) with the random flag plugin.
"""

from typing import Optional

from config import HISTORIC_FLAG_ASSET_PATH, HISTORIC_FLAG_CLASS, RANDOM_FLAG_CLASS

IMPORTANT = "important"

# Rewards icon is hidden by default in the client; these force it back on
VISIBILITY_SHOWN = (
    ("display", "block"),
    ("visibility", "visible"),
    ("opacity", "1"),
)
VISIBILITY_HIDDEN = (
    ("display", "none"),
    ("visibility", "hidden"),
    ("opacity", "0"),
)

# Shared with the random flag: background-image excluded
PRESENTATION = (
    ("background-repeat", "no-repeat"),
    ("background-size", "contain"),
    ("height", "32px"),
    ("width", "32px"),
    ("position", "absolute"),
    ("right", "-14px"),
    ("top", "-14px"),
    ("pointer-events", "none"),
    ("cursor", "default"),
    ("-webkit-user-select", "none"),
    ("list-style-type", "none"),
    ("content", " "),
)


def background_image_value(url: str) -> str:
    return f'url("{url}")'


class DecorationApplier:
    """Sets and clears the historic flag on an element"""

    def __init__(
        self,
        marker_class: str = HISTORIC_FLAG_CLASS,
        coexisting_class: str = RANDOM_FLAG_CLASS,
        asset_path: str = HISTORIC_FLAG_ASSET_PATH,
    ):
        self.marker_class = marker_class
        self.coexisting_class = coexisting_class
        self.asset_path = asset_path
        self._applied_url: Optional[str] = None

    def apply(self, element, image_url: str):
        """Show the flag; repeated calls leave the element unchanged"""
        style = element.style
        for name, value in VISIBILITY_SHOWN:
            style.set_property(name, value, IMPORTANT)
        element.class_list.add(self.marker_class)
        style.set_property("background-image", background_image_value(image_url), IMPORTANT)
        for name, value in PRESENTATION:
            style.set_property(name, value, IMPORTANT)
        self._applied_url = image_url
        return element

    def clear(self, element):
        """Remove the flag without breaking a coexisting random flag"""
        if element is None:
            return element
        element.class_list.remove(self.marker_class)
        style = element.style

        if element.class_list.contains(self.coexisting_class):
            # The random flag still needs the shared positioning styles
            if self._is_own_background(style.get_property_value("background-image")):
                style.remove_property("background-image")
            return element

        style.remove_property("background-image")
        for name, _ in PRESENTATION:
            style.remove_property(name)
        for name, value in VISIBILITY_HIDDEN:
            style.set_property(name, value, IMPORTANT)
        return element

    def is_applied(self, element) -> bool:
        return element is not None and element.class_list.contains(self.marker_class)

    def _is_own_background(self, value: str) -> bool:
        if not value:
            return False
        if self.asset_path in value:
            return True
        return bool(self._applied_url) and self._applied_url in value
