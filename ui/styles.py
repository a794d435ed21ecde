#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Stylesheet injected into the client page
"""

from config import (
    HISTORIC_FLAG_CLASS,
    REWARDS_SELECTOR,
    SKIN_LABEL_CLASS,
    SKIN_LABEL_CLOSE_CLASS,
    STYLE_ELEMENT_ID,
)

CSS_RULES = f"""
  {REWARDS_SELECTOR}.{HISTORIC_FLAG_CLASS} {{
    background-repeat: no-repeat !important;
    background-size: contain !important;
    height: 32px !important;
    width: 32px !important;
    position: absolute !important;
    right: -14px !important;
    top: -14px !important;
    pointer-events: none !important;
    cursor: default !important;
    -webkit-user-select: none !important;
    list-style-type: none !important;
    content: " " !important;
  }}
  .{SKIN_LABEL_CLASS} {{
    position: fixed;
    left: 50%;
    bottom: 18%;
    transform: translateX(-50%);
    padding: 6px 28px 6px 12px;
    background: rgba(1, 10, 19, 0.9);
    border: 1px solid #785a28;
    color: #f0e6d2;
    font-size: 12px;
    z-index: 10000;
  }}
  .{SKIN_LABEL_CLOSE_CLASS} {{
    position: absolute;
    right: 8px;
    top: 4px;
    cursor: pointer;
  }}
"""


def inject_stylesheet(document) -> bool:
    """Add the plugin stylesheet to the document head once

    Returns:
        True if a style element was added, False if it was already present
    """
    if document.get_element_by_id(STYLE_ELEMENT_ID) is not None:
        return False
    style = document.create_element("style", id=STYLE_ELEMENT_ID, text=CSS_RULES)
    document.head.append_child(style)
    return True
