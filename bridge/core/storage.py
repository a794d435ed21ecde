#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Plugin local storage: a tiny persisted key/value store.
File format: historic_mode_storage.json with shape { "<key>": "<value>", ... }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from config import STORAGE_FILE_NAME
from utils.core.logging import get_logger

log = get_logger()


def _default_storage_path() -> Path:
    from utils.core.paths import get_state_dir
    return get_state_dir() / STORAGE_FILE_NAME


class LocalStorage:
    """String key/value store persisted as JSON, best-effort like localStorage"""

    def __init__(self, path: Optional[Path] = None):
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = _default_storage_path()
        return self._path

    def _load(self) -> Dict[str, str]:
        """Load the stored mapping. Returns empty dict if missing or invalid."""
        try:
            if not self.path.exists():
                return {}
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.debug(f"[storage] Failed to read {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            # Losing the cache only costs a discovery sweep next session
            log.debug(f"[storage] Failed to write {self.path}: {e}")

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)
