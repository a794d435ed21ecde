#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Plugin state records
Phase membership, historic mode state, the flag asset cache and the retry counter
"""

# Standard library imports
from dataclasses import dataclass, field
from typing import Any, Optional

from config import HISTORIC_FLAG_ASSET_PATH, SYNC_RETRY_LIMIT, TARGET_PHASES


@dataclass
class ClientPhaseState:
    """Client phase as last reported by the host"""
    phase: Optional[str] = None

    @property
    def in_target_phase(self) -> bool:
        return self.phase in TARGET_PHASES


@dataclass
class HistoricState:
    """Historic mode state; every update replaces the previous one in full"""
    active: bool = False
    historic_skin_id: Any = None
    historic_skin_name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "HistoricState":
        name = payload.get("historicSkinName")
        return cls(
            active=payload.get("active") is True,
            historic_skin_id=payload.get("historicSkinId"),
            historic_skin_name=name if isinstance(name, str) else None,
        )


@dataclass
class AssetCacheEntry:
    """The one asset this plugin needs resolved to a URL by the host"""
    asset_path: str = HISTORIC_FLAG_ASSET_PATH
    url: Optional[str] = None
    pending: bool = False

    @property
    def resolved(self) -> bool:
        return bool(self.url)


@dataclass
class RetryCounter:
    """Bounded counter for one element lookup campaign"""
    limit: int = SYNC_RETRY_LIMIT
    count: int = 0

    @property
    def exhausted(self) -> bool:
        return self.count >= self.limit

    def increment(self) -> int:
        self.count += 1
        return self.count

    def reset(self) -> None:
        self.count = 0


@dataclass
class SyncState:
    """Everything the view synchronizer owns"""
    phase: ClientPhaseState = field(default_factory=ClientPhaseState)
    historic: HistoricState = field(default_factory=HistoricState)
    asset: AssetCacheEntry = field(default_factory=AssetCacheEntry)
    retries: RetryCounter = field(default_factory=RetryCounter)
    # Non-owning; re-resolved from the live tree on every synchronize
    current_element: Optional[Any] = None
