#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
View Synchronizer
Keeps the historic flag on the rewards element consistent with the latest
phase, historic state and asset URL received from Rose
"""

import time
from dataclasses import dataclass
from typing import Optional

from config import (
    HISTORIC_LATE_SYNC_DELAY_S,
    HISTORIC_SYNC_DELAY_S,
    MUTATION_SYNC_DELAY_S,
    PHASE_ENTER_SYNC_DELAY_S,
    SYNC_RETRY_DELAY_S,
    SYNC_RETRY_LIMIT,
)
from state import HistoricState, RetryCounter, SyncState
from utils.core.logging import get_logger

from .decoration import DecorationApplier
from .dom import MutationObserver
from .skin_label import SkinNameLabel
from .target_locator import RewardsElementLocator

log = get_logger()


@dataclass
class SyncTimings:
    """Render-latency delays, all in seconds"""
    phase_enter_delay: float = PHASE_ENTER_SYNC_DELAY_S
    historic_delay: float = HISTORIC_SYNC_DELAY_S
    historic_late_delay: float = HISTORIC_LATE_SYNC_DELAY_S
    retry_delay: float = SYNC_RETRY_DELAY_S
    retry_limit: int = SYNC_RETRY_LIMIT
    mutation_delay: float = MUTATION_SYNC_DELAY_S


class ViewSynchronizer:
    """Phase/state machine driving the historic flag decoration"""

    def __init__(
        self,
        document,
        bridge,
        scheduler,
        applier: Optional[DecorationApplier] = None,
        locator: Optional[RewardsElementLocator] = None,
        label: Optional[SkinNameLabel] = None,
        timings: Optional[SyncTimings] = None,
    ):
        """Initialize view synchronizer

        Args:
            document: Document the client UI lives in
            bridge: Outbound side of the bridge (anything with send())
            scheduler: Timer source for deferred synchronization
            applier: Decoration applier
            locator: Rewards element locator
            label: Skin name label
            timings: Delays and retry bound
        """
        self.document = document
        self.bridge = bridge
        self.scheduler = scheduler
        self.timings = timings or SyncTimings()
        self.applier = applier or DecorationApplier()
        self.locator = locator or RewardsElementLocator(document)
        self.label = label or SkinNameLabel(document, scheduler)
        self.state = SyncState(retries=RetryCounter(limit=self.timings.retry_limit))

        self._observer = MutationObserver(self._on_mutations)
        self._mutation_sync_pending = False

    # ------------------------------------------------------------ properties

    @property
    def in_target_phase(self) -> bool:
        return self.state.phase.in_target_phase

    @property
    def active(self) -> bool:
        return self.state.historic.active

    @property
    def current_element(self):
        return self.state.current_element

    def reset(self) -> None:
        """Forget any historic state left over from a previous session"""
        self.state.historic = HistoricState()
        self.state.retries.reset()

    # ------------------------------------------------------- inbound messages

    def handle_phase_change(self, payload: dict) -> None:
        was_in_target = self.in_target_phase
        self.state.phase.phase = payload.get("phase")
        now_in_target = self.in_target_phase

        if now_in_target and not was_in_target:
            log.debug("Entered ChampSelect phase - enabling plugin")
            self._observe()
            if self.active:
                self.scheduler.call_later(self.timings.phase_enter_delay, self.synchronize)
        elif was_in_target and not now_in_target:
            log.debug("Left ChampSelect phase - disabling plugin")
            self._observer.disconnect()
            if self.state.current_element is not None:
                self.applier.clear(self.state.current_element)
                self.state.current_element = None
            self.state.retries.reset()

    def handle_historic_state(self, payload: dict) -> None:
        was_active = self.active
        self.state.historic = HistoricState.from_payload(payload)
        historic = self.state.historic

        log.info("Received historic state update", extra={"data": {
            "active": historic.active,
            "wasActive": was_active,
            "historicSkinId": historic.historic_skin_id,
        }})

        # Always resync: the element may not have existed on the last attempt
        self.scheduler.call_later(self.timings.historic_delay, self.synchronize)
        if historic.active:
            self.scheduler.call_later(self.timings.historic_late_delay, self.synchronize)

        self.label.update(historic.historic_skin_id, historic.historic_skin_name)

    def handle_local_asset_url(self, payload: dict) -> None:
        asset = self.state.asset
        url = payload.get("url")
        if payload.get("assetPath") != asset.asset_path or not url:
            return
        asset.url = url
        asset.pending = False
        log.info("Received historic flag image URL from Python", extra={"data": {"url": url}})

        if self.in_target_phase and self.active:
            self.synchronize()

    # ---------------------------------------------------------------- assets

    def request_asset(self) -> bool:
        """Ask Rose for the flag URL unless resolved or already requested"""
        asset = self.state.asset
        if asset.resolved or asset.pending:
            return False
        asset.pending = True
        log.debug("Requesting historic flag image from Python", extra={"data": {"assetPath": asset.asset_path}})
        self.bridge.send({
            "type": "request-local-asset",
            "assetPath": asset.asset_path,
            "timestamp": int(time.time() * 1000),
        })
        return True

    # ------------------------------------------------------------ observation

    def _observe(self) -> None:
        scope = self.locator.observation_scope()
        if scope is not None:
            self._observer.observe(scope)

    def _on_mutations(self, _records) -> None:
        if not (self.in_target_phase and self.active):
            return
        # Coalesce bursts of mutations into one deferred pass
        if self._mutation_sync_pending:
            return
        self._mutation_sync_pending = True
        self.scheduler.call_later(self.timings.mutation_delay, self._mutation_sync)

    def _mutation_sync(self) -> None:
        self._mutation_sync_pending = False
        if self.in_target_phase and self.active:
            self.synchronize()

    def stop(self) -> None:
        self._observer.disconnect()
        self.label.remove()

    # --------------------------------------------------------- reconciliation

    def synchronize(self) -> None:
        """Bring the decoration in line with the current state"""
        if not self.in_target_phase:
            return

        element = self.locator.find()
        if element is None:
            self._schedule_retry()
            return

        self.state.retries.reset()

        previous = self.state.current_element
        if previous is not None and previous is not element:
            log.debug("Selected skin changed - hiding flag on previous element")
            self.applier.clear(previous)
        self.state.current_element = element

        log.trace("Found rewards element", extra={"data": {
            "display": element.style.get_property_value("display"),
            "visibility": element.style.get_property_value("visibility"),
            "opacity": element.style.get_property_value("opacity"),
            "classes": list(element.class_list),
        }})

        if not self.active:
            self.applier.clear(element)
            log.info("Historic flag hidden on rewards element")
            return

        asset = self.state.asset
        if not asset.resolved:
            # Applied once local-asset-url arrives
            self.request_asset()
            return

        self.applier.apply(element, asset.url)
        log.info("Historic flag shown on rewards element", extra={"data": {"url": asset.url}})

    def _schedule_retry(self) -> None:
        retries = self.state.retries
        if retries.exhausted:
            log.warning(f"Rewards element not found after {retries.limit} retries, giving up")
            retries.reset()
            return
        retries.increment()
        log.debug("Rewards element not found, will retry")
        self.scheduler.call_later(self.timings.retry_delay, self._retry)

    def _retry(self) -> None:
        if self.in_target_phase:
            self.synchronize()
        else:
            self.state.retries.reset()
