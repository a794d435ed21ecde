import logging

import pytest

from ui.decoration import DecorationApplier
from ui.target_locator import RewardsElementLocator
from ui.view_synchronizer import SyncTimings, ViewSynchronizer

FLAG_CLASS = "lu-historic-flag-active"
FLAG_URL = "http://127.0.0.1:50000/asset/historic_flag.png"


class CountingLocator(RewardsElementLocator):
    def __init__(self, document) -> None:
        super().__init__(document)
        self.calls = 0

    def find(self):
        self.calls += 1
        return super().find()


def make_sync(document, bridge, scheduler, **kwargs) -> ViewSynchronizer:
    return ViewSynchronizer(document, bridge, scheduler, **kwargs)


def resolve_asset(sync: ViewSynchronizer, url: str = FLAG_URL) -> None:
    sync.handle_local_asset_url({"type": "local-asset-url", "assetPath": "historic_flag.png", "url": url})


def flagged(icons) -> list[int]:
    return [i for i, icon in enumerate(icons) if icon.class_list.contains(FLAG_CLASS)]


def test_asset_requested_once_and_applied_when_url_arrives(document, bridge, scheduler, champ_select) -> None:
    _, icons = champ_select()
    sync = make_sync(document, bridge, scheduler)

    sync.handle_phase_change({"type": "phase-change", "phase": "ChampSelect"})
    sync.handle_historic_state({"type": "historic-state", "active": True, "historicSkinId": 42})
    scheduler.advance(2.0)

    requests = bridge.of_type("request-local-asset")
    assert len(requests) == 1
    assert requests[0]["assetPath"] == "historic_flag.png"
    assert isinstance(requests[0]["timestamp"], int)
    assert flagged(icons) == []

    resolve_asset(sync)

    assert flagged(icons) == [0]
    assert icons[0].style.get_property_value("background-image") == f'url("{FLAG_URL}")'
    assert icons[0].style.get_property_value("display") == "block"
    assert len(bridge.of_type("request-local-asset")) == 1


def test_active_then_inactive_ends_cleared(document, bridge, scheduler, champ_select) -> None:
    _, icons = champ_select()
    sync = make_sync(document, bridge, scheduler)
    resolve_asset(sync)
    sync.handle_phase_change({"phase": "ChampSelect"})

    sync.handle_historic_state({"active": True, "historicSkinId": 7})
    sync.handle_historic_state({"active": False})
    scheduler.advance(5.0)

    assert flagged(icons) == []
    assert icons[0].style.get_property_value("display") == "none"
    assert icons[0].style.get_property_value("background-image") == ""


def test_active_state_syncs_twice(document, bridge, scheduler) -> None:
    sync = make_sync(document, bridge, scheduler)

    sync.handle_historic_state({"active": True})
    assert scheduler.calls == [0.1, 1.0]

    scheduler.calls.clear()
    sync.handle_historic_state({"active": False})
    assert scheduler.calls == [0.1]


def test_non_boolean_active_is_inactive(document, bridge, scheduler) -> None:
    sync = make_sync(document, bridge, scheduler)
    sync.handle_historic_state({"active": "true", "historicSkinId": 1})
    assert sync.active is False


@pytest.mark.parametrize(
    "phases",
    [
        ["ChampSelect", "Lobby", "FINALIZATION", "InProgress", "ChampSelect"],
        ["Lobby", "ChampSelect", "FINALIZATION", "None", "GameStart"],
    ],
)
def test_decoration_only_present_in_target_phase(document, bridge, scheduler, champ_select, phases) -> None:
    _, icons = champ_select()
    sync = make_sync(document, bridge, scheduler)
    resolve_asset(sync)
    sync.handle_historic_state({"active": True, "historicSkinId": 3})

    for phase in phases:
        sync.handle_phase_change({"phase": phase})
        in_target = phase in ("ChampSelect", "FINALIZATION")
        if not in_target:
            # Cleared synchronously on exit
            assert flagged(icons) == []
        scheduler.advance(2.0)
        assert bool(flagged(icons)) is in_target, phase


def test_phase_exit_drops_element_and_resets_retries(document, bridge, scheduler, champ_select) -> None:
    _, icons = champ_select()
    sync = make_sync(document, bridge, scheduler)
    resolve_asset(sync)
    sync.handle_phase_change({"phase": "ChampSelect"})
    sync.handle_historic_state({"active": True})
    scheduler.advance(0.2)
    assert sync.current_element is icons[0]

    sync.state.retries.count = 3
    sync.handle_phase_change({"phase": "Lobby"})

    assert sync.current_element is None
    assert sync.state.retries.count == 0
    assert flagged(icons) == []


def test_retry_bound_is_six_attempts(document, bridge, scheduler, caplog) -> None:
    locator = CountingLocator(document)
    sync = make_sync(document, bridge, scheduler, locator=locator)
    sync.handle_phase_change({"phase": "ChampSelect"})

    with caplog.at_level(logging.WARNING):
        sync.synchronize()
        scheduler.advance(30.0)

    assert locator.calls == 6
    assert sync.state.retries.count == 0
    assert "Rewards element not found after 5 retries, giving up" in caplog.text
    assert scheduler.pending == 0


def test_retry_limit_follows_timings(document, bridge, scheduler) -> None:
    locator = CountingLocator(document)
    sync = make_sync(document, bridge, scheduler, locator=locator, timings=SyncTimings(retry_limit=2))
    sync.handle_phase_change({"phase": "ChampSelect"})

    sync.synchronize()
    scheduler.advance(30.0)

    assert locator.calls == 3


def test_retry_counter_resets_on_success(document, bridge, scheduler, champ_select) -> None:
    locator = CountingLocator(document)
    sync = make_sync(document, bridge, scheduler, locator=locator)
    resolve_asset(sync)
    sync.handle_phase_change({"phase": "ChampSelect"})
    sync.state.historic.active = True

    sync.synchronize()
    scheduler.advance(0.5)
    assert sync.state.retries.count == 2

    _, icons = champ_select()
    scheduler.advance(0.5)

    assert sync.state.retries.count == 0
    assert flagged(icons) == [0]


def test_stale_retry_outside_phase_is_noop(document, bridge, scheduler) -> None:
    locator = CountingLocator(document)
    sync = make_sync(document, bridge, scheduler, locator=locator)
    sync.handle_phase_change({"phase": "ChampSelect"})

    sync.synchronize()
    assert locator.calls == 1
    sync.handle_phase_change({"phase": "Lobby"})
    scheduler.advance(5.0)

    assert locator.calls == 1
    assert sync.state.retries.count == 0


def test_selection_change_moves_decoration(document, bridge, scheduler, champ_select) -> None:
    items, icons = champ_select()
    sync = make_sync(document, bridge, scheduler)
    resolve_asset(sync)
    sync.handle_phase_change({"phase": "ChampSelect"})
    sync.handle_historic_state({"active": True})
    scheduler.advance(2.0)
    assert flagged(icons) == [0]

    items[0].class_list.remove("skin-selection-item-selected")
    items[1].class_list.add("skin-selection-item-selected")
    sync.synchronize()

    assert flagged(icons) == [1]
    assert icons[0].style.get_property_value("display") == "none"
    assert sync.current_element is icons[1]


def test_dom_mutations_trigger_one_coalesced_sync(document, bridge, scheduler, champ_select) -> None:
    sync = make_sync(document, bridge, scheduler)
    resolve_asset(sync)
    sync.handle_phase_change({"phase": "ChampSelect"})
    sync.handle_historic_state({"active": True})
    # Nothing to find yet: give up on the element before it renders
    scheduler.advance(10.0)
    scheduler.calls.clear()

    _, icons = champ_select()

    assert scheduler.calls == [0.0]
    scheduler.advance(0.0)
    assert flagged(icons) == [0]


def test_rerendered_champ_select_is_still_observed(document, bridge, scheduler, champ_select) -> None:
    old_root = document.body.append_child(document.create_element("div", classes=("champion-select",)))
    sync = make_sync(document, bridge, scheduler)
    resolve_asset(sync)
    sync.handle_phase_change({"phase": "ChampSelect"})
    sync.handle_historic_state({"active": True})
    scheduler.advance(10.0)
    assert sync.current_element is None

    old_root.remove()
    _, icons = champ_select()
    scheduler.advance(1.0)

    assert flagged(icons) == [0]


def test_dom_mutations_ignored_when_inactive(document, bridge, scheduler, champ_select) -> None:
    sync = make_sync(document, bridge, scheduler)
    sync.handle_phase_change({"phase": "ChampSelect"})

    champ_select()

    assert scheduler.pending == 0


def test_observer_detached_after_phase_exit(document, bridge, scheduler, champ_select) -> None:
    sync = make_sync(document, bridge, scheduler)
    resolve_asset(sync)
    sync.state.historic.active = True
    sync.handle_phase_change({"phase": "ChampSelect"})
    scheduler.calls.clear()
    sync.handle_phase_change({"phase": "Lobby"})

    champ_select()

    assert scheduler.calls == []


def test_local_asset_url_for_other_asset_is_ignored(document, bridge, scheduler) -> None:
    sync = make_sync(document, bridge, scheduler)
    sync.request_asset()

    sync.handle_local_asset_url({"assetPath": "random_flag.png", "url": "http://x/random.png"})
    sync.handle_local_asset_url({"assetPath": "historic_flag.png", "url": ""})

    assert sync.state.asset.url is None
    assert sync.state.asset.pending is True


def test_request_asset_is_idempotent(document, bridge, scheduler) -> None:
    sync = make_sync(document, bridge, scheduler)

    assert sync.request_asset() is True
    assert sync.request_asset() is False
    resolve_asset(sync)
    assert sync.request_asset() is False

    assert len(bridge.of_type("request-local-asset")) == 1


def test_historic_state_updates_label(document, bridge, scheduler) -> None:
    sync = make_sync(document, bridge, scheduler)

    sync.handle_historic_state({"active": True, "historicSkinId": 12, "historicSkinName": "Classic Ahri"})
    assert sync.label.visible
    assert sync.label.text == "Classic Ahri"

    sync.handle_historic_state({"active": False, "historicSkinName": ""})
    assert not sync.label.visible


def test_custom_applier_is_used(document, bridge, scheduler, champ_select) -> None:
    _, icons = champ_select()
    applier = DecorationApplier(marker_class="custom-flag")
    sync = make_sync(document, bridge, scheduler, applier=applier)
    resolve_asset(sync)
    sync.handle_phase_change({"phase": "FINALIZATION"})
    sync.handle_historic_state({"active": True})
    scheduler.advance(0.2)

    assert icons[0].class_list.contains("custom-flag")
