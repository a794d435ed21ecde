import heapq
import itertools
import json
from typing import Callable

import pytest

from ui.dom import Document


class ManualTimer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic clock: timers only fire when the test advances time"""

    def __init__(self) -> None:
        self.now = 0.0
        self._heap: list[tuple[float, int, ManualTimer]] = []
        self._seq = itertools.count()
        self.calls: list[float] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + max(0.0, delay), callback)
        heapq.heappush(self._heap, (timer.when, next(self._seq), timer))
        self.calls.append(delay)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._heap if not timer.cancelled)

    def advance(self, seconds: float) -> None:
        deadline = self.now + seconds
        while self._heap and self._heap[0][0] <= deadline:
            when, _, timer = heapq.heappop(self._heap)
            self.now = when
            if not timer.cancelled:
                timer.callback()
        self.now = deadline

    def run_all(self, limit: float = 60.0) -> None:
        self.advance(limit)


class FakeBridge:
    def __init__(self) -> None:
        self.sent: list[dict] = []

    def send(self, message) -> None:
        if isinstance(message, str):
            message = json.loads(message)
        self.sent.append(message)

    def of_type(self, message_type: str) -> list[dict]:
        return [m for m in self.sent if m.get("type") == message_type]


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    data_dir = tmp_path / "rose-data"
    monkeypatch.setenv("ROSE_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest.fixture
def document() -> Document:
    return Document()


def build_champ_select(document: Document, skins: int = 3, selected: int = 0, rewards: bool = True):
    """Champion select skin carousel; returns (carousel items, rewards icons)"""
    root = document.body.append_child(document.create_element("div", classes=("champion-select",)))
    carousel = root.append_child(document.create_element("div", classes=("skin-selection-carousel",)))
    items, icons = [], []
    for index in range(skins):
        classes = ["skin-selection-item"]
        if index == selected:
            classes.append("skin-selection-item-selected")
        item = carousel.append_child(document.create_element("div", classes=classes))
        info_classes = ["skin-selection-item-information"]
        if rewards:
            info_classes.append("loyalty-reward-icon--rewards")
        icon = item.append_child(document.create_element("div", classes=info_classes))
        # Client default: rewards icon hidden
        icon.style.set_property("display", "none", "important")
        icon.style.set_property("visibility", "hidden", "important")
        icon.style.set_property("opacity", "0", "important")
        items.append(item)
        icons.append(icon)
    return items, icons


@pytest.fixture
def champ_select(document):
    def _build(**kwargs):
        return build_champ_select(document, **kwargs)
    return _build
