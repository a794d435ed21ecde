import asyncio
import logging

from bridge.core.port_resolver import BridgeEndpoint
from main.core.plugin import HistoricModePlugin
from main.core.settings import PluginSettings
from main.runtime.loop import serve


class FakePluginBridge:
    def __init__(self, endpoint: BridgeEndpoint) -> None:
        self.endpoint = endpoint
        self.sent: list[dict] = []
        self.handlers = []
        self.open_listeners = []
        self.connected = False
        self.closed = False

    def send(self, message) -> None:
        self.sent.append(message)

    def add_handler(self, handler) -> None:
        self.handlers.append(handler)

    def add_open_listener(self, listener) -> None:
        self.open_listeners.append(listener)

    def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.closed = True

    def deliver(self, payload: dict) -> None:
        for handler in self.handlers:
            handler(payload)

    def of_type(self, message_type: str) -> list[dict]:
        return [m for m in self.sent if m.get("type") == message_type]


class FakeResolver:
    def __init__(self, port: int) -> None:
        self.port = port
        self.calls = 0

    def resolve(self) -> BridgeEndpoint:
        self.calls += 1
        return BridgeEndpoint(self.port)


def make_plugin(document, scheduler, settings=None, resolver=None):
    bridges = []

    def factory(endpoint):
        bridges.append(FakePluginBridge(endpoint))
        return bridges[-1]

    plugin = HistoricModePlugin(
        document,
        settings or PluginSettings(),
        scheduler=scheduler,
        resolver=resolver or FakeResolver(50003),
        bridge_factory=factory,
    )
    return plugin, bridges


def test_start_runs_init_sequence(document, scheduler) -> None:
    resolver = FakeResolver(50003)
    plugin, bridges = make_plugin(document, scheduler, resolver=resolver)

    async def scenario():
        await plugin.start()
        await plugin.stop()

    asyncio.run(scenario())

    bridge = bridges[0]
    assert resolver.calls == 1
    assert bridge.endpoint.port == 50003
    assert bridge.connected
    assert document.get_element_by_id("lu-historic-mode-style") is not None
    assert len(bridge.of_type("request-local-asset")) == 1
    assert plugin.synchronizer.active is False


def test_port_argument_skips_discovery(document, scheduler) -> None:
    resolver = FakeResolver(50003)
    plugin, bridges = make_plugin(document, scheduler, settings=PluginSettings(port=50009), resolver=resolver)

    asyncio.run(plugin.start())

    assert resolver.calls == 0
    assert bridges[0].endpoint.port == 50009
    asyncio.run(plugin.stop())


def test_messages_reach_synchronizer(document, scheduler, champ_select) -> None:
    _, icons = champ_select()
    plugin, bridges = make_plugin(document, scheduler)
    asyncio.run(plugin.start())
    bridge = bridges[0]

    bridge.deliver({"type": "phase-change", "phase": "ChampSelect"})
    bridge.deliver({"type": "historic-state", "active": True, "historicSkinId": 9, "historicSkinName": "Old Skin"})
    bridge.deliver({"type": "local-asset-url", "assetPath": "historic_flag.png", "url": "http://x/flag.png"})
    scheduler.advance(2.0)

    assert icons[0].class_list.contains("lu-historic-flag-active")
    assert plugin.synchronizer.label.text == "Old Skin"
    asyncio.run(plugin.stop())


def test_logs_are_forwarded_while_running(document, scheduler) -> None:
    plugin, bridges = make_plugin(document, scheduler)
    asyncio.run(plugin.start())
    logger = logging.getLogger("historic")
    previous = logger.level
    logger.setLevel(logging.INFO)
    try:
        logger.info("forwarded")
    finally:
        logger.setLevel(previous)

    assert bridges[0].of_type("chroma-log")[-1]["message"] == "forwarded"
    asyncio.run(plugin.stop())


def test_stop_cleans_up(document, scheduler) -> None:
    plugin, bridges = make_plugin(document, scheduler)

    async def scenario():
        await plugin.start()
        plugin.synchronizer.handle_historic_state({"active": False, "historicSkinName": "Old Skin"})
        await plugin.stop()

    asyncio.run(scenario())

    assert bridges[0].closed
    assert document.query_selector(".lu-historic-skin-label") is None
    assert not any(
        type(h).__name__ == "BridgeLogHandler" for h in logging.getLogger("historic").handlers
    )


def test_serve_stops_on_event(document, scheduler) -> None:
    plugin, bridges = make_plugin(document, scheduler)

    async def scenario():
        stop_event = asyncio.Event()
        task = asyncio.get_running_loop().create_task(serve(plugin, stop_event))
        for _ in range(500):
            if bridges and bridges[0].connected:
                break
            await asyncio.sleep(0.01)
        stop_event.set()
        await task

    asyncio.run(scenario())

    assert bridges[0].connected
    assert bridges[0].closed
