from __future__ import annotations

# pylint: disable=redefined-outer-name

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from geoclue_bridge._constants import CLIENT_INTERFACE, LOCATION_INTERFACE, MANAGER_INTERFACE, NO_LOCATION
from geoclue_bridge.bridge import GeoClueBridge
from geoclue_bridge.config import BridgeConfig
from geoclue_bridge.exceptions import TransportError

CLIENT_PATH = "/org/freedesktop/GeoClue2/Client/1"

# ---------------------------------------------------------------------------
# In-memory GeoClue2 service
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class FakeSubscription:
    transport: FakeTransport
    key: tuple[str, str, str]
    callback: Callable[[tuple[Any, ...]], None]
    active: bool = True

    def unsubscribe(self) -> None:
        self.active = False
        self.transport.subscriptions.remove(self)


@dataclass
class FakeTransport:
    """Implements the bridge's Transport protocol against in-memory objects.

    ``ticks`` is consumed by :meth:`process`: each entry is either a
    location path to report as the client's ``Location`` or ``None`` to
    leave it unchanged. A changed location fires ``LocationUpdated``.
    """

    client_path: str = CLIENT_PATH
    objects: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)
    ticks: list[str | None] = field(default_factory=list)
    fail_members: set[str] = field(default_factory=set)
    failing_paths: set[str] = field(default_factory=set)
    connection_closed: bool = False
    calls: list[tuple[str, ...]] = field(default_factory=list)
    subscriptions: list[FakeSubscription] = field(default_factory=list)
    process_timeouts: list[float] = field(default_factory=list)
    closed: bool = False

    def __post_init__(self) -> None:
        self.objects.setdefault(
            self.client_path,
            {CLIENT_INTERFACE: {"Location": NO_LOCATION, "Active": False}},
        )

    # -- helpers used by tests ------------------------------------------

    def add_location(self, path: str, properties: dict[str, Any]) -> None:
        self.objects[path] = {LOCATION_INTERFACE: dict(properties)}

    def client_properties(self) -> dict[str, Any]:
        return self.objects[self.client_path][CLIENT_INTERFACE]

    def set_location(self, path: str) -> None:
        props = self.client_properties()
        old = props["Location"]
        props["Location"] = path
        if old != path:
            self.emit(self.client_path, CLIENT_INTERFACE, "LocationUpdated", (old, path))

    def emit(self, path: str, interface: str, signal: str, args: tuple[Any, ...]) -> None:
        for sub in list(self.subscriptions):
            if sub.key == (path, interface, signal):
                sub.callback(args)

    def _check(self, member: str, path: str) -> None:
        if member in self.fail_members or path in self.failing_paths:
            raise TransportError(f"{member} on {path} failed", path=path, member=member)

    # -- Transport protocol ---------------------------------------------

    def get_property(self, path: str, interface: str, name: str) -> Any:
        self.calls.append(("Get", path, interface, name))
        self._check(f"Get:{name}", path)
        try:
            return self.objects[path][interface][name]
        except KeyError as exc:
            raise TransportError(f"No property {name} on {path}", path=path) from exc

    def get_all_properties(self, path: str, interface: str) -> dict[str, Any]:
        self.calls.append(("GetAll", path, interface))
        self._check("GetAll", path)
        try:
            return dict(self.objects[path][interface])
        except KeyError as exc:
            raise TransportError(f"Unknown object {path}", path=path) from exc

    def set_property(self, path: str, interface: str, name: str, value: Any, signature: str) -> None:
        self.calls.append(("Set", path, interface, name, value, signature))
        self._check(f"Set:{name}", path)
        self.objects[path][interface][name] = value

    def call_method(self, path: str, interface: str, method: str, *args: Any) -> Any:
        self.calls.append(("Call", path, interface, method))
        self._check(method, path)
        if interface == MANAGER_INTERFACE and method == "GetClient":
            return self.client_path
        if interface == CLIENT_INTERFACE and method == "Start":
            self.client_properties()["Active"] = True
            return None
        if interface == CLIENT_INTERFACE and method == "Stop":
            self.client_properties()["Active"] = False
            return None
        raise TransportError(f"Unknown method {interface}.{method}", path=path, member=method)

    def subscribe_signal(
        self,
        path: str,
        interface: str,
        signal: str,
        callback: Callable[[tuple[Any, ...]], None],
    ) -> FakeSubscription:
        sub = FakeSubscription(self, (path, interface, signal), callback)
        self.subscriptions.append(sub)
        return sub

    def process(self, timeout: float) -> None:
        self.process_timeouts.append(timeout)
        if self.connection_closed:
            raise TransportError("System bus connection closed")
        if self.ticks:
            location = self.ticks.pop(0)
            if location is not None:
                self.set_location(location)

    def close(self) -> None:
        self.closed = True

    # -- assertions -----------------------------------------------------

    def getall_paths(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "GetAll"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_bus() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "location_data.json"


@pytest.fixture
def config(output_path: Path) -> BridgeConfig:
    return BridgeConfig(output_path=str(output_path), poll_interval=0.0)


@pytest.fixture
def bridge(config: BridgeConfig, fake_bus: FakeTransport) -> GeoClueBridge:
    return GeoClueBridge(config, transport_factory=lambda _config: fake_bus)
