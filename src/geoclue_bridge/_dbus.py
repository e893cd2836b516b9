"""System bus transport built on pydbus and the GLib main context."""

from __future__ import annotations

import logging
from typing import Any

from gi.repository import GLib
from pydbus import SystemBus

from geoclue_bridge._transport import SignalCallback, Subscription
from geoclue_bridge.exceptions import TransportError

_logger = logging.getLogger(__name__)

_PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

# GeoClue2 creates a fresh location object per fix; keep only recent proxies.
_PROXY_CACHE_SIZE = 8


class PydbusTransport:
    """Transport over a pydbus bus connection.

    Proxies are created lazily per object path. Signal callbacks fire from
    inside :meth:`process`, which is the only place the GLib main context
    is iterated.
    """

    def __init__(self, bus: Any, *, bus_name: str, call_timeout: float = 5.0) -> None:
        self._bus = bus
        self._bus_name = bus_name
        self._call_timeout = call_timeout
        self._proxies: dict[str, Any] = {}
        self._context = GLib.MainContext.default()
        # Report a dropped connection as TransportError instead of letting
        # GIO terminate the process.
        self._bus.con.set_exit_on_close(False)

    @classmethod
    def connect_system(cls, *, bus_name: str, call_timeout: float = 5.0) -> PydbusTransport:
        """Connect to the system bus."""
        try:
            bus = SystemBus()
        except GLib.Error as exc:
            raise TransportError(f"Cannot connect to the system bus: {exc.message}") from exc
        _logger.debug("Connected to the system bus")
        return cls(bus, bus_name=bus_name, call_timeout=call_timeout)

    def _proxy(self, path: str) -> Any:
        proxy = self._proxies.get(path)
        if proxy is None:
            try:
                proxy = self._bus.get(self._bus_name, path)
            except GLib.Error as exc:
                raise TransportError(
                    f"Cannot reach {self._bus_name} at {path}: {exc.message}",
                    path=path,
                ) from exc
            if len(self._proxies) >= _PROXY_CACHE_SIZE:
                self._proxies.pop(next(iter(self._proxies)))
            self._proxies[path] = proxy
        return proxy

    def _interface(self, path: str, interface: str) -> Any:
        try:
            return self._proxy(path)[interface]
        except KeyError as exc:
            raise TransportError(f"{path} does not implement {interface}", path=path) from exc

    def _invoke(self, path: str, interface: str, member: str, *args: Any) -> Any:
        bound = self._interface(path, interface)
        try:
            method = getattr(bound, member)
        except AttributeError as exc:
            raise TransportError(
                f"{interface} at {path} has no method {member}",
                path=path,
                member=member,
            ) from exc
        try:
            return method(*args, timeout=self._call_timeout)
        except GLib.Error as exc:
            # Drop the proxy so a vanished object is re-introspected next time.
            self._proxies.pop(path, None)
            raise TransportError(
                f"{interface}.{member} on {path} failed: {exc.message}",
                path=path,
                member=member,
            ) from exc

    def get_property(self, path: str, interface: str, name: str) -> Any:
        return self._invoke(path, _PROPERTIES_INTERFACE, "Get", interface, name)

    def get_all_properties(self, path: str, interface: str) -> dict[str, Any]:
        return dict(self._invoke(path, _PROPERTIES_INTERFACE, "GetAll", interface))

    def set_property(self, path: str, interface: str, name: str, value: Any, signature: str) -> None:
        self._invoke(path, _PROPERTIES_INTERFACE, "Set", interface, name, GLib.Variant(signature, value))

    def call_method(self, path: str, interface: str, method: str, *args: Any) -> Any:
        return self._invoke(path, interface, method, *args)

    def subscribe_signal(
        self,
        path: str,
        interface: str,
        signal: str,
        callback: SignalCallback,
    ) -> Subscription:
        def on_signal(_sender: str, _object: str, _iface: str, _signal: str, params: Any) -> None:
            callback(tuple(params))

        try:
            return self._bus.subscribe(
                sender=self._bus_name,
                iface=interface,
                signal=signal,
                object=path,
                signal_fired=on_signal,
            )
        except GLib.Error as exc:
            raise TransportError(
                f"Cannot subscribe to {interface}.{signal} on {path}: {exc.message}",
                path=path,
                member=signal,
            ) from exc

    def process(self, timeout: float) -> None:
        expired: list[bool] = []

        def on_timeout() -> bool:
            expired.append(True)
            return False

        source_id = GLib.timeout_add(max(0, int(timeout * 1000)), on_timeout)
        self._context.iteration(True)
        if not expired:
            GLib.source_remove(source_id)
        while self._context.pending():
            self._context.iteration(False)

        if self._bus.con.is_closed():
            raise TransportError("System bus connection closed")

    def close(self) -> None:
        self._proxies.clear()
