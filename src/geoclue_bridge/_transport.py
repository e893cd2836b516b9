"""Structural bus transport interface.

The bridge only needs a handful of capabilities from the bus: read and
write properties, fetch a whole property bag, call a method, subscribe to a
signal, and wait a bounded time for inbound traffic. Having a protocol here
makes it easy to drive the bridge with an in-memory double while keeping the
production implementation (:class:`geoclue_bridge._dbus.PydbusTransport`)
concrete.

Every implementation raises :class:`geoclue_bridge.exceptions.TransportError`
for any failure; callers translate it into the error tier they need.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

#: Receives the (already unpacked) arguments of a fired signal.
SignalCallback = Callable[[tuple[Any, ...]], None]


class Subscription(Protocol):
    """Handle returned by :meth:`Transport.subscribe_signal`."""

    def unsubscribe(self) -> None:
        ...


class Transport(Protocol):
    """Capability set the bridge consumes from the bus."""

    def get_property(self, path: str, interface: str, name: str) -> Any:
        ...

    def get_all_properties(self, path: str, interface: str) -> dict[str, Any]:
        ...

    def set_property(self, path: str, interface: str, name: str, value: Any, signature: str) -> None:
        ...

    def call_method(self, path: str, interface: str, method: str, *args: Any) -> Any:
        ...

    def subscribe_signal(
        self,
        path: str,
        interface: str,
        signal: str,
        callback: SignalCallback,
    ) -> Subscription:
        ...

    def process(self, timeout: float) -> None:
        """Dispatch inbound traffic for at most *timeout* seconds.

        Returns early once something was dispatched. Raises
        :class:`~geoclue_bridge.exceptions.TransportError` when the
        connection is gone.
        """
        ...

    def close(self) -> None:
        ...
