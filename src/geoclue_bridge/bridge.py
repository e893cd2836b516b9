"""GeoClue2 to guest-file bridge: session setup and change-detection loop."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NoReturn

from geoclue_bridge._api.client import (
    configure_client,
    get_client,
    read_current_location,
    start_client,
    stop_client,
)
from geoclue_bridge._api.location import fetch_location_snapshot
from geoclue_bridge._constants import CLIENT_INTERFACE, NO_LOCATION
from geoclue_bridge._transport import Subscription, Transport
from geoclue_bridge.config import BridgeConfig
from geoclue_bridge.exceptions import BridgeError, PersistError, RemoteFetchError, TransportError
from geoclue_bridge.publisher import LocationPublisher
from geoclue_bridge.session import ClientSessionState, LocationRef

_logger = logging.getLogger(__name__)

TransportFactory = Callable[[BridgeConfig], Transport]


def connect_system_bus(config: BridgeConfig) -> Transport:
    """Default transport factory: pydbus on the system bus."""
    # Imported here so the loop can be driven without GLib installed.
    from geoclue_bridge._dbus import PydbusTransport

    return PydbusTransport.connect_system(bus_name=config.bus_name, call_timeout=config.call_timeout)


class GeoClueBridge:
    """Publishes every new GeoClue2 location to a file the guest polls.

    Usage::

        with GeoClueBridge(BridgeConfig()) as bridge:
            bridge.run_forever()

    The client's ``Location`` property is polled on every tick and is the
    only thing that triggers a publication. The ``LocationUpdated`` signal
    merely wakes the bounded wait early and is logged.
    """

    def __init__(
        self,
        config: BridgeConfig | None = None,
        *,
        transport_factory: TransportFactory = connect_system_bus,
        publisher: LocationPublisher | None = None,
    ) -> None:
        self._config = config or BridgeConfig()
        self._transport_factory = transport_factory
        self._publisher = publisher or LocationPublisher(self._config.output_path)
        self._transport: Transport | None = None
        self._state: ClientSessionState | None = None
        self._subscription: Subscription | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> GeoClueBridge:
        try:
            self.start()
        except BridgeError:
            self.close()
            raise
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def state(self) -> ClientSessionState | None:
        return self._state

    # ------------------------------------------------------------------
    # Session setup
    # ------------------------------------------------------------------

    def start(self) -> ClientSessionState:
        """Connect, obtain and configure the client, then start it.

        Raises
        ------
        TransportError
            The system bus is unreachable.
        SessionSetupError
            The client could not be obtained, configured or started.
        """
        config = self._config
        transport = self._transport_factory(config)
        self._transport = transport

        client_path = get_client(transport, config)
        _logger.info("GeoClue2 client path: %s", client_path)

        configure_client(transport, client_path, config)
        self._state = ClientSessionState(
            client_path=client_path,
            desktop_id=config.desktop_id,
            distance_threshold=config.distance_threshold,
        )

        try:
            self._subscription = transport.subscribe_signal(
                client_path,
                CLIENT_INTERFACE,
                "LocationUpdated",
                self._on_location_updated,
            )
        except TransportError as exc:
            # Polling still works without the wake-up hint.
            _logger.warning("Cannot subscribe to LocationUpdated: %s", exc)

        _logger.info("Starting GeoClue2 client")
        start_client(transport, client_path)
        return self._state

    def close(self) -> None:
        """Stop the client and release the transport. Never raises."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

        transport = self._transport
        if transport is None:
            return
        if self._state is not None:
            try:
                stop_client(transport, self._state.client_path)
                _logger.info("GeoClue2 client stopped")
            except BridgeError as exc:
                _logger.warning("Cannot stop GeoClue2 client: %s", exc)
        transport.close()
        self._transport = None

    # ------------------------------------------------------------------
    # Change detection
    # ------------------------------------------------------------------

    def _on_location_updated(self, args: tuple[Any, ...]) -> None:
        if len(args) >= 2:
            _logger.info("LocationUpdated signal: %s -> %s", args[0], args[1])
        else:
            _logger.info("LocationUpdated signal: %r", args)

    def run_once(self, timeout: float | None = None) -> bool:
        """Run one loop iteration.

        Waits up to *timeout* seconds (default ``config.poll_interval``) for
        bus traffic, then compares the client's ``Location`` against the
        last one acted on. Returns ``True`` when a new location was
        published.

        Raises
        ------
        TransportError
            The bus connection died. Fatal.
        """
        transport, state = self._require_started()
        transport.process(self._config.poll_interval if timeout is None else timeout)

        try:
            current = read_current_location(transport, state.client_path)
        except RemoteFetchError as exc:
            _logger.warning("%s", exc)
            return False

        previous = state.last_location
        if not state.advance(current):
            return False

        if current == NO_LOCATION:
            _logger.info("Location %s withdrawn, waiting for a new fix", previous)
            return False

        _logger.info("New location data available: %s", current)
        return self._publish(transport, current)

    def _publish(self, transport: Transport, location: LocationRef) -> bool:
        try:
            snapshot = fetch_location_snapshot(transport, location)
            self._publisher.publish(snapshot)
        except (RemoteFetchError, PersistError) as exc:
            _logger.warning("Location %s not published: %s", location, exc)
            return False
        _logger.debug("Published %s", snapshot.model_dump_json())
        _logger.info("Location %s published to %s", location, self._publisher.path)
        return True

    def run_forever(self) -> NoReturn:
        """Loop until the process is killed or the bus connection dies."""
        while True:
            self.run_once()

    def _require_started(self) -> tuple[Transport, ClientSessionState]:
        if self._transport is None or self._state is None:
            raise BridgeError("Bridge is not started; call start() first")
        return self._transport, self._state
