"""GeoClue2 manager and client calls.

Endpoints:
  - Manager.GetClient
  - Client.DesktopId / DistanceThreshold / TimeThreshold /
    RequestedAccuracyLevel (property writes)
  - Client.Start / Client.Stop
  - Client.Location (property read)
"""

from __future__ import annotations

import logging

from geoclue_bridge._constants import (
    CLIENT_INTERFACE,
    MANAGER_INTERFACE,
    SIGNATURE_STRING,
    SIGNATURE_UINT32,
)
from geoclue_bridge._transport import Transport
from geoclue_bridge.config import BridgeConfig
from geoclue_bridge.exceptions import RemoteFetchError, SessionSetupError, TransportError
from geoclue_bridge.session import LocationRef

_logger = logging.getLogger(__name__)


def get_client(transport: Transport, config: BridgeConfig) -> str:
    """Return the object path of our client, creating it if needed."""
    try:
        client_path = transport.call_method(config.manager_path, MANAGER_INTERFACE, "GetClient")
    except TransportError as exc:
        raise SessionSetupError(f"GetClient failed: {exc}") from exc
    return str(client_path)


def _set_client_property(
    transport: Transport,
    client_path: str,
    name: str,
    value: int | str,
    signature: str,
) -> None:
    try:
        transport.set_property(client_path, CLIENT_INTERFACE, name, value, signature)
    except TransportError as exc:
        raise SessionSetupError(f"Setting {name}={value!r} on {client_path} failed: {exc}") from exc
    _logger.debug("Set %s=%r on %s", name, value, client_path)


def configure_client(transport: Transport, client_path: str, config: BridgeConfig) -> None:
    """Identify the bridge and make every service-side update observable.

    ``TimeThreshold`` and ``RequestedAccuracyLevel`` are only written when
    the configuration sets them.
    """
    _set_client_property(transport, client_path, "DesktopId", config.desktop_id, SIGNATURE_STRING)
    _set_client_property(
        transport,
        client_path,
        "DistanceThreshold",
        config.distance_threshold,
        SIGNATURE_UINT32,
    )
    if config.time_threshold is not None:
        _set_client_property(transport, client_path, "TimeThreshold", config.time_threshold, SIGNATURE_UINT32)
    if config.accuracy_level is not None:
        _set_client_property(
            transport,
            client_path,
            "RequestedAccuracyLevel",
            config.accuracy_level,
            SIGNATURE_UINT32,
        )


def start_client(transport: Transport, client_path: str) -> None:
    try:
        transport.call_method(client_path, CLIENT_INTERFACE, "Start")
    except TransportError as exc:
        raise SessionSetupError(f"Start on {client_path} failed: {exc}") from exc


def stop_client(transport: Transport, client_path: str) -> None:
    transport.call_method(client_path, CLIENT_INTERFACE, "Stop")


def read_current_location(transport: Transport, client_path: str) -> LocationRef:
    """Read the client's ``Location`` property."""
    try:
        location = transport.get_property(client_path, CLIENT_INTERFACE, "Location")
    except TransportError as exc:
        raise RemoteFetchError(f"Cannot read Location of {client_path}: {exc}", path=client_path) from exc
    return str(location)
