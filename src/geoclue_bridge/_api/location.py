"""Location object reads.

Endpoint:
  - org.freedesktop.DBus.Properties.GetAll("org.freedesktop.GeoClue2.Location")
"""

from __future__ import annotations

import logging

from geoclue_bridge._constants import LOCATION_INTERFACE
from geoclue_bridge._transport import Transport
from geoclue_bridge.exceptions import RemoteFetchError, TransportError
from geoclue_bridge.models.snapshot import LocationSnapshot
from geoclue_bridge.session import LocationRef

_logger = logging.getLogger(__name__)


def fetch_location_snapshot(transport: Transport, location: LocationRef) -> LocationSnapshot:
    """Fetch every property of *location* and flatten it into a snapshot.

    Raises
    ------
    RemoteFetchError
        The object vanished, the call timed out or the bus reported an
        error.
    """
    try:
        properties = transport.get_all_properties(location, LOCATION_INTERFACE)
    except TransportError as exc:
        raise RemoteFetchError(f"Cannot read location {location}: {exc}", path=location) from exc

    _logger.debug("Location %s exposes %d properties", location, len(properties))
    return LocationSnapshot.from_properties(properties)
