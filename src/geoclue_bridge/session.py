"""Client session state owned by the bridge event loop."""

from __future__ import annotations

from dataclasses import dataclass

from geoclue_bridge._constants import NO_LOCATION

#: Object path naming a location resource on the bus.
LocationRef = str


@dataclass(slots=True)
class ClientSessionState:
    """State of the single GeoClue2 client registration.

    Parameters
    ----------
    client_path : str
        Object path returned by the manager's ``GetClient``.
    desktop_id : str
        Identifier written to the client's ``DesktopId``.
    distance_threshold : int
        Value written to the client's ``DistanceThreshold``.
    last_location : LocationRef
        Last ``Location`` value the loop acted on. Starts at ``"/"``
        (no location observed yet) and is the only field that changes
        after startup.
    """

    client_path: str
    desktop_id: str
    distance_threshold: int
    last_location: LocationRef = NO_LOCATION

    @property
    def is_tracking(self) -> bool:
        """Whether a real location has been observed."""
        return self.last_location != NO_LOCATION

    def advance(self, location: LocationRef) -> bool:
        """Record *location* as the newest reference.

        Returns ``True`` when it differs from the previous one.
        """
        if location == self.last_location:
            return False
        self.last_location = location
        return True
