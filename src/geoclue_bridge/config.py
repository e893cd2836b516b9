"""Bridge configuration for geoclue_bridge."""

from __future__ import annotations

import dataclasses

from geoclue_bridge._constants import DESKTOP_ID, GEOCLUE2_BUS_NAME, MANAGER_PATH, OUTPUT_PATH


@dataclasses.dataclass(frozen=True)
class BridgeConfig:
    """Bridge configuration.

    The defaults are the only values used in production; the fields exist
    so tests and embedders can point the bridge elsewhere.

    Parameters
    ----------
    bus_name : str
        Well-known name of the location service on the system bus.
    manager_path : str
        Object path of the GeoClue2 manager.
    desktop_id : str
        Application identifier written to the client's ``DesktopId``.
    distance_threshold : int
        Minimum displacement in metres before the service reports a new
        location. ``0`` makes every service-side update observable.
    time_threshold : int or None
        Minimum seconds between reports. ``None`` leaves the service
        default untouched.
    accuracy_level : int or None
        GeoClue2 ``RequestedAccuracyLevel`` (e.g. ``8`` for EXACT).
        ``None`` leaves the service default untouched.
    output_path : str
        File the guest polls. Fully replaced on every publication.
    poll_interval : float
        Upper bound in seconds for one wait on bus traffic.
    call_timeout : float
        Timeout in seconds for individual method calls.
    """

    bus_name: str = GEOCLUE2_BUS_NAME
    manager_path: str = MANAGER_PATH
    desktop_id: str = DESKTOP_ID
    distance_threshold: int = 0
    time_threshold: int | None = None
    accuracy_level: int | None = None
    output_path: str = OUTPUT_PATH
    poll_interval: float = 1.0
    call_timeout: float = 5.0
