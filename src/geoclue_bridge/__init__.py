"""geoclue_bridge - Publish GeoClue2 locations to a file a sandboxed guest can poll."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("geoclue-bridge")
except PackageNotFoundError:
    __version__ = "0+local"
from geoclue_bridge.bridge import GeoClueBridge, connect_system_bus
from geoclue_bridge.config import BridgeConfig
from geoclue_bridge.exceptions import (
    BridgeError,
    PersistError,
    RemoteFetchError,
    SessionSetupError,
    TransportError,
)
from geoclue_bridge.models import LocationSnapshot
from geoclue_bridge.normalize import coerce_property
from geoclue_bridge.publisher import LocationPublisher
from geoclue_bridge.session import ClientSessionState, LocationRef

__all__ = [
    "__version__",
    "BridgeConfig",
    "BridgeError",
    "ClientSessionState",
    "GeoClueBridge",
    "LocationPublisher",
    "LocationRef",
    "LocationSnapshot",
    "PersistError",
    "RemoteFetchError",
    "SessionSetupError",
    "TransportError",
    "coerce_property",
    "connect_system_bus",
]
