"""Custom exception hierarchy for geoclue_bridge."""

from __future__ import annotations


class BridgeError(Exception):
    """Base exception for all geoclue_bridge errors."""


class TransportError(BridgeError):
    """Bus-level failure (cannot connect, connection closed, call failed)."""

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        member: str = "",
    ) -> None:
        self.path = path
        self.member = member
        super().__init__(message)


class SessionSetupError(BridgeError):
    """Could not obtain, configure or start the GeoClue2 client.

    Fatal: the bridge cannot do any useful work without a started client.
    """


class RemoteFetchError(BridgeError):
    """Reading properties of a remote object failed.

    Raised when the location object vanished, the call timed out or the
    transport reported an error. Recoverable: the event loop logs it and
    waits for the next location.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class PersistError(BridgeError):
    """Writing the published document failed (permissions, disk full, ...)."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
