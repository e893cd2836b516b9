"""Data models for geoclue_bridge."""

from geoclue_bridge.models.snapshot import LocationSnapshot

__all__ = [
    "LocationSnapshot",
]
