"""Location snapshot model."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ConfigDict, RootModel

from geoclue_bridge.normalize import coerce_property


class LocationSnapshot(RootModel[dict[str, str]]):
    """String-coerced property bag of one location object.

    Keys keep the order in which the bus returned them. Instances are
    frozen: a snapshot is built once per detected change, serialized and
    dropped.

    Serializes to compact JSON::

        >>> LocationSnapshot.from_properties({"Latitude": 51.5}).model_dump_json()
        '{"Latitude":"51.5"}'
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> LocationSnapshot:
        """Build a snapshot from a raw ``GetAll`` result."""
        flattened: dict[str, str] = {}
        for name, value in properties.items():
            flattened[str(name)] = coerce_property(value)
        return cls(flattened)

    def __getitem__(self, key: str) -> str:
        return self.root[key]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)
