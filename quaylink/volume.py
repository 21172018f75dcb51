"""Volume API: persistent storage that can be attached to containers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from quaylink.uri import Request

__all__ = [
    "ListVolumesOptions",
    "CreateVolumeOptions",
    "RemoveVolumeOptions",
    "PruneVolumesOptions",
    "list_volumes",
    "create_volume",
    "inspect_volume",
    "remove_volume",
    "prune_volumes",
]


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


@dataclass
class ListVolumesOptions:
    """Query parameters for listing volumes.

    Filters include ``dangling``, ``driver``, ``label`` and ``name``.
    """

    filters: dict[str, list[str]] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters, with the filters JSON-encoded."""
        return [("filters", _compact_json(self.filters))]


@dataclass
class CreateVolumeOptions:
    """Volume configuration for creating a volume."""

    name: str = ""
    driver: str = ""
    driver_opts: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    def to_body(self) -> dict[str, Any]:
        """Return the JSON request body."""
        return {
            "Name": self.name,
            "Driver": self.driver,
            "DriverOpts": dict(self.driver_opts),
            "Labels": dict(self.labels),
        }


@dataclass
class RemoveVolumeOptions:
    """Query parameters for removing a volume."""

    force: bool = False

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters."""
        return [("force", self.force)]


@dataclass
class PruneVolumesOptions:
    """Query parameters for pruning unused volumes."""

    filters: dict[str, list[str]] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters, with the filters JSON-encoded."""
        return [("filters", _compact_json(self.filters))]


def list_volumes(options: Optional[ListVolumesOptions] = None) -> Request:
    """Describe the request that lists volumes."""
    query = options.to_query() if options is not None else None
    return Request("GET", "/volumes", query=query)


def create_volume(config: CreateVolumeOptions) -> Request:
    """Describe the request that creates a volume."""
    return Request("POST", "/volumes/create", body=_compact_json(config.to_body()))


def inspect_volume(volume_name: str) -> Request:
    """Describe the request that inspects a volume."""
    return Request("GET", f"/volumes/{volume_name}")


def remove_volume(
    volume_name: str, options: Optional[RemoveVolumeOptions] = None
) -> Request:
    """Describe the request that removes a volume."""
    query = options.to_query() if options is not None else None
    return Request("DELETE", f"/volumes/{volume_name}", query=query)


def prune_volumes(options: Optional[PruneVolumesOptions] = None) -> Request:
    """Describe the request that deletes unused volumes."""
    query = options.to_query() if options is not None else None
    return Request("POST", "/volumes/prune", query=query)