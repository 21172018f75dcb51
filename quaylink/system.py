"""System API: daemon version, information, events and disk usage."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from quaylink.uri import Request

__all__ = [
    "VersionComponents",
    "Version",
    "EventsOptions",
    "version",
    "info",
    "ping",
    "events",
    "df",
]

Timestamp = Union[str, int, datetime]


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _required_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


@dataclass
class VersionComponents:
    """One component of the daemon, with its version and free-form details."""

    name: str
    version: str
    details: Optional[dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VersionComponents:
        """Build from the daemon's JSON object; ``Name`` and ``Version`` are required."""
        details = data.get("Details")
        if details is not None and not isinstance(details, Mapping):
            raise ValueError("field 'Details' must be an object")
        return cls(
            name=_required_str(data, "Name"),
            version=_required_str(data, "Version"),
            details=dict(details) if details is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object, leaving out absent details."""
        result: dict[str, Any] = {"Name": self.name, "Version": self.version}
        if self.details is not None:
            result["Details"] = dict(self.details)
        return result


_VERSION_STRING_FIELDS = (
    ("version", "Version"),
    ("api_version", "ApiVersion"),
    ("min_api_version", "MinAPIVersion"),
    ("git_commit", "GitCommit"),
    ("go_version", "GoVersion"),
    ("os", "Os"),
    ("arch", "Arch"),
    ("kernel_version", "KernelVersion"),
    ("build_time", "BuildTime"),
)


@dataclass
class Version:
    """Response of the version endpoint."""

    platform: Optional[dict[str, Any]] = None
    components: Optional[list[VersionComponents]] = None
    version: Optional[str] = None
    api_version: Optional[str] = None
    min_api_version: Optional[str] = None
    git_commit: Optional[str] = None
    go_version: Optional[str] = None
    os: Optional[str] = None
    arch: Optional[str] = None
    kernel_version: Optional[str] = None
    experimental: Optional[Union[str, bool]] = None
    build_time: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Version:
        """Build from the daemon's JSON object; every field is optional."""
        platform = data.get("Platform")
        if platform is not None and not isinstance(platform, Mapping):
            raise ValueError("field 'Platform' must be an object")

        raw_components = data.get("Components")
        if raw_components is not None and not isinstance(raw_components, list):
            raise ValueError("field 'Components' must be an array")
        components = (
            [VersionComponents.from_dict(item) for item in raw_components]
            if raw_components is not None
            else None
        )

        experimental = data.get("Experimental")
        if experimental is not None and not isinstance(experimental, (str, bool)):
            raise ValueError("field 'Experimental' must be a string or boolean")

        strings = {attr: _optional_str(data, key) for attr, key in _VERSION_STRING_FIELDS}
        return cls(
            platform=dict(platform) if platform is not None else None,
            components=components,
            experimental=experimental,
            **strings,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object, leaving out absent fields."""
        result: dict[str, Any] = {}
        if self.platform is not None:
            result["Platform"] = dict(self.platform)
        if self.components is not None:
            result["Components"] = [c.to_dict() for c in self.components]
        for attr, key in _VERSION_STRING_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        if self.experimental is not None:
            result["Experimental"] = self.experimental
        return dict(sorted(result.items(), key=lambda item: _KEY_ORDER.index(item[0])))


_KEY_ORDER = [
    "Platform",
    "Components",
    "Version",
    "ApiVersion",
    "MinAPIVersion",
    "GitCommit",
    "GoVersion",
    "Os",
    "Arch",
    "KernelVersion",
    "Experimental",
    "BuildTime",
]


def _timestamp(value: Optional[Timestamp]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return str(int(value.timestamp()))
    if isinstance(value, bool):
        raise TypeError("timestamp must not be a boolean")
    return str(value)


@dataclass
class EventsOptions:
    """Query parameters for streaming events.

    ``since`` and ``until`` take a timestamp string, Unix seconds or a
    datetime.  Filters include ``container``, ``event``, ``image``,
    ``label``, ``network``, ``type``, ``volume`` and others.
    """

    since: Optional[Timestamp] = None
    until: Optional[Timestamp] = None
    filters: dict[str, list[str]] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters, with the filters JSON-encoded."""
        return [
            ("since", _timestamp(self.since)),
            ("until", _timestamp(self.until)),
            ("filters", _compact_json(self.filters)),
        ]


def version() -> Request:
    """Describe the request for the daemon's version."""
    return Request("GET", "/version")


def info() -> Request:
    """Describe the request for system-wide information."""
    return Request("GET", "/info")


def ping() -> Request:
    """Describe the request that checks the daemon is reachable."""
    return Request("GET", "/_ping")


def events(options: Optional[EventsOptions] = None) -> Request:
    """Describe the request that streams real-time events."""
    query = options.to_query() if options is not None else None
    return Request("GET", "/events", query=query)


def df() -> Request:
    """Describe the request for disk usage information."""
    return Request("GET", "/system/df")