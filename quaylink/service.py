"""Service API: manage and inspect services within a swarm."""

from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from quaylink.uri import Request

__all__ = [
    "ListServicesOptions",
    "InspectServiceOptions",
    "UpdateServiceOptions",
    "registry_auth_header",
    "list_services",
    "create_service",
    "inspect_service",
    "delete_service",
    "update_service",
]


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def _without_none(mapping: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    if mapping is None:
        return {}
    return {key: value for key, value in mapping.items() if value is not None}


@dataclass
class ListServicesOptions:
    """Query parameters for listing services.

    Filters include ``id``, ``label``, ``mode`` and ``name``.
    """

    filters: dict[str, list[str]] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters, with the filters JSON-encoded."""
        return [("filters", _compact_json(self.filters))]


@dataclass
class InspectServiceOptions:
    """Query parameters for inspecting a service."""

    insert_defaults: bool = False

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters."""
        return [("insertDefaults", self.insert_defaults)]


@dataclass
class UpdateServiceOptions:
    """Query parameters for updating a service.

    ``version`` must match the service's current version.  With
    ``registry_auth_from`` set, registry credentials are taken from the
    previous spec; with ``rollback`` set, the daemon rolls back to the
    previous spec and ignores the one supplied.
    """

    version: int = 0
    registry_auth_from: bool = False
    rollback: bool = False

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters."""
        if self.version < 0:
            raise ValueError("version must not be negative")
        return [
            ("version", self.version),
            ("registryAuthFrom", "previous-spec" if self.registry_auth_from else "spec"),
            ("rollback", "previous" if self.rollback else ""),
        ]


def registry_auth_header(credentials: Optional[Mapping[str, Any]] = None) -> str:
    """Encode registry credentials as the value of the X-Registry-Auth header.

    Missing credentials encode as an empty object; ``None`` fields are left out.
    """
    serialized = _compact_json(_without_none(credentials))
    return base64.urlsafe_b64encode(serialized.encode("utf-8")).decode("ascii")


def _auth_headers(credentials: Optional[Mapping[str, Any]]) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "X-Registry-Auth": registry_auth_header(credentials),
    }


def list_services(options: Optional[ListServicesOptions] = None) -> Request:
    """Describe the request that lists services."""
    query = options.to_query() if options is not None else None
    return Request("GET", "/services", query=query)


def create_service(
    service_spec: Mapping[str, Any],
    credentials: Optional[Mapping[str, Any]] = None,
) -> Request:
    """Describe the request that dispatches a new service."""
    return Request(
        "POST",
        "/services/create",
        body=_compact_json(_without_none(service_spec)),
        headers=_auth_headers(credentials),
    )


def inspect_service(
    service_name: str, options: Optional[InspectServiceOptions] = None
) -> Request:
    """Describe the request that inspects a service by name or id."""
    query = options.to_query() if options is not None else None
    return Request("GET", f"/services/{service_name}", query=query)


def delete_service(service_name: str) -> Request:
    """Describe the request that deletes a service by name or id."""
    return Request("DELETE", f"/services/{service_name}")


def update_service(
    service_name: str,
    service_spec: Mapping[str, Any],
    options: UpdateServiceOptions,
    credentials: Optional[Mapping[str, Any]] = None,
) -> Request:
    """Describe the request that updates an existing service."""
    return Request(
        "POST",
        f"/services/{service_name}/update",
        query=options.to_query(),
        body=_compact_json(_without_none(service_spec)),
        headers=_auth_headers(credentials),
    )