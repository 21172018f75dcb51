"""Network API: user-defined networks that containers can be attached to."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from quaylink.uri import Request

__all__ = [
    "CreateNetworkOptions",
    "InspectNetworkOptions",
    "ListNetworksOptions",
    "ConnectNetworkOptions",
    "DisconnectNetworkOptions",
    "PruneNetworksOptions",
    "create_network",
    "remove_network",
    "inspect_network",
    "list_networks",
    "connect_network",
    "disconnect_network",
    "prune_networks",
]


def _filters_json(filters: dict[str, list[str]]) -> str:
    return json.dumps(filters, separators=(",", ":"))


def _payload(body: dict[str, Any]) -> str:
    return json.dumps(body, separators=(",", ":"))


@dataclass
class CreateNetworkOptions:
    """Network configuration for creating a network."""

    name: str = ""
    check_duplicate: bool = False
    driver: str = ""
    internal: bool = False
    attachable: bool = False
    ingress: bool = False
    ipam: dict[str, Any] = field(default_factory=dict)
    enable_ipv6: bool = False
    options: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    def to_body(self) -> dict[str, Any]:
        """Return the JSON request body."""
        return {
            "Name": self.name,
            "CheckDuplicate": self.check_duplicate,
            "Driver": self.driver,
            "Internal": self.internal,
            "Attachable": self.attachable,
            "Ingress": self.ingress,
            "IPAM": dict(self.ipam),
            "EnableIPv6": self.enable_ipv6,
            "Options": dict(self.options),
            "Labels": dict(self.labels),
        }


@dataclass
class InspectNetworkOptions:
    """Query parameters for inspecting a network."""

    verbose: bool = False
    scope: str = ""

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters."""
        return [("verbose", self.verbose), ("scope", self.scope)]


@dataclass
class ListNetworksOptions:
    """Query parameters for listing networks."""

    filters: dict[str, list[str]] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters, with the filters JSON-encoded."""
        return [("filters", _filters_json(self.filters))]


@dataclass
class ConnectNetworkOptions:
    """Configuration for connecting a container to a network."""

    container: str = ""
    endpoint_config: dict[str, Any] = field(default_factory=dict)

    def to_body(self) -> dict[str, Any]:
        """Return the JSON request body."""
        return {"Container": self.container, "EndpointConfig": dict(self.endpoint_config)}


@dataclass
class DisconnectNetworkOptions:
    """Configuration for disconnecting a container from a network."""

    container: str = ""
    force: bool = False

    def to_body(self) -> dict[str, Any]:
        """Return the JSON request body."""
        return {"Container": self.container, "Force": self.force}


@dataclass
class PruneNetworksOptions:
    """Query parameters for pruning unused networks."""

    filters: dict[str, list[str]] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters, with the filters JSON-encoded."""
        return [("filters", _filters_json(self.filters))]


def create_network(config: CreateNetworkOptions) -> Request:
    """Describe the request that creates a network."""
    return Request("POST", "/networks/create", body=_payload(config.to_body()))


def remove_network(network_name: str) -> Request:
    """Describe the request that removes a network."""
    return Request("DELETE", f"/networks/{network_name}")


def inspect_network(
    network_name: str, options: Optional[InspectNetworkOptions] = None
) -> Request:
    """Describe the request that inspects a network."""
    query = options.to_query() if options is not None else None
    return Request("GET", f"/networks/{network_name}", query=query)


def list_networks(options: Optional[ListNetworksOptions] = None) -> Request:
    """Describe the request that lists networks."""
    query = options.to_query() if options is not None else None
    return Request("GET", "/networks", query=query)


def connect_network(network_name: str, config: ConnectNetworkOptions) -> Request:
    """Describe the request that connects a container to a network."""
    return Request(
        "POST", f"/networks/{network_name}/connect", body=_payload(config.to_body())
    )


def disconnect_network(network_name: str, config: DisconnectNetworkOptions) -> Request:
    """Describe the request that disconnects a container from a network."""
    return Request(
        "POST", f"/networks/{network_name}/disconnect", body=_payload(config.to_body())
    )


def prune_networks(options: Optional[PruneNetworksOptions] = None) -> Request:
    """Describe the request that deletes unused networks."""
    query = options.to_query() if options is not None else None
    return Request("POST", "/networks/prune", query=query)