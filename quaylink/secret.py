"""Secret API: manage and inspect secrets within a swarm."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from quaylink.uri import Request

__all__ = [
    "ListSecretsOptions",
    "UpdateSecretOptions",
    "list_secrets",
    "create_secret",
    "inspect_secret",
    "delete_secret",
    "update_secret",
]


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def _spec_payload(secret_spec: Mapping[str, Any]) -> str:
    return _compact_json({k: v for k, v in secret_spec.items() if v is not None})


@dataclass
class ListSecretsOptions:
    """Query parameters for listing secrets.

    Filters include ``id``, ``label``, ``name`` and ``names``.
    """

    filters: dict[str, list[str]] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters, with the filters JSON-encoded."""
        return [("filters", _compact_json(self.filters))]


@dataclass
class UpdateSecretOptions:
    """Query parameters for updating a secret.

    ``version`` must match the secret's current version to avoid
    conflicting writes.
    """

    version: int = 0

    def to_query(self) -> list[tuple[str, Any]]:
        """Return the query parameters."""
        if self.version < 0:
            raise ValueError("version must not be negative")
        return [("version", self.version)]


def list_secrets(options: Optional[ListSecretsOptions] = None) -> Request:
    """Describe the request that lists secrets."""
    query = options.to_query() if options is not None else None
    return Request("GET", "/secrets", query=query)


def create_secret(secret_spec: Mapping[str, Any]) -> Request:
    """Describe the request that creates a secret from a spec mapping."""
    return Request("POST", "/secrets/create", body=_spec_payload(secret_spec))


def inspect_secret(secret_id: str) -> Request:
    """Describe the request that inspects a secret by id or name."""
    return Request("GET", f"/secrets/{secret_id}")


def delete_secret(secret_id: str) -> Request:
    """Describe the request that deletes a secret by id or name."""
    return Request("DELETE", f"/secrets/{secret_id}")


def update_secret(
    secret_id: str, secret_spec: Mapping[str, Any], options: UpdateSecretOptions
) -> Request:
    """Describe the request that updates an existing secret."""
    return Request(
        "POST",
        f"/secrets/{secret_id}/update",
        query=options.to_query(),
        body=_spec_payload(secret_spec),
    )