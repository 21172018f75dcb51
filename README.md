# quaylink

quaylink describes the HTTP requests that the Docker Engine API expects and
decodes the streams it sends back. Each API function returns a
`quaylink.uri.Request`, a dataclass with `method`, `path`, `query`, `body`
and `headers`. You send that request with whatever HTTP client you prefer.

It has no dependencies outside the standard library.

## Installation

```
pip install quaylink
```

To run the tests:

```
pip install "quaylink[test]"
pytest
```

## Modules

### `quaylink.uri`

- `ClientType` says how the daemon is reached: `HTTP`, `SSL`, `UNIX` or
  `NAMED_PIPE`.
- `ClientVersion(major_version, minor_version)` is the API version. Its
  `str()` form is `"1.41"`.
- `socket_scheme(client_type)` returns `http`, `https`, `unix` or `net.pipe`.
- `socket_host(socket, client_type)` returns the host unchanged for HTTP and
  SSL. For Unix sockets and named pipes it returns the socket path
  hex-encoded.
- `encode_query(params)` form-encodes a mapping or a list of pairs. Booleans
  become `true` and `false`. Pairs whose value is `None` are left out.
- `build_uri(socket, client_type, path, query, client_version)` builds the
  full URI under the `/v<major>.<minor>` prefix. When `query` is given, it
  replaces any query that is already in the path. An HTTP or SSL socket
  with an empty host raises `ValueError`.
- `socket_path_dest(destination, client_type)` recovers the hex-encoded
  socket path from a URI's host. It returns `None` when the host is missing
  or is not valid hex.

### `quaylink.read`

- `NewlineLogOutputDecoder.decode(buffer)` takes one frame off the front of a
  `bytearray`. It returns `None` when the frame is not yet complete.
  - A frame with an 8-byte header becomes a `LogOutput` of kind
    `LogKind.STDIN`, `STDOUT` or `STDERR`.
  - A buffer whose first byte is above 2 has no header. It is split on
    newlines into `LogKind.CONSOLE` items.
- `JsonLineDecoder(factory=None).decode(buffer)` takes one JSON value off the
  front of a `bytearray`.
  - If a line is not yet a complete value, its newline is removed so the
    value can continue on the next line, and `decode` returns `None`.
  - Syntax errors raise `json.JSONDecodeError`.
  - When `factory` is given, each decoded value is passed through it. A
    `TypeError`, `ValueError` or `KeyError` raised by the factory is
    re-raised as `JsonDataError`, which has `message`, `column` and
    `contents`.
- `StreamReader(chunks).read(size=-1)` reads from an iterable of byte chunks.
  A sized read never crosses a chunk boundary. Errors raised by the iterable
  surface as `OSError`.

### `quaylink.network`

Functions: `create_network`, `remove_network`, `inspect_network`,
`list_networks`, `connect_network`, `disconnect_network`, `prune_networks`.

Option classes:

- `CreateNetworkOptions`, `ConnectNetworkOptions` and
  `DisconnectNetworkOptions` produce the JSON body through `to_body()`.
- `InspectNetworkOptions`, `ListNetworksOptions` and `PruneNetworksOptions`
  produce query parameters through `to_query()`. Filters are sent as compact
  JSON.

### `quaylink.volume`

Functions: `list_volumes`, `create_volume`, `inspect_volume`,
`remove_volume`, `prune_volumes`.

Option classes: `ListVolumesOptions`, `CreateVolumeOptions`,
`RemoveVolumeOptions`, `PruneVolumesOptions`.

### `quaylink.secret`

Functions: `list_secrets`, `create_secret`, `inspect_secret`,
`delete_secret`, `update_secret`.

- A secret spec is a plain mapping. Keys whose value is `None` are dropped
  from the body.
- `UpdateSecretOptions(version)` rejects a negative version.

### `quaylink.service`

Functions: `list_services`, `create_service`, `inspect_service`,
`delete_service`, `update_service`.

- `registry_auth_header(credentials)` encodes a credentials mapping for the
  `X-Registry-Auth` header. The mapping is serialised as URL-safe base64
  JSON, with `None` fields dropped and no credentials encoded as `{}`.
- `create_service` and `update_service` set `X-Registry-Auth` and
  `Content-Type: application/json`.
- `UpdateServiceOptions` sends `registryAuthFrom` as `spec` or
  `previous-spec`. It sends `rollback` as an empty string or `previous`.

### `quaylink.system`

Functions: `version`, `info`, `ping`, `events`, `df`.

- `EventsOptions` takes `since` and `until` as a string, Unix seconds or a
  `datetime`. A `datetime` is sent as whole Unix seconds.
- `Version.from_dict` and `VersionComponents.from_dict` parse the version
  response and raise `ValueError` on fields of the wrong type.
- `Version.to_dict` and `VersionComponents.to_dict` turn them back into
  JSON objects.

## Example

```python
from quaylink.network import CreateNetworkOptions, create_network
from quaylink.uri import ClientType, ClientVersion, build_uri

request = create_network(CreateNetworkOptions(name="certs", driver="bridge"))
uri = build_uri(
    "/var/run/docker.sock",
    ClientType.UNIX,
    request.path,
    request.query,
    ClientVersion(1, 41),
)
print(request.method, uri)
print(request.body)
```

Decoding JSON progress lines:

```python
from quaylink.read import JsonLineDecoder

decoder = JsonLineDecoder()
buffer = bytearray(b'{"status":"Pulling"}\n{"status":"Done"}\n')
while (item := decoder.decode(buffer)) is not None:
    print(item["status"])
```

## What it does not do

- quaylink opens no connections and sends no requests. It has no client
  object, no connection to Unix sockets or named pipes, and no handling of
  response status codes. Those are left to the HTTP client you use.
- Apart from `Version`, responses are not turned into typed objects.
  Decoded JSON stays as plain dicts and lists.
- Container, image and exec endpoints are not covered.