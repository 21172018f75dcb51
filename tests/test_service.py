import base64
import json

import pytest

from quaylink.service import (
    InspectServiceOptions,
    ListServicesOptions,
    UpdateServiceOptions,
    create_service,
    delete_service,
    inspect_service,
    list_services,
    registry_auth_header,
    update_service,
)
from quaylink.uri import encode_query


def _decode_auth(value):
    return json.loads(base64.urlsafe_b64decode(value.encode("ascii")))


SPEC = {
    "Name": "integration_test_create_service",
    "TaskTemplate": {"ContainerSpec": {"Image": "localhost:5000/fussybeaver/uhttpd"}},
}


def test_list_services_filters_round_trip():
    options = ListServicesOptions(filters={"mode": ["global"]})
    request = list_services(options)
    assert request.method == "GET"
    assert request.path == "/services"
    (key, value), = request.query
    assert key == "filters"
    assert json.loads(value) == {"mode": ["global"]}


def test_list_services_without_options():
    request = list_services()
    assert request.query is None
    assert request.path == "/services"


def test_inspect_service_query():
    request = inspect_service("my-service", InspectServiceOptions(insert_defaults=True))
    assert request.method == "GET"
    assert request.path == "/services/my-service"
    assert request.query == [("insertDefaults", True)]


def test_inspect_service_without_options():
    assert inspect_service("my-service").query is None


def test_delete_service():
    request = delete_service("integration_test_create_service")
    assert request.method == "DELETE"
    assert request.path == "/services/integration_test_create_service"
    assert request.body is None


def test_update_options_defaults():
    query = dict(UpdateServiceOptions(version=1234).to_query())
    assert query == {"version": 1234, "registryAuthFrom": "spec", "rollback": ""}


def test_update_options_flags():
    query = dict(
        UpdateServiceOptions(version=7, registry_auth_from=True, rollback=True).to_query()
    )
    assert query["registryAuthFrom"] == "previous-spec"
    assert query["rollback"] == "previous"


def test_update_options_encoded():
    encoded = encode_query(UpdateServiceOptions(version=1234).to_query())
    assert encoded == "version=1234&registryAuthFrom=spec&rollback="


def test_update_options_negative_version():
    with pytest.raises(ValueError):
        UpdateServiceOptions(version=-1).to_query()


def test_registry_auth_header_empty():
    assert _decode_auth(registry_auth_header(None)) == {}
    assert registry_auth_header() == registry_auth_header({})


def test_registry_auth_header_round_trip():
    password = "password"
    credentials = {"username": "bollard", "password": password, "email": None}
    decoded = _decode_auth(registry_auth_header(credentials))
    assert decoded == {"username": "bollard", "password": "password"}


def test_create_service_request():
    request = create_service(SPEC, None)
    assert request.method == "POST"
    assert request.path == "/services/create"
    assert json.loads(request.body) == SPEC
    assert request.headers["Content-Type"] == "application/json"
    assert _decode_auth(request.headers["X-Registry-Auth"]) == {}


def test_create_service_drops_none_fields():
    request = create_service({"Name": "svc", "Mode": None})
    assert json.loads(request.body) == {"Name": "svc"}


def test_update_service_request():
    spec = dict(SPEC, Mode={"Replicated": {"Replicas": 0}})
    options = UpdateServiceOptions(version=42, rollback=True)
    request = update_service("integration_test_update_service", spec, options, None)
    assert request.method == "POST"
    assert request.path == "/services/integration_test_update_service/update"
    assert request.query == options.to_query()
    assert json.loads(request.body) == spec
    assert request.headers["X-Registry-Auth"] == registry_auth_header(None)


def test_update_service_with_credentials():
    credentials = {"username": "bollard"}
    request = update_service("svc", SPEC, UpdateServiceOptions(version=1), credentials)
    assert _decode_auth(request.headers["X-Registry-Auth"]) == credentials


def test_update_service_rejects_negative_version():
    with pytest.raises(ValueError):
        update_service("svc", SPEC, UpdateServiceOptions(version=-5))