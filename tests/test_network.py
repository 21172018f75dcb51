import json
from urllib.parse import parse_qs

import pytest

from quaylink.network import (
    ConnectNetworkOptions,
    CreateNetworkOptions,
    DisconnectNetworkOptions,
    InspectNetworkOptions,
    ListNetworksOptions,
    PruneNetworksOptions,
    connect_network,
    create_network,
    disconnect_network,
    inspect_network,
    list_networks,
    prune_networks,
    remove_network,
)
from quaylink.uri import encode_query


def test_create_network_body_keys():
    opts = CreateNetworkOptions(
        name="integration_test_create_network",
        check_duplicate=True,
        driver="bridge",
        ipam={"Config": [{"Subnet": "10.10.10.10/24"}]},
    )
    req = create_network(opts)
    assert req.method == "POST"
    assert req.path == "/networks/create"
    body = json.loads(req.body)
    assert body["Name"] == "integration_test_create_network"
    assert body["CheckDuplicate"] is True
    assert body["Driver"] == "bridge"
    assert body["IPAM"] == {"Config": [{"Subnet": "10.10.10.10/24"}]}
    assert body["EnableIPv6"] is False
    assert body == opts.to_body()


def test_create_network_defaults():
    body = CreateNetworkOptions().to_body()
    assert body == {
        "Name": "",
        "CheckDuplicate": False,
        "Driver": "",
        "Internal": False,
        "Attachable": False,
        "Ingress": False,
        "IPAM": {},
        "EnableIPv6": False,
        "Options": {},
        "Labels": {},
    }


def test_create_network_labels_preserved():
    opts = CreateNetworkOptions(name="n", labels={"maintainer": "bollard-maintainer"})
    assert json.loads(create_network(opts).body)["Labels"] == {
        "maintainer": "bollard-maintainer"
    }


def test_remove_network():
    req = remove_network("my_network_name")
    assert (req.method, req.path, req.query, req.body) == (
        "DELETE",
        "/networks/my_network_name",
        None,
        None,
    )


def test_inspect_network_with_options():
    req = inspect_network("my_network_name", InspectNetworkOptions(verbose=True, scope="global"))
    assert req.method == "GET"
    assert req.path == "/networks/my_network_name"
    assert encode_query(req.query) == "verbose=true&scope=global"


def test_inspect_network_without_options():
    assert inspect_network("net").query is None


def test_list_networks_filters_round_trip():
    filters = {"label": ["maintainer=some_maintainer"]}
    req = list_networks(ListNetworksOptions(filters=filters))
    assert req.method == "GET"
    assert req.path == "/networks"
    parsed = parse_qs(encode_query(req.query))
    assert json.loads(parsed["filters"][0]) == filters


def test_list_networks_no_options():
    assert list_networks().query is None


def test_empty_filters_encode_as_empty_object():
    assert ListNetworksOptions().to_query() == [("filters", "{}")]


def test_connect_network():
    opts = ConnectNetworkOptions(
        container="3613f73ba0e4",
        endpoint_config={"IPAMConfig": {"IPv4Address": "172.24.56.89"}},
    )
    req = connect_network("my_network_name", opts)
    assert req.method == "POST"
    assert req.path == "/networks/my_network_name/connect"
    assert json.loads(req.body) == {
        "Container": "3613f73ba0e4",
        "EndpointConfig": {"IPAMConfig": {"IPv4Address": "172.24.56.89"}},
    }


def test_disconnect_network():
    req = disconnect_network(
        "my_network_name", DisconnectNetworkOptions(container="3613f73ba0e4", force=True)
    )
    assert req.path == "/networks/my_network_name/disconnect"
    assert json.loads(req.body) == {"Container": "3613f73ba0e4", "Force": True}


@pytest.mark.parametrize("filters", [{}, {"label!": ["maintainer=some_maintainer"]}])
def test_prune_networks(filters):
    req = prune_networks(PruneNetworksOptions(filters=filters))
    assert req.method == "POST"
    assert req.path == "/networks/prune"
    assert json.loads(dict(req.query)["filters"]) == filters


def test_prune_networks_no_options():
    req = prune_networks()
    assert req.query is None
    assert req.body is None