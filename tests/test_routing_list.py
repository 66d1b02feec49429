import pytest

from pinexgw.routing_list import (
    Route,
    RoutingList,
    RoutingMethod,
    parse_routing_method,
)

MSG_TYPES = {"ao": 1, "dr": 2, "at": 3}


def convert(name):
    return MSG_TYPES[name]


PREFIX_ROUTE = {
    "msg_type": "ao",
    "method": "prefix",
    "routes": [
        {"id": "r1", "target": "gw1", "prefix": ["98", "9891"]},
        {"id": "r2", "target": "gw2", "prefix": ["1"]},
    ],
}


@pytest.mark.parametrize(
    "name, method",
    [
        ("rond_robin", RoutingMethod.ROUND_ROBIN),
        ("load_balance", RoutingMethod.LOAD_BALANCE),
        ("broadcast", RoutingMethod.BROADCAST),
        ("prefix", RoutingMethod.ROUTE_BY_PREFIX),
        ("client_id", RoutingMethod.ROUTE_BY_CLIENT_ID),
    ],
)
def test_parse_routing_method(name, method):
    assert parse_routing_method(name) is method


def test_parse_routing_method_invalid():
    with pytest.raises(ValueError, match="invalid routing method"):
        parse_routing_method("round_robin")


def test_route_from_config_prefix():
    route = Route.from_config(PREFIX_ROUTE, convert)
    assert route.msg_type == 1
    assert route.method is RoutingMethod.ROUTE_BY_PREFIX
    assert route.target == "gw2"
    assert route.destinations.find_destination("9812") == "gw1"


def test_route_from_config_non_prefix_has_no_destinations():
    route = Route.from_config({"msg_type": "dr", "method": "broadcast"}, convert)
    assert route.method is RoutingMethod.BROADCAST
    assert list(route.destinations) == []


def test_find_target_longest_prefix():
    routing = RoutingList([PREFIX_ROUTE], convert)
    assert routing.find_target("989121234", 1) == "gw1"
    assert routing.find_target("981234", 1) == "gw1"
    assert routing.find_target("123", 1) == "gw2"
    assert routing.find_target("55", 1) == ""


def test_find_target_unknown_msg_type():
    routing = RoutingList([PREFIX_ROUTE], convert)
    assert routing.find_target("98", 3) == ""


def test_find_target_reverse():
    routing = RoutingList([PREFIX_ROUTE], convert)
    assert routing.find_target("x89", 1, True) == "gw1"


def test_find_routing_method_defaults_to_round_robin():
    routing = RoutingList([{"msg_type": "dr", "method": "client_id"}], convert)
    assert routing.find_routing_method(2) is RoutingMethod.ROUTE_BY_CLIENT_ID
    assert routing.find_routing_method(1) is RoutingMethod.ROUND_ROBIN


def test_duplicate_msg_type_rejected():
    with pytest.raises(ValueError, match="route ao is duplicated!"):
        RoutingList([PREFIX_ROUTE, {"msg_type": "ao", "method": "broadcast"}], convert)


def test_invalid_method_rejected():
    with pytest.raises(ValueError):
        RoutingList([{"msg_type": "ao", "method": "nope"}], convert)


def test_insert_and_remove():
    routing = RoutingList([], convert)
    routing.on_routes_insert({"msg_type": "at", "method": "load_balance"})
    assert routing.find_routing_method(3) is RoutingMethod.LOAD_BALANCE
    with pytest.raises(ValueError):
        routing.on_routes_insert({"msg_type": "at", "method": "broadcast"})
    routing.on_routes_remove({"msg_type": "at", "method": "load_balance"})
    assert routing.find_routing_method(3) is RoutingMethod.ROUND_ROBIN
    assert routing.routes == {}