"""Per-message-type routing rules for the pinex gateway."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from pinexgw.route_mapper import RouteMapper

logger = logging.getLogger(__name__)

MsgTypeConverter = Callable[[str], int]


class RoutingMethod(enum.IntEnum):
    """How the targets of a message type are chosen."""

    ROUND_ROBIN = 0
    LOAD_BALANCE = 1
    BROADCAST = 2
    ROUTE_BY_CLIENT_ID = 3
    ROUTE_BY_PREFIX = 4


_METHOD_NAMES = {
    "rond_robin": RoutingMethod.ROUND_ROBIN,
    "load_balance": RoutingMethod.LOAD_BALANCE,
    "broadcast": RoutingMethod.BROADCAST,
    "prefix": RoutingMethod.ROUTE_BY_PREFIX,
    "client_id": RoutingMethod.ROUTE_BY_CLIENT_ID,
}


def parse_routing_method(name: str) -> RoutingMethod:
    """Return the routing method named in configuration."""
    try:
        return _METHOD_NAMES[name]
    except KeyError:
        logger.error("invalid routing method!")
        raise ValueError("invalid routing method!") from None


@dataclass
class Route:
    """The routing rule of one message type.

    For prefix routing, ``destinations`` maps number prefixes to targets.
    """

    msg_type: int
    method: RoutingMethod
    target: str = ""
    destinations: RouteMapper = field(default_factory=RouteMapper)

    @classmethod
    def from_config(cls, config: Mapping[str, Any], converter: MsgTypeConverter) -> Route:
        """Build a route from its configuration mapping."""
        route = cls(
            msg_type=converter(config["msg_type"]),
            method=parse_routing_method(config["method"]),
        )
        if route.method is RoutingMethod.ROUTE_BY_PREFIX:
            for entry in config["routes"]:
                route.target = entry["target"]
                for prefix in entry["prefix"]:
                    route.destinations.add_route(prefix, route.target)
        return route


class RoutingList:
    """All routing rules, keyed by message type."""

    def __init__(self, config: Iterable[Mapping[str, Any]], converter: MsgTypeConverter) -> None:
        self._converter = converter
        self._routes: dict[int, Route] = {}
        for route_config in config:
            self._insert(route_config)

    @property
    def routes(self) -> dict[int, Route]:
        """The routes by message type."""
        return dict(self._routes)

    def _insert(self, config: Mapping[str, Any]) -> None:
        route = Route.from_config(config, self._converter)
        if route.msg_type in self._routes:
            message = f"route {config['msg_type']} is duplicated!"
            logger.error(message)
            raise ValueError(message)
        self._routes[route.msg_type] = route

    def on_routes_insert(self, config: Mapping[str, Any]) -> None:
        """Add the route described by ``config``."""
        self._insert(config)

    def on_routes_remove(self, config: Mapping[str, Any]) -> None:
        """Drop the route of the message type described by ``config``."""
        route = Route.from_config(config, self._converter)
        self._routes.pop(route.msg_type, None)

    def find_routing_method(self, msg_type: int) -> RoutingMethod:
        """Return the method for ``msg_type``; round robin when it has no route."""
        route = self._routes.get(msg_type)
        return route.method if route is not None else RoutingMethod.ROUND_ROBIN

    def find_target(self, prefix: str, msg_type: int, reverse: bool = False) -> str:
        """Return the target whose prefix best matches ``prefix``, or ""."""
        route = self._routes.get(msg_type)
        if route is None:
            return ""
        found = route.destinations.find_destination(prefix, reverse)
        return found if found is not None else ""