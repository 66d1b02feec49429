"""Chooses the targets a message is routed to."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from pinexgw.routing_list import MsgTypeConverter, RoutingList, RoutingMethod

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_TAIL_LENGTH = 5
_WORD = 2**64


def _tail_hash(text: str) -> int:
    """Read the integer at the start of the last five characters of ``text``."""
    if len(text) < _TAIL_LENGTH:
        raise ValueError(f"id {text!r} is shorter than {_TAIL_LENGTH} characters")
    match = _LEADING_INT.match(text[-_TAIL_LENGTH:])
    if match is None:
        raise ValueError(f"id {text!r} does not end in a number")
    return int(match.group(1))


class Router:
    """Routes messages to the known targets following the routing list.

    ``config`` holds ``reverse`` (match prefixes from the end of the id) and
    ``routing_list`` (the route configurations).
    """

    def __init__(self, config: Mapping[str, Any], converter: MsgTypeConverter) -> None:
        self._last_index = 0
        self._reverse = bool(config["reverse"])
        self._routing_list = RoutingList(config["routing_list"], converter)
        self._targets: list[str] = []
        logger.info("router configuration applied successfully.")

    @property
    def routing_list(self) -> RoutingList:
        return self._routing_list

    @property
    def targets(self) -> list[str]:
        """The known targets, sorted."""
        return list(self._targets)

    @property
    def reverse(self) -> bool:
        return self._reverse

    def on_reverse_replace(self, value: bool) -> None:
        """Apply a new ``reverse`` setting."""
        self._reverse = bool(value)

    def add_target(self, target: str) -> bool:
        """Add a target; return False if it is already known."""
        if target in self._targets:
            logger.error("target %s is already exist", target)
            return False
        self._targets.append(target)
        self._targets.sort()
        return True

    def remove_target(self, target: str) -> None:
        """Forget a target and restart the round robin."""
        self._targets = [name for name in self._targets if name != target]
        self._last_index = 0

    def find(self, msg_type: int, id: str) -> list[str]:
        """Return the targets a message of ``msg_type`` with ``id`` goes to."""
        method = self._routing_list.find_routing_method(msg_type)
        if method is RoutingMethod.BROADCAST:
            return list(self._targets)
        if method is RoutingMethod.LOAD_BALANCE:
            return self._by_load_balance(id)
        if method is RoutingMethod.ROUND_ROBIN:
            return self._by_round_robin()
        if method is RoutingMethod.ROUTE_BY_PREFIX:
            target = self._routing_list.find_target(id, msg_type, self._reverse)
            return [target] if target else []
        if method is RoutingMethod.ROUTE_BY_CLIENT_ID:
            return [id] if id else []
        return []

    def _by_round_robin(self) -> list[str]:
        if not self._targets:
            return []
        target = self._targets[self._last_index]
        self._last_index = (self._last_index + 1) % len(self._targets)
        return [target]

    def _by_load_balance(self, id: str) -> list[str]:
        if not self._targets:
            return []
        index = (_tail_hash(id) % _WORD) % len(self._targets)
        return [self._targets[index]]