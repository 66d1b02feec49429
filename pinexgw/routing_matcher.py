"""Selects the target connection of an SMPP packet by prefix rules."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from pinexgw.prefix_rule_matcher import PrefixRuleMatcher

logger = logging.getLogger(__name__)

ROUTING_FIELD_NUMBER = 4
MAXIMUM_RULE_NUMBER = 1000


class PacketType(enum.IntEnum):
    """Kinds of SMPP packets that can be routed."""

    UNKNOWN = 0
    AO = 1
    DR = 2
    AT = 3


_PDU_TYPE_NAMES = {
    "submit": str(int(PacketType.AO)),
    "deliver": str(int(PacketType.AT)),
    "delivery_report": str(int(PacketType.DR)),
    "*": "*",
}


def _or_any(value: str) -> str:
    return value if value else "*"


@dataclass(frozen=True)
class RoutingInfo:
    """One routing rule: packets matching every field go to ``target``."""

    rule_id: int
    priority: int
    target: str
    from_: str = "*"
    source_address: str = "*"
    destination_address: str = "*"
    pdu_type: str = "*"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> RoutingInfo:
        """Build a rule from its configuration mapping; empty fields match anything."""
        pdu_type = _or_any(config["pdu_type"])
        if pdu_type in _PDU_TYPE_NAMES:
            pdu_type = _PDU_TYPE_NAMES[pdu_type]
        else:
            logger.error("pdu_type %s is ionvalid !?", pdu_type)
        return cls(
            rule_id=int(config["id"]) & 0xFFFFFFFF,
            priority=int(config["priority"]) & 0xFFFF,
            target=_or_any(config["target"]),
            from_=_or_any(config["from"]).lower(),
            source_address=_or_any(config["source_address"]),
            destination_address=_or_any(config["destination_address"]),
            pdu_type=pdu_type,
        )

    def get_list(self) -> list[list[str]]:
        """Return the rule's patterns, one list per matched field."""
        return [[self.from_], [self.source_address], [self.destination_address], [self.pdu_type]]


class RoutingMatcher:
    """Matches packets against the configured rules.

    ``config`` holds ``reverse`` (match destination addresses reversed) and
    ``routes`` (the rule configurations).
    """

    def __init__(self, config: Mapping[str, Any]) -> None:
        self._matcher = PrefixRuleMatcher(MAXIMUM_RULE_NUMBER, ROUTING_FIELD_NUMBER)
        self._rules: dict[int, tuple[str, int]] = {}
        self._matcher_ids: dict[int, int] = {}
        self._reverse = bool(config["reverse"])
        for route_config in config["routes"]:
            self.add_rule(RoutingInfo.from_config(route_config))

    @property
    def reverse(self) -> bool:
        return self._reverse

    @property
    def rule_ids(self) -> list[int]:
        """Ids of the active rules, sorted."""
        return sorted(self._rules)

    def find_target(
        self,
        from_: str,
        src_address: str,
        dest_address: str,
        pdu_type: Union[str, int],
        is_available: Optional[Callable[[str], bool]] = None,
    ) -> str:
        """Return the target of the packet, or "" when no rule matches.

        When several rules match, the one added last wins.
        """
        if isinstance(pdu_type, int):
            pdu_type = str(int(pdu_type))
        dest = dest_address[::-1] if self._reverse else dest_address
        record = [from_.lower(), src_address, dest, pdu_type]
        matched = ""
        for matcher_id in self._matcher.match(record):
            rule_id = self._matcher_ids.get(matcher_id)
            if rule_id is None:
                continue
            rule = self._rules.get(rule_id)
            if rule is not None:
                matched = rule[0]
        return matched

    def add_rule(self, rule: RoutingInfo) -> bool:
        """Add a rule; return False if its id is taken or its patterns are invalid."""
        if rule.rule_id in self._rules:
            return False
        try:
            matcher_id = self._matcher.set_rule(rule.get_list())
        except Exception as exc:
            logger.error("%s", exc)
            return False
        self._matcher_ids[matcher_id] = rule.rule_id
        self._rules[rule.rule_id] = (rule.target, rule.priority)
        return True

    def remove_rule(self, rule_id: int) -> bool:
        """Deactivate a rule; return False if there is none with ``rule_id``."""
        if self._rules.pop(rule_id, None) is None:
            return False
        for matcher_id, owner in self._matcher_ids.items():
            if owner == rule_id:
                del self._matcher_ids[matcher_id]
                break
        return True

    def on_reverse_routing_replace(self, value: bool) -> None:
        """Apply a new ``reverse`` setting."""
        self._reverse = bool(value)

    def on_routes_insert(self, config: Mapping[str, Any]) -> None:
        """Add the rule described by ``config``."""
        if not self.add_rule(RoutingInfo.from_config(config)):
            raise ValueError("could not add route")

    def on_routes_remove(self, config: Mapping[str, Any]) -> None:
        """Remove the rule whose id is in ``config``."""
        if not self.remove_rule(int(config["id"])):
            raise ValueError("could not remove route")