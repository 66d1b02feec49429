"""Matches records of several fields against prefix rules."""

from __future__ import annotations

from pinexgw.bit_set import BitSet
from pinexgw.trie_matcher import TrieMatcher


def _has_upper(text: str) -> bool:
    return any("A" <= ch <= "Z" for ch in text)


class PrefixRuleMatcher:
    """Holds up to ``rules_count`` rules of ``rule_parameter_count`` fields each.

    Every field of a rule is a list of patterns; a pattern ending in '*'
    matches values starting with the text before it, any other pattern
    matches the value exactly. A rule matches a record when every field does.
    """

    def __init__(self, rules_count: int, rule_parameter_count: int) -> None:
        if rule_parameter_count <= 0:
            raise ValueError("rule_parameter_count must be positive")
        self._parameter_count = rule_parameter_count
        self._rules_count = rules_count
        self._set_rules = 0
        size = rules_count * rule_parameter_count
        self._trie = TrieMatcher(size)
        self._match_mask = BitSet(size)
        for rule in range(rules_count):
            self._match_mask.set((rule + 1) * rule_parameter_count - 1)

    def _check_length(self, values: list, what: str) -> None:
        if len(values) != self._parameter_count:
            raise ValueError(
                f"{what} needs {self._parameter_count} fields, got {len(values)}"
            )

    def set_rule(self, rule: list[list[str]]) -> int:
        """Add a rule given as one list of lowercase patterns per field; return its id."""
        self._check_length(rule, "rule")
        rule_id = self._set_rules
        self._set_rules += 1
        for field_index, patterns in enumerate(rule):
            for pattern in patterns:
                if _has_upper(pattern):
                    raise ValueError("Uppercase letter is not allowed")
                self._trie.add_entry(pattern, rule_id * self._parameter_count + field_index)
        return rule_id

    def match(self, record: list[str]) -> list[int]:
        """Return the ids of all rules matching ``record``, in ascending order."""
        result = self.match_get_bitset(record)
        return [(index + 1) // self._parameter_count - 1 for index in result.set_bits_indices()]

    def match_get_bitset(self, record: list[str]) -> BitSet:
        """Return a bit set in which bit ``(id + 1) * fields - 1`` marks each matching rule."""
        self._check_length(record, "record")
        result = self._trie.match(record[0])
        for value in record[1:]:
            result.shift_right()
            result &= self._trie.match(value)
        result &= self._match_mask
        return result