"""Prefix trie that maps words to sets of rule categories."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from pinexgw.bit_set import BitSet

_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


class EntryType(enum.Enum):
    """Whether an entry matches words that start with it or equal it."""

    PREFIX = "prefix"
    COMPLETE = "complete"


def _valid_char(ch: str) -> bool:
    return " " <= ch <= "~" and not "A" <= ch <= "Z"


@dataclass
class _Node:
    category_count: int
    children: dict[str, _Node] = field(default_factory=dict)
    mark_complete: BitSet = field(init=False)
    mark_prefix: BitSet = field(init=False)

    def __post_init__(self) -> None:
        self.mark_complete = BitSet(self.category_count)
        self.mark_prefix = BitSet(self.category_count)

    def mark(self, entry_type: EntryType, tag: int) -> None:
        target = self.mark_prefix if entry_type is EntryType.PREFIX else self.mark_complete
        target.set(tag)


class TrieMatcher:
    """Trie over digits and printable non-uppercase characters.

    Each entry tags a category bit; matching a word returns the bits of every
    prefix entry along its path and of a complete entry equal to it.
    """

    def __init__(self, category_count: int) -> None:
        self._category_count = category_count
        self._root = _Node(category_count)

    def add_entry(self, prefix: str, rule_tag: int, entry_type: EntryType | None = None) -> None:
        """Tag ``prefix`` with ``rule_tag``.

        Without an explicit type, a trailing '*' makes a prefix entry of the
        text before it; otherwise the entry is complete.
        """
        if entry_type is None:
            if prefix.endswith("*"):
                prefix, entry_type = prefix[:-1], EntryType.PREFIX
            else:
                entry_type = EntryType.COMPLETE
        if any(not _valid_char(ch) for ch in prefix):
            raise ValueError(f"Invalid character in query word: {prefix}")
        node = self._root
        for ch in prefix:
            node = node.children.setdefault(ch, _Node(self._category_count))
        node.mark(entry_type, rule_tag)

    def match(self, query: str) -> BitSet:
        """Return the categories matching ``query`` (uppercase is folded)."""
        query = query.translate(_LOWER)
        result = BitSet(self._category_count)
        if query == "*":
            result |= self._root.mark_prefix
        elif not query:
            result |= self._root.mark_complete
        else:
            self._trace(query, result)
        return result

    def _trace(self, word: str, result: BitSet) -> None:
        node = self._root
        for ch in word:
            result |= node.mark_prefix
            if not _valid_char(ch):
                raise ValueError(f"Invalid character in query word: {word}")
            child = node.children.get(ch)
            if child is None:
                return
            node = child
        result |= node.mark_prefix
        result |= node.mark_complete