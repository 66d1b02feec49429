"""Longest-prefix routing table backed by a character trie."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional


@dataclass
class RouteData:
    """One route: values starting with ``prefix`` go to ``destination``.

    ``max_length`` limits the length of values the route applies to;
    None means no limit.
    """

    prefix: str
    destination: Any
    max_length: Optional[int] = None


@dataclass(eq=False)
class _Node:
    depth: int
    parent: Optional[_Node] = None
    key: str = ""
    destination: Any = None
    max_length: Optional[int] = None
    has_value: bool = False
    children: dict[str, _Node] = field(default_factory=dict)


class RouteMapper:
    """Maps prefixes to destinations and finds the longest matching prefix.

    All operations are safe to call from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._root = _Node(depth=0)

    def _create(self, prefix: str) -> Optional[_Node]:
        node = self._root
        for ch in prefix:
            child = node.children.get(ch)
            if child is None:
                child = _Node(depth=node.depth + 1, parent=node, key=ch)
                node.children[ch] = child
            node = child
        return None if node.has_value else node

    def _find(self, prefix: str, reverse: bool) -> Optional[_Node]:
        # A reverse walk visits the characters from the last one down to the
        # second one; the first character is never consumed.
        chars: Iterable[str] = reversed(prefix[1:]) if reverse else prefix
        node = self._root
        last_valid: Optional[_Node] = None
        for ch in chars:
            if node.has_value:
                last_valid = node
            child = node.children.get(ch)
            if child is None:
                return last_valid
            node = child
        if node.has_value:
            last_valid = node
        return last_valid

    def _clean_up(self, node: _Node) -> None:
        while not node.has_value and not node.children and node.parent is not None:
            parent = node.parent
            del parent.children[node.key]
            node = parent

    @staticmethod
    def _assign(node: _Node, destination: Any, max_length: Optional[int]) -> None:
        node.destination = destination
        node.max_length = max_length
        node.has_value = True

    def add_route(self, prefix: str, destination: Any, max_length: Optional[int] = None) -> bool:
        """Add a route; return False if ``prefix`` already has one."""
        with self._lock:
            node = self._create(prefix)
            if node is None:
                return False
            self._assign(node, destination, max_length)
            return True

    def add_routes(self, routes: Iterable[RouteData], clear: bool = False) -> bool:
        """Add several routes, optionally clearing first.

        Every route whose prefix is free is added; return False if any was not.
        """
        ok = True
        with self._lock:
            if clear:
                self._root.children.clear()
            for route in routes:
                node = self._create(route.prefix)
                if node is None:
                    ok = False
                    continue
                self._assign(node, route.destination, route.max_length)
        return ok

    def update_route(self, prefix: str, destination: Any, max_length: Optional[int] = None) -> bool:
        """Replace the route on exactly ``prefix``; return False if there is none."""
        with self._lock:
            node = self._find(prefix, False)
            if node is None or node.depth != len(prefix):
                return False
            node.destination = destination
            node.max_length = max_length
            return True

    def delete_route(self, prefix: str) -> bool:
        """Remove the route on exactly ``prefix``; return False if there is none."""
        with self._lock:
            node = self._find(prefix, False)
            if node is None or node.depth != len(prefix):
                return False
            node.has_value = False
            node.destination = None
            self._clean_up(node)
            return True

    def clear_all_routes(self) -> None:
        """Remove every route below the root (a route on the empty prefix stays)."""
        with self._lock:
            self._root.children.clear()

    def find_destination(self, prefix: str, reverse: bool = False) -> Any:
        """Return the destination of the longest route matching ``prefix``.

        Return None if no route matches or the best match's ``max_length`` is
        shorter than ``prefix``.
        """
        with self._lock:
            node = self._find(prefix, reverse)
            if node is None:
                return None
            if node.max_length is not None and node.max_length < len(prefix):
                return None
            return node.destination

    def __iter__(self) -> Iterator[RouteData]:
        """Yield the stored routes in prefix order."""
        with self._lock:
            routes: list[RouteData] = []
            stack: list[tuple[str, _Node]] = [("", self._root)]
            while stack:
                prefix, node = stack.pop()
                if node.has_value:
                    routes.append(RouteData(prefix, node.destination, node.max_length))
                stack.extend((prefix + key, child) for key, child in node.children.items())
        return iter(sorted(routes, key=lambda r: r.prefix))