# pinexgw

`pinexgw` holds the routing side of a messaging gateway: the tools that decide
where a message goes. It has no dependencies beyond the standard library.

- Longest-prefix lookup of numbers (`RouteMapper`).
- Rule matching over several fields at once (`TrieMatcher`, `PrefixRuleMatcher`, `BitSet`).
- Per-message-type target selection by prefix, client id, round robin, load balancing or broadcast (`RoutingList`, `Router`).
- Rule-based choice of the target connection for SMPP packets (`RoutingMatcher`).
- Two small helpers for connection code: an expiry tracker (`Expirator`) and a fixed-capacity receive buffer (`FlatBuffer`).

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

Then run the tests with `pytest`.

## Modules

| module                         | contents |
|--------------------------------|----------|
| `pinexgw.route_mapper`         | `RouteMapper`, `RouteData` |
| `pinexgw.bit_set`              | `BitSet` |
| `pinexgw.trie_matcher`         | `TrieMatcher`, `EntryType` |
| `pinexgw.prefix_rule_matcher`  | `PrefixRuleMatcher` |
| `pinexgw.routing_list`         | `RoutingMethod`, `Route`, `RoutingList`, `parse_routing_method` |
| `pinexgw.router`               | `Router` |
| `pinexgw.routing_matcher`      | `PacketType`, `RoutingInfo`, `RoutingMatcher` |
| `pinexgw.expirator`            | `Expirator` |
| `pinexgw.flat_buffer`          | `FlatBuffer` |

## Longest-prefix routing

`RouteMapper` keeps prefixes in a character trie. `find_destination` returns
the destination of the longest stored prefix of the value. It returns `None`
when nothing matches, or when the best match has a `max_length` shorter than
the value. All operations take a lock, so the mapper can be shared between threads.

```python
from pinexgw.route_mapper import RouteMapper

mapper = RouteMapper()
mapper.add_route("12345", "operator-a")
mapper.add_route("123", "operator-b")

mapper.find_destination("1234599")   # "operator-a"
mapper.find_destination("1239")      # "operator-b"
mapper.find_destination("555")       # None
```

`add_route` returns `False` when the prefix already has a route. To change
that route, use `update_route`. `delete_route` removes it, and
`add_routes(routes, clear=False)` adds several `RouteData` entries at once.
Iterating over a mapper yields its routes as `RouteData`, in prefix order.

With `reverse=True`, the lookup walks the value from its last character down to
its second one. The first character is never consumed.

## Rule matching on several fields

A `PrefixRuleMatcher(rules_count, fields)` holds rules that have one list of
lowercase patterns per field. A pattern that ends in `*` matches values that
start with the text before it. Any other pattern matches only the exact value.
A rule matches a record when every field matches. `match` returns the ids of
the matching rules in ascending order.

```python
from pinexgw.prefix_rule_matcher import PrefixRuleMatcher

matcher = PrefixRuleMatcher(10, 2)
rule = matcher.set_rule([["client*"], ["98*"]])

matcher.match(["client1", "98912"])   # [0]
matcher.match(["client1", "44712"])   # []
```

Patterns with an uppercase letter are rejected with `ValueError`. Queries are
folded to lowercase. `TrieMatcher` accepts only printable ASCII characters.

## Choosing targets per message type

A `Router` is built from a mapping that holds `reverse` and `routing_list`,
together with a function that converts message-type names to integers. The
routing method of each message type is one of `"prefix"`, `"client_id"`,
`"broadcast"`, `"load_balance"` or `"rond_robin"` (that spelling is the
one the configuration uses). A message type that has no route is sent round robin.

```python
from pinexgw.router import Router

config = {
    "reverse": False,
    "routing_list": [
        {"msg_type": "ao", "method": "prefix",
         "routes": [{"target": "smsc-1", "prefix": ["98"]}]},
        {"msg_type": "dr", "method": "broadcast"},
    ],
}
router = Router(config, {"ao": 1, "dr": 2}.__getitem__)
router.add_target("smsc-1")
router.add_target("smsc-2")

router.find(1, "98123")   # ["smsc-1"]
router.find(2, "any")     # ["smsc-1", "smsc-2"]
router.find(3, "any")     # ["smsc-1"], then ["smsc-2"] on the next call
```

Load balancing reads the integer at the start of the last five characters of
the id, and raises `ValueError` if the id cannot supply one.

## Routing SMPP packets by rule

`RoutingMatcher` takes a mapping that holds `reverse` and `routes`. Each route
has `id`, `priority`, `from`, `source_address`, `destination_address`,
`pdu_type` and `target`. An empty field becomes `*`. The value of `pdu_type`
may be `submit`, `deliver`, `delivery_report` or `*`. When several rules match,
the one added last wins. When `reverse` is set, the destination address is
reversed before it is matched.

```python
from pinexgw.routing_matcher import PacketType, RoutingMatcher

matcher = RoutingMatcher({
    "reverse": False,
    "routes": [{
        "id": 1, "priority": 0, "from": "ClientA", "source_address": "",
        "destination_address": "98*", "pdu_type": "submit", "target": "smsc-1",
    }],
})

matcher.find_target("ClientA", "1000", "98123", PacketType.AO)   # "smsc-1"
matcher.find_target("ClientA", "1000", "44123", PacketType.AO)   # ""
```

Rules are added with `add_rule` and removed with `remove_rule`. The
configuration hooks `on_routes_insert`, `on_routes_remove` and
`on_reverse_routing_replace` do the same from configuration.

## Helpers

`Expirator(period, handler)` puts each key into a slot of whole periods.
Every `tick()` expires the keys in the current slot by calling
`handler(key, info)`, and then moves on one period. Inside a running asyncio
loop, `start()` ticks once per period, and `stop()` ends that.

```python
from pinexgw.expirator import Expirator

fired = []
expirator = Expirator(0.001, lambda key, info: fired.append((key, info)))
expirator.add(7, 0.002, "payload")
expirator.tick(); expirator.tick(); expirator.tick()
fired   # [(7, "payload")]
```

`FlatBuffer(capacity)` is a receive buffer. Bytes are written into
`prepare(n)`, `commit(n)` makes them readable, and `consume(n)` drops bytes
from the front.

```python
from pinexgw.flat_buffer import FlatBuffer

buf = FlatBuffer(16)
buf.prepare(5)[:] = b"hello"
buf.commit(5)
buf.consume(2)
buf.data()   # b"llo"
```

## What this package does not do

The package has no network side. There are no sessions, clients or servers,
no PDU encoding, and no command to run. It only decides where messages go.
Moving them over a connection is left to the application.