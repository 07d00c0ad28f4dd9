# valence

Building blocks for writing Minecraft servers in Python. Nothing outside
the standard library is needed.

## Modules

- `valence.protocol` – encoding and decoding of the protocol's primitive
  values. `Reader` is a cursor over bytes; `NumberType` covers fixed-size
  big-endian numbers (floats must be finite). There are functions for
  VarInts (`encode_varint` / `decode_varint`), booleans, optional values,
  bounded integers, bounded strings (bounds count characters, default
  maximum 32767), length-prefixed arrays, UUIDs, arrays of 64-bit words and
  optional entity network IDs. Every failure raises `ProtocolError`, a
  `ValueError`.
- `valence.ident` – namespaced identifiers. `Ident("minecraft:apple")` and
  `Ident("apple")` compare and hash equal; invalid strings raise
  `IdentError`. `Ident.encode` and `Ident.decode` use the protocol string
  form.
- `valence.constants` – `PROTOCOL_VERSION` (760), `VERSION_NAME`
  ("1.19.2"), `LIBRARY_NAMESPACE`, `STANDARD_TPS` (20) and
  `ticks_to_seconds`.
- `valence.entity` – the `Entities` container with lookup by `EntityId`,
  by UUID and by network ID, `retain`, `remove` and `update` (which ends a
  tick). An `Entity` has a kind string, a `data` dict, position, rotation,
  velocity and change flags. `velocity_to_packet_units` converts m/s to the
  saturated 16-bit units used on the wire.
- `valence.dimension` – `DimensionId`, `DimensionEffects` and the
  `Dimension` settings, with `Dimension.to_registry_item` giving the
  registry entry sent to clients.
- `valence.player_list` – the tab list. `PlayerLists` holds `PlayerList`
  objects behind `PlayerListId` handles; a list is dropped by
  `PlayerLists.update` once no handle to it remains. A list produces the
  packets a client needs: `initial_packets`, `update_packets` and
  `clear_packets`, returned as `AddPlayer`, `RemovePlayer`,
  `UpdateGameMode`, `UpdateLatency`, `UpdateDisplayName` and
  `TabListHeaderFooter` values.
- `valence.player_textures` – `SignedPlayerTextures.from_base64` decodes and
  checks a signed skin payload; `to_textures` returns a `PlayerTextures`
  with the skin and cape URLs. Bad input raises `TexturesError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Identifiers:

```python
from valence.ident import Ident

apple = Ident("minecraft:apple")
assert apple == Ident("apple")
assert apple.namespace() == "minecraft"
assert apple.path() == "apple"
```

Protocol primitives:

```python
from valence.protocol import Reader, decode_string, decode_varint, encode_string, encode_varint

assert decode_varint(Reader(encode_varint(300))) == 300
assert decode_string(Reader(encode_string("hello"))) == "hello"
```

Entities:

```python
from valence.entity import Entities

entities = Entities()
entity_id, entity = entities.insert("zombie", state=1)
assert entities.get(entity_id) is entity
assert entities.get_with_network_id(entity_id.network_id()) == entity_id
assert entities.remove(entity_id) == 1
```

Player list:

```python
import uuid

from valence.player_list import AddPlayer, PlayerLists

lists = PlayerLists()
list_id, player_list = lists.insert()
player_list.insert(uuid.uuid4(), "alice")
packets = player_list.update_packets()
assert isinstance(packets[0], AddPlayer)
```

## What this package does not do

There is no server here: nothing listens on a socket, logs clients in or
runs a tick loop, and there is no per-client connection state, client
event handling or configuration interface. Entities carry a kind string and
a free-form `data` dict rather than typed per-kind data, and no hitboxes or
spawn packets are computed for them. Packets from the player list are plain
values; turning them into bytes and sending them is left to the caller.