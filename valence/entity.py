"""Entities in a world and the container that owns them."""

from __future__ import annotations

import math
import struct
import uuid as uuid_module
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from valence.constants import STANDARD_TPS

Vec3 = Tuple[float, float, float]

_U32_MASK = 0xFFFFFFFF
_I16_MIN = -(2**15)
_I16_MAX = 2**15 - 1


@dataclass(frozen=True, order=True)
class EntityId:
    """Identifies an entity on the server.

    An ID is valid while its entity exists; once the entity is removed the ID
    never becomes valid again. The default ID is always invalid.
    """

    index: int = 0
    version: int = 0

    def network_id(self) -> int:
        """Return the ID clients know this entity by."""
        value = self.version & _U32_MASK
        return value - 2**32 if value >= 2**31 else value


EntityId.NULL = EntityId()  # type: ignore[attr-defined]


class Entity:
    """An entity on the server: anything in a world that is not a block or client.

    ``kind`` names the entity type (for instance ``"zombie"``) and ``data``
    holds the kind-specific tracked values (for instance ``{"child": True}``).
    """

    def __init__(
        self,
        kind: str,
        uuid: uuid_module.UUID,
        state: Any = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.state = state
        self.kind = kind
        self.data: Dict[str, Any] = dict(data or {})
        self.world: Any = None
        self.position: Vec3 = (0.0, 0.0, 0.0)
        self.old_position: Vec3 = (0.0, 0.0, 0.0)
        self.on_ground = False
        self._uuid = uuid
        self._yaw = 0.0
        self._pitch = 0.0
        self._head_yaw = 0.0
        self._velocity: Vec3 = (0.0, 0.0, 0.0)
        self._events: List[Any] = []
        self.yaw_or_pitch_modified = False
        self.head_yaw_modified = False
        self.velocity_modified = False

    def __repr__(self) -> str:
        return f"Entity(kind={self.kind!r}, uuid={self._uuid}, position={self.position})"

    @property
    def uuid(self) -> uuid_module.UUID:
        return self._uuid

    @property
    def events(self) -> Tuple[Any, ...]:
        """Entity events triggered this tick."""
        return tuple(self._events)

    def push_event(self, event: Any) -> None:
        """Trigger an entity event for this entity."""
        self._events.append(event)

    @property
    def yaw(self) -> float:
        """Yaw in degrees."""
        return self._yaw

    def set_yaw(self, yaw: float) -> None:
        if self._yaw != yaw:
            self._yaw = yaw
            self.yaw_or_pitch_modified = True

    @property
    def pitch(self) -> float:
        """Pitch in degrees."""
        return self._pitch

    def set_pitch(self, pitch: float) -> None:
        if self._pitch != pitch:
            self._pitch = pitch
            self.yaw_or_pitch_modified = True

    @property
    def head_yaw(self) -> float:
        """Head yaw in degrees."""
        return self._head_yaw

    def set_head_yaw(self, head_yaw: float) -> None:
        if self._head_yaw != head_yaw:
            self._head_yaw = head_yaw
            self.head_yaw_modified = True

    @property
    def velocity(self) -> Vec3:
        """Velocity in metres per second."""
        return self._velocity

    def set_velocity(self, velocity: Vec3) -> None:
        new_velocity = tuple(float(v) for v in velocity)
        if len(new_velocity) != 3:
            raise ValueError("velocity must have three components")
        if self._velocity != new_velocity:
            self._velocity = new_velocity  # type: ignore[assignment]
            self.velocity_modified = True

    def _end_tick(self) -> None:
        self.old_position = self.position
        self._events.clear()
        self.yaw_or_pitch_modified = False
        self.head_yaw_modified = False
        self.velocity_modified = False


class Entities:
    """A container for all entities on a server."""

    def __init__(self) -> None:
        self._slots: List[Optional[Tuple[int, Entity]]] = []
        self._free: List[int] = []
        self._next_version = 1
        self._uuid_to_entity: Dict[uuid_module.UUID, EntityId] = {}
        self._network_id_to_index: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._uuid_to_entity)

    def __iter__(self) -> Iterator[Tuple[EntityId, Entity]]:
        for index, slot in enumerate(self._slots):
            if slot is not None:
                version, entity = slot
                yield EntityId(index, version), entity

    def insert(self, kind: str, state: Any) -> Tuple[EntityId, Entity]:
        """Spawn an entity with a random UUID and return its ID and the entity."""
        result = self.insert_with_uuid(kind, uuid_module.uuid4(), state)
        if result is None:
            raise RuntimeError("UUID collision")
        return result

    def insert_with_uuid(
        self, kind: str, uuid: uuid_module.UUID, state: Any
    ) -> Optional[Tuple[EntityId, Entity]]:
        """Spawn an entity with the given UUID.

        Returns ``None`` and spawns nothing if the UUID is already taken.
        """
        if uuid in self._uuid_to_entity:
            return None
        entity = Entity(kind, uuid, state)
        version = self._next_version
        self._next_version += 1
        if self._free:
            index = self._free.pop()
            self._slots[index] = (version, entity)
        else:
            index = len(self._slots)
            self._slots.append((version, entity))
        entity_id = EntityId(index, version)
        self._network_id_to_index[version] = index
        self._uuid_to_entity[uuid] = entity_id
        return entity_id, entity

    def _lookup(self, entity_id: EntityId) -> Optional[Entity]:
        if not 0 <= entity_id.index < len(self._slots):
            return None
        slot = self._slots[entity_id.index]
        if slot is None or slot[0] != entity_id.version:
            return None
        return slot[1]

    def _forget(self, entity_id: EntityId, entity: Entity) -> None:
        self._slots[entity_id.index] = None
        self._free.append(entity_id.index)
        del self._uuid_to_entity[entity.uuid]
        del self._network_id_to_index[entity_id.version]

    def remove(self, entity_id: EntityId) -> Any:
        """Delete an entity and return its state, or ``None`` if the ID is invalid."""
        entity = self._lookup(entity_id)
        if entity is None:
            return None
        self._forget(entity_id, entity)
        return entity.state

    def retain(self, predicate: Callable[[EntityId, Entity], bool]) -> None:
        """Delete every entity for which ``predicate`` returns false."""
        for entity_id, entity in list(self):
            if not predicate(entity_id, entity):
                self._forget(entity_id, entity)

    def get(self, entity_id: EntityId) -> Optional[Entity]:
        """Return the entity with the given ID, or ``None`` if the ID is invalid."""
        return self._lookup(entity_id)

    def get_with_uuid(self, uuid: uuid_module.UUID) -> Optional[EntityId]:
        """Return the ID of the entity with the given UUID, if any."""
        return self._uuid_to_entity.get(uuid)

    def get_with_network_id(self, network_id: int) -> Optional[EntityId]:
        """Return the ID of the entity clients know by ``network_id``, if any."""
        version = network_id & _U32_MASK
        if version == 0:
            return None
        index = self._network_id_to_index.get(version)
        if index is None:
            return None
        return EntityId(index, version)

    def update(self) -> None:
        """Finish a tick: remember positions and clear events and change flags."""
        for _, entity in self:
            entity._end_tick()


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _saturating_i16(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= _I16_MAX:
        return _I16_MAX
    if value <= _I16_MIN:
        return _I16_MIN
    return int(value)


def velocity_to_packet_units(velocity: Vec3) -> Tuple[int, int, int]:
    """Convert a velocity in m/s to the saturated 16-bit units used on the wire."""
    factor = _to_f32(8000.0 / STANDARD_TPS)
    x, y, z = (_saturating_i16(_to_f32(factor * _to_f32(v))) for v in velocity)
    return x, y, z