"""Dimension configuration and identification."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from valence.ident import Ident


@dataclass(frozen=True, order=True)
class DimensionId:
    """Identifies a dimension on the server.

    The default ID refers to the first dimension in the server's configuration.
    """

    value: int = 0


class DimensionEffects(enum.Enum):
    """Which skybox and fog effects a dimension uses."""

    OVERWORLD = "overworld"
    THE_NETHER = "the_nether"
    THE_END = "the_end"


@dataclass
class Dimension:
    """The configuration of a dimension type.

    ``ambient_light`` must lie in ``0.0..=1.0`` and ``fixed_time`` in
    ``0..=24000``. ``min_y`` must be a multiple of 16 in ``-2032..=2016``;
    ``height`` a multiple of 16 in ``0..=4064`` with ``min_y + height <= 2032``.
    """

    natural: bool = True
    ambient_light: float = 1.0
    fixed_time: Optional[int] = None
    effects: DimensionEffects = field(default=DimensionEffects.OVERWORLD)
    min_y: int = -64
    height: int = 384

    def to_registry_item(self) -> Dict[str, Any]:
        """Return the dimension type entry sent to clients in the registry."""
        return {
            "piglin_safe": True,
            "has_raids": True,
            "monster_spawn_light_level": 0,
            "monster_spawn_block_light_limit": 0,
            "natural": self.natural,
            "ambient_light": self.ambient_light,
            "fixed_time": None if self.fixed_time is None else int(self.fixed_time),
            "infiniburn": "#minecraft:infiniburn_overworld",
            "respawn_anchor_works": True,
            "has_skylight": True,
            "bed_works": True,
            "effects": Ident(self.effects.value),
            "min_y": self.min_y,
            "height": self.height,
            "logical_height": self.height,
            "coordinate_scale": 1.0,
            "ultrawarm": False,
            "has_ceiling": False,
        }