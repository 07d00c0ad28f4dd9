"""Version information and timing constants shared across the package."""

from __future__ import annotations

PROTOCOL_VERSION = 760
"""The protocol version this library targets."""

VERSION_NAME = "1.19.2"
"""The name of the game version this library targets."""

LIBRARY_NAMESPACE = "valence"
"""The namespace used internally for identifiers; avoid it in your own."""

STANDARD_TPS = 20
"""The game's standard number of ticks per second."""


def ticks_to_seconds(ticks: int, tick_rate: int = STANDARD_TPS) -> float:
    """Convert a number of ticks to seconds at the given tick rate.

    The tick rate must be greater than zero.
    """
    if tick_rate <= 0:
        raise ValueError(f"tick rate must be greater than zero (got {tick_rate})")
    return ticks / tick_rate