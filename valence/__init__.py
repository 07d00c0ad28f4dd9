"""Building blocks for Minecraft servers: protocol primitives, identifiers, entities, dimensions, player lists and skin data."""

__version__ = "0.1.0"