"""Player skins and capes."""

from __future__ import annotations

import base64
import binascii
import json
import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlsplit

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")


class TexturesError(ValueError):
    """Raised when a textures payload cannot be decoded or parsed."""


@dataclass(frozen=True)
class PlayerTextures:
    """URLs of a player's skin and cape; ``None`` where the player has none."""

    skin: Optional[str] = None
    cape: Optional[str] = None


def _parse_url(value: Any) -> str:
    if not isinstance(value, str):
        raise TexturesError(f"texture URL must be a string, got {value!r}")
    try:
        parts = urlsplit(value)
    except ValueError as exc:
        raise TexturesError(f"invalid texture URL {value!r}: {exc}") from exc
    if not parts.scheme or not _SCHEME.fullmatch(parts.scheme):
        raise TexturesError(f"texture URL {value!r} is not absolute")
    return value


def _parse_texture(textures: dict, key: str) -> Optional[str]:
    entry = textures.get(key)
    if entry is None:
        return None
    if not isinstance(entry, dict) or "url" not in entry:
        raise TexturesError(f"texture entry {key!r} must be an object with a 'url' field")
    return _parse_url(entry["url"])


def _parse_payload(payload: bytes) -> PlayerTextures:
    try:
        document = json.loads(payload)
    except (ValueError, UnicodeDecodeError) as exc:
        raise TexturesError(f"textures payload is not valid JSON: {exc}") from exc
    if not isinstance(document, dict) or "textures" not in document:
        raise TexturesError("textures payload has no 'textures' field")
    textures = document["textures"]
    if not isinstance(textures, dict):
        raise TexturesError("'textures' field must be an object")
    return PlayerTextures(
        skin=_parse_texture(textures, "SKIN"),
        cape=_parse_texture(textures, "CAPE"),
    )


@dataclass(frozen=True)
class SignedPlayerTextures:
    """A signed textures payload as handed out by the authentication service."""

    payload: bytes
    signature: bytes

    @classmethod
    def from_base64(cls, payload: str, signature: str) -> "SignedPlayerTextures":
        """Decode base64 payload and signature, checking that the payload parses."""
        try:
            decoded_payload = base64.b64decode(payload, validate=True)
            decoded_signature = base64.b64decode(signature, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise TexturesError(f"invalid base64: {exc}") from exc
        textures = cls(decoded_payload, decoded_signature)
        try:
            _parse_payload(decoded_payload)
        except TexturesError as exc:
            raise TexturesError(f"failed to parse textures payload: {exc}") from exc
        return textures

    def to_textures(self) -> PlayerTextures:
        """Return the unsigned texture URLs."""
        return _parse_payload(self.payload)