"""Namespaced identifiers."""

from __future__ import annotations

import re
from typing import Optional

from valence.protocol import MAX_STRING_LENGTH, Reader, decode_string, encode_string

_NAMESPACE = re.compile(r"[a-z0-9_\-]+")
_PATH = re.compile(r"[a-z0-9_/.\-]+")

DEFAULT_NAMESPACE = "minecraft"


class IdentError(ValueError):
    """Raised when a string is not a valid identifier."""

    def __init__(self, source: str) -> None:
        super().__init__(f'invalid identifier "{source}"')
        self.source = source


class Ident:
    """A string split into an optional namespace and a path, such as ``minecraft:apple``.

    An identifier without a namespace is treated as being in the ``minecraft``
    namespace for equality and hashing.
    """

    __slots__ = ("_text", "_colon")

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"identifier must be a string, not {type(text).__name__}")
        colon = text.find(":")
        if colon >= 0:
            valid = bool(
                _NAMESPACE.fullmatch(text[:colon]) and _PATH.fullmatch(text[colon + 1 :])
            )
        else:
            valid = bool(_PATH.fullmatch(text))
        if not valid:
            raise IdentError(text)
        self._text = text
        self._colon: Optional[int] = colon if colon >= 0 else None

    def namespace(self) -> Optional[str]:
        """Return the namespace, or ``None`` if the identifier was written without one."""
        if self._colon is None:
            return None
        return self._text[: self._colon]

    def path(self) -> str:
        """Return the part after the namespace."""
        if self._colon is None:
            return self._text
        return self._text[self._colon + 1 :]

    def _key(self) -> tuple[str, str]:
        return (self.namespace() or DEFAULT_NAMESPACE, self.path())

    def encode(self) -> bytes:
        """Encode the identifier as a protocol string."""
        return encode_string(self._text, 0, MAX_STRING_LENGTH)

    @classmethod
    def decode(cls, reader: Reader) -> "Ident":
        """Decode a protocol string and parse it as an identifier."""
        return cls(decode_string(reader, 0, MAX_STRING_LENGTH))

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Ident({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ident):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())