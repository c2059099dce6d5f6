"""
Keychain discriminator.

Every wallet address is derived from one of two branches: the external
keychain (receive addresses handed out to payers) or the internal keychain
(change addresses). Storage layers key records by the single-byte form
returned by :meth:`KeychainKind.as_byte`, so those bytes must never change.
"""

from __future__ import annotations

from enum import Enum


class KeychainKind(str, Enum):
    EXTERNAL = "external"
    INTERNAL = "internal"

    def as_byte(self) -> int:
        """Return the storage key byte: ``ord('e')`` or ``ord('i')``."""
        return _KEY_BYTES[self][0]

    def __bytes__(self) -> bytes:
        return _KEY_BYTES[self]

    @classmethod
    def from_byte(cls, value: int | bytes) -> KeychainKind:
        """Parse a storage key byte back into a keychain kind."""
        if isinstance(value, int):
            value = bytes([value]) if 0 <= value <= 0xFF else b""
        for kind, key in _KEY_BYTES.items():
            if key == value:
                return kind
        raise ValueError(f"Unknown keychain byte: {value!r}")

    @property
    def _rank(self) -> int:
        return 0 if self is KeychainKind.EXTERNAL else 1

    # External sorts before internal regardless of the string values
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, KeychainKind):
            return NotImplemented
        return self._rank < other._rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, KeychainKind):
            return NotImplemented
        return self._rank <= other._rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, KeychainKind):
            return NotImplemented
        return self._rank > other._rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, KeychainKind):
            return NotImplemented
        return self._rank >= other._rank


_KEY_BYTES: dict[KeychainKind, bytes] = {
    KeychainKind.EXTERNAL: b"e",
    KeychainKind.INTERNAL: b"i",
}
