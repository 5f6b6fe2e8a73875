"""Immutable hex-encodable byte sequences.

Values that cross the bridge boundary (public keys, hashes, extra data,
transaction identifiers) are carried as `Hex` so the textual form is always
canonical lowercase and the byte form is always exact.
"""

import string

HEX_PREFIX = "0x"

_HEX_DIGITS = frozenset(string.hexdigits)


class FormatError(ValueError):
    """Malformed hex text or wrong byte length at a decode boundary."""


class Hex:
    """An immutable sequence of bytes with hex conversions.

    Accepts hex text (with or without a ``0x`` prefix, any letter case) or
    a bytes-like object. Derived values such as `reverse` are new instances.
    """

    __slots__ = ("_bytes",)

    _bytes: bytes

    def __init__(self, value: "str | bytes | bytearray | memoryview | Hex") -> None:
        if isinstance(value, Hex):
            raw = value._bytes
        elif isinstance(value, str):
            raw = _parse_hex_text(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
        else:
            raise FormatError(f"Cannot build Hex from {type(value).__name__}")
        object.__setattr__(self, "_bytes", raw)

    @classmethod
    def from_value(cls, value: "str | bytes | bytearray | memoryview | Hex") -> "Hex":
        """Return `value` unchanged if it is already a `Hex`, else wrap it."""
        if isinstance(value, Hex):
            return value
        return cls(value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Hex is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Hex is immutable")

    def to_bytes(self) -> bytes:
        return self._bytes

    def __bytes__(self) -> bytes:
        return self._bytes

    def __len__(self) -> int:
        return len(self._bytes)

    def to_string(self) -> str:
        """Return unprefixed lowercase hex."""
        return self._bytes.hex()

    def to_prefixed_string(self) -> str:
        """Return ``0x``-prefixed lowercase hex."""
        return HEX_PREFIX + self._bytes.hex()

    def reverse(self) -> "Hex":
        """Return a new `Hex` with the byte order inverted.

        Converts between Bitcoin's internal byte order and the order shown by
        RPC interfaces and block explorers.
        """
        return Hex(self._bytes[::-1])

    def equals(self, other: "Hex") -> bool:
        return self._bytes == other._bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hex):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Hex({self.to_prefixed_string()!r})"


def _parse_hex_text(text: str) -> bytes:
    digits = text[2:] if text[:2].lower() == HEX_PREFIX else text
    if len(digits) % 2 != 0:
        raise FormatError(f"Hex string must have an even length, got {len(digits)}")
    if not _HEX_DIGITS.issuperset(digits):
        raise FormatError(f"Invalid hex string: {text!r}")
    return bytes.fromhex(digits)
