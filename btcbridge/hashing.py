"""Bitcoin hash primitives.

RIPEMD-160 comes from pycryptodome since OpenSSL 3 builds of hashlib do not
always ship it.
"""

import hashlib

from Crypto.Hash import RIPEMD160

from .hex import Hex

HASH160_LENGTH = 20


def sha256(data: bytes) -> bytes:
    """Single round of SHA-256."""
    return hashlib.sha256(data).digest()


def hash256(data: bytes) -> bytes:
    """Double SHA-256, as used for Bitcoin transaction and block hashes."""
    return sha256(sha256(data))


def ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """RIPEMD-160 of SHA-256, the 20-byte public key hash.

    Args:
        data: Raw bytes, typically a 33-byte compressed public key

    Returns:
        The 20-byte digest

    """
    return ripemd160(sha256(data))


def compute_hash160(public_key: "Hex | bytes | str") -> Hex:
    """Compute the wallet public key hash of a public key.

    Public key format is not validated here; callers pass a well-formed key.
    """
    return Hex(hash160(Hex.from_value(public_key).to_bytes()))


def compute_hash256(data: "Hex | bytes | str") -> Hex:
    return Hex(hash256(Hex.from_value(data).to_bytes()))
