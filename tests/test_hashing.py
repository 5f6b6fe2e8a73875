"""Tests for hash primitives."""

import pytest

from btcbridge.hashing import (
    HASH160_LENGTH,
    compute_hash160,
    compute_hash256,
    hash160,
    ripemd160,
    sha256,
)
from btcbridge.hex import Hex

# Secp256k1 generator point, compressed and uncompressed
GENERATOR_COMPRESSED = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
GENERATOR_UNCOMPRESSED = (
    "0479be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
)


class TestDigests:
    """Tests for the single digest functions."""

    def test_sha256_empty(self) -> None:
        """Test SHA-256 of empty input."""
        assert sha256(b"").hex() == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_ripemd160_empty(self) -> None:
        """Test RIPEMD-160 of empty input."""
        assert ripemd160(b"").hex() == "9c1185a5c5e9fc54612808977ee8f548b2258d31"

    def test_hash256_empty(self) -> None:
        """Test double SHA-256 of empty input."""
        assert compute_hash256(b"").to_string() == (
            "5df6e0e2761359d30a8275058e299fcc0381534545f55cf43e41983f5d4c9456"
        )


class TestHash160:
    """Tests for the public key hash."""

    @pytest.mark.parametrize(
        ("public_key", "expected"),
        [
            (GENERATOR_COMPRESSED, "751e76e8199196d454941c45d1b3a323f1433bd6"),
            (GENERATOR_UNCOMPRESSED, "91b24bf9f5288532960ac687abb035127b1d28a5"),
            (
                "03989d253b17a6a0f41838b84ff0d20e8898f9d7b1a98f2564da4cc29dcf8581d9",
                "8db50eb52063ea9d98b3eac91489a90f738986f6",
            ),
            ("", "b472a266d0bd89c13706a4132ccfb16f7c3b9fcb"),
        ],
    )
    def test_known_vectors(self, public_key: str, expected: str) -> None:
        """Test hash160 against known vectors."""
        assert compute_hash160(public_key).to_string() == expected

    def test_deterministic(self) -> None:
        """Test that hashing the same key twice yields the same output."""
        assert compute_hash160(GENERATOR_COMPRESSED) == compute_hash160(GENERATOR_COMPRESSED)

    def test_output_length(self) -> None:
        """Test that the output is always 20 bytes."""
        for data in (b"", b"\x00", bytes(33), bytes(65), bytes(1000)):
            assert len(hash160(data)) == HASH160_LENGTH

    def test_distinct_inputs(self) -> None:
        """Test that differing keys yield differing hashes."""
        assert compute_hash160(GENERATOR_COMPRESSED) != compute_hash160(GENERATOR_UNCOMPRESSED)

    def test_accepts_hex_and_bytes(self) -> None:
        """Test that Hex, bytes and prefixed text give the same result."""
        raw = bytes.fromhex(GENERATOR_COMPRESSED)
        assert compute_hash160(raw) == compute_hash160(Hex(raw))
        assert compute_hash160(raw) == compute_hash160("0x" + GENERATOR_COMPRESSED)
