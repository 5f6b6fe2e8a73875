"""Type definitions for btcbridge.

This module contains type aliases and NewType definitions for domain-specific
types to improve type safety and code readability.
"""

from typing import NewType

# Domain-specific type aliases for type safety
PubkeyHashHex = NewType("PubkeyHashHex", str)
"""Hex-encoded 20-byte public key hash (40 characters, 0x-prefixed on the wire)."""

TxHashHex = NewType("TxHashHex", str)
"""Hex-encoded 32-byte transaction hash (64 characters, 0x-prefixed on the wire)."""

ContractName = NewType("ContractName", str)
"""Name of a deployed contract artifact (e.g. "L1BitcoinRedeemer")."""
