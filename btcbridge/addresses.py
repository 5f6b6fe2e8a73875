"""Chain-native addresses of deposit owners and contracts.

Each address variant belongs to exactly one `ChainFamily` and stores its
canonical form as lowercase hex of the family's fixed byte width.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from web3 import Web3

from .chains import ChainFamily
from .hex import HEX_PREFIX, FormatError, Hex


class InvalidAddressFormat(FormatError):
    """Address length or charset does not match the chain family."""


@dataclass(frozen=True, slots=True)
class ChainAddress(ABC):
    """Base class for chain addresses.

    Attributes:
        identifier_hex: Canonical lowercase hex without prefix

    """

    family: ClassVar[ChainFamily]

    identifier_hex: str

    def __post_init__(self) -> None:
        width = self.family.byte_width * 2
        if not isinstance(self.identifier_hex, str) or not re.fullmatch(
            rf"[0-9a-f]{{{width}}}", self.identifier_hex
        ):
            raise InvalidAddressFormat(
                f"Invalid {self.family.label} address format: {self.identifier_hex!r}"
            )

    @classmethod
    @abstractmethod
    def from_text(cls, text: str) -> "ChainAddress":
        """Parse the textual form used on the destination chain."""

    @classmethod
    def from_hex(cls, value: Hex) -> "ChainAddress":
        """Build the address from raw bytes of exactly the family's width."""
        if len(value) != cls.family.byte_width:
            raise InvalidAddressFormat(
                f"Invalid {cls.family.label} address format: expected "
                f"{cls.family.byte_width} bytes, got {len(value)}"
            )
        return cls(value.to_string())

    def to_hex(self) -> Hex:
        return Hex(self.identifier_hex)

    def to_prefixed_string(self) -> str:
        return HEX_PREFIX + self.identifier_hex

    def __str__(self) -> str:
        return self.to_prefixed_string()


def _strip_prefix(text: str) -> str:
    return text[2:] if text[:2].lower() == HEX_PREFIX else text


def _fixed_width_hex(text: str, family: ChainFamily) -> str:
    if not isinstance(text, str):
        raise InvalidAddressFormat(f"Invalid {family.label} address format: {text!r}")
    digits = _strip_prefix(text)
    pattern = rf"[0-9a-fA-F]{{{family.byte_width * 2}}}"
    if not re.fullmatch(pattern, digits):
        raise InvalidAddressFormat(f"Invalid {family.label} address format: {text!r}")
    return digits.lower()


@dataclass(frozen=True, slots=True)
class EthereumAddress(ChainAddress):
    """A 20-byte EVM address (Ethereum, Base, Arbitrum)."""

    family: ClassVar[ChainFamily] = ChainFamily.EVM

    @classmethod
    def from_text(cls, text: str) -> "EthereumAddress":
        return cls(_fixed_width_hex(text, cls.family))

    @property
    def checksummed(self) -> str:
        """Return the EIP-55 mixed-case form used by contract calls."""
        return Web3.to_checksum_address(self.to_prefixed_string())


@dataclass(frozen=True, slots=True)
class SuiAddress(ChainAddress):
    """A 32-byte SUI address (0x + 64 hex characters)."""

    family: ClassVar[ChainFamily] = ChainFamily.SUI

    @classmethod
    def from_text(cls, text: str) -> "SuiAddress":
        return cls(_fixed_width_hex(text, cls.family))


@dataclass(frozen=True, slots=True)
class StarkNetAddress(ChainAddress):
    """A StarkNet felt252 address, left-padded to 32 bytes."""

    family: ClassVar[ChainFamily] = ChainFamily.STARKNET

    @classmethod
    def from_text(cls, text: str) -> "StarkNetAddress":
        if not isinstance(text, str):
            raise InvalidAddressFormat(f"Invalid StarkNet address format: {text!r}")
        digits = _strip_prefix(text).lower()
        if not re.fullmatch(r"[0-9a-f]+", digits):
            raise InvalidAddressFormat(f"Invalid StarkNet address format: {text!r}")
        if len(digits) > cls.family.byte_width * 2:
            raise InvalidAddressFormat(
                f"StarkNet address exceeds maximum field element size: {text!r}"
            )
        return cls(digits.rjust(cls.family.byte_width * 2, "0"))

    def to_bytes32(self) -> str:
        return self.to_prefixed_string()


ADDRESS_TYPES: dict[ChainFamily, type[ChainAddress]] = {
    ChainFamily.EVM: EthereumAddress,
    ChainFamily.SUI: SuiAddress,
    ChainFamily.STARKNET: StarkNetAddress,
}


def address_from_text(family: ChainFamily, text: str) -> ChainAddress:
    """Parse `text` as an address of the given family."""
    return ADDRESS_TYPES[family].from_text(text)
