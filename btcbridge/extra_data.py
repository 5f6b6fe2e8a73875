"""Deposit owner encoding for the 32-byte extra data field.

Cross-chain deposit scripts carry the destination-chain owner of the funds
in a fixed 32-byte "extra data" field. Each address family has its own
mapping into that field:

- EVM (20 bytes): left-padded with 12 zero bytes
- SUI and StarkNet (32 bytes): the raw address bytes, unchanged

The field is never length-prefixed, so decoding rejects any input that is
not exactly 32 bytes instead of truncating or padding it.
"""

import logging

from .addresses import ADDRESS_TYPES, ChainAddress, InvalidAddressFormat
from .chains import ChainFamily, DestinationChain
from .hex import Hex

logger = logging.getLogger(__name__)

EXTRA_DATA_LENGTH = 32


def _encode_padded(address: ChainAddress) -> bytes:
    raw = address.to_hex().to_bytes()
    return bytes(EXTRA_DATA_LENGTH - len(raw)) + raw


def _decode_padded(family: ChainFamily, raw: bytes) -> ChainAddress:
    padding = EXTRA_DATA_LENGTH - family.byte_width
    if any(raw[:padding]):
        raise InvalidAddressFormat(
            f"Invalid {family.label} address format: extra data padding "
            f"must be {padding} zero bytes"
        )
    return ADDRESS_TYPES[family].from_hex(Hex(raw[padding:]))


class ExtraDataEncoder:
    """Encodes and decodes deposit owners of one chain family."""

    def __init__(self, family: ChainFamily) -> None:
        self._family = family

    @property
    def family(self) -> ChainFamily:
        return self._family

    def encode_deposit_owner(self, deposit_owner: ChainAddress) -> Hex:
        """Encode a deposit owner address as 32-byte extra data.

        Args:
            deposit_owner: Address of the owner on the destination chain

        Returns:
            The 32-byte extra data

        Raises:
            InvalidAddressFormat: If the address belongs to another chain family

        """
        if not isinstance(deposit_owner, ChainAddress) or deposit_owner.family is not self._family:
            raise InvalidAddressFormat(f"Deposit owner is not a {self._family.label} address")

        return Hex(_encode_padded(deposit_owner))

    def decode_deposit_owner(self, extra_data: "Hex | bytes | str") -> ChainAddress:
        """Decode 32-byte extra data into a deposit owner address.

        Args:
            extra_data: The extra data, as `Hex`, raw bytes or hex text with
                or without a 0x prefix

        Returns:
            The deposit owner address of this encoder's family

        Raises:
            InvalidAddressFormat: If the extra data is not exactly 32 bytes

        """
        raw = Hex.from_value(extra_data).to_bytes()
        if len(raw) != EXTRA_DATA_LENGTH:
            raise InvalidAddressFormat(
                f"Invalid {self._family.label} address format: extra data must be "
                f"{EXTRA_DATA_LENGTH} bytes, got {len(raw)}"
            )

        return _decode_padded(self._family, raw)

    def __repr__(self) -> str:
        return f"ExtraDataEncoder({self._family.label})"


def get_extra_data_encoder(chain: DestinationChain) -> ExtraDataEncoder:
    """Return the extra data encoder for a destination chain."""
    chain = DestinationChain(chain)
    encoder = ExtraDataEncoder(chain.family)
    logger.debug(f"Using {encoder!r} for {chain.value}")
    return encoder
