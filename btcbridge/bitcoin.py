"""Bitcoin value types consumed by redemption requests."""

from dataclasses import dataclass

from .hex import FormatError, Hex

TX_HASH_LENGTH = 32
MAX_OUTPUT_INDEX = 2**32 - 1
MAX_OUTPUT_VALUE = 2**64 - 1

# Largest length that fits the single-byte form of a compact size prefix
MAX_SINGLE_BYTE_SCRIPT_LENGTH = 0xFC


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class BitcoinUtxo:
    """An unspent transaction output.

    Attributes:
        transaction_hash: 32-byte transaction hash in RPC (display) byte order
        output_index: Index of the output within the transaction
        value: Output value in satoshis

    """

    transaction_hash: Hex
    output_index: int
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.transaction_hash, Hex):
            object.__setattr__(self, "transaction_hash", Hex(self.transaction_hash))
        if len(self.transaction_hash) != TX_HASH_LENGTH:
            raise FormatError(
                f"Transaction hash must be {TX_HASH_LENGTH} bytes, "
                f"got {len(self.transaction_hash)}"
            )
        if not _is_integer(self.output_index):
            raise FormatError(f"Output index must be an integer, got {self.output_index!r}")
        if not 0 <= self.output_index <= MAX_OUTPUT_INDEX:
            raise FormatError(f"Output index out of range: {self.output_index}")
        if not _is_integer(self.value):
            raise FormatError(f"Output value must be an integer, got {self.value!r}")
        if not 0 <= self.value <= MAX_OUTPUT_VALUE:
            raise FormatError(f"Output value out of range: {self.value}")


def prefix_output_script(output_script: "Hex | bytes | str") -> Hex:
    """Prefix a raw output script with its one-byte length.

    Args:
        output_script: The raw output script

    Returns:
        Length byte followed by the script bytes

    Raises:
        FormatError: If the script does not fit a single-byte length prefix

    """
    raw = Hex.from_value(output_script).to_bytes()
    if len(raw) > MAX_SINGLE_BYTE_SCRIPT_LENGTH:
        raise FormatError(f"Output script too long: {len(raw)} bytes")
    return Hex(bytes([len(raw)]) + raw)
