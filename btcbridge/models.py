"""Wire structures passed to the redeemer contracts.

This module contains the msgspec structs built fresh for every redemption
request and handed to the contract boundary.
"""

import msgspec

from .types import PubkeyHashHex, TxHashHex


class MainUtxoParam(msgspec.Struct, frozen=True):
    """Main UTXO in the shape the L1 redeemer expects.

    Attributes:
        tx_hash: 0x-prefixed transaction hash in Bitcoin internal byte order
        tx_output_index: Output index (uint32)
        tx_output_value: Output value in satoshis (uint64)

    """

    tx_hash: TxHashHex = msgspec.field(name="txHash")
    tx_output_index: int = msgspec.field(name="txOutputIndex")
    tx_output_value: int = msgspec.field(name="txOutputValue")


class RedemptionRequestParams(msgspec.Struct, frozen=True):
    """Parameters of an L1 redemption request.

    Attributes:
        wallet_public_key_hash: 0x-prefixed 20-byte wallet public key hash
        main_utxo: The wallet's main UTXO
        encoded_vm: Opaque verified cross-chain message

    """

    wallet_public_key_hash: PubkeyHashHex = msgspec.field(name="walletPublicKeyHash")
    main_utxo: MainUtxoParam = msgspec.field(name="mainUtxo")
    encoded_vm: bytes = msgspec.field(name="encodedVm")


class L2RedemptionRequestParams(msgspec.Struct, frozen=True):
    """Parameters of an L2 redemption request."""

    amount: int
    recipient_chain: int = msgspec.field(name="recipientChain")
    redeemer_output_script: bytes = msgspec.field(name="redeemerOutputScript")
    nonce: int
    message_fee: int = msgspec.field(name="messageFee")
