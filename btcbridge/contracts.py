"""Contract boundary of the redeemers.

The redeemers only depend on the Protocols below. The web3 adapters bind
them to deployed contracts through an `AsyncWeb3` instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from web3 import Web3
from web3.exceptions import Web3Exception

from .hex import Hex

if TYPE_CHECKING:
    from web3 import AsyncWeb3

    from .deployments import Deployment
    from .models import L2RedemptionRequestParams, RedemptionRequestParams

logger = logging.getLogger(__name__)


class SubmissionFailure(Exception):
    """The underlying contract call failed (revert, RPC or network error)."""


class L1BitcoinRedeemerContract(Protocol):
    @property
    def address(self) -> str: ...

    async def request_redemption(self, params: RedemptionRequestParams) -> Hex: ...


class L2BitcoinRedeemerContract(Protocol):
    @property
    def address(self) -> str: ...

    async def request_redemption(self, params: L2RedemptionRequestParams) -> Hex: ...


class WormholeCoreContract(Protocol):
    async def message_fee(self) -> int: ...


class _Web3Contract:
    """Shared binding of a deployment to an `AsyncWeb3` contract."""

    def __init__(
        self,
        w3: AsyncWeb3,
        deployment: Deployment,
        sender: str | None = None,
    ) -> None:
        self._w3 = w3
        self._address = Web3.to_checksum_address(deployment.address)
        self._contract = w3.eth.contract(address=self._address, abi=deployment.abi)
        self._sender = Web3.to_checksum_address(sender) if sender else None

    @property
    def address(self) -> str:
        return self._address

    def _tx_params(self, **extra: Any) -> dict[str, Any]:
        params: dict[str, Any] = dict(extra)
        if self._sender is not None:
            params["from"] = self._sender
        return params


class Web3L1BitcoinRedeemerContract(_Web3Contract):
    """L1BitcoinRedeemer bound through web3."""

    async def request_redemption(self, params: RedemptionRequestParams) -> Hex:
        main_utxo = (
            Hex(params.main_utxo.tx_hash).to_bytes(),
            params.main_utxo.tx_output_index,
            params.main_utxo.tx_output_value,
        )
        try:
            tx_hash = await self._contract.functions.requestRedemption(
                Hex(params.wallet_public_key_hash).to_bytes(),
                main_utxo,
                params.encoded_vm,
            ).transact(self._tx_params())
        except Web3Exception as e:
            raise SubmissionFailure(f"requestRedemption failed: {e}") from e

        result = Hex(tx_hash)
        logger.debug(f"requestRedemption sent to {self._address}: {result.to_prefixed_string()}")
        return result


class Web3L2BitcoinRedeemerContract(_Web3Contract):
    """L2BitcoinRedeemer bound through web3."""

    async def request_redemption(self, params: L2RedemptionRequestParams) -> Hex:
        try:
            tx_hash = await self._contract.functions.requestRedemption(
                params.amount,
                params.recipient_chain,
                params.redeemer_output_script,
                params.nonce,
            ).transact(self._tx_params(value=params.message_fee))
        except Web3Exception as e:
            raise SubmissionFailure(f"requestRedemption failed: {e}") from e

        result = Hex(tx_hash)
        logger.debug(f"requestRedemption sent to {self._address}: {result.to_prefixed_string()}")
        return result


class Web3WormholeCoreContract(_Web3Contract):
    """Wormhole core bridge bound through web3."""

    async def message_fee(self) -> int:
        try:
            fee: int = await self._contract.functions.messageFee().call()
        except Web3Exception as e:
            raise SubmissionFailure(f"messageFee failed: {e}") from e
        return fee
