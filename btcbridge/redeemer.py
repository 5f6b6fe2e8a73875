"""Redemption request orchestration."""

import logging
import time
from collections.abc import Callable

from .addresses import EthereumAddress
from .bitcoin import BitcoinUtxo, prefix_output_script
from .chains import (
    DESTINATION_CHAIN_IDS,
    ETHEREUM_CHAIN_IDS,
    WORMHOLE_ETHEREUM_CHAIN_IDS,
    ChainFamily,
    DestinationChain,
    Network,
)
from .contracts import L1BitcoinRedeemerContract, L2BitcoinRedeemerContract, WormholeCoreContract
from .deployments import (
    L1_BITCOIN_REDEEMER,
    L2_BITCOIN_REDEEMER,
    WORMHOLE_CORE,
    Deployment,
    DeploymentRegistry,
    UnsupportedConfiguration,
    parse_chain,
    parse_network,
)
from .hashing import compute_hash160
from .hex import Hex
from .metrics import REDEMPTION_DURATION_SECONDS, REDEMPTION_ERRORS_TOTAL, REDEMPTION_REQUESTS_TOTAL
from .models import L2RedemptionRequestParams, MainUtxoParam, RedemptionRequestParams
from .types import PubkeyHashHex, TxHashHex

logger = logging.getLogger(__name__)


class L1BitcoinRedeemer:
    """Requests Bitcoin redemptions through the L1 redeemer of one L2 chain.

    The deployment is resolved when the handle is built, so an unsupported
    (chain, network) pair fails here and never at request time. The handle
    keeps no state besides its contract binding and can be shared between
    concurrent callers.
    """

    def __init__(
        self,
        registry: DeploymentRegistry,
        chain: str | DestinationChain,
        network: str | Network,
        bind: Callable[[Deployment], L1BitcoinRedeemerContract],
    ) -> None:
        self._chain = parse_chain(chain)
        self._network = parse_network(network)
        deployment = registry.get(L1_BITCOIN_REDEEMER, self._chain, self._network)
        self._contract = bind(deployment)
        logger.info(
            f"Bound L1BitcoinRedeemer for {self._chain.value}/{self._network.value} "
            f"at {deployment.address}"
        )

    @property
    def chain(self) -> DestinationChain:
        return self._chain

    @property
    def network(self) -> Network:
        return self._network

    @property
    def ethereum_chain_id(self) -> str:
        """Chain id of the Ethereum L1 of the bound network."""
        return ETHEREUM_CHAIN_IDS[self._network]

    @property
    def destination_chain_id(self) -> str:
        """Chain id of the destination chain on the bound network."""
        return DESTINATION_CHAIN_IDS[(self._chain, self._network)]

    @property
    def chain_identifier(self) -> EthereumAddress:
        """Address of the bound redeemer contract."""
        return EthereumAddress.from_text(self._contract.address)

    def build_request(
        self,
        wallet_public_key: Hex | bytes | str,
        main_utxo: BitcoinUtxo,
        encoded_vm: Hex | bytes | str,
    ) -> RedemptionRequestParams:
        """Build the contract parameters of a redemption request.

        The main UTXO transaction hash is converted to Bitcoin internal byte
        order. `main_utxo` itself is left untouched.
        """
        wallet_public_key_hash = compute_hash160(wallet_public_key)
        main_utxo_param = MainUtxoParam(
            tx_hash=TxHashHex(main_utxo.transaction_hash.reverse().to_prefixed_string()),
            tx_output_index=main_utxo.output_index,
            tx_output_value=main_utxo.value,
        )
        return RedemptionRequestParams(
            wallet_public_key_hash=PubkeyHashHex(wallet_public_key_hash.to_prefixed_string()),
            main_utxo=main_utxo_param,
            encoded_vm=Hex.from_value(encoded_vm).to_bytes(),
        )

    async def request_redemption(
        self,
        wallet_public_key: Hex | bytes | str,
        main_utxo: BitcoinUtxo,
        encoded_vm: Hex | bytes | str,
    ) -> Hex:
        """Request redemption of bridged tBTC against a wallet's main UTXO.

        Args:
            wallet_public_key: Compressed public key of the redeeming wallet
            main_utxo: The wallet's main UTXO, hash in RPC byte order
            encoded_vm: Opaque verified cross-chain message

        Returns:
            Hash of the submitted transaction

        Raises:
            FormatError: If an input cannot be decoded
            SubmissionFailure: If the contract call fails; other errors of
                the contract boundary propagate unchanged as well

        """
        params = self.build_request(wallet_public_key, main_utxo, encoded_vm)

        REDEMPTION_REQUESTS_TOTAL.labels(layer="l1", chain=self._chain.value).inc()
        start_time = time.perf_counter()

        try:
            tx_hash = await self._contract.request_redemption(params)
        except Exception as e:
            REDEMPTION_ERRORS_TOTAL.labels(layer="l1", error_type=type(e).__name__).inc()
            raise

        REDEMPTION_DURATION_SECONDS.labels(layer="l1").observe(time.perf_counter() - start_time)
        result = Hex.from_value(tx_hash)
        logger.debug(
            f"Redemption requested for wallet {params.wallet_public_key_hash[:12]}...: "
            f"{result.to_prefixed_string()}"
        )
        return result


class L2BitcoinRedeemer:
    """Requests redemptions from an EVM L2 through its Wormhole-connected redeemer."""

    def __init__(
        self,
        registry: DeploymentRegistry,
        chain: str | DestinationChain,
        network: str | Network,
        bind_redeemer: Callable[[Deployment], L2BitcoinRedeemerContract],
        bind_wormhole_core: Callable[[Deployment], WormholeCoreContract],
    ) -> None:
        self._chain = parse_chain(chain)
        self._network = parse_network(network)
        if self._chain.family is not ChainFamily.EVM:
            raise UnsupportedConfiguration(
                f"L2BitcoinRedeemer is not available on {self._chain.value}"
            )

        redeemer_deployment = registry.get(L2_BITCOIN_REDEEMER, self._chain, self._network)
        wormhole_core_deployment = registry.get(WORMHOLE_CORE, self._chain, self._network)

        self._recipient_chain = WORMHOLE_ETHEREUM_CHAIN_IDS[self._network]
        self._contract = bind_redeemer(redeemer_deployment)
        self._wormhole_core = bind_wormhole_core(wormhole_core_deployment)
        logger.info(
            f"Bound L2BitcoinRedeemer for {self._chain.value}/{self._network.value} "
            f"at {redeemer_deployment.address}"
        )

    @property
    def chain(self) -> DestinationChain:
        return self._chain

    @property
    def network(self) -> Network:
        return self._network

    @property
    def ethereum_chain_id(self) -> str:
        """Chain id of the Ethereum L1 of the bound network."""
        return ETHEREUM_CHAIN_IDS[self._network]

    @property
    def destination_chain_id(self) -> str:
        """Chain id of the destination chain on the bound network."""
        return DESTINATION_CHAIN_IDS[(self._chain, self._network)]

    @property
    def chain_identifier(self) -> EthereumAddress:
        return EthereumAddress.from_text(self._contract.address)

    @property
    def recipient_chain(self) -> int:
        """Wormhole chain id of the Ethereum L1 receiving the redemption."""
        return self._recipient_chain

    async def request_redemption(
        self,
        amount: int,
        redeemer_output_script: Hex | bytes | str,
        nonce: int,
    ) -> Hex:
        """Request redemption of `amount` tBTC to a Bitcoin output script.

        The script is sent prefixed with its length, and the Wormhole message
        fee is attached as call value.

        Args:
            amount: Amount of tBTC in 1e18 precision
            redeemer_output_script: Raw output script receiving the BTC
            nonce: Wormhole message nonce

        Returns:
            Hash of the submitted transaction

        """
        if amount < 0:
            raise ValueError(f"amount must not be negative, got {amount}")
        prefixed_script = prefix_output_script(redeemer_output_script)

        REDEMPTION_REQUESTS_TOTAL.labels(layer="l2", chain=self._chain.value).inc()
        start_time = time.perf_counter()

        try:
            message_fee = await self._wormhole_core.message_fee()
            params = L2RedemptionRequestParams(
                amount=amount,
                recipient_chain=self._recipient_chain,
                redeemer_output_script=prefixed_script.to_bytes(),
                nonce=nonce,
                message_fee=message_fee,
            )
            tx_hash = await self._contract.request_redemption(params)
        except Exception as e:
            REDEMPTION_ERRORS_TOTAL.labels(layer="l2", error_type=type(e).__name__).inc()
            raise

        REDEMPTION_DURATION_SECONDS.labels(layer="l2").observe(time.perf_counter() - start_time)
        return Hex.from_value(tx_hash)
