"""Test fixtures and utilities."""

import json
from pathlib import Path
from typing import Any

import pytest

from btcbridge.bitcoin import BitcoinUtxo
from btcbridge.deployments import Deployment, DeploymentRegistry
from btcbridge.hex import Hex
from btcbridge.models import L2RedemptionRequestParams, RedemptionRequestParams

L1_REDEEMER_ADDRESS = "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed"
L2_REDEEMER_ADDRESS = "0xfb6916095ca1df60bb79ce92ce3ea74c37c5d359"
WORMHOLE_CORE_ADDRESS = "0xdbf03b407c01e7cd3cbea99509d93f8dddc8c6fb"

# Compressed public key and its hash160 used across bridge test suites
WALLET_PUBLIC_KEY = "03989d253b17a6a0f41838b84ff0d20e8898f9d7b1a98f2564da4cc29dcf8581d9"
WALLET_PUBLIC_KEY_HASH = "8db50eb52063ea9d98b3eac91489a90f738986f6"

MAIN_UTXO_TX_HASH = "f8eaf242a55ea15e602f9f990e33f67f99dfbe25d1802bbde63cc1caabf99668"

TX_HASH = Hex("0x" + "ab" * 32)

L1_REDEEMER_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "requestRedemption",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "walletPubKeyHash", "type": "bytes20"},
            {
                "name": "mainUtxo",
                "type": "tuple",
                "components": [
                    {"name": "txHash", "type": "bytes32"},
                    {"name": "txOutputIndex", "type": "uint32"},
                    {"name": "txOutputValue", "type": "uint64"},
                ],
            },
            {"name": "encodedVm", "type": "bytes"},
        ],
        "outputs": [],
    }
]

L2_REDEEMER_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "requestRedemption",
        "stateMutability": "payable",
        "inputs": [
            {"name": "amount", "type": "uint256"},
            {"name": "recipientChain", "type": "uint16"},
            {"name": "redeemerOutputScript", "type": "bytes"},
            {"name": "nonce", "type": "uint32"},
        ],
        "outputs": [{"name": "", "type": "uint64"}],
    }
]

WORMHOLE_CORE_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "messageFee",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    }
]


def write_artifact(root: Path, network: str, chain: str, contract: str, data: dict[str, Any]) -> Path:
    """Write a hardhat-deploy style artifact below `root`."""
    directory = root / network / chain
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{contract}.json"
    path.write_text(json.dumps(data))
    return path


class FakeL1RedeemerContract:
    """In-memory L1 redeemer recording submitted requests."""

    def __init__(
        self,
        deployment: Deployment,
        tx_hash: Hex = TX_HASH,
        error: Exception | None = None,
    ) -> None:
        self.deployment = deployment
        self.tx_hash = tx_hash
        self.error = error
        self.calls: list[RedemptionRequestParams] = []

    @property
    def address(self) -> str:
        return self.deployment.address

    async def request_redemption(self, params: RedemptionRequestParams) -> Hex:
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return self.tx_hash


class FakeL2RedeemerContract:
    """In-memory L2 redeemer recording submitted requests."""

    def __init__(self, deployment: Deployment, error: Exception | None = None) -> None:
        self.deployment = deployment
        self.error = error
        self.calls: list[L2RedemptionRequestParams] = []

    @property
    def address(self) -> str:
        return self.deployment.address

    async def request_redemption(self, params: L2RedemptionRequestParams) -> Hex:
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return TX_HASH


class FakeWormholeCore:
    def __init__(self, deployment: Deployment, fee: int = 1000) -> None:
        self.deployment = deployment
        self.fee = fee

    async def message_fee(self) -> int:
        return self.fee


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Create an artifacts directory with Sepolia deployments for Base and Arbitrum."""
    root = tmp_path / "artifacts"
    for chain in ("base", "arbitrum"):
        write_artifact(
            root,
            "sepolia",
            chain,
            "L1BitcoinRedeemer",
            {"address": L1_REDEEMER_ADDRESS, "abi": L1_REDEEMER_ABI, "transactionHash": "0x" + "11" * 32},
        )
    write_artifact(
        root,
        "sepolia",
        "base",
        "L2BitcoinRedeemer",
        {"address": L2_REDEEMER_ADDRESS, "abi": L2_REDEEMER_ABI},
    )
    write_artifact(
        root,
        "sepolia",
        "base",
        "WormholeCore",
        {"address": WORMHOLE_CORE_ADDRESS, "abi": WORMHOLE_CORE_ABI},
    )
    return root


@pytest.fixture
def registry(artifacts_dir: Path) -> DeploymentRegistry:
    """Load the test deployment registry."""
    return DeploymentRegistry.from_directory(artifacts_dir)


@pytest.fixture
def main_utxo() -> BitcoinUtxo:
    """Return a main UTXO with its hash in RPC byte order."""
    return BitcoinUtxo(
        transaction_hash=Hex(MAIN_UTXO_TX_HASH),
        output_index=0,
        value=100000,
    )
