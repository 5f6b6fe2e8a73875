"""Contract deployment artifacts keyed by (contract, chain, network).

Artifacts are hardhat-deploy JSON files laid out as::

    <root>/<network>/<chain>/<ContractName>.json

They are loaded once into an immutable registry. A missing entry is a
configuration error raised when a contract handle is built, never when a
request is sent.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any

import msgspec

from .chains import DestinationChain, Network
from .types import ContractName

logger = logging.getLogger(__name__)

L1_BITCOIN_REDEEMER = ContractName("L1BitcoinRedeemer")
L2_BITCOIN_REDEEMER = ContractName("L2BitcoinRedeemer")
WORMHOLE_CORE = ContractName("WormholeCore")


class UnsupportedConfiguration(Exception):
    """No deployment artifact exists for the requested configuration."""


class Deployment(msgspec.Struct, frozen=True):
    """A deployed contract artifact.

    Attributes:
        address: 0x-prefixed contract address
        abi: Contract ABI
        transaction_hash: Deployment transaction hash, if recorded

    """

    address: str
    abi: list[dict[str, Any]]
    transaction_hash: str | None = msgspec.field(default=None, name="transactionHash")


DeploymentKey = tuple[ContractName, DestinationChain, Network]


def parse_chain(name: "str | DestinationChain") -> DestinationChain:
    if isinstance(name, DestinationChain):
        return name
    try:
        return DestinationChain(str(name).lower())
    except ValueError:
        raise UnsupportedConfiguration(f"Unsupported destination chain: {name}") from None


def parse_network(name: "str | Network") -> Network:
    if isinstance(name, Network):
        return name
    try:
        return Network(str(name).lower())
    except ValueError:
        raise UnsupportedConfiguration(f"Unsupported network: {name}") from None


class DeploymentRegistry:
    """Immutable lookup of deployment artifacts."""

    def __init__(self, deployments: dict[DeploymentKey, Deployment] | None = None) -> None:
        self._deployments = MappingProxyType(dict(deployments or {}))

    @classmethod
    def from_directory(cls, root: Path) -> "DeploymentRegistry":
        """Load every artifact below `root`.

        Args:
            root: Artifacts root directory

        Returns:
            Registry holding all artifacts found

        Raises:
            UnsupportedConfiguration: If the directory is missing or an
                artifact cannot be decoded

        """
        if not root.is_dir():
            raise UnsupportedConfiguration(f"Artifacts directory does not exist: {root}")

        deployments: dict[DeploymentKey, Deployment] = {}
        for artifact in sorted(root.glob("*/*/*.json")):
            network_name = artifact.parent.parent.name
            chain_name = artifact.parent.name
            try:
                network = Network(network_name)
                chain = DestinationChain(chain_name)
            except ValueError:
                logger.warning(f"Skipping artifact outside known chains/networks: {artifact}")
                continue

            try:
                deployment = msgspec.json.decode(artifact.read_bytes(), type=Deployment)
            except msgspec.DecodeError as e:
                raise UnsupportedConfiguration(f"Invalid deployment artifact {artifact}: {e}") from e

            deployments[(ContractName(artifact.stem), chain, network)] = deployment
            logger.debug(f"Loaded {artifact.stem} for {chain.value}/{network.value}")

        logger.info(f"Loaded {len(deployments)} deployment artifact(s) from {root}")
        return cls(deployments)

    def get(
        self,
        contract: ContractName,
        chain: "str | DestinationChain",
        network: "str | Network",
    ) -> Deployment:
        """Return the deployment of `contract` for the chain and network.

        Raises:
            UnsupportedConfiguration: If no artifact is registered

        """
        key = (contract, parse_chain(chain), parse_network(network))
        deployment = self._deployments.get(key)
        if deployment is None:
            raise UnsupportedConfiguration(
                f"No {contract} deployment for {key[1].value} on {key[2].value}"
            )
        return deployment

    def __contains__(self, key: object) -> bool:
        return key in self._deployments

    def __len__(self) -> int:
        return len(self._deployments)
