"""Destination chains, networks and chain address families."""

from enum import Enum
from types import MappingProxyType


class ChainFamily(Enum):
    """Address family of a chain, tagged with its canonical byte width."""

    EVM = ("EVM", 20)
    SUI = ("SUI", 32)
    STARKNET = ("StarkNet", 32)

    def __init__(self, label: str, byte_width: int) -> None:
        self.label = label
        self.byte_width = byte_width


class DestinationChain(str, Enum):
    """Chains other than the Ethereum L1 that bridged tBTC can be sent to."""

    BASE = "base"
    ARBITRUM = "arbitrum"
    STARKNET = "starknet"
    SUI = "sui"

    @property
    def family(self) -> ChainFamily:
        return _CHAIN_FAMILIES[self]


class Network(str, Enum):
    MAINNET = "mainnet"
    SEPOLIA = "sepolia"


_CHAIN_FAMILIES = MappingProxyType(
    {
        DestinationChain.BASE: ChainFamily.EVM,
        DestinationChain.ARBITRUM: ChainFamily.EVM,
        DestinationChain.STARKNET: ChainFamily.STARKNET,
        DestinationChain.SUI: ChainFamily.SUI,
    }
)

# Ethereum L1 chain ids per network
ETHEREUM_CHAIN_IDS = MappingProxyType(
    {
        Network.MAINNET: "1",
        Network.SEPOLIA: "11155111",
    }
)

# Destination chain ids per network. The Sepolia row maps to each chain's
# public testnet.
DESTINATION_CHAIN_IDS = MappingProxyType(
    {
        (DestinationChain.BASE, Network.MAINNET): "8453",
        (DestinationChain.BASE, Network.SEPOLIA): "84532",
        (DestinationChain.ARBITRUM, Network.MAINNET): "42161",
        (DestinationChain.ARBITRUM, Network.SEPOLIA): "421614",
        (DestinationChain.STARKNET, Network.MAINNET): "0x534e5f4d41494e",  # SN_MAIN
        (DestinationChain.STARKNET, Network.SEPOLIA): "0x534e5f5345504f4c4941",  # SN_SEPOLIA
        (DestinationChain.SUI, Network.MAINNET): "sui:mainnet",
        (DestinationChain.SUI, Network.SEPOLIA): "sui:testnet",
    }
)

# Wormhole chain id of the Ethereum L1, the recipient of L2 redemption messages
WORMHOLE_ETHEREUM_CHAIN_IDS = MappingProxyType(
    {
        Network.MAINNET: 2,
        Network.SEPOLIA: 10002,
    }
)
