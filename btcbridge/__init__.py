"""btcbridge - cross-chain redemption encoding for a Bitcoin bridge."""

__version__ = "0.1.0"
