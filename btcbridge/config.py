"""Settings for the btcbridge command, from arguments and BTCBRIDGE_* variables."""

import argparse
import os
from pathlib import Path

import msgspec

from .chains import DestinationChain, Network

ENV_PREFIX = "BTCBRIDGE_"


class Config(msgspec.Struct, frozen=True):
    """Validated btcbridge settings."""

    # Logging
    log_level: str = "INFO"

    # Ethereum L1 connection
    rpc_url: str | None = None
    sender: str | None = None

    # Deployment selection
    network: str = Network.SEPOLIA.value
    chain: str = DestinationChain.BASE.value
    artifacts_path: str | None = None

    # Metrics settings
    metrics_enabled: bool = False
    metrics_host: str = "127.0.0.1"
    metrics_port: int = 9464

    def __post_init__(self) -> None:
        """Reject unknown names, bad ports and missing artifact directories."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {self.log_level}")

        valid_networks = {n.value for n in Network}
        if self.network.lower() not in valid_networks:
            raise ValueError(f"network must be one of {valid_networks}, got {self.network}")

        valid_chains = {c.value for c in DestinationChain}
        if self.chain.lower() not in valid_chains:
            raise ValueError(f"chain must be one of {valid_chains}, got {self.chain}")

        if self.metrics_port < 1 or self.metrics_port > 65535:
            raise ValueError(f"metrics_port must be between 1 and 65535, got {self.metrics_port}")

        if self.artifacts_path is not None and not Path(self.artifacts_path).is_dir():
            raise ValueError(f"artifacts_path must be a directory: {self.artifacts_path}")

    @property
    def normalized_log_level(self) -> str:
        """Return normalized uppercase log level."""
        return self.log_level.upper()

    @property
    def artifacts_dir(self) -> Path | None:
        return Path(self.artifacts_path) if self.artifacts_path is not None else None


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(ENV_PREFIX + name, default)


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the configuration options on `parser`.

    Defaults come from BTCBRIDGE_* environment variables.
    """
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=_env("LOG_LEVEL", "INFO"),
        help="Logging level",
    )
    parser.add_argument("--rpc-url", default=_env("RPC_URL"), help="Ethereum L1 JSON-RPC URL")
    parser.add_argument(
        "--sender", default=_env("SENDER"), help="Node-managed account sending transactions"
    )
    parser.add_argument(
        "--network",
        choices=[n.value for n in Network],
        default=_env("NETWORK", Network.SEPOLIA.value),
        help="Deployment network",
    )
    parser.add_argument(
        "--chain",
        choices=[c.value for c in DestinationChain],
        default=_env("CHAIN", DestinationChain.BASE.value),
        help="Destination chain",
    )
    parser.add_argument(
        "--artifacts-path",
        default=_env("ARTIFACTS_PATH"),
        help="Directory with <network>/<chain>/<Contract>.json deployment artifacts",
    )
    parser.add_argument(
        "--metrics-enabled",
        action="store_true",
        default=_env("METRICS_ENABLED", "").lower() in ("1", "true", "yes"),
        help="Serve Prometheus metrics while running",
    )
    parser.add_argument(
        "--metrics-host", default=_env("METRICS_HOST", "127.0.0.1"), help="Host for metrics server"
    )
    parser.add_argument(
        "--metrics-port",
        type=int,
        default=_env("METRICS_PORT", "9464"),
        help="Port for metrics server",
    )


def load_config(args: argparse.Namespace) -> Config:
    """Build configuration from parsed command line arguments."""
    config_dict: dict[str, object] = {
        "log_level": args.log_level,
        "rpc_url": args.rpc_url,
        "sender": args.sender,
        "network": args.network,
        "chain": args.chain,
        "artifacts_path": args.artifacts_path,
        "metrics_enabled": args.metrics_enabled,
        "metrics_host": args.metrics_host,
        "metrics_port": args.metrics_port,
    }

    # __post_init__ failures surface as ValidationError here
    try:
        config = msgspec.convert(config_dict, Config)
    except msgspec.ValidationError as e:
        raise ValueError(f"Configuration validation error: {e}")

    return config
