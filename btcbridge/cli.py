"""CLI entry point for btcbridge."""

import argparse
import asyncio
import logging
import sys
from functools import partial

from web3 import AsyncHTTPProvider, AsyncWeb3

from .addresses import address_from_text
from .bitcoin import BitcoinUtxo
from .chains import DestinationChain
from .config import Config, add_config_arguments, load_config
from .contracts import Web3L1BitcoinRedeemerContract
from .deployments import DeploymentRegistry, UnsupportedConfiguration
from .extra_data import get_extra_data_encoder
from .hashing import compute_hash160
from .hex import FormatError, Hex
from .metrics import MetricsServer
from .redeemer import L1BitcoinRedeemer

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="btcbridge",
        description="btcbridge - cross-chain tBTC redemption encoding",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_config_arguments(parser)

    commands = parser.add_subparsers(dest="command", required=True)

    hash_cmd = commands.add_parser("hash160", help="Compute the hash160 of a public key")
    hash_cmd.add_argument("public_key", help="Hex-encoded public key")

    encode_cmd = commands.add_parser(
        "encode-owner", help="Encode a deposit owner address as 32-byte extra data"
    )
    encode_cmd.add_argument("address", help="Deposit owner address on the destination chain")

    decode_cmd = commands.add_parser(
        "decode-owner", help="Decode 32-byte extra data into a deposit owner address"
    )
    decode_cmd.add_argument("extra_data", help="Hex-encoded extra data")

    redeem_cmd = commands.add_parser(
        "request-redemption", help="Submit a redemption request to the L1 redeemer"
    )
    redeem_cmd.add_argument("--wallet-public-key", required=True, help="Compressed wallet public key")
    redeem_cmd.add_argument(
        "--utxo-tx-hash", required=True, help="Main UTXO transaction hash (RPC byte order)"
    )
    redeem_cmd.add_argument("--utxo-output-index", type=int, required=True, help="Main UTXO output index")
    redeem_cmd.add_argument("--utxo-value", type=int, required=True, help="Main UTXO value in satoshis")
    redeem_cmd.add_argument("--encoded-vm", required=True, help="Hex-encoded verified message")

    return parser


def _encode_owner(config: Config, address: str) -> str:
    encoder = get_extra_data_encoder(DestinationChain(config.chain.lower()))
    owner = address_from_text(encoder.family, address)
    return encoder.encode_deposit_owner(owner).to_prefixed_string()


def _decode_owner(config: Config, extra_data: str) -> str:
    encoder = get_extra_data_encoder(DestinationChain(config.chain.lower()))
    return str(encoder.decode_deposit_owner(extra_data))


async def _request_redemption(config: Config, args: argparse.Namespace) -> str:
    if config.rpc_url is None or config.artifacts_dir is None:
        raise ValueError("request-redemption requires --rpc-url and --artifacts-path")

    registry = DeploymentRegistry.from_directory(config.artifacts_dir)
    w3 = AsyncWeb3(AsyncHTTPProvider(config.rpc_url))
    redeemer = L1BitcoinRedeemer(
        registry,
        config.chain,
        config.network,
        bind=partial(Web3L1BitcoinRedeemerContract, w3, sender=config.sender),
    )
    main_utxo = BitcoinUtxo(
        transaction_hash=Hex(args.utxo_tx_hash),
        output_index=args.utxo_output_index,
        value=args.utxo_value,
    )
    tx_hash = await redeemer.request_redemption(args.wallet_public_key, main_utxo, args.encoded_vm)
    return tx_hash.to_prefixed_string()


def run(config: Config, args: argparse.Namespace) -> str:
    """Execute the selected command and return its output line."""
    if args.command == "hash160":
        return compute_hash160(args.public_key).to_prefixed_string()
    if args.command == "encode-owner":
        return _encode_owner(config, args.address)
    if args.command == "decode-owner":
        return _decode_owner(config, args.extra_data)
    if args.command == "request-redemption":
        return asyncio.run(_request_redemption(config, args))
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.normalized_log_level)

    metrics_server = None
    try:
        if config.metrics_enabled:
            metrics_server = MetricsServer(config.metrics_host, config.metrics_port)
            metrics_server.start()

        print(run(config, args))
    except (FormatError, UnsupportedConfiguration, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.exception("Command failed")
        sys.exit(1)
    finally:
        if metrics_server is not None and metrics_server.running:
            metrics_server.stop()


if __name__ == "__main__":
    main()
