#!/usr/bin/env python3
"""Demo entry point for the Defender relayer.

Sends a dummy transaction through OpenZeppelin Defender Relay a few times
and reports the relay id and latency of each submission.
"""

import argparse
import asyncio
import logging
import os
import sys
import time

from dotenv import load_dotenv


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

# Get logger for this module
logger = logging.getLogger(__name__)

from defender_relayer import (  # noqa: E402
    DefenderRelayerTransport,
    RelayerConfig,
    RelayerError,
    Web3Transport,
    hash_to_relay_id,
)

DEFAULT_RECIPIENT = "0x00000000219ab540356cBB839Cbe05303d7705Fa"


async def main() -> None:
    """Main entry point for the Defender relayer demo.

    Raises:
        SystemExit: On configuration or relay errors
    """
    load_dotenv()

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Defender Relayer Demo - Submit transactions through OpenZeppelin Defender",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  API_KEY          - Defender relayer API key
  API_SECRET       - Defender relayer API secret
  RPC_URL          - RPC endpoint for chain queries (default: http://localhost:8545)
  REQUEST_TIMEOUT  - Relay request timeout in seconds (default: 30)
  LOG_LEVEL        - Logging level (can be overridden with --log-level)
        """
    )
    parser.add_argument("--to", default=DEFAULT_RECIPIENT, help="Recipient address")
    parser.add_argument("--value", type=int, default=1, help="Value in wei (default: 1)")
    parser.add_argument("--gas", type=int, default=100000, help="Gas limit (default: 100000)")
    parser.add_argument("--count", type=int, default=5, help="Number of transactions to send (default: 5)")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )
    args: argparse.Namespace = parser.parse_args()

    setup_logging(args.log_level)

    try:
        config: RelayerConfig = RelayerConfig.from_env()
    except ValueError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Please check your environment variables:")
        logger.error("  - API_KEY: Defender relayer API key")
        logger.error("  - API_SECRET: Defender relayer API secret")
        sys.exit(1)

    config.log_config()

    inner = Web3Transport(config.rpc_url, request_timeout=config.request_timeout)
    relayer = DefenderRelayerTransport.from_config(inner, config)

    tx = {"to": args.to, "value": args.value, "gas": args.gas}

    try:
        for i in range(args.count):
            start = time.perf_counter()
            pending = await relayer.send_transaction(tx)
            elapsed = time.perf_counter() - start
            logger.info(
                f"Sending transaction {i} (id: {hash_to_relay_id(pending.tx_hash)}) took {elapsed:.3f}s"
            )
    except RelayerError as e:
        logger.error(f"Relay Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("\nReceived interrupt signal, shutting down...")
        sys.exit(0)


if __name__ == "__main__":
    asyncio.run(main())
