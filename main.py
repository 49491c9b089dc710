#!/usr/bin/env python3
"""Entry point for the Root Relayer service.

Reads config.toml (or the file named by RELAYER_CONFIG), loads the wallet
and relays the L2 tree root to L1 every check interval until killed.
"""

import asyncio
import logging
import os
import sys


# Configure logging before any other imports create loggers
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

from root_relayer.errors import ConfigError, WalletError
from root_relayer.relayer import RootRelayer


async def main() -> None:
    """Main entry point for the Root Relayer.

    Raises:
        SystemExit: On configuration, wallet or unexpected startup errors
    """
    setup_logging(os.environ.get("LOG_LEVEL", "INFO"))
    logger.info("=== Root Relayer Starting ===")

    try:
        relayer: RootRelayer = RootRelayer.from_file()
    except ConfigError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Required configuration keys:")
        logger.error("  - [network] l1_rpc_url, l2_rpc_url, l1_program_id")
        logger.error("  - [account] leaf_chunk_address, slots_account")
        logger.error("  - [wallet] wallet_path")
        logger.error("  - [settings] check_interval_secs")
        sys.exit(1)
    except WalletError as e:
        logger.error(f"Wallet Error: {e}")
        sys.exit(1)

    try:
        await relayer.run()
    except Exception as e:
        logger.error(f"Fatal Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down...")
        sys.exit(0)
