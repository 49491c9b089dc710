#!/usr/bin/env python3
"""Wallet keypair loading.

Supports the Solana CLI keypair file (a JSON array of 64 integers) and a
file holding a base58-encoded 64-byte secret key.
"""

import json
import logging
from pathlib import Path

import base58
from solders.keypair import Keypair

from .errors import WalletError

logger = logging.getLogger(__name__)

KEYPAIR_LENGTH = 64


def _decode_secret(text: str) -> bytes:
    if text.startswith("["):
        data = json.loads(text)
        if not isinstance(data, list) or not all(isinstance(b, int) for b in data):
            raise ValueError("keypair JSON must be an array of integers")
        return bytes(data)

    return base58.b58decode(text)


def load_wallet(wallet_path: str) -> Keypair:
    """Load the signing keypair from disk.

    Args:
        wallet_path: Path to the keypair file, ``~`` is expanded

    Returns:
        The wallet keypair

    Raises:
        WalletError: If the file is missing, unreadable or malformed
    """
    path = Path(wallet_path).expanduser()

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise WalletError(f"Failed to read wallet file {path}: {e}") from e

    try:
        secret = _decode_secret(raw.decode("utf-8").strip())
    except ValueError as e:
        raise WalletError(f"Malformed wallet file {path}: {e}") from e

    if len(secret) != KEYPAIR_LENGTH:
        raise WalletError(
            f"Malformed wallet file {path}: expected {KEYPAIR_LENGTH} bytes, got {len(secret)}"
        )

    try:
        keypair = Keypair.from_bytes(secret)
    except ValueError as e:
        raise WalletError(f"Malformed wallet file {path}: {e}") from e

    logger.info(f"Loaded wallet {keypair.pubkey()}")
    return keypair
