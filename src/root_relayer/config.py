#!/usr/bin/env python3
"""Configuration management for the root relayer.

This module provides type-safe configuration dataclasses with validation.
Configuration is loaded from a TOML file (``config.toml`` unless the
RELAYER_CONFIG environment variable points elsewhere). Every key is required
except ``settings.retry_submission``.
"""

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .errors import ConfigError
from .models import CycleContext

# Get logger for this module
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.toml"


def _require_url(value: str, key: str) -> None:
    if not value or not isinstance(value, str):
        raise ConfigError(f"{key} is required")

    parsed = urlparse(value)
    if parsed.scheme not in ('http', 'https', 'ws', 'wss'):
        raise ConfigError(
            f"Invalid {key} scheme: {parsed.scheme}. "
            "Expected http, https, ws, or wss"
        )


def _require_pubkey(value: str, key: str) -> Pubkey:
    if not value or not isinstance(value, str):
        raise ConfigError(f"{key} is required")

    try:
        return Pubkey.from_string(value)
    except ValueError:
        raise ConfigError(f"Invalid {key}: {value}") from None


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """RPC endpoints and the destination program.

    Attributes:
        l1_rpc_url: Destination ledger RPC endpoint
        l2_rpc_url: Source ledger RPC endpoint
        l1_program_id: Destination program receiving the roots
    """

    l1_rpc_url: str
    l2_rpc_url: str
    l1_program_id: str

    def __post_init__(self) -> None:
        """Validate network configuration."""
        _require_url(self.l1_rpc_url, "network.l1_rpc_url")
        _require_url(self.l2_rpc_url, "network.l2_rpc_url")
        _require_pubkey(self.l1_program_id, "network.l1_program_id")


@dataclass(frozen=True, slots=True)
class AccountConfig:
    """Source and destination account addresses.

    Attributes:
        leaf_chunk_address: Source account whose bytes [8, 40) hold the tree root
        slots_account: Destination program state account
    """

    leaf_chunk_address: str
    slots_account: str

    def __post_init__(self) -> None:
        """Validate account addresses."""
        _require_pubkey(self.leaf_chunk_address, "account.leaf_chunk_address")
        _require_pubkey(self.slots_account, "account.slots_account")


@dataclass(frozen=True, slots=True)
class WalletConfig:
    """Location of the signing keypair."""

    wallet_path: str

    def __post_init__(self) -> None:
        if not self.wallet_path or not isinstance(self.wallet_path, str):
            raise ConfigError("wallet.wallet_path is required")


@dataclass(frozen=True, slots=True)
class SettingsConfig:
    """Scheduling settings."""

    check_interval_secs: int
    retry_submission: bool = False

    def __post_init__(self) -> None:
        """Validate scheduling settings."""
        # bool is an int subclass, reject it explicitly
        if isinstance(self.check_interval_secs, bool) or not isinstance(self.check_interval_secs, int):
            raise ConfigError(
                f"settings.check_interval_secs must be an integer, got {self.check_interval_secs!r}"
            )
        if self.check_interval_secs <= 0:
            raise ConfigError(
                f"settings.check_interval_secs must be positive, got {self.check_interval_secs}"
            )
        if not isinstance(self.retry_submission, bool):
            raise ConfigError(
                f"settings.retry_submission must be a boolean, got {self.retry_submission!r}"
            )


@dataclass(frozen=True, slots=True)
class RelayerConfig:
    """Main configuration for the root relayer.

    Attributes:
        network: RPC endpoints and destination program
        account: Source and destination accounts
        wallet: Signing keypair location
        settings: Scheduling settings
    """

    network: NetworkConfig
    account: AccountConfig
    wallet: WalletConfig
    settings: SettingsConfig

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RelayerConfig":
        """Build configuration from parsed TOML data.

        Raises:
            ConfigError: If a section or key is missing or invalid
        """
        def section(name: str) -> dict[str, Any]:
            value = data.get(name)
            if not isinstance(value, dict):
                raise ConfigError(f"Missing configuration section [{name}]")
            return value

        def required(sect: dict[str, Any], name: str, key: str) -> Any:
            if key not in sect:
                raise ConfigError(f"Missing configuration key {name}.{key}")
            return sect[key]

        network = section("network")
        account = section("account")
        wallet = section("wallet")
        settings = section("settings")

        return cls(
            network=NetworkConfig(
                l1_rpc_url=required(network, "network", "l1_rpc_url"),
                l2_rpc_url=required(network, "network", "l2_rpc_url"),
                l1_program_id=required(network, "network", "l1_program_id"),
            ),
            account=AccountConfig(
                leaf_chunk_address=required(account, "account", "leaf_chunk_address"),
                slots_account=required(account, "account", "slots_account"),
            ),
            wallet=WalletConfig(
                wallet_path=required(wallet, "wallet", "wallet_path"),
            ),
            settings=SettingsConfig(
                check_interval_secs=required(settings, "settings", "check_interval_secs"),
                retry_submission=settings.get("retry_submission", False),
            ),
        )

    @classmethod
    def from_toml(cls, text: str) -> "RelayerConfig":
        """Parse configuration from a TOML document."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str] | None = None) -> "RelayerConfig":
        """Load configuration from a TOML file.

        Args:
            path: File to read; defaults to RELAYER_CONFIG or ./config.toml

        Returns:
            RelayerConfig instance with loaded values

        Raises:
            ConfigError: If the file cannot be read or is invalid
        """
        config_path = Path(path or os.environ.get("RELAYER_CONFIG", DEFAULT_CONFIG_PATH))
        logger.debug(f"Reading configuration from {config_path}")

        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e

        return cls.from_toml(text)

    def build_context(self, wallet: Keypair) -> CycleContext:
        """Freeze the parsed addresses and the loaded wallet into a CycleContext."""
        return CycleContext(
            leaf_chunk_address=Pubkey.from_string(self.account.leaf_chunk_address),
            program_id=Pubkey.from_string(self.network.l1_program_id),
            slots_account=Pubkey.from_string(self.account.slots_account),
            wallet=wallet,
            check_interval_secs=self.settings.check_interval_secs,
            retry_submission=self.settings.retry_submission,
        )

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("Root Relayer Configuration")
        logger.info("=" * 60)

        logger.info("Network:")
        logger.info(f"  L2 RPC URL: {self.network.l2_rpc_url}")
        logger.info(f"  L1 RPC URL: {self.network.l1_rpc_url}")
        logger.info(f"  L1 Program: {self.network.l1_program_id}")

        logger.info("Accounts:")
        logger.info(f"  Leaf Chunk: {self.account.leaf_chunk_address}")
        logger.info(f"  Slots Account: {self.account.slots_account}")

        logger.info("Wallet:")
        logger.info(f"  Path: {self.wallet.wallet_path}")

        logger.info("Settings:")
        logger.info(f"  Check Interval: {self.settings.check_interval_secs} seconds")
        logger.info(f"  Retry Submission: {'ON' if self.settings.retry_submission else 'OFF'}")

        logger.info("=" * 60)
