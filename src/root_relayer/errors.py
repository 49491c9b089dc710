#!/usr/bin/env python3
"""Exception hierarchy for the root relayer.

Startup errors (ConfigError, WalletError) abort the process before the
scheduler starts. Everything deriving from CycleError aborts only the
current cycle; the scheduler logs it and waits for the next tick.
"""


class RelayerError(Exception):
    """Base class for all relayer errors."""


class ConfigError(RelayerError, ValueError):
    """Configuration is missing, unreadable or invalid."""


class WalletError(RelayerError):
    """Wallet keypair file is missing, unreadable or malformed."""


class CycleError(RelayerError):
    """Base class for errors that abort a single relay cycle."""


class AccountNotFound(CycleError):
    """The source account does not exist at the observed slot."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Account not found: {address}")
        self.address = address


class TransportError(CycleError):
    """A remote call failed before producing a usable response."""


class MalformedAccountData(CycleError):
    """Source account data is too short to contain the tree root."""

    def __init__(self, length: int, required: int) -> None:
        super().__init__(
            f"Account data too short: got {length} bytes, need at least {required}"
        )
        self.length = length
        self.required = required


class AddressDerivationFailed(CycleError):
    """No program-derived address could be found for the given seeds."""


class SubmissionError(CycleError):
    """The transaction could not be signed, serialized or was rejected."""


class ConfirmationError(CycleError):
    """The transaction was sent but did not confirm successfully."""


def describe(exc: Exception) -> str:
    """Readable message for library exceptions that keep it outside args."""
    return getattr(exc, "error_msg", None) or str(exc) or type(exc).__name__
