#!/usr/bin/env python3
"""Data models for the root relayer.

Immutable values passed between the stages of a relay cycle. None of them
outlive the cycle that created them, except CycleContext which is built
once at startup.
"""

from dataclasses import dataclass

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

ROOT_SIZE = 32
ZERO_ROOT = bytes(ROOT_SIZE)


@dataclass(frozen=True, slots=True)
class SourceSnapshot:
    """Raw source account bytes together with the slot they were read at.

    Attributes:
        raw_bytes: Account data as returned by the source ledger
        observed_slot: Slot reported in the response context of the same read
    """

    raw_bytes: bytes
    observed_slot: int


@dataclass(frozen=True, slots=True)
class RootPair:
    """The two roots carried by a submission instruction.

    Attributes:
        tree_root: Merkle tree root read from the source account
        state_root: World state root (always zero for now)
    """

    tree_root: bytes
    state_root: bytes

    def __post_init__(self) -> None:
        for name in ("tree_root", "state_root"):
            if len(getattr(self, name)) != ROOT_SIZE:
                raise ValueError(f"{name} must be {ROOT_SIZE} bytes")


@dataclass(frozen=True, slots=True)
class CycleContext:
    """Read-only inputs shared by every relay cycle.

    Attributes:
        leaf_chunk_address: Source account holding the tree root
        program_id: Destination program receiving the roots
        slots_account: Destination program state account
        wallet: Fee payer and sole signer
        check_interval_secs: Seconds between cycle starts
        retry_submission: Wrap the submission step in the retry wrapper
    """

    leaf_chunk_address: Pubkey
    program_id: Pubkey
    slots_account: Pubkey
    wallet: Keypair
    check_interval_secs: int
    retry_submission: bool = False

    @property
    def wallet_address(self) -> Pubkey:
        return self.wallet.pubkey()


@dataclass(frozen=True, slots=True)
class CycleReport:
    """Outcome of one successful relay cycle."""

    slot: int
    roots: RootPair
    roots_address: Pubkey
    signature: Signature

    def __str__(self) -> str:
        return (
            f"CycleReport(slot={self.slot}, "
            f"roots_account={self.roots_address}, "
            f"signature={str(self.signature)[:16]}...)"
        )
