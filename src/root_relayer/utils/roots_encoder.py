"""
Encoding utilities for the destination roots program.

Builds the roots submission instruction and derives the per-slot roots
account. Both must match the on-chain program byte for byte.
"""

import logging

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from ..errors import AddressDerivationFailed
from ..models import ROOT_SIZE

logger = logging.getLogger(__name__)

# 8-byte instruction discriminator expected by the roots program
ROOTS_DISCRIMINATOR = bytes([249, 209, 47, 60, 18, 3, 81, 219])
ROOTS_SEED = b"roots"
INSTRUCTION_DATA_SIZE = len(ROOTS_DISCRIMINATOR) + 8 + 2 * ROOT_SIZE

U64_MAX = 2**64 - 1


def encode_slot(slot: int) -> bytes:
    """Encode a slot as 8 little-endian bytes."""
    return slot.to_bytes(8, "little")


def derive_roots_address(slot: int, program_id: Pubkey, seed: bytes = ROOTS_SEED) -> Pubkey:
    """
    Derive the roots account for a slot.

    Seeds are ``[seed, le64(slot)]`` and the owner is the destination program,
    exactly as the program derives it on chain.

    Args:
        slot: Source ledger slot the roots were observed at
        program_id: Destination program id
        seed: Static seed prefix

    Returns:
        The program-derived address

    Raises:
        AddressDerivationFailed: If no valid bump exists or the slot is out of range
    """
    if not 0 <= slot <= U64_MAX:
        raise AddressDerivationFailed(f"Slot {slot} is outside the u64 range")

    try:
        address, bump = Pubkey.find_program_address([seed, encode_slot(slot)], program_id)
    except Exception as e:
        raise AddressDerivationFailed(
            f"Could not derive roots address for slot {slot}: {e}"
        ) from e

    logger.debug(f"Derived roots account {address} (bump {bump}) for slot {slot}")
    return address


def build_instruction_data(slot: int, tree_root: bytes, state_root: bytes) -> bytes:
    """
    Serialize the roots submission instruction data.

    Layout: discriminator (8) | slot u64 LE (8) | tree_root (32) | state_root (32).
    """
    if len(tree_root) != ROOT_SIZE or len(state_root) != ROOT_SIZE:
        raise ValueError(f"Roots must be {ROOT_SIZE} bytes each")

    return ROOTS_DISCRIMINATOR + encode_slot(slot) + bytes(tree_root) + bytes(state_root)


def build_instruction(
    program_id: Pubkey,
    slots_account: Pubkey,
    roots_address: Pubkey,
    payer: Pubkey,
    data: bytes,
) -> Instruction:
    """
    Wrap instruction data with the program's fixed account ordering.

    Accounts:
        0. slots_account   writable
        1. system program  read-only
        2. roots_address   writable
        3. payer           writable, signer
    """
    accounts = [
        AccountMeta(pubkey=slots_account, is_signer=False, is_writable=True),
        AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(pubkey=roots_address, is_signer=False, is_writable=True),
        AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
    ]
    return Instruction(program_id, data, accounts)
