#!/usr/bin/env python3
"""Source ledger access for the root relayer.

Reads the leaf chunk account from the L2 ledger and extracts the roots
carried by the submission instruction.
"""

import logging

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey

from .errors import AccountNotFound, MalformedAccountData, TransportError, describe
from .models import ROOT_SIZE, ZERO_ROOT, RootPair, SourceSnapshot

logger = logging.getLogger(__name__)

# Leaf chunk layout: 8-byte account discriminator followed by the tree root
TREE_ROOT_OFFSET = 8
MIN_ACCOUNT_SIZE = TREE_ROOT_OFFSET + ROOT_SIZE


def extract_roots(raw_bytes: bytes) -> RootPair:
    """Extract the root pair from leaf chunk account data.

    The state root is a fixed zero placeholder until a world state source
    exists.

    Raises:
        MalformedAccountData: If the data is shorter than 40 bytes
    """
    if len(raw_bytes) < MIN_ACCOUNT_SIZE:
        raise MalformedAccountData(len(raw_bytes), MIN_ACCOUNT_SIZE)

    return RootPair(
        tree_root=bytes(raw_bytes[TREE_ROOT_OFFSET:MIN_ACCOUNT_SIZE]),
        state_root=ZERO_ROOT,
    )


class StateReader:
    """Reads account state from the source ledger."""

    def __init__(self, client: AsyncClient) -> None:
        """
        Initialize the StateReader.

        Args:
            client: RPC client connected to the source ledger
        """
        self.client = client

    async def read(self, address: Pubkey) -> SourceSnapshot:
        """
        Read an account at confirmed commitment.

        The slot comes from the response context of the same call, so it is
        the slot the returned bytes were observed at.

        Args:
            address: Account to read

        Returns:
            Account bytes and observed slot

        Raises:
            AccountNotFound: If the account does not exist
            TransportError: If the RPC call fails
        """
        try:
            response = await self.client.get_account_info(address, commitment=Confirmed)
        except (SolanaRpcException, RPCException, ValueError) as e:
            raise TransportError(f"Failed to read account {address}: {describe(e)}") from e

        if (account := response.value) is None:
            raise AccountNotFound(str(address))

        slot = response.context.slot
        logger.debug(f"Read {len(account.data)} bytes from {address} at slot {slot}")
        return SourceSnapshot(raw_bytes=bytes(account.data), observed_slot=slot)
