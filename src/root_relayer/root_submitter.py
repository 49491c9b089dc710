#!/usr/bin/env python3
"""Roots submission to the destination ledger.

This module signs the roots instruction with the relayer wallet, sends it to
the L1 ledger and waits for confirmation.
"""

import logging

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import (
    RPCException,
    TransactionExpiredBlockheightExceededError,
    UnconfirmedTxError,
)
from solana.rpc.types import TxOpts
from solders.errors import SignerError
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.signature import Signature
from solders.transaction import Transaction

from .errors import ConfirmationError, SubmissionError, TransportError, describe

logger = logging.getLogger(__name__)


class RootSubmitter:
    """Handles roots submission to the destination program."""

    def __init__(self, client: AsyncClient, wallet: Keypair) -> None:
        """
        Initialize the RootSubmitter.

        Args:
            client: RPC client connected to the destination ledger
            wallet: Fee payer and sole signer
        """
        self.client: AsyncClient = client
        self.wallet: Keypair = wallet
        logger.info(f"RootSubmitter initialized with payer {wallet.pubkey()}")

    def sign(self, instruction: Instruction, blockhash: Hash) -> Transaction:
        """
        Build and sign a single-instruction transaction paid by the wallet.

        Raises:
            SubmissionError: If the transaction cannot be built or signed
        """
        try:
            message = Message.new_with_blockhash([instruction], self.wallet.pubkey(), blockhash)
            transaction = Transaction.new_unsigned(message)
            transaction.sign([self.wallet], blockhash)
        except (SignerError, ValueError) as e:
            raise SubmissionError(f"Failed to sign transaction: {describe(e)}") from e
        return transaction

    async def submit(self, instruction: Instruction) -> Signature:
        """
        Submit an instruction and block until it is confirmed.

        There is no idempotency key: a transaction that lands but whose
        confirmation is lost looks exactly like a failure to the caller.

        Args:
            instruction: The roots instruction

        Returns:
            Signature of the confirmed transaction

        Raises:
            TransportError: If an RPC call fails in transit
            SubmissionError: If signing fails or the node rejects the transaction
            ConfirmationError: If the transaction does not confirm successfully
        """
        try:
            latest = await self.client.get_latest_blockhash(commitment=Confirmed)
        except (SolanaRpcException, RPCException, ValueError) as e:
            raise TransportError(f"Failed to fetch latest blockhash: {describe(e)}") from e

        blockhash = latest.value.blockhash
        transaction = self.sign(instruction, blockhash)
        logger.debug(f"Sending transaction with blockhash {blockhash}")

        try:
            response = await self.client.send_transaction(
                transaction, opts=TxOpts(preflight_commitment=Confirmed)
            )
        except (SolanaRpcException, ValueError) as e:
            raise TransportError(f"Failed to send transaction: {describe(e)}") from e
        except RPCException as e:
            raise SubmissionError(f"Transaction rejected: {describe(e)}") from e

        signature = response.value
        logger.info(f"Transaction sent: {signature}")

        try:
            confirmation = await self.client.confirm_transaction(
                signature,
                commitment=Confirmed,
                last_valid_block_height=latest.value.last_valid_block_height,
            )
        except (UnconfirmedTxError, TransactionExpiredBlockheightExceededError) as e:
            raise ConfirmationError(f"Transaction {signature} not confirmed: {describe(e)}") from e
        except (SolanaRpcException, RPCException, ValueError) as e:
            raise TransportError(f"Failed to confirm transaction {signature}: {describe(e)}") from e

        match confirmation.value:
            case [status, *_] if status is not None and status.err is not None:
                raise ConfirmationError(f"Transaction {signature} failed: {status.err}")
            case [None, *_] | []:
                raise ConfirmationError(f"Transaction {signature} has no status")

        return signature
