"""
Root Relayer implementation.

This module contains the relayer service that reads the tree root from the
L2 ledger once per interval and republishes it to the roots program on L1.
"""

import logging
from typing import Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed

from .config import RelayerConfig
from .errors import CycleError
from .models import CycleContext, CycleReport
from .root_submitter import RootSubmitter
from .state_reader import StateReader, extract_roots
from .utils.periodic_timer import PeriodicTimer
from .utils.retry import with_retry
from .utils.roots_encoder import build_instruction, build_instruction_data, derive_roots_address
from .wallet import load_wallet

logger = logging.getLogger(__name__)


class RootRelayer:
    """
    Relay service driving one read-derive-submit cycle per tick.

    Cycles run strictly one after another. A failed cycle is logged and the
    next tick proceeds as if it had succeeded; nothing carries over between
    cycles except the immutable CycleContext.
    """

    def __init__(
        self,
        context: CycleContext,
        source_client: AsyncClient,
        destination_client: AsyncClient,
        timer: Optional[PeriodicTimer] = None,
    ):
        """
        Initialize the Root Relayer.

        Args:
            context: Read-only cycle inputs
            source_client: RPC client for the L2 ledger
            destination_client: RPC client for the L1 ledger
            timer: Tick source; defaults to a PeriodicTimer on the configured interval
        """
        self.context = context
        self.source_client = source_client
        self.destination_client = destination_client
        self.running = False

        self.state_reader = StateReader(source_client)
        self.submitter = RootSubmitter(destination_client, context.wallet)
        self.timer = timer or PeriodicTimer(context.check_interval_secs)

        if context.retry_submission:
            logger.warning(
                "Submission retry enabled: a lost confirmation can cause the same slot "
                "to be submitted more than once"
            )

    @classmethod
    def from_config(cls, config: RelayerConfig) -> "RootRelayer":
        """
        Create a RootRelayer from configuration, loading the wallet.

        Raises:
            WalletError: If the wallet file cannot be loaded
        """
        wallet = load_wallet(config.wallet.wallet_path)
        context = config.build_context(wallet)

        source_client = AsyncClient(config.network.l2_rpc_url, commitment=Confirmed)
        destination_client = AsyncClient(config.network.l1_rpc_url, commitment=Confirmed)

        logger.info(f"Initialized relayer with payer {context.wallet_address}")
        return cls(context, source_client, destination_client)

    @classmethod
    def from_file(cls, path: Optional[str] = None) -> "RootRelayer":
        """
        Create a RootRelayer from a TOML configuration file.

        Raises:
            ConfigError: If the configuration is missing or invalid
            WalletError: If the wallet file cannot be loaded
        """
        config = RelayerConfig.from_file(path)
        config.log_config()
        return cls.from_config(config)

    async def run_cycle(self) -> CycleReport:
        """
        Run one relay cycle: read, extract, derive, build, submit.

        Returns:
            Report of the confirmed submission

        Raises:
            CycleError: If any step fails; nothing is retained from the failed cycle
        """
        ctx = self.context

        snapshot = await self.state_reader.read(ctx.leaf_chunk_address)
        roots = extract_roots(snapshot.raw_bytes)
        slot = snapshot.observed_slot

        logger.info(f"Merkle tree root from L2: 0x{roots.tree_root.hex()}")
        logger.info(f"World state root (fixed): 0x{roots.state_root.hex()}")
        logger.info(f"Current slot: {slot}")

        roots_address = derive_roots_address(slot, ctx.program_id)
        instruction = build_instruction(
            program_id=ctx.program_id,
            slots_account=ctx.slots_account,
            roots_address=roots_address,
            payer=ctx.wallet_address,
            data=build_instruction_data(slot, roots.tree_root, roots.state_root),
        )

        if ctx.retry_submission:
            signature = await with_retry(lambda: self.submitter.submit(instruction))
        else:
            signature = await self.submitter.submit(instruction)

        logger.info(f"Transaction confirmed: {signature}")
        report = CycleReport(slot=slot, roots=roots, roots_address=roots_address, signature=signature)
        logger.debug(f"Cycle complete: {report}")
        return report

    async def _guarded_cycle(self) -> Optional[CycleReport]:
        """Run a cycle, logging instead of raising on failure."""
        try:
            return await self.run_cycle()
        except CycleError as e:
            logger.error(f"Error: {e}")
        except Exception as e:
            logger.error(f"Unexpected error in relay cycle: {e}", exc_info=True)
        return None

    async def run(self) -> None:
        """Main loop: one cycle per tick until stopped."""
        self.running = True
        logger.info("Root Relayer starting...")
        logger.info(f"Check interval: {self.context.check_interval_secs}s")

        try:
            while self.running:
                await self.timer.tick()
                if not self.running:
                    break
                await self._guarded_cycle()
        finally:
            await self.close()
            logger.info("Root Relayer stopped")

    def stop(self) -> None:
        """Stop the relayer after the current wait or cycle."""
        self.running = False

    async def close(self) -> None:
        """Close both RPC clients."""
        await self.source_client.close()
        await self.destination_client.close()
