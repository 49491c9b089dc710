#!/usr/bin/env python3
"""Unit tests for the state reader and root extraction."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from solana.exceptions import SolanaRpcException
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey

from root_relayer.errors import AccountNotFound, MalformedAccountData, TransportError
from root_relayer.models import ZERO_ROOT
from root_relayer.state_reader import StateReader, extract_roots

LEAF_CHUNK = Pubkey(bytes([2] * 32))


class ConnectionRefused(SolanaRpcException):
    """SolanaRpcException without the request-introspecting constructor."""

    def __init__(self) -> None:
        Exception.__init__(self, "connection refused")
        self.error_msg = "connection refused"


def account_response(data: bytes | None, slot: int) -> MagicMock:
    response = MagicMock()
    response.context.slot = slot
    if data is None:
        response.value = None
    else:
        response.value = MagicMock(data=data)
    return response


class TestExtractRoots:
    """Tests for extract_roots."""

    @pytest.mark.parametrize("length", [0, 1, 8, 39])
    def test_short_data_is_malformed(self, length):
        with pytest.raises(MalformedAccountData) as exc_info:
            extract_roots(bytes(length))

        assert exc_info.value.length == length
        assert exc_info.value.required == 40

    def test_exactly_forty_bytes(self):
        raw = bytes([0xAA] * 8) + bytes([0x01] * 32)

        roots = extract_roots(raw)

        assert roots.tree_root == bytes([0x01] * 32)
        assert roots.state_root == ZERO_ROOT

    def test_trailing_bytes_are_ignored(self):
        raw = bytes([0xFF] * 8) + bytes(range(32)) + b"trailing leaf data"

        roots = extract_roots(raw)

        assert roots.tree_root == bytes(range(32))
        assert roots.state_root == bytes(32)

    def test_state_root_is_zero_regardless_of_content(self):
        raw = bytes([0xFF] * 200)
        assert extract_roots(raw).state_root == bytes(32)


class TestStateReader:
    """Tests for StateReader."""

    @pytest.mark.asyncio
    async def test_read_returns_bytes_and_context_slot(self):
        client = MagicMock()
        client.get_account_info = AsyncMock(return_value=account_response(b"\x01" * 40, 100))

        snapshot = await StateReader(client).read(LEAF_CHUNK)

        assert snapshot.raw_bytes == b"\x01" * 40
        assert snapshot.observed_slot == 100
        client.get_account_info.assert_awaited_once_with(LEAF_CHUNK, commitment=Confirmed)

    @pytest.mark.asyncio
    async def test_missing_account(self):
        client = MagicMock()
        client.get_account_info = AsyncMock(return_value=account_response(None, 100))

        with pytest.raises(AccountNotFound, match=str(LEAF_CHUNK)):
            await StateReader(client).read(LEAF_CHUNK)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [ConnectionRefused(), RPCException("node is behind"), ValueError("bad json")],
    )
    async def test_rpc_failure_is_transport_error(self, error):
        client = MagicMock()
        client.get_account_info = AsyncMock(side_effect=error)

        with pytest.raises(TransportError, match="Failed to read account") as exc_info:
            await StateReader(client).read(LEAF_CHUNK)

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_transport_error_message(self):
        client = MagicMock()
        client.get_account_info = AsyncMock(side_effect=ConnectionRefused())

        with pytest.raises(TransportError, match="connection refused"):
            await StateReader(client).read(LEAF_CHUNK)
