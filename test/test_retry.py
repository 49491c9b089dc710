#!/usr/bin/env python3
"""Tests for the bounded retry wrapper."""

from unittest.mock import AsyncMock, patch

import pytest

from root_relayer.errors import TransportError
from root_relayer.utils.retry import with_retry


@pytest.mark.asyncio
async def test_first_attempt_succeeds():
    operation = AsyncMock(return_value="sig")

    with patch("root_relayer.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        assert await with_retry(operation) == "sig"

    operation.assert_awaited_once()
    mock_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_fails_twice_then_succeeds():
    operation = AsyncMock(side_effect=[TransportError("one"), TransportError("two"), "sig"])

    with patch("root_relayer.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        result = await with_retry(operation)

    assert result == "sig"
    assert operation.await_count == 3
    assert [c.args[0] for c in mock_sleep.await_args_list] == [1.0, 1.0]


@pytest.mark.asyncio
async def test_always_failing_raises_last_error():
    errors = [TransportError("one"), TransportError("two"), TransportError("three")]
    operation = AsyncMock(side_effect=errors)

    with patch("root_relayer.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        with pytest.raises(TransportError, match="three") as exc_info:
            await with_retry(operation)

    assert exc_info.value is errors[2]
    assert operation.await_count == 3
    assert mock_sleep.await_count == 2


@pytest.mark.asyncio
async def test_custom_attempts_and_delay():
    operation = AsyncMock(side_effect=ValueError("nope"))

    with patch("root_relayer.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        with pytest.raises(ValueError):
            await with_retry(operation, attempts=5, delay=0.25)

    assert operation.await_count == 5
    assert [c.args[0] for c in mock_sleep.await_args_list] == [0.25] * 4


@pytest.mark.asyncio
async def test_real_sleep_between_attempts():
    """Fail, fail, succeed spends two delays sleeping."""
    operation = AsyncMock(side_effect=[RuntimeError(), RuntimeError(), 7])

    assert await with_retry(operation, delay=0.01) == 7


@pytest.mark.asyncio
async def test_rejects_zero_attempts():
    with pytest.raises(ValueError, match="at least 1"):
        await with_retry(AsyncMock(), attempts=0)
