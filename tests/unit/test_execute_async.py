r"""Unit tests for the async entry points."""

from __future__ import annotations

import inspect
from unittest.mock import AsyncMock, Mock, call

import pytest

from aretry import (
    ExceptionFilter,
    ExhaustionPolicy,
    OutcomeStatus,
    RetryExhaustedError,
    execute_bounded_async,
    execute_forever_async,
)
from aretry.backoff import ExponentialBackoff
from aretry.callbacks import RetryInfo


class TransientError(Exception):
    pass


class FatalError(Exception):
    pass


def test_entry_points_are_coroutine_functions() -> None:
    assert inspect.iscoroutinefunction(execute_bounded_async)
    assert inspect.iscoroutinefunction(execute_forever_async)


###########################################
#     Tests for execute_bounded_async     #
###########################################


@pytest.mark.asyncio
async def test_execute_bounded_async_success(mock_asleep: AsyncMock) -> None:
    outcome = await execute_bounded_async(AsyncMock(return_value="ok"), TransientError)
    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.result == "ok"
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_execute_bounded_async_default_backoff(mock_asleep: AsyncMock) -> None:
    outcome = await execute_bounded_async(
        AsyncMock(side_effect=TransientError()),
        ExceptionFilter.handle(TransientError),
        on_retry=Mock(),
        on_failure=Mock(),
    )
    assert outcome.status is OutcomeStatus.EXHAUSTED
    assert outcome.attempts == 4
    assert mock_asleep.call_args_list == [call(3.0), call(9.0), call(27.0)]


@pytest.mark.asyncio
async def test_execute_bounded_async_sequence(mock_asleep: AsyncMock) -> None:
    on_retry = Mock()
    on_failure = Mock()
    outcome = await execute_bounded_async(
        AsyncMock(side_effect=TransientError()),
        TransientError,
        backoff=[1, 2],
        retry_count=5,
        on_retry=on_retry,
        on_failure=on_failure,
    )
    assert outcome.attempts == 3
    assert on_retry.call_count == 2
    on_failure.assert_called_once()


@pytest.mark.asyncio
async def test_execute_bounded_async_coroutine_hook(mock_asleep: AsyncMock) -> None:
    attempts = []

    async def on_retry(info: RetryInfo) -> None:
        attempts.append(info.attempt)

    await execute_bounded_async(
        AsyncMock(side_effect=[TransientError(), TransientError(), "ok"]),
        TransientError,
        on_retry=on_retry,
    )
    assert attempts == [1, 2]


@pytest.mark.asyncio
async def test_execute_bounded_async_fatal(mock_asleep: AsyncMock) -> None:
    on_retry = Mock()
    with pytest.raises(FatalError):
        await execute_bounded_async(
            AsyncMock(side_effect=FatalError()), TransientError, on_retry=on_retry
        )
    on_retry.assert_not_called()


@pytest.mark.asyncio
async def test_execute_bounded_async_exhaustion_raise(mock_asleep: AsyncMock) -> None:
    with pytest.raises(RetryExhaustedError):
        await execute_bounded_async(
            AsyncMock(side_effect=TransientError()),
            TransientError,
            retry_count=0,
            on_failure=Mock(),
            exhaustion=ExhaustionPolicy.RAISE,
        )


@pytest.mark.asyncio
async def test_execute_bounded_async_negative_retry_count() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0"):
        await execute_bounded_async(AsyncMock(), TransientError, retry_count=-2)


###########################################
#     Tests for execute_forever_async     #
###########################################


@pytest.mark.asyncio
async def test_execute_forever_async_success_after_failures(mock_asleep: AsyncMock) -> None:
    on_retry = Mock()
    outcome = await execute_forever_async(
        AsyncMock(side_effect=[TransientError()] * 5 + ["ok"]),
        TransientError,
        backoff=[0.5],
        on_retry=on_retry,
    )
    assert outcome.result == "ok"
    assert outcome.attempts == 6
    assert on_retry.call_count == 5
    assert mock_asleep.call_args_list == [call(0.5)] * 5


@pytest.mark.asyncio
async def test_execute_forever_async_fatal(mock_asleep: AsyncMock) -> None:
    with pytest.raises(FatalError):
        await execute_forever_async(
            AsyncMock(side_effect=[TransientError(), FatalError()]),
            TransientError,
            on_retry=Mock(),
        )


@pytest.mark.asyncio
async def test_execute_forever_async_capped_exponential_long_outage(
    mock_asleep: AsyncMock,
) -> None:
    outcome = await execute_forever_async(
        AsyncMock(side_effect=[TransientError()] * 750 + ["ok"]),
        TransientError,
        backoff=ExponentialBackoff(max_delay=2.0),
        on_retry=Mock(),
    )
    assert outcome.attempts == 751
    assert mock_asleep.call_args_list[-1] == call(2.0)
