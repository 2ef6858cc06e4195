r"""Unit tests for the blocking entry points."""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from unittest.mock import Mock, call

import pytest

from aretry import (
    Context,
    ExceptionFilter,
    ExhaustionPolicy,
    HookError,
    OutcomeStatus,
    RetryExhaustedError,
    execute_bounded,
    execute_forever,
)
from aretry.backoff import ExponentialBackoff, FibonacciBackoff


class TransientError(Exception):
    pass


class FatalError(Exception):
    pass


#####################################
#     Tests for execute_bounded     #
#####################################


def test_execute_bounded_success(mock_sleep: Mock, mock_callback: Mock) -> None:
    outcome = execute_bounded(lambda: 42, TransientError, on_retry=mock_callback)
    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.result == 42
    assert outcome.attempts == 1
    mock_callback.assert_not_called()


def test_execute_bounded_default_backoff_is_three_to_the_attempt(mock_sleep: Mock) -> None:
    outcome = execute_bounded(
        Mock(side_effect=TransientError()), TransientError, on_retry=Mock(), on_failure=Mock()
    )
    assert outcome.attempts == 4
    assert mock_sleep.call_args_list == [call(3.0), call(9.0), call(27.0)]


def test_execute_bounded_sequence_caps_retry_count(mock_sleep: Mock, mock_callback: Mock) -> None:
    operation = Mock(side_effect=TransientError())
    outcome = execute_bounded(
        operation,
        ExceptionFilter.handle(TransientError),
        backoff=[1, 2],
        retry_count=5,
        on_retry=mock_callback,
        on_failure=Mock(),
    )
    assert outcome.status is OutcomeStatus.EXHAUSTED
    assert outcome.attempts == 3
    assert [c.args[0].delay for c in mock_callback.call_args_list] == [1.0, 2.0]
    assert mock_sleep.call_args_list == [call(1.0), call(2.0)]


def test_execute_bounded_sequence_of_timedeltas(mock_sleep: Mock) -> None:
    execute_bounded(
        Mock(side_effect=[TransientError(), "ok"]),
        TransientError,
        backoff=[timedelta(milliseconds=500)],
        on_retry=Mock(),
    )
    mock_sleep.assert_called_once_with(0.5)


def test_execute_bounded_retry_count_two(mock_sleep: Mock) -> None:
    on_retry = Mock()
    on_failure = Mock()
    errors = [TransientError("1"), TransientError("2"), TransientError("3")]
    outcome = execute_bounded(
        Mock(side_effect=errors),
        TransientError,
        backoff=lambda attempt: 0.0,
        retry_count=2,
        on_retry=on_retry,
        on_failure=on_failure,
    )
    assert outcome.attempts == 3
    assert outcome.error is errors[2]
    assert on_retry.call_count == 2
    on_failure.assert_called_once()
    assert on_failure.call_args.args[0].error is errors[2]


def test_execute_bounded_function_backoff(mock_sleep: Mock) -> None:
    execute_bounded(
        Mock(side_effect=[TransientError(), TransientError(), "ok"]),
        TransientError,
        backoff=lambda attempt: attempt * 0.5,
        on_retry=Mock(),
    )
    assert mock_sleep.call_args_list == [call(0.5), call(1.0)]


def test_execute_bounded_contextual_backoff(mock_sleep: Mock) -> None:
    seen = []

    def backoff(attempt: int, error: BaseException, context: Context) -> float:
        seen.append((attempt, type(error), context.operation_key))
        return 0.25

    execute_bounded(
        Mock(side_effect=[TransientError(), "ok"]),
        TransientError,
        backoff=backoff,
        on_retry=Mock(),
        operation_key="sync",
    )
    assert seen == [(1, TransientError, "sync")]
    mock_sleep.assert_called_once_with(0.25)


def test_execute_bounded_classifier_function(mock_sleep: Mock) -> None:
    operation = Mock(side_effect=[TransientError("retry me"), TransientError("fatal")])
    with pytest.raises(TransientError, match=r"fatal"):
        execute_bounded(
            operation,
            lambda exc: str(exc) == "retry me",
            backoff=[0],
            retry_count=3,
            on_retry=Mock(),
        )
    assert operation.call_count == 2


def test_execute_bounded_fatal_failure_bypasses_hooks(mock_sleep: Mock) -> None:
    on_retry = Mock()
    on_failure = Mock()
    with pytest.raises(FatalError):
        execute_bounded(
            Mock(side_effect=FatalError()),
            TransientError,
            on_retry=on_retry,
            on_failure=on_failure,
        )
    on_retry.assert_not_called()
    on_failure.assert_not_called()
    mock_sleep.assert_not_called()


def test_execute_bounded_exhaustion_raise(mock_sleep: Mock) -> None:
    on_failure = Mock()
    with pytest.raises(RetryExhaustedError):
        execute_bounded(
            Mock(side_effect=TransientError()),
            TransientError,
            backoff=[0, 0],
            on_retry=Mock(),
            on_failure=on_failure,
            exhaustion=ExhaustionPolicy.RAISE,
        )
    on_failure.assert_called_once()


def test_execute_bounded_hook_error(mock_sleep: Mock) -> None:
    with pytest.raises(HookError):
        execute_bounded(
            Mock(side_effect=TransientError()),
            TransientError,
            on_retry=Mock(side_effect=RuntimeError()),
        )


def test_execute_bounded_nan_delay(mock_sleep: Mock) -> None:
    on_retry = Mock()
    with pytest.raises(ValueError, match=r"delay must be finite, got nan \(attempt 1\)"):
        execute_bounded(
            Mock(side_effect=TransientError()),
            TransientError,
            backoff=lambda attempt: math.nan,
            retry_count=1,
            on_retry=on_retry,
        )
    on_retry.assert_not_called()
    mock_sleep.assert_not_called()


def test_execute_bounded_coroutine_hook(mock_sleep: Mock) -> None:
    async def on_retry(info: object) -> None:
        pass

    with pytest.raises(HookError, match=r"on_retry hook failed on attempt 1") as exc_info:
        execute_bounded(Mock(side_effect=TransientError()), TransientError, on_retry=on_retry)
    assert isinstance(exc_info.value.__cause__, TypeError)
    mock_sleep.assert_not_called()


def test_execute_bounded_negative_retry_count() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        execute_bounded(Mock(), TransientError, retry_count=-1)


def test_execute_bounded_invalid_filter() -> None:
    with pytest.raises(TypeError, match=r"cannot build an exception filter"):
        execute_bounded(Mock(), 42)


def test_execute_bounded_invalid_backoff() -> None:
    with pytest.raises(TypeError, match=r"cannot build a backoff schedule"):
        execute_bounded(Mock(), TransientError, backoff="fast")


def test_execute_bounded_default_hooks_log_errors(
    mock_sleep: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.ERROR, logger="aretry.callbacks"):
        outcome = execute_bounded(
            Mock(side_effect=TransientError("down")),
            TransientError,
            backoff=[0.0],
            context={"order": 7},
            operation_key="sync",
        )
    assert outcome.status is OutcomeStatus.EXHAUSTED
    records = [r for r in caplog.records if r.name == "aretry.callbacks"]
    assert len(records) == 2
    assert all(r.levelno == logging.ERROR for r in records)
    assert records[0].attempt == 1
    assert records[0].delay == 0.0
    assert '"order": 7' in records[0].context
    assert records[1].attempt == 2
    assert records[1].total_time >= 0.0


#####################################
#     Tests for execute_forever     #
#####################################


def test_execute_forever_success_after_failures(mock_sleep: Mock, mock_callback: Mock) -> None:
    operation = Mock(side_effect=[TransientError()] * 7 + ["ok"])
    outcome = execute_forever(operation, TransientError, backoff=[0], on_retry=mock_callback)
    assert outcome.succeeded
    assert outcome.result == "ok"
    assert outcome.attempts == 8
    assert mock_callback.call_count == 7


def test_execute_forever_sequence_reuses_last_duration(mock_sleep: Mock) -> None:
    execute_forever(
        Mock(side_effect=[TransientError()] * 4 + ["ok"]),
        TransientError,
        backoff=[1, 2],
        on_retry=Mock(),
    )
    assert mock_sleep.call_args_list == [call(1.0), call(2.0), call(2.0), call(2.0)]


def test_execute_forever_empty_sequence(mock_sleep: Mock) -> None:
    with pytest.raises(ValueError, match=r"empty sequence"):
        execute_forever(
            Mock(side_effect=TransientError()), TransientError, backoff=[], on_retry=Mock()
        )


def test_execute_forever_fatal_failure(mock_sleep: Mock, mock_callback: Mock) -> None:
    fatal = FatalError()
    with pytest.raises(FatalError) as exc_info:
        execute_forever(
            Mock(side_effect=[TransientError(), fatal]),
            TransientError,
            on_retry=mock_callback,
        )
    assert exc_info.value is fatal
    mock_callback.assert_called_once()


def test_execute_forever_capped_exponential_long_outage(mock_sleep: Mock) -> None:
    """Test a capped exponential schedule keeps working past the attempt
    where the uncapped power no longer fits in a float."""
    on_retry = Mock()
    outcome = execute_forever(
        Mock(side_effect=[TransientError()] * 750 + ["ok"]),
        TransientError,
        backoff=ExponentialBackoff(max_delay=1.0),
        on_retry=on_retry,
    )
    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.attempts == 751
    assert on_retry.call_count == 750
    assert mock_sleep.call_args_list[-1] == call(1.0)


def test_execute_forever_capped_fibonacci_long_outage(mock_sleep: Mock) -> None:
    outcome = execute_forever(
        Mock(side_effect=[TransientError()] * 1500 + ["ok"]),
        TransientError,
        backoff=FibonacciBackoff(max_delay=5.0),
        on_retry=Mock(),
    )
    assert outcome.attempts == 1501
    assert mock_sleep.call_args_list[-1] == call(5.0)


def test_execute_forever_uncapped_overflow(mock_sleep: Mock) -> None:
    """Test an uncapped schedule outgrowing a float ends with a clear
    ValueError."""
    with pytest.raises(ValueError, match=r"delay must be finite, got inf"):
        execute_forever(
            Mock(side_effect=TransientError()),
            TransientError,
            backoff=ExponentialBackoff(),
            on_retry=Mock(),
        )
