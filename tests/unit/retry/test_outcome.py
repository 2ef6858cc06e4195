r"""Unit tests for the execution outcome."""

from __future__ import annotations

import dataclasses

import pytest

from aretry.retry import OutcomeStatus, RetryOutcome


def test_retry_outcome_success() -> None:
    outcome = RetryOutcome.success("value", attempts=2)
    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.succeeded
    assert outcome.result == "value"
    assert outcome.error is None
    assert outcome.attempts == 2
    assert outcome.unwrap() == "value"


def test_retry_outcome_exhausted() -> None:
    error = ValueError("boom")
    outcome = RetryOutcome.exhausted(error, attempts=3)
    assert outcome.status is OutcomeStatus.EXHAUSTED
    assert not outcome.succeeded
    assert outcome.result is None
    assert outcome.error is error
    assert outcome.attempts == 3


def test_retry_outcome_exhausted_unwrap_raises() -> None:
    outcome = RetryOutcome.exhausted(ValueError("boom"), attempts=3)
    with pytest.raises(ValueError, match=r"boom"):
        outcome.unwrap()


def test_retry_outcome_is_frozen() -> None:
    outcome = RetryOutcome.success(1, attempts=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        outcome.attempts = 2  # type: ignore[misc]
