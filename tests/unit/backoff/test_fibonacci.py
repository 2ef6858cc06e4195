r"""Unit tests for FibonacciBackoff strategy."""

from __future__ import annotations

import math

import pytest

from aretry.backoff.fibonacci import FibonacciBackoff


def test_fibonacci_backoff_basic() -> None:
    """Test basic Fibonacci backoff calculation."""
    backoff = FibonacciBackoff(base_delay=1.0)
    assert [backoff.calculate(attempt) for attempt in range(1, 9)] == [
        1.0,
        1.0,
        2.0,
        3.0,
        5.0,
        8.0,
        13.0,
        21.0,
    ]


def test_fibonacci_backoff_base_delay() -> None:
    """Test Fibonacci backoff scales with base_delay."""
    backoff = FibonacciBackoff(base_delay=0.5)
    assert backoff.calculate(5) == 2.5


def test_fibonacci_backoff_with_max_delay() -> None:
    """Test Fibonacci backoff with max_delay cap."""
    backoff = FibonacciBackoff(base_delay=1.0, max_delay=10.0)
    assert backoff.calculate(6) == 8.0
    assert backoff.calculate(7) == 10.0  # Would be 13.0, but capped


@pytest.mark.parametrize(("n", "expected"), [(0, 0), (1, 1), (2, 1), (3, 2), (10, 55)])
def test_fibonacci_number(n: int, expected: int) -> None:
    """Test the Fibonacci number helper."""
    assert FibonacciBackoff._fibonacci(n) == expected


def test_fibonacci_backoff_invalid_base_delay() -> None:
    """Test that negative base_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"base_delay must be non-negative"):
        FibonacciBackoff(base_delay=-1.0)


def test_fibonacci_backoff_invalid_max_delay() -> None:
    """Test that non-positive max_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        FibonacciBackoff(max_delay=-2.0)


def test_fibonacci_backoff_large_attempt_with_max_delay() -> None:
    """Test the cap applies to Fibonacci numbers too large for a float."""
    backoff = FibonacciBackoff(base_delay=0.5, max_delay=30.0)
    assert backoff.calculate(10_000) == 30.0


def test_fibonacci_backoff_large_attempt_without_max_delay() -> None:
    assert FibonacciBackoff().calculate(2_000) == math.inf


def test_fibonacci_backoff_max_delay_below_base_delay() -> None:
    assert FibonacciBackoff(base_delay=2.0, max_delay=0.5).calculate(5) == 0.5


def test_fibonacci_backoff_zero_base_delay() -> None:
    assert FibonacciBackoff(base_delay=0.0).calculate(10_000) == 0.0


def test_fibonacci_number_limit() -> None:
    """Test the helper stops at the first number above the limit."""
    assert FibonacciBackoff._fibonacci(10_000, limit=10) == 13
