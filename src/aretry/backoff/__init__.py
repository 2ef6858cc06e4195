r"""Backoff schedules for retry delays.

This package provides the backoff schedules used by the retry
executors: finite sequences of durations, caller-supplied functions,
and the exponential (default), linear, Fibonacci and constant
strategies.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoff",
    "ConstantBackoff",
    "ContextualBackoff",
    "ExponentialBackoff",
    "FibonacciBackoff",
    "FunctionBackoff",
    "LinearBackoff",
    "SequenceBackoff",
    "as_backoff",
]

from aretry.backoff.base import BaseBackoff
from aretry.backoff.constant import ConstantBackoff
from aretry.backoff.exponential import ExponentialBackoff
from aretry.backoff.factory import as_backoff
from aretry.backoff.fibonacci import FibonacciBackoff
from aretry.backoff.function import ContextualBackoff, FunctionBackoff
from aretry.backoff.linear import LinearBackoff
from aretry.backoff.sequence import SequenceBackoff
