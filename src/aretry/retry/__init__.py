r"""Retry package implementing class-based composition pattern.

This package provides a modular retry execution system using composition
and strategy patterns.

Public API:
    - RetryConfig: Configuration for retry behavior
    - CallbackConfig: Configuration for callbacks
    - RetryStrategy: Strategy for calculating retry delays
    - RetryDecider: Logic for deciding whether to retry
    - CallbackManager: Manager for callback invocations
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
    - RetryOutcome: Outcome of an execution
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "CallbackConfig",
    "CallbackManager",
    "OutcomeStatus",
    "RetryConfig",
    "RetryDecider",
    "RetryDecision",
    "RetryExecutor",
    "RetryOutcome",
    "RetryStrategy",
]

from aretry.retry.config import CallbackConfig, RetryConfig
from aretry.retry.decider import RetryDecider, RetryDecision
from aretry.retry.executor import RetryExecutor
from aretry.retry.executor_async import AsyncRetryExecutor
from aretry.retry.manager import CallbackManager
from aretry.retry.outcome import OutcomeStatus, RetryOutcome
from aretry.retry.strategy import RetryStrategy
