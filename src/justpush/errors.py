"""Exception types shared by the JustPush client and commands."""

from __future__ import annotations

from typing import Any, Optional


class JustPushError(RuntimeError):
    exit_code: int = 1


class ConfigError(JustPushError, ValueError):
    """Required configuration is missing or unusable."""

    exit_code = 3


class TronError(JustPushError):
    """The TRON node rejected a request or a contract call reverted."""

    exit_code = 4


class TransactionFailedError(TronError):
    exit_code = 5

    def __init__(self, message: str, receipt: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.receipt = receipt or {}
