"""
Submission settings.

The ledger-close interval is the polling cadence for finality. It is a
network parameter (XRPL closes a ledger roughly every 3-5 seconds), so
it is tunable rather than hardwired into the polling logic.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

# Environment variable names read by SubmissionConfig.from_env().
ENV_LEDGER_CLOSE_INTERVAL = "RELIABLE_LEDGER_CLOSE_INTERVAL"
ENV_MAX_LEDGER_OFFSET = "RELIABLE_LEDGER_MAX_OFFSET"
ENV_REQUEST_TIMEOUT = "RELIABLE_LEDGER_REQUEST_TIMEOUT"


@dataclass(frozen=True)
class SubmissionConfig:
    """Tunables for submission and finality polling.

    Attributes:
        ledger_close_interval: Seconds to sleep between status polls.
        max_ledger_offset: Ledgers past the latest validated one that a
            new transaction stays includable (sets LastLedgerSequence).
        request_timeout: Per-request HTTP timeout in seconds.
    """

    ledger_close_interval: float = 4.0
    max_ledger_offset: int = 10
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.ledger_close_interval <= 0:
            raise ValueError(
                f"ledger_close_interval must be > 0, got: {self.ledger_close_interval}"
            )
        if self.max_ledger_offset < 1:
            raise ValueError(
                f"max_ledger_offset must be >= 1, got: {self.max_ledger_offset}"
            )
        if self.request_timeout <= 0:
            raise ValueError(
                f"request_timeout must be > 0, got: {self.request_timeout}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SubmissionConfig:
        """Build a config from environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set but not a valid number.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, float | int] = {}
        if ENV_LEDGER_CLOSE_INTERVAL in env:
            kwargs["ledger_close_interval"] = float(env[ENV_LEDGER_CLOSE_INTERVAL])
        if ENV_MAX_LEDGER_OFFSET in env:
            kwargs["max_ledger_offset"] = int(env[ENV_MAX_LEDGER_OFFSET])
        if ENV_REQUEST_TIMEOUT in env:
            kwargs["request_timeout"] = float(env[ENV_REQUEST_TIMEOUT])
        return cls(**kwargs)  # type: ignore[arg-type]


DEFAULT_CONFIG = SubmissionConfig()
