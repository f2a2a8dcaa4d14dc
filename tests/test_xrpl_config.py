"""
Tests for SubmissionConfig.

Test plan:
- Defaults: 4 second interval, offset 10, 30 second timeout
- Validation: non-positive interval/timeout and offset < 1 rejected
- from_env: reads overrides, unset keeps defaults, bad numbers rejected
- Frozen
"""

import dataclasses

import pytest

from reliable_ledger.xrpl.config import (
    ENV_LEDGER_CLOSE_INTERVAL,
    ENV_MAX_LEDGER_OFFSET,
    ENV_REQUEST_TIMEOUT,
    SubmissionConfig,
)


class TestDefaults:
    def test_values(self) -> None:
        config = SubmissionConfig()
        assert config.ledger_close_interval == 4.0
        assert config.max_ledger_offset == 10
        assert config.request_timeout == 30.0

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            SubmissionConfig().ledger_close_interval = 1.0  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"ledger_close_interval": 0},
            {"ledger_close_interval": -1.0},
            {"max_ledger_offset": 0},
            {"request_timeout": 0},
        ],
    )
    def test_rejected(self, kwargs: dict[str, float]) -> None:
        with pytest.raises(ValueError):
            SubmissionConfig(**kwargs)  # type: ignore[arg-type]


class TestFromEnv:
    def test_empty_env_uses_defaults(self) -> None:
        assert SubmissionConfig.from_env({}) == SubmissionConfig()

    def test_overrides(self) -> None:
        config = SubmissionConfig.from_env({
            ENV_LEDGER_CLOSE_INTERVAL: "1.5",
            ENV_MAX_LEDGER_OFFSET: "20",
            ENV_REQUEST_TIMEOUT: "5",
        })
        assert config == SubmissionConfig(
            ledger_close_interval=1.5, max_ledger_offset=20, request_timeout=5.0
        )

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_LEDGER_CLOSE_INTERVAL, "2")
        assert SubmissionConfig.from_env().ledger_close_interval == 2.0

    def test_bad_number(self) -> None:
        with pytest.raises(ValueError):
            SubmissionConfig.from_env({ENV_MAX_LEDGER_OFFSET: "ten"})
