"""Tests for configuration validation."""

import pytest
from pydantic import ValidationError

from bms.config import Config


def test_defaults(monkeypatch):
    monkeypatch.delenv("BMS_SEQUENCE_MAX_ATTEMPTS", raising=False)
    config = Config(database_url="mongodb://localhost:27017/bms")
    assert config.sequence_max_attempts == 3
    assert config.sequence_backoff_ms == 100


def test_zero_attempts_fail_at_startup():
    with pytest.raises(ValidationError, match="sequence_max_attempts"):
        Config(database_url="mongodb://localhost:27017/bms", sequence_max_attempts=0)


def test_attempts_from_environment_are_validated(monkeypatch):
    monkeypatch.setenv("BMS_SEQUENCE_MAX_ATTEMPTS", "0")
    with pytest.raises(ValidationError):
        Config(database_url="mongodb://localhost:27017/bms")


def test_negative_backoff_rejected():
    with pytest.raises(ValidationError, match="sequence_backoff_ms"):
        Config(database_url="mongodb://localhost:27017/bms", sequence_backoff_ms=-1)
