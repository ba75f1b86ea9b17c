"""Tests for the maintenance CLI."""

from contextlib import asynccontextmanager

import pytest
from typer.testing import CliRunner

from bms import maintenance
from bms.core.modules.counter.models import DocumentType, ScopeKey
from bms.errors import ValidationError

runner = CliRunner()


class FakeApp:
    """Records set_counter calls instead of talking to MongoDB."""

    calls: list[tuple[DocumentType, int, str | None]] = []
    error: Exception | None = None

    def __init__(self, config) -> None:
        self.config = config

    @asynccontextmanager
    async def lifespan(self):
        yield

    async def set_counter(self, document_type, value, year=None):
        if FakeApp.error is not None:
            raise FakeApp.error
        FakeApp.calls.append((document_type, value, year))
        resolved = year if document_type.is_year_scoped else None
        return ScopeKey(type=document_type, year=resolved)


@pytest.fixture(autouse=True)
def fake_app(monkeypatch):
    monkeypatch.setenv("BMS_DATABASE_URL", "mongodb://localhost:27017/bms")
    monkeypatch.setattr(maintenance, "App", FakeApp)
    monkeypatch.setattr(maintenance, "setup_logging", lambda debug: None)
    FakeApp.calls = []
    FakeApp.error = None
    return FakeApp


class TestSetCounterCommand:
    """Tests for the set-counter command."""

    def test_sets_year_scoped_counter(self):
        result = runner.invoke(maintenance.app, ["set-counter", "invoice", "120", "--year", "2024-25"])

        assert result.exit_code == 0, result.output
        assert FakeApp.calls == [(DocumentType.INVOICE, 120, "2024-25")]
        assert "invoice counter for 2024-25 set to 120" in result.output

    def test_sets_lifetime_counter(self):
        result = runner.invoke(maintenance.app, ["set-counter", "kit", "7"])

        assert result.exit_code == 0, result.output
        assert FakeApp.calls == [(DocumentType.KIT, 7, None)]
        assert "kit counter set to 7" in result.output

    def test_unknown_document_type_is_rejected(self):
        result = runner.invoke(maintenance.app, ["set-counter", "receipt", "1"])

        assert result.exit_code != 0
        assert FakeApp.calls == []

    def test_negative_value_is_rejected(self):
        result = runner.invoke(maintenance.app, ["set-counter", "bill", "--", "-3"])

        assert result.exit_code != 0
        assert FakeApp.calls == []

    def test_service_validation_error_exits_with_message(self):
        FakeApp.error = ValidationError("kit counters are not scoped by fiscal year")

        result = runner.invoke(maintenance.app, ["set-counter", "kit", "1", "--year", "2024-25"])

        assert result.exit_code == 1
        assert "not scoped by fiscal year" in result.output
