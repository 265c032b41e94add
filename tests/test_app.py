"""Tests for the application entry point: logging, service wiring, and app creation."""

from __future__ import annotations

import inspect
import json
from pathlib import Path

import pytest
import structlog
from fastapi import FastAPI

from offerdesk.app import configure_logging, create_app, initialize_services, main
from offerdesk.config import Settings
from offerdesk.extraction import PlainTextExtractor
from offerdesk.llm import OfferParser
from offerdesk.tracking import OfferTracker


def _reset_structlog() -> None:
    """Reset structlog so cached loggers don't leak between tests."""
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def _settings(tmp_path: Path, **overrides) -> Settings:
    defaults = {"records_db_path": tmp_path / "data" / "offers.db"}
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)  # type: ignore[call-arg]


class TestConfigureLogging:
    """Tests for structlog configuration in dev and production modes."""

    def test_development_mode_uses_console_renderer(self) -> None:
        _reset_structlog()
        configure_logging(production=False)
        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, structlog.dev.ConsoleRenderer) for p in processors)

    def test_production_mode_uses_json_renderer(self) -> None:
        _reset_structlog()
        configure_logging(production=True)
        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, structlog.processors.JSONRenderer) for p in processors)

    def test_binds_service_name(self) -> None:
        _reset_structlog()
        configure_logging()
        assert structlog.contextvars.get_contextvars()["service"] == "offerdesk"
        _reset_structlog()

    def test_production_writes_json_lines_without_debug(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _reset_structlog()
        configure_logging(production=True)
        log = structlog.get_logger()

        log.debug("hidden_event")
        log.info("offer_scored", worth_score=55)

        lines = capsys.readouterr().out.strip().splitlines()
        _reset_structlog()
        assert len(lines) == 1
        event = json.loads(lines[0])
        assert event["event"] == "offer_scored"
        assert event["level"] == "info"
        assert event["service"] == "offerdesk"
        assert event["worth_score"] == 55
        assert "timestamp" in event


class TestInitializeServices:
    """Tests for service wiring."""

    def test_builds_all_services(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, parser_max_attempts=5)

        services = initialize_services(settings)
        try:
            assert services["settings"] is settings
            assert isinstance(services["tracker"], OfferTracker)
            assert isinstance(services["parser"], OfferParser)
            assert isinstance(services["extractor"], PlainTextExtractor)
            assert services["parser"]._max_attempts == 5
        finally:
            services["records_conn"].close()

    def test_creates_database_with_schema(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)

        services = initialize_services(settings)
        try:
            assert settings.records_db_path.exists()
            row = services["records_conn"].execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='offer_records'"
            ).fetchone()
            assert row is not None
        finally:
            services["records_conn"].close()


class TestCreateApp:
    def test_returns_fastapi_with_routes(self, tmp_path: Path) -> None:
        services = initialize_services(_settings(tmp_path))
        try:
            app = create_app(services)

            assert isinstance(app, FastAPI)
            assert app.state.services is services
            paths = {route.path for route in app.routes}
            assert {"/health", "/ready", "/parse/brief", "/evaluate", "/records"} <= paths
        finally:
            services["records_conn"].close()

    def test_main_is_coroutine(self) -> None:
        assert inspect.iscoroutinefunction(main)
