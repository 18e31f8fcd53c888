"""Tests for shotgun_api.core.logging module."""

import json
import logging

import structlog

from shotgun_api.core.logging import (
    LogContext,
    bind_context,
    configure_library_defaults,
    configure_logging,
    get_logger,
    unbind_context,
)


def _last_json_line(text: str) -> dict:
    lines = [line for line in text.splitlines() if line.strip()]
    return json.loads(lines[-1])


class TestConfigureLogging:
    """Test renderer configuration."""

    def test_json_output_is_ecs_shaped(self, capsys):
        """JSON output renames level/timestamp and adds the service name."""
        configure_logging(level="INFO", json_format=True)
        get_logger("shotgun_api.test").info("activity.fetch_started", entity_type="Shot")

        record = _last_json_line(capsys.readouterr().err)
        assert record["event"] == "activity.fetch_started"
        assert record["entity_type"] == "Shot"
        assert record["log.level"] == "info"
        assert record["service.name"] == "shotgun-api"
        assert "@timestamp" in record

    def test_level_filters_debug(self, capsys):
        """Debug events are dropped at INFO."""
        configure_logging(level="INFO", json_format=True)
        get_logger("shotgun_api.test").debug("activity.update_skipped")
        assert "activity.update_skipped" not in capsys.readouterr().err

    def test_stdout_left_clean(self, capsys):
        """Logs never reach stdout."""
        configure_logging(level="DEBUG", json_format=False)
        get_logger("shotgun_api.test").warning("gateway.remote_error", status=500)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "gateway.remote_error" in captured.err


class TestLibraryDefaults:
    """Test behaviour before configure_logging is called."""

    def test_debug_is_quiet(self, capsys):
        """Unconfigured debug events print nothing."""
        structlog.reset_defaults()
        configure_library_defaults()
        logging.getLogger().setLevel(logging.WARNING)

        get_logger("shotgun_api.activity.fetcher").debug("activity.fetch_started", page_size=25)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "activity.fetch_started" not in captured.err

    def test_warnings_reach_stdlib(self, caplog):
        """Events at WARNING and above go through stdlib logging."""
        structlog.reset_defaults()
        configure_library_defaults()

        with caplog.at_level(logging.WARNING):
            get_logger("shotgun_api.activity.normalizers").error("activity.attachment_unresolved", attachment_id=3)

        (record,) = [r for r in caplog.records if r.name == "shotgun_api.activity.normalizers"]
        assert "activity.attachment_unresolved" in record.getMessage()
        assert record.levelno == logging.ERROR

    def test_existing_configuration_kept(self):
        """A host application's structlog setup is left alone."""
        renderer = structlog.processors.JSONRenderer()
        structlog.configure(processors=[renderer])

        configure_library_defaults()

        assert structlog.get_config()["processors"] == [renderer]


class TestLogContext:
    """Test context binding."""

    def test_log_context_binds_and_clears(self):
        """Keys bound by LogContext exist only inside the block."""
        with LogContext(entity_type="Shot", entity_id=1234):
            assert structlog.contextvars.get_contextvars() == {"entity_type": "Shot", "entity_id": 1234}
        assert structlog.contextvars.get_contextvars() == {}

    def test_bind_and_unbind(self):
        """bind_context persists until unbind_context."""
        bind_context(run="r1", attempt=1)
        unbind_context("run")
        assert structlog.contextvars.get_contextvars() == {"attempt": 1}

    def test_bound_context_reaches_log_records(self, capsys):
        """Bound keys are merged into rendered events."""
        configure_logging(level="INFO", json_format=True)
        with LogContext(entity_id=1234):
            get_logger("shotgun_api.test").info("activity.fetch_completed")
        assert _last_json_line(capsys.readouterr().err)["entity_id"] == 1234
