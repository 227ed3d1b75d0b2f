"""Unit tests for logging configuration."""

import json
from pathlib import Path

import pytest
from loguru import logger

from event_logistics.core.logging import LOG_FILE_NAME, setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_is_repeatable(self) -> None:
        """setup_logging may be called repeatedly with any level casing."""
        setup_logging("DEBUG")
        setup_logging("info")
        setup_logging("WARNING")

    def test_structured_records_only_serialized(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Records bound with json_output go to the JSON sink and not the text sink."""
        setup_logging("INFO")
        logger.bind(json_output=True, query="Colosseum").info("Geocoded address")
        logger.info("plain record")

        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        structured = [json.loads(line) for line in lines if line.startswith("{")]
        plain = [line for line in lines if not line.startswith("{")]

        assert len(structured) == 1
        assert structured[0]["record"]["extra"]["query"] == "Colosseum"
        assert any("plain record" in line for line in plain)
        assert not any("Geocoded address" in line for line in plain)

    def test_log_dir_creates_file_sink(self, tmp_path: Path) -> None:
        """A log directory is created and receives the rotating log file."""
        log_dir = tmp_path / "logs"
        setup_logging("INFO", str(log_dir))
        logger.info("file sink check")

        log_file = log_dir / LOG_FILE_NAME
        assert log_file.exists()
        assert "file sink check" in log_file.read_text()
        setup_logging("INFO")
