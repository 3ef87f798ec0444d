"""
Test module for utility functions in phaserconf/utils.py.
"""

import logging

import pytest

from phaserconf.errors import ConfigurationError
from phaserconf.utils import add_log_file, close_logging, configure_logging, log_lines


class TestLogging:
    """Tests for logger setup and log files."""

    @pytest.mark.parametrize(
        "level, expected", [("DEBUG", logging.DEBUG), ("WARN", logging.WARNING)]
    )
    def test_configure_logging_level(self, level, expected):
        """Test that the package logger gets the requested level."""
        logger = configure_logging(level)
        assert logger.name == "phaserconf"
        assert logger.level == expected

    def test_log_file_roundtrip(self, tmp_path):
        """Test that lines reach the file and the handler is removed."""
        logger = configure_logging("INFO")
        log_file = tmp_path / "nested" / "run.log"
        handler = add_log_file(logger, str(log_file))
        log_lines(logger, ["Files:", "  * Input VCF     : [a.bcf]"])
        close_logging(logger, handler)

        assert handler not in logger.handlers
        content = log_file.read_text()
        assert "[INFO] Files:" in content
        assert "Input VCF     : [a.bcf]" in content

    def test_log_file_error(self, tmp_path):
        """Test that a directory cannot be used as log file."""
        logger = configure_logging("INFO")
        with pytest.raises(ConfigurationError) as exc_info:
            add_log_file(logger, str(tmp_path))
        assert exc_info.value.option == "log"

    def test_close_without_handler(self):
        """Test that closing with no handler is a no-op."""
        close_logging(logging.getLogger("phaserconf"), None)
