"""Tests for structured logging."""

import io
import logging

from teen_patti.observability import get_logger, setup_logging


class TestLogging:
    """Tests for setup_logging and get_logger."""

    def test_structured_output_includes_context(self):
        """Test key=value output with bound context."""
        stream = io.StringIO()
        setup_logging(level=logging.INFO, stream=stream)

        logger = get_logger("engine.test", hand=3)
        logger.info("Hand started", extra={"extra_fields": {"pot": 300}})

        line = stream.getvalue().strip()
        assert "level=INFO" in line
        assert "logger=teen_patti.engine.test" in line
        assert "message=Hand started" in line
        assert "hand=3" in line
        assert "pot=300" in line

        setup_logging(level=logging.WARNING)

    def test_bind_adds_context(self):
        """Test that bind merges extra context fields."""
        stream = io.StringIO()
        setup_logging(level=logging.INFO, stream=stream)

        get_logger("session").bind(seat="Raj").info("Bot acted")

        assert "seat=Raj" in stream.getvalue()

        setup_logging(level=logging.WARNING)

    def test_names_are_rooted(self):
        """Test that logger names sit under teen_patti."""
        assert get_logger("teen_patti.engine").logger.name == "teen_patti.engine"
        assert get_logger("cli").logger.name == "teen_patti.cli"
