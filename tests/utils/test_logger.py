"""
Tests for the structured console logger.
"""

from models.enums import LogCategory, LogLevel
from utils.logger import Logger, configure_logger, get_logger


class TestLogger:

    def test_message_and_details_tree(self, capsys):
        logger = Logger(min_level=LogLevel.DEBUG, use_colors=False)
        logger.info(LogCategory.PALETTE, "Unknown gradient, using default", name="sunrise", fallback="indigo")

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].endswith("PALETTE   ✓ Unknown gradient, using default")
        assert lines[1].strip() == "├─ name: sunrise"
        assert lines[2].strip() == "└─ fallback: indigo"

    def test_min_level_filters(self, capsys):
        logger = Logger(min_level=LogLevel.WARN, use_colors=False)
        logger.info(LogCategory.TIMING, "hidden")
        logger.warn(LogCategory.TIMING, "shown")
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "⚠ shown" in out

    def test_exc_info_appends_traceback(self, capsys):
        logger = Logger(use_colors=False)
        try:
            raise ValueError("bad frame")
        except ValueError:
            logger.error(LogCategory.RENDER_ENGINE, "Sample error", exc_info=True)
        out = capsys.readouterr().out
        assert "ValueError: bad frame" in out

    def test_colors(self, capsys):
        Logger(use_colors=True).info(LogCategory.API, "colored")
        assert "\033[" in capsys.readouterr().out

    def test_bound_logger(self, capsys):
        logger = Logger(use_colors=False)
        bound = logger.for_category(LogCategory.SEQUENCE)
        bound.info("Reveal started")
        bound.with_category(LogCategory.EFFECT).info("Effect registered")
        out = capsys.readouterr().out
        assert "SEQUENCE" in out and "EFFECT" in out

    def test_configure_mutates_singleton(self):
        logger = get_logger()
        previous = (logger.min_level, logger.use_colors)
        try:
            configure_logger(LogLevel.ERROR, use_colors=False)
            assert get_logger() is logger
            assert logger.min_level is LogLevel.ERROR
        finally:
            configure_logger(*previous)

    def test_bind_adds_context_fields(self, capsys):
        logger = Logger(use_colors=False)
        bound = logger.for_category(LogCategory.OVERLAY).bind(overlay="cta")
        bound.info("Overlay mounted", kind="cta")
        bound.bind(overlay="socials").warn("Overlay already mounted")

        lines = capsys.readouterr().out.splitlines()
        assert lines[1].strip() == "├─ overlay: cta"
        assert lines[2].strip() == "└─ kind: cta"
        assert lines[4].strip() == "└─ overlay: socials"
        assert bound.context == {"overlay": "cta"}

    def test_exc_info_without_active_exception(self, capsys):
        Logger(use_colors=False).error(LogCategory.SYSTEM, "No traceback", exc_info=True)
        assert capsys.readouterr().out.strip().endswith("✗ No traceback")
