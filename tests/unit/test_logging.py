"""Tests for markstrip.core.logging -- formatter, handlers, run events."""

import logging

from markstrip.core.logging import (
    ROOT_LOGGER_NAME,
    MarkstripLogFormatter,
    RunLogger,
    configure_logging,
    get_run_logger,
)


def make_record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("markstrip.selector", logging.INFO, "", 0, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatter:
    def test_component_and_fields(self):
        record = make_record("Cleaned", component="Runner", run_level="CLEAN", fields={"file": "a.py", "n": 2})
        line = MarkstripLogFormatter().format(record)
        parts = [p.strip() for p in line.split(" | ")]
        assert parts[1] == "CLEAN"
        assert parts[2] == "Runner"
        assert parts[3] == "Cleaned"
        assert parts[4] == 'file="a.py" n=2'
        assert parts[0].endswith("Z")

    def test_component_defaults_to_logger_name(self):
        line = MarkstripLogFormatter().format(make_record("plain"))
        assert " | INFO  | Selector     | plain" in line

    def test_float_fields(self):
        record = make_record("x", fields={"ratio": 0.5})
        assert "ratio=0.500" in MarkstripLogFormatter().format(record)


class TestConfigureLogging:
    def test_replaces_handlers(self):
        configure_logging("INFO")
        configure_logging("DEBUG")
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        configure_logging("INFO", log_file)
        RunLogger().cleaned("src/a.py")
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Cleaned" in text and 'file="src/a.py"' in text

    def test_unknown_level_defaults_to_info(self):
        configure_logging("LOUD")
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO


class TestRunLogger:
    def test_status_lines(self, capsys):
        configure_logging("INFO")
        log = RunLogger()
        log.found(3)
        log.cleaned("a.py")
        log.cleaned("b.py", dry_run=True)
        log.file_failed("c.py", "boom")
        log.no_files()
        log.done(cleaned=1, unchanged=1, failed=1)
        log.fatal("listing files", "bad glob")
        err = capsys.readouterr().err
        assert "Found 3 files to process..." in err
        assert "Cleaned" in err and "Would clean" in err
        assert 'error="boom"' in err
        assert "No files found matching criteria." in err
        assert "Done." in err and "failed=1" in err
        assert "Error listing files" in err

    def test_debug_hidden_at_info(self, capsys):
        configure_logging("INFO")
        RunLogger().debug("Runner", "noise")
        assert "noise" not in capsys.readouterr().err

    def test_singleton(self):
        assert get_run_logger() is get_run_logger()
