from __future__ import annotations

import logging
from io import StringIO

from sheet2site.logging import init as log_init
from sheet2site.logging.init import LabeledFormatter, get_logger, log_summary, setup_logging


def _capture_logger(name: str) -> tuple[logging.Logger, StringIO]:
    captured = StringIO()
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger, captured


def test_setup_logging_configures_package_logger():
    logger = setup_logging()
    assert logger.name == "sheet2site"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    logger, captured = _capture_logger("test_sheet2site_labels")
    logger.debug("Test debug message")
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")
    assert captured.getvalue().strip().split("\n") == [
        "DEBUG Test debug message",
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_stdout_stderr_split(capsys):
    setup_logging()
    module_logger = logging.getLogger("sheet2site.services.documents")
    module_logger.info("progress line")
    module_logger.warning("row skipped")
    log_summary("posts=1")
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["INFO progress line", "SUMMARY posts=1"]
    assert captured.err.splitlines() == ["WARN row skipped"]


def test_debug_level(capsys):
    setup_logging(debug=True)
    logging.getLogger("sheet2site.cli").debug("details")
    assert "DEBUG details" in capsys.readouterr().out


def test_debug_after_setup(capsys):
    setup_logging()
    setup_logging(debug=True)
    get_logger().debug("late debug")
    assert "DEBUG late debug" in capsys.readouterr().out


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 2
    assert get_logger() is logger1


def test_reset_logging_restores_propagation():
    setup_logging()
    log_init.reset_logging()
    logger = logging.getLogger("sheet2site")
    assert logger.handlers == []
    assert logger.propagate is True
    assert log_init._logger is None
