import logging

from src.dicepool.utils.logging import ColorFormatter, setup_logging


def test_setup_is_idempotent():
    logger = setup_logging(level="debug", enable_color=False)
    setup_logging(level="debug", enable_color=False)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "dicepool.log"
    logger = setup_logging(level="INFO", log_file=log_file)
    logging.getLogger("src.dicepool.core.roller").info("rolled %d dice", 3)
    for handler in logger.handlers:
        handler.flush()
    assert "rolled 3 dice" in log_file.read_text()


def test_color_formatter_restores_level_name():
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
    text = ColorFormatter("%(levelname)s %(message)s").format(record)
    assert "\033[33mWARNING\033[0m careful" == text
    assert record.levelname == "WARNING"
