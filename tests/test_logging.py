import logging

import pytest

from flathist.utils.logging import setup_logger


def own(logger):
    return [h for h in logger.handlers if getattr(h, "_flathist", False)]


@pytest.fixture
def logger_name(request):
    name = f"flathist.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_setup_logger_does_not_duplicate_handlers(logger_name):
    a = setup_logger(logger_name, level="debug")
    b = setup_logger(logger_name, level="debug")
    assert a is b
    assert len(own(a)) == 1
    assert a.level == logging.DEBUG
    assert not a.propagate


def test_setup_logger_writes_file(logger_name, tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logger(logger_name, level=logging.INFO, log_file=log_file)
    logger.info("stride table ready")
    logger.debug("not written")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text()
    assert f"| INFO | {logger_name} | stride table ready" in text
    assert "not written" not in text


def test_foreign_handlers_do_not_block_setup(logger_name, tmp_path):
    """A handler someone else attached must not stop the file handler."""
    logger = logging.getLogger(logger_name)
    foreign = logging.NullHandler()
    logger.addHandler(foreign)

    log_file = tmp_path / "run.log"
    setup_logger(logger_name, log_file=log_file)
    logger.warning("cells walked")
    for handler in logger.handlers:
        handler.flush()

    assert foreign in logger.handlers
    assert len(own(logger)) == 2
    assert "cells walked" in log_file.read_text()


def test_unknown_level_falls_back_to_info(logger_name):
    assert setup_logger(logger_name, level="chatty").level == logging.INFO
