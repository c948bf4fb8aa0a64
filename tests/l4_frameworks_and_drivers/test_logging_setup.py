"""Tests for logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from finance_chart_analyst.l4_frameworks_and_drivers.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def _reset_fca_logger():
    yield
    root = logging.getLogger('fca')
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_stream_handler_only(self):
        setup_logging('debug')
        root = logging.getLogger('fca')
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_file_handler_writes(self, tmp_path: Path):
        log_file = tmp_path / 'logs' / 'fca.log'
        setup_logging('INFO', log_file)
        logging.getLogger('fca.pipeline').info('hello from pipeline')
        for handler in logging.getLogger('fca').handlers:
            handler.flush()

        text = log_file.read_text(encoding='utf-8')
        assert 'INFO hello from pipeline' in text

    def test_handlers_share_format(self):
        setup_logging()
        (handler,) = logging.getLogger('fca').handlers
        assert handler.formatter._fmt == '%(asctime)s %(levelname)s %(message)s'

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger('fca').handlers) == 1
