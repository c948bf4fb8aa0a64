"""Logging setup for the ``fca`` logger tree."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = '%(asctime)s %(levelname)s %(message)s'


def setup_logging(level: str = 'INFO', log_file: Path | None = None) -> None:
    """Attach a stderr handler, plus a file handler when *log_file* is given."""
    root = logging.getLogger('fca')
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        root.info('Logging to %s', log_file)
