# facilitiease/core/logging.py
import logging
import os
from logging.handlers import RotatingFileHandler

from facilitiease.core.config import settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure the root logger once: console always, rotating file when
    LOG_FILE is set.
    """
    root = logging.getLogger()
    if getattr(root, "_facilitiease_configured", False):
        return

    root.setLevel((level or settings.LOG_LEVEL).upper())
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    log_file = log_file or settings.LOG_FILE
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root._facilitiease_configured = True
