"""
Logging-Setup für Fine Dine.

Alle Modul-Logger hängen unter "finedine" (finedine.services...,
finedine.requests) und erben dessen Handler: Konsole für den Betrieb,
rotierende Datei zum Nachverfolgen von Reservierungen und Mails.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from finedine.config import settings

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Fremd-Logger, die auf INFO zu gesprächig sind
QUIET_LOGGERS = ("fastapi_mail", "urllib3", "sqlalchemy.engine")


def _console_handler(config) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if config.debug else config.log_level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(config) -> logging.Handler:
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / config.log_file,
        maxBytes=config.log_max_bytes,
        backupCount=config.log_backup_count,
        encoding="utf-8"
    )
    handler.setLevel(config.log_level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(config=settings) -> logging.Logger:
    """Richtet den finedine-Logger einmalig ein, weitere Aufrufe liefern ihn unverändert."""
    logger = logging.getLogger("finedine")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.addHandler(_console_handler(config))
    if config.log_to_file:
        logger.addHandler(_file_handler(config))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
