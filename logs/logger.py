"""
Logger - Shared logger factory for all modules

Every module obtains its logger with `logger = get_logger(__name__)`.
Handlers are attached to the root logger on first use; an explicit
configure_logging() call re-applies LOG_LEVEL and LOG_FILE so values loaded
from .env after import still take effect.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_configured = False
_fileHandler = None


def configure_logging(level: str = None, logFile: str = None) -> None:
    """Attach console (and optional rotating file) handlers to the root logger"""
    global _configured, _fileHandler

    level = (level or os.getenv('LOG_LEVEL') or 'INFO').upper()
    logFile = logFile or os.getenv('LOG_FILE')

    rootLogger = logging.getLogger()
    rootLogger.setLevel(getattr(logging, level, logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    if not _configured:
        consoleHandler = logging.StreamHandler(sys.stdout)
        consoleHandler.setFormatter(formatter)
        rootLogger.addHandler(consoleHandler)

        # requests/urllib3 are chatty at DEBUG
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('apscheduler').setLevel(logging.WARNING)
        _configured = True

    if logFile and (_fileHandler is None or _fileHandler.baseFilename != os.path.abspath(logFile)):
        if _fileHandler is not None:
            rootLogger.removeHandler(_fileHandler)
            _fileHandler.close()

        logDir = os.path.dirname(logFile)
        if logDir:
            os.makedirs(logDir, exist_ok=True)
        _fileHandler = RotatingFileHandler(logFile, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT, encoding='utf-8')
        _fileHandler.setFormatter(formatter)
        rootLogger.addHandler(_fileHandler)


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
