"""Logging configuration for the QHSE risk engine."""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from qhse_risk.config.settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(name: str, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for a module.

    Handlers are attached once per logger, so repeated calls (one per
    dashboard refresh, for instance) do not duplicate output.

    Args:
        name: Logger name (typically __name__)
        log_dir: Directory for a rotating log file; defaults to QHSE_LOG_DIR.
            No file handler is attached when neither is set.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL)

    if getattr(logger, '_qhse_configured', False):
        return logger

    # Create formatters and handlers
    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    log_dir = log_dir or settings.LOG_DIR
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / f'{name}.log',
            maxBytes=10485760,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger._qhse_configured = True
    return logger
