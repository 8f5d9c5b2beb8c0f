# fincore/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fincore.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """
    Configure root logging once per process.
    Console output always; a rotating file when settings.log_file is set.
    """
    settings = settings or get_settings()

    logger = logging.getLogger()
    logger.setLevel(settings.log_level.upper())

    # Streamlit reruns the script, so handlers would pile up otherwise
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if settings.log_file:
        log_file = Path(settings.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,  # 1 MB per file
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info("Logging initialized. Log file at %s", log_file)
    else:
        logger.info("Logging initialized (console only)")

    return logger
