import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from config.config import LOG_DIR, LOG_LEVEL, LOG_TO_FILE


def setup_logger(
    name: str, log_dir: Optional[Path] = None, to_file: Optional[bool] = None
) -> logging.Logger:
    log_dir = LOG_DIR if log_dir is None else log_dir
    to_file = LOG_TO_FILE if to_file is None else to_file

    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)

    # Avoid duplicate handlers if logger is reused
    if logger.handlers:
        return logger

    if to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = log_dir / f"{name}_{timestamp}.log"

        # File handler
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
        )
        logger.addHandler(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(console_handler)

    return logger


def set_level(level: str) -> None:
    """Change the level of every splittt logger created so far."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and logger.handlers and name.startswith(
            "splittt"
        ):
            logger.setLevel(level)
