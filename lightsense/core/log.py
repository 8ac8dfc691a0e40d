import logging
from logging.handlers import RotatingFileHandler

from .config import settings


def configure_logging(level: str | None = None, log_file: str | None = None) -> None:
    logger = logging.getLogger()
    logger.setLevel((level or settings.log_level).upper())

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # Rotating file (avoid filling SD card); "" disables it
    path = settings.log_file if log_file is None else log_file
    if path:
        fh = RotatingFileHandler(
            path, maxBytes=settings.log_max_bytes, backupCount=settings.log_backup_count
        )
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    # Silence noisy httpx request logging
    logging.getLogger("httpx").setLevel(logging.WARNING)
