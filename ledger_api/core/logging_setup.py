import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from ledger_api.core.config import settings


def _get_log_level() -> int:
    level = (settings.LOG_LEVEL or "INFO").strip().upper()
    return getattr(logging, level, logging.INFO)


def _build_file_handler(log_level: int, formatter: logging.Formatter) -> logging.Handler | None:
    log_dir_raw = (settings.LOG_DIR or "").strip()
    if not log_dir_raw:
        return None

    log_dir = Path(log_dir_raw)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = TimedRotatingFileHandler(
        filename=str(log_dir / settings.LOG_FILE_NAME),
        when=settings.LOG_FILE_ROTATION_WHEN,
        interval=max(1, settings.LOG_FILE_ROTATION_INTERVAL),
        backupCount=max(1, settings.LOG_FILE_RETENTION_DAYS),
        encoding="utf-8",
        utc=True,
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    return file_handler


def setup_logging() -> None:
    root_logger = logging.getLogger()
    if getattr(root_logger, "_ledger_logging_configured", False):
        return

    log_level = _get_log_level()
    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    try:
        file_handler = _build_file_handler(log_level, formatter)
        if file_handler is not None:
            root_logger.addHandler(file_handler)
    except OSError as exc:
        logging.getLogger(__name__).warning("Failed to initialize file logger: %s", exc)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        logging.getLogger(logger_name).setLevel(log_level)

    root_logger._ledger_logging_configured = True
