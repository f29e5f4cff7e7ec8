import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure application-wide logging based on settings.

    Every module logs through ``logging.getLogger(__name__)``; this only sets
    the root handler, the level and the shared line format.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(level)

    # httpx logs every outbound request at INFO (identity lookups, email API).
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
