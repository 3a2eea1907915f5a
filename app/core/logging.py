import logging
from pathlib import Path
import sys

from .config import BASE_DIR, get_settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    settings = get_settings()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        if not log_path.is_absolute():
            log_path = BASE_DIR / log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT, handlers=handlers)

    # RequestLoggingMiddleware already writes one line per request.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
