import logging
from logging.handlers import RotatingFileHandler
import os

from dragons.core.config import Settings

_configured = False

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger once per process.

    Logs go to stderr; when LOG_FILE is set they are also written to a
    rotating file (10 MB, 10 backups).
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=10240000,
            backupCount=10,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(settings.LOG_LEVEL.upper())
    _configured = True
