"""Logging setup: console plus error/info/access log files."""

import logging
from pathlib import Path

from profilehub.core.config import Settings

ACCESS_LOGGER_NAME = "profilehub.access"

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger once per process.

    File handlers are skipped when LOG_TO_FILES is False (tests, read-only images).
    """
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    access = logging.getLogger(ACCESS_LOGGER_NAME)
    access.setLevel(logging.INFO)

    if settings.LOG_TO_FILES:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        for filename, level in (("error.log", logging.ERROR), ("info.log", logging.INFO)):
            handler = logging.FileHandler(log_dir / filename, encoding="utf-8")
            handler.setLevel(level)
            handler.setFormatter(formatter)
            root.addHandler(handler)

        access_file = logging.FileHandler(log_dir / "access.log", encoding="utf-8")
        access_file.setFormatter(logging.Formatter("%(message)s"))
        access.addHandler(access_file)

    _configured = True
