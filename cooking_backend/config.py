from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass(frozen=True)
class AppConfig:
    log_level: str = os.getenv("COOKING_LOG_LEVEL", "INFO").upper()
    data_dir: Path = Path(os.getenv("COOKING_DATA_DIR", str(_PACKAGE_DATA_DIR)))


DEFAULT_APP_CONFIG = AppConfig()


def configure_logging(config: AppConfig = DEFAULT_APP_CONFIG) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("cooking_backend")
    if not logger.handlers:
        logger.setLevel(config.log_level)
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    return logger
