"""Configuration for the finance insight app.

Paths and the log level can be overridden through environment
variables; everything else lives next to the code that uses it.
"""

import logging
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("FINSIGHT_DATA_DIR", _PROJECT_ROOT / "data"))

STORE_PATH = Path(os.getenv("FINSIGHT_STORE_PATH", DATA_DIR / "store.json")).resolve()

LOG_LEVEL = os.getenv("FINSIGHT_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    STORE_PATH.parent.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
