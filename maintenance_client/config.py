# maintenance_client/config.py
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_API_URL = "https://machine-failure-backend.onrender.com/predict"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_API_URL
    # None = no timeout, the transport default
    timeout: Optional[float] = None
    log_level: str = "INFO"


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    value = float(raw)
    if value <= 0:
        raise ValueError(f"PREDICTION_TIMEOUT must be positive, got {raw!r}")
    return value


def load_settings() -> Settings:
    """
    Read settings from the environment, after loading a `.env` file if
    one is present. Variables already set in the environment win.
    """
    load_dotenv()
    return Settings(
        api_url=os.getenv("PREDICTION_API_URL", DEFAULT_API_URL).strip(),
        timeout=_parse_timeout(os.getenv("PREDICTION_TIMEOUT")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
