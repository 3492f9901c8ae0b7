"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.4
    gemini_timeout: int = 60
    worker_port: int = 9000
    history_path: Path = Path("data/history.json")
    history_limit: int = 10
    export_dir: Path = Path("exports")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    gemini_api_key = os.getenv("GEMINI_API_KEY", "")
    gemini_model = os.getenv("GEMINI_MODEL", "") or "gemini-2.5-flash"
    gemini_temperature = float(os.getenv("GEMINI_TEMPERATURE", "0.4"))
    gemini_timeout = int(os.getenv("GEMINI_TIMEOUT", "60"))
    worker_port = int(os.getenv("WORKER_PORT", "9000"))
    history_path = Path(os.getenv("HISTORY_PATH", "data/history.json"))
    history_limit = int(os.getenv("HISTORY_LIMIT", "10"))
    export_dir = Path(os.getenv("EXPORT_DIR", "exports"))

    if not gemini_api_key:
        logger.warning("GEMINI_API_KEY is not configured; business searches will fail.")
    if history_limit <= 0:
        logger.warning("HISTORY_LIMIT=%d is not positive; falling back to 10.", history_limit)
        history_limit = 10

    return Settings(
        gemini_api_key=gemini_api_key,
        gemini_model=gemini_model,
        gemini_temperature=gemini_temperature,
        gemini_timeout=gemini_timeout,
        worker_port=worker_port,
        history_path=history_path,
        history_limit=history_limit,
        export_dir=export_dir,
    )
