import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project root when installed in editable mode (src/greenmarket/config.py -> repo root).
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


class Settings:
    # Storage
    STORAGE_BACKEND: str = os.getenv("GREENMARKET_STORAGE", "json").strip().lower()
    DATA_DIR: Path = Path(os.getenv("GREENMARKET_DATA_DIR", str(_DEFAULT_DATA_DIR)))

    # Concurrency
    LOCK_TIMEOUT_SECONDS: float = float(os.getenv("GREENMARKET_LOCK_TIMEOUT", "5"))

    # Logging
    LOG_LEVEL: str = os.getenv("GREENMARKET_LOG_LEVEL", "INFO").upper()
    LOG_JSON: bool = os.getenv("GREENMARKET_LOG_JSON", "0") == "1"

    # Security
    BCRYPT_ROUNDS: int = int(os.getenv("GREENMARKET_BCRYPT_ROUNDS", "12"))


settings = Settings()
