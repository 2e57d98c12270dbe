"""Configuration from environment variables (.env)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    base_url: str
    api_key: str
    api_key_header: str
    timeout: float
    max_retries: int
    retry_backoff: float  # seconds; doubled on each retry
    log_level: str
    logs_dir: Path | None

    @classmethod
    def load(cls) -> "Config":
        logs_dir = os.getenv("LEDGER_SEARCH_LOGS_DIR", "").strip()
        return cls(
            base_url=os.getenv("LEDGER_SEARCH_BASE_URL", "http://localhost:5001/"),
            api_key=os.getenv("LEDGER_SEARCH_API_KEY", ""),
            api_key_header=os.getenv("LEDGER_SEARCH_API_KEY_HEADER", "X-Blnk-Key"),
            timeout=float(os.getenv("LEDGER_SEARCH_TIMEOUT", "30")),
            max_retries=int(os.getenv("LEDGER_SEARCH_MAX_RETRIES", "3")),
            retry_backoff=float(os.getenv("LEDGER_SEARCH_RETRY_BACKOFF", "0.5")),
            log_level=os.getenv("LEDGER_SEARCH_LOG_LEVEL", "INFO").upper(),
            logs_dir=Path(logs_dir) if logs_dir else None,
        )

    def validate(self) -> list[str]:
        errors = []
        if not self.base_url.startswith(("http://", "https://")):
            errors.append(f"Base URL must be http(s): {self.base_url!r}")
        if self.timeout <= 0:
            errors.append(f"Timeout must be positive: {self.timeout}")
        if self.max_retries < 0:
            errors.append(f"Max retries cannot be negative: {self.max_retries}")
        if self.retry_backoff < 0:
            errors.append(f"Retry backoff cannot be negative: {self.retry_backoff}")
        return errors


config = Config.load()
