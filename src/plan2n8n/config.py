from __future__ import annotations
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .errors import ConfigError

DEFAULT_TIMEOUT = 30.0


class Settings(BaseModel):
    n8n_url: Optional[str] = None
    n8n_api_key: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    def require_n8n(self) -> "Settings":
        """Return self, or raise if the n8n connection is not configured."""
        if not self.n8n_url or not self.n8n_api_key:
            raise ConfigError("Set N8N_URL and N8N_API_KEY in the environment or .env")
        return self


def log_level_from_env(dotenv: bool = True) -> str:
    """Log level alone; never touches the n8n settings."""
    if dotenv:
        load_dotenv()
    return os.getenv("PLAN2N8N_LOG_LEVEL", "INFO")


def load_settings(dotenv: bool = True) -> Settings:
    """Build settings from the process environment (and ``.env`` when present)."""
    if dotenv:
        load_dotenv()
    url = os.getenv("N8N_URL")
    timeout = os.getenv("N8N_TIMEOUT")
    try:
        timeout_value = float(timeout) if timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigError(f"N8N_TIMEOUT must be a number, got {timeout!r}")
    return Settings(
        n8n_url=url.rstrip("/") if url else None,
        n8n_api_key=os.getenv("N8N_API_KEY") or None,
        timeout=timeout_value,
        log_level=os.getenv("PLAN2N8N_LOG_LEVEL", "INFO"),
    )
