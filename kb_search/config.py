"""
Configuration from environment variables.

Loads .env.local (local dev, highest priority) or .env from the project root,
then falls back to the process environment.

Variables:
    LOG_LEVEL               Console log level (default: INFO)
    LOG_FILE                Base log file path (default: logs/kb-search.log)
    PORT                    HTTP port (default: 8080)
    SEARCH_MAX_RESULTS      Results returned per search (default: 10)
    RERANK_TIMEOUT_SECONDS  Hard timeout for the rerank call (default: 10)
    RERANK_ENABLED          "true" to enable LLM reranking (default: false)
    RERANK_ENDPOINT         Chat-completions URL
    RERANK_API_KEY          Bearer token for the endpoint
    RERANK_MODEL            Model name (default: gpt-3.5-turbo)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_RERANK_MODEL = "gpt-3.5-turbo"
DEFAULT_MAX_RESULTS = 10
DEFAULT_RERANK_TIMEOUT = 10.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RerankConfig:
    """
    Read-only rerank settings snapshot, supplied per search call.

    Reranking runs only when enabled AND both endpoint and api_key are set;
    an incomplete config silently disables it.
    """
    enabled: bool = False
    endpoint: str = ""
    api_key: str = field(default="", repr=False)  # never printed in logs
    model: str = DEFAULT_RERANK_MODEL

    @property
    def is_configured(self) -> bool:
        return bool(self.enabled and self.endpoint.strip() and self.api_key.strip())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RerankConfig":
        env = os.environ if environ is None else environ
        return cls(
            enabled=env.get("RERANK_ENABLED", "false").strip().lower() in _TRUE_VALUES,
            endpoint=env.get("RERANK_ENDPOINT", "").strip(),
            api_key=env.get("RERANK_API_KEY", "").strip(),
            model=env.get("RERANK_MODEL", "").strip() or DEFAULT_RERANK_MODEL,
        )


@dataclass(frozen=True)
class Settings:
    """Service settings"""
    log_level: str = "INFO"
    log_file: str = "logs/kb-search.log"
    port: int = 8080
    max_results: int = DEFAULT_MAX_RESULTS
    rerank_timeout: float = DEFAULT_RERANK_TIMEOUT
    rerank: RerankConfig = field(default_factory=RerankConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            log_file=env.get("LOG_FILE", "logs/kb-search.log"),
            port=_parse_number(env, "PORT", 8080, int),
            max_results=_parse_number(env, "SEARCH_MAX_RESULTS", DEFAULT_MAX_RESULTS, int),
            rerank_timeout=_parse_number(env, "RERANK_TIMEOUT_SECONDS", DEFAULT_RERANK_TIMEOUT, float),
            rerank=RerankConfig.from_env(env),
        )


def _parse_number(env: Mapping[str, str], name: str, default, cast):
    value = env.get(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = cast(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {value!r}")
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got: {value!r}")
    return parsed


def load_environment(project_root: Path = PROJECT_ROOT) -> Optional[Path]:
    """
    Load .env.local (preferred) or .env into os.environ.

    Returns:
        Path of the loaded file, or None if neither exists
    """
    env_local = project_root / ".env.local"
    env_file = project_root / ".env"

    for candidate in (env_local, env_file):
        if candidate.exists():
            load_dotenv(candidate, override=True)
            logger.info(f"Loaded environment from: {candidate}")
            return candidate

    logger.warning("No .env.local or .env file found - using system environment variables only")
    return None
