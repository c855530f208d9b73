"""
Runtime settings read from the environment.

Variables:
    PLUSSLASH_SEARCH_DEPTH     search depth in plies, 1-9 (default 3)
    PLUSSLASH_LOG_LEVEL        logging level name (default INFO)
    GEMINI_API_KEY / API_KEY   advisor key; the advisor is off without one
    PLUSSLASH_ADVISOR_MODEL    model name
    PLUSSLASH_ADVISOR_URL      API root
    PLUSSLASH_ADVISOR_TIMEOUT  request timeout in seconds
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .ai.advisor import DEFAULT_BASE_URL, DEFAULT_MODEL, GeminiAdvisor

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
MAX_SEARCH_DEPTH = 9


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class Settings:
    search_depth: int = 3
    log_level: str = "INFO"
    api_key: Optional[str] = None
    advisor_model: str = DEFAULT_MODEL
    advisor_url: str = DEFAULT_BASE_URL
    advisor_timeout: float = 10.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        if env is None:
            env = os.environ
        search_depth = _int_env(env, "PLUSSLASH_SEARCH_DEPTH", 3)
        if not 1 <= search_depth <= MAX_SEARCH_DEPTH:
            raise ValueError(
                f"PLUSSLASH_SEARCH_DEPTH must be between 1 and {MAX_SEARCH_DEPTH}, got {search_depth}"
            )
        return cls(
            search_depth=search_depth,
            log_level=env.get("PLUSSLASH_LOG_LEVEL", "INFO").upper(),
            api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or None,
            advisor_model=env.get("PLUSSLASH_ADVISOR_MODEL", DEFAULT_MODEL),
            advisor_url=env.get("PLUSSLASH_ADVISOR_URL", DEFAULT_BASE_URL),
            advisor_timeout=_float_env(env, "PLUSSLASH_ADVISOR_TIMEOUT", 10.0),
        )

    @property
    def advisor_available(self) -> bool:
        return bool(self.api_key)

    def make_advisor(self) -> Optional[GeminiAdvisor]:
        """Build the advisor client, or None without an API key."""
        if not self.advisor_available:
            logging.getLogger(__name__).warning("No advisor API key set; using the search bot only")
            return None
        return GeminiAdvisor(
            self.api_key,
            model=self.advisor_model,
            base_url=self.advisor_url,
            timeout=self.advisor_timeout,
        )


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for entry points."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
