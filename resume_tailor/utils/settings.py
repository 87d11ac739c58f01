"""
Runtime settings for the request-orchestration layer.

All tunables are read from the environment (a local .env is loaded first).
Values are captured once into a frozen Settings instance that components
receive explicitly, so tests can build their own with dataclasses.replace().
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

PERPLEXITY_BASE_URL = "https://api.perplexity.ai"
OPENAI_BASE_URL = "https://api.openai.com/v1"

# Provider name -> (API key env var, default base URL, default model)
PROVIDER_DEFAULTS = {
    "perplexity": ("PPLX_API_KEY", PERPLEXITY_BASE_URL, "sonar"),
    "openai": ("OPENAI_API_KEY", OPENAI_BASE_URL, "gpt-4o-mini"),
}


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Transport, cache and formatting constants."""

    provider: str = "perplexity"
    api_key: Optional[str] = None
    base_url: str = PERPLEXITY_BASE_URL
    model: str = "sonar"
    max_tokens: int = 1000
    temperature: float = 0.1
    timeout_s: float = 30.0
    retries: int = 2
    retry_delay_s: float = 2.0
    # Bounds a whole retry sequence, not a single attempt
    request_deadline_s: float = 150.0
    cache_ttl_s: float = 3600.0
    local_keyword_limit: int = 20
    format_max_chars: int = 6000
    format_timeout_s: float = 60.0
    format_max_tokens: int = 6000
    known_terms_file: Optional[Path] = None


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    LLM_PROVIDER selects which credential variable is read (PPLX_API_KEY for
    perplexity, OPENAI_API_KEY for openai) and the default endpoint and model.
    Unparseable numbers fall back to the defaults.

    Returns:
        Settings instance
    """
    provider = (_get_env("LLM_PROVIDER", "perplexity") or "perplexity").lower()
    key_var, default_url, default_model = PROVIDER_DEFAULTS.get(
        provider, PROVIDER_DEFAULTS["perplexity"]
    )
    terms_file = _get_env("KNOWN_TERMS_FILE")
    defaults = Settings()

    return Settings(
        provider=provider,
        api_key=_get_env(key_var),
        base_url=_get_env("LLM_BASE_URL", default_url),
        model=_get_env("LLM_MODEL", default_model),
        max_tokens=_get_env_int("LLM_MAX_TOKENS", defaults.max_tokens),
        temperature=_get_env_float("LLM_TEMPERATURE", defaults.temperature),
        timeout_s=_get_env_float("LLM_TIMEOUT_S", defaults.timeout_s),
        retries=_get_env_int("LLM_RETRIES", defaults.retries),
        retry_delay_s=_get_env_float("LLM_RETRY_DELAY_S", defaults.retry_delay_s),
        request_deadline_s=_get_env_float("LLM_REQUEST_DEADLINE_S", defaults.request_deadline_s),
        cache_ttl_s=_get_env_float("KEYWORD_CACHE_TTL_S", defaults.cache_ttl_s),
        local_keyword_limit=_get_env_int("LOCAL_KEYWORD_LIMIT", defaults.local_keyword_limit),
        format_max_chars=_get_env_int("FORMAT_MAX_CHARS", defaults.format_max_chars),
        format_timeout_s=_get_env_float("FORMAT_TIMEOUT_S", defaults.format_timeout_s),
        format_max_tokens=_get_env_int("FORMAT_MAX_TOKENS", defaults.format_max_tokens),
        known_terms_file=Path(terms_file) if terms_file else None,
    )
