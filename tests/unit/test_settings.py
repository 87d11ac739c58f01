"""Unit tests for environment-driven settings."""

from pathlib import Path

import pytest

from resume_tailor.utils.settings import OPENAI_BASE_URL, PERPLEXITY_BASE_URL, Settings, load_settings

SETTINGS_ENV_VARS = (
    "LLM_PROVIDER",
    "PPLX_API_KEY",
    "OPENAI_API_KEY",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "LLM_RETRIES",
    "LLM_TIMEOUT_S",
    "KEYWORD_CACHE_TTL_S",
    "FORMAT_MAX_CHARS",
    "KNOWN_TERMS_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
def test_defaults(clean_env):
    settings = load_settings()

    assert settings.provider == "perplexity"
    assert settings.api_key is None
    assert settings.base_url == PERPLEXITY_BASE_URL
    assert settings.model == "sonar"
    assert settings.retries == 2
    assert settings.retry_delay_s == 2.0
    assert settings.cache_ttl_s == 3600
    assert settings.format_max_chars == 6000
    assert settings.known_terms_file is None


@pytest.mark.unit
def test_perplexity_key_and_overrides(clean_env):
    clean_env.setenv("PPLX_API_KEY", " pplx-123 ")
    clean_env.setenv("LLM_RETRIES", "4")
    clean_env.setenv("LLM_TIMEOUT_S", "12.5")
    clean_env.setenv("KNOWN_TERMS_FILE", "terms.yaml")

    settings = load_settings()

    assert settings.api_key == "pplx-123"
    assert settings.retries == 4
    assert settings.timeout_s == 12.5
    assert settings.known_terms_file == Path("terms.yaml")


@pytest.mark.unit
def test_openai_provider_switches_key_and_endpoint(clean_env):
    clean_env.setenv("LLM_PROVIDER", "OpenAI")
    clean_env.setenv("PPLX_API_KEY", "pplx-123")
    clean_env.setenv("OPENAI_API_KEY", "sk-456")

    settings = load_settings()

    assert settings.provider == "openai"
    assert settings.api_key == "sk-456"
    assert settings.base_url == OPENAI_BASE_URL
    assert settings.model == "gpt-4o-mini"


@pytest.mark.unit
def test_malformed_numbers_fall_back(clean_env):
    clean_env.setenv("LLM_RETRIES", "three")
    clean_env.setenv("FORMAT_MAX_CHARS", "")

    settings = load_settings()

    assert settings.retries == Settings().retries
    assert settings.format_max_chars == Settings().format_max_chars
