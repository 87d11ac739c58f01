"""Unit tests for the chat-completions transport and its retry policy."""

import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from resume_tailor.utils.exceptions import LLMRequestError, LLMTimeoutError, MissingAPIKeyError
from resume_tailor.utils.llm import (
    OpenAIProvider,
    PerplexityProvider,
    _retry_with_fixed_delay,
    get_provider,
)
from resume_tailor.utils.settings import OPENAI_BASE_URL, Settings

REQUEST = httpx.Request("POST", "https://api.perplexity.ai/chat/completions")


def completion(content, model="sonar"):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=11, completion_tokens=7),
        model=model,
    )


class FakeCompletions:
    """Stands in for AsyncOpenAI().chat.completions, replaying scripted outcomes."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def fake_client(*outcomes):
    completions = FakeCompletions(outcomes)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.fixture
def settings():
    return Settings(api_key="pplx-test", retry_delay_s=0.0)


@pytest.mark.unit
def test_successful_call_builds_payload(settings):
    client, completions = fake_client(completion('["Python"]'))
    provider = PerplexityProvider(settings=settings, client=client)

    response = asyncio.run(
        provider.generate("system text", "user text", max_tokens=800, temperature=0.05)
    )

    assert response.content == '["Python"]'
    assert response.input_tokens == 11
    assert response.output_tokens == 7
    call = completions.calls[0]
    assert call["model"] == "sonar"
    assert call["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]
    assert call["max_tokens"] == 800
    assert call["temperature"] == 0.05
    assert call["timeout"] == settings.timeout_s


@pytest.mark.unit
def test_timeouts_are_retried_then_succeed(settings):
    client, completions = fake_client(
        openai.APITimeoutError(request=REQUEST),
        openai.APITimeoutError(request=REQUEST),
        completion("ok"),
    )
    provider = PerplexityProvider(settings=settings, client=client)

    response = asyncio.run(provider.generate("s", "u"))

    assert response.content == "ok"
    assert len(completions.calls) == 3


@pytest.mark.unit
def test_timeouts_exhaust_retries(settings):
    client, completions = fake_client(*[openai.APITimeoutError(request=REQUEST)] * 3)
    provider = PerplexityProvider(settings=settings, client=client)

    with pytest.raises(LLMTimeoutError) as exc_info:
        asyncio.run(provider.generate("s", "u", retries=2))

    assert exc_info.value.attempts == 3
    assert len(completions.calls) == 3


@pytest.mark.unit
def test_status_errors_are_not_retried(settings):
    response = httpx.Response(429, request=REQUEST, text='{"error": "rate limited"}')
    client, completions = fake_client(
        openai.APIStatusError("rate limited", response=response, body=None)
    )
    provider = PerplexityProvider(settings=settings, client=client)

    with pytest.raises(LLMRequestError) as exc_info:
        asyncio.run(provider.generate("s", "u"))

    assert exc_info.value.status_code == 429
    assert "rate limited" in exc_info.value.response_body
    assert len(completions.calls) == 1


@pytest.mark.unit
def test_connection_errors_map_to_request_error(settings):
    client, _ = fake_client(openai.APIConnectionError(request=REQUEST))
    provider = PerplexityProvider(settings=settings, client=client)

    with pytest.raises(LLMRequestError) as exc_info:
        asyncio.run(provider.generate("s", "u"))

    assert exc_info.value.status_code is None


@pytest.mark.unit
def test_missing_key_fails_before_any_attempt():
    client, completions = fake_client(completion("never"))
    provider = PerplexityProvider(settings=Settings(api_key=None), client=client)

    with pytest.raises(MissingAPIKeyError):
        asyncio.run(provider.generate("s", "u"))

    assert completions.calls == []


@pytest.mark.unit
def test_empty_choices_yield_empty_content(settings):
    client, _ = fake_client(SimpleNamespace(choices=[], usage=None, model=None))
    provider = PerplexityProvider(settings=settings, client=client)

    response = asyncio.run(provider.generate("s", "u"))

    assert response.content == ""
    assert response.model == "sonar"
    assert response.input_tokens == 0


@pytest.mark.unit
def test_retry_helper_propagates_other_errors():
    attempts = []

    async def operation():
        attempts.append(1)
        raise LLMRequestError("bad request", status_code=400)

    with pytest.raises(LLMRequestError):
        asyncio.run(_retry_with_fixed_delay(operation, retries=2, delay_s=0, error_message="x"))

    assert len(attempts) == 1


@pytest.mark.unit
def test_get_provider_factory(settings):
    perplexity = get_provider(settings=settings)
    assert isinstance(perplexity, PerplexityProvider)
    assert perplexity.name == "perplexity/sonar"

    openai_provider = get_provider("openai", model="gpt-4o", settings=settings)
    assert isinstance(openai_provider, OpenAIProvider)
    assert openai_provider.name == "openai/gpt-4o"
    assert openai_provider.base_url == settings.base_url


@pytest.mark.unit
def test_openai_provider_default_endpoint():
    provider = OpenAIProvider(settings=Settings(api_key="sk", base_url=None, model="gpt-4o-mini"))
    assert provider.base_url == OPENAI_BASE_URL


@pytest.mark.unit
def test_get_provider_unknown_name(settings):
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("anthropic", settings=settings)


@pytest.mark.unit
def test_error_message_includes_status_and_truncated_body():
    error = LLMRequestError("failed", status_code=500, response_body="x" * 600)

    message = str(error)
    assert "Status: 500" in message
    assert message.endswith("x" * 500 + "...")
