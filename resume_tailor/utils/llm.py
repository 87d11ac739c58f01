"""
LLM provider abstraction and response parsing utilities.

Provides a provider-agnostic async interface for chat-completion calls with
fixed-delay retries on timeouts, and the parsing cascade that turns free-form
model text into a keyword list.
"""

import asyncio
import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable, Iterable, List, Optional, TypeVar

from loguru import logger

from resume_tailor.utils.exceptions import (
    LLMRequestError,
    LLMTimeoutError,
    MissingAPIKeyError,
)
from resume_tailor.utils.settings import OPENAI_BASE_URL, PERPLEXITY_BASE_URL, Settings, load_settings

T = TypeVar("T")


async def _retry_with_fixed_delay(
    operation: Callable[[], Awaitable[T]],
    retries: int,
    delay_s: float,
    error_message: str,
) -> T:
    """
    Await operation, retrying on LLMTimeoutError with a fixed delay.

    Args:
        operation: Zero-argument coroutine factory performing one attempt
        retries: Additional attempts after the first one
        delay_s: Seconds to sleep between attempts
        error_message: Message prefix for retry logging (e.g., "Request timed out")

    Raises:
        LLMTimeoutError: Every attempt timed out
        LLMError: Any non-timeout failure (not retried)
    """
    attempts = max(retries, 0) + 1
    for attempt in range(attempts):
        try:
            return await operation()
        except LLMTimeoutError as exc:
            if attempt == attempts - 1:
                raise LLMTimeoutError(
                    f"{error_message} after {attempts} attempt(s)", attempts=attempts
                ) from exc
            logger.warning(
                f"{error_message}, retrying in {delay_s:.1f}s... "
                f"(attempt {attempt + 1}/{attempts})"
            )
            await asyncio.sleep(delay_s)


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


@dataclass
class CompletionRequest:
    """One chat-completion request, fully resolved against Settings."""

    system_prompt: str
    user_prompt: str
    model: str
    max_tokens: int
    temperature: float
    timeout_s: float
    retries: int

    def to_payload(self) -> dict:
        """Request body sent to the chat-completions endpoint."""
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.user_prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "perplexity", "openai")
    - Set self._retry_message for logging during retries
    - Implement _call_api() for a single attempt, raising LLMTimeoutError for
      timeouts and LLMRequestError for everything else
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _retry_message: str = "Request timed out"

    name: str
    model: str
    api_key: Optional[str]
    settings: Settings

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    def build_request(
        self,
        system_prompt: str,
        user_prompt: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout_s: Optional[float] = None,
        retries: Optional[int] = None,
    ) -> CompletionRequest:
        """Fill unspecified request options from settings."""
        return CompletionRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=model or self.model,
            max_tokens=max_tokens if max_tokens is not None else self.settings.max_tokens,
            temperature=temperature if temperature is not None else self.settings.temperature,
            timeout_s=timeout_s if timeout_s is not None else self.settings.timeout_s,
            retries=retries if retries is not None else self.settings.retries,
        )

    @abstractmethod
    async def _call_api(self, request: CompletionRequest) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    async def generate(self, system_prompt: str, user_prompt: str, **options: Any) -> LLMResponse:
        """
        Generate a response, retrying timed-out attempts with a fixed delay.

        Args:
            system_prompt: System message content
            user_prompt: User message content
            **options: Per-call overrides (model, max_tokens, temperature,
                timeout_s, retries); anything omitted comes from settings

        Raises:
            MissingAPIKeyError: No credential configured (never retried)
            LLMTimeoutError: All attempts timed out
            LLMRequestError: Any other upstream failure
        """
        if not self.api_key:
            raise MissingAPIKeyError(f"No API key configured for {self.name}")

        request = self.build_request(system_prompt, user_prompt, **options)
        return await _retry_with_fixed_delay(
            partial(self._call_api, request),
            request.retries,
            self.settings.retry_delay_s,
            self._retry_message,
        )


class ChatCompletionsProvider(LLMProvider):
    """
    Provider for OpenAI-compatible chat-completion endpoints.

    Uses the openai SDK's async client with SDK-level retries disabled so the
    fixed-delay policy in generate() is the only retry loop.
    """

    _provider_prefix = "chat"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        settings: Optional[Settings] = None,
        client: Any = None,
    ):
        # Lazy import - openai SDK is heavy, only load if a provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        self._sdk = openai
        self.settings = settings or load_settings()
        self.api_key = api_key
        self.base_url = base_url
        self._client = client
        self.update_model(model)

    def _get_client(self):
        if self._client is None:
            self._client = self._sdk.AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.settings.timeout_s,
                max_retries=0,
            )
        return self._client

    async def _call_api(self, request: CompletionRequest) -> LLMResponse:
        try:
            response = await self._get_client().chat.completions.create(
                **request.to_payload(),
                timeout=request.timeout_s,
            )
        except self._sdk.APITimeoutError as exc:
            raise LLMTimeoutError(f"{self.name} timed out after {request.timeout_s:.0f}s") from exc
        except self._sdk.APIStatusError as exc:
            raise LLMRequestError(
                f"{self.name} request failed",
                status_code=exc.status_code,
                response_body=_response_text(exc),
            ) from exc
        except self._sdk.APIError as exc:
            raise LLMRequestError(f"{self.name} request failed: {exc}") from exc

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else ""
        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=content or "",
            model=getattr(response, "model", None) or request.model,
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )


class PerplexityProvider(ChatCompletionsProvider):
    """Perplexity chat-completions provider (bearer token from PPLX_API_KEY)."""

    _provider_prefix = "perplexity"

    def __init__(self, model: str = None, settings: Optional[Settings] = None, client: Any = None):
        settings = settings or load_settings()
        super().__init__(
            api_key=settings.api_key,
            base_url=settings.base_url or PERPLEXITY_BASE_URL,
            model=model or settings.model,
            settings=settings,
            client=client,
        )


class OpenAIProvider(ChatCompletionsProvider):
    """OpenAI chat-completions provider (bearer token from OPENAI_API_KEY)."""

    _provider_prefix = "openai"

    def __init__(self, model: str = None, settings: Optional[Settings] = None, client: Any = None):
        settings = settings or load_settings()
        super().__init__(
            api_key=settings.api_key,
            base_url=settings.base_url or OPENAI_BASE_URL,
            model=model or settings.model,
            settings=settings,
            client=client,
        )


def _response_text(exc: Exception) -> Optional[str]:
    """Best-effort raw body of an SDK status error."""
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            return response.text
        except Exception:  # noqa: BLE001 - body may be a consumed stream
            pass
    body = getattr(exc, "body", None)
    return json.dumps(body) if body is not None else None


# --- Provider Factory ---


def get_provider(
    provider_name: str = None, model: str = None, settings: Optional[Settings] = None
) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "perplexity" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: from settings)
        settings: Settings to use (default: load_settings())

    Returns:
        LLMProvider instance
    """
    settings = settings or load_settings()
    provider_name = (provider_name or settings.provider).lower()

    if provider_name == "perplexity":
        return PerplexityProvider(model=model, settings=settings)
    elif provider_name == "openai":
        return OpenAIProvider(model=model, settings=settings)
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'perplexity' or 'openai'")


# --- Response Parsing Utilities ---

CODE_FENCE_PATTERN = re.compile(r"```(?:json|html|markdown|md)?", re.IGNORECASE)
BRACKETED_ARRAY_PATTERN = re.compile(r"\[[\s\S]*?\]")
QUOTED_PHRASE_PATTERN = re.compile(r"\"([^\"]*)\"|'([^']*)'")
COMMA_SPLIT_STRIP_PATTERN = re.compile(r"[\[\]\"'`]")

# Words dropped by the last-resort whitespace tokenizer
FALLBACK_STOPWORDS = {"the", "and", "that", "with", "for", "from"}
FALLBACK_TOKEN_LIMIT = 10


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence delimiters (```json, ```html, ```markdown, ```)."""
    return CODE_FENCE_PATTERN.sub("", text or "")


def coerce_terms(items: Iterable[Any]) -> List[str]:
    """Keep strings and numbers, stringified and trimmed, dropping empties."""
    terms = []
    for item in items:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        term = str(item).strip()
        if term:
            terms.append(term)
    return terms


def _load_json_list(text: str) -> Optional[List[str]]:
    try:
        result = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(result, list):
        return None
    return coerce_terms(result) or None


def _parse_direct(text: str) -> Optional[List[str]]:
    return _load_json_list(strip_code_fences(text).strip())


def _parse_bracketed(text: str) -> Optional[List[str]]:
    match = BRACKETED_ARRAY_PATTERN.search(text)
    if not match:
        return None
    return _load_json_list(match.group(0))


def _parse_comma_separated(text: str) -> Optional[List[str]]:
    if "," not in text:
        return None
    candidates = COMMA_SPLIT_STRIP_PATTERN.sub("", text).split(",")
    return coerce_terms(candidates) or None


def _parse_quoted(text: str) -> Optional[List[str]]:
    phrases = [double or single for double, single in QUOTED_PHRASE_PATTERN.findall(text)]
    return coerce_terms(phrases) or None


def _parse_tokens(text: str) -> Optional[List[str]]:
    tokens = [
        word
        for word in text.split()
        if len(word) > 3 and word.lower() not in FALLBACK_STOPWORDS
    ]
    return tokens[:FALLBACK_TOKEN_LIMIT] or None


KEYWORD_PARSE_STRATEGIES = (
    ("direct JSON parse", _parse_direct),
    ("bracketed array", _parse_bracketed),
    ("comma splitting", _parse_comma_separated),
    ("quoted phrases", _parse_quoted),
    ("whitespace tokens", _parse_tokens),
)


def parse_keyword_response(text: str) -> List[str]:
    """
    Parse a keyword list from LLM response text with a cascade of strategies.

    Strategies, first non-empty result wins:
    1. Code fences stripped, whole text parsed as a JSON array
    2. First [...] substring parsed as a JSON array
    3. Comma splitting (brackets and quotes removed)
    4. Quoted substrings
    5. Whitespace tokens longer than 3 characters minus stopwords, capped at 10

    Args:
        text: LLM response text (may be None or empty)

    Returns:
        List of non-empty strings; empty list if every strategy failed.
        Never raises.

    Example:
        >>> parse_keyword_response('Sure! Here\\'s the list: ["Python"]')
        ['Python']
    """
    text = text or ""
    if not text.strip():
        return []

    for strategy_name, strategy in KEYWORD_PARSE_STRATEGIES:
        keywords = strategy(text)
        if keywords:
            logger.debug(f"Parsed {len(keywords)} keywords using {strategy_name}")
            return keywords

    return []
