"""
Keyword extraction orchestrator.

KeywordExtractor is the facade the UI calls. For each job description it:
- short-circuits empty input without touching the API
- serves fresh cache entries (TTL measured from creation)
- collapses concurrent identical requests onto one shared future
- parses and enriches the model response
- falls back to local extraction on any failure

All mutable state (cache, in-flight requests, API validation) lives in an
ExtractionContext owned by whoever builds the extractor, so tests can create
a fresh context or call reset().
"""

import asyncio
import re
import time
from dataclasses import dataclass, replace
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence

from resume_tailor.contexts.extraction.enrichment import enrich_keywords
from resume_tailor.contexts.extraction.known_terms import (
    DEFAULT_KNOWN_TERMS,
    KnownTerm,
    load_known_terms,
    validate_terms,
)
from resume_tailor.contexts.extraction.local_extractor import extract_keywords_locally
from resume_tailor.contexts.extraction.logger import (
    log_api_keywords,
    log_cache_hit,
    log_fallback,
    log_joined_inflight,
    log_request_start,
    log_validation,
)
from resume_tailor.contexts.extraction.prompts import (
    KEYWORD_MAX_TOKENS,
    KEYWORD_TEMPERATURE,
    SYSTEM_PROMPT,
    VALIDATION_QUERY,
    build_keyword_prompt,
)
from resume_tailor.utils.exceptions import MissingAPIKeyError
from resume_tailor.utils.llm import LLMProvider, parse_keyword_response
from resume_tailor.utils.settings import Settings, load_settings
from resume_tailor.utils.text_processing import collapse_whitespace

FINGERPRINT_PREFIX_CHARS = 50
MIN_CLEANED_LENGTH = 20
PROBE_MAX_LENGTH = 50
PROBE_TERMS = ("software engineer", "react", "javascript")

# Anything outside this set is removed before the text is sent upstream
DISALLOWED_CHARS_PATTERN = re.compile(r"[^\w\s,.;:'\"!?()\-+#/&]")

# ExtractionResult.source values
SOURCE_API = "api"
SOURCE_CACHE = "cache"
SOURCE_LOCAL = "local"
SOURCE_EMPTY = "empty"


def fingerprint(text: str) -> str:
    """
    Cache/dedup key: first 50 trimmed characters (whitespace collapsed) plus total length.

    Not collision-free; two long descriptions sharing a prefix and a length
    share a key.

    Example:
        >>> fingerprint("  Senior   Python Engineer ")
        'Senior Python Engineer_27'
    """
    prefix = collapse_whitespace(text.strip()[:FINGERPRINT_PREFIX_CHARS])
    return f"{prefix}_{len(text)}"


def clean_job_description(text: str) -> str:
    """Remove characters that tend to confuse the endpoint, keeping C++/C#/CI/CD intact."""
    return DISALLOWED_CHARS_PATTERN.sub("", text).strip()


def is_validation_probe(text: str) -> bool:
    """Short, generic queries (as sent when checking the API key) count as validation probes."""
    cleaned = text.strip().lower()
    return len(cleaned) < PROBE_MAX_LENGTH and any(term in cleaned for term in PROBE_TERMS)


@dataclass
class CacheEntry:
    """Keywords from one successful API extraction."""

    keywords: List[str]
    created_at: float


@dataclass
class ExtractionResult:
    """
    Keywords handed to the UI.

    Attributes:
        keywords: Ordered, case-insensitively unique, non-empty strings
        source: "api", "cache", "local" (fallback heuristic) or "empty"
        warning: Inline message to show when the result is a fallback
    """

    keywords: List[str]
    source: str
    warning: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.source == SOURCE_LOCAL


class ExtractionContext:
    """
    Process-lifetime state shared by extractors.

    Attributes:
        cache: fingerprint -> CacheEntry
        inflight: fingerprint -> future of the request currently serving it
        api_validated: Whether a validation probe has succeeded
        validation_key: Fingerprint of the probe that validated the API
        validation_keywords: Keywords returned by that probe
        clock: Monotonic time source in seconds (injectable for tests)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.reset()

    def reset(self) -> None:
        """Forget cached keywords, in-flight requests and API validation."""
        self.cache: Dict[str, CacheEntry] = {}
        self.inflight: Dict[str, asyncio.Future] = {}
        self.api_validated = False
        self.validation_key: Optional[str] = None
        self.validation_keywords: Optional[List[str]] = None

    def lookup(self, key: str, ttl_s: float) -> Optional[List[str]]:
        """Return cached keywords if the entry is younger than ttl_s; stale entries are dropped."""
        entry = self.cache.get(key)
        if entry is None:
            return None
        if self.clock() - entry.created_at >= ttl_s:
            del self.cache[key]
            return None
        return list(entry.keywords)

    def store(self, key: str, keywords: List[str]) -> None:
        self.cache[key] = CacheEntry(keywords=list(keywords), created_at=self.clock())

    def mark_validated(self, key: str, keywords: List[str]) -> None:
        self.api_validated = True
        self.validation_key = key
        self.validation_keywords = list(keywords)

    def release(self, key: str, future: asyncio.Future) -> None:
        """Done-callback: clear the in-flight marker once its request finishes."""
        if self.inflight.get(key) is future:
            del self.inflight[key]


class KeywordExtractor:
    """
    Facade for keyword extraction.

    Args:
        provider: Transport used for chat completions
        context: Shared state (default: a new ExtractionContext)
        settings: Settings (default: the provider's settings)
        known_terms: Enrichment dictionary (default: KNOWN_TERMS_FILE if set,
            otherwise the built-in table)

    Raises:
        ValueError: If a known-term pattern is not a valid regex

    Example:
        extractor = KeywordExtractor(get_provider())
        result = await extractor.extract(job_description)
        if result.warning:
            show_inline_warning(result.warning)
    """

    def __init__(
        self,
        provider: LLMProvider,
        context: Optional[ExtractionContext] = None,
        settings: Optional[Settings] = None,
        known_terms: Optional[Sequence[KnownTerm]] = None,
    ):
        self.provider = provider
        self.context = context if context is not None else ExtractionContext()
        self.settings = settings or getattr(provider, "settings", None) or load_settings()

        if known_terms is None and self.settings.known_terms_file is not None:
            known_terms = load_known_terms(self.settings.known_terms_file)
        # Bad patterns fail here, as a configuration error, never inside extract()
        self.known_terms = (
            validate_terms(known_terms) if known_terms is not None else DEFAULT_KNOWN_TERMS
        )

    async def extract(self, job_description: str) -> ExtractionResult:
        """
        Extract keywords from a job description.

        Never raises for upstream failures: the result is either the API's
        (enriched) keywords, a cache entry, or the local heuristic's output.

        Args:
            job_description: Raw job description text

        Returns:
            ExtractionResult
        """
        text = job_description or ""
        if not text.strip():
            return ExtractionResult(keywords=[], source=SOURCE_EMPTY)

        ctx = self.context
        key = fingerprint(text)

        if ctx.api_validated and key == ctx.validation_key and is_validation_probe(text):
            return ExtractionResult(keywords=list(ctx.validation_keywords), source=SOURCE_CACHE)

        cached = ctx.lookup(key, self.settings.cache_ttl_s)
        if cached is not None:
            log_cache_hit(key)
            return ExtractionResult(keywords=cached, source=SOURCE_CACHE)

        pending = ctx.inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._request_keywords(text, key))
            ctx.inflight[key] = pending
            pending.add_done_callback(partial(ctx.release, key))
        else:
            log_joined_inflight(key)

        # A caller that stops waiting must not cancel the request other callers share
        result = await asyncio.shield(pending)
        return replace(result, keywords=list(result.keywords))

    async def extract_keywords(self, job_description: str) -> List[str]:
        """Convenience wrapper returning only the keyword list."""
        result = await self.extract(job_description)
        return result.keywords

    async def validate_api(self) -> bool:
        """
        Check once per context that the credential and endpoint work.

        Sends a short generic query; success is memoized in the context.
        """
        if self.context.api_validated:
            return True
        await self.extract(VALIDATION_QUERY)
        log_validation(self.context.api_validated)
        return self.context.api_validated

    async def _request_keywords(self, text: str, key: str) -> ExtractionResult:
        cleaned = clean_job_description(text)
        if len(cleaned) < MIN_CLEANED_LENGTH:
            return ExtractionResult(keywords=[], source=SOURCE_EMPTY)

        log_request_start(key, len(cleaned))
        try:
            response = await asyncio.wait_for(
                self.provider.generate(
                    SYSTEM_PROMPT,
                    build_keyword_prompt(cleaned),
                    max_tokens=KEYWORD_MAX_TOKENS,
                    temperature=KEYWORD_TEMPERATURE,
                ),
                timeout=self.settings.request_deadline_s,
            )
        except MissingAPIKeyError:
            return self._fallback(text, "API key not found")
        except asyncio.TimeoutError:
            return self._fallback(text, "Keyword request exceeded its deadline")
        except Exception as exc:  # noqa: BLE001 - local extraction is the contract
            return self._fallback(text, f"Keyword request failed ({type(exc).__name__}: {exc})")

        raw = response.content or ""
        if not raw.strip():
            return self._fallback(text, "Empty response from API")

        parsed = parse_keyword_response(raw)
        keywords = enrich_keywords(parsed, raw, text, self.known_terms)
        if not keywords:
            return self._fallback(text, "No keywords returned from API")

        log_api_keywords(parsed, [keyword for keyword in keywords if keyword not in parsed])
        self.context.store(key, keywords)
        if is_validation_probe(text):
            self.context.mark_validated(key, keywords)
        return ExtractionResult(keywords=keywords, source=SOURCE_API)

    def _fallback(self, text: str, reason: str) -> ExtractionResult:
        keywords = extract_keywords_locally(text, self.settings.local_keyword_limit)
        log_fallback(reason, len(keywords))
        return ExtractionResult(
            keywords=keywords,
            source=SOURCE_LOCAL,
            warning=f"{reason}. Using local extraction as fallback.",
        )
