"""Shared fixtures: a scripted in-process provider and test settings."""

import asyncio
from typing import List, Optional, Sequence, Union

import pytest

from resume_tailor.utils.llm import CompletionRequest, LLMProvider, LLMResponse
from resume_tailor.utils.settings import Settings

ScriptedReply = Union[str, BaseException]


class FakeProvider(LLMProvider):
    """
    Provider that replays scripted replies instead of calling an API.

    Each attempt consumes the next reply; an exception instance is raised, a
    string is returned as the response content. The last reply repeats once the
    script runs out. Every attempt is recorded in self.requests.
    """

    _provider_prefix = "fake"

    def __init__(
        self,
        replies: Sequence[ScriptedReply] = ("[]",),
        settings: Optional[Settings] = None,
        api_key: Optional[str] = "test-key",
        delay_s: float = 0.0,
    ):
        self.settings = settings or Settings(api_key=api_key, retry_delay_s=0.0)
        self.api_key = api_key
        self.replies = list(replies)
        self.delay_s = delay_s
        self.requests: List[CompletionRequest] = []
        self.update_model("fake-model")

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def _call_api(self, request: CompletionRequest) -> LLMResponse:
        self.requests.append(request)
        await asyncio.sleep(self.delay_s)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return LLMResponse(content=reply, model=request.model, input_tokens=0, output_tokens=0)


@pytest.fixture
def settings():
    """Settings with a credential and no retry delay."""
    return Settings(api_key="test-key", retry_delay_s=0.0)


@pytest.fixture
def make_provider(settings):
    """Factory for FakeProvider instances sharing the test settings."""

    def _make(replies=("[]",), api_key="test-key", delay_s=0.0):
        return FakeProvider(replies, settings=settings, api_key=api_key, delay_s=delay_s)

    return _make
