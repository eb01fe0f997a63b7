"""Tests for AnthropicGenerationClient with a stand-in SDK client."""

from types import SimpleNamespace

import anthropic
import httpx
import pytest

from core.domain.exceptions import GenerationError
from core.infrastructure.adapters.llm import AnthropicGenerationClient
from core.settings.modules.anthropic_settings import AnthropicSettings


class FakeMessages:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeAnthropic:
    def __init__(self, messages: FakeMessages):
        self.messages = messages
        self.closed = False

    async def close(self):
        self.closed = True


def text_reply(*texts, stop_reason="end_turn"):
    blocks = [SimpleNamespace(type="text", text=text) for text in texts]
    return SimpleNamespace(content=blocks, stop_reason=stop_reason)


@pytest.fixture
def settings(monkeypatch) -> AnthropicSettings:
    monkeypatch.delenv("ANTHROPIC_MODEL", raising=False)
    monkeypatch.delenv("ANTHROPIC_MAX_TOKENS", raising=False)
    return AnthropicSettings(ANTHROPIC_MODEL="claude-test", ANTHROPIC_MAX_TOKENS=2048)


@pytest.mark.asyncio
async def test_generate_sends_single_user_message(settings):
    messages = FakeMessages(reply=text_reply('resource "a" "b" {}'))
    client = AnthropicGenerationClient(settings, client=FakeAnthropic(messages))

    code = await client.generate("make a droplet")

    assert code == 'resource "a" "b" {}'
    request = messages.requests[0]
    assert request["model"] == "claude-test"
    assert request["max_tokens"] == 2048
    assert request["messages"] == [{"role": "user", "content": "make a droplet"}]


@pytest.mark.asyncio
async def test_text_blocks_are_joined_and_others_skipped(settings):
    reply = text_reply("part one\n", "part two")
    reply.content.insert(1, SimpleNamespace(type="tool_use", input={}))
    client = AnthropicGenerationClient(settings, client=FakeAnthropic(FakeMessages(reply=reply)))

    assert await client.generate("x") == "part one\npart two"


@pytest.mark.asyncio
async def test_truncated_reply_is_still_returned(settings):
    reply = text_reply('resource "a" "b" {', stop_reason="max_tokens")
    client = AnthropicGenerationClient(settings, client=FakeAnthropic(FakeMessages(reply=reply)))

    assert await client.generate("x") == 'resource "a" "b" {'


@pytest.mark.asyncio
async def test_api_error_becomes_generation_error(settings):
    error = anthropic.APIConnectionError(
        request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    )
    client = AnthropicGenerationClient(settings, client=FakeAnthropic(FakeMessages(error=error)))

    with pytest.raises(GenerationError) as exc_info:
        await client.generate("x")

    assert exc_info.value.model == "claude-test"
    assert exc_info.value.__cause__ is error


def test_missing_api_key_is_rejected(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    with pytest.raises(RuntimeError, match="ANTHROPIC_API_KEY"):
        AnthropicGenerationClient(AnthropicSettings())


@pytest.mark.asyncio
async def test_close_closes_sdk_client(settings):
    sdk = FakeAnthropic(FakeMessages())
    client = AnthropicGenerationClient(settings, client=sdk)

    await client.close()

    assert sdk.closed is True
