"""Tests for the provider adapters using mocked SDK clients.

No real API calls are made.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from offerdesk.config import Settings
from offerdesk.domain.errors import EmptyCompletionError, ProviderNotConfiguredError
from offerdesk.llm.client import AnthropicProvider, OpenAIProvider, build_providers
from offerdesk.llm.models import (
    BrandPayload,
    ContentPayload,
    DMExtractionPayload,
    OfferExtractionPayload,
)
from offerdesk.llm.normalize import decode_json_object, normalize_offer
from offerdesk.llm.prompts import JSON_ONLY_INSTRUCTION


def anthropic_response(text: str) -> SimpleNamespace:
    return SimpleNamespace(content=[SimpleNamespace(text=text)])


def openai_response(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestAnthropicProvider:
    def test_complete_returns_first_text_block(self) -> None:
        client = MagicMock()
        client.messages.create.return_value = anthropic_response('{"ok": true}')
        provider = AnthropicProvider("claude-test", client=client)

        result = provider.complete("system", "user", temperature=0.1, json_mode=True)

        assert result == '{"ok": true}'
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["temperature"] == 0.1
        assert kwargs["system"] == "system" + JSON_ONLY_INSTRUCTION
        assert kwargs["messages"] == [{"role": "user", "content": "user"}]

    def test_plain_mode_leaves_system_prompt(self) -> None:
        client = MagicMock()
        client.messages.create.return_value = anthropic_response("hello")
        provider = AnthropicProvider("claude-test", client=client)

        provider.complete("system", "user", temperature=0.0, json_mode=False)

        assert client.messages.create.call_args.kwargs["system"] == "system"

    def test_empty_text_raises(self) -> None:
        client = MagicMock()
        client.messages.create.return_value = anthropic_response("   ")
        provider = AnthropicProvider("claude-test", client=client)

        with pytest.raises(EmptyCompletionError):
            provider.complete("s", "u", temperature=0.1, json_mode=True)

    def test_schema_uses_structured_output(self) -> None:
        client = MagicMock()
        client.messages.parse.return_value = SimpleNamespace(
            parsed_output=OfferExtractionPayload(
                brand=BrandPayload(name="Glow Co"),
                content=ContentPayload(platform="tiktok", quantity=2),
            )
        )
        provider = AnthropicProvider("claude-test", client=client)

        result = provider.complete(
            "system", "user", temperature=0.1, json_mode=True, schema=OfferExtractionPayload
        )

        client.messages.create.assert_not_called()
        kwargs = client.messages.parse.call_args.kwargs
        assert kwargs["output_format"] is OfferExtractionPayload
        assert kwargs["system"] == "system"
        assert kwargs["temperature"] == 0.1
        assert decode_json_object(result) == {
            "brand": {"name": "Glow Co"},
            "content": {"platform": "tiktok", "quantity": 2},
        }

    def test_structured_output_feeds_normalization(self) -> None:
        client = MagicMock()
        client.messages.parse.return_value = SimpleNamespace(
            parsed_output=OfferExtractionPayload(
                content=ContentPayload(platform="Snapchat", format="video", quantity=0)
            )
        )
        provider = AnthropicProvider("claude-test", client=client)

        raw = provider.complete(
            "s", "u", temperature=0.1, json_mode=True, schema=OfferExtractionPayload
        )
        offer = normalize_offer(decode_json_object(raw))

        assert offer.content.platform == "instagram"
        assert offer.content.format == "video"
        assert offer.content.quantity == 1
        assert offer.brand.name == ""

    def test_missing_structured_output_raises(self) -> None:
        client = MagicMock()
        client.messages.parse.return_value = SimpleNamespace(parsed_output=None)
        provider = AnthropicProvider("claude-test", client=client)

        with pytest.raises(EmptyCompletionError):
            provider.complete(
                "s", "u", temperature=0.1, json_mode=True, schema=DMExtractionPayload
            )

    def test_missing_key_raises_on_first_call(self) -> None:
        provider = AnthropicProvider("claude-test", api_key=None)

        with pytest.raises(ProviderNotConfiguredError):
            provider.complete("s", "u", temperature=0.1, json_mode=True)


class TestOpenAIProvider:
    def test_complete_uses_json_response_format(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = openai_response('{"ok": 1}')
        provider = OpenAIProvider("gpt-test", client=client)

        result = provider.complete("system", "user", temperature=0.1, json_mode=True)

        assert result == '{"ok": 1}'
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_plain_mode_omits_response_format(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = openai_response("hi")
        provider = OpenAIProvider("gpt-test", client=client)

        provider.complete("system", "user", temperature=0.1, json_mode=False)

        assert "response_format" not in client.chat.completions.create.call_args.kwargs

    def test_schema_falls_back_to_json_object_mode(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = openai_response('```json\n{"ok": 1}\n```')
        provider = OpenAIProvider("gpt-test", client=client)

        result = provider.complete(
            "system", "user", temperature=0.1, json_mode=True, schema=DMExtractionPayload
        )

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert decode_json_object(result) == {"ok": 1}

    def test_none_content_raises(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = openai_response(None)
        provider = OpenAIProvider("gpt-test", client=client)

        with pytest.raises(EmptyCompletionError):
            provider.complete("s", "u", temperature=0.1, json_mode=True)

    def test_missing_key_raises_on_first_call(self) -> None:
        provider = OpenAIProvider("gpt-test")

        with pytest.raises(ProviderNotConfiguredError):
            provider.complete("s", "u", temperature=0.1, json_mode=True)


class TestBuildProviders:
    def test_primary_is_anthropic_secondary_is_openai(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            anthropic_model="claude-x",
            openai_model="gpt-x",
        )

        primary, secondary = build_providers(settings)

        assert primary.name == "anthropic"
        assert primary.model == "claude-x"
        assert secondary.name == "openai"
        assert secondary.model == "gpt-x"
