"""Completion providers for offer extraction.

Both providers expose the same ``complete()`` capability so the parser's
retry/fallback orchestration never sees SDK-specific response shapes.  Each
adapter only translates its SDK's payload into raw JSON text; when a response
schema is given, the primary uses the SDK's structured-output call.

SDK clients are built lazily on first use (once a key is available) and then
reused.  SDK-level retries are disabled: the parser owns the retry budget.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from anthropic import Anthropic
from openai import OpenAI

from offerdesk.domain.errors import EmptyCompletionError, ProviderNotConfiguredError
from offerdesk.llm.prompts import JSON_ONLY_INSTRUCTION

if TYPE_CHECKING:
    from pydantic import BaseModel

    from offerdesk.config import Settings

DEFAULT_MAX_TOKENS = 2048


class CompletionProvider(Protocol):
    """A text-completion backend the parser can call."""

    name: str

    def complete(
        self,
        system_prompt: str,
        user_text: str,
        *,
        temperature: float,
        json_mode: bool,
        schema: type[BaseModel] | None = None,
    ) -> str:
        """Return the provider's raw text answer, or raise on failure."""
        ...


class AnthropicProvider:
    """Adapter for the Anthropic Messages API."""

    name = "anthropic"

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        *,
        client: Any = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self.model = model
        self._api_key = api_key
        self._client = client
        self._max_tokens = max_tokens

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise ProviderNotConfiguredError("ANTHROPIC_API_KEY is not set")
            self._client = Anthropic(api_key=self._api_key, max_retries=0)
        return self._client

    def complete(
        self,
        system_prompt: str,
        user_text: str,
        *,
        temperature: float,
        json_mode: bool,
        schema: type[BaseModel] | None = None,
    ) -> str:
        """Send one Messages API request and return its answer as text.

        With *json_mode* and a *schema*, the request goes through
        ``messages.parse`` and the parsed model is returned re-serialized as
        JSON, omitting unset fields.  With *json_mode* alone, a JSON-only
        instruction is appended to the system prompt and the first text
        block is returned.
        """
        client = self._get_client()
        messages = [{"role": "user", "content": user_text}]

        if json_mode and schema is not None:
            parsed_response = client.messages.parse(
                model=self.model,
                max_tokens=self._max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=messages,
                output_format=schema,
            )
            parsed = parsed_response.parsed_output
            if parsed is None:
                raise EmptyCompletionError("Anthropic returned no structured output")
            return str(parsed.model_dump_json(exclude_none=True))

        system = system_prompt + JSON_ONLY_INSTRUCTION if json_mode else system_prompt
        response = client.messages.create(
            model=self.model,
            max_tokens=self._max_tokens,
            temperature=temperature,
            system=system,
            messages=messages,
        )

        text = ""
        if response.content:
            text = response.content[0].text or ""
        if not text.strip():
            raise EmptyCompletionError("Empty response from Anthropic")
        return str(text)


class OpenAIProvider:
    """Adapter for OpenAI-compatible Chat Completions endpoints.

    ``base_url`` lets the same adapter target any OpenAI-compatible host.
    """

    name = "openai"

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        client: Any = None,
    ) -> None:
        self.model = model
        self._api_key = api_key
        self._base_url = base_url
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise ProviderNotConfiguredError("OPENAI_API_KEY is not set")
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                max_retries=0,
            )
        return self._client

    def complete(
        self,
        system_prompt: str,
        user_text: str,
        *,
        temperature: float,
        json_mode: bool,
        schema: type[BaseModel] | None = None,
    ) -> str:
        """Send one chat completion request and return the message content.

        *schema* is not sent: OpenAI-compatible hosts vary in schema support,
        so this adapter relies on JSON object mode and the fence-tolerant
        decode downstream.
        """
        client = self._get_client()

        kwargs: dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
            temperature=temperature,
            **kwargs,
        )

        content = response.choices[0].message.content if response.choices else None
        if not content or not str(content).strip():
            raise EmptyCompletionError("Empty response from OpenAI")
        return str(content)


def build_providers(settings: Settings) -> tuple[AnthropicProvider, OpenAIProvider]:
    """Create the primary and secondary providers from settings.

    No SDK client is constructed here; a provider without a key fails on its
    first call and the parser treats that like any other provider failure.

    Args:
        settings: The loaded application settings.

    Returns:
        ``(primary, secondary)`` providers.
    """
    primary = AnthropicProvider(
        model=settings.anthropic_model,
        api_key=settings.anthropic_api_key.get_secret_value() or None,
    )
    secondary = OpenAIProvider(
        model=settings.openai_model,
        api_key=settings.openai_api_key.get_secret_value() or None,
        base_url=settings.openai_base_url,
    )
    return primary, secondary
