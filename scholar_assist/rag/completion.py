"""Client for the external chat-completion provider."""

import asyncio
import logging

import httpx

from ..core.config import Settings
from ..core.errors import MalformedUpstreamResponseError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Send message lists to an OpenAI-style `/chat/completions` endpoint.

    Each call makes exactly one attempt bounded by the configured timeout.
    Every failure mode is raised as UpstreamUnavailableError (or its
    MalformedUpstreamResponseError subclass) so callers can degrade.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_url = settings.COMPLETION_API_URL
        self.api_key = settings.COMPLETION_API_KEY
        self.model = settings.COMPLETION_MODEL
        self.temperature = settings.COMPLETION_TEMPERATURE
        self.max_tokens = settings.COMPLETION_MAX_TOKENS
        self.timeout = settings.COMPLETION_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def complete(self, messages: list[dict], max_tokens: int | None = None) -> str:
        """
        Request a completion for a list of `{role, content}` messages.

        Args:
            messages: Messages in provider order, system instruction first
            max_tokens: Overrides the configured token budget

        Returns:
            The assistant message content

        Raises:
            UpstreamUnavailableError: If the provider is unconfigured, unreachable,
                times out or answers with a non-success status
            MalformedUpstreamResponseError: If the body lacks `choices[0].message.content`
        """
        if not self.configured:
            raise UpstreamUnavailableError("Completion provider API key is not configured.")

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": max_tokens or self.max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        # The client timeout applies per phase; asyncio.timeout caps the whole call.
        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    response = await client.post(self.api_url, json=payload, headers=headers)
        except TimeoutError as e:
            raise UpstreamUnavailableError(f"Completion provider did not answer within {self.timeout}s.") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamUnavailableError(f"Completion provider request failed: {type(e).__name__}: {e}") from e

        if not response.is_success:
            logger.error(f"Completion provider error {response.status_code}: {response.text[:500]}")
            raise UpstreamUnavailableError(f"Completion provider returned status {response.status_code}.")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise MalformedUpstreamResponseError(f"Unexpected completion response: {e!r}") from e

        if not isinstance(content, str) or not content.strip():
            raise MalformedUpstreamResponseError("Completion response contained no text.")

        return content
