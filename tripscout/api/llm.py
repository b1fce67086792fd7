"""OpenAI transport for TripScout.

``ChatTransport`` is the only object that talks to the chat completion
endpoint. It is built once (see ``create_transport``) and handed to every
planner operation, so tests can swap in any object with the same two
methods.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

import httpx
from openai import OpenAI, OpenAIError

from tripscout.api.config import ModelSettings, get_model_settings, get_openai_api_key
from tripscout.api.errors import TransportError

logger = logging.getLogger(__name__)


def build_messages(system_prompt: str, user_prompt: str) -> list:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


class ChatTransport:
    """Thin wrapper around ``OpenAI().chat.completions`` in JSON mode."""

    def __init__(self, client: OpenAI, settings: Optional[ModelSettings] = None):
        self.client = client
        self.settings = settings or ModelSettings()

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: Optional[int] = None) -> Optional[str]:
        """Send one blocking completion and return the message content.

        Raises:
            TransportError: the request failed for any network or API reason
        """
        logger.debug(
            "Calling OpenAI ChatCompletion: model=%s max_tokens=%s",
            self.settings.model,
            max_tokens,
        )
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        try:
            response = self.client.chat.completions.create(
                model=self.settings.model,
                messages=build_messages(system_prompt, user_prompt),
                temperature=self.settings.temperature,
                response_format={"type": "json_object"},
                stream=False,
                **kwargs,
            )
        except OpenAIError as exc:
            logger.error("OpenAI request failed: %s", exc)
            raise TransportError(f"OpenAI request failed: {exc}") from exc

        if not response.choices:
            return None
        return response.choices[0].message.content

    def stream(self, system_prompt: str, user_prompt: str, max_tokens: Optional[int] = None) -> Iterator[bytes]:
        """Yield the raw server-sent-event bytes of a streamed completion.

        Raises:
            TransportError: the request or a chunk read failed
        """
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        try:
            with self.client.chat.completions.with_streaming_response.create(
                model=self.settings.model,
                messages=build_messages(system_prompt, user_prompt),
                temperature=self.settings.temperature,
                response_format={"type": "json_object"},
                stream=True,
                **kwargs,
            ) as response:
                yield from response.iter_bytes()
        except (OpenAIError, httpx.HTTPError) as exc:
            logger.error("OpenAI stream failed: %s", exc)
            raise TransportError(f"OpenAI stream failed: {exc}") from exc


def create_transport(api_key: Optional[str] = None, settings: Optional[ModelSettings] = None) -> ChatTransport:
    """Build a transport from explicit values, falling back to the environment."""
    client = OpenAI(api_key=api_key or get_openai_api_key())
    return ChatTransport(client, settings or get_model_settings())
