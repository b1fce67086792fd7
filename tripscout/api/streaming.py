"""Incremental decoding of a streamed chat completion.

The model streams its JSON answer token by token inside server-sent events::

    data: {"choices": [{"delta": {"content": "{\\"a\\":"}}]}
    data: [DONE]

``StreamDecoder`` glues the content deltas back together and emits an object
each time the buffer holds a complete one. Completeness is guessed by
counting ``{`` and ``}``; braces inside JSON string values throw the count
off, so such content can stall until the ``[DONE]`` line.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import Any, Callable, Dict, Iterable

from tripscout.api.errors import (
    DecodeError,
    GenerationError,
    Result,
    StreamProtocolError,
    TripScoutError,
)
from tripscout.api.models import PlanRequest
from tripscout.api.prompts import build_plan_prompts

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

ChunkCallback = Callable[[Dict[str, Any]], None]


class StreamDecoder:
    """Stateful SSE-to-JSON decoder; one instance per stream."""

    def __init__(self, on_chunk: ChunkCallback):
        self.on_chunk = on_chunk
        self.json_buffer = ""
        self.emitted = 0
        self.done = False
        self._line_buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")()

    def feed(self, chunk: bytes) -> None:
        """Process one chunk of raw stream bytes.

        Raises:
            StreamProtocolError: an event payload is not valid JSON
            DecodeError: the residual buffer at ``[DONE]`` is not valid JSON
        """
        if self.done:
            return
        self._line_buffer += self._decoder.decode(chunk)
        lines = self._line_buffer.split("\n")
        # The last piece may be an incomplete line; keep it for the next chunk.
        self._line_buffer = lines.pop()
        for line in lines:
            self._process_line(line)
            if self.done:
                return

    def close(self) -> None:
        """Flush whatever is left once the byte stream has ended."""
        if self.done:
            return
        self._line_buffer += self._decoder.decode(b"", final=True)
        if self._line_buffer:
            line, self._line_buffer = self._line_buffer, ""
            self._process_line(line)

    def _process_line(self, line: str) -> None:
        line = line.rstrip("\r")
        if not line.startswith(DATA_PREFIX):
            return
        data = line[len(DATA_PREFIX):].strip()

        if data == DONE_SENTINEL:
            self._finish()
            return

        try:
            event = json.loads(data)
        except json.JSONDecodeError as exc:
            logger.error("Error parsing SSE chunk: %s", exc)
            raise StreamProtocolError(f"Error parsing SSE chunk: {exc}") from exc

        content = _delta_content(event)
        if not content:
            return
        self.json_buffer += content

        opened = self.json_buffer.count("{")
        if opened > 0 and opened == self.json_buffer.count("}"):
            try:
                parsed = json.loads(self.json_buffer)
            except json.JSONDecodeError:
                logger.debug("Buffer not a complete JSON object yet (%d chars)", len(self.json_buffer))
                return
            if isinstance(parsed, dict):
                self._emit(parsed)
                self.json_buffer = ""

    def _finish(self) -> None:
        self.done = True
        if not self.json_buffer:
            return
        try:
            parsed = json.loads(self.json_buffer)
        except json.JSONDecodeError as exc:
            logger.error("Error parsing final JSON buffer: %s", exc)
            raise DecodeError(f"Error parsing final JSON buffer: {exc}") from exc
        self.json_buffer = ""
        if isinstance(parsed, dict):
            self._emit(parsed)

    def _emit(self, obj: Dict[str, Any]) -> None:
        self.emitted += 1
        self.on_chunk(obj)


def _delta_content(event: Any) -> str:
    """Pull ``choices[0].delta.content`` out of a token chunk, or ''.

    Missing fields yield ''; fields of the wrong type raise StreamProtocolError.
    """
    if not isinstance(event, dict):
        raise StreamProtocolError(f"Unexpected SSE payload: {event!r}")
    choices = event.get("choices")
    if choices is None:
        return ""
    if not isinstance(choices, list):
        raise StreamProtocolError(f"Unexpected choices in SSE payload: {choices!r}")
    if not choices:
        return ""
    if not isinstance(choices[0], dict):
        raise StreamProtocolError(f"Unexpected choice in SSE payload: {choices[0]!r}")
    delta = choices[0].get("delta")
    if delta is None:
        return ""
    if not isinstance(delta, dict):
        raise StreamProtocolError(f"Unexpected delta in SSE payload: {delta!r}")
    content = delta.get("content")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise StreamProtocolError(f"Unexpected delta content: {content!r}")
    return content


def decode_stream(chunks: Iterable[bytes], on_chunk: ChunkCallback) -> Result[int]:
    """Run ``chunks`` through a fresh decoder.

    Returns:
        Result holding the number of objects passed to ``on_chunk``, or a
        GenerationError whose ``kind`` is StreamProtocolError, DecodeError or
        TransportError
    """
    decoder = StreamDecoder(on_chunk)
    try:
        for chunk in chunks:
            decoder.feed(chunk)
            if decoder.done:
                break
        decoder.close()
    except TripScoutError as exc:
        logger.error("Stream reading error: %s", exc)
        return Result.failure(GenerationError(exc))
    return Result.success(decoder.emitted)


def stream_travel_plan(transport, request: PlanRequest, on_chunk: ChunkCallback) -> Result[int]:
    """Request a full plan with ``stream=True`` and decode it as it arrives.

    Emitted objects are raw, unvalidated payloads; pass the final one
    through ``is_travel_plan`` before trusting it.
    """
    system_prompt, user_prompt = build_plan_prompts(
        request.destination, request.date, request.duration, request.interests, request.language
    )
    logger.info("Streaming travel plan for %s, %d days", request.destination, request.duration)
    return decode_stream(
        transport.stream(system_prompt, user_prompt, max_tokens=transport.settings.max_tokens),
        on_chunk,
    )
