# tripscout/api/__init__.py
"""Travel plan generation core."""
from tripscout.api.errors import (
    DecodeError,
    EmptyResponseError,
    ExtensionError,
    GenerationError,
    Result,
    StreamProtocolError,
    TransportError,
    ValidationError,
)
from tripscout.api.planner import (
    generate_more_activities,
    generate_more_attractions,
    generate_more_hidden_gems,
    generate_travel_plan,
)
from tripscout.api.streaming import decode_stream, stream_travel_plan

__all__ = [
    "generate_travel_plan",
    "generate_more_attractions",
    "generate_more_hidden_gems",
    "generate_more_activities",
    "decode_stream",
    "stream_travel_plan",
    "Result",
    "GenerationError",
    "ExtensionError",
    "TransportError",
    "EmptyResponseError",
    "DecodeError",
    "ValidationError",
    "StreamProtocolError",
]
