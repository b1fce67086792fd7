"""Error taxonomy and the result type returned by the planner operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class TripScoutError(Exception):
    """Base class for every error raised or returned by tripscout."""


class TransportError(TripScoutError):
    """The model or maps endpoint could not be reached or answered with an HTTP error."""


class EmptyResponseError(TripScoutError):
    """The model answered without any content."""


class DecodeError(TripScoutError):
    """The model content is not valid JSON."""


class ValidationError(TripScoutError):
    """Decoded JSON does not have the expected shape."""


class StreamProtocolError(TripScoutError):
    """A server-sent event carried a payload that is not decodable."""


class PhotoLookupError(TripScoutError):
    """The places provider found nothing or refused the request."""


class OperationError(TripScoutError):
    """A planner operation failed; ``kind`` holds the underlying taxonomy error."""

    prefix = "Operation failed"

    def __init__(self, kind: TripScoutError):
        super().__init__(f"{self.prefix}: {kind}")
        self.kind = kind


class GenerationError(OperationError):
    prefix = "Failed to generate travel plan"


class ExtensionError(OperationError):
    prefix = "Failed to generate more suggestions"

    def __init__(self, kind: TripScoutError, category: str = ""):
        if category:
            self.prefix = f"Failed to generate more {category}"
        super().__init__(kind)
        self.category = category


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: either ``value`` or ``error`` is set.

    Failures are returned rather than raised so that every call site has to
    look at ``ok``. ``unwrap()`` is there for callers that want an exception.
    """

    value: Optional[T] = None
    error: Optional[OperationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[TripScoutError]:
        """The taxonomy error behind a failure, or None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: OperationError) -> "Result[T]":
        return cls(error=error)
